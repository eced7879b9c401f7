"""
Item Validator
==============
Filters spurious extracted "items": header fragments, totals lines that
slipped through an extractor, empty or nonsensical names, impossible
prices.  Items are only ever dropped, never modified, and the order of the
survivors is preserved.
"""

import re
from typing import Iterable, List

from loguru import logger

from receipt_models import LineItem


_MAX_PRICE = 1000
_SUMMARY_WORDS = ("total", "tax", "subtotal", "amount")
_DIGITS_ONLY = re.compile(r'^\d+$')


class ItemValidator:

    def validate(self, items: Iterable[LineItem]) -> List[LineItem]:
        kept: List[LineItem] = []
        for item in items:
            reason = self.rejection_reason(item)
            if reason:
                logger.debug(f"[ItemValidator] dropped {item.name!r} {item.price}: {reason}")
                continue
            kept.append(item)
        return kept

    @staticmethod
    def rejection_reason(item: LineItem) -> str:
        """Why this item would be dropped, or '' if it is kept."""
        if not item.name or len(item.name) < 2:
            return "name too short"
        lower = item.name.lower()
        if any(word in lower for word in _SUMMARY_WORDS):
            return "summary line"
        if item.price <= 0 or item.price > _MAX_PRICE:
            return "price out of range"
        if _DIGITS_ONLY.match(item.name):
            return "numeric name"
        return ""
