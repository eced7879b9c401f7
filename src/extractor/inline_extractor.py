"""
Inline Extractor
================
For receipts where an item's name and price share a line:

    Burger $12.99
    2x Coffee $6.00

or where the name sits on the line right above a bare price:

    Chicken Caesar Wrap
    9.50

Lines containing a skip word (totals, tenders, staff roles, plus extra
words for the detected receipt type) are never treated as items.
"""

import re
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger

from extractor.base_extractor import BaseExtractor
from receipt_models import LineItem, ReceiptType


_MAX_PRICE = 2000
_MAX_NAME_LENGTH = 100

# Order matters: on equal values the earliest pattern's match is kept.
_PRICE_PATTERNS = [
    re.compile(r'\$(\d+\.\d{2})'),         # $10.50
    re.compile(r'\$(\d+\.\d{1})'),         # $10.5
    re.compile(r'\$(\d+)'),                # $10
    re.compile(r'(\d+\.\d{2})\s*\$'),      # 10.50$
    re.compile(r'(\d+\.\d{1})\s*\$'),      # 10.5$
    re.compile(r'(\d+)\s*\$'),             # 10$
    re.compile(r'(\d+\.\d{2})'),           # 10.50
    re.compile(r'(\d+\.\d{1})'),           # 10.5
    re.compile(r'(\d+,\d+\.\d{2})'),       # 1,234.56
    re.compile(r'(\d+\.\d{2})\s*USD'),     # 10.50 USD
    re.compile(r'(\d+\.\d{2})\s*CAD'),     # 10.50 CAD
]

_COMMON_SKIP_WORDS = (
    "total", "tax", "subtotal", "amount", "change", "tip", "cash", "card",
    "payment", "thank", "visit", "receipt", "date", "time", "order", "table",
    "server", "waiter", "cashier", "discount", "coupon",
)

_TYPE_SKIP_WORDS: Dict[ReceiptType, Tuple[str, ...]] = {
    ReceiptType.RESTAURANT:  ("kitchen", "chef", "manager", "host", "hostess"),
    ReceiptType.GROCERY:     ("aisle", "department", "section", "produce", "meat", "dairy"),
    ReceiptType.GAS_STATION: ("pump", "fuel", "gas", "octane", "gallons"),
    ReceiptType.GENERAL:     (),
}

_DIGITS_ONLY = re.compile(r'^\d+$')


def skip_words_for(receipt_type: ReceiptType) -> Tuple[str, ...]:
    """Common skip words plus the extras for this receipt type."""
    return _COMMON_SKIP_WORDS + _TYPE_SKIP_WORDS[receipt_type]


def largest_price(line: str) -> Optional[Tuple[float, re.Match]]:
    """
    Largest price in (0, 2000) found by any price pattern, with its match.

    A strict '>' keeps the first pattern's match when two patterns read the
    same value, so "$12.99" is preferred over the bare "12.99" inside it.
    """
    best: Optional[Tuple[float, re.Match]] = None
    for pat in _PRICE_PATTERNS:
        m = pat.search(line)
        if not m:
            continue
        value = float(m.group(1).replace(',', ''))
        if not 0 < value < _MAX_PRICE:
            continue
        if best is None or value > best[0]:
            best = (value, m)
    return best


class InlineExtractor(BaseExtractor):
    """
    Extractor for inline-layout receipts.
    """

    def _items(self, lines: Sequence[str], receipt_type: ReceiptType) -> List[LineItem]:
        skip_words = skip_words_for(receipt_type)
        items: List[LineItem] = []

        for i, line in enumerate(lines):
            if self._is_skip_line(line, skip_words):
                continue

            found = largest_price(line)
            if found is None:
                continue
            price, match = found

            same_line = line[:match.start()].strip()
            if 1 < len(same_line) < _MAX_NAME_LENGTH:
                item = self._build_item(same_line, price)
            elif i > 0 and self._usable_previous_line(lines[i - 1], skip_words):
                item = self._build_item(lines[i - 1], price)
            else:
                item = None

            if item is not None:
                logger.debug(
                    f"[InlineExtractor] {item.name!r} (qty {item.quantity}) "
                    f"← line {i} {price:.2f}"
                )
                items.append(item)

        return items

    @staticmethod
    def _is_skip_line(line: str, skip_words: Tuple[str, ...]) -> bool:
        lower = line.lower()
        return any(word in lower for word in skip_words)

    def _usable_previous_line(self, line: str, skip_words: Tuple[str, ...]) -> bool:
        if self._is_skip_line(line, skip_words):
            return False
        if not 1 < len(line) < _MAX_NAME_LENGTH:
            return False
        if _DIGITS_ONLY.match(line):
            return False
        return '$' not in line
