"""
Base Extractor
==============
Contains the logic shared by every line-item strategy:
  - splitting an item text into (quantity, cleaned name)
  - building LineItem records
  - the public extract() entry point with its summary log line

Subclasses override ONLY _items() to handle their specific layout.
"""

import re
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from receipt_models import LineItem, ReceiptType


# ─── Leading multiplier tokens, tried in order ────────────────────────────────
# At most 4 digits; a longer run is OCR noise and is stripped with the name.

_QUANTITY_PATTERNS = [
    re.compile(r'^(\d{1,4})\s*x\s*', re.IGNORECASE),     # 2x
    re.compile(r'^(\d{1,4})\s*×\s*', re.IGNORECASE),     # 2×
    re.compile(r'^(\d{1,4})\s*\*\s*', re.IGNORECASE),    # 2*
    re.compile(r'^(\d{1,4})\s*@\s*', re.IGNORECASE),     # 2@
    re.compile(r'^(\d{1,4})\s*of\s*', re.IGNORECASE),    # 2 of
    re.compile(r'^(\d{1,4})\s*ea\s*', re.IGNORECASE),    # 2 ea
]

_LEADING_INT     = re.compile(r'^\d+\s*')
_LEADING_DECIMAL = re.compile(r'^\d+\.\d+\s*')
_WHITESPACE      = re.compile(r'\s+')
_NON_NAME_CHARS  = re.compile(r"[^\w\s\-&'()]")


def split_item_text(text: str) -> Tuple[str, int]:
    """
    Split raw item text into (name, quantity).

    "2x Coffee"      → ("Coffee", 2)
    "3 @ Bagel"      → ("Bagel", 3)
    "1 Fruit Cup!"   → ("Fruit Cup", 1)
    """
    quantity = 1
    name = text.strip()

    for pat in _QUANTITY_PATTERNS:
        m = pat.match(name)
        if m:
            # "0x" is OCR noise; an item is always bought at least once
            quantity = max(int(m.group(1)), 1)
            name = name[m.end():].strip()
            break

    name = _LEADING_INT.sub('', name)
    name = _LEADING_DECIMAL.sub('', name)
    name = _WHITESPACE.sub(' ', name)
    name = _NON_NAME_CHARS.sub('', name)
    return name.strip(), quantity


class BaseExtractor:
    """
    Abstract base class.  Subclasses implement _items().

    Call extract(lines, receipt_type) → ordered list of LineItem.
    """

    # ── Public entry point ────────────────────────────────────────────────────

    def extract(self, lines: Sequence[str], receipt_type: ReceiptType) -> List[LineItem]:
        if not lines:
            return []

        items = self._items(lines, receipt_type)
        logger.debug(f"[{self.__class__.__name__}] {len(items)} items found")
        return items

    # ── Must be overridden ────────────────────────────────────────────────────

    def _items(self, lines: Sequence[str], receipt_type: ReceiptType) -> List[LineItem]:
        """Subclasses implement layout-specific item extraction."""
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement _items()"
        )

    # ── Shared helpers ────────────────────────────────────────────────────────

    def _build_item(self, text: str, price: float) -> Optional[LineItem]:
        """Build a LineItem from raw item text, or None if no usable name remains."""
        name, quantity = split_item_text(text)
        if len(name) <= 1:
            return None
        return LineItem(name=name, price=price, quantity=quantity)
