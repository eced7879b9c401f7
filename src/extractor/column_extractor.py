"""
Column Extractor
================
For receipts where the price column is read separately from the name column,
so each price sits alone on its own line, often several lines below the item
it belongs to:

    Jolly Cafe
    Latte
    4.25
    Fruit Cup
    3.50

Algorithm
---------
  1. Collect every standalone price line ("4.25" / "$4.25", 0 < p < 1000).
  2. For each price, walk BACKWARD at most 10 lines and take the nearest
     line that looks like a food item: it contains a vocabulary keyword or
     starts with "<number> <letter>" (an inline quantity).

The vocabulary gate trades recall for precision: in this layout the name can
be far from its price, so any header line in the window would otherwise be
picked up.  The vocabulary can be extended through configuration.
"""

import re
from typing import Iterable, List, Optional, Sequence, Tuple

from loguru import logger

from extractor.base_extractor import BaseExtractor
from receipt_models import LineItem, ReceiptType


DEFAULT_COLUMN_KEYWORDS = (
    "latte", "mimosa", "juice", "scramble", "fruit", "biscuit",
    "sausage", "pancake", "egg", "small", "cup", "side",
)

_LOOKBACK_LINES = 10
_MAX_PRICE = 1000

_STANDALONE_PRICE = re.compile(r'^(\$?)(\d+\.\d{2})$')
_FINANCIAL_PREFIX = re.compile(r'^(subtotal|tax|total|tip|suggested|scan|pay)', re.IGNORECASE)
_HEADER_PREFIX    = re.compile(r'^(server|table|invoice|ticket|dining|suggested|scan)', re.IGNORECASE)
_DATE_LIKE        = re.compile(r'^[0-9\-/]+$')
_QTY_LEADING      = re.compile(r'^\d+\s+[a-z]', re.IGNORECASE)


class ColumnExtractor(BaseExtractor):
    """
    Extractor for column-layout receipts.
    """

    def __init__(self, keywords: Optional[Iterable[str]] = None):
        self.keywords = tuple(
            k.lower() for k in (keywords if keywords is not None else DEFAULT_COLUMN_KEYWORDS)
        )

    def _items(self, lines: Sequence[str], receipt_type: ReceiptType) -> List[LineItem]:
        items: List[LineItem] = []

        price_lines = self._standalone_prices(lines)
        logger.debug(f"[ColumnExtractor] {len(price_lines)} standalone prices")

        for idx, price in price_lines:
            item = self._item_for_price(lines, idx, price)
            if item is not None:
                logger.debug(
                    f"[ColumnExtractor] {item.name!r} (qty {item.quantity}) "
                    f"← line {idx} {price:.2f}"
                )
                items.append(item)

        return items

    def _standalone_prices(self, lines: Sequence[str]) -> List[Tuple[int, float]]:
        found = []
        for i, line in enumerate(lines):
            m = _STANDALONE_PRICE.match(line.strip())
            if not m:
                continue
            price = float(m.group(2))
            if 0 < price < _MAX_PRICE:
                found.append((i, price))
        return found

    def _item_for_price(self, lines: Sequence[str], idx: int, price: float) -> Optional[LineItem]:
        """Nearest preceding candidate line that passes the vocabulary gate."""
        stop = max(0, idx - _LOOKBACK_LINES)
        for j in range(idx - 1, stop - 1, -1):
            candidate = lines[j].strip()

            if _STANDALONE_PRICE.match(candidate) or _FINANCIAL_PREFIX.match(candidate):
                continue
            if not self._plausible_name_line(candidate):
                continue
            if not self._looks_like_food(candidate):
                continue

            item = self._build_item(candidate, price)
            if item is not None:
                return item
        return None

    @staticmethod
    def _plausible_name_line(line: str) -> bool:
        if len(line) < 2 or len(line) > 60:
            return False
        if _HEADER_PREFIX.match(line):
            return False
        if _DATE_LIKE.match(line):
            return False
        return True

    def _looks_like_food(self, line: str) -> bool:
        lower = line.lower()
        if any(k in lower for k in self.keywords):
            return True
        return bool(_QTY_LEADING.match(line))
