"""
Receipt Classifier
==================
Classifies a receipt BEFORE item extraction so the right vocabulary and the
right extraction strategy are used.

Two independent decisions are made from the raw lines:

  1. Receipt type  — keyword membership over the whole lower-cased text.
                     First vocabulary that matches wins, in the order
                     restaurant → grocery → gas_station, else 'general'.

  2. Layout        — counts line shapes.
                     Many standalone price lines ("4.25", "$4.25") means the
                     name column and price column were read separately
                     ('column').  Several "$price" lines that are not totals
                     means name and price share a line ('inline').
                     Anything else is 'hybrid' and both strategies run.
"""

import re
from typing import Dict, List, Sequence, Tuple

from loguru import logger

from receipt_models import ReceiptLayout, ReceiptType


# ─── Type vocabularies (checked in this order) ───────────────────────────────

_TYPE_KEYWORDS: Dict[ReceiptType, Tuple[str, ...]] = {
    ReceiptType.RESTAURANT:  ("restaurant", "cafe", "coffee", "pizza", "burger", "food"),
    ReceiptType.GROCERY:     ("grocery", "supermarket", "walmart", "target", "kroger"),
    ReceiptType.GAS_STATION: ("gas", "fuel", "station"),
}


# ─── Layout fingerprinting ───────────────────────────────────────────────────

_COLUMN_MIN_PRICE_ONLY = 3
_INLINE_MIN_PRICE_LINES = 2

_PRICE_ONLY        = re.compile(r'^\d+\.\d{2}$')
_DOLLAR_PRICE_ONLY = re.compile(r'^\$\d+\.\d{2}$')
_DOLLAR_PRICE      = re.compile(r'\$\d+\.\d{2}')
_TOTALS_PREFIX     = re.compile(r'^(subtotal|tax|total|tip)', re.IGNORECASE)


class ReceiptClassifier:
    """
    Classify a receipt from its OCR lines.

    Usage
    -----
    classifier = ReceiptClassifier()
    receipt_type, layout = classifier.classify(lines)
    """

    def classify(self, lines: Sequence[str]) -> Tuple[ReceiptType, ReceiptLayout]:
        receipt_type = self.detect_type(lines)
        layout = self.detect_layout(lines)
        logger.debug(f"[Classifier] type={receipt_type.value} layout={layout.value}")
        return receipt_type, layout

    def detect_type(self, lines: Sequence[str]) -> ReceiptType:
        text = " ".join(lines).lower()
        for receipt_type, keywords in _TYPE_KEYWORDS.items():
            for keyword in keywords:
                if keyword in text:
                    logger.debug(f"[Classifier] {receipt_type.value} (keyword: {keyword!r})")
                    return receipt_type
        return ReceiptType.GENERAL

    def detect_layout(self, lines: Sequence[str]) -> ReceiptLayout:
        """
        Fixed-threshold layout fingerprint.

        'column' wins over 'inline' when both counts are high, because a
        receipt with three or more bare price lines cannot be parsed by
        looking at one line at a time.
        """
        price_only = self._price_only_lines(lines)
        inline = self._inline_price_lines(lines)

        logger.debug(
            f"[Classifier] fingerprint: total={len(lines)} "
            f"price_only={len(price_only)} inline={len(inline)}"
        )

        if len(price_only) >= _COLUMN_MIN_PRICE_ONLY:
            return ReceiptLayout.COLUMN
        if len(inline) >= _INLINE_MIN_PRICE_LINES:
            return ReceiptLayout.INLINE
        return ReceiptLayout.HYBRID

    @staticmethod
    def _price_only_lines(lines: Sequence[str]) -> List[str]:
        return [
            l for l in lines
            if _PRICE_ONLY.match(l.strip()) or _DOLLAR_PRICE_ONLY.match(l.strip())
        ]

    @staticmethod
    def _inline_price_lines(lines: Sequence[str]) -> List[str]:
        return [
            l for l in lines
            if _DOLLAR_PRICE.search(l) and not _TOTALS_PREFIX.match(l)
        ]
