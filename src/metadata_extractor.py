"""
Metadata Extractor
==================
Layout-independent receipt fields:

  - merchant name    first plausible name line in the header block
  - tax / total      keyword lines anywhere on the receipt

Tax and total are read in a single forward pass and the LAST matching line
wins, so a corrected or final total printed further down replaces an
earlier one.  Neither value is reconciled with the item sum; the pipeline
recomputes the subtotal from validated items instead.
"""

import re
from typing import Optional, Sequence

from loguru import logger

from receipt_models import FinancialTotals


DEFAULT_MERCHANT_NAME = "Unknown Restaurant"

_HEADER_SCAN_LINES = 8

_STARTS_WITH_DIGIT = re.compile(r'^\d+')
_NAME_LIKE         = re.compile(r"^[A-Za-z\s&'-]+$")
_NAME_STOP_WORDS   = ("date", "time", "order")

_AMOUNT = re.compile(r'\$?(\d+\.?\d*)')


class MetadataExtractor:
    """
    Usage
    -----
    extractor = MetadataExtractor()
    name   = extractor.merchant_name(lines)
    totals = extractor.financials(lines)
    """

    def merchant_name(self, lines: Sequence[str]) -> str:
        for line in lines[:_HEADER_SCAN_LINES]:
            if self._skip_name_line(line):
                continue
            if _NAME_LIKE.match(line) and len(line) > 3:
                logger.debug(f"[MetadataExtractor] merchant={line!r}")
                return line
        return DEFAULT_MERCHANT_NAME

    @staticmethod
    def _skip_name_line(line: str) -> bool:
        if len(line) < 3 or len(line) > 60:
            return True
        if _STARTS_WITH_DIGIT.match(line):
            return True
        if '$' in line:
            return True
        lower = line.lower()
        return any(word in lower for word in _NAME_STOP_WORDS)

    def financials(self, lines: Sequence[str]) -> FinancialTotals:
        tax = 0.0
        total = 0.0

        for line in lines:
            lower = line.lower()

            if "tax" in lower and "subtotal" not in lower:
                value = self._first_amount(line)
                if value is not None:
                    tax = value

            if "total" in lower or "amount due" in lower:
                value = self._first_amount(line)
                if value is not None:
                    total = value

        logger.debug(f"[MetadataExtractor] tax={tax:.2f} total={total:.2f}")
        return FinancialTotals(tax=tax, total=total)

    @staticmethod
    def _first_amount(line: str) -> Optional[float]:
        m = _AMOUNT.search(line)
        if not m:
            return None
        return float(m.group(1))
