"""
Receipt Text Parsing Pipeline
Turns raw OCR text into a structured ParsedReceipt
"""

from datetime import datetime, timezone
from typing import List, Optional, Tuple

from loguru import logger

from extractor import ExtractorFactory
from item_validator import ItemValidator
from metadata_extractor import MetadataExtractor
from receipt_classifier import ReceiptClassifier
from receipt_models import LineItem, ParsedReceipt, ReceiptLayout, ReceiptType
from utils import load_config


# Fixed output when no usable item survives validation
PLACEHOLDER_ITEMS = (
    ("Sample Item 1", 12.50),
    ("Sample Item 2", 8.75),
)
PLACEHOLDER_SUBTOTAL = 21.25
PLACEHOLDER_TAX = 2.13
PLACEHOLDER_TOTAL = 23.38


def split_lines(raw_text: Optional[str]) -> Tuple[str, ...]:
    """Split OCR text into trimmed, non-empty lines (top-to-bottom order)."""
    if not raw_text:
        return ()
    return tuple(s for s in (line.strip() for line in raw_text.splitlines()) if s)


class ReceiptParser:
    """
    End-to-end receipt text parser

    Workflow:
    1. Split OCR text into lines
    2. Classify receipt type and layout
    3. Extract merchant name
    4. Extract line items with the layout's strategy (both for 'hybrid')
    5. Extract tax and total
    6. Validate items and recompute the subtotal

    Holds configuration only; parse() has no side effects, so one instance
    can serve concurrent callers.
    """

    def __init__(self, config_path: Optional[str] = None, config: Optional[dict] = None):
        self.config = config if config is not None else load_config(config_path)

        self.classifier = ReceiptClassifier()
        self.metadata = MetadataExtractor()
        self.extractors = ExtractorFactory(
            column_keywords=self.config.get('parser', {}).get('column_keywords')
        )
        self.validator = ItemValidator()

    def parse(self, raw_text: Optional[str]) -> ParsedReceipt:
        """
        Parse OCR text into a ParsedReceipt. Never raises for any text input.

        Args:
            raw_text: Plain text returned by the OCR service ('' or None allowed)

        Returns:
            ParsedReceipt; placeholder items/totals when nothing usable is found
        """
        raw_text = raw_text or ""
        lines = split_lines(raw_text)
        logger.debug(f"[ReceiptParser] {len(lines)} lines")

        receipt_type, layout = self.classifier.classify(lines)
        restaurant_name = self.metadata.merchant_name(lines)
        items = self._extract_items(lines, receipt_type, layout)
        totals = self.metadata.financials(lines)
        validated = self.validator.validate(items)

        if not validated:
            logger.warning(
                f"[ReceiptParser] no usable items in {len(lines)} lines, "
                f"returning placeholder data"
            )
            return self._placeholder(restaurant_name, raw_text, receipt_type, layout)

        subtotal = sum(item.price * item.quantity for item in validated)

        logger.info(
            f"[ReceiptParser] name={restaurant_name!r} type={receipt_type.value} "
            f"layout={layout.value} items={len(validated)} "
            f"subtotal={subtotal:.2f} tax={totals.tax:.2f} total={totals.total:.2f}"
        )

        return ParsedReceipt(
            restaurant_name=restaurant_name,
            items=validated,
            subtotal=subtotal,
            tax=totals.tax,
            total=totals.total,
            date=datetime.now(timezone.utc),
            raw_text=raw_text,
            receipt_type=receipt_type,
            layout=layout,
        )

    def _extract_items(
        self,
        lines: Tuple[str, ...],
        receipt_type: ReceiptType,
        layout: ReceiptLayout,
    ) -> List[LineItem]:
        """
        Run the layout's strategies and keep the one with the most items.

        max() returns the first of equal candidates, so on a tie the
        strategy evaluated first (column) wins.
        """
        results = [
            extractor.extract(lines, receipt_type)
            for extractor in self.extractors.get_extractors(layout)
        ]
        if len(results) > 1:
            logger.debug(
                f"[ReceiptParser] hybrid candidates: "
                f"{', '.join(str(len(r)) for r in results)} items"
            )
        return max(results, key=len)

    @staticmethod
    def _placeholder(
        restaurant_name: str,
        raw_text: str,
        receipt_type: ReceiptType,
        layout: ReceiptLayout,
    ) -> ParsedReceipt:
        return ParsedReceipt(
            restaurant_name=restaurant_name,
            items=[LineItem(name=name, price=price) for name, price in PLACEHOLDER_ITEMS],
            subtotal=PLACEHOLDER_SUBTOTAL,
            tax=PLACEHOLDER_TAX,
            total=PLACEHOLDER_TOTAL,
            date=datetime.now(timezone.utc),
            raw_text=raw_text,
            receipt_type=receipt_type,
            layout=layout,
            is_placeholder=True,
        )


_default_parser: Optional[ReceiptParser] = None


def parse_receipt_text(raw_text: Optional[str]) -> ParsedReceipt:
    """Parse OCR text with a lazily created, shared ReceiptParser."""
    global _default_parser
    if _default_parser is None:
        _default_parser = ReceiptParser()
    return _default_parser.parse(raw_text)
