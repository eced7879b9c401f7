"""
Tests for merchant name and tax/total detection
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from metadata_extractor import DEFAULT_MERCHANT_NAME, MetadataExtractor


@pytest.fixture
def extractor():
    return MetadataExtractor()


def test_first_line_is_merchant(extractor):
    lines = ["Harbor Lane Cafe", "123 Main St", "Burger $12.99"]
    assert extractor.merchant_name(lines) == "Harbor Lane Cafe"


def test_merchant_skips_dates_orders_and_prices(extractor):
    lines = ["12/03/2024", "Order #55", "Lunch $5.00", "Joe's Diner"]
    assert extractor.merchant_name(lines) == "Joe's Diner"


def test_merchant_requires_letters_only(extractor):
    lines = ["Bob's #1 Grill", "Bar", "The Corner-Shop"]
    assert extractor.merchant_name(lines) == "The Corner-Shop"


def test_merchant_only_scans_header(extractor):
    lines = ["1234"] * 8 + ["Late Name"]
    assert extractor.merchant_name(lines) == DEFAULT_MERCHANT_NAME


def test_merchant_default(extractor):
    assert extractor.merchant_name(["Burger $12.99", "Fries $4.50"]) == "Unknown Restaurant"
    assert extractor.merchant_name([]) == "Unknown Restaurant"


def test_financials(extractor):
    lines = ["Burger $12.99", "Subtotal $17.49", "Tax $1.40", "Total $18.89"]
    totals = extractor.financials(lines)
    assert totals.tax == pytest.approx(1.40)
    assert totals.total == pytest.approx(18.89)


def test_last_total_wins(extractor):
    totals = extractor.financials(["Total $10.00", "Total $12.00"])
    assert totals.total == pytest.approx(12.00)


def test_amount_due_counts_as_total(extractor):
    totals = extractor.financials(["Amount Due: 30.50"])
    assert totals.total == pytest.approx(30.50)


def test_subtotal_line_is_not_tax(extractor):
    totals = extractor.financials(["Subtotal before tax $20.00"])
    assert totals.tax == 0.0
    assert totals.total == pytest.approx(20.00)


def test_first_number_on_line_is_used(extractor):
    totals = extractor.financials(["Tax 8.875% $1.55"])
    assert totals.tax == pytest.approx(8.875)


def test_financials_missing(extractor):
    totals = extractor.financials(["Burger $12.99", "Total"])
    assert totals.tax == 0.0
    assert totals.total == 0.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
