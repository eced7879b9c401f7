"""
Tests for Item Validator
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from item_validator import ItemValidator
from receipt_models import LineItem


@pytest.fixture
def validator():
    return ItemValidator()


@pytest.mark.parametrize("name, price, reason", [
    ("", 5.00, "name too short"),
    ("A", 5.00, "name too short"),
    ("Total", 23.38, "summary line"),
    ("Sales Tax", 1.20, "summary line"),
    ("Amount", 9.00, "summary line"),
    ("Free Refill", 0.00, "price out of range"),
    ("Refund", -3.00, "price out of range"),
    ("Yacht", 1000.01, "price out of range"),
    ("12345", 4.00, "numeric name"),
    ("Latte", 4.25, ""),
    ("Tasting Menu", 1000.00, ""),
])
def test_rejection_reason(validator, name, price, reason):
    assert validator.rejection_reason(LineItem(name=name, price=price)) == reason


def test_validate_drops_total_and_keeps_order(validator):
    items = [
        LineItem(name="Burger", price=12.99),
        LineItem(name="Total", price=23.38),
        LineItem(name="Fries", price=4.50),
        LineItem(name="Coffee", price=3.00, quantity=2),
    ]
    kept = validator.validate(items)

    assert [i.name for i in kept] == ["Burger", "Fries", "Coffee"]
    assert kept[0] is items[0]
    assert kept[2].quantity == 2


def test_validate_empty(validator):
    assert validator.validate([]) == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
