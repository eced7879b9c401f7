"""
Tests for Bill Splitter and currency helpers
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bill_splitter import (
    AssignmentError,
    BillSplitter,
    ItemAssignment,
    Payee,
    calculate_tip,
    split_bill,
)
from currencies import CURRENCIES, DEFAULT_CURRENCY, format_money, get_currency
from receipt_models import LineItem


@pytest.fixture
def splitter():
    return BillSplitter()


@pytest.fixture
def items():
    return [
        LineItem(name="Pizza", price=18.50),
        LineItem(name="Salad", price=12.00),
        LineItem(name="Beer", price=6.00, quantity=5),
    ]


@pytest.fixture
def payees():
    return [Payee(id="ann", name="Ann"), Payee(id="ben", name="Ben")]


@pytest.fixture
def assignments():
    return [
        ItemAssignment(item_index=0, payee_ids=["ann"]),
        ItemAssignment(item_index=1, payee_ids=["ann", "ben"], is_split=True),
        ItemAssignment(
            item_index=2,
            payee_ids=["ann", "ben"],
            is_split=True,
            quantities={"ann": 2, "ben": 3},
        ),
    ]


# ─── Tip ──────────────────────────────────────────────────────────────────────

def test_tip_percentage():
    assert calculate_tip(100.0, 15) == pytest.approx(15.0)


def test_custom_tip_overrides_percentage():
    assert calculate_tip(100.0, 15, custom_amount=7) == pytest.approx(7.0)


def test_negative_tip_rejected():
    with pytest.raises(AssignmentError):
        calculate_tip(100.0, custom_amount=-1)


# ─── Splitting ────────────────────────────────────────────────────────────────

def test_split_breakdown(splitter, items, payees, assignments):
    summary = splitter.split(items, payees, assignments, tip_amount=10.0)
    ann, ben = summary.payees

    assert summary.subtotal == pytest.approx(60.50)
    assert summary.tip == pytest.approx(10.0)
    assert summary.total == pytest.approx(70.50)
    assert summary.currency == "ZAR"

    assert ann.subtotal == pytest.approx(36.50)
    assert ann.tip == pytest.approx(5.0)
    assert ann.total == pytest.approx(41.50)
    assert [(l.name, l.quantity) for l in ann.items] == [
        ("Pizza", 1), ("Salad", 1), ("Beer x2", 2),
    ]

    assert ben.subtotal == pytest.approx(24.00)
    assert ben.total == pytest.approx(29.00)
    assert [l.name for l in ben.items] == ["Salad", "Beer x3"]


def test_payee_subtotals_add_up(splitter, items, payees, assignments):
    summary = splitter.split(items, payees, assignments, tip_amount=3.0)
    assert sum(p.subtotal for p in summary.payees) == pytest.approx(summary.subtotal)
    assert sum(p.total for p in summary.payees) == pytest.approx(summary.total)


def test_equal_split_of_multi_quantity_item(splitter, payees):
    items = [LineItem(name="Beer", price=6.00, quantity=4)]
    assignments = [ItemAssignment(item_index=0, payee_ids=["ann", "ben"], is_split=True)]

    summary = splitter.split(items, payees, assignments)

    assert [p.subtotal for p in summary.payees] == [pytest.approx(12.0), pytest.approx(12.0)]


def test_quantities_ignored_for_single_unit_item(splitter, payees):
    items = [LineItem(name="Pizza", price=18.00)]
    assignments = [
        ItemAssignment(item_index=0, payee_ids=["ann", "ben"], is_split=True,
                       quantities={"ann": 1, "ben": 0}),
    ]
    summary = splitter.split(items, payees, assignments)
    assert [p.subtotal for p in summary.payees] == [pytest.approx(9.0), pytest.approx(9.0)]


def test_payee_without_items_still_shares_tip(splitter):
    items = [LineItem(name="Pizza", price=20.00)]
    payees = [Payee(id="a", name="Ann"), Payee(id="b", name="Ben")]
    assignments = [ItemAssignment(item_index=0, payee_ids=["a"])]

    summary = splitter.split(items, payees, assignments, tip_amount=4.0)

    assert summary.payees[1].items == []
    assert summary.payees[1].total == pytest.approx(2.0)


def test_split_bill_computes_tip(items, payees, assignments):
    summary = split_bill(items, payees, assignments, tip_percentage=20)

    assert summary.tip == pytest.approx(12.10)
    assert summary.total == pytest.approx(72.60)
    assert summary.payees[0].tip == pytest.approx(6.05)


def test_split_bill_custom_tip(items, payees, assignments):
    summary = split_bill(items, payees, assignments, custom_tip=4.0)
    assert summary.tip == pytest.approx(4.0)


def test_currency_code_in_summary(splitter, items, payees, assignments):
    summary = splitter.split(items, payees, assignments, currency=get_currency("usd"))
    assert summary.currency == "USD"


# ─── Assignment validation ───────────────────────────────────────────────────

def test_unassigned_item(splitter, items, payees, assignments):
    with pytest.raises(AssignmentError, match="Unassigned items: Salad"):
        splitter.split(items, payees, [assignments[0], assignments[2]])


def test_empty_payee_list_counts_as_unassigned(splitter, items, payees, assignments):
    assignments[0] = ItemAssignment(item_index=0, payee_ids=[])
    with pytest.raises(AssignmentError, match="Pizza"):
        splitter.split(items, payees, assignments)


def test_no_payees(splitter, items, assignments):
    with pytest.raises(AssignmentError, match="payee"):
        splitter.split(items, [], assignments)


def test_duplicate_payee_ids(splitter, items, assignments):
    payees = [Payee(id="ann", name="Ann"), Payee(id="ann", name="Annie")]
    with pytest.raises(AssignmentError, match="unique"):
        splitter.split(items, payees, assignments)


def test_unknown_payee(splitter, items, payees, assignments):
    assignments[0] = ItemAssignment(item_index=0, payee_ids=["zoe"])
    with pytest.raises(AssignmentError, match="zoe"):
        splitter.split(items, payees, assignments)


def test_unknown_item_index(splitter, items, payees, assignments):
    assignments.append(ItemAssignment(item_index=9, payee_ids=["ann"]))
    with pytest.raises(AssignmentError, match="index 9"):
        splitter.split(items, payees, assignments)


def test_item_assigned_twice(splitter, items, payees, assignments):
    assignments.append(ItemAssignment(item_index=0, payee_ids=["ben"]))
    with pytest.raises(AssignmentError, match="twice"):
        splitter.split(items, payees, assignments)


def test_repeated_payee_in_assignment(splitter, payees):
    items = [LineItem(name="Beer", price=5.00, quantity=2)]
    assignments = [
        ItemAssignment(item_index=0, payee_ids=["ann", "ann", "ben"], is_split=True,
                       quantities={"ann": 1, "ben": 1}),
    ]
    with pytest.raises(AssignmentError, match="more than once"):
        splitter.split(items, payees, assignments)


def test_split_needs_two_payees(splitter, items, payees, assignments):
    assignments[1] = ItemAssignment(item_index=1, payee_ids=["ann"], is_split=True)
    with pytest.raises(AssignmentError, match="at least two"):
        splitter.split(items, payees, assignments)


def test_unsplit_item_with_two_payees(splitter, items, payees, assignments):
    assignments[0] = ItemAssignment(item_index=0, payee_ids=["ann", "ben"])
    with pytest.raises(AssignmentError, match="not marked as split"):
        splitter.split(items, payees, assignments)


def test_quantities_must_add_up(splitter, items, payees, assignments):
    assignments[2] = ItemAssignment(
        item_index=2, payee_ids=["ann", "ben"], is_split=True,
        quantities={"ann": 2, "ben": 2},
    )
    with pytest.raises(AssignmentError, match="must equal item quantity"):
        splitter.split(items, payees, assignments)


def test_quantity_for_payee_outside_split(splitter, items, assignments):
    payees = [Payee(id="ann", name="Ann"), Payee(id="ben", name="Ben"), Payee(id="cy", name="Cy")]
    assignments[2] = ItemAssignment(
        item_index=2, payee_ids=["ann", "ben"], is_split=True,
        quantities={"ann": 2, "cy": 3},
    )
    with pytest.raises(AssignmentError, match="not sharing"):
        splitter.split(items, payees, assignments)


def test_negative_tip_amount(splitter, items, payees, assignments):
    with pytest.raises(AssignmentError):
        splitter.split(items, payees, assignments, tip_amount=-1.0)


# ─── Currencies ──────────────────────────────────────────────────────────────

def test_default_currency_is_rand():
    assert DEFAULT_CURRENCY.code == "ZAR"
    assert format_money(12.5) == "R12.50"


def test_currency_lookup_is_case_insensitive():
    assert get_currency("eur").symbol == "€"
    assert format_money(3, get_currency("USD")) == "$3.00"


def test_unknown_currency():
    with pytest.raises(KeyError):
        get_currency("XYZ")


def test_currency_codes_unique():
    codes = [c.code for c in CURRENCIES]
    assert len(codes) == len(set(codes)) == 16


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
