"""
Bill Splitter
=============
Turns a parsed receipt plus "who had what" into a per-person breakdown.

Assignment kinds
----------------
  single         one payee owns the whole line
  equal split    is_split=True, no quantities → line cost shared evenly
  quantity split is_split=True with quantities on a multi-quantity item
                 (e.g. 5 beers: Ann 2, Ben 3) → each pays quantity × unit price

A line's cost is price × quantity, the same figure the receipt subtotal is
built from, so the payees' subtotals always add up to the bill subtotal.
The tip is shared equally by everyone at the table.
"""

from typing import Dict, List, Optional, Sequence

from loguru import logger
from pydantic import BaseModel, Field

from currencies import Currency, DEFAULT_CURRENCY
from receipt_models import LineItem


class AssignmentError(ValueError):
    """Raised when item assignments cannot produce a consistent split."""


# ─── Models ───────────────────────────────────────────────────────────────────

class Payee(BaseModel):
    id: str   = Field(..., description="Stable payee identifier")
    name: str = Field(..., description="Display name")


class ItemAssignment(BaseModel):
    item_index: int = Field(..., description="Index into the receipt's items", ge=0)
    payee_ids: List[str] = Field(default_factory=list, description="Payees sharing the item")
    is_split: bool = Field(False, description="Shared between two or more payees")
    quantities: Optional[Dict[str, int]] = Field(
        None, description="Units per payee, for splitting multi-quantity items"
    )


class PayeeLine(BaseModel):
    name: str
    quantity: int
    amount: float


class PayeeBreakdown(BaseModel):
    payee_id: str
    name: str
    subtotal: float = 0.0
    tip: float = 0.0
    total: float = 0.0
    items: List[PayeeLine] = Field(default_factory=list)


class BillSummary(BaseModel):
    subtotal: float
    tip: float
    total: float
    currency: str
    payees: List[PayeeBreakdown]


# ─── Tip ──────────────────────────────────────────────────────────────────────

def calculate_tip(
    subtotal: float,
    percentage: float = 10.0,
    custom_amount: Optional[float] = None,
) -> float:
    """
    Tip amount: a custom amount when given, otherwise a percentage of subtotal.

    calculate_tip(100.0, 15)                  → 15.0
    calculate_tip(100.0, 15, custom_amount=7) → 7.0
    """
    if custom_amount is not None:
        tip = float(custom_amount)
    else:
        tip = subtotal * percentage / 100
    if tip < 0:
        raise AssignmentError(f"Tip cannot be negative: {tip}")
    return tip


# ─── Splitter ─────────────────────────────────────────────────────────────────

def _display_name(item: LineItem, quantity: int) -> str:
    return f"{item.name} x{quantity}" if item.quantity > 1 else item.name


class BillSplitter:
    """
    Usage
    -----
    splitter = BillSplitter()
    summary  = splitter.split(receipt.items, payees, assignments, tip_amount=5.0)
    """

    def validate(
        self,
        items: Sequence[LineItem],
        payees: Sequence[Payee],
        assignments: Sequence[ItemAssignment],
    ) -> Dict[int, ItemAssignment]:
        """Check assignments and return them keyed by item index."""
        if not payees:
            raise AssignmentError("At least one payee is required")

        payee_ids = {p.id for p in payees}
        if len(payee_ids) != len(payees):
            raise AssignmentError("Payee ids must be unique")

        by_item: Dict[int, ItemAssignment] = {}
        for a in assignments:
            if a.item_index >= len(items):
                raise AssignmentError(f"Unknown item index {a.item_index}")
            if a.item_index in by_item:
                raise AssignmentError(f"Item {a.item_index} is assigned twice")

            if len(set(a.payee_ids)) != len(a.payee_ids):
                raise AssignmentError(f"Item {a.item_index} lists the same payee more than once")

            unknown = [pid for pid in a.payee_ids if pid not in payee_ids]
            if unknown:
                raise AssignmentError(f"Unknown payee(s): {', '.join(unknown)}")

            item = items[a.item_index]
            if a.is_split:
                if len(a.payee_ids) < 2:
                    raise AssignmentError(f"Split of {item.name!r} needs at least two payees")
                if a.quantities is not None and item.quantity > 1:
                    self._check_quantities(item, a)
            elif len(a.payee_ids) > 1:
                raise AssignmentError(
                    f"{item.name!r} has {len(a.payee_ids)} payees but is not marked as split"
                )

            by_item[a.item_index] = a

        unassigned = [
            items[i].name for i in range(len(items))
            if i not in by_item or not by_item[i].payee_ids
        ]
        if unassigned:
            raise AssignmentError(f"Unassigned items: {', '.join(unassigned)}")

        return by_item

    @staticmethod
    def _check_quantities(item: LineItem, a: ItemAssignment) -> None:
        for pid, qty in a.quantities.items():
            if pid not in a.payee_ids:
                raise AssignmentError(f"Quantity given for {pid!r}, who is not sharing {item.name!r}")
            if qty < 0:
                raise AssignmentError(f"Negative quantity for {pid!r} on {item.name!r}")
        assigned = sum(a.quantities.values())
        if assigned != item.quantity:
            raise AssignmentError(
                f"Total assigned ({assigned}) must equal item quantity ({item.quantity}) "
                f"for {item.name!r}"
            )

    def split(
        self,
        items: Sequence[LineItem],
        payees: Sequence[Payee],
        assignments: Sequence[ItemAssignment],
        tip_amount: float = 0.0,
        currency: Currency = DEFAULT_CURRENCY,
    ) -> BillSummary:
        if tip_amount < 0:
            raise AssignmentError(f"Tip cannot be negative: {tip_amount}")

        by_item = self.validate(items, payees, assignments)
        breakdown = {
            p.id: PayeeBreakdown(payee_id=p.id, name=p.name) for p in payees
        }

        for index, item in enumerate(items):
            a = by_item[index]
            line_cost = item.price * item.quantity

            if a.is_split and a.quantities is not None and item.quantity > 1:
                for pid in a.payee_ids:
                    qty = a.quantities.get(pid, 0)
                    if qty <= 0:
                        continue
                    self._charge(breakdown[pid], _display_name(item, qty), qty, qty * item.price)
            elif a.is_split:
                share = line_cost / len(a.payee_ids)
                for pid in a.payee_ids:
                    self._charge(breakdown[pid], _display_name(item, item.quantity), 1, share)
            else:
                pid = a.payee_ids[0]
                self._charge(breakdown[pid], _display_name(item, item.quantity), item.quantity, line_cost)

        tip_per_person = tip_amount / len(payees)
        for b in breakdown.values():
            b.tip = tip_per_person
            b.total = b.subtotal + b.tip

        subtotal = sum(item.price * item.quantity for item in items)
        logger.info(
            f"[BillSplitter] {len(items)} items across {len(payees)} payees, "
            f"subtotal={subtotal:.2f} tip={tip_amount:.2f}"
        )

        return BillSummary(
            subtotal=subtotal,
            tip=tip_amount,
            total=subtotal + tip_amount,
            currency=currency.code,
            payees=list(breakdown.values()),
        )

    @staticmethod
    def _charge(b: PayeeBreakdown, name: str, quantity: int, amount: float) -> None:
        b.subtotal += amount
        b.items.append(PayeeLine(name=name, quantity=quantity, amount=amount))


def split_bill(
    items: Sequence[LineItem],
    payees: Sequence[Payee],
    assignments: Sequence[ItemAssignment],
    tip_percentage: float = 10.0,
    custom_tip: Optional[float] = None,
    currency: Currency = DEFAULT_CURRENCY,
) -> BillSummary:
    """Compute the tip from the items' subtotal, then split the bill."""
    subtotal = sum(item.price * item.quantity for item in items)
    tip = calculate_tip(subtotal, tip_percentage, custom_tip)
    return BillSplitter().split(items, payees, assignments, tip_amount=tip, currency=currency)
