"""
Receipt Data Models
===================
Typed records that flow through the parsing pipeline.

  ReceiptType      closed classification of what kind of business printed
                   the receipt (drives the skip-word vocabulary)
  ReceiptLayout    physical layout: prices on their own lines ('column'),
                   name and price on one line ('inline'), or undecided
                   ('hybrid', both strategies run)
  LineItem         one extracted (name, price, quantity) candidate
  FinancialTotals  tax / total as printed (0 means not found)
  ParsedReceipt    the pipeline's output
"""

from datetime import datetime
from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class ReceiptType(str, Enum):
    RESTAURANT = "restaurant"
    GROCERY = "grocery"
    GAS_STATION = "gas_station"
    GENERAL = "general"


class ReceiptLayout(str, Enum):
    COLUMN = "column"
    INLINE = "inline"
    HYBRID = "hybrid"


class LineItem(BaseModel):
    """
    A candidate line item.

    Name and price are deliberately unconstrained: extractors produce
    speculative candidates and ItemValidator decides which ones survive.
    """
    name: str     = Field(...,  description="Item name as printed (cleaned)")
    price: float  = Field(...,  description="Price printed on the receipt line")
    quantity: int = Field(1,    description="Multiplier found before the name", ge=1)

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class FinancialTotals(BaseModel):
    tax: float   = Field(0.0, description="Detected tax (0 = not found)", ge=0)
    total: float = Field(0.0, description="Detected total (0 = not found)", ge=0)


class ParsedReceipt(BaseModel):
    """Structured receipt handed to the bill-splitting layer."""
    restaurant_name: str   = Field(...,  description="Merchant name or 'Unknown Restaurant'")
    items: List[LineItem]  = Field(...,  description="Validated items in discovery order")
    subtotal: float        = Field(...,  description="Sum of price * quantity over items")
    tax: float             = Field(0.0,  description="Detected tax")
    total: float           = Field(0.0,  description="Detected total")
    date: datetime         = Field(...,  description="Capture time (not the printed date)")
    raw_text: str          = Field("",   description="Original OCR text")

    receipt_type: ReceiptType  = Field(ReceiptType.GENERAL, description="Detected receipt type")
    layout: ReceiptLayout      = Field(ReceiptLayout.HYBRID, description="Detected layout")
    is_placeholder: bool       = Field(False, description="True when no usable items were found")
