"""
API Models — Request and Response schemas
Using Pydantic for automatic validation and documentation

Receipt and bill payloads reuse the domain models (ParsedReceipt,
BillSummary, ...) so the HTTP shape is the library shape.
"""

from pydantic import BaseModel, Field
from typing import List, Optional

from bill_splitter import BillSummary, ItemAssignment, Payee
from currencies import Currency
from receipt_models import LineItem, ParsedReceipt


# ─── Receipt parsing ──────────────────────────────────────────────────────────

class ParseRequest(BaseModel):
    """Raw OCR text to parse."""
    text: str = Field("", description="Plain text returned by the OCR service")


class ParseResponse(BaseModel):
    """Structured receipt extracted from OCR text."""
    status: str             = Field("success", description="Response status")
    receipt: ParsedReceipt  = Field(...,        description="Parsed receipt")
    processing_time_ms: int = Field(...,        description="Processing time in milliseconds")

    class Config:
        json_schema_extra = {
            "example": {
                "status": "success",
                "receipt": {
                    "restaurant_name": "Harbor Lane Cafe",
                    "items": [
                        {"name": "Burger", "price": 12.99, "quantity": 1},
                        {"name": "Coffee", "price": 6.0, "quantity": 2},
                    ],
                    "subtotal": 24.99,
                    "tax": 2.0,
                    "total": 26.99,
                    "date": "2026-10-19T12:00:00Z",
                    "raw_text": "Harbor Lane Cafe\nBurger $12.99\n2x Coffee $6.00\nTax $2.00\nTotal $26.99",
                    "receipt_type": "restaurant",
                    "layout": "inline",
                    "is_placeholder": False,
                },
                "processing_time_ms": 2,
            }
        }


# ─── Bill splitting ───────────────────────────────────────────────────────────

class SplitRequest(BaseModel):
    """Items, people and who had what."""
    items: List[LineItem]               = Field(...,  description="Receipt items")
    payees: List[Payee]                 = Field(...,  description="People sharing the bill")
    assignments: List[ItemAssignment]   = Field(...,  description="One assignment per item")
    tip_percentage: Optional[float]     = Field(None, description="Tip as a percentage of subtotal (config default when omitted)", ge=0)
    custom_tip: Optional[float]         = Field(None, description="Fixed tip amount; overrides tip_percentage", ge=0)
    currency: Optional[str]             = Field(None, description="ISO currency code (config default when omitted)")


class SplitResponse(BaseModel):
    status: str          = Field("success", description="Response status")
    summary: BillSummary = Field(...,        description="Per-person breakdown")


class CurrencyListResponse(BaseModel):
    currencies: List[Currency]


class SplitOptionsResponse(BaseModel):
    default_currency: str         = Field(...,  description="ISO code used when a request names none")
    tip_options: List[float]      = Field(...,  description="Tip percentages offered to users")
    default_tip_percentage: float = Field(...,  description="Tip percentage used when a request names none")


# ─── Health & Error Models ────────────────────────────────────────────────────

class HealthResponse(BaseModel):
    """Health check response."""
    status: str  = Field("healthy",              description="Health status")
    service: str = Field("receipt-split-parser", description="Service name")
    version: str = Field("1.0.0",                description="API version")


class ErrorResponse(BaseModel):
    """Error response."""
    status: str           = Field("error", description="Response status")
    error: str            = Field(...,     description="Error type")
    message: str          = Field(...,     description="Error message")
    detail: Optional[str] = Field(None,    description="Additional details")
