"""
API Routes - All API endpoints
"""

import time

from fastapi import APIRouter, HTTPException
from loguru import logger

from api.models import (
    CurrencyListResponse,
    ErrorResponse,
    ParseRequest,
    ParseResponse,
    SplitOptionsResponse,
    SplitRequest,
    SplitResponse,
)
from bill_splitter import AssignmentError, split_bill
from currencies import CURRENCIES, get_currency
from receipt_parser import ReceiptParser

# Create router
router = APIRouter()

# Parser holds configuration only; shared across requests
parser = ReceiptParser()


# ==================== API ENDPOINTS ====================

@router.post("/receipts/parse", response_model=ParseResponse, tags=["Receipts"])
async def parse_receipt(request: ParseRequest):
    """
    **Parse OCR text into a structured receipt**

    Send the plain text returned by the OCR service. The parser never fails
    on odd input: when no items can be recognised, placeholder items are
    returned and `receipt.is_placeholder` is true.

    **Example:**
    ```bash
    curl -X POST http://localhost:8000/api/v1/receipts/parse \\
      -H "Content-Type: application/json" \\
      -d '{"text": "Harbor Lane Cafe\\nBurger $12.99\\nFries $4.50"}'
    ```
    """
    try:
        start = time.perf_counter()
        receipt = parser.parse(request.text)
        elapsed_ms = int((time.perf_counter() - start) * 1000)

        logger.info(
            f"Parsed receipt: name={receipt.restaurant_name!r}, "
            f"items={len(receipt.items)}, placeholder={receipt.is_placeholder}"
        )

        return ParseResponse(
            status="success",
            receipt=receipt,
            processing_time_ms=elapsed_ms,
        )

    except Exception as e:
        logger.error(f"Error parsing receipt: {e}")
        logger.exception("Full traceback:")
        raise HTTPException(500, str(e))


@router.post(
    "/bills/split",
    response_model=SplitResponse,
    responses={400: {"model": ErrorResponse}},
    tags=["Bills"],
)
async def create_split(request: SplitRequest):
    """
    **Split a bill between people**

    Every item needs an assignment. Use `is_split` to share an item; add
    `quantities` to share a multi-quantity item by units. The tip is either
    `custom_tip` or `tip_percentage` of the subtotal and is shared equally.

    **Example:**
    ```bash
    curl -X POST http://localhost:8000/api/v1/bills/split \\
      -H "Content-Type: application/json" \\
      -d '{"items": [{"name": "Pizza", "price": 18.5}],
           "payees": [{"id": "a", "name": "Ann"}, {"id": "b", "name": "Ben"}],
           "assignments": [{"item_index": 0, "payee_ids": ["a", "b"], "is_split": true}],
           "tip_percentage": 15}'
    ```
    """
    split_config = parser.config.get('split', {})
    try:
        currency = get_currency(request.currency or split_config.get('default_currency', 'ZAR'))
        percentage = request.tip_percentage
        if percentage is None:
            percentage = split_config.get('default_tip_percentage', 10)

        summary = split_bill(
            request.items,
            request.payees,
            request.assignments,
            tip_percentage=percentage,
            custom_tip=request.custom_tip,
            currency=currency,
        )
        return SplitResponse(status="success", summary=summary)

    except (AssignmentError, KeyError) as e:
        logger.warning(f"Rejected split request: {e}")
        raise HTTPException(400, str(e.args[0]) if e.args else str(e))
    except Exception as e:
        logger.error(f"Error splitting bill: {e}")
        logger.exception("Full traceback:")
        raise HTTPException(500, str(e))


@router.get("/currencies", response_model=CurrencyListResponse, tags=["Bills"])
async def list_currencies():
    """Currencies available for bill summaries."""
    return CurrencyListResponse(currencies=CURRENCIES)


@router.get("/bills/options", response_model=SplitOptionsResponse, tags=["Bills"])
async def split_options():
    """Default currency and tip choices offered to clients."""
    split_config = parser.config.get('split', {})
    return SplitOptionsResponse(
        default_currency=split_config.get('default_currency', 'ZAR'),
        tip_options=split_config.get('tip_options', []),
        default_tip_percentage=split_config.get('default_tip_percentage', 10),
    )
