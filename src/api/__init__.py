"""
API Package
Contains FastAPI routes and models
"""

from api.routes import router
from api.models import (
    ParseRequest,
    ParseResponse,
    SplitRequest,
    SplitResponse,
    CurrencyListResponse,
    SplitOptionsResponse,
    HealthResponse,
    ErrorResponse
)

__all__ = [
    'router',
    'ParseRequest',
    'ParseResponse',
    'SplitRequest',
    'SplitResponse',
    'CurrencyListResponse',
    'SplitOptionsResponse',
    'HealthResponse',
    'ErrorResponse'
]
