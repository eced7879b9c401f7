"""
Currency table used when presenting bill summaries
"""

from typing import Dict, List

from pydantic import BaseModel


class Currency(BaseModel):
    code: str
    symbol: str
    name: str
    country: str


CURRENCIES: List[Currency] = [
    Currency(code="ZAR", symbol="R",   name="South African Rand", country="South Africa"),
    Currency(code="USD", symbol="$",   name="US Dollar",          country="United States"),
    Currency(code="EUR", symbol="€",   name="Euro",               country="European Union"),
    Currency(code="GBP", symbol="£",   name="British Pound",      country="United Kingdom"),
    Currency(code="JPY", symbol="¥",   name="Japanese Yen",       country="Japan"),
    Currency(code="CAD", symbol="C$",  name="Canadian Dollar",    country="Canada"),
    Currency(code="AUD", symbol="A$",  name="Australian Dollar",  country="Australia"),
    Currency(code="CHF", symbol="CHF", name="Swiss Franc",        country="Switzerland"),
    Currency(code="CNY", symbol="¥",   name="Chinese Yuan",       country="China"),
    Currency(code="INR", symbol="₹",   name="Indian Rupee",       country="India"),
    Currency(code="BRL", symbol="R$",  name="Brazilian Real",     country="Brazil"),
    Currency(code="MXN", symbol="$",   name="Mexican Peso",       country="Mexico"),
    Currency(code="KRW", symbol="₩",   name="South Korean Won",   country="South Korea"),
    Currency(code="SGD", symbol="S$",  name="Singapore Dollar",   country="Singapore"),
    Currency(code="NZD", symbol="NZ$", name="New Zealand Dollar", country="New Zealand"),
    Currency(code="THB", symbol="฿",   name="Thai Baht",          country="Thailand"),
]

DEFAULT_CURRENCY = CURRENCIES[0]

_BY_CODE: Dict[str, Currency] = {c.code: c for c in CURRENCIES}


def get_currency(code: str) -> Currency:
    """Look up a currency by ISO code (case-insensitive). Raises KeyError if unknown."""
    try:
        return _BY_CODE[code.upper()]
    except KeyError:
        raise KeyError(f"Unknown currency code: {code}") from None


def format_money(amount: float, currency: Currency = DEFAULT_CURRENCY) -> str:
    """format_money(12.5, USD) → '$12.50'"""
    return f"{currency.symbol}{amount:.2f}"
