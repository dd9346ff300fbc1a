"""
CONTRACT 1: Market Data Gateway

Input: Currency pair ("BASE/QUOTE")
Output: MarketData (current + historical rate snapshots)

Snapshots mirror the CurrencyLayer payload: quotes are keyed by
SOURCE+CURRENCY (e.g. "EURUSD" for 1 EUR = X USD).
"""

from typing import Optional
from pydantic import BaseModel, Field


SUPPORTED_PAIRS = [
    "EUR/USD",
    "GBP/USD",
    "USD/JPY",
    "USD/CAD",
    "AUD/USD",
    "USD/CHF",
    "NZD/USD",
    "EUR/GBP",
    "EUR/JPY",
    "GBP/JPY",
    "USD/PLN",
    "USD/ZAR",
]


# =============================================================================
# RATE SNAPSHOTS
# =============================================================================


class RateSnapshot(BaseModel):
    """Exchange rates for one moment (live) or one day (historical)."""

    timestamp: int = Field(..., description="Epoch seconds")
    source: str = Field(..., min_length=1, description="Source currency code")
    quotes: dict[str, float] = Field(default_factory=dict)
    date: Optional[str] = Field(default=None, description="YYYY-MM-DD for historical")
    historical: bool = False

    def rate(self, pair_key: str) -> float:
        """Quote for a pair key, 0.0 when absent."""
        return self.quotes.get(pair_key) or 0.0

    class Config:
        json_schema_extra = {
            "example": {
                "timestamp": 1717430400,
                "source": "EUR",
                "quotes": {"EURUSD": 1.0871},
            }
        }


class MarketData(BaseModel):
    """
    Current and historical snapshots for one pair.
    Returned by: Market Data Service
    Consumed by: Signal Analyzer

    Historical is ordered oldest first; it may be partial or empty.
    """

    current: RateSnapshot
    historical: list[RateSnapshot] = Field(default_factory=list)


# =============================================================================
# PROVIDER STATUS
# =============================================================================


class APIStatus(BaseModel):
    """Result of probing the rate provider."""

    is_valid: bool
    is_connected: bool
    message: str
    error_code: Optional[str] = None
