"""
Price series assembly from rate snapshots.

Shared by both analyzers: resolves the pair key against the current
snapshot and merges historical days + the live rate into one series.
"""

from dataclasses import dataclass, field
from typing import Sequence

from fxsignal.schemas.indicators import PricePoint
from fxsignal.schemas.market import RateSnapshot
from fxsignal.services.base import (
    InsufficientDataError,
    InvalidCurrencyPairError,
    MissingRateError,
)

SERVICE_NAME = "SignalAnalyzer"


@dataclass
class PriceSeries:
    """Rate points ordered oldest first, timestamps in epoch ms."""

    pair_key: str
    points: list[PricePoint] = field(default_factory=list)

    @property
    def prices(self) -> list[float]:
        return [point.price for point in self.points]

    @property
    def timestamps(self) -> list[int]:
        return [point.timestamp for point in self.points]

    @property
    def current_price(self) -> float:
        return self.points[-1].price

    @property
    def oldest_price(self) -> float:
        return self.points[0].price

    def price_change(self) -> tuple[float, float]:
        """Returns: (absolute change, percent change) versus the oldest price."""
        change = self.current_price - self.oldest_price
        percent = (change / self.oldest_price) * 100 if self.oldest_price > 0 else 0.0
        return change, percent


def split_pair(currency_pair: str) -> tuple[str, str]:
    """Split "BASE/QUOTE" into its currency codes."""
    if not currency_pair or "/" not in currency_pair:
        raise InvalidCurrencyPairError(
            SERVICE_NAME,
            f"Invalid currency pair format '{currency_pair}'. "
            "Expected format: BASE/QUOTE (e.g., EUR/USD)",
        )

    base, quote = currency_pair.split("/", 1)
    base, quote = base.strip().upper(), quote.strip().upper()
    if not base or not quote:
        raise InvalidCurrencyPairError(
            SERVICE_NAME,
            f"Invalid currency pair '{currency_pair}'. "
            "Both base and quote currencies are required.",
        )
    return base, quote


def resolve_pair_key(currency_pair: str, current: RateSnapshot) -> str:
    """Quote key is the snapshot's source currency + the pair's quote currency."""
    _, quote = split_pair(currency_pair)
    return f"{current.source}{quote}"


def build_price_series(
    currency_pair: str,
    current: RateSnapshot,
    historical: Sequence[RateSnapshot],
) -> PriceSeries:
    """
    Merge historical days (as ordered by the caller) and the current rate.

    Days without a usable quote for the pair are skipped.

    Raises:
        MissingRateError: current rate absent or zero
        InsufficientDataError: fewer than 2 points in total
    """
    pair_key = resolve_pair_key(currency_pair, current)

    current_price = current.rate(pair_key)
    if current_price == 0:
        raise MissingRateError(
            SERVICE_NAME,
            f"Unable to get current price for {currency_pair}. Invalid quote key: {pair_key}",
            details={"pair_key": pair_key, "available": sorted(current.quotes)},
        )

    series = PriceSeries(pair_key=pair_key)
    for day in historical:
        price = day.rate(pair_key)
        if price:
            series.points.append(PricePoint(price=price, timestamp=day.timestamp * 1000))

    series.points.append(
        PricePoint(price=current_price, timestamp=current.timestamp * 1000)
    )

    if len(series.points) < 2:
        raise InsufficientDataError(
            SERVICE_NAME,
            "Insufficient historical data for analysis. Need at least 2 data points.",
            details={"points": len(series.points)},
        )

    return series
