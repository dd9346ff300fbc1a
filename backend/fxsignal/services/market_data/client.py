"""
CurrencyLayer API Client

Thin async wrapper over the /live and /historical endpoints.
Quotes come back keyed SOURCE+CURRENCY, e.g. {"EURUSD": 1.0871}.
"""

import asyncio
import logging
from typing import Any, Optional

import aiohttp
import pydantic

from fxsignal.core.config import settings
from fxsignal.schemas.market import APIStatus, RateSnapshot
from fxsignal.services.base import ExternalAPIError, RateLimitError

logger = logging.getLogger(__name__)

SERVICE_NAME = "CurrencyLayer"

# Provider error codes
INVALID_API_KEY = "101"
INACTIVE_USER = "102"
INVALID_FUNCTION = "103"
USAGE_LIMIT_REACHED = "104"


class CurrencyLayerClient:
    """
    CurrencyLayer REST client.

    One aiohttp session is created lazily and reused until close().
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self._api_key = api_key if api_key is not None else settings.currencylayer_api_key
        self._base_url = (base_url or settings.currencylayer_base_url).rstrip("/")
        self._timeout = timeout or settings.currencylayer_timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout),
                headers={"Accept": "application/json"},
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def _request(self, endpoint: str, params: dict[str, Any]) -> dict[str, Any]:
        """
        GET an endpoint and return the decoded payload.

        Raises:
            RateLimitError: monthly request allowance used up
            ExternalAPIError: transport failure or success=false payload
        """
        session = await self._ensure_session()
        url = f"{self._base_url}/{endpoint}"
        query = {"access_key": self._api_key or "", "format": 1, **params}

        try:
            async with session.get(url, params=query) as response:
                status = response.status
                payload = await response.json(content_type=None)
        except asyncio.TimeoutError as e:
            raise ExternalAPIError(
                SERVICE_NAME, "API request timeout. Please try again."
            ) from e
        except aiohttp.ClientError as e:
            raise ExternalAPIError(
                SERVICE_NAME,
                f"No response from API server. Please check your internet connection. ({e})",
            ) from e

        if not isinstance(payload, dict):
            raise ExternalAPIError(
                SERVICE_NAME,
                f"API returned error: {status}",
                details={"endpoint": endpoint, "status": status},
            )

        if not payload.get("success"):
            error = payload.get("error") or {}
            code = str(error["code"]) if error.get("code") is not None else None
            info = error.get("info") or "Unknown API error"
            error_class = RateLimitError if code == USAGE_LIMIT_REACHED else ExternalAPIError
            raise error_class(
                SERVICE_NAME,
                info,
                details={"endpoint": endpoint, "status": status},
                code=code,
            )

        return payload

    @staticmethod
    def _parse_snapshot(endpoint: str, payload: dict[str, Any]) -> RateSnapshot:
        try:
            return RateSnapshot.model_validate(payload)
        except pydantic.ValidationError as e:
            raise ExternalAPIError(
                SERVICE_NAME,
                "Malformed response from API",
                details={"endpoint": endpoint},
            ) from e

    async def get_live_rates(
        self, currencies: list[str], source: str = "USD"
    ) -> RateSnapshot:
        """Get live exchange rates for `currencies` against `source`."""
        payload = await self._request(
            "live", {"currencies": ",".join(currencies), "source": source}
        )
        return self._parse_snapshot("live", payload)

    async def get_historical_rates(
        self, date: str, currencies: list[str], source: str = "USD"
    ) -> RateSnapshot:
        """Get end-of-day rates for a YYYY-MM-DD date."""
        payload = await self._request(
            "historical",
            {"date": date, "currencies": ",".join(currencies), "source": source},
        )
        snapshot = self._parse_snapshot("historical", payload)
        if snapshot.date is None:
            snapshot = snapshot.model_copy(update={"date": date, "historical": True})
        return snapshot

    async def validate_api(self) -> APIStatus:
        """
        Probe the provider with EUR from USD.

        Never raises; every failure is reported in the returned status.
        """
        try:
            payload = await self._request("live", {"currencies": "EUR", "source": "USD"})
        except ExternalAPIError as e:
            logger.error(f"API validation error: {e}")
            if e.code in (INVALID_API_KEY, INACTIVE_USER):
                message = f"API Key Error: {e.message}. Please check your API key."
            elif e.code == USAGE_LIMIT_REACHED:
                message = "Monthly API request limit reached. Please upgrade your plan."
            elif e.code == INVALID_FUNCTION:
                message = "Invalid API function. Please contact support."
            else:
                message = e.message
            return APIStatus(
                is_valid=False,
                is_connected=False,
                message=message,
                error_code=e.code,
            )

        if not payload.get("quotes"):
            return APIStatus(
                is_valid=False,
                is_connected=True,
                message="API connected but returned empty data",
            )

        return APIStatus(
            is_valid=True,
            is_connected=True,
            message="API is valid and connected successfully",
        )
