import logging
from typing import Optional, Tuple
from urllib.parse import urlencode

import httpx

from skycast.services.normalize import error_message

logger = logging.getLogger(__name__)

VALID_UNITS = ("metric", "imperial")


class FetchError(Exception):
    """A request that produced no usable body. `message` is safe to show to users."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class OpenWeatherClient:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout_seconds
        self.transport = transport

    def build_url(self, endpoint: str, city: str, units: str) -> str:
        city = (city or "").strip()
        if not city:
            raise ValueError("City name is required")
        if units not in VALID_UNITS:
            raise ValueError(f"Unsupported units: {units!r}")
        query = urlencode({"q": city, "units": units, "appid": self.api_key})
        return f"{self.base_url}/{endpoint}?{query}"

    async def fetch(self, url: str) -> Tuple[int, str]:
        """GET `url` and return (status code, full body text)."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.get(url)
        except httpx.TimeoutException as exc:
            raise FetchError(f"Request timed out after {self.timeout:g}s") from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"Network error: {exc}") from exc
        logger.debug("GET %s -> %d", r.request.url.copy_remove_param("appid"), r.status_code)
        return r.status_code, r.text

    async def get_current_body(self, city: str, units: str) -> str:
        return await self._get_body("weather", city, units)

    async def get_forecast_body(self, city: str, units: str) -> str:
        # 5 day / 3 hour forecast
        return await self._get_body("forecast", city, units, label="forecast")

    async def _get_body(self, endpoint: str, city: str, units: str, label: str = "") -> str:
        status, body = await self.fetch(self.build_url(endpoint, city, units))
        if status != 200:
            msg = error_message(body, status, label)
            logger.warning("OpenWeather %s for %r returned %d: %s", endpoint, city, status, msg)
            raise FetchError(msg, status_code=status)
        return body
