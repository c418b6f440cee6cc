"""
Weather provider client.

Fetches current conditions for a coordinate from weatherapi.com's
``current.json`` endpoint and keeps only the four fields the API returns.
"""

from typing import Any

import httpx
from pydantic import SecretStr
from pydantic import ValidationError as SchemaError

from app.core.exceptions import WeatherProviderError, WeatherTimeoutError
from app.schemas.weather import Coordinates, WeatherSnapshot
from app.utils.logging_config import get_logger

logger = get_logger(__name__)


def parse_current_weather(data: Any) -> WeatherSnapshot:
    """
    Pick the snapshot fields out of a ``current.json`` response.

    Raises:
        WeatherProviderError: If a field is missing or has the wrong type
    """
    try:
        current = data["current"]
        return WeatherSnapshot(
            last_updated=current["last_updated"],
            temp_c=current["temp_c"],
            text=current["condition"]["text"],
            feels_like_c=current["feelslike_c"],
        )
    except (KeyError, TypeError, SchemaError) as exc:
        logger.warning("Weather provider response did not match the expected schema")
        raise WeatherProviderError() from exc


class WeatherFetcher:
    """Fetches current weather for coordinates through the weather provider."""

    def __init__(self, client: httpx.AsyncClient, base_url: str, api_key: SecretStr, timeout: float):
        self.client = client
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self.timeout = timeout

    async def fetch(self, coordinates: Coordinates) -> WeatherSnapshot:
        """
        Get current weather for a location.

        Args:
            coordinates: Location to query

        Returns:
            WeatherSnapshot with the provider's values unmodified

        Raises:
            WeatherTimeoutError: If the provider does not answer in time
            WeatherProviderError: On transport errors, non-2xx responses,
                a non-JSON body or a schema mismatch
        """
        params = {
            "q": f"{coordinates.latitude},{coordinates.longitude}",
            "key": self._api_key.get_secret_value(),
        }
        try:
            response = await self.client.get(
                f"{self.base_url}/current.json", params=params, timeout=self.timeout
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning(f"Weather provider timed out after {self.timeout}s")
            raise WeatherTimeoutError() from exc
        except httpx.HTTPStatusError as exc:
            logger.warning(f"Weather provider returned {exc.response.status_code}")
            raise WeatherProviderError() from exc
        except httpx.HTTPError as exc:
            logger.warning(f"Weather request failed: {type(exc).__name__}")
            raise WeatherProviderError() from exc

        try:
            data = response.json()
        except ValueError as exc:
            logger.warning("Weather provider returned a non-JSON body")
            raise WeatherProviderError() from exc

        return parse_current_weather(data)
