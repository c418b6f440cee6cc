"""
Geolocation provider client.

Resolves an IP address to approximate coordinates with ipapi.co's
``/<ip>/latlong/`` endpoint, which answers with plain text ``"<lat>,<lon>"``.
One attempt per call; failures are reported, never retried.
"""

import httpx
from pydantic import ValidationError as SchemaError

from app.core.exceptions import GeolocationTimeoutError, GeolocationUnavailableError
from app.schemas.weather import Coordinates
from app.utils.logging_config import get_logger

logger = get_logger(__name__)


def parse_latlong(body: str) -> Coordinates:
    """
    Parse a ``"<lat>,<lon>"`` response body.

    Raises:
        GeolocationUnavailableError: If the body is not two valid coordinates
    """
    parts = body.strip().split(",")
    if len(parts) != 2:
        raise GeolocationUnavailableError()
    try:
        return Coordinates(latitude=float(parts[0]), longitude=float(parts[1]))
    except (ValueError, SchemaError) as exc:
        raise GeolocationUnavailableError() from exc


class GeolocationResolver:
    """Maps caller addresses to coordinates through the geolocation provider."""

    def __init__(self, client: httpx.AsyncClient, base_url: str, timeout: float):
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def resolve(self, ip: str) -> Coordinates:
        """
        Look up coordinates for an address.

        Args:
            ip: Address to locate, already normalized

        Returns:
            Coordinates of the address

        Raises:
            GeolocationTimeoutError: If the provider does not answer in time
            GeolocationUnavailableError: On transport errors, non-2xx responses
                or an unparsable body
        """
        url = f"{self.base_url}/{ip}/latlong/"
        try:
            response = await self.client.get(url, timeout=self.timeout)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning(f"Geolocation provider timed out after {self.timeout}s")
            raise GeolocationTimeoutError() from exc
        except httpx.HTTPStatusError as exc:
            logger.warning(f"Geolocation provider returned {exc.response.status_code}")
            raise GeolocationUnavailableError() from exc
        except httpx.HTTPError as exc:
            logger.warning(f"Geolocation request failed: {type(exc).__name__}")
            raise GeolocationUnavailableError() from exc

        coordinates = parse_latlong(response.text)
        logger.debug(f"Located {ip} at {coordinates.latitude},{coordinates.longitude}")
        return coordinates
