"""
Weather router.

This module contains the endpoint returning current weather for the
caller's location, resolved from their IP address.
"""

from fastapi import APIRouter, Depends, Request

from app.core.exceptions import GeolocationUnavailableError
from app.core.network import AddressNormalizer
from app.dependencies.auth import get_current_user_id
from app.dependencies.providers import (
    get_address_normalizer,
    get_geolocation_resolver,
    get_weather_fetcher,
)
from app.schemas.base import MessageResponse
from app.schemas.weather import WeatherSnapshot
from app.services.geolocation import GeolocationResolver
from app.services.weather import WeatherFetcher
from app.utils.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(
    tags=["weather"],
    responses={401: {"model": MessageResponse, "description": "Unauthorized"}},
)


@router.get(
    "/weather",
    response_model=WeatherSnapshot,
    responses={
        502: {"model": MessageResponse, "description": "A provider failed"},
        504: {"model": MessageResponse, "description": "A provider timed out"},
    },
)
async def get_weather(
    request: Request,
    user_id: int = Depends(get_current_user_id),
    normalize: AddressNormalizer = Depends(get_address_normalizer),
    resolver: GeolocationResolver = Depends(get_geolocation_resolver),
    fetcher: WeatherFetcher = Depends(get_weather_fetcher),
):
    """
    Get current weather for the caller.

    The caller's IP is located with the geolocation provider, then the
    weather for those coordinates is fetched. Each provider is called once;
    failures are not retried.

    Requires a valid session token.

    Returns:
        WeatherSnapshot with last_updated, temp_c, text and feels_like_c

    Raises:
        AuthError: 401 if the token is missing, malformed, tampered or expired
        GeolocationUnavailableError, WeatherProviderError: 502
        GeolocationTimeoutError, WeatherTimeoutError: 504
    """
    if request.client is None:
        raise GeolocationUnavailableError("Could not fetch user IP.")

    address = normalize(request.client.host)
    if address != request.client.host:
        logger.debug(f"Substituted local address {request.client.host} with {address}")

    coordinates = await resolver.resolve(address)
    snapshot = await fetcher.fetch(coordinates)

    logger.info(f"Weather served: user_id={user_id}")
    return snapshot
