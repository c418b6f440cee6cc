"""
External provider dependencies.

The geolocation resolver, the weather fetcher and the address normalizer
are separate dependencies so each can be swapped out through
``app.dependency_overrides`` without touching the request pipeline.
"""

import httpx
from fastapi import Depends, Request

from app.config import settings
from app.core.network import AddressNormalizer
from app.services.geolocation import GeolocationResolver
from app.services.weather import WeatherFetcher


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared HTTP client opened in the application lifespan."""
    return request.app.state.http_client


def get_address_normalizer(request: Request) -> AddressNormalizer:
    """Normalization strategy selected at startup from ENVIRONMENT."""
    return request.app.state.address_normalizer


def get_geolocation_resolver(
    client: httpx.AsyncClient = Depends(get_http_client),
) -> GeolocationResolver:
    return GeolocationResolver(
        client,
        base_url=settings.GEOLOCATION_API_URL,
        timeout=settings.GEOLOCATION_TIMEOUT,
    )


def get_weather_fetcher(
    client: httpx.AsyncClient = Depends(get_http_client),
) -> WeatherFetcher:
    return WeatherFetcher(
        client,
        base_url=settings.WEATHER_API_URL,
        api_key=settings.WEATHER_API_KEY,
        timeout=settings.WEATHER_TIMEOUT,
    )
