"""
Weather schemas.

This module contains Pydantic schemas for the coordinates returned by the
geolocation provider and the current weather snapshot returned to callers.
"""

from pydantic import ConfigDict, Field

from app.schemas.base import BaseSchema


class Coordinates(BaseSchema):
    """Approximate location of an IP address."""
    latitude: float = Field(ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(ge=-180, le=180, allow_inf_nan=False)


class WeatherSnapshot(BaseSchema):
    """
    Current conditions, passed through from the weather provider unmodified.

    Strict, so a provider value of the wrong type (a numeric string, a bool)
    is a schema mismatch instead of being coerced.
    """

    model_config = ConfigDict(from_attributes=True, strict=True)

    last_updated: str = Field(description="Provider's local time of the last update")
    temp_c: float = Field(description="Temperature in Celsius")
    text: str = Field(description="Condition text, e.g. 'Sunny'")
    feels_like_c: float = Field(description="Feels-like temperature in Celsius")
