# Pydantic schemas package

from app.schemas.base import BaseSchema, MessageResponse
from app.schemas.auth import LoginRequest, RegisterRequest, RegisterResponse, TokenResponse
from app.schemas.weather import Coordinates, WeatherSnapshot

__all__ = [
    # Base schemas
    "BaseSchema", "MessageResponse",

    # Auth schemas
    "RegisterRequest", "RegisterResponse", "LoginRequest", "TokenResponse",

    # Weather schemas
    "Coordinates", "WeatherSnapshot",
]
