"""
Shared test fixtures.

Settings are read from the environment when app.config is first imported,
so the test environment is set up here before anything from app is loaded.
"""

import os
import tempfile

_TEST_DIR = tempfile.mkdtemp(prefix="weather_api_tests_")

os.environ["ENVIRONMENT"] = "testing"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["WEATHER_API_KEY"] = "test-weather-api-key"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_DIR"] = os.path.join(_TEST_DIR, "logs")
os.environ["SQLALCHEMY_DATABASE_URI"] = f"sqlite+aiosqlite:///{os.path.join(_TEST_DIR, 'app.db')}"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from app.database import create_tables, get_db  # noqa: E402
from app.dependencies.providers import get_geolocation_resolver, get_weather_fetcher  # noqa: E402
from app.main import app  # noqa: E402
from app.schemas.weather import Coordinates, WeatherSnapshot  # noqa: E402
from app.utils.security import create_access_token  # noqa: E402


class FakeGeolocationResolver:
    """Records the addresses it was asked to locate."""

    def __init__(self, coordinates=None, error=None):
        self.coordinates = coordinates or Coordinates(latitude=41.0082, longitude=28.9784)
        self.error = error
        self.addresses = []

    async def resolve(self, ip):
        self.addresses.append(ip)
        if self.error is not None:
            raise self.error
        return self.coordinates


class FakeWeatherFetcher:
    """Records the coordinates it was asked about."""

    def __init__(self, snapshot=None, error=None):
        self.snapshot = snapshot or WeatherSnapshot(
            last_updated="2024-01-01 12:00",
            temp_c=20.0,
            text="Sunny",
            feels_like_c=19.0,
        )
        self.error = error
        self.requests = []

    async def fetch(self, coordinates):
        self.requests.append(coordinates)
        if self.error is not None:
            raise self.error
        return self.snapshot


def _test_engine(path):
    return create_async_engine(f"sqlite+aiosqlite:///{path}", poolclass=NullPool)


@pytest.fixture
async def db(tmp_path):
    """Session on a fresh test database."""
    engine = _test_engine(tmp_path / "test_crud.db")
    await create_tables(engine)

    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def client(tmp_path):
    """Test client backed by a fresh test database."""
    engine = _test_engine(tmp_path / "test_api.db")
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        test_client.portal.call(create_tables, engine)
        yield test_client
        test_client.portal.call(engine.dispose)

    app.dependency_overrides.clear()


@pytest.fixture
def geolocation():
    """Fake geolocation provider wired into the app."""
    resolver = FakeGeolocationResolver()
    app.dependency_overrides[get_geolocation_resolver] = lambda: resolver
    return resolver


@pytest.fixture
def weather():
    """Fake weather provider wired into the app."""
    fetcher = FakeWeatherFetcher()
    app.dependency_overrides[get_weather_fetcher] = lambda: fetcher
    return fetcher


@pytest.fixture
def auth_headers():
    """Bearer header with a valid session token."""
    return {"Authorization": f"Bearer {create_access_token(1)}"}


@pytest.fixture
def registered_user(client):
    """Register a user through the API and return its credentials."""
    credentials = {
        "username": "weather.fan_01",
        "email": "weather.fan@example.com",
        "password": "Sunny-Day!2024",
    }
    response = client.post("/api/register", json=credentials)
    assert response.status_code == 201
    return {**credentials, "user_id": response.json()["user_id"]}
