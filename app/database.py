"""
Database configuration and session management.

This module contains SQLAlchemy engine, session configuration,
and database table creation utilities.
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from app.config import settings

# Configure database URL based on environment
database_url = settings.SQLALCHEMY_DATABASE_URI
if database_url.startswith("postgresql://"):
    database_url = database_url.replace("postgresql://", "postgresql+asyncpg://")

# SQLite connections are cheap; opening one per session keeps them off shared event loops
engine = create_async_engine(
    database_url,
    echo=settings.DEBUG,
    poolclass=NullPool if database_url.startswith("sqlite") else None,
)

# Create async session factory
async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# Base class for all database models
Base = declarative_base()


async def get_db() -> AsyncSession:
    """
    Dependency function to get database session.

    Yields an async database session and ensures proper cleanup.
    """
    async with async_session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def create_tables(bind=None):
    """
    Create all database tables that do not exist yet.

    This function is called during application startup.
    """
    async with (bind or engine).begin() as conn:
        # Import all models to ensure they are registered with Base
        import app.models  # noqa: F401
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables(bind=None):
    """
    Drop all database tables.

    WARNING: This will delete all data. Use with caution.
    """
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
