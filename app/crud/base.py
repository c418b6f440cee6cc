"""
Base CRUD operations.

This module contains the base repository class with the store error
translation that specific model CRUD classes inherit.
"""

from typing import Generic, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import StoreUnavailableError
from app.database import Base
from app.utils.logging_config import get_logger

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class CRUDBase(Generic[ModelType]):
    """
    Base CRUD operations class.

    Provides behaviour shared by specific model CRUD classes.
    """

    def __init__(self, model: Type[ModelType]):
        """
        Initialize CRUD operations for a specific model.

        Args:
            model: The SQLAlchemy model class
        """
        self.model = model

    def _store_unavailable(self, exc: SQLAlchemyError) -> StoreUnavailableError:
        logger.error(f"{self.model.__name__} store error: {type(exc).__name__}")
        return StoreUnavailableError()
