"""
Base database model with common fields and functionality.

This module contains the base SQLAlchemy model with the id and created_at
fields that other models inherit.
"""

from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.orm import declared_attr
from sqlalchemy.sql import func

from app.database import Base


class BaseModel(Base):
    """
    Base model with common database fields.

    All other models should inherit from this class to get
    automatic id and created_at fields.
    """

    __abstract__ = True

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    @declared_attr
    def created_at(cls):
        """Timestamp when record was created."""
        return Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        """String representation of the model instance."""
        return f"<{self.__class__.__name__}(id={self.id})>"
