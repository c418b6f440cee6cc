"""
User database model.

This module contains the User model for session authentication.
"""

from sqlalchemy import Column, String

from app.models.base import BaseModel


class User(BaseModel):
    """
    Registered user.

    Username (case-sensitive) and email are each unique; the unique indexes
    are what reject duplicate registrations, including concurrent ones.
    Rows are never updated or deleted by the service.
    """

    __tablename__ = "users"

    username = Column(String(24), unique=True, index=True, nullable=False)
    email = Column(String(254), unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
