"""
Declarative base for SQLAlchemy models.

All HackArena tables register on Base.metadata.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all ORM models."""
