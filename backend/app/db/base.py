"""
SQLAlchemy declarative base for calendar models.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all calendar engine models."""
    pass
