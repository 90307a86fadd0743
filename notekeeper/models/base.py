"""
SQLAlchemy Base Model.

Declarative base shared by all table mappings.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass
