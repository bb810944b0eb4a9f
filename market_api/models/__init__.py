"""
SQLAlchemy ORM models.

All models are re-exported here so that `Base.metadata` knows every table
once this package is imported.
"""

from .base import Base, TimestampMixin
from .member import Member
from .product import Product

__all__ = [
    "Base",
    "TimestampMixin",
    "Member",
    "Product",
]
