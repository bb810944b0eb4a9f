"""
Repository layer: data access for members and products.

Usage:
    from market_api.repositories import MemberRepository

    repo = MemberRepository(db)
    member = repo.find_by_email(email)
"""

from .member import MemberRepository
from .product import ProductRepository, ProductFilters

__all__ = [
    "MemberRepository",
    "ProductRepository",
    "ProductFilters",
]
