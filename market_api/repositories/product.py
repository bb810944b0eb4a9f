"""
Product Repository - Data access for products.
"""

from dataclasses import dataclass
from typing import Sequence

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from market_api.models import Product
from shared.config.constants import Limits


@dataclass
class ProductFilters:
    """Filters for product listings."""

    # Name search (case-insensitive substring)
    name: str | None = None

    # Pagination
    limit: int = Limits.DEFAULT_PAGE_SIZE
    offset: int = 0

    def __post_init__(self):
        """Validate and normalize filters."""
        self.limit = min(max(1, self.limit), Limits.MAX_PAGE_SIZE)
        self.offset = max(0, self.offset)
        if self.name:
            self.name = self.name.strip()[:Limits.MAX_SEARCH_TERM_LENGTH] or None


class ProductRepository:
    """Repository for Product entities."""

    def __init__(self, db: Session):
        self._db = db

    def _base_query(self) -> Select:
        # Newest first, id as tie breaker for stable pages
        return select(Product).order_by(Product.created_at.desc(), Product.id.desc())

    def find_all(self, filters: ProductFilters | None = None) -> Sequence[Product]:
        filters = filters or ProductFilters()
        query = self._base_query()

        if filters.name:
            query = query.where(Product.name.ilike(f"%{filters.name}%"))

        query = query.offset(filters.offset).limit(filters.limit)
        return self._db.execute(query).scalars().all()

    def find_by_id(self, product_id: int) -> Product | None:
        return self._db.get(Product, product_id)

    def save(self, product: Product) -> Product:
        self._db.add(product)
        self._db.flush()
        return product

    def delete(self, product: Product) -> None:
        self._db.delete(product)
        self._db.flush()
