"""
Product Service.

Listings are public; creating requires a member token and updating or
deleting requires being the member who created the product.

Usage:
    from market_api.services.domain import ProductService

    service = ProductService(db)
    product = service.create_product(ctx, ProductInput(name="Lamp", price=12000))
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from market_api.models import Product
from market_api.repositories import MemberRepository, ProductFilters, ProductRepository
from market_api.services.permissions import require_owner
from shared.config.constants import Limits
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.security.auth import MemberContext
from shared.utils.exceptions import NotFoundError
from shared.utils.schemas import ProductInput, ProductOutput

logger = get_logger(__name__)


class ProductService:
    """Service for product management."""

    def __init__(self, db: Session):
        self._db = db
        self._repo = ProductRepository(db)
        self._members = MemberRepository(db)
        self._entity_name = "Product"

    # =========================================================================
    # Query Methods
    # =========================================================================

    def list_products(
        self,
        name: str | None = None,
        limit: int = Limits.DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> list[ProductOutput]:
        """List products, newest first, optionally filtered by name."""
        filters = ProductFilters(name=name, limit=limit, offset=offset)
        return [self._to_output(p) for p in self._repo.find_all(filters)]

    def get_product(self, product_id: int) -> ProductOutput:
        return self._to_output(self._get_or_raise(product_id))

    # =========================================================================
    # Write Methods
    # =========================================================================

    def create_product(self, ctx: MemberContext, data: ProductInput) -> ProductOutput:
        """
        Create a product owned by the caller.

        Raises:
            NotFoundError: If the caller's member no longer exists.
        """
        if self._members.find_by_id(ctx.member_id) is None:
            raise NotFoundError("Member", ctx.member_id)

        product = Product(member_id=ctx.member_id, **data.model_dump())
        self._repo.save(product)
        safe_commit(self._db)
        self._db.refresh(product)

        logger.info("Product created", product_id=product.id, member_id=ctx.member_id)
        return self._to_output(product)

    def update_product(
        self,
        ctx: MemberContext,
        product_id: int,
        data: ProductInput,
    ) -> ProductOutput:
        """
        Replace a product's fields.

        Raises:
            NotFoundError: If the product does not exist.
            ForbiddenError: If the caller is not the owner.
        """
        product = self._get_or_raise(product_id)
        require_owner(ctx, product.member_id, action="update this product")

        for key, value in data.model_dump().items():
            setattr(product, key, value)
        safe_commit(self._db)
        self._db.refresh(product)

        logger.info("Product updated", product_id=product.id, member_id=ctx.member_id)
        return self._to_output(product)

    def delete_product(self, ctx: MemberContext, product_id: int) -> None:
        """
        Delete a product.

        Raises:
            NotFoundError: If the product does not exist.
            ForbiddenError: If the caller is not the owner.
        """
        product = self._get_or_raise(product_id)
        require_owner(ctx, product.member_id, action="delete this product")

        self._repo.delete(product)
        safe_commit(self._db)
        logger.info("Product deleted", product_id=product_id, member_id=ctx.member_id)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _get_or_raise(self, product_id: int) -> Product:
        product = self._repo.find_by_id(product_id)
        if product is None:
            raise NotFoundError(self._entity_name, product_id)
        return product

    def _to_output(self, product: Product) -> ProductOutput:
        return ProductOutput.model_validate(product)
