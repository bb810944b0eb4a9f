"""
Product router.
Public listing; writes require a member token and ownership.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from market_api.services.domain import ProductService
from shared.config.constants import Limits
from shared.infrastructure.db import get_db
from shared.security.auth import MemberContext, current_member_context
from shared.utils.schemas import ProductInput, ProductOutput


router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=list[ProductOutput])
def list_products(
    name: str | None = Query(default=None, max_length=Limits.MAX_SEARCH_TERM_LENGTH),
    limit: int = Query(default=Limits.DEFAULT_PAGE_SIZE, ge=1, le=Limits.MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
) -> list[ProductOutput]:
    return ProductService(db).list_products(name=name, limit=limit, offset=offset)


@router.get("/{product_id}", response_model=ProductOutput)
def get_product(product_id: int, db: Session = Depends(get_db)) -> ProductOutput:
    return ProductService(db).get_product(product_id)


@router.post("", response_model=ProductOutput, status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductInput,
    ctx: MemberContext = Depends(current_member_context),
    db: Session = Depends(get_db),
) -> ProductOutput:
    return ProductService(db).create_product(ctx, body)


@router.put("/{product_id}", response_model=ProductOutput)
def update_product(
    product_id: int,
    body: ProductInput,
    ctx: MemberContext = Depends(current_member_context),
    db: Session = Depends(get_db),
) -> ProductOutput:
    """Replace a product. Only its owner may do this (403 otherwise)."""
    return ProductService(db).update_product(ctx, product_id, body)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: int,
    ctx: MemberContext = Depends(current_member_context),
    db: Session = Depends(get_db),
) -> None:
    """Delete a product. Only its owner may do this (403 otherwise)."""
    ProductService(db).delete_product(ctx, product_id)
