"""
Domain Services - application layer.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from market_api.services.domain import MemberService

    # In router
    service = MemberService(db)
    member = service.get_member(member_id)
"""

from .member_service import MemberService
from .product_service import ProductService

__all__ = [
    "MemberService",
    "ProductService",
]
