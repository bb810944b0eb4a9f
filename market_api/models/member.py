"""
Member Model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import JSON, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import MemberRole
from .base import BigIntPK, Base, TimestampMixin

if TYPE_CHECKING:
    from .product import Product


class Member(TimestampMixin, Base):
    """
    A marketplace account, local or created through an OAuth provider.

    `password` always holds the bcrypt hash of the active credential and is
    the last entry of `pw_history` (oldest first, at most 3 entries).
    Inherits: created_at, updated_at from TimestampMixin.
    """

    __tablename__ = "member"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    # Local signup requires it; social members may not have one
    phone_number: Mapped[Optional[str]] = mapped_column(Text, nullable=True, unique=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    password: Mapped[str] = mapped_column(Text, nullable=False)
    pw_history: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    role: Mapped[str] = mapped_column(Text, nullable=False, default=MemberRole.CUSTOMER.value)
    provider: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    provider_id: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("provider", "provider_id", name="uq_member_provider_identity"),
    )

    # Relationships
    products: Mapped[list["Product"]] = relationship(back_populates="member")

    def __repr__(self) -> str:
        return f"<Member(id={self.id}, email='{self.email}', role='{self.role}')>"
