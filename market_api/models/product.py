"""
Product Model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import BigInteger, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BigIntPK, Base, TimestampMixin

if TYPE_CHECKING:
    from .member import Member


class Product(TimestampMixin, Base):
    """
    A listing owned by the member who created it.
    Only the owner may update or delete it.
    """

    __tablename__ = "product"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    member_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("member.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    price: Mapped[int] = mapped_column(Integer, nullable=False)

    member: Mapped["Member"] = relationship(back_populates="products")

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', member_id={self.member_id})>"
