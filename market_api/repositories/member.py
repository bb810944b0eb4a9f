"""
Member Repository - Data access for members.

Lookups are exact matches; absence is reported as None/False, never as an
exception. Writes are flushed but never committed here: the calling
service owns the transaction.
"""

from sqlalchemy import select, exists
from sqlalchemy.orm import Session

from market_api.models import Member


class MemberRepository:
    """Credential store for Member rows."""

    def __init__(self, db: Session):
        self._db = db

    # =========================================================================
    # Lookups
    # =========================================================================

    def find_by_id(self, member_id: int) -> Member | None:
        return self._db.get(Member, member_id)

    def find_by_id_for_update(self, member_id: int) -> Member | None:
        """
        Load a member with a row lock (SELECT ... FOR UPDATE).

        Serializes concurrent read-modify-write flows on the same member.
        The lock is a no-op on SQLite.
        """
        return self._db.scalar(
            select(Member).where(Member.id == member_id).with_for_update()
        )

    def find_by_email(self, email: str) -> Member | None:
        return self._db.scalar(select(Member).where(Member.email == email))

    def find_by_provider(self, provider: str, provider_id: str) -> Member | None:
        """Find a social member by its provider-scoped identity."""
        return self._db.scalar(
            select(Member).where(
                Member.provider == provider,
                Member.provider_id == provider_id,
            )
        )

    def exists_by_email(self, email: str) -> bool:
        return bool(self._db.scalar(select(exists().where(Member.email == email))))

    def exists_by_phone_number(self, phone_number: str, exclude_id: int | None = None) -> bool:
        """
        Check whether a phone number is taken.

        Args:
            phone_number: Exact phone number to look for.
            exclude_id: Member to ignore (the one being updated).
        """
        condition = Member.phone_number == phone_number
        if exclude_id is not None:
            condition = condition & (Member.id != exclude_id)
        return bool(self._db.scalar(select(exists().where(condition))))

    # =========================================================================
    # Writes
    # =========================================================================

    def save(self, member: Member) -> Member:
        """Add (or re-add) the member and flush so it gets an id."""
        self._db.add(member)
        self._db.flush()
        return member

    def delete(self, member: Member) -> None:
        self._db.delete(member)
        self._db.flush()
