"""
Social Member Service - resolves an OAuth profile to a local member.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from market_api.models import Member
from market_api.repositories import MemberRepository
from shared.config.constants import MemberRole
from shared.config.logging import oauth_logger as logger, mask_email
from shared.security import password_history
from shared.security.password import generate_placeholder_password, hash_password
from shared.utils.exceptions import AlreadyExistsError
from shared.utils.schemas import OAuthUserInfo


class SocialMemberService:
    """
    Business rules:
    - A social member is identified by (provider, external id), not by email
    - First login creates a CUSTOMER member with an unusable random password
    - An email already owned by another member is a conflict, never a merge
    - Later logins refresh the display name from the provider
    """

    def __init__(self, db: Session):
        self._db = db
        self._repo = MemberRepository(db)

    def register_if_absent(self, user_info: OAuthUserInfo) -> Member:
        """
        Return the member linked to this provider identity, creating it if needed.

        Raises:
            AlreadyExistsError: If the provider's email belongs to a different member.
        """
        member = self._repo.find_by_provider(user_info.provider, user_info.external_id)
        if member is not None:
            if member.name != user_info.name:
                member.name = user_info.name
                self._commit(user_info)
                self._db.refresh(member)
            return member

        if self._repo.exists_by_email(user_info.email):
            raise AlreadyExistsError(
                "email",
                provider=user_info.provider,
                email_masked=mask_email(user_info.email),
            )

        placeholder = hash_password(generate_placeholder_password())
        member = Member(
            email=user_info.email,
            name=user_info.name,
            phone_number=None,
            password=placeholder,
            pw_history=password_history.new_history(placeholder),
            role=MemberRole.CUSTOMER.value,
            provider=user_info.provider,
            provider_id=user_info.external_id,
        )
        self._commit(user_info, member)
        self._db.refresh(member)

        logger.info(
            "Social member created",
            member_id=member.id,
            provider=user_info.provider,
            email=mask_email(user_info.email),
        )
        return member

    def _commit(self, user_info: OAuthUserInfo, new_member: Member | None = None) -> None:
        try:
            if new_member is not None:
                self._repo.save(new_member)
            self._db.commit()
        except IntegrityError:
            # Concurrent first login with the same identity or email
            self._db.rollback()
            raise AlreadyExistsError("email", provider=user_info.provider)
