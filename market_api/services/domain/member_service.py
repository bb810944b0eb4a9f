"""
Member Service - identity and credential management.

Handles:
- Local signup with role parsing and uniqueness checks
- Email/password login and token issuance
- Partial profile updates with password reuse prevention
- Password step-up checks
- Ownership matching for other domains

Usage:
    from market_api.services.domain import MemberService

    service = MemberService(db)
    member = service.signup(email, raw_password, name, phone_number, role)
    token = service.login(email, raw_password)
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from market_api.models import Member
from market_api.repositories import MemberRepository
from market_api.services.permissions import match_member_id
from shared.config.constants import MemberRole
from shared.config.logging import get_logger, mask_email, mask_phone, audit_auth_event
from shared.security import password_history
from shared.security.auth import MemberContext, access_token_ttl_seconds, generate_access_token
from shared.security.password import hash_password, verify_password
from shared.utils.exceptions import (
    AlreadyExistsError,
    InvalidArgumentError,
    InvalidCredentialsError,
    NotFoundError,
    ReusedCredentialError,
)
from shared.utils.schemas import LoginResponse, MemberOutput

logger = get_logger(__name__)


class MemberService:
    """
    Service for member identity.

    Business rules:
    - Email and phone number are unique across members
    - Role is fixed at signup (BUSINESS or CUSTOMER)
    - The last PASSWORD_HISTORY_SIZE passwords cannot be reused
    - Every write commits once; any failure rolls the whole request back
    """

    def __init__(self, db: Session):
        self._db = db
        self._repo = MemberRepository(db)
        self._entity_name = "Member"

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_member(self, member_id: int) -> MemberOutput:
        """
        Get a member by ID.

        Raises:
            NotFoundError: If the member does not exist.
        """
        return self._to_output(self._get_or_raise(member_id))

    def get_current_member(self, ctx: MemberContext) -> MemberOutput:
        """Get the member the caller's token was issued for."""
        return self.get_member(ctx.member_id)

    def match_member_id(self, ctx: MemberContext | None, owner_id: int | None) -> bool:
        """True only if the caller is the owner of ``owner_id``'s resource."""
        return match_member_id(ctx, owner_id)

    # =========================================================================
    # Signup / Login
    # =========================================================================

    def signup(
        self,
        email: str,
        raw_password: str,
        name: str,
        phone_number: str,
        role: str | MemberRole,
    ) -> MemberOutput:
        """
        Register a local member.

        Returns:
            MemberOutput DTO of the new member.

        Raises:
            InvalidArgumentError: If the role is not recognized or the password
                exceeds the bcrypt limit.
            AlreadyExistsError: If the email or phone number is taken.
        """
        try:
            parsed_role = MemberRole.parse(role)
        except ValueError:
            raise InvalidArgumentError("role", role, reason="expected BUSINESS or CUSTOMER")

        if self._repo.exists_by_email(email):
            raise AlreadyExistsError("email", email_masked=mask_email(email))
        if self._repo.exists_by_phone_number(phone_number):
            raise AlreadyExistsError("phone number")

        hashed = hash_password(raw_password)
        member = Member(
            email=email,
            name=name,
            phone_number=phone_number,
            password=hashed,
            pw_history=password_history.new_history(hashed),
            role=parsed_role.value,
        )

        try:
            self._repo.save(member)
            self._db.commit()
        except IntegrityError:
            # Lost a race against a concurrent signup with the same email/phone
            self._db.rollback()
            raise self._conflict_for(email)

        self._db.refresh(member)
        logger.info("Member created", member_id=member.id, role=member.role)
        audit_auth_event("SIGNUP", user_id=member.id, email=email)
        return self._to_output(member)

    def login(self, email: str, raw_password: str) -> LoginResponse:
        """
        Verify credentials and issue an access token.

        Unknown email and wrong password fail identically.

        Raises:
            InvalidCredentialsError: On any credential mismatch.
        """
        member = self._repo.find_by_email(email)
        if member is None:
            audit_auth_event("LOGIN", email=email, success=False, reason="unknown_email")
            raise InvalidCredentialsError()

        if not verify_password(raw_password, member.password):
            audit_auth_event(
                "LOGIN", user_id=member.id, email=email, success=False, reason="wrong_password"
            )
            raise InvalidCredentialsError()

        audit_auth_event("LOGIN", user_id=member.id, email=email)
        return LoginResponse(
            access_token=generate_access_token(member.id, member.email),
            expires_in=access_token_ttl_seconds(),
            member=self._to_output(member),
        )

    # =========================================================================
    # Update Methods
    # =========================================================================

    def update_member(
        self,
        member_id: int,
        name: str | None = None,
        phone_number: str | None = None,
        password: str | None = None,
    ) -> MemberOutput:
        """
        Partially update a member. ``None`` leaves a field untouched.

        The whole request is validated before anything is changed, so a
        rejected password never leaves a half-applied name or phone update.

        Raises:
            NotFoundError: If the member does not exist.
            AlreadyExistsError: If the phone number belongs to another member.
            ReusedCredentialError: If the password is in the history.
            InvalidArgumentError: If the password exceeds the bcrypt limit.
        """
        try:
            member = self._repo.find_by_id_for_update(member_id)
            if member is None:
                raise NotFoundError(self._entity_name, member_id)

            if phone_number is not None and phone_number != member.phone_number:
                if self._repo.exists_by_phone_number(phone_number, exclude_id=member.id):
                    raise AlreadyExistsError(
                        "phone number", member_id=member.id, phone=mask_phone(phone_number)
                    )

            if password is not None:
                try:
                    password_history.check_reuse(
                        member.pw_history, password, member_id=member.id
                    )
                except ReusedCredentialError:
                    audit_auth_event(
                        "PASSWORD_REUSE_REJECTED",
                        user_id=member.id,
                        email=member.email,
                        success=False,
                    )
                    raise

                hashed = hash_password(password)

            if name is not None:
                member.name = name
            if phone_number is not None:
                member.phone_number = phone_number
            if password is not None:
                member.password = hashed
                member.pw_history = password_history.insert(member.pw_history, hashed)

            self._db.commit()
        except IntegrityError:
            self._db.rollback()
            raise AlreadyExistsError("phone number", member_id=member_id)
        except Exception:
            self._db.rollback()
            raise

        self._db.refresh(member)
        logger.info(
            "Member updated",
            member_id=member.id,
            name_changed=name is not None,
            phone_changed=phone_number is not None,
            password_changed=password is not None,
        )
        if password is not None:
            audit_auth_event("PASSWORD_CHANGE", user_id=member.id, email=member.email)
        return self._to_output(member)

    def password_check(self, member_id: int, raw_password: str) -> None:
        """
        Confirm the member's current password.

        Raises:
            NotFoundError: If the member does not exist.
            InvalidCredentialsError: If the password does not match.
        """
        member = self._get_or_raise(member_id)
        if not verify_password(raw_password, member.password):
            raise InvalidCredentialsError("Password does not match", member_id=member_id)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _get_or_raise(self, member_id: int) -> Member:
        member = self._repo.find_by_id(member_id)
        if member is None:
            raise NotFoundError(self._entity_name, member_id)
        return member

    def _conflict_for(self, email: str) -> AlreadyExistsError:
        if self._repo.exists_by_email(email):
            return AlreadyExistsError("email", email_masked=mask_email(email))
        return AlreadyExistsError("phone number")

    def _to_output(self, member: Member) -> MemberOutput:
        return MemberOutput.model_validate(member)
