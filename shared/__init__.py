"""
Shared module for cross-cutting concerns of the marketplace API.

STRUCTURE:
- shared.security: Authentication and credentials
  - auth.py: token issuance/validation, current_member_context
  - password.py: Bcrypt hashing
  - password_history.py: Reuse policy over the bounded credential history
  - rate_limit.py: Login rate limiting

- shared.infrastructure: Database and request plumbing
  - db.py: SQLAlchemy sessions, safe_commit()
  - correlation.py: X-Request-ID middleware and logging filter

- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: MemberRole, OAuthProvider, limits

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - schemas.py: Shared Pydantic schemas

IMPORT EXAMPLES:
    from shared.security.auth import verify_jwt, current_member_context
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import MemberRole
    from shared.utils.exceptions import NotFoundError, ForbiddenError
"""
