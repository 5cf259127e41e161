# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Auth gate – the request-level guard in front of every protected route.

Every failure, whatever its cause (missing header, bad prefix, expired or
forged token, unknown user, role changed since issuance), is reported to the
client as the same 403 ``forbidden access``.  The precise reason is only
logged at DEBUG.

FastAPI dependencies
--------------------
``get_current_user``  – runs the gate, yields the loaded ``User``.
``require_admin``     – additionally asserts ``role == ADMIN``.
"""

from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.exc import SQLAlchemyError

from core.errors import ForbiddenAccess
from core.logger import logger
from core.numbers import parse_int
from core.security import TokenError, TokenService
from users.entity import Role, User
from users.repository import UserRepository

BEARER_PREFIX = "Bearer "


class AuthGate:
    def __init__(self, tokens: TokenService, users: UserRepository):
        self._tokens = tokens
        self._users = users

    def authenticate(self, authorization: Optional[str]) -> User:
        """
        Resolve the ``Authorization`` header value to a persisted user.

        Raises ``ForbiddenAccess`` on the first failed step.
        """
        if not authorization:
            raise _forbidden("missing authorization header")
        # exact, case-sensitive prefix; nothing else is tolerated
        if not authorization.startswith(BEARER_PREFIX):
            raise _forbidden("authorization header is not a bearer token")
        token = authorization[len(BEARER_PREFIX):]

        try:
            claims = self._tokens.verify(token)
        except TokenError as exc:
            raise _forbidden(f"token rejected: {type(exc).__name__}: {exc}")

        user_id = parse_int(claims.token_id)
        if user_id is None:
            raise _forbidden(f"token id is not an int64: {claims.token_id!r}")

        try:
            user = self._users.find_by_id(user_id)
        except SQLAlchemyError as exc:
            raise _forbidden(f"user lookup failed for user_id {user_id}: {exc}")
        if user is None:
            raise _forbidden(f"no user with user_id {user_id}")

        # a correctly signed, unexpired token is stale once the role changed
        if user.role.value != claims.subject:
            raise _forbidden(f"role mismatch for user_id {user_id}: token={claims.subject} stored={user.role.value}")

        return user


def _forbidden(reason: str) -> ForbiddenAccess:
    logger.debug("[auth_gate] forbidden: %s", reason)
    return ForbiddenAccess()


# ---------------------------------------------------------------------------
# FastAPI dependency guards
# ---------------------------------------------------------------------------


def get_current_user(request: Request) -> User:
    """Dependency: run the gate built by ``create_app`` against this request."""
    gate: AuthGate = request.app.state.auth_gate
    return gate.authenticate(request.headers.get("Authorization"))


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Dependency: :func:`get_current_user` plus ``role == ADMIN``."""
    if current_user.role != Role.ADMIN:
        logger.debug("[auth_gate] forbidden: user_id %d is not ADMIN", current_user.user_id)
        raise ForbiddenAccess()
    return current_user
