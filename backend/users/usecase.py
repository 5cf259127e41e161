# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Registration and login.

Security notes
--------------
* Login fails with the *same* ``InvalidCredential`` whether the email does
  not exist or the password is wrong.  This prevents user-enumeration.
* Registration checks email uniqueness up front, and again relies on the
  unique index when a concurrent sign-up wins the race.
"""

from core.errors import DuplicateUser, InternalError, InvalidCredential
from core.logger import logger
from core.security import PasswordHasher, SigningError, TokenService
from users.entity import NewUser
from users.repository import UserRepository
from users.schemas import LoginRequest, RegisterRequest


class UserUsecase:
    def __init__(self, users: UserRepository, hasher: PasswordHasher, tokens: TokenService):
        self._users = users
        self._hasher = hasher
        self._tokens = tokens

    def register(self, body: RegisterRequest) -> str:
        """Create the account and return an access token for it."""
        existing = self._users.find_by_email(body.email)
        if existing is not None:
            logger.debug("[user_usecase.register] user already registered with user_id: %d", existing.user_id)
            raise DuplicateUser()

        try:
            password_hash = self._hasher.hash(body.password)
        except (TypeError, ValueError) as exc:
            logger.error("[user_usecase.register] error generating password hash, err: %s", exc)
            raise InternalError() from exc

        # DuplicateUser / InvalidRole propagate unchanged
        role, user_id = self._users.create(NewUser(
            role=body.role,
            email=body.email,
            password=password_hash,
            name=body.name,
            profile_image=body.profile_image,
        ))
        return self._issue(role.value, user_id, "register")

    def login(self, body: LoginRequest) -> str:
        """Check the credentials and return an access token."""
        user = self._users.find_by_email(body.email)
        if user is None:
            logger.debug("[user_usecase.login] no user with email: %s", body.email)
            raise InvalidCredential()

        try:
            matched = self._hasher.verify(body.password, user.password)
        except ValueError as exc:
            logger.error("[user_usecase.login] unreadable password hash for user_id: %d, err: %s", user.user_id, exc)
            matched = False
        if not matched:
            logger.debug("[user_usecase.login] password mismatch for user_id: %d", user.user_id)
            raise InvalidCredential()

        return self._issue(user.role.value, user.user_id, "login")

    def _issue(self, role: str, user_id: int, caller: str) -> str:
        try:
            return self._tokens.issue(role, user_id)
        except SigningError as exc:
            logger.error("[user_usecase.%s] error generating access token, err: %s", caller, exc)
            raise InternalError() from exc
