# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
User store.

``UserRepository`` is the capability the usecase and the auth gate depend
on; ``SqlUserRepository`` is the PostgreSQL/SQLite adapter.  All statements
are parameterized – user input never reaches the SQL text.
"""

import abc
from typing import Optional

from sqlalchemy import DateTime
from sqlalchemy.engine import Engine, Row
from sqlalchemy.exc import DataError, IntegrityError

from core.errors import DuplicateUser, InvalidRole
from core.logger import logger
from database import Statement, is_unique_violation
from users.entity import NewUser, Role, User


class UserRepository(abc.ABC):
    @abc.abstractmethod
    def create(self, user: NewUser) -> tuple[Role, int]:
        """Persist *user*; return the stored role and the new user id."""

    @abc.abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        ...

    @abc.abstractmethod
    def find_by_id(self, user_id: int) -> Optional[User]:
        ...


CREATE_USER_QUERY = """
    INSERT INTO users(role, email, password, name, profile_image, created_at, updated_at)
    VALUES($1, $2, $3, $4, $5, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
    RETURNING role, user_id
"""
FIND_BY_EMAIL_QUERY = """
    SELECT user_id, role, email, password, name, profile_image, created_at, updated_at
    FROM users
    WHERE email = $1
"""
FIND_BY_ID_QUERY = """
    SELECT user_id, role, email, password, name, profile_image, created_at, updated_at
    FROM users
    WHERE user_id = $1
"""

_TIMESTAMPS = {"created_at": DateTime(timezone=True), "updated_at": DateTime(timezone=True)}


def _to_user(row: Row) -> User:
    return User(
        user_id=row.user_id,
        role=Role(row.role),
        email=row.email,
        password=row.password,
        name=row.name,
        profile_image=row.profile_image or "",
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlUserRepository(UserRepository):
    def __init__(self, engine: Engine):
        self._engine = engine

    def create(self, user: NewUser) -> tuple[Role, int]:
        """
        Insert the user inside a transaction.

        Raises ``DuplicateUser`` when the email is already taken (the
        check-then-insert race lost at the storage layer) and ``InvalidRole``
        for any other constraint or data violation.
        """
        clause, params = Statement(
            CREATE_USER_QUERY,
            [user.role.value, user.email, user.password, user.name, user.profile_image],
        ).compile()
        try:
            # engine.begin(): commit on success, rollback on any exception
            with self._engine.begin() as conn:
                row = conn.execute(clause, params).one()
        except IntegrityError as exc:
            if is_unique_violation(exc):
                raise DuplicateUser() from exc
            raise InvalidRole() from exc
        except DataError as exc:
            raise InvalidRole() from exc

        logger.debug("[user_repository] user with user_id: %d, role: %s created", row.user_id, row.role)
        return Role(row.role), row.user_id

    def find_by_email(self, email: str) -> Optional[User]:
        return self._find_one(FIND_BY_EMAIL_QUERY, email)

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self._find_one(FIND_BY_ID_QUERY, user_id)

    def _find_one(self, query: str, value) -> Optional[User]:
        clause, params = Statement(query, [value]).compile()
        with self._engine.connect() as conn:
            row = conn.execute(clause.columns(**_TIMESTAMPS), params).first()
        return _to_user(row) if row is not None else None
