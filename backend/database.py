# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
SQLAlchemy engine factory, declarative base, and the ``Statement`` helper
every repository uses to run raw parameterized SQL.

Repositories write their SQL with PostgreSQL-style ``$1, $2 …`` positional
placeholders.  ``Statement.compile`` rewrites them into SQLAlchemy named
binds so the same text runs on PostgreSQL and on SQLite (tests).
"""

import re
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import JSON, bindparam, create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql.elements import TextClause

from core.config import Settings

Base = declarative_base()

# SQLSTATE for unique_violation
_PG_UNIQUE_VIOLATION = "23505"

_PLACEHOLDER = re.compile(r"\$(\d+)")


def create_db_engine(settings: Settings) -> Engine:
    """Build the process-wide pooled engine."""
    # pool_pre_ping drops connections the server closed while idle
    return create_engine(
        settings.database_url,
        pool_pre_ping=True,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,
    )


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when *exc* was raised by a UNIQUE / PRIMARY KEY constraint."""
    if getattr(exc.orig, "pgcode", None) == _PG_UNIQUE_VIOLATION:
        return True
    # SQLite: "UNIQUE constraint failed: users.email"
    return "unique constraint" in str(exc.orig).lower()


@dataclass(frozen=True)
class Statement:
    """
    SQL text with ``$n`` placeholders and its ordered arguments.

    ``args[0]`` binds ``$1``, ``args[1]`` binds ``$2`` and so on.
    ``json_params`` lists the 1-based positions whose value must be
    serialized as JSON.
    """

    sql: str
    args: list[Any] = field(default_factory=list)
    json_params: frozenset[int] = frozenset()

    def compile(self) -> tuple[TextClause, dict[str, Any]]:
        """Return an executable ``text()`` clause and its bind dict."""
        clause = text(_PLACEHOLDER.sub(lambda m: f":p{m.group(1)}", self.sql))
        if self.json_params:
            clause = clause.bindparams(
                *(bindparam(f"p{pos}", type_=JSON) for pos in sorted(self.json_params))
            )
        params = {f"p{pos}": value for pos, value in enumerate(self.args, start=1)}
        return clause, params
