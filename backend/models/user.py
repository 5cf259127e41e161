# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""users table definition.  Queried through raw SQL in users/repository.py."""

from sqlalchemy import Column, Integer, String, Enum, DateTime
from sqlalchemy.sql import func

from database import Base


class UserRow(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    # create_constraint emits a CHECK on backends without native enums
    role = Column(
        Enum("ADMIN", "READER", name="user_role", create_constraint=True),
        nullable=False,
    )
    email = Column(String(60), unique=True, nullable=False)
    # passlib hash string – never plaintext
    password = Column(String(255), nullable=False)
    name = Column(String(60), nullable=False)
    profile_image = Column(String(2048), nullable=False, server_default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
