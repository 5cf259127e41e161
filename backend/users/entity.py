# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""User records as they move between the store, the usecase and the routes."""

import enum
from dataclasses import dataclass
from datetime import datetime


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    READER = "READER"


@dataclass(frozen=True)
class User:
    user_id: int
    role: Role
    email: str
    password: str  # passlib hash, never plaintext
    name: str
    profile_image: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class NewUser:
    role: Role
    email: str
    password: str
    name: str
    profile_image: str = ""
