# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Bootstrap script – creates the first ADMIN user.

Run once after the initial migration:
    python bin/seed_admin.py

The script reads FIRST_ADMIN_EMAIL, FIRST_ADMIN_PASSWORD and FIRST_ADMIN_NAME
from etc/app.conf.  After the row is inserted those values are no longer used
by the application.
"""

import sys
import os

# ---------------------------------------------------------------------------
# Path setup so backend modules are importable
# ---------------------------------------------------------------------------
# bin/seed_admin.py  →  ../  →  project root
_PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
_BACKEND_DIR  = os.path.join(_PROJECT_ROOT, "backend")
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)

from core.config import Settings                # noqa: E402
from core.errors import DuplicateUser           # noqa: E402
from core.security import PasswordHasher        # noqa: E402
from database import create_db_engine           # noqa: E402
from users.entity import NewUser, Role          # noqa: E402
from users.repository import SqlUserRepository  # noqa: E402


def seed(settings: Settings) -> None:
    if not settings.first_admin_email or not settings.first_admin_password:
        print("[seed_admin] FIRST_ADMIN_EMAIL or FIRST_ADMIN_PASSWORD not set in etc/app.conf – nothing to do.")
        return

    engine = create_db_engine(settings)
    try:
        users = SqlUserRepository(engine)
        if users.find_by_email(settings.first_admin_email) is not None:
            print(f"[seed_admin] Admin '{settings.first_admin_email}' already exists – skipping.")
            return

        hasher = PasswordHasher(rounds=settings.password_hash_rounds)
        try:
            _, user_id = users.create(NewUser(
                role=Role.ADMIN,
                email=settings.first_admin_email,
                password=hasher.hash(settings.first_admin_password),
                name=settings.first_admin_name,
            ))
        except DuplicateUser:
            print(f"[seed_admin] Admin '{settings.first_admin_email}' was created concurrently – skipping.")
            return
        print(f"[seed_admin] Admin '{settings.first_admin_email}' created successfully (user_id={user_id}).")
    finally:
        engine.dispose()


if __name__ == "__main__":
    seed(Settings())
