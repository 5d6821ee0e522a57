# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Bootstrap script – creates the first admin user.

Run once after the initial migration:
    python bin/seed_admin.py

The script reads FIRST_ADMIN_NAME, FIRST_ADMIN_EMAIL and FIRST_ADMIN_PASSWORD
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

from core.config import settings          # noqa: E402
from core.security import Role, hash_password  # noqa: E402
from database import SessionLocal         # noqa: E402
from models.user import User              # noqa: E402


def seed() -> int:
    if not settings.first_admin_email or not settings.first_admin_password:
        print("[seed_admin] FIRST_ADMIN_EMAIL or FIRST_ADMIN_PASSWORD not set in etc/app.conf – nothing to do.")
        return 1

    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.email == settings.first_admin_email).first()
        if existing:
            print(f"[seed_admin] Admin '{settings.first_admin_email}' already exists – skipping.")
            return 0

        admin = User(
            name=settings.first_admin_name,
            email=settings.first_admin_email,
            password_hash=hash_password(settings.first_admin_password),
            role=Role.ADMIN.value,
            is_active=True,
        )
        db.add(admin)
        db.commit()
        print(f"[seed_admin] Admin '{settings.first_admin_email}' created successfully.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(seed())
