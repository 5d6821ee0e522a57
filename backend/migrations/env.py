# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Alembic environment.

Online runs reuse ``database.engine`` and offline runs render SQL for
``settings.database_url``, so etc/app.conf stays the only place the
connection string is configured.

    alembic upgrade head            # from the project root (alembic.ini)
    alembic upgrade head --sql      # print the DDL instead
"""

import os
import sys

_BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)

from alembic import context  # noqa: E402

from core.config import settings  # noqa: E402
from database import Base, engine  # noqa: E402

# Every table must be registered on Base.metadata for autogenerate
import models.user            # noqa: F401, E402
import models.session_record  # noqa: F401, E402
import models.home_banner     # noqa: F401, E402
import models.event           # noqa: F401, E402
import models.stone_group     # noqa: F401, E402
import models.content_page    # noqa: F401, E402

_OPTIONS = {"target_metadata": Base.metadata, "compare_type": True}


def run_migrations_offline() -> None:
    context.configure(url=settings.database_url, literal_binds=True, **_OPTIONS)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    with engine.connect() as conn:
        context.configure(connection=conn, **_OPTIONS)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
