"""Seed the municipal organisation chart and one staff user per role.

Offices are created if missing (matched by name) and re-parented to match the
chart; users are created if their username is not taken. Safe to re-run.

Usage:
    python -m scripts.seed_organisation [password]

Default password: 123456. Requires DATABASE_URL and a migrated database.
"""

from __future__ import annotations

import asyncio
import sys

from dotenv import load_dotenv

from tramites.infrastructure.persistence.database import (
    dispose_engine,
    get_session_factory,
)
from tramites.infrastructure.persistence.seed import (
    DEFAULT_PASSWORD,
    USERS,
    seed_reference_data,
)
from tramites.shared.telemetry.logging import setup_logging


async def run(password: str) -> None:
    try:
        office_ids = await seed_reference_data(get_session_factory(), password=password)
    finally:
        await dispose_engine()
    print(f"Offices: {len(office_ids)}")
    for user in USERS:
        print(f"  {user.username:<20} {user.role.value:<16} {user.office}")
    print("Seed completed.")


def main() -> None:
    load_dotenv()
    setup_logging()
    password = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_PASSWORD
    asyncio.run(run(password))


if __name__ == "__main__":
    main()
