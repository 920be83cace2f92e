"""
Seed the demo accounts (one per role). Safe to run repeatedly:

  python -m rolegate.scripts.seed_demo_users
"""

import logging
import sys

from rolegate.core.config import get_settings
from rolegate.core.database import SessionLocal
from rolegate.services.demo_seed import DEMO_USERS, seed_demo_users

logger = logging.getLogger(__name__)


def main() -> int:
    """Ensure every demo account exists and print its credentials."""
    logging.basicConfig(
        level=get_settings().LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    db = SessionLocal()
    try:
        users = seed_demo_users(db)
    except Exception as e:
        logger.exception("Demo seeding failed: %s", e)
        return 1
    finally:
        db.close()

    logger.info("Demo seeding completed: users=%s", len(users))
    for user, spec in zip(users, DEMO_USERS):
        print(f"{user.role.value:<9} {user.email} / {spec.password} (id={user.id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
