"""
Create a user (e.g. first admin). Run from project root:
  python -m rolegate.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m rolegate.scripts.create_user admin admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from rolegate.core.config import get_settings
from rolegate.core.database import SessionLocal
from rolegate.models import UserRole
from rolegate.schemas.user import CreateUserInput
from rolegate.services.accounts import create_user
from rolegate.services.user_repository import ConflictError

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=get_settings().LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    parser = argparse.ArgumentParser(description="Create a Rolegate user.")
    parser.add_argument("username", help="Username (3-50 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (at least 6 chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=UserRole.USER.value,
        choices=[r.value for r in UserRole],
    )
    args = parser.parse_args(argv)

    try:
        data = CreateUserInput(
            username=args.username.strip(),
            email=args.email.strip(),
            password=args.password,
            role=UserRole(args.role),
        )
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            print(f"Invalid {field}: {err['msg']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = create_user(db, data)
    except ConflictError as e:
        print(e.message, file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("User creation failed: %s", e)
        print(f"User creation failed: {e}", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.username}' (id={user.id}) with role '{user.role.value}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
