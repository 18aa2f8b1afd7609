"""
Create a user (e.g. first admin). Run from project root:
  python -m gatekeep.scripts.create_user USERNAME NAME PASSWORD [role]
Example:
  python -m gatekeep.scripts.create_user admin "Site Admin" your-secure-password admin
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from gatekeep.core.config import get_settings
from gatekeep.core.database import get_read_session_factory, get_session_factory
from gatekeep.core.errors import Conflict, CredentialError
from gatekeep.core.passwords import PasswordHasher
from gatekeep.core.tokens import TokenService
from gatekeep.schemas.auth import RegisterRequest
from gatekeep.services.credentials import CredentialService
from gatekeep.services.user_store import UserStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def build_service() -> CredentialService:
    settings = get_settings()
    store = UserStore(get_session_factory(), get_read_session_factory())
    return CredentialService(
        store,
        PasswordHasher(),
        TokenService(settings.JWT_SECRET.get_secret_value()),
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Gatekeep user.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("name", help="Display name (1-255 chars)")
    parser.add_argument("password", help="Password (8 chars to 72 bytes)")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    args = parser.parse_args(argv)

    try:
        request = RegisterRequest(
            username=args.username.strip(),
            name=args.name.strip(),
            password=args.password,
            role=args.role,
        )
    except ValidationError as e:
        print(f"Invalid input: {e.errors()[0]['msg']}", file=sys.stderr)
        return 1

    try:
        build_service().register(request)
    except Conflict:
        print(f"User '{request.username}' already exists.", file=sys.stderr)
        return 1
    except CredentialError as e:
        logger.exception("Creating user failed: %s", e.message)
        return 1
    print(f"Created user '{request.username}' with role '{request.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
