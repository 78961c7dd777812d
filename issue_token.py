"""
Issue a bearer token for an existing user (operators use it to get admin tokens).

Usage:
    python issue_token.py admin@filemyrti.com
    python issue_token.py ops@filemyrti.com --create --role admin --name "Ops Desk"
"""
import argparse
import sys
import logging

from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

from config import get_settings
from database import build_engine, build_session_factory, register_models
from Login_module.User.user_model import UserRole
from Login_module.User.user_session_crud import get_user_by_email, create_user
from Login_module.Utils.security import create_user_token


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Issue a bearer token for a user")
    parser.add_argument("email", help="Email of the user")
    parser.add_argument("--create", action="store_true", help="Create the user if it does not exist")
    parser.add_argument("--name", default=None, help="Name for a newly created user")
    parser.add_argument(
        "--role",
        choices=[role.value for role in UserRole],
        default=UserRole.USER.value,
        help="Role for a newly created user",
    )
    parser.add_argument("--expires-seconds", type=int, default=None, help="Token lifetime (default JWT_EXPIRE_SECONDS)")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = get_settings()

    register_models()
    engine = build_engine(settings)
    session_factory = build_session_factory(engine)
    try:
        with session_factory() as db:
            user = get_user_by_email(db, args.email)
            if user is None:
                if not args.create:
                    logger.error(f"No user with email {args.email}; pass --create to add one")
                    return 1
                user = create_user(db, args.email, name=args.name, role=args.role)
            elif not user.is_active:
                logger.error(f"User {user.id} is inactive")
                return 1

            token = create_user_token(user, settings, args.expires_seconds)
            logger.info(f"Token issued for user id={user.id}, role={user.role}")
    finally:
        engine.dispose()

    print(token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
