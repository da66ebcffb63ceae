"""
Create an admin account, or reset the password of an existing one.

    python -m app.create_admin <username> <password>
"""
import argparse
import logging
import sys

from app.database import SessionLocal
from app.services.auth_service import auth_service

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("username")
    parser.add_argument("password")
    args = parser.parse_args(argv)

    if len(args.password) < 8:
        logger.error("Password must be at least 8 characters")
        return 1

    db = SessionLocal()
    try:
        admin, created = auth_service.create_or_reset_admin(db, args.username.strip(), args.password)
    finally:
        db.close()

    logger.info(f"{'Created' if created else 'Updated'} admin '{admin.username}' (id={admin.id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
