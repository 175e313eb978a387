#!/usr/bin/env python3
"""Create or promote an admin account.

This is the supported way to get an admin in production, where
ADMIN_USERNAMES is normally empty.

Usage:
    ADMIN_PASSWORD=... python scripts/create_admin.py alice
    python scripts/create_admin.py alice --password s3cret!
"""

import argparse
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sweetshop.config import get_settings
from sweetshop.database import SessionLocal, init_db
from sweetshop.services.auth import AuthService, TokenService


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create or promote a Sweet Shop admin.")
    parser.add_argument("username")
    parser.add_argument("--password", default=os.getenv("ADMIN_PASSWORD"))
    args = parser.parse_args(argv)

    if not args.password or len(args.password) < 6:
        parser.error("a password of at least 6 characters is required (--password or ADMIN_PASSWORD)")

    settings = get_settings()
    init_db()
    session = SessionLocal()
    try:
        service = AuthService(session, TokenService(settings), settings)
        user = service.bootstrap_admin(args.username, args.password)
        print(f"Admin ready: {user.username} (id={user.id})")
    finally:
        session.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
