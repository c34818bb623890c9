#!/usr/bin/env python3
"""Create the admin account from ADMIN_* environment variables."""

from __future__ import annotations

import argparse
import sys

from folio.config import settings
from folio.database import Base, SessionLocal, engine
from folio.errors import FolioError
from folio.services.auth_service import AuthService


def create_admin_user(username: str, email: str, password: str) -> bool:
    """Create the admin account if it doesn't exist. Returns True if created."""
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        return AuthService(db).ensure_admin(username, email, password)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--username", default=settings.admin_username)
    parser.add_argument("--email", default=settings.admin_email)
    parser.add_argument("--password", default=settings.admin_password)
    args = parser.parse_args(argv)

    if not args.password:
        print("❌ ADMIN_PASSWORD (or --password) is required", file=sys.stderr)
        return 1
    try:
        created = create_admin_user(args.username, args.email, args.password)
    except FolioError as exc:
        print(f"❌ Failed to create admin user: {exc.message}", file=sys.stderr)
        return 1

    if created:
        print(f"✅ Created admin user: {args.username}")
    else:
        print(f"✅ Admin user '{args.username}' already exists")
    return 0


if __name__ == "__main__":
    sys.exit(main())
