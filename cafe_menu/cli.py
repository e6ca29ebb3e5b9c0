"""
Out-of-band admin seeding.

    cafe-menu-seed-admin --email admin@example.com --password secret1

Falls back to ADMIN_EMAIL / ADMIN_PASSWORD from the environment or .env.
"""

import argparse
import sys
from typing import List, Optional

from .config.settings import load_settings
from .core.database import DatabaseManager
from .core.exceptions import BaseApplicationError
from .core.logging_config import configure_logging
from .services.auth_service import AuthService


def seed_admin(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Create or reset the cafe menu admin account")
    parser.add_argument("--email", help="admin email (default: ADMIN_EMAIL)")
    parser.add_argument("--password", help="admin password (default: ADMIN_PASSWORD)")
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
        configure_logging(settings.log_level)
        email = args.email or settings.admin_email
        password = args.password or settings.admin_password

        db = DatabaseManager(settings)
        try:
            admin = AuthService(db).seed_admin(email, password)
        finally:
            db.close()
    except BaseApplicationError as e:
        print(f"Seeding error: {e.message}", file=sys.stderr)
        return 1

    print(f"Admin user ready: {admin.email}")
    return 0


def main():
    sys.exit(seed_admin())


if __name__ == "__main__":
    main()
