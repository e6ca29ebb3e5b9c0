"""
Admin authentication service.
Verifies credentials against the admins table and seeds the admin account.
"""

import logging
from functools import lru_cache
from typing import Optional

from ..core.database import DatabaseManager
from ..core.exceptions import AuthenticationError, ValidationError
from ..core.security import hash_password, verify_password
from ..models.admin import Admin

logger = logging.getLogger(__name__)

# Same message for unknown email and wrong password
INVALID_CREDENTIALS_MESSAGE = "اطلاعات ورود صحیح نیست."


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("dummy-password-for-unknown-admins")


class AuthService:
    """Admin login and seeding"""

    def __init__(self, db: DatabaseManager):
        self.db = db

    def authenticate(self, email: str, password: str) -> Admin:
        admin = self.get_admin_by_email(email)
        if admin is None:
            # keep the response time of unknown emails close to real checks
            verify_password(password, _dummy_hash())
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE, error_code="INVALID_CREDENTIALS")

        if not verify_password(password, admin.password_hash):
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE, error_code="INVALID_CREDENTIALS")

        with self.db.cursor() as conn:
            self.db.log_operation(conn, admin.id, "admin_login", {"email": admin.email})
        logger.info("Admin %s logged in", admin.id)
        return admin

    def get_admin_by_email(self, email: str) -> Optional[Admin]:
        with self.db.cursor() as conn:
            row = self.db.fetch_dict(
                conn,
                "SELECT id, email, password_hash, created_at FROM admins WHERE lower(email) = lower(?)",
                [email.strip()]
            )
        return Admin(**row) if row else None

    def seed_admin(self, email: str, password: str) -> Admin:
        """Create the admin, or reset its password when it already exists"""
        email = (email or "").strip()
        if not email or not password:
            raise ValidationError("ADMIN_EMAIL and ADMIN_PASSWORD must be set to seed the admin.")

        password_hash = hash_password(password)
        with self.db.transaction() as conn:
            existing = self.db.fetch_dict(
                conn, "SELECT id FROM admins WHERE lower(email) = lower(?)", [email]
            )
            if existing:
                conn.execute(
                    "UPDATE admins SET password_hash = ? WHERE id = ?",
                    [password_hash, existing["id"]]
                )
                admin_id = existing["id"]
            else:
                admin_id = conn.execute(
                    "INSERT INTO admins (email, password_hash) VALUES (?, ?) RETURNING id",
                    [email, password_hash]
                ).fetchone()[0]
            self.db.log_operation(conn, admin_id, "admin_seed", {"email": email})

        logger.info("Admin user ready: %s", email)
        return self.get_admin_by_email(email)
