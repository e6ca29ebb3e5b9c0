"""
Admin authentication primitives.

- password hashing / verification (bcrypt, work factor 12)
- TokenCodec: signed 24h JWT carrying adminId + email
- SessionBoundary: cookie <-> verified admin identity, stateless
- FastAPI dependencies resolving the admin from the request cookie
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

import bcrypt
import jwt
from fastapi import Request

from .exceptions import AuthenticationError, ConfigurationError
from ..config.settings import Settings
from ..models.admin import AdminClaims, AdminIdentity

logger = logging.getLogger(__name__)

ADMIN_TOKEN_COOKIE = "mine_admin_token"
BCRYPT_ROUNDS = 12
TOKEN_MAX_AGE_SECONDS = 60 * 60 * 24  # fixed 24h lifetime, not configurable
UNAUTHORIZED_MESSAGE = "برای این عملیات باید وارد شوید."
# bcrypt only looks at the first 72 bytes
_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return (password or "").encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Salted one-way hash of a plaintext password"""
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored hash; never raises"""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False


class TokenCodec:
    """Signs and verifies admin tokens"""

    def __init__(self, settings: Settings):
        if not settings.jwt_secret:
            raise ConfigurationError("JWT_SECRET is not defined. Please set it in your environment.")
        self._secret = settings.jwt_secret
        self._algorithm = settings.jwt_algorithm
        self.max_age_seconds = TOKEN_MAX_AGE_SECONDS

    def sign(self, admin_id: int, email: str, issued_at: Optional[datetime] = None) -> str:
        issued_at = issued_at or datetime.now(timezone.utc)
        payload = {
            "adminId": admin_id,
            "email": email,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + timedelta(seconds=self.max_age_seconds)).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: Optional[str]) -> Optional[AdminClaims]:
        """Claims of a valid, unexpired token, otherwise None"""
        if not token:
            return None
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.InvalidTokenError as e:
            logger.debug("Rejected admin token: %s", e)
            return None

        admin_id = payload.get("adminId")
        email = payload.get("email")
        if not isinstance(admin_id, int) or isinstance(admin_id, bool) or not isinstance(email, str):
            return None
        return AdminClaims(
            admin_id=admin_id,
            email=email,
            issued_at=payload["iat"],
            expires_at=payload["exp"],
        )


@dataclass(frozen=True)
class CookieAttributes:
    key: str
    value: str
    max_age: int
    path: str = "/"
    httponly: bool = True
    samesite: str = "lax"
    secure: bool = False

    def apply(self, response):
        response.set_cookie(
            key=self.key,
            value=self.value,
            max_age=self.max_age,
            path=self.path,
            httponly=self.httponly,
            samesite=self.samesite,
            secure=self.secure,
        )
        return response


class SessionBoundary:
    """
    Maps the admin cookie to a verified identity and builds login/logout
    cookies. There is no server-side session store: holding a valid token
    is the only proof of identity, so tokens live until they expire.
    """

    def __init__(self, codec: TokenCodec, settings: Settings):
        self.codec = codec
        self.secure = settings.is_production

    def resolve_from_cookie(self, cookie_value: Optional[str]) -> Optional[AdminIdentity]:
        claims = self.codec.verify(cookie_value)
        if claims is None:
            return None
        return AdminIdentity(admin_id=claims.admin_id, email=claims.email)

    def issue_login_cookie(self, admin_id: int, email: str) -> Tuple[str, CookieAttributes]:
        token = self.codec.sign(admin_id, email)
        return token, CookieAttributes(
            key=ADMIN_TOKEN_COOKIE,
            value=token,
            max_age=self.codec.max_age_seconds,
            secure=self.secure,
        )

    def issue_logout_cookie(self) -> CookieAttributes:
        return CookieAttributes(
            key=ADMIN_TOKEN_COOKIE,
            value="",
            max_age=0,
            secure=self.secure,
        )


def get_session_boundary(request: Request) -> SessionBoundary:
    return request.app.state.session_boundary


def get_current_admin(request: Request) -> Optional[AdminIdentity]:
    """Admin identity from the request cookie, or None"""
    session = get_session_boundary(request)
    return session.resolve_from_cookie(request.cookies.get(ADMIN_TOKEN_COOKIE))


def require_admin(request: Request) -> AdminIdentity:
    """Dependency for admin-only routes"""
    admin = get_current_admin(request)
    if admin is None:
        raise AuthenticationError(UNAUTHORIZED_MESSAGE)
    return admin
