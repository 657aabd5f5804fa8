from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import hashlib
import hmac
import logging

from passlib.context import CryptContext
from jose import jwt, JWTError

from storefront.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class InvalidSession(Exception):
    """Raised when a session token is missing, tampered with or expired."""


@dataclass(frozen=True)
class AdminSession:
    username: str
    issued_at: datetime
    expires_at: datetime


def _bcrypt_input(password: str) -> str:
    """
    Bcrypt has a 72-byte input limit.
    We pre-hash with SHA-256 to make the input fixed-length and safe,
    then bcrypt the hex digest (64 chars ASCII).
    """
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def hash_password(password: str) -> str:
    return pwd_context.hash(_bcrypt_input(password))


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(_bcrypt_input(password), password_hash)
    except (ValueError, TypeError):
        # malformed hash in configuration
        return False


def check_admin_credentials(username: str, password: str, settings: Settings = default_settings) -> bool:
    """
    Compare submitted credentials with the single configured admin account.
    A bcrypt hash (admin_password_hash) wins over the plain admin_password.
    """
    if not settings.admin_password and not settings.admin_password_hash:
        logger.warning("Admin login attempted but no admin password is configured")
        return False

    user_ok = hmac.compare_digest(username.encode("utf-8"), settings.admin_username.encode("utf-8"))
    if settings.admin_password_hash:
        pass_ok = verify_password(password, settings.admin_password_hash)
    else:
        pass_ok = hmac.compare_digest(password.encode("utf-8"), settings.admin_password.encode("utf-8"))
    return user_ok and pass_ok


def create_session_token(
    username: str,
    settings: Settings = default_settings,
    ttl_minutes: int | None = None,
    now: datetime | None = None,
) -> str:
    now = now or datetime.now(timezone.utc)
    ttl = settings.jwt_access_ttl_min if ttl_minutes is None else ttl_minutes
    exp = now + timedelta(minutes=ttl)
    payload = {
        "sub": username,
        "iat": int(now.timestamp()), # issued at
        "exp": int(exp.timestamp()), # expiration time
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_alg)


def decode_session_token(token: str | None, settings: Settings = default_settings) -> AdminSession:
    # jose checks the signature and exp claim
    if not token:
        raise InvalidSession("missing token")
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_alg])
    except JWTError as exc:
        raise InvalidSession(str(exc)) from exc

    sub = payload.get("sub")
    iat = payload.get("iat")
    exp = payload.get("exp")
    if not sub or iat is None or exp is None:
        raise InvalidSession("incomplete token")

    return AdminSession(
        username=sub,
        issued_at=datetime.fromtimestamp(int(iat), tz=timezone.utc),
        expires_at=datetime.fromtimestamp(int(exp), tz=timezone.utc),
    )
