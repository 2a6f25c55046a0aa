"""Security helpers for hashing and token generation."""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache
from hashlib import sha1, sha256
import logging

from jose import JWTError, jwt
from passlib.context import CryptContext

from user_accounts.config import get_settings
from user_accounts.domain.entities import RoleName, SessionPrincipal, User
from user_accounts.utils import now_utc

logger = logging.getLogger(__name__)
settings = get_settings()

JWT_ALGORITHM = "HS256"

# ---- Modern hashing (passlib) ----
pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=settings.password_hash_rounds,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)  # pbkdf2_sha256 with a random salt


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not plain_password or not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        logger.warning("Stored password hash is not a recognised modern digest")
        return False


@lru_cache(maxsize=1)
def _dummy_password_hash() -> str:
    return pwd_context.hash("not-a-real-password")


def verify_dummy_password(plain_password: str) -> bool:
    """Spend the cost of a real verification and report failure.

    Used when no account matches so unknown emails answer as slowly as wrong
    passwords.
    """

    pwd_context.verify(plain_password or "", _dummy_password_hash())
    return False


def needs_rehash(hashed_password: str) -> bool:
    """Return ``True`` when ``hashed_password`` should be replaced by a fresh hash."""

    if not hashed_password or pwd_context.identify(hashed_password) is None:
        return True
    return pwd_context.needs_update(hashed_password)


# ---- Legacy hashing ----
# Stored legacy digests are SHA-1 over the ASCII bytes of the password with
# every digest byte written as its decimal value, no separator and no padding.


def hash_legacy_password(password: str) -> str:
    digest = sha1(password.encode("ascii", errors="replace")).digest()
    return "".join(str(byte) for byte in digest)


def verify_legacy_password(plain_password: str, hashed_password: str) -> bool:
    return hash_legacy_password(plain_password) == hashed_password


# ---- JWT ----


def password_signature(user: User) -> str:
    """Fingerprint of the stored credential; tokens die when it changes."""

    return sha256(f"{user.password_hash}:{int(user.is_active)}".encode()).hexdigest()


def create_access_token(
    principal: SessionPrincipal,
    *,
    signature: str,
    expires_delta: timedelta | None = None,
) -> str:
    expire = now_utc() + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    claims = {
        "sub": principal.user_id,
        "username": principal.username,
        "role": principal.role.value,
        "pwd_sig": signature,
        "exp": expire,
    }
    return jwt.encode(claims, settings.secret_key, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[JWT_ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def principal_from_claims(claims: dict) -> SessionPrincipal:
    """Rebuild the principal carried by a decoded token."""

    user_id = claims.get("sub")
    username = claims.get("username")
    role = claims.get("role")
    if not isinstance(user_id, str) or not isinstance(username, str) or not isinstance(role, str):
        raise ValueError("Could not validate credentials")
    return SessionPrincipal(user_id=user_id, username=username, role=RoleName.parse(role))
