"""Common validation helpers for user use cases."""

import re

MAX_USER_ID_LENGTH = 128
MAX_EMAIL_LENGTH = 254
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 100
PASSWORD_MIN_LENGTH = 8

_EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)
_SPECIAL_CHARACTERS = set("@$!%*?&#^()_+=[]{};':\"\\|,.<>/~`-")

DISPOSABLE_EMAIL_DOMAINS = frozenset(
    {
        "tempmail.com",
        "guerrillamail.com",
        "10minutemail.com",
        "mailinator.com",
        "throwaway.email",
        "temp-mail.org",
        "fakeinbox.com",
        "yopmail.com",
        "trashmail.com",
        "maildrop.cc",
        "getnada.com",
        "temp-mail.io",
        "dispostable.com",
        "mohmal.com",
        "sharklasers.com",
        "guerrillamailblock.com",
        "spam4.me",
        "grr.la",
        "mintemail.com",
        "emailondeck.com",
    }
)


def normalize_email(email: str) -> str:
    """Return ``email`` trimmed and lower-cased."""

    return (email or "").strip().lower()


def ensure_valid_email(email: str) -> str:
    """Return a normalized email usable as a user id or raise ``ValueError``."""

    normalized = normalize_email(email)
    if not normalized:
        raise ValueError("Email address is required.")
    if len(normalized) > MAX_USER_ID_LENGTH:
        raise ValueError(f"Email address cannot exceed {MAX_USER_ID_LENGTH} characters.")
    if not _EMAIL_PATTERN.match(normalized):
        raise ValueError("Email address format is invalid.")

    domain = normalized.rsplit("@", 1)[1]
    if domain in DISPOSABLE_EMAIL_DOMAINS:
        raise ValueError(
            "Disposable email addresses are not allowed. Please use a permanent email address."
        )
    if ".." in normalized or normalized.startswith(".") or normalized.endswith("."):
        raise ValueError("Email address contains invalid character patterns.")
    return normalized


def ensure_valid_username(username: str) -> str:
    normalized = (username or "").strip()
    if not USERNAME_MIN_LENGTH <= len(normalized) <= USERNAME_MAX_LENGTH:
        raise ValueError(
            f"Username must be between {USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH} characters."
        )
    return normalized


def ensure_passwords_match(password: str, confirm_password: str) -> None:
    if password != confirm_password:
        raise ValueError("Passwords do not match.")


def ensure_strong_password(password: str) -> None:
    """Raise ``ValueError`` unless ``password`` satisfies the password policy."""

    if len(password or "") < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long.")
    if not (
        any(char.islower() for char in password)
        and any(char.isupper() for char in password)
        and any(char.isdigit() for char in password)
        and any(char in _SPECIAL_CHARACTERS for char in password)
    ):
        raise ValueError(
            "Password must contain at least one uppercase letter, one lowercase letter, "
            "one digit, and one special character."
        )


__all__ = [
    "DISPOSABLE_EMAIL_DOMAINS",
    "ensure_passwords_match",
    "ensure_strong_password",
    "ensure_valid_email",
    "ensure_valid_username",
    "normalize_email",
]
