import re

from flask import current_app
from passlib.hash import bcrypt


USERNAME_REGEX = re.compile(r"^[a-z0-9_.]{3,50}$")


def _truncate_password(plain_password: str) -> str:
    """Helper to consistently truncate password to its first 72 UTF-8 bytes."""
    # bcrypt only looks at 72 bytes; drop any multi-byte character split at the cut.
    password_bytes = plain_password.encode('utf-8')[:72]
    return password_bytes.decode('utf-8', errors='ignore')


def hash_password(plain_password: str) -> str:
    """
    Hash password using bcrypt. It is truncated to the first 72 bytes
    of its UTF-8 encoding before hashing.
    """
    truncated = _truncate_password(plain_password)
    return bcrypt.hash(truncated)


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Verify a password against a hash, using the same truncation as hash_password."""
    truncated = _truncate_password(plain_password)
    return bcrypt.verify(truncated, password_hash)


def normalize_username(username) -> str:
    if not isinstance(username, str):
        return ""
    return username.strip().lower()


def is_valid_username(username: str) -> bool:
    """Lower-case letters, digits, underscores and dots; 3 to 50 characters."""
    return bool(username and USERNAME_REGEX.match(username))


def validate_password(password: str) -> tuple[bool, str | None]:
    """
    Basic server-side password validation.
    Returns (is_valid, error_message).
    """
    min_length = current_app.config.get("MIN_PASSWORD_LENGTH", 6)
    if len(password) < min_length:
        return False, f"Password must be at least {min_length} characters long"
    return True, None
