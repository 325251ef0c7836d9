"""Password hashing and verification using Argon2id

Passwords are combined with a server-side PASSWORD_PEPPER before hashing.
The pepper never reaches the database, so a leaked user table alone is not
enough to mount an offline attack.
"""

import os
import re

from argon2 import PasswordHasher, Type
from argon2.exceptions import VerifyMismatchError, VerificationError, InvalidHashError


# Memory cost: 64 MB, Time cost: 3, Parallelism: 4
_hasher = PasswordHasher(
    memory_cost=65536,
    time_cost=3,
    parallelism=4,
    hash_len=32,
    salt_len=16,
    type=Type.ID
)

_SPECIAL_CHARACTERS = r'[!@#$%^&*(),.?":{}|<>_\-+=\[\]\\\/~`]'


def _get_pepper() -> str:
    """Get PASSWORD_PEPPER from environment.

    Raises:
        ValueError: If PASSWORD_PEPPER is not set
    """
    pepper = os.getenv('PASSWORD_PEPPER')
    if not pepper:
        raise ValueError("PASSWORD_PEPPER environment variable is not set")
    return pepper


def hash_password(password: str) -> str:
    """Hash a password using Argon2id with the global pepper.

    Raises:
        ValueError: If PASSWORD_PEPPER is not set or password is empty
    """
    if not password:
        raise ValueError("Password cannot be empty")

    return _hasher.hash(password + _get_pepper())


def verify_password(password: str, hash: str) -> bool:
    """Verify a password against an Argon2id hash.

    Returns False for empty input or any mismatch; never raises for a bad
    hash so that callers can answer with a single generic error.
    """
    if not password or not hash:
        return False

    try:
        _hasher.verify(hash, password + _get_pepper())
        return True
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def validate_password_strength(password: str) -> tuple[bool, str]:
    """Validate password meets strength requirements.

    Requirements: at least 8 characters with an uppercase letter, a
    lowercase letter, a digit and a special character.

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> validate_password_strength("weak")
        (False, 'Password must be at least 8 characters long')
        >>> validate_password_strength("SecureP@ss123")
        (True, '')
    """
    if len(password) < 8:
        return False, "Password must be at least 8 characters long"

    checks = [
        (r'[A-Z]', "Password must contain at least one uppercase letter"),
        (r'[a-z]', "Password must contain at least one lowercase letter"),
        (r'\d', "Password must contain at least one digit"),
        (_SPECIAL_CHARACTERS, "Password must contain at least one special character"),
    ]
    for pattern, message in checks:
        if not re.search(pattern, password):
            return False, message

    return True, ""
