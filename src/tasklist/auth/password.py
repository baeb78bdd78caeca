"""Password hashing utilities.

Learn: Uses bcrypt for password hashing. bcrypt generates a random salt
per hash and stores salt and cost in the digest itself ("$2b$12$..."),
so verification needs nothing but the digest. The work factor defaults
to 12 (~250ms per hash); tests lower it to 4.
"""

import secrets
from functools import lru_cache

import bcrypt

DEFAULT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes of input.
_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_MAX_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password with bcrypt using a fresh salt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash.

    A malformed or empty digest is reported as a mismatch, never raised.
    """
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


@lru_cache(maxsize=None)
def dummy_hash(rounds: int = DEFAULT_ROUNDS) -> str:
    """Digest of a random secret, at the given cost.

    Login verifies against this when the email is unknown so the response
    time matches a wrong-password attempt.
    """
    return hash_password(secrets.token_urlsafe(16), rounds=rounds)
