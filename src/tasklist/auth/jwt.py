"""JWT token creation and verification.

Learn: JWT (JSON Web Token) gives stateless authentication. A token
carries three claims:
- sub: the user's id (UUID string)
- iat: when it was issued
- exp: when it stops being accepted (iat + configured TTL, 24h default)

It is signed with HMAC (HS256 by default) using a secret that is handed
to TokenService at construction and never leaves it. Nothing is stored
server-side, so a token lives until it expires or the secret rotates.

Verification walks the checks in a fixed order (structure → signature →
expiry) and raises a distinct TokenError subclass for each. Issuing and
verifying share one clock, so "now" means the same thing to both. The reason
is for logs only; the HTTP layer answers every failure with the same 401.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt


class TokenError(Exception):
    """Raised when a bearer token can't be accepted."""

    reason = "invalid"


class MissingTokenError(TokenError):
    """No bearer token on the request."""

    reason = "missing"


class MalformedTokenError(TokenError):
    """Not a structurally valid token (bad segments, claims or subject)."""

    reason = "malformed"


class TokenSignatureError(TokenError):
    """Signature doesn't verify: tampered, wrong secret or wrong algorithm."""

    reason = "invalid_signature"


class TokenExpiredError(TokenError):
    """Signature is fine but the exp claim has passed."""

    reason = "expired"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issues and verifies access tokens with one process-wide secret."""

    def __init__(
        self,
        secret: str,
        ttl: timedelta,
        algorithm: str = "HS256",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self.ttl = ttl
        self.algorithm = algorithm
        self._clock = clock or _utcnow

    def __repr__(self) -> str:
        return f"TokenService(algorithm={self.algorithm!r}, ttl={self.ttl!r})"

    def issue(self, user_id: uuid.UUID) -> str:
        """Create a signed access token for a user."""
        issued_at = self._clock()
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> uuid.UUID:
        """Verify a token and return the user id it was issued for.

        Raises a TokenError subclass on failure.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={
                    "require": ["sub", "iat", "exp"],
                    # expiry is checked below against the injected clock
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError) as e:
            raise TokenSignatureError(f"Signature verification failed: {e}")
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError(f"Invalid token: {e}")

        exp = payload["exp"]
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise MalformedTokenError("Token exp claim is not a timestamp")
        if exp <= self._clock().timestamp():
            raise TokenExpiredError("Token has expired")

        try:
            return uuid.UUID(payload["sub"])
        except (TypeError, ValueError, AttributeError):
            raise MalformedTokenError("Token subject is not a user id")
