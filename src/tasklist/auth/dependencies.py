"""FastAPI auth dependencies — the auth gate.

Learn: AuthGate is the request pipeline stage in front of every protected
route. Given the raw Authorization header it either raises a TokenError
(short-circuit) or returns a CurrentIdentity (forward):

  header present? → "Bearer <token>"? → TokenService.verify → identity

get_current_user wraps the gate as a FastAPI dependency. It is the only
place handlers get the caller from: it logs why a request was rejected,
answers every rejection with the same 401 body, and on success stores
the identity on request.state and in the structlog context.
"""

import uuid
from dataclasses import dataclass
from typing import Optional

import structlog
from fastapi import Depends, Header, HTTPException, Request

from tasklist.auth.jwt import (
    MalformedTokenError,
    MissingTokenError,
    TokenError,
    TokenService,
)

logger = structlog.get_logger()


def not_authenticated() -> HTTPException:
    return HTTPException(
        status_code=401,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )


@dataclass(frozen=True)
class CurrentIdentity:
    """The authenticated caller. Task queries are scoped by user_id."""

    user_id: uuid.UUID


class AuthGate:
    """Turns an Authorization header into a CurrentIdentity or a TokenError."""

    def __init__(self, tokens: TokenService):
        self.tokens = tokens

    def authenticate(self, authorization: Optional[str]) -> CurrentIdentity:
        token = self.extract_bearer(authorization)
        return CurrentIdentity(user_id=self.tokens.verify(token))

    @staticmethod
    def extract_bearer(authorization: Optional[str]) -> str:
        if not authorization:
            raise MissingTokenError("No Authorization header")
        scheme, _, token = authorization.strip().partition(" ")
        if scheme.lower() != "bearer":
            raise MissingTokenError("Authorization scheme is not Bearer")
        token = token.strip()
        if not token:
            raise MalformedTokenError("Empty bearer token")
        return token


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def get_auth_gate(tokens: TokenService = Depends(get_token_service)) -> AuthGate:
    return AuthGate(tokens)


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None),
    gate: AuthGate = Depends(get_auth_gate),
) -> CurrentIdentity:
    """Extract current identity (required — 401 if missing or invalid)."""
    try:
        identity = gate.authenticate(authorization)
    except TokenError as e:
        logger.info(
            "auth.rejected",
            reason=e.reason,
            error=str(e),
            path=request.url.path,
        )
        raise not_authenticated()

    request.state.identity = identity
    structlog.contextvars.bind_contextvars(user_id=str(identity.user_id))
    return identity
