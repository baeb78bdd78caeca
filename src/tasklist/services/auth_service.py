"""Auth service — signup and login.

Learn: Both flows end the same way: a token from TokenService and the
account it was issued for.

  signup: hash password → insert account → issue token
  login:  look up email → verify password → issue token

bcrypt is deliberately slow, so hashing and verification run in the
threadpool instead of on the event loop. Login against an unknown email
still runs a full bcrypt verification (against a throwaway digest) so
"no such account" and "wrong password" take the same time and raise the
same InvalidCredentialsError.
"""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from tasklist.auth.jwt import TokenService
from tasklist.auth.password import (
    DEFAULT_ROUNDS,
    dummy_hash,
    hash_password,
    verify_password,
)
from tasklist.db.models import User
from tasklist.errors import InvalidCredentialsError
from tasklist.services.account_service import AccountService

logger = structlog.get_logger()


class AuthService:
    """Signup and login on top of the account store and token service."""

    def __init__(
        self,
        db: AsyncSession,
        tokens: TokenService,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
    ):
        self.accounts = AccountService(db)
        self.tokens = tokens
        self.bcrypt_rounds = bcrypt_rounds

    async def signup(self, email: str, password: str) -> tuple[User, str]:
        """Create an account and return it with a fresh token.

        Raises EmailTakenError if the email is already registered.
        """
        password_hash = await run_in_threadpool(
            hash_password, password, self.bcrypt_rounds
        )
        user = await self.accounts.create_account(email, password_hash)
        logger.info("auth.signup", user_id=str(user.id))
        return user, self.tokens.issue(user.id)

    async def login(self, email: str, password: str) -> tuple[User, str]:
        """Check credentials and return the account with a fresh token.

        Raises InvalidCredentialsError for an unknown email or wrong password.
        """
        user = await self.accounts.find_by_email(email)

        if user is None:
            decoy = await run_in_threadpool(dummy_hash, self.bcrypt_rounds)
            await run_in_threadpool(verify_password, password, decoy)
            logger.info("auth.login_failed", reason="unknown_email")
            raise InvalidCredentialsError()

        if not await run_in_threadpool(verify_password, password, user.password_hash):
            logger.info("auth.login_failed", reason="wrong_password", user_id=str(user.id))
            raise InvalidCredentialsError()

        logger.info("auth.login", user_id=str(user.id))
        return user, self.tokens.issue(user.id)
