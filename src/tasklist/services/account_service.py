"""Account service — the credential store.

Learn: Only two things are ever asked of it: find an account by email,
and create one. Creation does NOT check for an existing row first; it
inserts and lets the UNIQUE constraint on users.email_key reject the
duplicate. A read-then-write check would let two concurrent signups for
the same address both pass the read.
"""

import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tasklist.db.models import User
from tasklist.errors import EmailTakenError


def normalize_email(email: str) -> str:
    """Comparison key for an email: trimmed and lower-cased."""
    return email.strip().lower()


class AccountService:
    """Lookup and creation of user accounts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).where(User.email_key == normalize_email(email))
        )
        return result.scalars().first()

    async def get(self, user_id: uuid.UUID) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def create_account(self, email: str, password_hash: str) -> User:
        """Insert a new account.

        Raises EmailTakenError if the email (in any letter case) is taken.
        """
        user = User(
            email=email.strip(),
            email_key=normalize_email(email),
            password_hash=password_hash,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise EmailTakenError("Email already in use")
        return user
