"""User Store — CRUD over the users table with an atomic email-uniqueness guarantee.

Invariants:
    - No two committed users share an email: enforced by uq_users_email, not by a
      prior SELECT, so concurrent create/update cannot both succeed
    - A rejected write (IntegrityError) is rolled back and leaves every row unchanged
    - get/find_by_email/update/delete raise ResourceNotFoundError for missing rows
    - update never changes id

Design Decisions:
    - Constraint + conflict mapping over check-then-insert: one round trip, no race window
    - Emails compared lower-cased: matches UserPayload normalization
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dogproxy.core.domain_types import UserId
from dogproxy.core.errors import EmailConflictError, ResourceNotFoundError
from dogproxy.models.user import User

logger = logging.getLogger(__name__)


class UserStore:
    """User persistence facade bound to one request-scoped session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> list[User]:
        result = await self.db.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def get(self, user_id: UserId) -> User:
        user = await self.db.get(User, user_id)
        if user is None:
            raise ResourceNotFoundError("User", str(user_id))
        return user

    async def find_by_email(self, email: str) -> User:
        normalized = email.strip().lower()
        result = await self.db.execute(
            select(User).where(User.email == normalized),
        )
        user = result.scalar_one_or_none()
        if user is None:
            raise ResourceNotFoundError("User", normalized)
        return user

    async def create(self, name: str, email: str, address: str) -> User:
        """Insert a user. Raises EmailConflictError if the email is taken."""
        user = User(name=name, email=email, address=address)
        self.db.add(user)
        await self._commit_or_conflict(email)
        logger.info("User created", extra={"user_id": user.id})
        return user

    async def update(
        self, user_id: UserId, name: str, email: str, address: str,
    ) -> User:
        """Overwrite name/email/address in place."""
        user = await self.get(user_id)
        user.name = name
        user.email = email
        user.address = address
        await self._commit_or_conflict(email)
        logger.info("User updated", extra={"user_id": user.id})
        return user

    async def delete(self, user_id: UserId) -> None:
        user = await self.get(user_id)
        await self.db.delete(user)
        await self.db.commit()
        logger.info("User deleted", extra={"user_id": user_id})

    async def delete_all(self) -> int:
        """Remove every user. Returns the number of rows deleted."""
        result = await self.db.execute(delete(User))
        await self.db.commit()
        logger.info(f"Deleted all users ({result.rowcount} rows)")
        return result.rowcount

    async def _commit_or_conflict(self, email: str) -> None:
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning(f"Email conflict on write: {email}")
            raise EmailConflictError(email)
