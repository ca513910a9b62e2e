"""Credential storage: durable user records behind a narrow interface.

The only rule enforced here is the database unique index on ``username``;
all registration and authentication policy lives in ``auth_service``.
"""

import uuid
from typing import Protocol

from loguru import logger
from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from identity_api.models.user import User, UserRole


class UniqueConstraintViolationError(Exception):
    """The database rejected a user row because its username is taken."""

    def __init__(self, username: str) -> None:
        super().__init__(f"Username '{username}' violates the unique constraint")
        self.username = username


class CredentialStore(Protocol):
    """Storage interface for user credentials."""

    async def insert(self, user: User) -> uuid.UUID:
        """Persist a new user and return its id.

        Raises:
            UniqueConstraintViolationError: If the username already exists.
        """
        ...

    async def find_by_id(self, user_id: uuid.UUID) -> User | None: ...

    async def find_by_username(self, username: str) -> User | None: ...

    async def find_active_by_username(self, username: str) -> User | None: ...

    async def update(self, user: User) -> int: ...

    async def deactivate(self, user_id: uuid.UUID) -> int: ...

    async def count(self) -> int: ...

    async def count_active(self) -> int: ...

    async def count_by_role(self, role: UserRole | str) -> int: ...

    async def list_users(self, page: int = 1, page_size: int = 20) -> tuple[list[User], int]: ...


class SqlAlchemyCredentialStore:
    """CredentialStore backed by an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert(self, user: User) -> uuid.UUID:
        """Insert a user row and commit.

        Args:
            user: The transient User to persist.

        Returns:
            The id assigned to the user.

        Raises:
            UniqueConstraintViolationError: If the username unique index
                rejects the row (including a concurrent insert that won the race).
        """
        self._session.add(user)
        try:
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            detail = str(exc.orig).lower()
            if "username" in detail and ("unique" in detail or "duplicate" in detail):
                raise UniqueConstraintViolationError(user.username) from None
            raise
        await self._session.refresh(user)
        logger.debug(f"Inserted user {user.id} ({user.username})")
        return user.id

    async def find_by_id(self, user_id: uuid.UUID) -> User | None:
        result = await self._session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def find_by_username(self, username: str) -> User | None:
        """Look up a user by exact (case-sensitive) username, active or not."""
        result = await self._session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def find_active_by_username(self, username: str) -> User | None:
        """Look up an active user by exact username."""
        result = await self._session.execute(
            select(User).where(User.username == username, User.is_active.is_(True)),
        )
        return result.scalar_one_or_none()

    async def update(self, user: User) -> int:
        """Write back the mutable fields of a user.

        Username and creation time are immutable and never written.

        Returns:
            Number of rows affected (0 if the user no longer exists).
        """
        result = await self._session.execute(
            update(User)
            .where(User.id == user.id)
            .values(
                email=user.email,
                role=str(user.role),
                is_active=user.is_active,
                hashed_password=user.hashed_password,
            ),
        )
        await self._session.commit()
        return result.rowcount

    async def deactivate(self, user_id: uuid.UUID) -> int:
        """Mark a user inactive so authentication stops succeeding.

        Returns:
            Number of rows affected.
        """
        result = await self._session.execute(update(User).where(User.id == user_id).values(is_active=False))
        await self._session.commit()
        if result.rowcount:
            logger.info(f"Deactivated user {user_id}")
        return result.rowcount

    async def count(self) -> int:
        result = await self._session.execute(select(func.count(User.id)))
        return result.scalar_one()

    async def count_active(self) -> int:
        result = await self._session.execute(select(func.count(User.id)).where(User.is_active.is_(True)))
        return result.scalar_one()

    async def count_by_role(self, role: UserRole | str) -> int:
        result = await self._session.execute(select(func.count(User.id)).where(User.role == str(role)))
        return result.scalar_one()

    async def list_users(self, page: int = 1, page_size: int = 20) -> tuple[list[User], int]:
        """List users with pagination, newest first.

        Args:
            page: Page number (1-based).
            page_size: Items per page.

        Returns:
            Tuple of (users list, total count).
        """
        total = await self.count()
        offset = (page - 1) * page_size
        result = await self._session.execute(
            select(User).order_by(User.created_at.desc()).offset(offset).limit(page_size),
        )
        return list(result.scalars().all()), total
