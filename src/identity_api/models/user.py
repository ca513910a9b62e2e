"""User model for authentication and role-based access control."""

import enum
from datetime import UTC, datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, String, func, true
from sqlalchemy.orm import Mapped, mapped_column

from identity_api.models.base import Base, UUIDMixin


class UserRole(enum.StrEnum):
    """Roles a user can hold."""

    ADMIN = "ADMIN"
    USER = "USER"
    SALES = "SALES"


class User(Base, UUIDMixin):
    """Registered user of the system.

    ``hashed_password`` is write-only from the application's point of view:
    no response schema exposes it.
    """

    __tablename__ = "users"
    __table_args__ = (CheckConstraint("role IN ('ADMIN', 'USER', 'SALES')", name="ck_users_role"),)

    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=UserRole.USER.value)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r} role={self.role}>"
