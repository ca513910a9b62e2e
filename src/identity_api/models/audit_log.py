"""AuditLog model for the immutable security event trail."""

import enum
import uuid
from datetime import UTC, datetime

from sqlalchemy import CheckConstraint, DateTime, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from identity_api.models.base import Base, UUIDMixin

IP_ADDRESS_MAX_LENGTH = 45
USER_AGENT_MAX_LENGTH = 500
REQUEST_ID_MAX_LENGTH = 100


class AuditStatus(enum.StrEnum):
    """Outcome recorded for an audited action."""

    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    ERROR = "ERROR"


class AuditLog(Base, UUIDMixin):
    """Immutable record of a security-relevant event. Write-only (no updates or deletes).

    ``user_id`` is nullable: failed logins are recorded before any identity
    is resolved.  There is no foreign key to ``users`` so the trail survives
    user removal by external housekeeping.
    """

    __tablename__ = "audit_logs"
    __table_args__ = (CheckConstraint("status IN ('SUCCESS', 'FAILURE', 'ERROR')", name="ck_audit_logs_status"),)

    user_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True, index=True)
    username: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    action: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    resource_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    resource_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    details: Mapped[str | None] = mapped_column(Text, nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(IP_ADDRESS_MAX_LENGTH), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(USER_AGENT_MAX_LENGTH), nullable=True)
    request_id: Mapped[str | None] = mapped_column(String(REQUEST_ID_MAX_LENGTH), nullable=True)
    status: Mapped[str] = mapped_column(String(10), nullable=False, default=AuditStatus.SUCCESS.value)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
        nullable=False,
        index=True,
    )
