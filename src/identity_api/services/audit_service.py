"""Audit logging service.

Records an append-only trail of security events.  Writes are best effort:
each one runs in its own session so it commits independently of the caller's
transaction, and a failing write is logged and swallowed rather than aborting
the operation it documents.
"""

import uuid
from datetime import datetime

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from identity_api.core.context import RequestContext
from identity_api.models.audit_log import (
    IP_ADDRESS_MAX_LENGTH,
    REQUEST_ID_MAX_LENGTH,
    USER_AGENT_MAX_LENGTH,
    AuditLog,
    AuditStatus,
)

USER_REGISTER = "USER_REGISTER"
USER_LOGIN = "USER_LOGIN"
RESOURCE_USER = "User"


def _clip(value: str | None, limit: int) -> str | None:
    return value[:limit] if value is not None else None


class AuditRecorder:
    """Best-effort writer for AuditLog rows."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def record(
        self,
        *,
        username: str,
        action: str,
        status: AuditStatus = AuditStatus.SUCCESS,
        user_id: uuid.UUID | None = None,
        resource_type: str | None = None,
        resource_id: str | None = None,
        details: str | None = None,
        error_message: str | None = None,
        context: RequestContext | None = None,
    ) -> None:
        """Append one audit entry. Never raises.

        Header-derived context values are clipped to their column widths so an
        oversized header cannot make the insert fail.

        Args:
            username: The acting (or attempted) username.
            action: Free-form action tag, e.g. ``USER_LOGIN``.
            status: Outcome of the action.
            user_id: The acting user's ID, when known.
            resource_type: Kind of resource affected.
            resource_id: Identifier of the affected resource.
            details: Additional free-form detail.
            error_message: Failure description for FAILURE/ERROR entries.
            context: Request correlation data stamped onto the entry.
        """
        try:
            entry = AuditLog(
                user_id=user_id,
                username=username,
                action=action,
                resource_type=resource_type,
                resource_id=resource_id,
                details=details,
                status=str(status),
                error_message=error_message,
                request_id=_clip(context.request_id, REQUEST_ID_MAX_LENGTH) if context else None,
                ip_address=_clip(context.ip_address, IP_ADDRESS_MAX_LENGTH) if context else None,
                user_agent=_clip(context.user_agent, USER_AGENT_MAX_LENGTH) if context else None,
            )
            async with self._session_factory() as session:
                session.add(entry)
                await session.commit()
        except Exception:
            logger.exception(f"Failed to record audit log: user={username}, action={action}")
            return

        logger.bind(json_output=True, request_id=entry.request_id).info(
            f"Audit log recorded: user={username}, action={action}, "
            f"resource={resource_type}:{resource_id}, status={status}"
        )

    async def log_success(
        self,
        *,
        username: str,
        action: str,
        user_id: uuid.UUID | None = None,
        resource_type: str | None = None,
        resource_id: str | None = None,
        context: RequestContext | None = None,
    ) -> None:
        await self.record(
            username=username,
            action=action,
            status=AuditStatus.SUCCESS,
            user_id=user_id,
            resource_type=resource_type,
            resource_id=resource_id,
            context=context,
        )

    async def log_failure(
        self,
        *,
        username: str,
        action: str,
        user_id: uuid.UUID | None = None,
        resource_type: str | None = None,
        resource_id: str | None = None,
        error_message: str | None = None,
        context: RequestContext | None = None,
    ) -> None:
        await self.record(
            username=username,
            action=action,
            status=AuditStatus.FAILURE,
            user_id=user_id,
            resource_type=resource_type,
            resource_id=resource_id,
            error_message=error_message,
            context=context,
        )

    async def log_error(
        self,
        *,
        username: str,
        action: str,
        user_id: uuid.UUID | None = None,
        resource_type: str | None = None,
        resource_id: str | None = None,
        error_message: str | None = None,
        context: RequestContext | None = None,
    ) -> None:
        await self.record(
            username=username,
            action=action,
            status=AuditStatus.ERROR,
            user_id=user_id,
            resource_type=resource_type,
            resource_id=resource_id,
            error_message=error_message,
            context=context,
        )


async def query_audit_logs(
    session: AsyncSession,
    *,
    user_id: uuid.UUID | None = None,
    username: str | None = None,
    action: str | None = None,
    status: AuditStatus | None = None,
    start_time: datetime | None = None,
    end_time: datetime | None = None,
    page: int = 1,
    page_size: int = 20,
) -> tuple[list[AuditLog], int]:
    """Query audit logs with optional filters.

    Args:
        session: The database session.
        user_id: Filter by user ID.
        username: Filter by (attempted) username.
        action: Filter by action tag.
        status: Filter by outcome.
        start_time: Filter records at or after this timestamp.
        end_time: Filter records at or before this timestamp.
        page: Page number (1-based).
        page_size: Items per page.

    Returns:
        Tuple of (audit log records newest first, total count).
    """
    filters = []
    if user_id is not None:
        filters.append(AuditLog.user_id == user_id)
    if username is not None:
        filters.append(AuditLog.username == username)
    if action is not None:
        filters.append(AuditLog.action == action)
    if status is not None:
        filters.append(AuditLog.status == str(status))
    if start_time is not None:
        filters.append(AuditLog.created_at >= start_time)
    if end_time is not None:
        filters.append(AuditLog.created_at <= end_time)

    total = (await session.execute(select(func.count(AuditLog.id)).where(*filters))).scalar_one()

    offset = (page - 1) * page_size
    query = select(AuditLog).where(*filters).order_by(AuditLog.created_at.desc()).offset(offset).limit(page_size)
    result = await session.execute(query)
    logs = list(result.scalars().all())

    return logs, total
