"""ORM model registry: import all models so Alembic autogenerate discovers them."""

from identity_api.models.audit_log import AuditLog, AuditStatus
from identity_api.models.user import User, UserRole

__all__ = [
    "AuditLog",
    "AuditStatus",
    "User",
    "UserRole",
]
