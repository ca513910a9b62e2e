"""Request validation library: explicit field checks run before the service layer.

Public API:
    - ``FieldViolation``: One rejected field with its message key
    - ``validate_register_request``: Check a registration payload
    - ``validate_login_request``: Check a login payload
"""

from identity_api.lib.validation.validators import (
    EMAIL_MAX_LENGTH,
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    FieldViolation,
    validate_login_request,
    validate_register_request,
)

__all__ = [
    "EMAIL_MAX_LENGTH",
    "PASSWORD_MAX_LENGTH",
    "PASSWORD_MIN_LENGTH",
    "USERNAME_MAX_LENGTH",
    "USERNAME_MIN_LENGTH",
    "FieldViolation",
    "validate_login_request",
    "validate_register_request",
]
