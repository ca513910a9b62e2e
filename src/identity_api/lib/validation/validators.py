"""Field validators for registration and login payloads.

Each validator returns every violation it finds rather than stopping at the
first, so a client can fix all fields in one round trip.  Messages are
message-catalog keys; the HTTP layer localizes them.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from email_validator import EmailNotValidError, validate_email

from identity_api.models.user import UserRole

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 100

_USERNAME_PATTERN = re.compile(r"[a-zA-Z0-9_]+")
_PASSWORD_PATTERN = re.compile(r"(?=.*[a-z])(?=.*[A-Z])(?=.*[0-9]).*")


@dataclass(frozen=True)
class FieldViolation:
    """A single rejected field.

    Attributes:
        field: Name of the offending field.
        message: Message-catalog key describing the problem.
        rejected_value: The submitted value (never set for passwords).
    """

    field: str
    message: str
    rejected_value: Any = None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _check_string(data: Mapping[str, Any], name: str, *, secret: bool = False) -> FieldViolation | None:
    value = data.get(name)
    if value is not None and not isinstance(value, str):
        return FieldViolation(name, "validation.type.string", None if secret else value)
    return None


def validate_register_request(data: Mapping[str, Any]) -> list[FieldViolation]:
    """Validate a registration payload.

    Args:
        data: Mapping with ``username``, ``password``, ``email`` and
            optional ``role`` (defaults to USER when absent).

    Returns:
        List of violations; empty when the payload is acceptable.
    """
    violations: list[FieldViolation] = []
    for name in ("username", "password", "email", "role"):
        type_violation = _check_string(data, name, secret=name == "password")
        if type_violation is not None:
            violations.append(type_violation)
    if violations:
        return violations

    username = data.get("username")
    if _is_blank(username):
        violations.append(FieldViolation("username", "validation.username.required", username))
    else:
        if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
            violations.append(FieldViolation("username", "validation.username.size", username))
        if not _USERNAME_PATTERN.fullmatch(username):
            violations.append(FieldViolation("username", "validation.username.pattern", username))

    password = data.get("password")
    if _is_blank(password):
        violations.append(FieldViolation("password", "validation.password.required"))
    else:
        if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
            violations.append(FieldViolation("password", "validation.password.size"))
        if not _PASSWORD_PATTERN.fullmatch(password):
            violations.append(FieldViolation("password", "validation.password.pattern"))

    email = data.get("email")
    if _is_blank(email):
        violations.append(FieldViolation("email", "validation.email.required", email))
    else:
        if len(email) > EMAIL_MAX_LENGTH:
            violations.append(FieldViolation("email", "validation.email.size", email))
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError:
            violations.append(FieldViolation("email", "validation.email.invalid", email))

    role = data.get("role")
    if role is not None and role not in UserRole.__members__:
        violations.append(FieldViolation("role", "validation.role.invalid", role))

    return violations


def validate_login_request(data: Mapping[str, Any]) -> list[FieldViolation]:
    """Validate a login payload.

    Only presence and upper bounds are checked; credential policy is not
    re-applied at login.

    Args:
        data: Mapping with ``username`` and ``password``.

    Returns:
        List of violations; empty when the payload is acceptable.
    """
    violations: list[FieldViolation] = []
    for name in ("username", "password"):
        type_violation = _check_string(data, name, secret=name == "password")
        if type_violation is not None:
            violations.append(type_violation)
    if violations:
        return violations

    username = data.get("username")
    if _is_blank(username):
        violations.append(FieldViolation("username", "validation.username.required", username))
    elif len(username) > USERNAME_MAX_LENGTH:
        violations.append(FieldViolation("username", "validation.login.username.size", username))

    password = data.get("password")
    if _is_blank(password):
        violations.append(FieldViolation("password", "validation.password.required"))
    elif len(password) > PASSWORD_MAX_LENGTH:
        violations.append(FieldViolation("password", "validation.login.password.size"))

    return violations
