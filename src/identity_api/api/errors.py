"""Error envelope construction and application-wide exception handlers.

Business errors carry a stable code plus a localized message.  Unexpected
exceptions are logged in full and answered with a generic 500 that never
echoes the underlying cause.
"""

from collections.abc import Iterable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from identity_api.core.context import RequestContext
from identity_api.lib.i18n import MessageCatalog, select_locale
from identity_api.lib.validation import FieldViolation
from identity_api.schemas.common import ErrorCode, ErrorResponse, FieldErrorDetail

_MESSAGE_KEYS: dict[ErrorCode, str] = {
    ErrorCode.VALIDATION_ERROR: "error.validation.error",
    ErrorCode.USER_ALREADY_EXISTS: "error.user.already.exists",
    ErrorCode.AUTHENTICATION_FAILED: "error.authentication.failed",
    ErrorCode.INTERNAL_SERVER_ERROR: "error.internal.server.error",
}

_STATUS_CODES: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.USER_ALREADY_EXISTS: status.HTTP_400_BAD_REQUEST,
    ErrorCode.AUTHENTICATION_FAILED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INTERNAL_SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(
    code: ErrorCode,
    context: RequestContext,
    catalog: MessageCatalog,
    field_errors: list[FieldErrorDetail] | None = None,
) -> JSONResponse:
    """Build the JSON error envelope for a stable error code.

    Args:
        code: The error code; also selects the HTTP status and message.
        context: Current request context (locale and path).
        catalog: Message catalog for localization.
        field_errors: Per-field details for VALIDATION_ERROR.

    Returns:
        A JSONResponse carrying an ErrorResponse body.
    """
    body = ErrorResponse(
        error_code=code,
        message=catalog.resolve(_MESSAGE_KEYS[code], context.locale),
        path=context.path,
        field_errors=field_errors,
    )
    headers = {"WWW-Authenticate": "Bearer"} if code is ErrorCode.AUTHENTICATION_FAILED else None
    return JSONResponse(status_code=_STATUS_CODES[code], content=body.to_content(), headers=headers)


def validation_error_response(
    violations: Iterable[FieldViolation],
    context: RequestContext,
    catalog: MessageCatalog,
) -> JSONResponse:
    """Build a VALIDATION_ERROR response with localized field messages."""
    field_errors = [
        FieldErrorDetail(
            field=v.field,
            message=catalog.resolve(v.message, context.locale),
            rejected_value=v.rejected_value,
        )
        for v in violations
    ]
    logger.warning(f"Validation error on {context.path}: fields={[f.field for f in field_errors]}")
    return error_response(ErrorCode.VALIDATION_ERROR, context, catalog, field_errors)


def _context_from_request(request: Request, catalog: MessageCatalog) -> RequestContext:
    locale = select_locale(
        request.query_params.get("lang"),
        request.headers.get("accept-language"),
        catalog.default_locale,
    )
    return RequestContext(
        request_id=getattr(request.state, "request_id", None) or "",
        locale=locale,
        path=request.url.path,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the VALIDATION_ERROR and INTERNAL_SERVER_ERROR handlers.

    Args:
        app: The FastAPI application.
    """

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        catalog: MessageCatalog = request.app.state.message_catalog
        context = _context_from_request(request, catalog)
        field_errors = []
        for error in exc.errors():
            loc = [str(part) for part in error.get("loc", ()) if part != "body"]
            field_name = loc[-1] if loc and error.get("type") != "json_invalid" else "body"
            rejected = None if field_name in ("password", "body") else error.get("input")
            field_errors.append(FieldErrorDetail(field=field_name, message=error.get("msg", ""), rejected_value=rejected))
        logger.warning(f"Malformed request body on {context.path}: {len(field_errors)} error(s)")
        return error_response(ErrorCode.VALIDATION_ERROR, context, catalog, field_errors)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        catalog: MessageCatalog = request.app.state.message_catalog
        context = _context_from_request(request, catalog)
        logger.opt(exception=exc).error(f"Unexpected error while handling {request.method} {context.path}")
        return error_response(ErrorCode.INTERNAL_SERVER_ERROR, context, catalog)
