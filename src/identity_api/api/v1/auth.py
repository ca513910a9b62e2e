"""Authentication API endpoints.

POST /auth/register, POST /auth/login.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from identity_api.api.errors import error_response, validation_error_response
from identity_api.core.context import RequestContext
from identity_api.core.dependencies import (
    get_audit_recorder,
    get_auth_service,
    get_message_catalog,
    get_request_context,
)
from identity_api.lib.i18n import MessageCatalog
from identity_api.lib.validation import validate_login_request, validate_register_request
from identity_api.schemas.auth import LoginRequest, LoginResponse, LoginUser, RegisterRequest, RegisterResponse
from identity_api.schemas.common import ErrorCode, ErrorResponse
from identity_api.services.audit_service import RESOURCE_USER, USER_LOGIN, AuditRecorder
from identity_api.services.auth_service import AuthService, DuplicateUsername

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    responses={400: {"model": ErrorResponse, "description": "Validation error or username taken"}},
)
async def register(
    request: RegisterRequest,
    context: Annotated[RequestContext, Depends(get_request_context)],
    catalog: Annotated[MessageCatalog, Depends(get_message_catalog)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> RegisterResponse | JSONResponse:
    """Register a new user."""
    violations = validate_register_request(request.model_dump())
    if violations:
        return validation_error_response(violations, context, catalog)

    result = await auth.register(request, context)
    if isinstance(result, DuplicateUsername):
        return error_response(ErrorCode.USER_ALREADY_EXISTS, context, catalog)

    return RegisterResponse(
        message=catalog.resolve("auth.register.success", context.locale),
        user_id=result.id,
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        401: {"model": ErrorResponse, "description": "Authentication failed"},
    },
)
async def login(
    request: LoginRequest,
    context: Annotated[RequestContext, Depends(get_request_context)],
    catalog: Annotated[MessageCatalog, Depends(get_message_catalog)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
    audit: Annotated[AuditRecorder, Depends(get_audit_recorder)],
) -> LoginResponse | JSONResponse:
    """Authenticate a user and return a bearer token.

    Unknown users and wrong passwords produce the same 401 body.
    """
    violations = validate_login_request(request.model_dump())
    if violations:
        return validation_error_response(violations, context, catalog)

    username = request.username
    user = await auth.authenticate(username, request.password)
    if user is None:
        await audit.log_failure(
            username=username,
            action=USER_LOGIN,
            resource_type=RESOURCE_USER,
            error_message=ErrorCode.AUTHENTICATION_FAILED.value,
            context=context,
        )
        return error_response(ErrorCode.AUTHENTICATION_FAILED, context, catalog)

    token = auth.issue_token(user)
    await audit.log_success(
        user_id=user.id,
        username=user.username,
        action=USER_LOGIN,
        resource_type=RESOURCE_USER,
        resource_id=str(user.id),
        context=context,
    )
    return LoginResponse(token=token, user=LoginUser.model_validate(user))
