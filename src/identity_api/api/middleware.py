"""CORS, security headers, and request correlation middleware."""

import time
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from identity_api.core.config import Settings
from identity_api.core.context import REQUEST_ID_HEADER, new_request_id

_DEFAULT_TRUSTED_HEADERS = ["X-Forwarded-For", "X-Real-IP"]
_MAX_REQUEST_ID_LENGTH = 100


def get_client_ip(request: Request, trusted_headers: list[str] | None = None) -> str:
    """Extract the real client IP from proxy headers or direct connection.

    Checks headers in priority order. For X-Forwarded-For, uses the
    leftmost (client-supplied) IP. Falls back to request.client.host.

    Args:
        request: The incoming Starlette request.
        trusted_headers: Ordered list of header names to check.
            Defaults to ["X-Forwarded-For", "X-Real-IP"].

    Returns:
        The client IP address string, or "unknown" if not determinable.
    """
    headers = trusted_headers if trusted_headers is not None else _DEFAULT_TRUSTED_HEADERS

    for header in headers:
        value = request.headers.get(header, "").strip()
        if not value:
            continue
        # X-Forwarded-For can contain multiple IPs: "client, proxy1, proxy2"
        if header.lower() == "x-forwarded-for":
            return value.split(",")[0].strip()
        return value

    if request.client:
        return request.client.host
    return "unknown"


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS middleware on the FastAPI app.

    Args:
        app: The FastAPI application.
        settings: Application settings.
    """
    kwargs: dict[str, Any] = {
        "allow_credentials": True,
        "allow_methods": ["*"],
        "allow_headers": ["*"],
        "expose_headers": [REQUEST_ID_HEADER],
    }
    if settings.cors_origin_list:
        kwargs["allow_origins"] = settings.cors_origin_list
    if settings.cors_origin_regex.strip():
        kwargs["allow_origin_regex"] = settings.cors_origin_regex.strip()
    app.add_middleware(CORSMiddleware, **kwargs)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        response.headers["Cache-Control"] = "no-store"
        return response


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assign a correlation id to every request and log its outcome.

    A client-supplied ``X-Request-ID`` is reused when present and sane;
    otherwise a UUID is generated.  The id and the resolved client IP are
    stored on ``request.state`` for the request-context dependency, and the
    id is echoed on the response.
    """

    def __init__(self, app: ASGIApp, trusted_proxy_headers: list[str] | None = None) -> None:
        super().__init__(app)
        self.trusted_proxy_headers = trusted_proxy_headers

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Tag the request, time it, and log request and response lines.

        Args:
            request: The incoming request.
            call_next: The next middleware/handler.

        Returns:
            Response with the ``X-Request-ID`` header set.
        """
        request_id = request.headers.get(REQUEST_ID_HEADER, "").strip()
        if not request_id or len(request_id) > _MAX_REQUEST_ID_LENGTH:
            request_id = new_request_id()
        client_ip = get_client_ip(request, self.trusted_proxy_headers)
        request.state.request_id = request_id
        request.state.client_ip = client_ip

        request_logger = logger.bind(json_output=True, request_id=request_id)
        request_logger.info(f"HTTP Request: {request.method} {request.url.path} from {client_ip}")
        started = time.perf_counter()

        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id
        request_logger.info(
            f"HTTP Response: {request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.0f}ms)"
        )
        return response
