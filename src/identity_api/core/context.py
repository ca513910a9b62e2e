"""Per-request correlation values passed explicitly down the call chain."""

import uuid
from dataclasses import dataclass, field

REQUEST_ID_HEADER = "X-Request-ID"


def new_request_id() -> str:
    """Generate a fresh request correlation id."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class RequestContext:
    """Correlation data for one inbound request.

    Attributes:
        request_id: Value of ``X-Request-ID`` (client supplied or generated).
        ip_address: Client IP resolved from trusted proxy headers.
        user_agent: Raw ``User-Agent`` header.
        locale: Locale selected for localized messages.
        path: Request path, echoed in error bodies.
    """

    request_id: str = field(default_factory=new_request_id)
    ip_address: str | None = None
    user_agent: str | None = None
    locale: str = "en"
    path: str = ""
