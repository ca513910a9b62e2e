"""Authentication Pydantic v2 schemas.

Request schemas are deliberately loose (every field optional) so that field
rules are enforced by ``identity_api.lib.validation`` and reported in the
VALIDATION_ERROR envelope instead of FastAPI's default 422 body.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from identity_api.schemas.common import CamelModel


class RegisterRequest(BaseModel):
    """Registration request."""

    model_config = ConfigDict(extra="ignore")

    username: str | None = Field(default=None, examples=["alice"])
    password: str | None = Field(default=None, examples=["Secret123"])
    email: str | None = Field(default=None, examples=["alice@example.com"])
    role: str | None = Field(default=None, description="ADMIN, USER or SALES (default USER)", examples=["USER"])


class LoginRequest(BaseModel):
    """Login request with username and password."""

    model_config = ConfigDict(extra="ignore")

    username: str | None = None
    password: str | None = None


class RegisterResponse(CamelModel):
    """Successful registration."""

    message: str
    user_id: UUID


class LoginUser(CamelModel):
    """Public identity returned with a token."""

    id: UUID
    username: str
    role: str

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(CamelModel):
    """Bearer token and the authenticated user's public identity."""

    token: str
    user: LoginUser


class MenuItem(BaseModel):
    """A navigation entry authorized for the current role."""

    label: str
    path: str


class MenuResponse(BaseModel):
    """Navigation entries for the current user's role."""

    role: str
    menus: list[MenuItem]
