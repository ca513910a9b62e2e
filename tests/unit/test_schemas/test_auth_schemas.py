"""Tests for authentication request and response schemas."""

import uuid
from unittest.mock import MagicMock

from identity_api.schemas.auth import LoginResponse, LoginUser, RegisterRequest, RegisterResponse


class TestRegisterRequest:
    def test_all_fields_optional(self) -> None:
        request = RegisterRequest()
        assert request.username is None
        assert request.role is None

    def test_unknown_fields_ignored(self) -> None:
        request = RegisterRequest(username="alice", is_admin=True)
        assert "is_admin" not in request.model_dump()


class TestResponses:
    def test_register_response_uses_user_id_alias(self) -> None:
        user_id = uuid.uuid4()
        dumped = RegisterResponse(message="ok", user_id=user_id).model_dump(mode="json", by_alias=True)
        assert dumped == {"message": "ok", "userId": str(user_id)}

    def test_login_user_from_orm_object_excludes_secrets(self) -> None:
        user = MagicMock()
        user.id = uuid.uuid4()
        user.username = "alice"
        user.role = "USER"
        user.hashed_password = "$2b$04$secret"

        dumped = LoginResponse(token="t", user=LoginUser.model_validate(user)).model_dump(mode="json", by_alias=True)

        assert dumped["user"] == {"id": str(user.id), "username": "alice", "role": "USER"}
        assert "hashed_password" not in str(dumped)
