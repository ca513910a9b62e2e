"""Unit tests for password hashing and bearer token issuance."""

import uuid
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import jwt as pyjwt
import pytest

from identity_api.core.security import PasswordHasher, TokenIssuer

SECRET = "test-secret-key-for-testing-32-characters"
ISSUER = "https://identity-api.test/issuer"


def _user(**overrides: object) -> MagicMock:
    user = MagicMock()
    user.id = uuid.uuid4()
    user.username = "alice"
    user.email = "alice@example.com"
    user.role = "SALES"
    for key, value in overrides.items():
        setattr(user, key, value)
    return user


class TestPasswordHasher:
    """Tests for PasswordHasher."""

    @pytest.fixture
    def hasher(self) -> PasswordHasher:
        return PasswordHasher(rounds=4)

    def test_hash_is_not_plaintext(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("Secret123")
        assert hashed != "Secret123"
        assert hashed.startswith("$2b$")

    def test_hash_is_salted(self, hasher: PasswordHasher) -> None:
        assert hasher.hash("Secret123") != hasher.hash("Secret123")

    def test_hash_embeds_work_factor(self) -> None:
        assert PasswordHasher(rounds=5).hash("Secret123").startswith("$2b$05$")

    def test_verify_correct_password(self, hasher: PasswordHasher) -> None:
        assert hasher.verify("Secret123", hasher.hash("Secret123")) is True

    def test_verify_wrong_password(self, hasher: PasswordHasher) -> None:
        assert hasher.verify("secret123", hasher.hash("Secret123")) is False

    def test_verify_empty_hash(self, hasher: PasswordHasher) -> None:
        assert hasher.verify("Secret123", "") is False

    def test_verify_malformed_hash(self, hasher: PasswordHasher) -> None:
        assert hasher.verify("Secret123", "not-a-bcrypt-hash") is False

    def test_dummy_verify_does_not_raise(self, hasher: PasswordHasher) -> None:
        hasher.dummy_verify()

    def test_from_settings_uses_configured_rounds(self, settings) -> None:
        assert PasswordHasher.from_settings(settings).hash("Secret123").startswith("$2b$04$")


class TestTokenIssuer:
    """Tests for TokenIssuer."""

    @pytest.fixture
    def issuer(self) -> TokenIssuer:
        return TokenIssuer(secret_key=SECRET, issuer=ISSUER)

    def test_token_claims(self, issuer: TokenIssuer) -> None:
        user = _user()
        payload = issuer.decode_token(issuer.generate_token(user))
        assert payload["iss"] == ISSUER
        assert payload["sub"] == "alice"
        assert payload["upn"] == "alice"
        assert payload["groups"] == ["SALES"]
        assert payload["role"] == "SALES"
        assert payload["userId"] == str(user.id)
        assert payload["email"] == "alice@example.com"

    def test_token_lifetime_is_24_hours(self, issuer: TokenIssuer) -> None:
        payload = issuer.decode_token(issuer.generate_token(_user()))
        assert payload["exp"] - payload["iat"] == 24 * 3600

    def test_custom_lifetime(self) -> None:
        issuer = TokenIssuer(secret_key=SECRET, issuer=ISSUER, expire_hours=1)
        assert issuer.lifetime == timedelta(hours=1)
        payload = issuer.decode_token(issuer.generate_token(_user()))
        assert payload["exp"] - payload["iat"] == 3600

    def test_iat_uses_supplied_time(self, issuer: TokenIssuer) -> None:
        now = datetime.now(UTC).replace(microsecond=123456)
        payload = issuer.decode_token(issuer.generate_token(_user(), now=now))
        assert payload["iat"] == int(now.replace(microsecond=0).timestamp())

    def test_expired_token_rejected(self, issuer: TokenIssuer) -> None:
        issued = datetime.now(UTC) - timedelta(hours=25)
        token = issuer.generate_token(_user(), now=issued)
        with pytest.raises(pyjwt.ExpiredSignatureError):
            issuer.decode_token(token)

    def test_wrong_secret_rejected(self, issuer: TokenIssuer) -> None:
        other = TokenIssuer(secret_key="another-secret-key-for-testing-32-chars", issuer=ISSUER)
        with pytest.raises(pyjwt.InvalidSignatureError):
            issuer.decode_token(other.generate_token(_user()))

    def test_foreign_issuer_rejected(self, issuer: TokenIssuer) -> None:
        other = TokenIssuer(secret_key=SECRET, issuer="https://elsewhere.test")
        with pytest.raises(pyjwt.InvalidIssuerError):
            issuer.decode_token(other.generate_token(_user()))

    def test_malformed_token_rejected(self, issuer: TokenIssuer) -> None:
        with pytest.raises(pyjwt.DecodeError):
            issuer.decode_token("not.a.valid.token.at.all")

    def test_token_without_subject_rejected(self, issuer: TokenIssuer) -> None:
        now = datetime.now(UTC)
        token = pyjwt.encode({"iss": ISSUER, "iat": now, "exp": now + timedelta(hours=1)}, SECRET, algorithm="HS256")
        with pytest.raises(pyjwt.MissingRequiredClaimError):
            issuer.decode_token(token)

    def test_from_settings(self, settings) -> None:
        issuer = TokenIssuer.from_settings(settings)
        payload = issuer.decode_token(issuer.generate_token(_user()))
        assert payload["iss"] == settings.jwt_issuer
