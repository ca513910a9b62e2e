"""Password hashing and bearer token issuance.

Uses passlib with bcrypt for password hashing and PyJWT for signed tokens.
Both objects are built once at startup from Settings and shared read-only
across requests.
"""

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import jwt
from passlib.context import CryptContext

from identity_api.core.config import Settings

if TYPE_CHECKING:
    from identity_api.models.user import User


class PasswordHasher:
    """Adaptive one-way password hashing (bcrypt, configurable work factor)."""

    def __init__(self, rounds: int = 12) -> None:
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordHasher":
        return cls(rounds=settings.bcrypt_rounds)

    def hash(self, password: str) -> str:
        """Hash a plaintext password using bcrypt.

        A fresh salt is generated per call and embedded in the returned
        modular-crypt string, so two hashes of one password differ.

        Args:
            password: The plaintext password to hash.

        Returns:
            The bcrypt-hashed password string.
        """
        return self._context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a plaintext password against a bcrypt hash.

        Args:
            plain_password: The plaintext password to verify.
            hashed_password: The bcrypt hash to verify against.

        Returns:
            True if the password matches, False otherwise (including when
            the stored hash is empty or malformed).
        """
        if not hashed_password:
            return False
        try:
            return self._context.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            return False

    def dummy_verify(self) -> None:
        """Spend the time of one verification without checking anything.

        Called on the unknown-user login path so its latency matches the
        wrong-password path.
        """
        self._context.dummy_verify()


class TokenIssuer:
    """Builds signed, stateless bearer tokens for authenticated users."""

    def __init__(
        self,
        *,
        secret_key: str,
        issuer: str,
        algorithm: str = "HS256",
        expire_hours: int = 24,
    ) -> None:
        self._secret_key = secret_key
        self._issuer = issuer
        self._algorithm = algorithm
        self._lifetime = timedelta(hours=expire_hours)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            secret_key=settings.jwt_secret_key,
            issuer=settings.jwt_issuer,
            algorithm=settings.jwt_algorithm,
            expire_hours=settings.jwt_token_expire_hours,
        )

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def generate_token(self, user: "User", *, now: datetime | None = None) -> str:
        """Create a signed bearer token for a user.

        Args:
            user: The authenticated user.
            now: Issuance time; defaults to the current UTC time.

        Returns:
            The encoded JWT string.
        """
        # JWT timestamps are whole seconds; truncate so exp - iat is exact.
        issued_at = (now or datetime.now(UTC)).replace(microsecond=0)
        role = str(user.role)
        payload: dict[str, Any] = {
            "iss": self._issuer,
            "sub": user.username,
            "upn": user.username,
            "groups": [role],
            "role": role,
            "userId": str(user.id),
            "email": user.email,
            "iat": issued_at,
            "exp": issued_at + self._lifetime,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def decode_token(self, token: str) -> dict[str, Any]:
        """Decode and validate a token issued by this issuer.

        Args:
            token: The JWT string to decode.

        Returns:
            The decoded token payload.

        Raises:
            jwt.ExpiredSignatureError: If the token has expired.
            jwt.InvalidIssuerError: If the token was issued elsewhere.
            jwt.InvalidTokenError: If the token is otherwise invalid.
        """
        return jwt.decode(
            token,
            self._secret_key,
            algorithms=[self._algorithm],
            issuer=self._issuer,
            options={"require": ["exp", "iat", "sub"]},
        )
