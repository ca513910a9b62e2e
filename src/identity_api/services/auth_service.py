"""Authentication and registration service.

Orchestrates the credential store, password hasher, token issuer and audit
recorder.  Business outcomes (duplicate username, failed authentication) are
returned as values; only unexpected failures raise.
"""

from dataclasses import dataclass

from loguru import logger

from identity_api.core.context import RequestContext
from identity_api.core.security import PasswordHasher, TokenIssuer
from identity_api.models.user import User, UserRole
from identity_api.schemas.auth import RegisterRequest
from identity_api.schemas.common import ErrorCode
from identity_api.services.audit_service import RESOURCE_USER, USER_REGISTER, AuditRecorder
from identity_api.services.credential_store import CredentialStore, UniqueConstraintViolationError


@dataclass(frozen=True)
class DuplicateUsername:
    """Registration outcome: the requested username is already taken."""

    username: str
    code: ErrorCode = ErrorCode.USER_ALREADY_EXISTS


RegistrationResult = User | DuplicateUsername


class AuthService:
    """Registration and credential verification for one unit of work."""

    def __init__(
        self,
        store: CredentialStore,
        hasher: PasswordHasher,
        token_issuer: TokenIssuer,
        audit: AuditRecorder,
    ) -> None:
        self._store = store
        self._hasher = hasher
        self._token_issuer = token_issuer
        self._audit = audit

    async def register(self, request: RegisterRequest, context: RequestContext | None = None) -> RegistrationResult:
        """Register a new user.

        The request must already have passed ``validate_register_request``.
        The pre-insert lookup only produces a friendly early answer; the
        database unique index decides races, and a violation raised by the
        insert is reported as the same ``DuplicateUsername`` outcome.

        Args:
            request: A validated registration request.
            context: Request correlation data for the audit trail.

        Returns:
            The created User, or DuplicateUsername if the name is taken.
        """
        username = request.username
        logger.info(f"User registration started: username={username}, email={request.email}")

        if await self._store.find_by_username(username) is not None:
            logger.warning(f"User registration rejected, username already exists: username={username}")
            await self._record_duplicate(username, context)
            return DuplicateUsername(username)

        user = User(
            username=username,
            hashed_password=self._hasher.hash(request.password),
            email=request.email,
            role=str(UserRole(request.role) if request.role else UserRole.USER),
            is_active=True,
        )

        try:
            await self._store.insert(user)
        except UniqueConstraintViolationError:
            logger.warning(f"User registration lost a concurrent insert race: username={username}")
            await self._record_duplicate(username, context)
            return DuplicateUsername(username)
        except Exception as exc:
            logger.exception(f"Unexpected error during user registration: username={username}")
            await self._audit.log_error(
                username=username,
                action=USER_REGISTER,
                resource_type=RESOURCE_USER,
                error_message=type(exc).__name__,
                context=context,
            )
            raise

        await self._audit.log_success(
            user_id=user.id,
            username=user.username,
            action=USER_REGISTER,
            resource_type=RESOURCE_USER,
            resource_id=str(user.id),
            context=context,
        )
        logger.info(f"User registration succeeded: user_id={user.id}, username={user.username}")
        return user

    async def authenticate(self, username: str, password: str) -> User | None:
        """Verify a username/password pair.

        Unknown usernames, inactive users and wrong passwords all return
        None so callers cannot reveal which accounts exist.  The caller
        records the login audit entry.

        Args:
            username: The username to authenticate.
            password: The plaintext password.

        Returns:
            The User if authentication succeeds, None otherwise.
        """
        user = await self._store.find_active_by_username(username)
        if user is None:
            self._hasher.dummy_verify()
            return None
        if not self._hasher.verify(password, user.hashed_password):
            return None
        return user

    def issue_token(self, user: User) -> str:
        """Issue a bearer token for an authenticated user."""
        return self._token_issuer.generate_token(user)

    async def _record_duplicate(self, username: str, context: RequestContext | None) -> None:
        await self._audit.log_failure(
            username=username,
            action=USER_REGISTER,
            resource_type=RESOURCE_USER,
            error_message=ErrorCode.USER_ALREADY_EXISTS.value,
            context=context,
        )
