"""Authentication service - registration, login, token checks and profiles."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.portfolio.core.config import get_settings
from src.portfolio.core.exceptions import (
    AuthenticationError,
    ConflictError,
    ValidationError,
)
from src.portfolio.core.logging import get_logger
from src.portfolio.core.security import (
    ACCESS_TOKEN_TYPE,
    DUMMY_PASSWORD_HASH,
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)
from src.portfolio.models import User, UserRole
from src.portfolio.models.base import utc_now
from src.portfolio.repositories import Page, UserRepository
from src.portfolio.schemas.auth import AuthResponse, RegisterRequest
from src.portfolio.schemas.pagination import ListParams
from src.portfolio.schemas.user import ProfileUpdate, UserRead

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
INVALID_TOKEN = "Invalid or expired token"


class AuthService:
    """Issues and checks session tokens for portfolio administrators."""

    def __init__(self, user_repo: UserRepository, session: AsyncSession):
        self.user_repo = user_repo
        self.session = session

    def _auth_response(self, user: User, message: str) -> AuthResponse:
        token = create_access_token(user.id, user.email, user.role)
        return AuthResponse(
            message=message,
            user=UserRead.model_validate(user),
            token=token,
            expires_in=get_settings().access_token_expires_in,
        )

    async def _ensure_unique(
        self, email: str | None, username: str | None, exclude_id: UUID | None = None
    ) -> None:
        if email is not None:
            existing = await self.user_repo.get_by_email(email)
            if existing is not None and existing.id != exclude_id:
                raise ConflictError("Email already registered")
        if username is not None:
            existing = await self.user_repo.get_by_username(username)
            if existing is not None and existing.id != exclude_id:
                raise ConflictError("Username already taken")

    async def register(self, data: RegisterRequest) -> AuthResponse:
        """Create an account and sign it in.

        Raises:
            ConflictError: if the email or username is already in use
        """
        await self._ensure_unique(data.email, data.username)

        now = utc_now()
        user = User(
            username=data.username,
            email=data.email,
            hashed_password=hash_password(data.password),
            role=UserRole.ADMIN.value,
            last_login=now,
        )
        self.user_repo.add(user)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError("User with this email or username already exists") from None
        await self.session.refresh(user)

        logger.info("User registered", user_id=str(user.id))
        return self._auth_response(user, "User registered successfully")

    async def authenticate(self, email: str, password: str) -> AuthResponse:
        """Check credentials and issue a token.

        The password is always verified, against a dummy hash when the email is
        unknown, so response timing does not reveal which accounts exist.

        Raises:
            AuthenticationError: wrong credentials or deactivated account
        """
        user = await self.user_repo.get_by_email(email)
        password_hash = user.hashed_password if user else DUMMY_PASSWORD_HASH
        password_valid = verify_password(password, password_hash)

        if user is None or not password_valid:
            logger.info("Login failed", reason="invalid_credentials")
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not user.is_active:
            logger.info("Login failed", reason="inactive", user_id=str(user.id))
            raise AuthenticationError("Account is deactivated")

        user.last_login = utc_now()
        self.user_repo.add(user)
        await self.session.commit()

        logger.info("User logged in", user_id=str(user.id))
        return self._auth_response(user, "Login successful")

    async def verify_token(self, token: str) -> User:
        """Resolve a bearer token to an active user.

        Raises:
            AuthenticationError: bad signature, expired, or the user is gone/inactive
        """
        payload = decode_token(token)
        if payload is None or payload.get("type") != ACCESS_TOKEN_TYPE:
            raise AuthenticationError(INVALID_TOKEN)

        try:
            user_id = UUID(str(payload.get("sub")))
        except ValueError:
            raise AuthenticationError(INVALID_TOKEN) from None

        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise AuthenticationError("User not found")
        if not user.is_active:
            raise AuthenticationError("Account is deactivated")
        return user

    async def update_profile(self, user: User, data: ProfileUpdate) -> User:
        updates = data.model_dump(exclude_unset=True)
        await self._ensure_unique(updates.get("email"), updates.get("username"), user.id)

        for field, value in updates.items():
            if field in {"username", "email"} and value is None:
                continue
            setattr(user, field, value)
        user.updated_at = utc_now()
        self.user_repo.add(user)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError("User with this email or username already exists") from None
        await self.session.refresh(user)

        logger.info("Profile updated", user_id=str(user.id), fields=sorted(updates))
        return user

    async def change_password(self, user: User, current_password: str, new_password: str) -> None:
        """Replace the password after checking the current one.

        Raises:
            ValidationError: if ``current_password`` is wrong
        """
        if not verify_password(current_password, user.hashed_password):
            raise ValidationError("Current password is incorrect")

        user.hashed_password = hash_password(new_password)
        user.updated_at = utc_now()
        self.user_repo.add(user)
        await self.session.commit()
        logger.info("Password changed", user_id=str(user.id))

    async def list_users(self, params: ListParams, role: str | None = None) -> Page[User]:
        return await self.user_repo.find(params, role=role)
