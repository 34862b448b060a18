"""User service for registration, login and profile operations."""

from typing import Any, Optional

import structlog
from sqlalchemy.exc import IntegrityError

from bugtracker.config import settings
from bugtracker.core.exceptions import AuthenticationError, ConflictError, StoreError
from bugtracker.core.security import (
    create_access_token,
    hash_password,
    needs_rehash,
    verify_password,
)
from bugtracker.models.user import UserRole
from bugtracker.repositories.user import UserRepository
from bugtracker.schemas.user import (
    LoginResponse,
    PasswordChange,
    UserInDB,
    UserLogin,
    UserRegister,
    UserResponse,
    UserUpdate,
)
from bugtracker.store import StoreGateway
from bugtracker.utils.validators import (
    Err,
    Ok,
    ParseResult,
    check_payload,
    check_update_payload,
    is_valid_email,
    is_valid_username,
    missing_fields,
    parse_id,
    to_enum,
    unwrap,
)

logger = structlog.get_logger()

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 128
MAX_EMAIL_LENGTH = 255

ROLE_VALUES = ", ".join(r.value for r in UserRole)


def _parse_username(value: Any) -> ParseResult[str]:
    if not isinstance(value, str) or not is_valid_username(value.strip()):
        return Err(
            "INVALID_USERNAME",
            "Username must be 3-50 characters of letters, digits, underscores or hyphens",
        )
    return Ok(value.strip())


def _parse_email(value: Any) -> ParseResult[str]:
    email = value.strip() if isinstance(value, str) else ""
    if len(email) > MAX_EMAIL_LENGTH or not is_valid_email(email):
        return Err("INVALID_EMAIL", "Invalid email address")
    return Ok(email)


def _parse_password(value: Any, field: str = "Password") -> ParseResult[str]:
    if not isinstance(value, str) or not (
        MIN_PASSWORD_LENGTH <= len(value) <= MAX_PASSWORD_LENGTH
    ):
        return Err(
            "INVALID_PASSWORD",
            f"{field} must be {MIN_PASSWORD_LENGTH}-{MAX_PASSWORD_LENGTH} characters",
        )
    return Ok(value)


def parse_user_register(raw: Any) -> ParseResult[UserRegister]:
    """Parse a registration payload. Passwords are taken verbatim."""
    failure = check_payload(raw, "user")
    if failure:
        return failure

    if missing_fields(raw, ("Username", "Email", "Password")):
        return Err(
            "MISSING_FIELDS",
            "Missing required fields: Username, Email, and Password are required",
        )

    fields: dict[str, Any] = {}
    for name, parsed in (
        ("username", _parse_username(raw["Username"])),
        ("email", _parse_email(raw["Email"])),
        ("password", _parse_password(raw["Password"])),
    ):
        if isinstance(parsed, Err):
            return parsed
        fields[name] = parsed.value

    if raw.get("Role") is not None:
        role = to_enum(UserRole, raw["Role"]) if isinstance(raw["Role"], str) else None
        if role is None:
            return Err("INVALID_ROLE", f"Invalid Role: Must be one of {ROLE_VALUES}")
        fields["role"] = role

    return Ok(UserRegister(**fields))


def parse_user_login(raw: Any) -> ParseResult[UserLogin]:
    failure = check_payload(raw, "login")
    if failure:
        return failure

    username, password = raw.get("Username"), raw.get("Password")
    if not (isinstance(username, str) and username.strip() and isinstance(password, str) and password):
        return Err("MISSING_FIELDS", "Missing required fields: Username and Password are required")

    return Ok(UserLogin(username=username.strip(), password=password))


def parse_user_update(raw: Any) -> ParseResult[UserUpdate]:
    """Parse a partial profile update over Username and Email."""
    failure = check_update_payload(raw)
    if failure:
        return failure

    fields: dict[str, Any] = {}
    if "Username" in raw:
        username = _parse_username(raw["Username"])
        if isinstance(username, Err):
            return username
        fields["username"] = username.value

    if "Email" in raw:
        email = _parse_email(raw["Email"])
        if isinstance(email, Err):
            return email
        fields["email"] = email.value

    return Ok(UserUpdate(**fields))


def parse_password_change(raw: Any) -> ParseResult[PasswordChange]:
    failure = check_payload(raw, "password")
    if failure:
        return failure

    if missing_fields(raw, ("CurrentPassword", "NewPassword")):
        return Err(
            "MISSING_FIELDS",
            "Missing required fields: CurrentPassword and NewPassword are required",
        )

    current = raw["CurrentPassword"]
    if not isinstance(current, str) or not current:
        return Err("INVALID_PASSWORD", "CurrentPassword must be a non-empty string")

    new = _parse_password(raw["NewPassword"], "NewPassword")
    if isinstance(new, Err):
        return new

    return Ok(PasswordChange(current_password=current, new_password=new.value))


def _public(user: UserInDB) -> UserResponse:
    return UserResponse.model_validate(user.model_dump())


def _unique_violation() -> ConflictError:
    """Map a unique-constraint failure that slipped past the pre-check to a 409."""
    return ConflictError(
        message="Username or email already exists",
        code="USER_EXISTS",
    )


class UserService:
    """Service for user operations."""

    def __init__(self, gateway: StoreGateway):
        self.gateway = gateway
        self.users = UserRepository(gateway)

    async def _ensure_unique(
        self,
        users: UserRepository,
        username: Optional[str] = None,
        email: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> None:
        """
        Reject a username or email held by another user.

        Raises:
            ConflictError: If either value is taken
        """
        if username is not None:
            existing = await users.get_by_username(username)
            if existing is not None and existing.user_id != user_id:
                raise ConflictError(
                    message="Username already exists",
                    code="USERNAME_TAKEN",
                    details=[{"field": "Username", "message": "This username is already taken"}],
                )

        if email is not None:
            existing = await users.get_by_email(email)
            if existing is not None and existing.user_id != user_id:
                raise ConflictError(
                    message="Email already exists",
                    code="EMAIL_TAKEN",
                    details=[{"field": "Email", "message": "This email is already registered"}],
                )

    async def register_user(self, raw: Any) -> UserResponse:
        """
        Register a new user.

        Args:
            raw: Untyped payload with Username, Email, Password and optional Role

        Returns:
            The created user without its credential

        Raises:
            ValidationError: If the payload is invalid
            ConflictError: If the username or email already exists
        """
        data = unwrap(parse_user_register(raw))
        password_hash = hash_password(data.password)

        try:
            async with self.gateway.transaction() as tx:
                users = UserRepository(tx)
                await self._ensure_unique(users, username=data.username, email=data.email)
                user = await users.create(
                    {
                        "username": data.username,
                        "email": data.email,
                        "password_hash": password_hash,
                        "role": data.role,
                    }
                )
        except StoreError as exc:
            if isinstance(exc.__cause__, IntegrityError):
                raise _unique_violation() from exc
            raise

        logger.info("user_registered", user_id=user.user_id, role=user.role.value)
        return _public(user)

    async def login_user(self, raw: Any) -> LoginResponse:
        """
        Authenticate by username or email and issue an access token.

        Raises:
            ValidationError: If the payload is missing fields
            AuthenticationError: If the credentials do not match
        """
        data = unwrap(parse_user_login(raw))

        user = await self.users.get_by_username(data.username)
        if user is None and "@" in data.username:
            user = await self.users.get_by_email(data.username)

        if user is None or not verify_password(data.password, user.password_hash):
            logger.warning("login_failed", username=data.username)
            raise AuthenticationError(message="Invalid credentials")

        if needs_rehash(user.password_hash):
            await self.users.update_password(user.user_id, hash_password(data.password))
            logger.info("password_rehashed", user_id=user.user_id)

        token = create_access_token(user_id=user.user_id, role=user.role.value)
        logger.info("user_logged_in", user_id=user.user_id)

        return LoginResponse(
            access_token=token,
            expires_in=settings.access_token_expire_minutes * 60,
            user=_public(user),
        )

    async def get_all_users(self) -> list[UserResponse]:
        return [_public(user) for user in await self.users.get_all()]

    async def get_user_by_id(self, user_id: Any) -> Optional[UserResponse]:
        user = await self.users.get_by_id(unwrap(parse_id(user_id, "user ID")))
        return _public(user) if user is not None else None

    async def get_user_profile(self, user_id: int) -> Optional[UserResponse]:
        """Get the authenticated caller's own record."""
        return await self.get_user_by_id(user_id)

    async def update_user_profile(self, user_id: int, raw: Any) -> Optional[UserResponse]:
        """
        Update the caller's username and/or email.

        Returns:
            The updated user, or None if the user no longer exists

        Raises:
            ValidationError: If the payload is invalid or empty
            ConflictError: If the new username or email is taken
        """
        data = unwrap(parse_user_update(raw))
        fields = data.model_dump(exclude_unset=True)

        try:
            async with self.gateway.transaction() as tx:
                users = UserRepository(tx)
                await self._ensure_unique(
                    users,
                    username=fields.get("username"),
                    email=fields.get("email"),
                    user_id=user_id,
                )
                user = await users.update(user_id, fields)
        except StoreError as exc:
            if isinstance(exc.__cause__, IntegrityError):
                raise _unique_violation() from exc
            raise

        if user is None:
            return None
        logger.info("user_updated", user_id=user_id, fields=sorted(fields))
        return _public(user)

    async def change_password(self, user_id: int, raw: Any) -> bool:
        """
        Replace the caller's password after re-verifying the current one.

        Returns:
            False if the user does not exist, True once the password is stored

        Raises:
            ValidationError: If the payload is invalid
            AuthenticationError: If the current password is incorrect
        """
        data = unwrap(parse_password_change(raw))

        user = await self.users.get_by_id(user_id)
        if user is None:
            return False

        if not verify_password(data.current_password, user.password_hash):
            logger.warning("password_change_failed", user_id=user_id)
            raise AuthenticationError(message="Current password is incorrect")

        await self.users.update_password(user_id, hash_password(data.new_password))
        logger.info("password_changed", user_id=user_id)
        return True
