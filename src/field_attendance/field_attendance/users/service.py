from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .identity import TokenIdentityProvider
from .model import User
from .repository import UserRepository


@dataclass(frozen=True)
class LoginResult:
    """What the client keeps after login."""

    token: str
    email: str
    region: Optional[str]
    role: Role


class AuthService:
    """Use cases: login, and resolving bearer credentials to a user."""

    def __init__(self, users: UserRepository, identity: TokenIdentityProvider):
        self._users = users
        self._identity = identity

    def authenticate(self, email: str, password: str) -> LoginResult:
        if not email or not password:
            raise ValidationError("All fields must be filled")

        user = self._users.get_by_email(email.strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError("Incorrect email or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False
        if not ok:
            raise AuthenticationError("Incorrect email or password")

        return LoginResult(
            token=self._identity.issue(user.user_id),
            email=user.email,
            region=user.region,
            role=user.role,
        )

    def current_user(self, authorization: str | None) -> User:
        user_id = self._identity.resolve_header(authorization)
        user = self._users.get_by_id(user_id)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid or expired token")
        return user

    @staticmethod
    def require_admin(user: User) -> None:
        if user.role != Role.ADMIN:
            raise AuthorizationError("Admin access required")


class UserService:
    """Use cases: sign up and look up field users."""

    def __init__(self, users: UserRepository):
        self._users = users

    def signup(
        self,
        *,
        email: str,
        password: str,
        full_name: str,
        phone_number: Optional[str] = None,
        reporting_manager: Optional[str] = None,
        region: Optional[str] = None,
    ) -> User:
        email = require_email(email)
        full_name = require_non_empty(full_name, "Full name")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ValidationError("Email already in use")

        user_id = self._users.create_user(
            email=email,
            password_hash=generate_password_hash(password),
            full_name=full_name,
            role=Role.USER,
            phone_number=(phone_number or "").strip() or None,
            reporting_manager=(reporting_manager or "").strip() or None,
            region=(region or "").strip() or None,
        )
        created = self._users.get_by_id(user_id)
        if not created:
            raise NotFoundError("User not found")
        return created

    def get_by_email(self, email: str) -> User:
        email = require_non_empty(email, "Email").lower()
        user = self._users.get_by_email(email)
        if not user:
            raise NotFoundError("User not found")
        return user

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()
