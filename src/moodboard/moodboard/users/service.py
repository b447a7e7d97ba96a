from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .repository import UserRepository


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    full_name: str
    role: Role


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username((username or "").strip())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")

        return SessionUser(user_id=user.user_id, full_name=user.full_name, role=user.role)

    def load_session_user(self, user_id: int) -> SessionUser:
        user = self._users.get_by_id(int(user_id))
        if not user or not user.is_active:
            raise AuthenticationError("Unauthorized")
        return SessionUser(user_id=user.user_id, full_name=user.full_name, role=user.role)


class UserService:
    """Use case: manage users (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_account(
        self,
        *,
        full_name: str,
        username: str,
        password: str,
        role: Role = Role.STAFF,
    ) -> int:
        full_name = require_non_empty(full_name, "Full name")
        username = require_non_empty(username, "Username")
        require_min_length(password, "Password", 6)

        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")

        if role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be created here")

        return self._users.create_user(
            full_name=full_name,
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
        )

    def list_admin_view(self):
        return self._users.list_admin_view()

    def delete_user(self, *, current_role: Role, user_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Forbidden")

        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if user.role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be deleted")

        if not self._users.delete_by_id(user_id):
            raise NotFoundError("User not found")
