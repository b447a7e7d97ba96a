from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object, no database access code here.
    """

    user_id: int
    full_name: str
    username: str
    password_hash: str
    role: Role
    is_active: bool = True
