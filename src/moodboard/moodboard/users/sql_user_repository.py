from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy import func

from ..core.enums import Role
from ..database.models import PageModel, UserModel
from ..extensions import db
from .model import User
from .repository import UserRepository


def _to_user(row: UserModel) -> User:
    return User(
        user_id=int(row.user_id),
        full_name=row.full_name,
        username=row.username,
        password_hash=row.password_hash,
        role=Role(row.role),
        is_active=bool(row.is_active),
    )


class SQLUserRepository(UserRepository):
    def get_by_id(self, user_id: int) -> Optional[User]:
        row = db.session.get(UserModel, int(user_id))
        return _to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        row = UserModel.query.filter_by(username=username).first()
        return _to_user(row) if row else None

    def create_user(
        self,
        *,
        full_name: str,
        username: str,
        password_hash: str,
        role: Role,
    ) -> int:
        row = UserModel(
            full_name=full_name,
            username=username,
            password_hash=password_hash,
            role=role.value,
            is_active=True,
        )
        db.session.add(row)
        db.session.commit()
        return int(row.user_id)

    def delete_by_id(self, user_id: int) -> bool:
        row = db.session.get(UserModel, int(user_id))
        if row is None:
            return False
        db.session.delete(row)
        db.session.commit()
        return True

    def list_admin_view(self) -> Sequence[dict]:
        rows = (
            db.session.query(UserModel, func.count(PageModel.id))
            .outerjoin(PageModel, PageModel.owner_id == UserModel.user_id)
            .group_by(UserModel.user_id)
            .order_by(UserModel.user_id.desc())
            .all()
        )
        out: list[dict] = []
        for user, page_count in rows:
            out.append(
                {
                    "userId": user.user_id,
                    "fullName": user.full_name,
                    "username": user.username,
                    "role": user.role,
                    "isActive": bool(user.is_active),
                    "pageCount": int(page_count),
                }
            )
        return out
