from __future__ import annotations

import uuid

from sqlalchemy import event
from sqlalchemy.engine import Engine

from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_PAGE_ICON, DEFAULT_PAGE_TITLE
from ..extensions import db


def new_id() -> str:
    return uuid.uuid4().hex


class UserModel(db.Model):
    __tablename__ = "users"

    user_id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(100), nullable=False)
    username = db.Column(db.String(50), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default="staff")  # staff / admin
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    pages = db.relationship(
        "PageModel",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class PageModel(db.Model):
    __tablename__ = "pages"

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    owner_id = db.Column(
        db.Integer,
        db.ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = db.Column(db.String(255), nullable=False, default=DEFAULT_PAGE_TITLE)
    icon = db.Column(db.String(32), nullable=False, default=DEFAULT_PAGE_ICON)
    order = db.Column("sort_order", db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime(timezone=False), nullable=False, default=now_utc)
    updated_at = db.Column(db.DateTime(timezone=False), nullable=False, default=now_utc)

    owner = db.relationship("UserModel", back_populates="pages")
    blocks = db.relationship(
        "BlockModel",
        back_populates="page",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=lambda: [BlockModel.order, BlockModel.seq],
    )


class BlockModel(db.Model):
    __tablename__ = "blocks"

    # insertion sequence, breaks ties between blocks with the same order
    seq = db.Column(db.Integer, primary_key=True, autoincrement=True)
    id = db.Column(db.String(32), unique=True, nullable=False, index=True, default=new_id)
    page_id = db.Column(
        db.String(32),
        db.ForeignKey("pages.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type = db.Column(db.String(50), nullable=False)
    content = db.Column(db.JSON, nullable=False, default=dict)
    order = db.Column("sort_order", db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime(timezone=False), nullable=False, default=now_utc)
    updated_at = db.Column(db.DateTime(timezone=False), nullable=False, default=now_utc)

    page = db.relationship("PageModel", back_populates="blocks")


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY clauses unless asked per connection.
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
