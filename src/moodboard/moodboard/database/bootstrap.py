from __future__ import annotations

import logging
from dataclasses import dataclass

import mysql.connector
from flask import Flask
from sqlalchemy import inspect
from sqlalchemy.engine import make_url
from werkzeug.security import generate_password_hash

from ..core.enums import Role
from ..extensions import db
from .models import UserModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBTarget:
    host: str
    port: int
    user: str
    password: str
    database: str


def _as_target(database_uri: str) -> DBTarget:
    url = make_url(database_uri)
    return DBTarget(
        host=str(url.host or "localhost"),
        port=int(url.port or 3306),
        user=str(url.username or "root"),
        password=str(url.password or ""),
        database=str(url.database or "moodboard_db"),
    )


def ensure_database_exists(database_uri: str) -> None:
    """Create the MySQL database itself; tables are created by SQLAlchemy afterwards."""
    if not database_uri.startswith("mysql"):
        return

    target = _as_target(database_uri)
    conn = mysql.connector.connect(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def init_schema(app: Flask) -> None:
    ensure_database_exists(app.config["SQLALCHEMY_DATABASE_URI"])
    with app.app_context():
        db.create_all()


def ensure_demo_users(app: Flask) -> None:
    demo_users = [
        ("Admin Demo", "admin", "admin123", Role.ADMIN),
        ("Staff Demo", "staff", "staff123", Role.STAFF),
    ]

    with app.app_context():
        for full_name, username, password, role in demo_users:
            row = UserModel.query.filter_by(username=username).first()
            if row is None:
                row = UserModel(username=username)
                db.session.add(row)
            row.full_name = full_name
            row.password_hash = generate_password_hash(password)
            row.role = role.value
            row.is_active = True
        db.session.commit()
        logger.info("demo users ready: %s", ", ".join(u[1] for u in demo_users))


def list_tables(app: Flask) -> list[str]:
    with app.app_context():
        return sorted(inspect(db.engine).get_table_names())
