from __future__ import annotations

import importlib
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask
from sqlalchemy.engine import make_url

from config import get_settings_module

from .common.logging_setup import configure_logging
from .container import build_container
from .database.bootstrap import ensure_demo_users, init_schema, list_tables
from .extensions import db
from .messages.controller import register as register_messages
from .pages.controller import register as register_pages
from .users.controller import register as register_users

SETTING_KEYS = (
    "SECRET_KEY",
    "SQLALCHEMY_DATABASE_URI",
    "DEBUG",
    "TESTING",
    "AUTO_INIT_DB",
    "AUTO_SEED_DB",
    "LOG_LEVEL",
    "TYPING_STORE",
    "REDIS_URL",
    "TYPING_TTL_SECONDS",
    "PERPLEXITY_API_KEY",
    "TITLE_AI_TIMEOUT",
)


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    for key in SETTING_KEYS:
        if hasattr(settings, key):
            app.config[key] = getattr(settings, key)
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    if overrides:
        app.config.update(overrides)
    app.secret_key = app.config["SECRET_KEY"]

    logger = configure_logging(app.config.get("LOG_LEVEL"))
    if app.config.get("DEBUG"):
        logger.info(
            "settings=%s db=%s",
            settings_module,
            make_url(app.config["SQLALCHEMY_DATABASE_URI"]).render_as_string(hide_password=True),
        )

    db.init_app(app)

    if app.config.get("AUTO_INIT_DB"):
        init_schema(app)
        logger.debug("schema ready (tables=%d)", len(list_tables(app)))
    if app.config.get("AUTO_SEED_DB"):
        ensure_demo_users(app)

    container = build_container(app.config)
    app.extensions["moodboard.container"] = container

    register_users(app, container)
    register_pages(app, container)
    register_messages(app, container)

    return app
