import os

from config.config import build_database_uri, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

SQLALCHEMY_DATABASE_URI = build_database_uri()

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")

TYPING_STORE = os.getenv("TYPING_STORE", "redis")
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
TYPING_TTL_SECONDS = float(os.getenv("TYPING_TTL_SECONDS", "5"))

PERPLEXITY_API_KEY = os.getenv("PERPLEXITY_API_KEY", "")
TITLE_AI_TIMEOUT = float(os.getenv("TITLE_AI_TIMEOUT", "10"))
