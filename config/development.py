import os

from config.config import build_database_uri, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

SQLALCHEMY_DATABASE_URI = build_database_uri()

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, tables are created on startup (create_all is idempotent)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Optional: also create the demo accounts on startup
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")

# Typing indicator storage: "memory" (single process) or "redis"
TYPING_STORE = os.getenv("TYPING_STORE", "memory")
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
TYPING_TTL_SECONDS = float(os.getenv("TYPING_TTL_SECONDS", "5"))

PERPLEXITY_API_KEY = os.getenv("PERPLEXITY_API_KEY", "")
TITLE_AI_TIMEOUT = float(os.getenv("TITLE_AI_TIMEOUT", "10"))
