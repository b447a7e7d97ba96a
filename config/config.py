import os
import urllib.parse


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def build_database_uri(default_name: str = "moodboard_db") -> str:
    """MySQL URI from DB_* variables; DATABASE_URL wins when set."""
    explicit = os.getenv("DATABASE_URL")
    if explicit:
        return explicit

    user = os.getenv("DB_USER", "root")
    password = urllib.parse.quote_plus(os.getenv("DB_PASSWORD", ""))
    host = os.getenv("DB_HOST", "localhost")
    port = int(os.getenv("DB_PORT", "3306"))
    name = os.getenv("DB_NAME", default_name)
    return f"mysql+mysqlconnector://{user}:{password}@{host}:{port}/{name}"
