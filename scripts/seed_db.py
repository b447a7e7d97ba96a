from __future__ import annotations

import sys
from pathlib import Path

from sqlalchemy.engine import make_url

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.moodboard.moodboard.database.bootstrap import ensure_demo_users, init_schema
from src.moodboard.moodboard.main import create_app


def main() -> None:
    app = create_app({"AUTO_INIT_DB": False, "AUTO_SEED_DB": False})
    init_schema(app)
    ensure_demo_users(app)

    target = make_url(app.config["SQLALCHEMY_DATABASE_URI"]).render_as_string(hide_password=True)
    print(f"OK: Seeded demo users -> {target}")


if __name__ == "__main__":
    main()
