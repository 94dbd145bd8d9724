from __future__ import annotations

import importlib
import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from dotenv import load_dotenv

from halaqat.config import get_settings_module
from halaqat.database.bootstrap import DEMO_STAFF, ensure_demo_data
from halaqat.database.connection import DBConfig


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    ensure_demo_data(db_config)

    print(f"OK: Seeded database -> {DBConfig.from_dict(db_config).describe()}")
    for _, email, password, role in DEMO_STAFF:
        print(f"  {role:<16} {email} / {password}")


if __name__ == "__main__":
    main()
