from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendo.attendo.container import build_container

DEFAULT_BREAK_TYPES = [
    ("Lunch", False),
    ("Coffee", True),
    ("Medical appointment", True),
]


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=dict(settings.DB_CONFIG))
    service = container.break_type_service

    existing = {bt.description for bt in service.list_all()}
    created = 0
    for description, computes_as_work_time in DEFAULT_BREAK_TYPES:
        if description not in existing:
            service.create(description=description, computes_as_work_time=computes_as_work_time)
            created += 1

    cfg = container.conn.config
    print(f"OK: Seeded {created} break types -> {cfg.user}@{cfg.host}:{cfg.port}/{cfg.database}")


if __name__ == "__main__":
    main()
