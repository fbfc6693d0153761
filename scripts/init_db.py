"""Create the tables for saved calculations in the configured database."""
from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from transitie.core.config import get_settings  # noqa: E402  (import after sys.path manipulation)
from transitie.core.log import get_logger, shutdown_logging  # noqa: E402
from transitie.db.engine import create_schema, create_sync_engine  # noqa: E402

LOGGER = get_logger(__name__)


def main() -> None:
    settings = get_settings()
    create_schema(create_sync_engine())
    LOGGER.info("Initialised database at %s", settings.database.masked_url)


if __name__ == "__main__":
    try:
        main()
    finally:
        shutdown_logging()
