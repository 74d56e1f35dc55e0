"""
Database schema initialization
------------------------------
Creates the restaurants, reviews and users tables.
"""

import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

from sqlalchemy import inspect

from app.db.init_db import init_db
from app.db.session import engine

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)


def init_db_schema() -> None:
    """Create tables and list what exists afterwards."""
    logger.info("creating tables on %s", engine.url.render_as_string(hide_password=True))
    init_db(engine)
    for table_name in sorted(inspect(engine).get_table_names()):
        logger.info("  - %s", table_name)


if __name__ == "__main__":
    try:
        init_db_schema()
    except Exception as exc:  # noqa: BLE001
        logger.error("schema initialization failed: %s", exc)
        sys.exit(1)
