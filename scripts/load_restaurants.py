"""
Restaurant loader
-----------------
Reads restaurants.jsonl and inserts each record into the database.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Iterator

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.models.restaurant import Restaurant
from app.schemas.restaurant import RestaurantCreate

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)


def iter_jsonl(path: Path) -> Iterator[dict]:
    """Yield one dict per non-empty, well-formed JSONL line."""
    with path.open("r", encoding="utf-8") as fp:
        for lineno, line in enumerate(fp, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError:
                logger.warning("line %d is not valid JSON, skipped", lineno)


def load_restaurants(jsonl_path: Path, db: Session) -> tuple[int, int]:
    """Insert restaurants from a JSONL file; returns (loaded, skipped)."""
    loaded = 0
    skipped = 0

    for record in iter_jsonl(jsonl_path):
        try:
            payload = RestaurantCreate.model_validate(record)
        except ValidationError as exc:
            skipped += 1
            logger.warning("skip %r: %s", record.get("name"), exc.errors()[0]["msg"])
            continue

        try:
            db.add(Restaurant(**payload.model_dump()))
            db.commit()
        except Exception:
            db.rollback()
            raise
        loaded += 1
        if loaded % 50 == 0:
            logger.info("%d restaurants loaded...", loaded)

    return loaded, skipped


def main() -> None:
    parser = argparse.ArgumentParser(description="restaurants.jsonl -> database")
    parser.add_argument(
        "--file",
        type=Path,
        default=Path("restaurants.jsonl"),
        help="restaurant JSONL path (default: ./restaurants.jsonl)",
    )
    args = parser.parse_args()

    if not args.file.exists():
        raise SystemExit(f"file not found: {args.file}")

    db = SessionLocal()
    try:
        loaded, skipped = load_restaurants(args.file, db)
        logger.info("done: %d loaded, %d skipped", loaded, skipped)
    finally:
        db.close()


if __name__ == "__main__":
    main()
