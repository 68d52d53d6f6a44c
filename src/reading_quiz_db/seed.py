"""Catalog seeding CLI — ``reading-quiz-seed``.

Imports a municipality list from CSV into the ``places`` table, replacing
whatever was there.  The CSV needs a name column and a kana reading column;
difficulty is derived from the name's suffix:

    市 (city) → 1,  町 (town) → 2,  村 (village) → 3,  anything else → 2

Examples::

    # Default columns (市町村名 / かな) and Shift_JIS encoding
    uv run reading-quiz-seed data/shichoson.csv

    # UTF-8 file with custom headers
    uv run reading-quiz-seed places.csv --encoding utf-8 \\
        --name-column name --reading-column reading
"""

from __future__ import annotations

import argparse
import asyncio
import csv
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_NAME_COLUMN = "市町村名"
DEFAULT_READING_COLUMN = "かな"

_SUFFIX_DIFFICULTY: dict[str, int] = {"市": 1, "町": 2, "村": 3}
_FALLBACK_DIFFICULTY = 2


def difficulty_for(name: str) -> int:
    """Map a municipality name to a difficulty level by its suffix."""
    for suffix, level in _SUFFIX_DIFFICULTY.items():
        if name.endswith(suffix):
            return level
    return _FALLBACK_DIFFICULTY


def read_places(
    path: Path | str,
    *,
    encoding: str = "cp932",
    name_column: str = DEFAULT_NAME_COLUMN,
    reading_column: str = DEFAULT_READING_COLUMN,
) -> list[dict]:
    """Parse the CSV into place dicts, skipping rows without name or reading."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing CSV file: {path}")

    places: list[dict] = []
    with path.open("r", encoding=encoding, newline="") as f:
        reader = csv.DictReader(f)
        missing = {name_column, reading_column} - set(reader.fieldnames or [])
        if missing:
            raise ValueError(f"CSV is missing columns: {sorted(missing)}")
        for line_no, row in enumerate(reader, start=2):
            name = (row.get(name_column) or "").strip()
            reading = (row.get(reading_column) or "").strip()
            if not name or not reading:
                logger.warning("Skipping line %d: empty name or reading", line_no)
                continue
            places.append(
                {"name": name, "reading": reading, "difficulty": difficulty_for(name)}
            )
    return places


async def run_seed(places: list[dict]) -> int:
    """Replace the catalog with ``places`` and return the inserted count."""
    # Lazy imports to avoid loading DB machinery at module import time
    from reading_quiz_db.engine import dispose_engine, session_scope
    from reading_quiz_db.repository import PlaceRepository

    try:
        async with session_scope() as db:
            inserted = await PlaceRepository().replace_all(db, places)
        logger.info("Seed complete: %d places imported", inserted)
        return inserted
    finally:
        await dispose_engine()


def cli() -> None:
    """Console-script entry point: ``reading-quiz-seed``."""
    parser = argparse.ArgumentParser(
        prog="reading-quiz-seed",
        description="Import place names and readings from CSV.",
    )
    parser.add_argument("csv_path", help="Path to the municipality CSV")
    parser.add_argument(
        "--encoding",
        default="cp932",
        help="File encoding (default: cp932)",
    )
    parser.add_argument("--name-column", default=DEFAULT_NAME_COLUMN)
    parser.add_argument("--reading-column", default=DEFAULT_READING_COLUMN)
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: INFO)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    places = read_places(
        args.csv_path,
        encoding=args.encoding,
        name_column=args.name_column,
        reading_column=args.reading_column,
    )
    if not places:
        print("No places found in CSV; catalog left unchanged.", file=sys.stderr)
        sys.exit(1)

    inserted = asyncio.run(run_seed(places))
    print(f"Imported places: {inserted}")
    sys.exit(0)
