"""JSON Storage - Persistence for the day log.

This module handles all file I/O for the day log.
All I/O is contained here; business logic is in the core module.
"""

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from ..core.errors import ParseFailure, PersistenceFailure
from ..core.models import Day


logger = logging.getLogger(__name__)

_days_adapter = TypeAdapter(list[Day])


def load_days(path: str | Path) -> list[Day]:
    """Load all recorded days from a JSON file.

    Args:
        path: Location of the day log file

    Returns:
        Days in file order, or an empty list if the file does not exist

    Raises:
        PersistenceFailure: If the file exists but cannot be read
        ParseFailure: If the file content is not a valid day log or repeats a date
    """
    path = Path(path)
    if not path.exists():
        logger.info("No day log at %s, starting with empty history", path)
        return []

    logger.debug("Loading day log from %s", path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        logger.error("Failed to read day log: %s", str(e))
        raise PersistenceFailure(f"Could not read {path}: {e}") from e

    try:
        days = _days_adapter.validate_json(raw)
    except ValidationError as e:
        logger.error("Malformed day log %s: %s", path, str(e))
        raise ParseFailure(f"Malformed day log {path}: {e}") from e

    seen = set()
    for day in days:
        if day.date in seen:
            logger.error("Day log %s records %s more than once", path, day.date)
            raise ParseFailure(f"Malformed day log {path}: duplicate date {day.date}")
        seen.add(day.date)

    logger.debug("Loaded %d days", len(days))
    return days


def save_days(path: str | Path, days: list[Day]) -> None:
    """Write all days to a JSON file, replacing its content.

    Args:
        path: Location of the day log file
        days: Every recorded day, in registry order

    Raises:
        PersistenceFailure: If the file cannot be written
    """
    path = Path(path)
    logger.debug("Saving %d days to %s", len(days), path)
    try:
        path.write_bytes(_days_adapter.dump_json(days, indent=2))
    except OSError as e:
        logger.error("Failed to save day log: %s", str(e))
        raise PersistenceFailure(f"Could not write {path}: {e}") from e
