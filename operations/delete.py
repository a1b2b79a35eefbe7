"""Remove an autostart entry file."""

from __future__ import annotations

import logging
from pathlib import Path

from operations.errors import EntryOperationError

logger = logging.getLogger("onset.operations")


def delete_autostart_entry(path: Path) -> None:
    """Delete the backing file; the caller drops the entry from its catalog."""
    try:
        path.unlink()
    except OSError as exc:
        raise EntryOperationError("Failed to delete entry", path) from exc
    logger.info("Deleted autostart entry: %s", path)
