"""Enable or disable an autostart entry through its Hidden key."""

from __future__ import annotations

import logging
from pathlib import Path

from desktop_entry.writer import set_hidden_content, write_atomic
from operations.errors import EntryOperationError

logger = logging.getLogger("onset.operations")


def set_entry_enabled(path: Path, enabled: bool) -> None:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise EntryOperationError("Failed to read entry", path) from exc

    try:
        write_atomic(path, set_hidden_content(content, hidden=not enabled))
    except OSError as exc:
        raise EntryOperationError("Failed to update entry", path) from exc

    logger.info("Set autostart entry at %s to %s", path, "enabled" if enabled else "disabled")
