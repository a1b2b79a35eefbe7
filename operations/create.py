"""Create new autostart entries."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from desktop_entry.types import CreateOptions
from desktop_entry.writer import sanitize_id, write_desktop_entry
from model.application import Application
from operations.errors import EntryOperationError, InvalidEntryIdError

logger = logging.getLogger("onset.operations")

MAX_SUFFIX_PROBES = 1000


def find_unique_path(autostart_dir: Path, base_id: str) -> Path:
    """Return a path under ``autostart_dir`` that does not exist yet."""
    base_path = autostart_dir / f"{base_id}.desktop"
    if not base_path.exists():
        return base_path

    for index in range(1, MAX_SUFFIX_PROBES):
        candidate = autostart_dir / f"{base_id}_{index}.desktop"
        if not candidate.exists():
            return candidate

    return autostart_dir / f"{base_id}_{int(time.time())}.desktop"


def create_autostart_entry(
    autostart_dir: Path,
    entry_id: str,
    name: str,
    exec_line: str,
    options: CreateOptions | None = None,
) -> Path:
    """Write a new entry and return its path; existing files are never overwritten."""
    if not entry_id.strip():
        raise InvalidEntryIdError("Entry id must not be empty.")
    if not name.strip():
        raise ValueError("Entry name must not be empty.")
    if not exec_line.strip():
        raise ValueError("Entry command must not be empty.")

    options = options or CreateOptions()
    path = find_unique_path(autostart_dir, sanitize_id(entry_id))
    try:
        write_desktop_entry(path, name, exec_line, options)
    except OSError as exc:
        raise EntryOperationError("Failed to create autostart entry", path) from exc

    logger.info("Created autostart entry: %s", path)
    return path


def create_from_application(autostart_dir: Path, app: Application) -> Path:
    """Add a catalog application to autostart, keeping its icon and comment."""
    options = CreateOptions(icon=app.icon, comment=app.comment)
    return create_autostart_entry(autostart_dir, app.id, app.name, app.exec, options)
