"""Apply partial changes to an existing autostart entry."""

from __future__ import annotations

import logging

from desktop_entry.types import EntryChanges
from desktop_entry.writer import update_desktop_entry_content, write_atomic
from model.autostart_entry import AutostartEntry
from operations.errors import EntryOperationError

logger = logging.getLogger("onset.operations")


def edit_autostart_entry(entry: AutostartEntry, changes: EntryChanges) -> None:
    """Persist ``changes`` as a patch over the entry's original file text."""
    if changes.name is not None and not changes.name.strip():
        raise ValueError("Entry name must not be empty.")
    if changes.exec is not None and not changes.exec.strip():
        raise ValueError("Entry command must not be empty.")

    updated = changes.apply_to(entry.desktop_entry)

    delay = changes.delay_seconds
    if delay is None:
        delay = entry.delay_seconds

    content = update_desktop_entry_content(entry.raw_content, updated, delay)
    try:
        write_atomic(entry.path, content)
    except OSError as exc:
        raise EntryOperationError("Failed to save entry", entry.path) from exc

    logger.info("Updated autostart entry: %s", entry.path)
