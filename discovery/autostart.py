"""Scanner for the user autostart directory."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from core.system_inspector import BinaryCheck, binary_exists
from desktop_entry.parser import is_valid_desktop_entry, parse_desktop_entry
from desktop_entry.state import effective_state
from model.autostart_entry import AutostartEntry

logger = logging.getLogger("onset.discovery")

DESKTOP_SUFFIX = ".desktop"


def load_autostart_entry(
    path: Path,
    current_desktops: Sequence[str],
    binary_check: BinaryCheck = binary_exists,
) -> AutostartEntry | None:
    """Load one autostart file, or return None when it should be skipped."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Skipping unreadable desktop entry %s: %s", path, exc)
        return None

    if not is_valid_desktop_entry(content):
        logger.debug("Skipping invalid desktop entry: %s", path)
        return None

    desktop_entry = parse_desktop_entry(content)
    return AutostartEntry(
        id=path.stem,
        path=path,
        desktop_entry=desktop_entry,
        effective_state=effective_state(desktop_entry, current_desktops, binary_check),
        raw_content=content,
    )


def discover_autostart_entries(
    directory: Path,
    current_desktops: Sequence[str],
    binary_check: BinaryCheck = binary_exists,
) -> list[AutostartEntry]:
    """Return valid entries of ``directory`` (non-recursive) sorted by name."""
    if not directory.is_dir():
        return []

    try:
        candidates = sorted(directory.iterdir())
    except OSError as exc:
        logger.warning("Cannot list autostart directory %s: %s", directory, exc)
        return []

    entries: list[AutostartEntry] = []
    for path in candidates:
        if path.suffix != DESKTOP_SUFFIX or not path.is_file():
            continue
        entry = load_autostart_entry(path, current_desktops, binary_check)
        if entry is not None:
            entries.append(entry)

    entries.sort(key=lambda entry: entry.desktop_entry.name)
    logger.debug("Loaded %d autostart entries from %s", len(entries), directory)
    return entries


def find_entry(entries: Sequence[AutostartEntry], entry_id: str) -> AutostartEntry | None:
    for entry in entries:
        if entry.id == entry_id:
            return entry
    return None
