"""Scanner for launchable applications across XDG data directories."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from core.system_inspector import BinaryCheck, binary_exists
from desktop_entry.parser import is_valid_desktop_entry, parse_desktop_entry
from discovery.autostart import DESKTOP_SUFFIX
from model.application import Application

logger = logging.getLogger("onset.discovery")


def _walk_desktop_files(directory: Path) -> Iterator[Path]:
    try:
        children = sorted(directory.iterdir())
    except OSError as exc:
        logger.debug("Cannot list %s: %s", directory, exc)
        return
    for child in children:
        if child.is_dir():
            yield from _walk_desktop_files(child)
        elif child.suffix == DESKTOP_SUFFIX and child.is_file():
            yield child


def _load_application(path: Path, binary_check: BinaryCheck) -> Application | None:
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    if not is_valid_desktop_entry(content):
        return None

    entry = parse_desktop_entry(content)
    if entry.hidden or entry.no_display:
        return None
    if entry.try_exec and not binary_check(entry.try_exec):
        return None
    return Application.from_desktop_entry(path.stem, entry)


def discover_applications(
    directories: Iterable[Path],
    binary_check: BinaryCheck = binary_exists,
) -> list[Application]:
    """Collect applications from ``directories`` in priority order.

    The first directory to provide an accepted entry for an id wins; later
    files with the same id are ignored.
    """
    applications: list[Application] = []
    seen_ids: set[str] = set()

    for directory in directories:
        if not directory.is_dir():
            continue
        for path in _walk_desktop_files(directory):
            if path.stem in seen_ids:
                continue
            app = _load_application(path, binary_check)
            if app is None:
                continue
            seen_ids.add(app.id)
            applications.append(app)

    applications.sort(key=lambda app: app.name.lower())
    logger.debug("Discovered %d applications", len(applications))
    return applications


def find_application(applications: Iterable[Application], app_id: str) -> Application | None:
    for app in applications:
        if app.id == app_id:
            return app
    return None
