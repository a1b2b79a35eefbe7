"""System inspection helpers for basic runtime diagnostics."""

from __future__ import annotations

import os
import platform
import sys
from collections.abc import Callable
from pathlib import Path

BinaryCheck = Callable[[str], bool]


def binary_exists(binary: str, search_path: str | None = None) -> bool:
    """Return True if ``binary`` can be found.

    Absolute paths are checked on disk; anything else is looked up in each
    directory of ``search_path`` (defaults to ``$PATH``).
    """
    if not binary:
        return False
    if binary.startswith("/"):
        return Path(binary).exists()

    path_value = os.environ.get("PATH", "") if search_path is None else search_path
    for directory in path_value.split(os.pathsep):
        if not directory:
            continue
        if (Path(directory) / binary).exists():
            return True
    return False


def inspect_system(desktops: list[str] | None = None) -> dict[str, str]:
    """Return lightweight host information."""
    return {
        "platform": platform.platform(),
        "python_version": sys.version.split()[0],
        "cwd": str(Path.cwd()),
        "desktops": ":".join(desktops or []),
    }
