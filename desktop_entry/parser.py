"""Line-oriented parser for the Desktop Entry subset.

Only the ``[Desktop Entry]`` group contributes to the structured result. Other
groups, comments and unknown keys are ignored here and preserved by the
content-preserving writer.
"""

from __future__ import annotations

import re
from pathlib import Path

from desktop_entry.types import DesktopEntry

DESKTOP_ENTRY_GROUP = "[Desktop Entry]"

BOOL_KEYS = {"Hidden": "hidden", "Terminal": "terminal", "NoDisplay": "no_display"}
LIST_KEYS = {
    "OnlyShowIn": "only_show_in",
    "NotShowIn": "not_show_in",
    "Categories": "categories",
    "Keywords": "keywords",
}
STRING_KEYS = {"Exec": "exec", "Icon": "icon", "TryExec": "try_exec"}
ESCAPED_KEYS = {"Name": "name", "Comment": "comment"}

_ESCAPE_RE = re.compile(r"\\([ntr\\])")
_UNESCAPED = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\"}


def unescape_value(value: str) -> str:
    """Decode ``\\n``, ``\\t``, ``\\r`` and ``\\\\`` in a single pass."""
    return _ESCAPE_RE.sub(lambda match: _UNESCAPED[match.group(1)], value)


def escape_value(value: str) -> str:
    """Inverse of :func:`unescape_value`."""
    return (
        value.replace("\\", "\\\\")
        .replace("\n", "\\n")
        .replace("\t", "\\t")
        .replace("\r", "\\r")
    )


def split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(";") if item.strip()]


def join_list(values: list[str]) -> str:
    return ";".join(values) + ";"


def split_lines(content: str) -> list[str]:
    """Split on ``\\n`` only, dropping one trailing ``\\r`` per line.

    Other separators ``str.splitlines`` honours (form feed, ``\\u2028``...) are
    ordinary value characters in a desktop file.
    """
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def split_key_value(line: str) -> tuple[str, str] | None:
    """Split a trimmed ``Key=Value`` line, or return None when there is no ``=``."""
    if "=" not in line:
        return None
    key, value = line.split("=", 1)
    return key.strip(), value.strip()


def is_group_header(line: str) -> bool:
    return line.startswith("[")


def parse_desktop_entry(content: str) -> DesktopEntry:
    """Parse the recognised keys of the [Desktop Entry] group."""
    fields: dict[str, object] = {}
    in_group = False

    for raw_line in split_lines(content):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if is_group_header(line):
            in_group = line == DESKTOP_ENTRY_GROUP
            continue
        if not in_group:
            continue

        pair = split_key_value(line)
        if pair is None:
            continue
        key, value = pair

        if key in ESCAPED_KEYS:
            fields[ESCAPED_KEYS[key]] = unescape_value(value)
        elif key in STRING_KEYS:
            fields[STRING_KEYS[key]] = value
        elif key in BOOL_KEYS:
            fields[BOOL_KEYS[key]] = value.lower() == "true"
        elif key in LIST_KEYS:
            fields[LIST_KEYS[key]] = split_list(value)

    return DesktopEntry(**fields)


def parse_desktop_file(path: Path) -> tuple[DesktopEntry, str]:
    """Read and parse a desktop file, returning the entry and its raw text."""
    content = path.read_text(encoding="utf-8")
    return parse_desktop_entry(content), content


def is_valid_desktop_entry(content: str) -> bool:
    """Return True for an Application entry with non-empty Name and Exec."""
    type_is_application = False
    has_name = False
    has_exec = False
    in_group = False

    for raw_line in split_lines(content):
        line = raw_line.strip()
        if line == DESKTOP_ENTRY_GROUP:
            in_group = True
            continue
        if is_group_header(line):
            in_group = False
            continue
        if not in_group:
            continue

        pair = split_key_value(line)
        if pair is None:
            continue
        key, value = pair
        if key == "Type":
            type_is_application = value == "Application"
        elif key == "Name":
            has_name = bool(value)
        elif key == "Exec":
            has_exec = bool(value)

    return type_is_application and has_name and has_exec
