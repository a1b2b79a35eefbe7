"""Persistence for desktop entry files.

All writes go through :func:`write_atomic`. Edits to existing files are applied
as a line patch over the original text so that unknown groups, vendor keys and
comments survive untouched.
"""

from __future__ import annotations

import os
import re
import stat
import tempfile
import time
from pathlib import Path

from desktop_entry.parser import (
    DESKTOP_ENTRY_GROUP,
    escape_value,
    is_group_header,
    join_list,
    split_key_value,
    split_lines,
)
from desktop_entry.types import CreateOptions, DesktopEntry
from operations.delay import unwrap_delay, wrap_with_delay

# Keys rewritten by update_desktop_entry_content, in the order new lines are appended.
WRITTEN_KEYS = (
    "Name",
    "Exec",
    "Icon",
    "Comment",
    "Terminal",
    "OnlyShowIn",
    "NotShowIn",
    "Hidden",
)

_ID_INVALID_RE = re.compile(r"[^\w.-]")


def _target_mode(path: Path) -> int:
    """Mode of the existing file, or the umask default for a new one."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_atomic(path: Path, content: str) -> None:
    """Replace ``path`` with ``content`` via a synced sibling temp file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
    except BaseException:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def compose_desktop_entry(name: str, exec_line: str, options: CreateOptions) -> str:
    """Render a fresh entry for a file that does not exist yet."""
    lines = [
        DESKTOP_ENTRY_GROUP,
        "Type=Application",
        f"Name={escape_value(name)}",
        f"Exec={wrap_with_delay(exec_line, options.delay_seconds)}",
    ]
    if options.icon:
        lines.append(f"Icon={options.icon}")
    if options.comment:
        lines.append(f"Comment={escape_value(options.comment)}")
    if options.terminal:
        lines.append("Terminal=true")
    if options.only_show_in:
        lines.append(f"OnlyShowIn={join_list(options.only_show_in)}")
    if options.not_show_in:
        lines.append(f"NotShowIn={join_list(options.not_show_in)}")
    if options.hidden:
        lines.append("Hidden=true")
    return "\n".join(lines) + "\n"


def write_desktop_entry(path: Path, name: str, exec_line: str, options: CreateOptions) -> None:
    write_atomic(path, compose_desktop_entry(name, exec_line, options))


def _render_key(key: str, entry: DesktopEntry, exec_line: str) -> str | None:
    """Render one written key, or None when the line should be dropped."""
    if key == "Name":
        return f"Name={escape_value(entry.name)}"
    if key == "Exec":
        return f"Exec={exec_line}"
    if key == "Icon":
        return f"Icon={entry.icon}" if entry.icon else None
    if key == "Comment":
        return f"Comment={escape_value(entry.comment)}" if entry.comment else None
    if key == "Terminal":
        return "Terminal=true" if entry.terminal else None
    if key == "Hidden":
        return "Hidden=true" if entry.hidden else None
    if key == "OnlyShowIn":
        return f"OnlyShowIn={join_list(entry.only_show_in)}" if entry.only_show_in else None
    if key == "NotShowIn":
        return f"NotShowIn={join_list(entry.not_show_in)}" if entry.not_show_in else None
    raise KeyError(key)


def resolve_exec(entry: DesktopEntry, delay_seconds: int | None) -> str:
    """Re-wrap the entry's command with the requested or carried-forward delay."""
    base_exec, existing_delay = unwrap_delay(entry.exec)
    if delay_seconds is None:
        delay_seconds = existing_delay or 0
    return wrap_with_delay(base_exec, delay_seconds)


def update_desktop_entry_content(
    content: str,
    entry: DesktopEntry,
    delay_seconds: int | None = None,
) -> str:
    """Patch recognised keys of ``content`` in place from ``entry``.

    Lines outside [Desktop Entry] and unrecognised keys are copied verbatim.
    Written keys with an empty value are dropped; written keys with a value but
    no existing line are appended at the end of the group.
    """
    exec_line = resolve_exec(entry, delay_seconds)
    output: list[str] = []
    in_group = False
    seen: set[str] = set()

    def flush_missing() -> None:
        trailing_blanks: list[str] = []
        while output and not output[-1].strip():
            trailing_blanks.insert(0, output.pop())
        for key in WRITTEN_KEYS:
            if key in seen:
                continue
            rendered = _render_key(key, entry, exec_line)
            if rendered is not None:
                output.append(rendered)
            seen.add(key)
        output.extend(trailing_blanks)

    for line in split_lines(content):
        trimmed = line.strip()

        if is_group_header(trimmed):
            if in_group:
                flush_missing()
            in_group = trimmed == DESKTOP_ENTRY_GROUP
            output.append(line)
            continue

        pair = split_key_value(trimmed) if in_group and not trimmed.startswith("#") else None
        if pair is None or pair[0] not in WRITTEN_KEYS:
            output.append(line)
            continue

        key = pair[0]
        if key in seen:
            # Duplicate assignment; the first occurrence already carries the value.
            continue
        seen.add(key)
        rendered = _render_key(key, entry, exec_line)
        if rendered is not None:
            output.append(rendered)

    if in_group:
        flush_missing()

    return "\n".join(output) + "\n"


def set_hidden_content(content: str, hidden: bool) -> str:
    """Rewrite only the Hidden key of the [Desktop Entry] group."""
    output: list[str] = []
    in_group = False
    hidden_written = False

    for line in split_lines(content):
        trimmed = line.strip()

        if is_group_header(trimmed):
            if in_group and hidden and not hidden_written:
                output.append("Hidden=true")
                hidden_written = True
            in_group = trimmed == DESKTOP_ENTRY_GROUP
            output.append(line)
            continue

        if in_group:
            pair = split_key_value(trimmed)
            if pair is not None and pair[0] == "Hidden":
                if hidden and not hidden_written:
                    output.append("Hidden=true")
                    hidden_written = True
                continue

        output.append(line)

    if in_group and hidden and not hidden_written:
        output.append("Hidden=true")

    return "\n".join(output) + "\n"


def sanitize_id(raw_id: str) -> str:
    """Map a human-entered name to a safe filename stem."""
    replaced = _ID_INVALID_RE.sub("_", raw_id)
    collapsed = "_".join(part for part in replaced.split("_") if part)
    if not collapsed or not collapsed.strip(".-"):
        return f"autostart_{int(time.time() * 1000)}"
    return collapsed
