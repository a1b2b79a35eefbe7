"""Startup delay encoded as a shell wrapper inside Exec.

A delayed command is stored as ``sh -c 'sleep N && exec CMD'``. Single quotes in
CMD are written as ``'\\''`` so the wrapper stays one single-quoted argument.
"""

from __future__ import annotations

import re

DELAY_PATTERN = re.compile(r"^sh -c 'sleep ([0-9]+) && exec (.+)'\Z", re.DOTALL)

_QUOTE = "'"
_ESCAPED_QUOTE = "'\\''"


def wrap_with_delay(exec_line: str, delay_seconds: int) -> str:
    """Wrap a command so it starts ``delay_seconds`` after login."""
    if delay_seconds < 0:
        raise ValueError(f"Delay must not be negative: {delay_seconds}")
    if delay_seconds == 0:
        return exec_line
    escaped = exec_line.replace(_QUOTE, _ESCAPED_QUOTE)
    return f"sh -c 'sleep {delay_seconds} && exec {escaped}'"


def unwrap_delay(exec_line: str) -> tuple[str, int | None]:
    """Return the inner command and delay, or the input unchanged and None."""
    match = DELAY_PATTERN.match(exec_line)
    if match is None:
        return exec_line, None
    command = match.group(2).replace(_ESCAPED_QUOTE, _QUOTE)
    return command, int(match.group(1))


def get_delay(exec_line: str) -> int | None:
    match = DELAY_PATTERN.match(exec_line)
    return int(match.group(1)) if match else None
