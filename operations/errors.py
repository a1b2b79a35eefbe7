"""Typed failures raised by entry operations."""

from __future__ import annotations

from pathlib import Path


class EntryOperationError(RuntimeError):
    """A create/edit/toggle/delete operation failed on ``path``."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class InvalidEntryIdError(ValueError):
    """The requested entry id is empty."""
