"""Autostart entry record."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from desktop_entry.types import DesktopEntry, EffectiveState
from operations.delay import get_delay, unwrap_delay


@dataclass(frozen=True)
class AutostartEntry:
    """One autostart file as loaded from disk.

    ``raw_content`` is the verbatim file text used as the base for
    content-preserving edits. Values are rebuilt by a fresh scan after every
    write rather than mutated in place.
    """

    id: str
    path: Path
    desktop_entry: DesktopEntry
    effective_state: EffectiveState
    raw_content: str

    @property
    def name(self) -> str:
        return self.desktop_entry.name

    @property
    def delay_seconds(self) -> int | None:
        return get_delay(self.desktop_entry.exec)

    @property
    def base_exec(self) -> str:
        command, _ = unwrap_delay(self.desktop_entry.exec)
        return command

    @property
    def is_enabled(self) -> bool:
        return not self.desktop_entry.hidden

    def matches_search(self, query: str) -> bool:
        needle = query.strip().lower()
        if not needle:
            return True
        entry = self.desktop_entry
        return (
            needle in entry.name.lower()
            or needle in (entry.comment or "").lower()
            or needle in entry.exec.lower()
        )


def filter_entries(entries: list[AutostartEntry], query: str) -> list[AutostartEntry]:
    return [entry for entry in entries if entry.matches_search(query)]
