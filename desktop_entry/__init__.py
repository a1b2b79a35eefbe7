"""Desktop Entry codec, writer and effective-state evaluation."""

from desktop_entry.types import CreateOptions, DesktopEntry, EffectiveState, EntryChanges

__all__ = [
    "CreateOptions",
    "DesktopEntry",
    "EffectiveState",
    "EntryChanges",
]
