"""Desktop entry value models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class DesktopEntry(BaseModel):
    """Fields read from the [Desktop Entry] group."""

    name: str = ""
    exec: str = ""
    icon: str | None = None
    comment: str | None = None
    hidden: bool = False
    terminal: bool = False
    only_show_in: list[str] = Field(default_factory=list)
    not_show_in: list[str] = Field(default_factory=list)
    try_exec: str | None = None
    no_display: bool = False
    categories: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)


class EffectiveState(Enum):
    """Runtime classification of an autostart entry."""

    ENABLED = "enabled"
    DISABLED = "disabled"
    ENVIRONMENT_EXCLUDED = "environment_excluded"
    TRY_EXEC_FAILED = "try_exec_failed"

    @property
    def label(self) -> str:
        return _STATE_LABELS[self]

    def __str__(self) -> str:
        return self.label


_STATE_LABELS = {
    EffectiveState.ENABLED: "Enabled",
    EffectiveState.DISABLED: "Disabled",
    EffectiveState.ENVIRONMENT_EXCLUDED: "Environment Excluded",
    EffectiveState.TRY_EXEC_FAILED: "TryExec Failed",
}


class CreateOptions(BaseModel):
    """Optional fields supplied when creating an entry."""

    icon: str | None = None
    comment: str | None = None
    delay_seconds: int = Field(default=0, ge=0)
    terminal: bool = False
    only_show_in: list[str] = Field(default_factory=list)
    not_show_in: list[str] = Field(default_factory=list)
    hidden: bool = False


class EntryChanges(BaseModel):
    """Partial patch for an existing entry; None leaves a field unchanged."""

    name: str | None = None
    exec: str | None = None
    comment: str | None = None
    icon: str | None = None
    delay_seconds: int | None = Field(default=None, ge=0)
    hidden: bool | None = None
    terminal: bool | None = None
    only_show_in: list[str] | None = None
    not_show_in: list[str] | None = None

    def apply_to(self, entry: DesktopEntry) -> DesktopEntry:
        """Return a patched copy of ``entry``; the delay is resolved separately."""
        updates = self.model_dump(exclude={"delay_seconds"}, exclude_none=True)
        return entry.model_copy(update=updates, deep=True)

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)
