"""Effective state evaluation for autostart entries."""

from __future__ import annotations

from collections.abc import Sequence

from core.system_inspector import BinaryCheck, binary_exists
from desktop_entry.types import DesktopEntry, EffectiveState


def effective_state(
    entry: DesktopEntry,
    current_desktops: Sequence[str],
    binary_check: BinaryCheck = binary_exists,
) -> EffectiveState:
    """Classify ``entry`` for the running desktop; first matching rule wins.

    Order: Hidden, TryExec, OnlyShowIn, NotShowIn. A missing TryExec binary is
    reported ahead of any environment exclusion.
    """
    if entry.hidden:
        return EffectiveState.DISABLED

    if entry.try_exec and not binary_check(entry.try_exec):
        return EffectiveState.TRY_EXEC_FAILED

    if entry.only_show_in and not any(d in entry.only_show_in for d in current_desktops):
        return EffectiveState.ENVIRONMENT_EXCLUDED

    if any(d in entry.not_show_in for d in current_desktops):
        return EffectiveState.ENVIRONMENT_EXCLUDED

    return EffectiveState.ENABLED
