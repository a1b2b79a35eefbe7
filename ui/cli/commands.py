"""Typer command handlers."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any, NoReturn

import typer

from core.orchestrator import Orchestrator, RuntimeBundle, configure_logging
from core.system_inspector import inspect_system
from desktop_entry.parser import split_list
from desktop_entry.types import CreateOptions, EntryChanges
from discovery.applications import discover_applications, find_application
from discovery.autostart import discover_autostart_entries, find_entry
from model.application import search_applications
from model.autostart_entry import AutostartEntry, filter_entries
from operations.create import create_autostart_entry, create_from_application
from operations.delete import delete_autostart_entry
from operations.edit import edit_autostart_entry
from operations.errors import EntryOperationError
from operations.toggle import set_entry_enabled


def _runtime(verbose: bool = False) -> RuntimeBundle:
    bundle = Orchestrator().build()
    configure_logging("DEBUG" if verbose else bundle.config.logging.level)
    return bundle


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


def _entries(bundle: RuntimeBundle) -> list[AutostartEntry]:
    # Always rescan; a catalog is never trusted across a write.
    return discover_autostart_entries(bundle.paths.user_autostart, bundle.desktops)


def _require_entry(bundle: RuntimeBundle, entry_id: str) -> AutostartEntry:
    entry = find_entry(_entries(bundle), entry_id)
    if entry is None:
        _fail(f"No autostart entry with id '{entry_id}'.")
    return entry


def _record(
    bundle: RuntimeBundle,
    action: str,
    entry_id: str,
    path: Path | None,
    inputs: dict[str, Any],
    operation: Callable[[], Any],
) -> Any:
    """Run an operation, journal its outcome and map failures to exit code 1."""
    try:
        result = operation()
    except (EntryOperationError, ValueError) as exc:
        failed_path = getattr(exc, "path", path)
        bundle.audit.log(action, failed_path, entry_id, inputs, outcome="failed", reason=str(exc))
        _fail(str(exc))
    if isinstance(result, Path):
        path = result
    bundle.audit.log(action, path, entry_id, inputs, outcome="success")
    return result


def _entry_summary(entry: AutostartEntry) -> dict[str, Any]:
    desktop_entry = entry.desktop_entry
    return {
        "id": entry.id,
        "name": desktop_entry.name,
        "command": entry.base_exec,
        "delay_seconds": entry.delay_seconds,
        "state": entry.effective_state.value,
        "comment": desktop_entry.comment,
        "icon": desktop_entry.icon,
        "terminal": desktop_entry.terminal,
        "only_show_in": desktop_entry.only_show_in,
        "not_show_in": desktop_entry.not_show_in,
        "try_exec": desktop_entry.try_exec,
        "path": str(entry.path),
    }


def list_entries(query: str = "", as_json: bool = False, verbose: bool = False) -> None:
    """List autostart entries with their effective state."""
    bundle = _runtime(verbose)
    entries = filter_entries(_entries(bundle), query)
    if as_json:
        typer.echo(json.dumps([_entry_summary(e) for e in entries], indent=2))
        return
    if not entries:
        typer.echo("No autostart entries.")
        return
    for entry in entries:
        delay = f" (+{entry.delay_seconds}s)" if entry.delay_seconds else ""
        typer.echo(f"{entry.id}: {entry.name} [{entry.effective_state.label}]{delay}")


def list_applications(query: str = "", verbose: bool = False) -> None:
    """List launchable applications."""
    bundle = _runtime(verbose)
    apps = discover_applications(bundle.paths.all_application_dirs())
    for app in search_applications(apps, query):
        typer.echo(f"{app.id}: {app.name}")


def show_entry(entry_id: str, verbose: bool = False) -> None:
    bundle = _runtime(verbose)
    entry = _require_entry(bundle, entry_id)
    typer.echo(json.dumps(_entry_summary(entry), indent=2))


def add_application(app_id: str, verbose: bool = False) -> None:
    """Add an application from the catalog to autostart."""
    bundle = _runtime(verbose)
    app = find_application(discover_applications(bundle.paths.all_application_dirs()), app_id)
    if app is None:
        _fail(f"No application with id '{app_id}'.")
    path = _record(
        bundle,
        "create",
        app.id,
        None,
        {"app_id": app.id, "exec": app.exec},
        lambda: create_from_application(bundle.paths.user_autostart, app),
    )
    typer.echo(f"Added {app.name}: {path}")


def create_entry(
    name: str,
    command: str,
    entry_id: str | None,
    options: CreateOptions,
    verbose: bool = False,
) -> None:
    """Create a custom autostart entry."""
    bundle = _runtime(verbose)
    requested_id = entry_id or name
    path = _record(
        bundle,
        "create",
        requested_id,
        None,
        {"name": name, "exec": command, **options.model_dump()},
        lambda: create_autostart_entry(
            bundle.paths.user_autostart, requested_id, name, command, options
        ),
    )
    typer.echo(f"Created {name}: {path}")


def edit_entry(entry_id: str, changes: EntryChanges, verbose: bool = False) -> None:
    """Apply only the supplied fields to an entry."""
    if changes.is_empty():
        _fail("Nothing to change.")
    bundle = _runtime(verbose)
    entry = _require_entry(bundle, entry_id)
    _record(
        bundle,
        "edit",
        entry.id,
        entry.path,
        changes.model_dump(exclude_none=True),
        lambda: edit_autostart_entry(entry, changes),
    )
    typer.echo(f"Updated {entry.id}")


def toggle_entry(entry_id: str, enabled: bool, verbose: bool = False) -> None:
    bundle = _runtime(verbose)
    entry = _require_entry(bundle, entry_id)
    action = "enable" if enabled else "disable"
    _record(
        bundle,
        action,
        entry.id,
        entry.path,
        {"enabled": enabled},
        lambda: set_entry_enabled(entry.path, enabled),
    )
    typer.echo(f"{'Enabled' if enabled else 'Disabled'} {entry.id}")


def delete_entry(entry_id: str, assume_yes: bool = False, verbose: bool = False) -> None:
    bundle = _runtime(verbose)
    entry = _require_entry(bundle, entry_id)
    if not assume_yes and not typer.confirm(f"Delete {entry.name} ({entry.path})?"):
        typer.echo("Aborted.")
        return
    _record(
        bundle,
        "delete",
        entry.id,
        entry.path,
        {},
        lambda: delete_autostart_entry(entry.path),
    )
    typer.echo(f"Deleted {entry.id}")


def history(limit: int = 20) -> None:
    """Show recent journaled operations."""
    bundle = _runtime()
    typer.echo(json.dumps(bundle.audit.read_events(limit=limit), indent=2))


def config_show() -> None:
    """Show effective runtime config."""
    bundle = _runtime()
    payload = {
        "config": bundle.config.model_dump(mode="json"),
        "paths": bundle.paths.model_dump(mode="json"),
        "desktops": bundle.desktops,
        "system": inspect_system(bundle.desktops),
    }
    typer.echo(json.dumps(payload, indent=2))


def parse_desktop_list(value: str | None) -> list[str] | None:
    """Parse ``GNOME;KDE`` or ``GNOME,KDE``; None stays None."""
    if value is None:
        return None
    return split_list(value.replace(",", ";"))
