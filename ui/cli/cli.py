"""CLI entrypoint for onset."""

from __future__ import annotations

import typer

from desktop_entry.types import CreateOptions, EntryChanges
from ui.cli import commands

app = typer.Typer(help="Manage desktop autostart entries")
config_app = typer.Typer(help="Configuration commands")

VERBOSE = typer.Option(False, "--verbose", "-v", help="Enable debug logging")


@app.command("list")
def list_cmd(
    query: str = typer.Option("", "--query", "-q", help="Filter by name, comment or command"),
    as_json: bool = typer.Option(False, "--json", help="Print entries as JSON"),
    verbose: bool = VERBOSE,
) -> None:
    """List autostart entries."""
    commands.list_entries(query=query, as_json=as_json, verbose=verbose)


@app.command("apps")
def apps_cmd(
    query: str = typer.Option("", "--query", "-q", help="Filter applications"),
    verbose: bool = VERBOSE,
) -> None:
    """List applications that can be added to autostart."""
    commands.list_applications(query=query, verbose=verbose)


@app.command("show")
def show_cmd(entry_id: str, verbose: bool = VERBOSE) -> None:
    """Show one autostart entry."""
    commands.show_entry(entry_id=entry_id, verbose=verbose)


@app.command("add")
def add_cmd(app_id: str, verbose: bool = VERBOSE) -> None:
    """Add an installed application to autostart."""
    commands.add_application(app_id=app_id, verbose=verbose)


@app.command("create")
def create_cmd(
    name: str = typer.Argument(..., help="Display name"),
    command: str = typer.Argument(..., help="Command line to run at login"),
    entry_id: str | None = typer.Option(None, "--id", help="File name stem (defaults to name)"),
    comment: str | None = typer.Option(None, help="Description"),
    icon: str | None = typer.Option(None, help="Icon name or path"),
    delay: int = typer.Option(0, min=0, help="Seconds to wait before starting"),
    terminal: bool = typer.Option(False, "--terminal", help="Run in a terminal"),
    only_show_in: str | None = typer.Option(None, help="Desktops to start in, e.g. GNOME;KDE"),
    not_show_in: str | None = typer.Option(None, help="Desktops to skip"),
    disabled: bool = typer.Option(False, "--disabled", help="Create with Hidden=true"),
    verbose: bool = VERBOSE,
) -> None:
    """Create a custom autostart entry."""
    options = CreateOptions(
        icon=icon or None,
        comment=comment or None,
        delay_seconds=delay,
        terminal=terminal,
        only_show_in=commands.parse_desktop_list(only_show_in) or [],
        not_show_in=commands.parse_desktop_list(not_show_in) or [],
        hidden=disabled,
    )
    commands.create_entry(
        name=name, command=command, entry_id=entry_id, options=options, verbose=verbose
    )


@app.command("edit")
def edit_cmd(
    entry_id: str,
    name: str | None = typer.Option(None, help="New display name"),
    command: str | None = typer.Option(None, "--exec", help="New command line"),
    comment: str | None = typer.Option(None, help="New description; empty removes it"),
    icon: str | None = typer.Option(None, help="New icon; empty removes it"),
    delay: int | None = typer.Option(None, min=0, help="Startup delay; 0 removes it"),
    terminal: bool = typer.Option(False, "--terminal", help="Run in a terminal"),
    no_terminal: bool = typer.Option(False, "--no-terminal", help="Do not run in a terminal"),
    only_show_in: str | None = typer.Option(None, help="Desktops to start in; empty clears"),
    not_show_in: str | None = typer.Option(None, help="Desktops to skip; empty clears"),
    verbose: bool = VERBOSE,
) -> None:
    """Change selected fields of an entry, keeping the rest of the file intact."""
    changes = EntryChanges(
        name=name,
        exec=command,
        comment=comment,
        icon=icon,
        delay_seconds=delay,
        terminal=True if terminal else (False if no_terminal else None),
        only_show_in=commands.parse_desktop_list(only_show_in),
        not_show_in=commands.parse_desktop_list(not_show_in),
    )
    commands.edit_entry(entry_id=entry_id, changes=changes, verbose=verbose)


@app.command("enable")
def enable_cmd(entry_id: str, verbose: bool = VERBOSE) -> None:
    """Enable an entry (remove Hidden)."""
    commands.toggle_entry(entry_id=entry_id, enabled=True, verbose=verbose)


@app.command("disable")
def disable_cmd(entry_id: str, verbose: bool = VERBOSE) -> None:
    """Disable an entry (set Hidden=true)."""
    commands.toggle_entry(entry_id=entry_id, enabled=False, verbose=verbose)


@app.command("delete")
def delete_cmd(
    entry_id: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
    verbose: bool = VERBOSE,
) -> None:
    """Delete an autostart entry file."""
    commands.delete_entry(entry_id=entry_id, assume_yes=yes, verbose=verbose)


@app.command("history")
def history_cmd(limit: int = typer.Option(20, min=1, max=1000)) -> None:
    """Show recent operations."""
    commands.history(limit=limit)


@config_app.command("show")
def config_show_cmd() -> None:
    """Show effective configuration."""
    commands.config_show()


app.add_typer(config_app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
