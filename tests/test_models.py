"""Search helpers and audit journal tests."""

from __future__ import annotations

import json
from pathlib import Path

from desktop_entry.types import DesktopEntry, EffectiveState
from governance.audit_logger import AuditLogger
from model.application import Application, search_applications
from model.autostart_entry import AutostartEntry, filter_entries


def make_entry(entry_id: str, **fields: object) -> AutostartEntry:
    return AutostartEntry(
        id=entry_id,
        path=Path(f"/tmp/{entry_id}.desktop"),
        desktop_entry=DesktopEntry(**fields),
        effective_state=EffectiveState.ENABLED,
        raw_content="",
    )


def test_application_search_matches_keywords_case_insensitively() -> None:
    apps = [
        Application.from_desktop_entry(
            "editor", DesktopEntry(name="Editor", exec="gedit", keywords=["Text", "Notes"])
        ),
        Application(id="term", name="Terminal", exec="xterm", comment="Shell access"),
    ]
    assert [a.id for a in search_applications(apps, "notes")] == ["editor"]
    assert [a.id for a in search_applications(apps, "SHELL")] == ["term"]
    assert [a.id for a in search_applications(apps, "")] == ["editor", "term"]


def test_entry_filter_matches_name_comment_and_exec() -> None:
    entries = [
        make_entry("a", name="Backup", exec="borg create", comment="Nightly"),
        make_entry("b", name="Chat", exec="sh -c 'sleep 5 && exec chat'"),
    ]
    assert [e.id for e in filter_entries(entries, "night")] == ["a"]
    assert [e.id for e in filter_entries(entries, "CHAT")] == ["b"]
    assert [e.id for e in filter_entries(entries, "borg")] == ["a"]
    assert entries[1].delay_seconds == 5
    assert entries[1].is_enabled


def test_audit_logger_appends_json_lines(tmp_path: Path) -> None:
    log_path = tmp_path / "state" / "operations.jsonl"
    audit = AuditLogger(log_path)

    audit.log("create", tmp_path / "a.desktop", "a", {"exec": "secret --token x"}, outcome="success")
    audit.log("delete", None, "b", {}, outcome="failed", reason="missing")

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    first = json.loads(lines[0])
    assert first["action"] == "create"
    assert first["entry_id"] == "a"
    assert "secret" not in lines[0]
    events = audit.read_events(limit=1)
    assert events[0]["reason"] == "missing"
    assert events[0]["path"] is None
