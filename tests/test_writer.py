"""Atomic writer, content-preserving update and id sanitizing tests."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from desktop_entry.parser import parse_desktop_entry
from desktop_entry.types import CreateOptions
from desktop_entry.writer import (
    compose_desktop_entry,
    sanitize_id,
    set_hidden_content,
    update_desktop_entry_content,
    write_atomic,
)

CUSTOM = """# Managed by hand
[Desktop Entry]
Type=Application
Name=Old Name
Exec=/usr/bin/old
X-GNOME-Autostart-Delay=3
Comment=Keep me

[X-Custom]
Name=Unrelated
Foo = bar ; baz
# trailing comment
"""


def test_write_atomic_creates_parent_dirs(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "dir" / "app.desktop"
    write_atomic(target, "hello\n")
    assert target.read_text(encoding="utf-8") == "hello\n"
    assert [p.name for p in target.parent.iterdir()] == ["app.desktop"]


def test_write_atomic_replaces_existing_content(tmp_path: Path) -> None:
    target = tmp_path / "app.desktop"
    target.write_text("old\n", encoding="utf-8")
    write_atomic(target, "new\n")
    assert target.read_text(encoding="utf-8") == "new\n"


def test_write_atomic_failure_keeps_prior_content(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    target = tmp_path / "app.desktop"
    target.write_text("original\n", encoding="utf-8")

    def disk_full(fd: int) -> None:
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(os, "fsync", disk_full)
    with pytest.raises(OSError):
        write_atomic(target, "partial\n")

    assert target.read_text(encoding="utf-8") == "original\n"
    assert [p.name for p in tmp_path.iterdir()] == ["app.desktop"]


def test_write_atomic_failure_on_rename_leaves_no_target(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    target = tmp_path / "new.desktop"

    def broken_replace(src: str, dst: object) -> None:
        raise OSError("rename failed")

    monkeypatch.setattr(os, "replace", broken_replace)
    with pytest.raises(OSError):
        write_atomic(target, "content\n")

    assert not target.exists()
    assert list(tmp_path.iterdir()) == []


def test_compose_desktop_entry_with_options() -> None:
    text = compose_desktop_entry(
        "My App",
        "/usr/bin/app --flag",
        CreateOptions(
            icon="app",
            comment="Line\nTwo",
            delay_seconds=5,
            terminal=True,
            only_show_in=["GNOME", "KDE"],
            not_show_in=["XFCE"],
            hidden=True,
        ),
    )
    assert text == (
        "[Desktop Entry]\n"
        "Type=Application\n"
        "Name=My App\n"
        "Exec=sh -c 'sleep 5 && exec /usr/bin/app --flag'\n"
        "Icon=app\n"
        "Comment=Line\\nTwo\n"
        "Terminal=true\n"
        "OnlyShowIn=GNOME;KDE;\n"
        "NotShowIn=XFCE;\n"
        "Hidden=true\n"
    )


def test_compose_minimal_entry() -> None:
    assert compose_desktop_entry("App", "app", CreateOptions()) == (
        "[Desktop Entry]\nType=Application\nName=App\nExec=app\n"
    )


def test_update_name_preserves_custom_group_and_unknown_keys() -> None:
    entry = parse_desktop_entry(CUSTOM).model_copy(update={"name": "New Name"})
    updated = update_desktop_entry_content(CUSTOM, entry)

    assert updated == CUSTOM.replace("Name=Old Name", "Name=New Name")
    custom_group = CUSTOM[CUSTOM.index("[X-Custom]"):]
    assert updated.endswith(custom_group)


def test_update_drops_emptied_keys() -> None:
    entry = parse_desktop_entry(CUSTOM).model_copy(update={"comment": ""})
    updated = update_desktop_entry_content(CUSTOM, entry)
    assert "Comment=" not in updated
    assert "X-GNOME-Autostart-Delay=3" in updated


def test_update_appends_new_keys_before_next_group() -> None:
    entry = parse_desktop_entry(CUSTOM).model_copy(
        update={"terminal": True, "only_show_in": ["GNOME"]}
    )
    updated = update_desktop_entry_content(CUSTOM, entry)
    lines = updated.splitlines()
    assert lines.index("Terminal=true") < lines.index("[X-Custom]")
    assert lines.index("OnlyShowIn=GNOME;") < lines.index("[X-Custom]")
    assert lines[lines.index("[X-Custom]") - 1] == ""


def test_update_wraps_exec_with_requested_delay() -> None:
    entry = parse_desktop_entry(CUSTOM)
    updated = update_desktop_entry_content(CUSTOM, entry, delay_seconds=10)
    assert "Exec=sh -c 'sleep 10 && exec /usr/bin/old'" in updated


def test_update_carries_forward_existing_delay() -> None:
    content = CUSTOM.replace("Exec=/usr/bin/old", "Exec=sh -c 'sleep 4 && exec /usr/bin/old'")
    entry = parse_desktop_entry(content).model_copy(update={"name": "Renamed"})
    updated = update_desktop_entry_content(content, entry)
    assert "Exec=sh -c 'sleep 4 && exec /usr/bin/old'" in updated


def test_update_zero_delay_removes_wrapper() -> None:
    content = CUSTOM.replace("Exec=/usr/bin/old", "Exec=sh -c 'sleep 4 && exec /usr/bin/old'")
    entry = parse_desktop_entry(content)
    updated = update_desktop_entry_content(content, entry, delay_seconds=0)
    assert "Exec=/usr/bin/old\n" in updated


def test_update_reescapes_name() -> None:
    entry = parse_desktop_entry(CUSTOM).model_copy(update={"name": "Two\nLines"})
    updated = update_desktop_entry_content(CUSTOM, entry)
    assert "Name=Two\\nLines" in updated


def test_set_hidden_inserts_before_next_group() -> None:
    updated = set_hidden_content(CUSTOM, hidden=True)
    lines = updated.splitlines()
    assert lines[lines.index("[X-Custom]") - 1] == "Hidden=true"
    assert updated.count("Hidden=true") == 1


def test_set_hidden_appends_at_end_of_last_group() -> None:
    content = "[Desktop Entry]\nType=Application\nName=A\nExec=a\n"
    assert set_hidden_content(content, hidden=True) == content + "Hidden=true\n"


def test_set_hidden_replaces_existing_line_in_place() -> None:
    content = "[Desktop Entry]\nHidden=false\nType=Application\nName=A\nExec=a\n"
    updated = set_hidden_content(content, hidden=True)
    assert updated == "[Desktop Entry]\nHidden=true\nType=Application\nName=A\nExec=a\n"


def test_enable_removes_hidden_line_only() -> None:
    content = "[Desktop Entry]\nType=Application\nHidden=true\nName=A\nExec=a\n[Other]\nHidden=true\n"
    updated = set_hidden_content(content, hidden=False)
    assert updated == "[Desktop Entry]\nType=Application\nName=A\nExec=a\n[Other]\nHidden=true\n"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("my-app", "my-app"),
        ("My App", "My_App"),
        ("app@2.0", "app_2.0"),
        ("  my app  ", "my_app"),
        ("@my@app@", "my_app"),
        ("a  __ b", "a_b"),
    ],
)
def test_sanitize_id(raw: str, expected: str) -> None:
    assert sanitize_id(raw) == expected


@pytest.mark.parametrize("raw", ["", "@#$%", "   ", "...", "-.-"])
def test_sanitize_id_fallback(raw: str) -> None:
    result = sanitize_id(raw)
    assert result.startswith("autostart_")
    assert result[len("autostart_"):].isdigit()


VENDOR_CONTROL = (
    "[Desktop Entry]\nType=Application\nName=A\nExec=a\n\n"
    "[X-Custom]\nX-Data=a\x0cb c\x1dd\x85e\u2028f\n"
)


def test_update_keeps_vendor_control_characters_on_one_line() -> None:
    entry = parse_desktop_entry(VENDOR_CONTROL).model_copy(update={"name": "B"})
    updated = update_desktop_entry_content(VENDOR_CONTROL, entry)
    assert updated == VENDOR_CONTROL.replace("Name=A", "Name=B")


def test_set_hidden_keeps_vendor_control_characters_on_one_line() -> None:
    updated = set_hidden_content(VENDOR_CONTROL, hidden=True)
    assert updated.endswith("Hidden=true\n[X-Custom]\nX-Data=a\x0cb c\x1dd\x85e\u2028f\n")
    assert set_hidden_content(updated, hidden=False) == VENDOR_CONTROL


def test_write_atomic_keeps_existing_mode(tmp_path: Path) -> None:
    target = tmp_path / "app.desktop"
    target.write_text("old\n", encoding="utf-8")
    target.chmod(0o640)
    write_atomic(target, "new\n")
    assert stat.S_IMODE(target.stat().st_mode) == 0o640


def test_write_atomic_new_file_follows_umask(tmp_path: Path) -> None:
    previous = os.umask(0o027)
    try:
        write_atomic(tmp_path / "app.desktop", "new\n")
    finally:
        os.umask(previous)
    assert stat.S_IMODE((tmp_path / "app.desktop").stat().st_mode) == 0o640
