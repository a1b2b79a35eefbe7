"""Launchable application catalog record."""

from __future__ import annotations

from dataclasses import dataclass, field

from desktop_entry.types import DesktopEntry


@dataclass(frozen=True)
class Application:
    """Read-only application discovered in an applications directory."""

    id: str
    name: str
    exec: str
    icon: str | None = None
    comment: str | None = None
    keywords: list[str] = field(default_factory=list)

    @classmethod
    def from_desktop_entry(cls, app_id: str, entry: DesktopEntry) -> Application:
        return cls(
            id=app_id,
            name=entry.name,
            exec=entry.exec,
            icon=entry.icon,
            comment=entry.comment,
            keywords=list(entry.keywords),
        )

    def matches_search(self, query: str) -> bool:
        """Case-insensitive substring match on name, exec, comment and keywords."""
        needle = query.strip().lower()
        if not needle:
            return True
        return (
            needle in self.name.lower()
            or needle in self.exec.lower()
            or needle in (self.comment or "").lower()
            or any(needle in keyword.lower() for keyword in self.keywords)
        )


def search_applications(applications: list[Application], query: str) -> list[Application]:
    return [app for app in applications if app.matches_search(query)]
