"""Structured JSONL journal of entry operations."""

from __future__ import annotations

import hashlib
import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any


class AuditLogger:
    """Writes one JSON line per create/edit/enable/disable/delete."""

    def __init__(self, log_path: Path) -> None:
        self.log_path = log_path
        self.logger = logging.getLogger("onset.audit")

    @staticmethod
    def _hash_inputs(inputs: dict[str, Any]) -> str:
        payload = json.dumps(inputs, sort_keys=True, default=str).encode("utf-8")
        return hashlib.sha256(payload).hexdigest()

    def log(
        self,
        action: str,
        path: Path | None,
        entry_id: str,
        inputs: dict[str, Any],
        outcome: str,
        reason: str = "",
    ) -> None:
        """Append one JSONL audit event."""
        event = {
            "timestamp": datetime.now(UTC).isoformat(),
            "action": action,
            "path": str(path) if path is not None else None,
            "entry_id": entry_id,
            "inputs_hash": self._hash_inputs(inputs),
            "outcome": outcome,
            "reason": reason,
        }
        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            with self.log_path.open("a", encoding="utf-8") as fh:
                fh.write(json.dumps(event, ensure_ascii=True) + "\n")
        except OSError as exc:
            self.logger.warning("Cannot write audit log %s: %s", self.log_path, exc)
        self.logger.info(json.dumps(event, ensure_ascii=True))

    def read_events(self, limit: int | None = None) -> list[dict[str, Any]]:
        """Return recorded events, oldest first; malformed lines are skipped."""
        if not self.log_path.exists():
            return []
        events: list[dict[str, Any]] = []
        for line in self.log_path.read_text(encoding="utf-8").splitlines():
            try:
                events.append(json.loads(line))
            except json.JSONDecodeError:
                continue
        return events[-limit:] if limit else events
