"""Top-level application orchestrator."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from core.config import AppConfig, XdgPaths, load_effective_config, resolve_desktops, resolve_paths
from governance.audit_logger import AuditLogger


@dataclass
class RuntimeBundle:
    """Holds initialized runtime components."""

    config: AppConfig
    paths: XdgPaths
    desktops: list[str]
    audit: AuditLogger


class Orchestrator:
    """Creates and wires runtime components for CLI use."""

    def __init__(
        self,
        root: Path | None = None,
        environ: Mapping[str, str] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> None:
        default_root = Path(__file__).resolve().parents[1]
        self.root = (root or default_root).resolve()
        self.environ = environ
        self.overrides = overrides

    def build(self) -> RuntimeBundle:
        config = load_effective_config(self.root, environ=self.environ, overrides=self.overrides)
        paths = resolve_paths(config, self.environ)
        return RuntimeBundle(
            config=config,
            paths=paths,
            desktops=resolve_desktops(config, self.environ),
            audit=AuditLogger(paths.audit_log),
        )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
