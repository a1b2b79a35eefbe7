"""Configuration loading and XDG path resolution.

Paths are resolved once into an :class:`XdgPaths` value and passed to the
scanners and operations explicitly.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

APP_NAME = "onset"
DEFAULT_DATA_DIRS = "/usr/local/share:/usr/share"


class PathsConfig(BaseModel):
    """Optional path overrides; unset values fall back to XDG defaults."""

    autostart_dir: Path | None = None
    user_applications_dir: Path | None = None
    system_application_dirs: list[Path] | None = None
    audit_log_path: Path | None = None


class LoggingConfig(BaseModel):
    level: str = "WARNING"


class AppConfig(BaseModel):
    """Effective runtime configuration."""

    paths: PathsConfig = Field(default_factory=PathsConfig)
    desktops: list[str] = Field(default_factory=list)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class XdgPaths(BaseModel):
    """Directories consumed by discovery and operations."""

    user_autostart: Path
    user_applications: Path
    system_applications: list[Path] = Field(default_factory=list)
    audit_log: Path

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> XdgPaths:
        env = os.environ if environ is None else environ
        home = Path(env.get("HOME") or Path.home())

        config_home = _env_path(env, "XDG_CONFIG_HOME") or home / ".config"
        data_home = _env_path(env, "XDG_DATA_HOME") or home / ".local" / "share"
        state_home = _env_path(env, "XDG_STATE_HOME") or home / ".local" / "state"
        data_dirs = env.get("XDG_DATA_DIRS") or DEFAULT_DATA_DIRS

        return cls(
            user_autostart=config_home / "autostart",
            user_applications=data_home / "applications",
            system_applications=[
                Path(item) / "applications" for item in data_dirs.split(":") if item
            ],
            audit_log=state_home / APP_NAME / "operations.jsonl",
        )

    def with_overrides(self, paths: PathsConfig) -> XdgPaths:
        updates: dict[str, Any] = {}
        if paths.autostart_dir is not None:
            updates["user_autostart"] = paths.autostart_dir.expanduser()
        if paths.user_applications_dir is not None:
            updates["user_applications"] = paths.user_applications_dir.expanduser()
        if paths.system_application_dirs is not None:
            updates["system_applications"] = [p.expanduser() for p in paths.system_application_dirs]
        if paths.audit_log_path is not None:
            updates["audit_log"] = paths.audit_log_path.expanduser()
        return self.model_copy(update=updates)

    def all_application_dirs(self) -> list[Path]:
        """User directory first, then system directories in priority order."""
        return [self.user_applications, *self.system_applications]


def _env_path(env: Mapping[str, str], name: str) -> Path | None:
    value = env.get(name)
    return Path(value) if value else None


def current_desktops(environ: Mapping[str, str] | None = None) -> list[str]:
    """Split ``XDG_CURRENT_DESKTOP`` into desktop identifiers."""
    env = os.environ if environ is None else environ
    return [item for item in env.get("XDG_CURRENT_DESKTOP", "").split(":") if item]


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML from file, returning empty mapping when missing."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def user_config_path(environ: Mapping[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    home = Path(env.get("HOME") or Path.home())
    config_home = _env_path(env, "XDG_CONFIG_HOME") or home / ".config"
    return config_home / APP_NAME / "config.yaml"


def load_effective_config(
    root: Path,
    environ: Mapping[str, str] | None = None,
    overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """Merge project defaults, the user config file and explicit overrides."""
    merged = load_yaml(root / "config" / "default.yaml")
    merged = merge_dicts(merged, load_yaml(user_config_path(environ)))
    if overrides:
        merged = merge_dicts(merged, overrides)
    return AppConfig.model_validate(merged)


def resolve_paths(config: AppConfig, environ: Mapping[str, str] | None = None) -> XdgPaths:
    return XdgPaths.from_environ(environ).with_overrides(config.paths)


def resolve_desktops(config: AppConfig, environ: Mapping[str, str] | None = None) -> list[str]:
    return list(config.desktops) or current_desktops(environ)
