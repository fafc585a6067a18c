"""Persistent settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any


CONFIG_VERSION = 2
YEAR_LAYOUTS = ("hourglass", "grid")


@dataclass
class RenderConfig:
    device: str = "iphone_6_8"
    year_layout: str = "hourglass"
    output_dir: str | None = None


@dataclass
class DefaultsConfig:
    birth_date: str = "2000-01-01"
    goal_date: str = "2025-12-31"
    goal_start_date: str | None = None


@dataclass
class LoggingConfig:
    keep_log_files: int = 7
    console: bool = False


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    render: RenderConfig = field(default_factory=RenderConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "LifeCal"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "LifeCal"
    return Path.home() / ".config" / "lifecal"


def config_path() -> Path:
    return config_root() / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    for k, v in (raw or {}).items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_render(cfg: AppConfig) -> None:
    if cfg.render.year_layout not in YEAR_LAYOUTS:
        cfg.render.year_layout = "hourglass"
    if not cfg.render.device:
        cfg.render.device = "iphone_6_8"


def _normalize_logging(cfg: AppConfig) -> None:
    try:
        keep = int(cfg.logging.keep_log_files)
    except (TypeError, ValueError):
        keep = LoggingConfig().keep_log_files
    cfg.logging.keep_log_files = max(2, min(90, keep))
    cfg.logging.console = bool(cfg.logging.console)


def _migrate(raw: dict[str, Any]) -> dict[str, Any]:
    version = int(raw.get("config_version", 1))
    data = dict(raw)

    if version < 2:
        # v1 kept device/layout and dates at the top level.
        render = dict(data.get("render", {}) or {})
        defaults = dict(data.get("defaults", {}) or {})
        for key in ("device", "year_layout"):
            if key in data:
                render.setdefault(key, data.pop(key))
        for key in ("birth_date", "goal_date"):
            if key in data:
                defaults.setdefault(key, data.pop(key))
        data["render"] = render
        data["defaults"] = defaults
        data.setdefault("logging", {})
        data["config_version"] = 2

    return data


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()

    data = _migrate(raw)
    cfg = AppConfig(
        config_version=int(data.get("config_version", CONFIG_VERSION)),
        render=_merge(RenderConfig, data.get("render", {})),
        defaults=_merge(DefaultsConfig, data.get("defaults", {})),
        logging=_merge(LoggingConfig, data.get("logging", {})),
    )

    _normalize_render(cfg)
    _normalize_logging(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
