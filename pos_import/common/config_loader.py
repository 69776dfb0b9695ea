"""Configuration loading and validation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pos_import.common.constants import OSM_API_BASE_URL, USER_AGENT
from pos_import.common.errors import ConfigError
from pos_import.common.fs import read_yaml
from pos_import.common.http import TimeoutConfig
from pos_import.common.schema import validate_import_config

CONFIG_FILENAME = "import.yml"


@dataclass(frozen=True)
class ImportConfig:
    base_url: str = OSM_API_BASE_URL
    user_agent: str = USER_AGENT
    timeout: TimeoutConfig = TimeoutConfig()
    db_path: str = "./data/pos.sqlite3"


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    if not path.exists():
        raise ConfigError(f"Missing config file: {path}")
    base = read_yaml(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    if overlay is None:
        return base
    if not isinstance(overlay, dict):
        raise ConfigError(f"Overlay config must be a mapping: {overlay_path}")
    return _deep_merge(base, overlay)


def load_config(
    config_dir: Path,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
) -> ImportConfig:
    overlay_path = overlay_config_dir / CONFIG_FILENAME if overlay_config_dir is not None else None
    cfg = validate_import_config(
        _load_yaml_with_overlay(config_dir / CONFIG_FILENAME, overlay_path),
        allow_unknown=allow_unknown,
    )
    osm = cfg["osm"]
    return ImportConfig(
        base_url=str(osm["base_url"]),
        user_agent=str(osm["user_agent"]),
        timeout=TimeoutConfig(
            connect=float(osm["timeout"]["connect_seconds"]),
            read=float(osm["timeout"]["read_seconds"]),
        ),
        db_path=str(cfg["storage"]["db_path"]),
    )
