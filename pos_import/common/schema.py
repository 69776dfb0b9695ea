"""Minimal strict schema for the YAML import config."""

from __future__ import annotations

from pos_import.common.errors import ConfigError


def _assert_mapping(obj: object, ctx: str) -> dict:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")
    return obj


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_positive_number(value: object, ctx: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"{ctx} must be a positive number, got {value!r}")


def validate_import_config(cfg: object, *, allow_unknown: bool = False) -> dict:
    cfg = _assert_mapping(cfg, "import config")
    _assert_required_keys(cfg, {"osm", "storage"}, "import config")
    _assert_no_unknown_keys(cfg, {"osm", "storage"}, "import config", allow_unknown)

    osm = _assert_mapping(cfg["osm"], "osm")
    _assert_required_keys(osm, {"base_url", "user_agent", "timeout"}, "osm")
    _assert_no_unknown_keys(osm, {"base_url", "user_agent", "timeout"}, "osm", allow_unknown)
    if not str(osm["base_url"]).strip():
        raise ConfigError("osm.base_url must not be empty")
    if not str(osm["user_agent"]).strip():
        raise ConfigError("osm.user_agent must not be empty")

    timeout = _assert_mapping(osm["timeout"], "osm.timeout")
    _assert_required_keys(timeout, {"connect_seconds", "read_seconds"}, "osm.timeout")
    _assert_no_unknown_keys(timeout, {"connect_seconds", "read_seconds"}, "osm.timeout", allow_unknown)
    _assert_positive_number(timeout["connect_seconds"], "osm.timeout.connect_seconds")
    _assert_positive_number(timeout["read_seconds"], "osm.timeout.read_seconds")

    storage = _assert_mapping(cfg["storage"], "storage")
    _assert_required_keys(storage, {"db_path"}, "storage")
    _assert_no_unknown_keys(storage, {"db_path"}, "storage", allow_unknown)

    return cfg
