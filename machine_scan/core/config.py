"""Configuration loading and persistence."""

from __future__ import annotations

import copy
import json
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from machine_scan.core.constants import SERVICE_BASE_URL, SERVICE_ENDPOINT


class ConfigError(RuntimeError):
    """Raised when config file parsing fails."""


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def expand_path(path_str: str) -> Path:
    """Expand user/env vars and return absolute path."""
    return Path(os.path.expandvars(path_str)).expanduser().resolve()


def default_config_path() -> Path:
    """Get default config file path."""
    raw = os.getenv("MACHINE_SCAN_CONFIG_FILE", "~/.config/machine-scan/config.toml")
    return expand_path(raw)


def _default_config() -> Dict[str, Any]:
    return {
        "service": {
            "base_url": SERVICE_BASE_URL,
            "endpoint": SERVICE_ENDPOINT,
            "api_key_env": "MACHINE_SCAN_API_KEY",
            "max_retries": 1,
            "timeout_seconds": 60,
        },
        "catalog": {
            "file": "",
        },
        "encoder": {
            "jpeg_quality": 0.9,
        },
        "alternatives": {},
    }


DEFAULT_CONFIG: Dict[str, Any] = _default_config()


def _read_config(path: Path) -> Dict[str, Any]:
    is_json = path.suffix.lower() == ".json"
    try:
        loaded = json.loads(path.read_text()) if is_json else tomllib.loads(path.read_text())
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        kind = "JSON" if is_json else "TOML"
        raise ConfigError(f"Invalid {kind} in config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain an object/table at the root")
    return loaded


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from disk, merged with defaults."""
    cfg_path = path or default_config_path()
    cfg = _default_config()

    if cfg_path.exists():
        cfg = _deep_merge(cfg, _read_config(cfg_path))

    return cfg


def _toml_literal(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'
    raise TypeError(f"Unsupported TOML value type: {type(value)!r}")


def _dict_to_toml(data: Dict[str, Any]) -> str:
    """Render scalar keys, then one ``[section]`` table per nested mapping."""
    lines = [f"{key} = {_toml_literal(value)}" for key, value in data.items() if not isinstance(value, dict)]
    for section, values in data.items():
        if not isinstance(values, dict):
            continue
        if lines:
            lines.append("")
        lines.append(f"[{section}]")
        lines.extend(f"{key} = {_toml_literal(value)}" for key, value in values.items() if value is not None)
    return "\n".join(lines)


def save_config(config: Dict[str, Any], path: Optional[Path] = None) -> Path:
    """Write config as JSON for ``.json`` paths, TOML otherwise."""
    cfg_path = path or default_config_path()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    if cfg_path.suffix.lower() == ".json":
        text = json.dumps(config, indent=2)
    else:
        text = _dict_to_toml({key: value for key, value in config.items() if value is not None})
    cfg_path.write_text(text + "\n")
    return cfg_path


def resolve_service_url(config: Dict[str, Any]) -> str:
    """Vision service base URL with env override first."""
    return os.getenv("MACHINE_SCAN_SERVICE_URL") or config.get("service", {}).get(
        "base_url",
        SERVICE_BASE_URL,
    )


def resolve_api_key(config: Dict[str, Any]) -> Optional[str]:
    """Read the service API key from the configured environment variable."""
    env_name = config.get("service", {}).get("api_key_env") or "MACHINE_SCAN_API_KEY"
    return os.getenv(env_name) or None


def resolve_catalog_file(config: Dict[str, Any]) -> Optional[Path]:
    """Configured catalog file, if any."""
    raw = os.getenv("MACHINE_SCAN_CATALOG_FILE") or config.get("catalog", {}).get("file")
    if not raw:
        return None
    return expand_path(str(raw))
