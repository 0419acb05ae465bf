"""Configuration loading for shareddeps (.shareddeps.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .manifest import DEFAULT_MANIFEST_NAME
from .registry import DEFAULT_CORE_PACKAGE, DEFAULT_REGISTRY_FIELD, DEFAULT_SHARED_PREFIX

CONFIG_FILENAME = ".shareddeps.yml"

DEFAULT_EXTENSIONS = [".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs"]


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class RulesConfig:
    """Rule enablement."""

    enabled: List[str] = field(default_factory=list)


@dataclass
class SharedDepsConfig:
    """Represents the settings defined in .shareddeps.yml."""

    root: Path
    core_package: str = DEFAULT_CORE_PACKAGE
    shared_prefix: str = DEFAULT_SHARED_PREFIX
    manifest_name: str = DEFAULT_MANIFEST_NAME
    shared_modules: List[str] = field(default_factory=list)
    registry_manifest: Optional[Path] = None
    registry_field: str = DEFAULT_REGISTRY_FIELD
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    exclude_paths: List[str] = field(default_factory=list)
    cache_missing_manifests: bool = True
    rules: RulesConfig = field(default_factory=RulesConfig)


def load_config(config_path: Path) -> SharedDepsConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return SharedDepsConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = SharedDepsConfig(root=root)

    core_package = _as_str(data.get("core_package"))
    if core_package:
        config.core_package = core_package

    shared_prefix = _as_str(data.get("shared_prefix"))
    if shared_prefix:
        config.shared_prefix = shared_prefix if shared_prefix.endswith("/") else f"{shared_prefix}/"
    elif core_package:
        config.shared_prefix = f"{core_package}/shared/"

    manifest_name = _as_str(data.get("manifest_name"))
    if manifest_name:
        config.manifest_name = manifest_name

    config.shared_modules = _as_str_list(data.get("shared_modules"))

    registry_manifest = _as_str(data.get("registry_manifest"))
    if registry_manifest:
        config.registry_manifest = root / registry_manifest

    registry_field = _as_str(data.get("registry_field"))
    if registry_field:
        config.registry_field = registry_field

    extensions = _as_str_list(data.get("extensions"))
    if extensions:
        config.extensions = [ext if ext.startswith(".") else f".{ext}" for ext in extensions]

    config.exclude_paths = _as_str_list(data.get("exclude_paths"))

    cache_missing = _as_bool(data.get("cache_missing_manifests"))
    if cache_missing is not None:
        config.cache_missing_manifests = cache_missing

    rules_data = _as_dict(data.get("rules"))
    if rules_data:
        config.rules.enabled = _as_str_list(rules_data.get("enabled"))

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_EXTENSIONS",
    "RulesConfig",
    "SharedDepsConfig",
    "load_config",
]
