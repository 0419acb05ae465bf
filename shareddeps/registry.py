"""Shared-module registries consulted by the shared-dependencies rule."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, FrozenSet, Iterable, List, Optional, Protocol

DEFAULT_CORE_PACKAGE = "@theia/core"
DEFAULT_SHARED_PREFIX = "@theia/core/shared/"
DEFAULT_REGISTRY_FIELD = "theiaReExports"


class RegistryError(RuntimeError):
    """Raised when a registry source cannot be read or lacks shared exports."""


class SharedModuleRegistry(Protocol):
    """Read-only lookup of modules re-exported under the shared prefix."""

    prefix: str

    def is_shared_module(self, name: str) -> bool:
        """Return True when ``name`` is a bare module re-exported by core."""

    def shared_counterpart_of(self, name: str) -> Optional[str]:
        """Return the bare module a prefixed ``name`` points at, if any."""


class StaticSharedRegistry:
    """Registry backed by a fixed set of bare module names."""

    def __init__(self, prefix: str, modules: Iterable[str]) -> None:
        self.prefix = prefix
        self._modules: FrozenSet[str] = frozenset(module for module in modules if module)

    @property
    def modules(self) -> List[str]:
        return sorted(self._modules)

    def is_shared_module(self, name: str) -> bool:
        return name in self._modules

    def shared_counterpart_of(self, name: str) -> Optional[str]:
        if not name.startswith(self.prefix):
            return None
        remainder = name[len(self.prefix):]
        return remainder or None

    def __len__(self) -> int:
        return len(self._modules)

    def __repr__(self) -> str:
        return f"StaticSharedRegistry(prefix={self.prefix!r}, modules={len(self._modules)})"


def load_registry_from_manifest(
    path: Path,
    *,
    prefix: str = DEFAULT_SHARED_PREFIX,
    field: str = DEFAULT_REGISTRY_FIELD,
) -> StaticSharedRegistry:
    """Build a registry from the re-export declaration in the core package manifest.

    The manifest is expected to hold a mapping like::

        "theiaReExports": {
            "@theia/core/shared": {
                "export *": ["@lumino/widgets", "inversify"],
                "export =": ["react as React"]
            }
        }

    Only the entry keyed by ``prefix`` (without its trailing slash) is used.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise RegistryError(f"Registry manifest not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise RegistryError(f"Failed to parse registry manifest {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise RegistryError(f"Registry manifest {path} must contain a JSON object")
    reexports = data.get(field)
    if not isinstance(reexports, dict):
        raise RegistryError(f"Registry manifest {path} has no '{field}' mapping")

    entry = reexports.get(prefix.rstrip("/"))
    if not isinstance(entry, dict):
        raise RegistryError(
            f"Registry manifest {path} declares no re-exports for '{prefix.rstrip('/')}'"
        )

    modules: List[str] = []
    for values in entry.values():
        modules.extend(_module_names(values))
    return StaticSharedRegistry(prefix, modules)


def _module_names(values: Any) -> List[str]:
    if isinstance(values, str):
        values = [values]
    if not isinstance(values, list):
        return []
    names: List[str] = []
    for value in values:
        if not isinstance(value, str):
            continue
        # "react as React" re-exports the react module under an alias
        name = value.split(" as ", 1)[0].strip()
        if name:
            names.append(name)
    return names


__all__ = [
    "DEFAULT_CORE_PACKAGE",
    "DEFAULT_REGISTRY_FIELD",
    "DEFAULT_SHARED_PREFIX",
    "RegistryError",
    "SharedModuleRegistry",
    "StaticSharedRegistry",
    "load_registry_from_manifest",
]
