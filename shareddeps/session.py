"""Run-scoped state shared by every file analyzed in one lint run."""

from __future__ import annotations

from typing import Optional

from .config import SharedDepsConfig
from .logging import get_logger
from .manifest import ManifestLocator
from .registry import (
    DEFAULT_CORE_PACKAGE,
    SharedModuleRegistry,
    StaticSharedRegistry,
    load_registry_from_manifest,
)
from .tracker import FirstOccurrenceTracker


class AnalysisSession:
    """Owns the manifest cache, the advisory tracker and the shared-module registry."""

    def __init__(
        self,
        registry: SharedModuleRegistry,
        *,
        core_package: str = DEFAULT_CORE_PACKAGE,
        locator: Optional[ManifestLocator] = None,
        tracker: Optional[FirstOccurrenceTracker] = None,
    ) -> None:
        self.registry = registry
        self.core_package = core_package
        self.locator = locator or ManifestLocator()
        self.tracker = tracker or FirstOccurrenceTracker()

    @classmethod
    def from_config(cls, config: SharedDepsConfig) -> "AnalysisSession":
        logger = get_logger("session")
        modules = list(config.shared_modules)
        if config.registry_manifest is not None:
            loaded = load_registry_from_manifest(
                config.registry_manifest,
                prefix=config.shared_prefix,
                field=config.registry_field,
            )
            modules.extend(loaded.modules)
            logger.debug(
                "Loaded %d shared modules from %s", len(loaded), config.registry_manifest
            )
        registry = StaticSharedRegistry(config.shared_prefix, modules)
        if not len(registry):
            logger.warning(
                "No shared modules configured; imports cannot be checked against %s",
                config.shared_prefix,
            )
        return cls(
            registry,
            core_package=config.core_package,
            locator=ManifestLocator(
                config.manifest_name,
                cache_missing=config.cache_missing_manifests,
            ),
        )


__all__ = ["AnalysisSession"]
