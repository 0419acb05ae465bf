"""Nearest-manifest lookup with a per-session ancestor cache."""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Dict, List, Optional

from .logging import get_logger
from .models import Manifest

DEFAULT_MANIFEST_NAME = "package.json"


class ManifestParseError(RuntimeError):
    """Raised when the nearest manifest exists but cannot be parsed."""

    def __init__(self, path: Path, detail: str) -> None:
        super().__init__(f"Failed to parse {path}: {detail}")
        self.path = path


class ManifestLocator:
    """Finds the nearest manifest above a file, remembering every directory it walked.

    Once a search ends, each directory visited during that search is bound to
    the same result, so later lookups from sibling or nested files resolve in
    a single cache hit. Misses are remembered too unless ``cache_missing`` is
    disabled, in which case manifests created mid-run are still discovered.
    """

    def __init__(
        self,
        manifest_name: str = DEFAULT_MANIFEST_NAME,
        *,
        cache_missing: bool = True,
    ) -> None:
        self.manifest_name = manifest_name
        self.cache_missing = cache_missing
        self._cache: Dict[str, Optional[Manifest]] = {}
        self._lock = threading.RLock()
        self.logger = get_logger("manifest")

    def locate(self, start_path: Path | str) -> Optional[Manifest]:
        """Return the manifest governing ``start_path`` or None when there is none."""
        start = Path(start_path).expanduser().resolve()
        current = start.parent if start.is_file() or not start.exists() else start

        with self._lock:
            tried: List[str] = []
            while True:
                key = str(current)
                if key in self._cache:
                    cached = self._cache[key]
                    self._bind(tried, cached)
                    self.logger.debug("Manifest cache hit for %s", key)
                    return cached

                tried.append(key)
                candidate = current / self.manifest_name
                if candidate.is_file():
                    manifest = self._load(candidate)
                    self._bind(tried, manifest)
                    self.logger.debug(
                        "Resolved %s for %d director%s",
                        manifest.path,
                        len(tried),
                        "y" if len(tried) == 1 else "ies",
                    )
                    return manifest

                parent = current.parent
                if parent == current:
                    break
                current = parent

            self.logger.debug("No %s found above %s", self.manifest_name, start)
            if self.cache_missing:
                self._bind(tried, None)
            return None

    def cached(self, directory: Path | str) -> bool:
        """Return True when ``directory`` already has a bound result."""
        with self._lock:
            return str(Path(directory).expanduser().resolve()) in self._cache

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    # ------------------------------------------------------------------
    # Internal helpers

    def _bind(self, keys: List[str], manifest: Optional[Manifest]) -> None:
        for key in keys:
            self._cache[key] = manifest

    def _load(self, path: Path) -> Manifest:
        resolved = path.resolve()
        try:
            data = json.loads(resolved.read_text(encoding="utf-8"))
        except UnicodeDecodeError as exc:
            raise ManifestParseError(resolved, f"not valid UTF-8 ({exc.reason})") from exc
        except json.JSONDecodeError as exc:
            raise ManifestParseError(resolved, str(exc)) from exc
        if not isinstance(data, dict):
            raise ManifestParseError(resolved, "manifest root must be a JSON object")
        return Manifest(path=resolved, data=data)


__all__ = ["DEFAULT_MANIFEST_NAME", "ManifestLocator", "ManifestParseError"]
