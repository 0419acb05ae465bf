"""Discovery of JavaScript and TypeScript sources to lint."""

from __future__ import annotations

import os
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from .config import DEFAULT_EXTENSIONS

# Dependency installs, VCS metadata and tool caches never hold package sources.
_SKIPPED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    ".yarn",
    ".next",
    ".turbo",
    "coverage",
}

_DECLARATION_SUFFIXES = (".d.ts", ".d.mts", ".d.cts")


class SourceScanner:
    """Yields lintable source files, honoring ``exclude_paths`` globs.

    A pattern ending in ``/`` only excludes directories. A pattern without a
    slash is compared with every path segment, so ``lib/`` skips each
    package's ``lib`` output directory. Any other pattern is matched against
    the path relative to the scanned root.
    """

    def __init__(
        self,
        extensions: Iterable[str] | None = None,
        exclude_paths: Iterable[str] = (),
    ) -> None:
        self.extensions = tuple(ext.lower() for ext in (extensions or DEFAULT_EXTENSIONS))
        self._dir_patterns: List[str] = []
        self._patterns: List[str] = []
        for raw in exclude_paths:
            pattern = raw.strip().lstrip("/")
            if not pattern:
                continue
            if pattern.endswith("/"):
                self._dir_patterns.append(pattern.rstrip("/"))
            else:
                self._patterns.append(pattern)

    def is_source(self, path: Path) -> bool:
        name = path.name.lower()
        if name.endswith(_DECLARATION_SUFFIXES):
            return False
        return name.endswith(self.extensions)

    def excluded(self, rel_path: str, is_dir: bool) -> bool:
        patterns = self._patterns + self._dir_patterns if is_dir else self._patterns
        return any(_glob_matches(rel_path, pattern) for pattern in patterns)

    def iter_paths(self, paths: Sequence[Path]) -> Iterator[Path]:
        """Yield files for each argument: files as given, directories walked."""
        for path in paths:
            resolved = path.expanduser().resolve()
            if not resolved.exists():
                raise FileNotFoundError(f"Path not found: {path}")
            if resolved.is_file():
                yield resolved
            else:
                yield from self.scan(resolved)

    def scan(self, root: Path) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(root):
            current = Path(dirpath)
            rel_dir = current.relative_to(root).as_posix() if current != root else ""

            dirnames[:] = [
                name
                for name in sorted(dirnames)
                if name not in _SKIPPED_DIRS
                and not self.excluded(_join(rel_dir, name), is_dir=True)
            ]

            for filename in sorted(filenames):
                path = current / filename
                if self.is_source(path) and not self.excluded(_join(rel_dir, filename), is_dir=False):
                    yield path


def _join(rel_dir: str, name: str) -> str:
    return f"{rel_dir}/{name}" if rel_dir else name


def _glob_matches(rel_path: str, pattern: str) -> bool:
    if "/" in pattern:
        return fnmatchcase(rel_path, pattern)
    return any(fnmatchcase(segment, pattern) for segment in rel_path.split("/"))


__all__ = ["SourceScanner"]
