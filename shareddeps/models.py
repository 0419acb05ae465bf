"""Core data models shared across shareddeps components."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True, eq=False)
class Manifest:
    """A located package manifest and its parsed contents."""

    path: Path
    data: Mapping[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> Optional[str]:
        value = self.data.get("name")
        return value if isinstance(value, str) else None

    @property
    def has_dependency_map(self) -> bool:
        return isinstance(self.data.get("dependencies"), dict)

    @property
    def dependencies(self) -> Dict[str, str]:
        """Declared runtime dependencies, in manifest order."""
        deps = self.data.get("dependencies")
        if not isinstance(deps, dict):
            return {}
        return {str(key): str(value) for key, value in deps.items()}


@dataclass(frozen=True)
class ImportReference:
    """A single import occurrence within a source file."""

    module: str
    start: int
    end: int
    line: int
    column: int
    kind: str = "import"


@dataclass(frozen=True)
class TextFix:
    """Insert `text` at character `offset` of the source text."""

    offset: int
    text: str


@dataclass
class Diagnostic:
    """A problem reported by a rule for a source file."""

    path: str
    line: int
    column: int
    message: str
    severity: str
    rule: str
    fix: Optional[TextFix] = None

    @property
    def fixable(self) -> bool:
        return self.fix is not None


class VerdictKind(Enum):
    """How an imported module name relates to the shared-module registry."""

    ALREADY_SHARED = "already-shared"
    SHOULD_BE_SHARED = "should-be-shared"
    MISSING_SHARED_COUNTERPART = "missing-shared-counterpart"
    UNRELATED = "unrelated"


@dataclass(frozen=True)
class Verdict:
    """Classification outcome for one module name."""

    kind: VerdictKind
    shared_name: Optional[str] = None


__all__ = [
    "Diagnostic",
    "ImportReference",
    "Manifest",
    "TextFix",
    "Verdict",
    "VerdictKind",
]
