"""Base classes for lint rule plugins."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List

from ..models import Diagnostic, ImportReference

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..session import AnalysisSession


@dataclass
class RuleContext:
    """Everything a rule may inspect for a single source file."""

    path: Path
    text: str
    session: "AnalysisSession"
    imports: List[ImportReference] = field(default_factory=list)


class Rule(ABC):
    """Contract for rules that report diagnostics for one source file."""

    rule_id: str = ""

    @abstractmethod
    def check(self, context: RuleContext) -> Iterable[Diagnostic]:
        """Return diagnostics for the file described by ``context``."""
