"""Lint rules shipped with shareddeps."""

from __future__ import annotations

from typing import Dict, List, Sequence, Type

from .base import Rule, RuleContext
from .shared_dependencies import RULE_ID as SHARED_DEPENDENCIES, SharedDependenciesRule

RULES: Dict[str, Type[Rule]] = {
    SHARED_DEPENDENCIES: SharedDependenciesRule,
}


def discover_rules(enabled: Sequence[str] | None = None) -> List[Rule]:
    """Instantiate the rules named in ``enabled``, or every rule when it is empty."""
    if not enabled:
        return [rule_class() for rule_class in RULES.values()]

    wanted = [name.lower() for name in enabled]
    unknown = sorted(set(wanted) - set(RULES))
    if unknown:
        raise ValueError(f"Unknown rules requested: {', '.join(unknown)}")
    # keep the requested order, ignoring repeats
    return [RULES[name]() for name in dict.fromkeys(wanted)]


__all__ = [
    "RULES",
    "Rule",
    "RuleContext",
    "SharedDependenciesRule",
    "discover_rules",
]
