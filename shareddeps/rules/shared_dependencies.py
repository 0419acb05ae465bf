"""Rule requiring core-dependent packages to import shared modules via the core re-exports."""

from __future__ import annotations

from typing import Iterable, List

from .base import Rule, RuleContext
from ..logging import get_logger
from ..models import Diagnostic, ImportReference, Manifest, TextFix, Verdict, VerdictKind
from ..registry import SharedModuleRegistry

RULE_ID = "shared-dependencies"


def depends_on_core(manifest: Manifest, core_package: str) -> bool:
    """Return True when the manifest declares ``core_package`` as a dependency."""
    return manifest.has_dependency_map and core_package in manifest.dependencies


def shared_dependencies_of(manifest: Manifest, registry: SharedModuleRegistry) -> List[str]:
    """Return declared dependencies that core already provides as shared modules."""
    return [name for name in manifest.dependencies if registry.is_shared_module(name)]


def classify(module: str, registry: SharedModuleRegistry) -> Verdict:
    """Decide how ``module`` relates to the shared-module registry."""
    if registry.is_shared_module(module):
        return Verdict(VerdictKind.SHOULD_BE_SHARED, f"{registry.prefix}{module}")
    counterpart = registry.shared_counterpart_of(module)
    if counterpart is None:
        return Verdict(VerdictKind.UNRELATED)
    if registry.is_shared_module(counterpart):
        return Verdict(VerdictKind.ALREADY_SHARED, module)
    return Verdict(VerdictKind.MISSING_SHARED_COUNTERPART, counterpart)


class SharedDependenciesRule(Rule):
    """Reports bare imports of modules that core re-exports under its shared prefix."""

    rule_id = RULE_ID

    def __init__(self) -> None:
        self.logger = get_logger("rules.shared_dependencies")

    def check(self, context: RuleContext) -> Iterable[Diagnostic]:
        session = context.session
        manifest = session.locator.locate(context.path)
        if manifest is None:
            self.logger.debug("No manifest governs %s; skipping", context.path)
            return []
        if not depends_on_core(manifest, session.core_package):
            return []

        diagnostics: List[Diagnostic] = []
        path = str(context.path)
        registry = session.registry

        # Report the manifest itself once per package, not once per file.
        if session.tracker.first_time(str(manifest.path)):
            shared = shared_dependencies_of(manifest, registry)
            if shared:
                diagnostics.append(
                    Diagnostic(
                        path=path,
                        line=0,
                        column=0,
                        message=(
                            f'"{manifest.path}" depends on some {session.core_package} '
                            f"shared dependencies: [{', '.join(shared)}]"
                        ),
                        severity="info",
                        rule=self.rule_id,
                    )
                )

        for reference in context.imports:
            diagnostic = self._check_import(path, reference, registry, session.core_package)
            if diagnostic is not None:
                diagnostics.append(diagnostic)
        return diagnostics

    def _check_import(
        self,
        path: str,
        reference: ImportReference,
        registry: SharedModuleRegistry,
        core_package: str,
    ) -> Diagnostic | None:
        verdict = classify(reference.module, registry)
        if verdict.kind is VerdictKind.SHOULD_BE_SHARED:
            return Diagnostic(
                path=path,
                line=reference.line,
                column=reference.column,
                message=(
                    f'"{reference.module}" is a {core_package} shared dependency, '
                    f'please use "{verdict.shared_name}" instead.'
                ),
                severity="error",
                rule=self.rule_id,
                # after the opening quote, so the quote style is preserved
                fix=TextFix(offset=reference.start + 1, text=registry.prefix),
            )
        if verdict.kind is VerdictKind.MISSING_SHARED_COUNTERPART:
            return Diagnostic(
                path=path,
                line=reference.line,
                column=reference.column,
                message=f'"{verdict.shared_name}" is not part of {core_package} shared dependencies.',
                severity="warning",
                rule=self.rule_id,
            )
        return None


__all__ = [
    "RULE_ID",
    "SharedDependenciesRule",
    "classify",
    "depends_on_core",
    "shared_dependencies_of",
]
