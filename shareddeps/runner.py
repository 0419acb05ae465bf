"""Lint pipeline: discover files, run rules, apply fixes and collect results."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .config import SharedDepsConfig
from .fixes import apply_fixes
from .imports import scan_imports
from .logging import get_logger
from .manifest import ManifestParseError
from .models import Diagnostic
from .rules import Rule, RuleContext, discover_rules
from .scanner import SourceScanner
from .session import AnalysisSession


@dataclass
class FileFailure:
    """A file whose analysis aborted."""

    path: str
    error: str


@dataclass
class FileResult:
    """Outcome of linting one file."""

    path: str
    diagnostics: List[Diagnostic] = field(default_factory=list)
    fixed: int = 0
    failure: Optional[FileFailure] = None


@dataclass
class LintReport:
    """Aggregated outcome of a lint run."""

    diagnostics: List[Diagnostic] = field(default_factory=list)
    failures: List[FileFailure] = field(default_factory=list)
    files_checked: int = 0
    fixes_applied: int = 0
    fixed_files: List[str] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(1 for diagnostic in self.diagnostics if diagnostic.severity == "error")

    @property
    def ok(self) -> bool:
        return self.error_count == 0 and not self.failures


class Linter:
    """Runs the enabled rules over source files with one shared session."""

    def __init__(
        self,
        session: AnalysisSession,
        rules: Optional[Iterable[Rule]] = None,
        scanner: SourceScanner | None = None,
    ) -> None:
        self.session = session
        self.rules = list(rules) if rules is not None else discover_rules()
        self.scanner = scanner or SourceScanner()
        self.logger = get_logger("runner")

    @classmethod
    def from_config(cls, config: SharedDepsConfig) -> "Linter":
        return cls(
            AnalysisSession.from_config(config),
            rules=discover_rules(config.rules.enabled),
            scanner=SourceScanner(config.extensions, config.exclude_paths),
        )

    def lint_text(self, path: Path, text: str) -> List[Diagnostic]:
        """Run every rule against ``text`` as the contents of ``path``."""
        context = RuleContext(
            path=path,
            text=text,
            session=self.session,
            imports=scan_imports(text),
        )
        diagnostics: List[Diagnostic] = []
        for rule in self.rules:
            diagnostics.extend(rule.check(context))
        return diagnostics

    def lint_file(self, path: Path, *, fix: bool = False) -> FileResult:
        result = FileResult(path=str(path))
        try:
            text = _read_source(path)
            diagnostics = self.lint_text(path, text)
        except (ManifestParseError, OSError, UnicodeDecodeError) as exc:
            self.logger.error("Analysis of %s failed: %s", path, exc)
            result.failure = FileFailure(path=str(path), error=str(exc))
            return result

        if fix:
            fixes = [diagnostic.fix for diagnostic in diagnostics if diagnostic.fix is not None]
            if fixes:
                _write_source(path, apply_fixes(text, fixes))
                result.fixed = len(fixes)
                diagnostics = [diagnostic for diagnostic in diagnostics if diagnostic.fix is None]
                self.logger.info("Applied %d fix(es) to %s", len(fixes), path)

        result.diagnostics = diagnostics
        return result

    def run(
        self,
        paths: Sequence[Path],
        *,
        fix: bool = False,
        jobs: int = 1,
    ) -> LintReport:
        """Lint every source file under ``paths`` and return the aggregated report."""
        files = list(self.scanner.iter_paths(paths))
        self.logger.debug("Linting %d file(s) with %d job(s)", len(files), jobs)

        if jobs > 1:
            with ThreadPoolExecutor(max_workers=jobs, thread_name_prefix="shareddeps") as pool:
                results = list(pool.map(lambda item: self.lint_file(item, fix=fix), files))
        else:
            results = [self.lint_file(item, fix=fix) for item in files]

        report = LintReport(files_checked=len(results))
        for result in results:
            report.diagnostics.extend(result.diagnostics)
            if result.failure is not None:
                report.failures.append(result.failure)
            if result.fixed:
                report.fixes_applied += result.fixed
                report.fixed_files.append(result.path)
        report.diagnostics.sort(key=lambda item: (item.path, item.line, item.column))
        return report


def _read_source(path: Path) -> str:
    with path.open(encoding="utf-8", newline="") as handle:
        return handle.read()


def _write_source(path: Path, text: str) -> None:
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(text)


__all__ = ["FileFailure", "FileResult", "LintReport", "Linter"]
