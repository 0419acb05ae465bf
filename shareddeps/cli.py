"""CLI entrypoints for shareddeps commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .logging import configure_logging
from .models import Diagnostic
from .registry import RegistryError
from .runner import LintReport, Linter


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shareddeps",
        description="Check that core-dependent packages import shared modules through core re-exports.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check",
        help="Lint source files and report shared-dependency violations.",
    )
    _add_verbose_option(check_parser, suppress_default=True)
    check_parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="Files or directories to lint (defaults to current directory).",
    )
    check_parser.add_argument(
        "--config",
        default=None,
        help="Path to .shareddeps.yml (defaults to the current directory).",
    )
    check_parser.add_argument(
        "--fix",
        action="store_true",
        help="Rewrite fixable imports in place.",
    )
    check_parser.add_argument(
        "--jobs",
        type=int,
        default=1,
        help="Number of files to analyze in parallel.",
    )
    check_parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log errors; diagnostics are still printed.",
    )
    check_parser.add_argument(
        "--log-file",
        default=None,
        help="Write a debug log of the run to this file.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for shareddeps commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(getattr(args, "quiet", False)),
        log_file=Path(args.log_file) if getattr(args, "log_file", None) else None,
    )

    if args.command == "check":
        config_path = Path(args.config) if args.config else Path.cwd()
        try:
            config = load_config(config_path)
            linter = Linter.from_config(config)
        except (ConfigError, RegistryError, ValueError) as exc:
            parser.exit(2, f"shareddeps: configuration error: {exc}\n")

        try:
            report = linter.run(
                [Path(path) for path in args.paths],
                fix=bool(args.fix),
                jobs=max(1, int(args.jobs)),
            )
        except FileNotFoundError as exc:
            parser.exit(2, f"{exc}\n")

        _print_report(report)
        if not report.ok:
            parser.exit(1)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _print_report(report: LintReport) -> None:
    for diagnostic in report.diagnostics:
        print(_format_diagnostic(diagnostic))
    for failure in report.failures:
        print(f"{_relativize(Path(failure.path))}: fatal {failure.error}")

    summary = (
        f"{report.files_checked} file(s) checked, "
        f"{len(report.diagnostics)} problem(s) ({report.error_count} error(s))"
    )
    if report.fixes_applied:
        summary += f", {report.fixes_applied} fix(es) applied in {len(report.fixed_files)} file(s)"
    if report.failures:
        summary += f", {len(report.failures)} file(s) failed"
    print(summary)


def _format_diagnostic(diagnostic: Diagnostic) -> str:
    location = f"{_relativize(Path(diagnostic.path))}:{diagnostic.line}:{diagnostic.column}"
    return f"{location}: {diagnostic.severity} {diagnostic.message} [{diagnostic.rule}]"


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
