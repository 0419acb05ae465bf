"""Application of text-insertion fixes to source files."""

from __future__ import annotations

from typing import Iterable, List

from .models import TextFix


class FixConflictError(ValueError):
    """Raised when fixes overlap or fall outside the source text."""


def apply_fixes(text: str, fixes: Iterable[TextFix]) -> str:
    """Return ``text`` with every insertion applied.

    Fixes are applied from the highest offset down so that each offset still
    refers to the original text.
    """
    ordered: List[TextFix] = sorted(fixes, key=lambda fix: fix.offset, reverse=True)
    seen_offsets = set()
    for fix in ordered:
        if fix.offset < 0 or fix.offset > len(text):
            raise FixConflictError(
                f"Fix offset {fix.offset} is outside the text (length {len(text)})"
            )
        if fix.offset in seen_offsets:
            raise FixConflictError(f"Multiple fixes insert at offset {fix.offset}")
        seen_offsets.add(fix.offset)

    result = text
    for fix in ordered:
        result = result[: fix.offset] + fix.text + result[fix.offset :]
    return result


__all__ = ["FixConflictError", "apply_fixes"]
