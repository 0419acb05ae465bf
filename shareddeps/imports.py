"""Extraction of import references from JavaScript and TypeScript sources."""

from __future__ import annotations

import bisect
import re
from typing import List, Tuple

from .models import ImportReference

_IMPORT_DECLARATION = re.compile(
    r"""(?<![\w$.])import\s+(?:type\s+)?(?:[\w$*{}\s,]+?\s*from\s*)?(?P<literal>(['"])(?P<module>[^'"\n]*)\2)"""
)
_IMPORT_EQUALS = re.compile(
    r"""(?<![\w$.])import\s+(?:type\s+)?[\w$]+\s*=\s*require\s*\(\s*(?P<literal>(['"])(?P<module>[^'"\n]*)\2)\s*\)"""
)


def scan_imports(text: str) -> List[ImportReference]:
    """Return import declarations and import-equals references in source order.

    Offsets point at the module literal in ``text``, quotes included.
    """
    masked, strings = _mask_comments(text)
    string_starts = [span[0] for span in strings]
    line_starts = _line_starts(text)

    found: List[Tuple[int, int, str, str]] = []
    for kind, pattern in (("import", _IMPORT_DECLARATION), ("import-equals", _IMPORT_EQUALS)):
        for match in pattern.finditer(masked):
            if _inside_string(match.start(), strings, string_starts):
                continue
            start, end = match.span("literal")
            found.append((start, end, text[start + 1:end - 1], kind))

    references: List[ImportReference] = []
    for start, end, module, kind in sorted(found):
        line_index = bisect.bisect_right(line_starts, start) - 1
        references.append(
            ImportReference(
                module=module,
                start=start,
                end=end,
                line=line_index + 1,
                column=start - line_starts[line_index],
                kind=kind,
            )
        )
    return references


def _line_starts(text: str) -> List[int]:
    starts = [0]
    for index, char in enumerate(text):
        if char == "\n":
            starts.append(index + 1)
    return starts


def _inside_string(
    position: int, strings: List[Tuple[int, int]], string_starts: List[int]
) -> bool:
    index = bisect.bisect_right(string_starts, position) - 1
    if index < 0:
        return False
    start, end = strings[index]
    return start < position < end


def _mask_comments(text: str) -> Tuple[str, List[Tuple[int, int]]]:
    """Blank out comments and template literal bodies, keeping offsets and newlines.

    Also returns the ``(open quote, close quote)`` offsets of every single- and
    double-quoted string so callers can discard matches that begin inside one.
    String contents stay in the masked text because module literals are strings.
    """
    chars = list(text)
    length = len(text)
    strings: List[Tuple[int, int]] = []
    index = 0
    quote: str | None = None
    opened = 0
    while index < length:
        char = text[index]
        if quote is not None:
            if char == "\\":
                if quote == "`":
                    _blank(chars, index, min(index + 2, length))
                index += 2
                continue
            if char == quote:
                if quote != "`":
                    strings.append((opened, index))
                quote = None
            elif quote == "`":
                _blank(chars, index, index + 1)
            elif char == "\n":
                # unterminated string literal
                strings.append((opened, index))
                quote = None
            index += 1
            continue

        nxt = text[index + 1] if index + 1 < length else ""
        if char == "/" and nxt == "/":
            end = text.find("\n", index)
            end = length if end == -1 else end
            _blank(chars, index, end)
            index = end
        elif char == "/" and nxt == "*":
            end = text.find("*/", index + 2)
            end = length if end == -1 else end + 2
            _blank(chars, index, end)
            index = end
        else:
            if char in {"'", '"', "`"}:
                quote = char
                opened = index
            index += 1
    if quote is not None and quote != "`":
        strings.append((opened, length))
    return "".join(chars), strings


def _blank(chars: List[str], start: int, end: int) -> None:
    for position in range(start, end):
        if chars[position] != "\n":
            chars[position] = " "


__all__ = ["scan_imports"]
