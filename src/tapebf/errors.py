from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

INVALID_OUTPUT = "Invalid utf8 char"


def locate(source: str, position: int) -> Tuple[int, int]:
    """Return the 1-based (line, column) of ``position`` in ``source``."""
    line = source.count('\n', 0, position) + 1
    column = position - (source.rfind('\n', 0, position) + 1) + 1
    return line, column


def _render_context(source: str, line: int, column: int, *, radius: int = 2) -> str:
    """Numbered window of source lines with the offending line marked and a caret under the column."""
    lines = source.split('\n')
    first = max(1, line - radius)
    last = min(len(lines), line + radius)

    rendered: List[str] = []
    for number in range(first, last + 1):
        marker = '>' if number == line else ' '
        rendered.append(f"{marker} {number:4d} | {lines[number - 1]}")
        if number == line:
            rendered.append(" " * 6 + " | " + " " * (column - 1) + "^")
    return "\n".join(rendered)


def _hint_for(kind: str) -> Optional[str]:
    if kind == 'unmatched-open':
        return "Every '[' needs a matching ']' later in the program."
    if kind == 'stray-close':
        return "This ']' has no open '[' before it and is ignored."
    return None


@dataclass
class TapeError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class SourceError(TapeError):
    path: str


class SourceNotFound(SourceError):
    pass


class SourceUnreadable(SourceError):
    pass


@dataclass
class TapeSyntaxError(TapeError):
    position: int
    line: int
    column: int
    context: str


class UnmatchedOpenLoop(TapeSyntaxError):
    pass


class InputStreamFailure(TapeError):
    pass


def _located(kind: str, message: str, source: str, position: int) -> Tuple[str, int, int, str]:
    line, column = locate(source, position)
    ctx = _render_context(source, line, column)
    hint = _hint_for(kind)
    hint_block = f"\nHint: {hint}" if hint else ""
    text = f"{message} (line {line}, column {column})\n{ctx}{hint_block}"
    return text, line, column, ctx


def make_unmatched_open_error(*, source: str, position: int) -> UnmatchedOpenLoop:
    text, line, column, ctx = _located(
        'unmatched-open', "SyntaxError: Missing enclosing ']'", source, position
    )
    return UnmatchedOpenLoop(message=text, position=position, line=line, column=column, context=ctx)


def format_stray_close(*, source: str, position: int) -> str:
    text, _, _, _ = _located(
        'stray-close',
        "Syntax Error: Trying to close loop, but there's no opened loop.",
        source,
        position,
    )
    return text
