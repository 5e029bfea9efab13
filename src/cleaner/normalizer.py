"""Whitespace cleanup and optional word wrapping for extracted text."""
from __future__ import annotations

import re
from collections.abc import Callable

_HORIZONTAL_RUN = re.compile(r"[ \t]{2,}")
_BLANK_LINE_RUN = re.compile(r"\n[ \t]*\n(?:[ \t]*\n)+")
_TRAILING_SPACE = re.compile(r"[ \t]+\n")

# Display width of one output line; callers that leave placeholders in the
# text pass a measure that counts the line as it will finally be shown.
Measure = Callable[[str], int]


def normalize_whitespace(text: str) -> str:
    """Collapse space runs, cap blank-line runs at one, drop trailing blanks."""
    text = _HORIZONTAL_RUN.sub(" ", text)
    text = _BLANK_LINE_RUN.sub("\n\n", text)
    return _TRAILING_SPACE.sub("\n", text)


def _glue_zero_width(words: list[str], measure: Measure) -> list[str]:
    # a token that shows as nothing rides along with its neighbour
    units: list[str] = []
    pending = ""
    for word in words:
        if measure(word) == 0:
            if units:
                units[-1] = f"{units[-1]} {word}"
            else:
                pending = f"{pending} {word}" if pending else word
        else:
            units.append(f"{pending} {word}" if pending else word)
            pending = ""
    if pending:
        units.append(pending)
    return units


def wrap_single_line(line: str, max_length: int, measure: Measure = len) -> str:
    """Greedy word fill. A word longer than *max_length* gets its own line
    and is never split."""
    lines: list[str] = []
    current = ""
    for word in _glue_zero_width(line.split(), measure):
        if not current:
            current = word
        elif measure(f"{current} {word}") <= max_length:
            current = f"{current} {word}"
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)
    return "\n".join(lines)


def wrap_lines(text: str, max_length: int, measure: Measure = len) -> str:
    """Wrap every line longer than *max_length*; shorter lines are kept as-is.

    Lengths are counted in characters, not bytes.
    """
    return "\n".join(
        line if measure(line) <= max_length
        else wrap_single_line(line, max_length, measure)
        for line in text.split("\n")
    )


def normalize(text: str, max_line_length: int = 0, measure: Measure = len) -> str:
    text = normalize_whitespace(text)
    if max_line_length > 0:
        # a line of non-ASCII blanks wraps to an empty line
        text = normalize_whitespace(wrap_lines(text, max_line_length, measure))
    return text.strip()


class TextNormalizer:
    """Object form of :func:`normalize` for callers that hold pipeline stages."""

    def normalize(
        self, text: str, max_line_length: int = 0, measure: Measure = len
    ) -> str:
        return normalize(text, max_line_length, measure)
