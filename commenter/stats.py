"""
Line statistics for a file before and after stripping
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LineStats:
    original_lines: int
    remaining_lines: int


def count_lines(text: str) -> int:
    # A trailing partial line counts as a line; an empty buffer has none
    if not text:
        return 0
    lines = text.count('\n')
    if not text.endswith('\n'):
        lines += 1
    return lines


def collect(original: str, stripped: str) -> LineStats:
    return LineStats(count_lines(original), count_lines(stripped))
