"""
Stripper - rebuilds source text from scanned segments without the comments
"""

from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from .scanner import Segment


@dataclass(frozen=True)
class RemovedComment:
    line: int
    text: str


@dataclass
class StripResult:
    text: str
    comments_removed: int = 0
    removed: List[RemovedComment] = field(default_factory=list)
    # Segments closed by end of line/file instead of their delimiter
    malformed: int = 0


def strip(segments: Iterable[Segment], keep: Optional[Callable[[Segment], bool]] = None) -> StripResult:
    """
    Emit code and string segments verbatim and drop comment segments.

    keep, when given, can veto the removal of a comment segment; kept
    comments are emitted as they are and not counted. Comments that run to end of
    file without their closing delimiter are kept too.
    """
    out = []
    removed = []
    malformed = 0
    for segment in segments:
        if not segment.terminated:
            malformed += 1
        if segment.is_comment and segment.terminated and not (keep and keep(segment)):
            removed.append(RemovedComment(segment.start_line, segment.text))
            continue
        out.append(segment.text)
    return StripResult(''.join(out), len(removed), removed, malformed)


def ignore_patterns_filter(patterns) -> Optional[Callable[[Segment], bool]]:
    """Predicate keeping comments that mention any of the given substrings."""
    patterns = [p for p in (patterns or ()) if p]
    if not patterns:
        return None

    def keep(segment):
        return any(p in segment.text for p in patterns)

    return keep
