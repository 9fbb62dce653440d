"""
Lexical scanner - classifies every character of a source text as code,
string literal or one of the comment kinds.

The scanner is a single forward pass driven by a small state machine that is
parameterised by a language Profile. It yields Segments lazily; joining the
text of all yielded segments gives back the input unchanged.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from .languages import Profile, StringRule
from .errors import ScanTimeout

# Characters between two deadline checks
DEADLINE_STRIDE = 4096


class SegmentKind(Enum):
    CODE = 'code'
    LINE_COMMENT = 'line_comment'
    BLOCK_COMMENT = 'block_comment'
    EMBEDDED_COMMENT = 'embedded_comment'
    STRING = 'string'

    @property
    def is_comment(self) -> bool:
        return self in COMMENT_KINDS


COMMENT_KINDS = frozenset({
    SegmentKind.LINE_COMMENT,
    SegmentKind.BLOCK_COMMENT,
    SegmentKind.EMBEDDED_COMMENT,
})


@dataclass(frozen=True)
class Segment:
    kind: SegmentKind
    text: str
    start: int
    end: int
    start_line: int
    end_line: int
    # False when end of line or end of file closed the segment
    # instead of its own delimiter
    terminated: bool = True

    @property
    def is_comment(self) -> bool:
        return self.kind.is_comment


@dataclass
class ScanState:
    """Current automaton mode, the delimiter being matched and the escape flag."""
    mode: SegmentKind = SegmentKind.CODE
    closer: str = ''
    string_rule: Optional[StringRule] = None
    escape_pending: bool = False


def _line_end(text: str, pos: int) -> int:
    """Index of the line terminator at or after pos ('\\r\\n' counts from '\\r')."""
    nl = text.find('\n', pos)
    if nl == -1:
        return len(text)
    if nl > pos and text[nl - 1] == '\r':
        return nl - 1
    return nl


class Scanner:
    """
    Produces Segments for one text. Instances are single use: iterate once.
    """

    def __init__(self, text: str, profile: Profile, deadline: Optional[float] = None):
        self.text = text
        self.profile = profile
        self.deadline = deadline
        self.state = ScanState()
        self._line = 1
        self._consumed = False
        # Index of the last non-blank character emitted as code or string,
        # for the markup-position check of embedded comments
        self._last_significant = -1
        self._code_start = 0
        # Longest markers first so a longer marker is never shadowed by its prefix
        self._line_markers = sorted(profile.line_comments, key=len, reverse=True)
        self._block_pairs = sorted(profile.block_comments, key=lambda p: len(p[0]), reverse=True)

    def __iter__(self) -> Iterator[Segment]:
        if self._consumed:
            raise RuntimeError('Scanner already consumed')
        self._consumed = True
        return self._scan()

    # -- helpers -------------------------------------------------------------

    def _segment(self, kind, start, end, terminated=True) -> Segment:
        chunk = self.text[start:end]
        start_line = self._line
        self._line += chunk.count('\n')
        if kind in (SegmentKind.CODE, SegmentKind.STRING):
            stripped = chunk.rstrip()
            if stripped:
                self._last_significant = start + len(stripped) - 1
        return Segment(kind, chunk, start, end, start_line, self._line, terminated)

    def _check_deadline(self, pos):
        if self.deadline is not None and time.monotonic() > self.deadline:
            raise ScanTimeout(f'Scan exceeded its time limit at offset {pos}')

    def _previous_significant(self, pos) -> int:
        """Index of the last non-blank code character before pos, or -1."""
        text = self.text
        i = pos - 1
        while i >= self._code_start and text[i] in ' \t\r\n':
            i -= 1
        if i >= self._code_start:
            return i
        return self._last_significant

    def _in_markup_position(self, pos, rule) -> bool:
        """True when a brace at pos starts a JSX child expression."""
        text = self.text
        i = self._previous_significant(pos)
        if i == -1:
            return True
        if text[i] not in rule.after:
            return False
        if text[i] == '>':
            # '=>' opens an arrow function body
            if i > 0 and text[i - 1] == '=':
                return False
            # A tag closes here unless the '<' follows a name, as in
            # Promise<void> or Component<Props>
            tag = text.rfind('<', 0, i)
            if tag == -1:
                return False
            before = text[tag - 1] if tag > 0 else ''
            if before.isalnum() or before in ('_', '$', '.'):
                return False
        return True

    def _embedded_end(self, pos) -> int:
        """End offset of an embedded comment opening at pos, or -1."""
        rule = self.profile.embedded
        text = self.text
        if rule is None or not text.startswith(rule.open_brace, pos):
            return -1
        if not self._in_markup_position(pos, rule):
            return -1
        i = pos + len(rule.open_brace)
        while i < len(text) and text[i] in ' \t':
            i += 1
        if not text.startswith(rule.open, i):
            return -1
        close = text.find(rule.close, i + len(rule.open))
        if close == -1:
            return -1
        j = close + len(rule.close)
        while j < len(text) and text[j] in ' \t\r\n':
            j += 1
        if not text.startswith(rule.close_brace, j):
            return -1
        return j + len(rule.close_brace)

    def _opening(self, pos):
        """Segment kind and payload for a construct opening at pos, if any."""
        text = self.text
        end = self._embedded_end(pos)
        if end != -1:
            return SegmentKind.EMBEDDED_COMMENT, end
        for opener, closer in self._block_pairs:
            if text.startswith(opener, pos):
                return SegmentKind.BLOCK_COMMENT, (opener, closer)
        for marker in self._line_markers:
            if text.startswith(marker, pos):
                return SegmentKind.LINE_COMMENT, marker
        for rule in self.profile.strings:
            if text.startswith(rule.delimiter, pos):
                return SegmentKind.STRING, rule
        return None, None

    # -- per-state consumers -------------------------------------------------
    # Each takes the offset just past the opening token and returns
    # (end offset, terminated).

    def _consume_string(self, pos, rule: StringRule):
        text = self.text
        n = len(text)
        state = self.state
        delim = rule.delimiter
        while pos < n:
            ch = text[pos]
            if state.escape_pending:
                state.escape_pending = False
                pos += 1
                continue
            if rule.escape is not None and ch == rule.escape:
                state.escape_pending = True
                pos += 1
                continue
            if text.startswith(delim, pos):
                if rule.doubled and text.startswith(delim, pos + len(delim)):
                    pos += 2 * len(delim)
                    continue
                return pos + len(delim), True
            if ch == '\n' and not rule.multiline:
                # Malformed single-line string: close it before the terminator
                if text[pos - 1] == '\r':
                    pos -= 1
                return pos, False
            pos += 1
            if pos % DEADLINE_STRIDE == 0:
                self._check_deadline(pos)
        return n, False

    def _consume_block(self, pos, closer):
        close = self.text.find(closer, pos)
        if close == -1:
            return len(self.text), False
        return close + len(closer), True

    def _consume_line(self, pos):
        return _line_end(self.text, pos), True

    # -- main loop -------------------------------------------------------------

    def _scan(self) -> Iterator[Segment]:
        text = self.text
        n = len(text)
        state = self.state
        code_start = 0
        pos = 0
        checked = 0

        while pos < n:
            if pos - checked >= DEADLINE_STRIDE:
                self._check_deadline(pos)
                checked = pos

            kind, payload = self._opening(pos)
            if kind is None:
                pos += 1
                continue

            if code_start < pos:
                yield self._segment(SegmentKind.CODE, code_start, pos)

            state.mode = kind
            if kind is SegmentKind.EMBEDDED_COMMENT:
                end, terminated = payload, True
            elif kind is SegmentKind.BLOCK_COMMENT:
                opener, state.closer = payload
                end, terminated = self._consume_block(pos + len(opener), state.closer)
            elif kind is SegmentKind.LINE_COMMENT:
                end, terminated = self._consume_line(pos + len(payload))
            else:
                state.string_rule = payload
                state.closer = payload.delimiter
                end, terminated = self._consume_string(pos + len(payload.delimiter), payload)

            yield self._segment(kind, pos, end, terminated)
            state.mode = SegmentKind.CODE
            state.closer = ''
            state.string_rule = None
            state.escape_pending = False
            pos = code_start = self._code_start = end

        if code_start < n:
            yield self._segment(SegmentKind.CODE, code_start, n)


def scan(text: str, profile: Profile, deadline: Optional[float] = None) -> Iterator[Segment]:
    """Lazily classify text into Segments for the given profile."""
    return iter(Scanner(text, profile, deadline))
