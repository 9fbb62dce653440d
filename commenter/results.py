"""
Outcome records produced by the per-file pipeline and the batch walker
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .errors import ErrorKind
from .stripper import RemovedComment


class Outcome(Enum):
    SUCCESS = 'Success'
    SKIPPED = 'Skipped'
    ERROR = 'Error'


@dataclass(frozen=True)
class FileResult:
    path: str
    language: Optional[str] = None
    original_lines: int = 0
    remaining_lines: int = 0
    comments_removed: int = 0
    persisted: bool = False
    outcome: Outcome = Outcome.SUCCESS
    error_kind: Optional[ErrorKind] = None
    message: str = ''
    # Unterminated strings/comments closed at end of line or file
    malformed: int = 0
    removed: Tuple[RemovedComment, ...] = ()

    @property
    def ok(self) -> bool:
        return self.outcome is not Outcome.ERROR

    @classmethod
    def from_error(cls, path, error, language=None):
        """Error-outcome result for a failure caught at the batch boundary."""
        kind = getattr(error, 'kind', ErrorKind.IO_ERROR)
        return cls(
            path=str(path),
            language=language,
            outcome=Outcome.ERROR,
            error_kind=kind,
            message=str(error),
        )


@dataclass(frozen=True)
class BatchResult:
    root: str
    results: Tuple[FileResult, ...] = ()
    # True when the root named a single file rather than a directory or glob
    single: bool = False
    elapsed: float = 0.0
    written: int = field(init=False)
    files_processed: int = field(init=False)
    total_comments_removed: int = field(init=False)
    total_lines: int = field(init=False)
    failures: int = field(init=False)

    def __post_init__(self):
        # Frozen, so totals are set once through object.__setattr__
        ordered = tuple(sorted(self.results, key=lambda r: r.path))
        succeeded = [r for r in ordered if r.outcome is Outcome.SUCCESS]
        object.__setattr__(self, 'results', ordered)
        object.__setattr__(self, 'files_processed', len(succeeded))
        object.__setattr__(self, 'total_comments_removed', sum(r.comments_removed for r in succeeded))
        object.__setattr__(self, 'total_lines', sum(r.original_lines for r in succeeded))
        object.__setattr__(self, 'written', sum(1 for r in succeeded if r.persisted))
        object.__setattr__(self, 'failures', sum(1 for r in ordered if r.outcome is Outcome.ERROR))

    @property
    def failed(self) -> bool:
        return self.failures > 0

    @property
    def errors(self):
        return [r for r in self.results if r.outcome is Outcome.ERROR]
