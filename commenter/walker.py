"""
Batch walker - finds target files and drives scan, strip and write per file
"""

import glob
import logging
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence

from . import writer
from .errors import CommenterError, FileReadError, PathNotFoundError, UnsupportedLanguageError
from .ignore import PathFilter
from .languages import profile_for
from .results import BatchResult, FileResult, Outcome
from .scanner import scan
from .stats import collect
from .stripper import ignore_patterns_filter, strip

logger = logging.getLogger(__name__)

LARGE_FILE_LINES = 500
GLOB_CHARS = ('*', '?', '[')
# Bytes inspected when deciding whether a file is binary
BINARY_SNIFF = 8192


def is_glob(path) -> bool:
    return any(ch in str(path) for ch in GLOB_CHARS)


def read_source(path: Path) -> Optional[str]:
    """File content as text, or None for binary files."""
    try:
        data = path.read_bytes()
    except FileNotFoundError as e:
        raise PathNotFoundError(f"path does not exist: {path}", path=str(path)) from e
    except OSError as e:
        raise FileReadError(f"{path}: {e.strerror or e}", path=str(path)) from e
    if b'\x00' in data[:BINARY_SNIFF]:
        return None
    return writer.decode(data)


def process_file(path, write=False, ignore_patterns: Sequence[str] = (),
                 timeout: Optional[float] = None, warn_large=True) -> FileResult:
    """
    Scan and strip one file, persisting the result when write is set.

    Raises CommenterError subclasses; the batch walker turns them into
    Error results.
    """
    path = Path(path)
    if not path.exists():
        raise PathNotFoundError(f"path does not exist: {path}", path=str(path))
    if path.is_dir():
        raise FileReadError(f"{path} is a directory", path=str(path))
    profile = profile_for(path)
    if profile is None:
        raise UnsupportedLanguageError(f"unsupported file type: {path.suffix or path.name}", path=str(path))

    deadline = time.monotonic() + timeout if timeout else None
    original = read_source(path)
    if original is None:
        logger.info("Skipping %s (binary file)", path)
        return FileResult(path=str(path), language=profile.name, outcome=Outcome.SKIPPED,
                          message='binary file')

    result = strip(scan(original, profile, deadline), keep=ignore_patterns_filter(ignore_patterns))
    stats = collect(original, result.text)

    if result.malformed:
        # Unterminated segments were closed at end of line/file; nothing is lost
        logger.warning("%s: %d unterminated string or comment segment(s)", path, result.malformed)
    if warn_large and stats.original_lines > LARGE_FILE_LINES:
        logger.warning("Large file: %s (%d lines)", path, stats.original_lines)

    persisted = writer.apply(path, original, result.text, write)

    return FileResult(
        path=str(path),
        language=profile.name,
        original_lines=stats.original_lines,
        remaining_lines=stats.remaining_lines,
        comments_removed=result.comments_removed,
        persisted=persisted,
        malformed=result.malformed,
        removed=tuple(result.removed),
    )


def scan_file(path, ignore_patterns: Sequence[str] = (), timeout: Optional[float] = None) -> FileResult:
    """Preview: statistics for one file, the file itself is never modified."""
    return process_file(path, write=False, ignore_patterns=ignore_patterns, timeout=timeout)


def _attempt(path, **kwargs) -> FileResult:
    """process_file with failures recorded instead of raised."""
    try:
        return process_file(path, **kwargs)
    except CommenterError as e:
        logger.warning("Error processing %s: %s", path, e)
        profile = profile_for(path)
        return FileResult.from_error(path, e, language=profile.name if profile else None)
    except OSError as e:
        logger.warning("Error processing %s: %s", path, e)
        return FileResult.from_error(path, FileReadError(str(e), path=str(path)))


def _walk(root: Path, recursive: bool, path_filter: PathFilter) -> List[Path]:
    def on_error(e):
        # The root itself must be listable, subdirectories are skipped
        if e.filename == os.fspath(root):
            raise e
        logger.warning("Cannot list %s: %s", e.filename, e)

    files = []
    if recursive:
        for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
            rel_dir = os.path.relpath(dirpath, root)
            # Prune hidden and ignored directories in place
            dirnames[:] = sorted(
                d for d in dirnames
                if not d.startswith('.') and not path_filter.is_ignored(os.path.normpath(os.path.join(rel_dir, d)))
            )
            for name in filenames:
                files.append(Path(dirpath) / name)
    else:
        with os.scandir(root) as entries:
            for entry in entries:
                if entry.is_file():
                    files.append(Path(entry.path))

    selected = []
    for path in files:
        rel = os.path.relpath(path, root)
        if path_filter.is_ignored(rel) or path_filter.is_excluded(path):
            logger.debug("Ignoring %s", path)
            continue
        if profile_for(path) is None:
            # Unsupported files inside a directory are skipped, not failed
            continue
        selected.append(path)
    return sorted(selected)


def discover(target, recursive=False, exclude_patterns: Sequence[str] = ()) -> List[Path]:
    """
    Supported files under a directory or matching a glob pattern.

    Raises PathNotFoundError when the directory does not exist or the
    pattern matches nothing.
    """
    if is_glob(target):
        matches = sorted(glob.glob(str(target), recursive=True))
        if not matches:
            raise PathNotFoundError(f"no files match pattern: {target}", path=str(target))
        path_filter = PathFilter(exclude_patterns=exclude_patterns)
        return [Path(m) for m in matches
                if os.path.isfile(m) and profile_for(m) is not None and not path_filter.is_excluded(m)]

    root = Path(target)
    if not root.is_dir():
        raise PathNotFoundError(f"path does not exist: {target}", path=str(target))
    return _walk(root, recursive, PathFilter.for_root(root, exclude_patterns))


class _ResultCollector:
    """Single aggregation point shared by the worker threads."""

    def __init__(self):
        self._lock = threading.Lock()
        self._results = []

    def add(self, result: FileResult):
        with self._lock:
            self._results.append(result)

    def results(self):
        with self._lock:
            return list(self._results)


def process_batch(root, recursive=False, write=False, *, workers: Optional[int] = None,
                  timeout: Optional[float] = None, exclude_patterns: Sequence[str] = (),
                  ignore_patterns: Sequence[str] = (), warn_large=True) -> BatchResult:
    """
    Process a single file, a directory or a glob pattern.

    A single file target is processed directly and an unsupported extension
    is an error. Directory and glob targets skip unsupported files and
    record per-file failures without stopping the others. Results are
    ordered by path.
    """
    started = time.monotonic()
    file_kwargs = dict(write=write, ignore_patterns=ignore_patterns, timeout=timeout, warn_large=warn_large)

    if not is_glob(root) and not os.path.isdir(root):
        if not os.path.exists(root):
            error = PathNotFoundError(f"path does not exist: {root}", path=str(root))
            return BatchResult(str(root), (FileResult.from_error(root, error),), single=True)
        path_filter = PathFilter.for_root(root, exclude_patterns)
        if path_filter.is_excluded(root) or path_filter.is_ignored(os.path.basename(root)):
            logger.info("Skipping %s (excluded)", root)
            return BatchResult(str(root), single=True, elapsed=time.monotonic() - started)
        result = _attempt(root, **file_kwargs)
        return BatchResult(str(root), (result,), single=True, elapsed=time.monotonic() - started)

    try:
        files = discover(root, recursive, exclude_patterns)
    except PathNotFoundError as e:
        return BatchResult(str(root), (FileResult.from_error(root, e),), single=True)
    except OSError as e:
        logger.warning("Cannot list %s: %s", root, e)
        error = FileReadError(f"cannot list {root}: {e.strerror or e}", path=str(root))
        return BatchResult(str(root), (FileResult.from_error(root, error),), single=True)

    logger.info("Processing %d file(s) under %s", len(files), root)
    collector = _ResultCollector()

    def work(path):
        collector.add(_attempt(path, **file_kwargs))

    max_workers = workers or os.cpu_count() or 1
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        # work() never raises, failures are already recorded as results
        list(executor.map(work, files))

    return BatchResult(str(root), tuple(collector.results()), elapsed=time.monotonic() - started)
