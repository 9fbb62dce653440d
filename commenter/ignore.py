"""
Path filters - exclude globs and .gitignore / .commenterignore patterns
"""

import fnmatch
import logging
import os
from pathlib import Path
from typing import List, Sequence

logger = logging.getLogger(__name__)

IGNORE_FILES = ('.gitignore', '.commenterignore')


def read_ignore_file(path) -> List[str]:
    """Patterns of one ignore file; blank lines and '#' comments are dropped."""
    try:
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            lines = f.read().splitlines()
    except FileNotFoundError:
        return []
    except OSError as e:
        logger.warning("Cannot read ignore file %s: %s", path, e)
        return []
    patterns = []
    for line in lines:
        line = line.strip()
        if line and not line.startswith('#'):
            patterns.append(line)
    return patterns


def load_ignore_patterns(directory) -> List[str]:
    patterns = []
    for name in IGNORE_FILES:
        found = read_ignore_file(Path(directory) / name)
        if found:
            logger.debug("Loaded %d patterns from %s", len(found), Path(directory) / name)
        patterns.extend(found)
    return patterns


class PathFilter:
    """
    Decides which discovered paths are left out.

    ignore_patterns follow a simplified .gitignore reading: a pattern matches
    the path relative to the scanned root or any single component of it, a
    leading '/' anchors it to the root and a trailing '/' is ignored.
    exclude_patterns are matched against the file name only.
    """

    def __init__(self, ignore_patterns: Sequence[str] = (), exclude_patterns: Sequence[str] = ()):
        self.ignore_patterns = [p for p in ignore_patterns if p and not p.startswith('!')]
        self.exclude_patterns = [p for p in exclude_patterns if p]

    @classmethod
    def for_root(cls, root, exclude_patterns=()):
        root = Path(root)
        directory = root if root.is_dir() else root.parent
        return cls(load_ignore_patterns(directory), exclude_patterns)

    def is_ignored(self, rel_path) -> bool:
        rel = str(rel_path).replace(os.sep, '/')
        parts = rel.split('/')
        for pattern in self.ignore_patterns:
            anchored = pattern.startswith('/')
            pattern = pattern.strip('/')
            if fnmatch.fnmatch(rel, pattern):
                return True
            if not anchored and any(fnmatch.fnmatch(part, pattern) for part in parts):
                return True
        return False

    def is_excluded(self, path) -> bool:
        name = os.path.basename(str(path))
        return any(fnmatch.fnmatch(name, pattern) for pattern in self.exclude_patterns)
