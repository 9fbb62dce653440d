"""
commenter - strip comments from TypeScript/JavaScript, Go, SQL and JSON files
without touching code or string literals
"""

__version__ = '0.1.0'

from .errors import (
    CommenterError,
    ErrorKind,
    PathNotFoundError,
    UnsupportedLanguageError,
)
from .languages import PROFILES, SUPPORTED_EXTENSIONS, Profile, profile_for
from .results import BatchResult, FileResult, Outcome
from .scanner import Segment, SegmentKind, scan
from .stripper import strip
from .walker import process_batch, process_file, scan_file

__all__ = [
    'BatchResult',
    'CommenterError',
    'ErrorKind',
    'FileResult',
    'Outcome',
    'PROFILES',
    'PathNotFoundError',
    'Profile',
    'SUPPORTED_EXTENSIONS',
    'Segment',
    'SegmentKind',
    'UnsupportedLanguageError',
    'process_batch',
    'process_file',
    'profile_for',
    'scan',
    'scan_file',
    'strip',
]
