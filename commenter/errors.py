"""
Error kinds and the exception hierarchy
"""

from enum import Enum


class ErrorKind(Enum):
    PATH_NOT_FOUND = 'PathNotFound'
    UNSUPPORTED_LANGUAGE = 'UnsupportedLanguage'
    IO_ERROR = 'IOError'
    MALFORMED_INPUT = 'MalformedInput'
    WRITE_FAILURE = 'WriteFailure'
    TIMEOUT = 'Timeout'
    CONFIG = 'ConfigError'


class CommenterError(Exception):
    kind = ErrorKind.IO_ERROR

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path


class PathNotFoundError(CommenterError):
    kind = ErrorKind.PATH_NOT_FOUND


class UnsupportedLanguageError(CommenterError):
    kind = ErrorKind.UNSUPPORTED_LANGUAGE


class FileReadError(CommenterError):
    kind = ErrorKind.IO_ERROR


class WriteFailureError(CommenterError):
    kind = ErrorKind.WRITE_FAILURE


class ScanTimeout(CommenterError):
    kind = ErrorKind.TIMEOUT


class ConfigError(CommenterError):
    kind = ErrorKind.CONFIG
