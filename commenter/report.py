"""
Text reports for single files and batches, with optional ANSI colours
"""

import sys

from .results import Outcome
from .walker import LARGE_FILE_LINES

COLOR_RESET = '\033[0m'
COLOR_RED = '\033[31m'
COLOR_GREEN = '\033[32m'
COLOR_YELLOW = '\033[33m'
COLOR_BLUE = '\033[34m'
COLOR_CYAN = '\033[36m'
COLOR_BOLD = '\033[1m'
COLOR_DIM = '\033[2m'


def use_color(no_color=False, stream=None) -> bool:
    stream = stream or sys.stdout
    return not no_color and hasattr(stream, 'isatty') and stream.isatty()


class Reporter:
    """Formats results; every method returns text, printing is up to the caller."""

    def __init__(self, color=False):
        self.color = color

    def paint(self, text, *codes) -> str:
        if not self.color or not codes:
            return str(text)
        return ''.join(codes) + str(text) + COLOR_RESET

    def stat(self, label, value) -> str:
        return f"{self.paint(label + ':', COLOR_CYAN)} {self.paint(value, COLOR_BOLD)}"

    def error(self, message) -> str:
        return f"{self.paint('Error:', COLOR_RED, COLOR_BOLD)} {message}"

    def warning(self, message) -> str:
        return f"{self.paint('Warning:', COLOR_YELLOW, COLOR_BOLD)} {message}"

    def elapsed(self, seconds) -> str:
        if seconds < 1e-6:
            value = f"{seconds * 1e9:.0f}ns"
        elif seconds < 1e-3:
            value = f"{seconds * 1e6:.0f}µs"
        elif seconds < 1:
            value = f"{seconds * 1e3:.2f}ms"
        else:
            value = f"{seconds:.3f}s"
        return f"{self.paint('Execution time:', COLOR_DIM)} {self.paint(value, COLOR_BOLD)}"

    def file_report(self, result, warn_large=True, elapsed=None) -> str:
        lines = [f"File: {result.path} ({result.language})"]
        if result.outcome is Outcome.SKIPPED:
            lines.append(f"Skipped: {result.message}")
            return '\n'.join(lines)
        if warn_large and result.original_lines > LARGE_FILE_LINES:
            lines.append(self.warning(f"Large file detected: {result.original_lines} lines (>{LARGE_FILE_LINES} LOC)"))
        if result.malformed:
            lines.append(self.warning(f"{result.malformed} unterminated string or comment segment(s) closed at end of line/file"))
        lines.append(self.stat('Original lines', result.original_lines))
        lines.append(self.stat('Comments removed', result.comments_removed))
        lines.append(self.stat('Remaining lines', result.remaining_lines))
        if result.removed:
            lines.append('')
            lines.append(self.paint('Removed comments:', COLOR_YELLOW, COLOR_BOLD))
            for comment in result.removed:
                text = ' '.join(comment.text.split())
                lines.append(f"  {self.paint(f'Line {comment.line}:', COLOR_BLUE)} {self.paint(text, COLOR_DIM)}")
        if elapsed is not None:
            lines.append('')
            lines.append(self.elapsed(elapsed))
        return '\n'.join(lines)

    def file_line(self, result) -> str:
        """One-line entry for a file inside a batch."""
        if result.outcome is Outcome.ERROR:
            return f"  {self.paint('✗', COLOR_RED)} {result.path}: {result.error_kind.value}: {result.message}"
        if result.outcome is Outcome.SKIPPED:
            return f"  {self.paint('-', COLOR_DIM)} {result.path}: skipped ({result.message})"
        return (f"  {self.paint('✓', COLOR_GREEN)} {result.path}: "
                f"Comments removed: {result.comments_removed}, "
                f"Original lines: {result.original_lines}, "
                f"Remaining lines: {result.remaining_lines}")

    def batch_summary(self, batch, write=False) -> str:
        lines = ['', self.paint('Batch Processing Summary:', COLOR_BOLD, COLOR_CYAN)]
        lines.append(self.stat('Files processed', batch.files_processed))
        lines.append(self.stat('Total comments removed', batch.total_comments_removed))
        lines.append(self.stat('Total lines processed', batch.total_lines))
        if write:
            lines.append(self.stat('Files written successfully', batch.written))
        if batch.failed:
            lines.append(self.paint(f"Failures: {batch.failures}", COLOR_RED))
            lines.append('')
            lines.append(self.paint('Errors:', COLOR_RED, COLOR_BOLD))
            for result in batch.errors:
                lines.append(self.paint(f"  {result.path}: {result.message}", COLOR_RED))
        return '\n'.join(lines)
