"""
Output writer - preview or atomic persist of stripped content
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path

from .errors import WriteFailureError

logger = logging.getLogger(__name__)

ENCODING = 'utf-8'
# Undecodable bytes survive the str round trip unchanged
ENCODING_ERRORS = 'surrogateescape'


def encode(text: str) -> bytes:
    return text.encode(ENCODING, ENCODING_ERRORS)


def decode(data: bytes) -> str:
    return data.decode(ENCODING, ENCODING_ERRORS)


def atomic_write(path, content: str) -> None:
    """
    Replace path with content via a temporary file in the same directory and
    os.replace, so readers only ever see the old or the new file.
    """
    path = Path(path)
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            'wb', dir=path.parent, prefix=f'.{path.name}.', suffix='.tmp', delete=False
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(encode(content))
            tmp.flush()
            os.fsync(tmp.fileno())
        try:
            shutil.copymode(path, tmp_name)
        except OSError as e:
            logger.debug("Could not copy mode of %s: %s", path, e)
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        raise WriteFailureError(f"Failed to write {path}: {e}", path=str(path)) from e
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError:
                logger.debug("Could not remove temporary file %s", tmp_name)


def apply(path, original: str, stripped: str, write: bool) -> bool:
    """
    Persist stripped content when write is set.

    Returns True when the file on disk was replaced. Preview mode and
    unchanged content leave the file untouched.
    """
    if not write:
        return False
    if stripped == original:
        logger.debug("No changes needed: %s", path)
        return False
    atomic_write(path, stripped)
    logger.info("Modified: %s", path)
    return True
