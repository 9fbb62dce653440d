import pytest

from commenter.languages import profile_for
from commenter.scanner import scan
from commenter.stripper import strip


def strip_source(text, extension, keep=None):
    return strip(scan(text, profile_for(extension)), keep=keep)


@pytest.fixture
def write_file(tmp_path):
    def _write(name, content):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode('utf-8'))
        return path
    return _write
