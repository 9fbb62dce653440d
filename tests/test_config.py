import json

import pytest

from commenter.config import Options, load_config, resolve_options, split_patterns
from commenter.errors import ConfigError


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def test_split_patterns():
    assert split_patterns('a, b,,c ') == ['a', 'b', 'c']
    assert split_patterns(['x ', '', ' y']) == ['x', 'y']
    assert split_patterns(None) == []


def test_defaults_without_config_file():
    assert resolve_options({}) == Options()


def test_load_config_maps_keys(tmp_path):
    path = tmp_path / 'custom.json'
    path.write_text(json.dumps({
        'write': True,
        'noColor': True,
        'recursive': False,
        'excludePatterns': ['*.min.js'],
        'ignorePatterns': '@ts-ignore, eslint-disable',
        'workers': 2,
        'unknown': 1,
    }))
    assert load_config(path) == {
        'write': True,
        'no_color': True,
        'recursive': False,
        'exclude_patterns': ['*.min.js'],
        'ignore_patterns': ['@ts-ignore', 'eslint-disable'],
        'workers': 2,
    }


def test_default_config_file_is_picked_up(tmp_path):
    (tmp_path / 'commenter.config.json').write_text('{"recursive": false, "noWarnLarge": true}')
    options = resolve_options({})
    assert options.recursive is False
    assert options.no_warn_large is True


def test_flags_override_config(tmp_path):
    (tmp_path / 'commenter.config.json').write_text('{"write": false, "excludePatterns": ["*.js"]}')
    options = resolve_options({'write': True, 'exclude_patterns': '*.go', 'recursive': None})
    assert options.write is True
    assert options.exclude_patterns == ['*.go']
    assert options.recursive is True


def test_invalid_config_file(tmp_path):
    path = tmp_path / 'broken.json'
    path.write_text('{not json')
    with pytest.raises(ConfigError):
        resolve_options({}, config_path=path)
    with pytest.raises(ConfigError):
        resolve_options({}, config_path=tmp_path / 'missing.json')
