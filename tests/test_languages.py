import pytest

from commenter.languages import LANGUAGE_MAP, SUPPORTED_EXTENSIONS, is_supported, profile_for


@pytest.mark.parametrize("name, expected", [
    ("main.go", "Go"),
    ("script.js", "TypeScript/JavaScript"),
    ("types.ts", "TypeScript/JavaScript"),
    ("component.tsx", "TSX/JSX"),
    ("widget.jsx", "TSX/JSX"),
    ("query.sql", "SQL"),
    ("config.json", "JSON"),
    ("UPPER.GO", "Go"),
    ("src/nested/dir/app.ts", "TypeScript/JavaScript"),
    (".go", "Go"),
])
def test_profile_for_supported(name, expected):
    assert profile_for(name).name == expected


@pytest.mark.parametrize("name", ["README.md", "no_extension", "script.py", ".gitignore", "archive.tar.gz"])
def test_profile_for_unsupported(name):
    assert profile_for(name) is None
    assert not is_supported(name)


def test_extension_set_is_closed():
    assert SUPPORTED_EXTENSIONS == ('.go', '.js', '.json', '.jsx', '.sql', '.ts', '.tsx')
    assert set(LANGUAGE_MAP) == set(SUPPORTED_EXTENSIONS)


def test_only_markup_profiles_have_embedded_comments():
    assert profile_for('a.tsx').embedded is not None
    assert profile_for('a.jsx').embedded is not None
    assert profile_for('a.ts').embedded is None
    assert profile_for('a.js').embedded is None


def test_sql_and_json_comment_markers():
    assert profile_for('q.sql').line_comments == ('--',)
    assert profile_for('c.json').line_comments == ('//',)
    assert profile_for('c.json').block_comments == (('/*', '*/'),)
