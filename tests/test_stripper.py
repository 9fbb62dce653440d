import pytest

from commenter.languages import profile_for
from commenter.scanner import scan
from commenter.stripper import RemovedComment, ignore_patterns_filter, strip

from conftest import strip_source

SAMPLES = [
    ('a.go', 'package main\nfunc main(){}\n// c1\n/* c2\n// inner */\n'),
    ('a.go', 'msg := "String with // comment inside"\n'),
    ('a.ts', 'const url = "http://x"; // note\nconst t = `// keep ${url}`; /* gone */\n'),
    ('a.tsx', '<h1>{message}</h1>\n{/* comment */}\n'),
    ('q.sql', "SELECT '--' AS dashes -- trailing\nFROM t /* block */;\n"),
    ('c.json', '{\n  // comment\n  "a": "/* not */"\n}\n'),
]


def is_subsequence(small, big):
    it = iter(big)
    return all(ch in it for ch in small)


def test_scenario_go_line_and_block():
    result = strip_source('package main\nfunc main(){}\n// c1\n/* c2\n// inner */\n', 'a.go')
    assert result.comments_removed == 2
    assert result.text == 'package main\nfunc main(){}\n\n\n'
    assert result.removed == [RemovedComment(3, '// c1'), RemovedComment(4, '/* c2\n// inner */')]


def test_block_comment_counts_once():
    result = strip_source('/* a // b */ c', 'a.go')
    assert result.comments_removed == 1
    assert result.text == ' c'


def test_string_immunity():
    text = 'msg := "String with // comment inside"'
    result = strip_source(text, 'a.go')
    assert result.comments_removed == 0
    assert result.text == text


def test_embedded_comment_counts_once():
    result = strip_source('<h1>{message}</h1>\n{/* multi\nline */}\n', 'a.tsx')
    assert result.comments_removed == 1
    assert result.text == '<h1>{message}</h1>\n\n'


@pytest.mark.parametrize("name, text", SAMPLES)
def test_output_is_ordered_subsequence(name, text):
    result = strip_source(text, name)
    assert len(result.text) <= len(text)
    assert is_subsequence(result.text, text)


@pytest.mark.parametrize("name, text", SAMPLES)
def test_stripping_is_idempotent(name, text):
    once = strip_source(text, name)
    twice = strip_source(once.text, name)
    assert twice.comments_removed == 0
    assert twice.text == once.text


@pytest.mark.parametrize("name, text", SAMPLES)
def test_removed_segments_fill_the_gaps(name, text):
    segments = list(scan(text, profile_for(name)))
    result = strip(segments)
    kept = ''.join(s.text for s in segments if not s.is_comment)
    assert result.text == kept
    assert ''.join(s.text for s in segments) == text


def test_ignore_patterns_keep_matching_comments():
    text = '// @ts-ignore\nfoo(); // remove me\n/* eslint-disable */\n'
    result = strip_source(text, 'a.ts', keep=ignore_patterns_filter(['@ts-ignore', 'eslint-disable']))
    assert result.comments_removed == 1
    assert result.text == '// @ts-ignore\nfoo(); \n/* eslint-disable */\n'


def test_ignore_patterns_filter_empty():
    assert ignore_patterns_filter([]) is None
    assert ignore_patterns_filter(['', None]) is None


def test_unterminated_comment_is_kept_and_reported():
    result = strip_source('a = 1; /* never closed\nb = 2;\n', 'a.js')
    assert result.comments_removed == 0
    assert result.malformed == 1
    assert result.text == 'a = 1; /* never closed\nb = 2;\n'


def test_unterminated_string_is_reported_but_scan_continues():
    result = strip_source('s = "abc\n// gone\n', 'a.js')
    assert result.malformed == 1
    assert result.comments_removed == 1
    assert result.text == 's = "abc\n\n'


@pytest.mark.parametrize("text, expected", [
    ('async function load(): Promise<void> { /* noop */ }\n', 'async function load(): Promise<void> {  }\n'),
    ('class Empty extends React.Component<Props> {/* nothing */}\n', 'class Empty extends React.Component<Props> {}\n'),
    ('<p>Total {/* todo */}</p>\n', '<p>Total {}</p>\n'),
])
def test_braces_outside_markup_survive(text, expected):
    result = strip_source(text, 'a.tsx')
    assert result.comments_removed == 1
    assert result.text == expected
