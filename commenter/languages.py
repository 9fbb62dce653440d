"""
Language profiles - comment and string grammar for every supported file type
"""

import os
from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class StringRule:
    delimiter: str
    escape: Optional[str] = '\\'
    doubled: bool = False     # '' inside '...' is an escaped quote (SQL)
    multiline: bool = False   # template/raw strings may cross line breaks


@dataclass(frozen=True)
class EmbeddedRule:
    """Brace-wrapped block comment as used in JSX: {/* ... */}"""
    open_brace: str = '{'
    close_brace: str = '}'
    open: str = '/*'
    close: str = '*/'
    # Last code character that puts the brace in a markup position.
    # An empty history (start of file) also counts. A '>' only counts when it
    # closes a tag, not an arrow or the type arguments of a name.
    after: str = '>}'


@dataclass(frozen=True)
class Profile:
    name: str
    extensions: Tuple[str, ...]
    line_comments: Tuple[str, ...] = ()
    block_comments: Tuple[Tuple[str, str], ...] = ()
    embedded: Optional[EmbeddedRule] = None
    strings: Tuple[StringRule, ...] = ()


C_BLOCK = (('/*', '*/'),)

# String grammars shared by several profiles
JS_STRINGS = (
    StringRule('"'),
    StringRule("'"),
    StringRule('`', multiline=True),  # template literal
)
GO_STRINGS = (
    StringRule('"'),
    StringRule("'"),                           # rune literal
    StringRule('`', escape=None, multiline=True),  # raw string
)
SQL_STRINGS = (
    StringRule("'", escape=None, doubled=True, multiline=True),
    StringRule('"', escape=None, doubled=True, multiline=True),  # quoted identifier
)
JSON_STRINGS = (StringRule('"'),)


PROFILES = (
    Profile(
        name='TypeScript/JavaScript',
        extensions=('.ts', '.js'),
        line_comments=('//',),
        block_comments=C_BLOCK,
        strings=JS_STRINGS,
    ),
    Profile(
        name='TSX/JSX',
        extensions=('.tsx', '.jsx'),
        line_comments=('//',),
        block_comments=C_BLOCK,
        embedded=EmbeddedRule(),
        strings=JS_STRINGS,
    ),
    Profile(
        name='Go',
        extensions=('.go',),
        line_comments=('//',),
        block_comments=C_BLOCK,
        strings=GO_STRINGS,
    ),
    Profile(
        name='SQL',
        extensions=('.sql',),
        line_comments=('--',),
        block_comments=C_BLOCK,
        strings=SQL_STRINGS,
    ),
    # JSON with comments (JSONC style), not strict JSON
    Profile(
        name='JSON',
        extensions=('.json',),
        line_comments=('//',),
        block_comments=C_BLOCK,
        strings=JSON_STRINGS,
    ),
)

# Extension -> profile, e.g. '.tsx' -> TSX/JSX
LANGUAGE_MAP: Dict[str, Profile] = {
    ext: profile for profile in PROFILES for ext in profile.extensions
}

SUPPORTED_EXTENSIONS = tuple(sorted(LANGUAGE_MAP))


def profile_for(path_or_extension) -> Optional[Profile]:
    """Profile for a file name, path or bare extension; None when unsupported."""
    value = os.fspath(path_or_extension)
    if value.startswith('.') and os.sep not in value and value.count('.') == 1:
        extension = value
    else:
        extension = os.path.splitext(value)[1]
    return LANGUAGE_MAP.get(extension.lower())


def is_supported(path) -> bool:
    return profile_for(path) is not None
