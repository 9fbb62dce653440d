"""
Run options and the optional commenter.config.json file
"""

import json
import logging
import os
from dataclasses import dataclass, field, fields
from typing import List, Optional

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = 'commenter.config.json'

# JSON key -> Options attribute
CONFIG_KEYS = {
    'write': 'write',
    'recursive': 'recursive',
    'noColor': 'no_color',
    'excludePatterns': 'exclude_patterns',
    'ignorePatterns': 'ignore_patterns',
    'workers': 'workers',
    'timeout': 'timeout',
    'noWarnLarge': 'no_warn_large',
}


@dataclass
class Options:
    write: bool = False
    recursive: bool = True
    no_color: bool = False
    exclude_patterns: List[str] = field(default_factory=list)
    ignore_patterns: List[str] = field(default_factory=list)
    workers: Optional[int] = None
    timeout: Optional[float] = None
    no_warn_large: bool = False


def split_patterns(value) -> List[str]:
    """'a, b,,c' -> ['a', 'b', 'c']; lists pass through stripped."""
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(',')
    return [str(p).strip() for p in value if str(p).strip()]


def load_config(path) -> dict:
    """Options from a JSON config file, keyed by Options attribute names."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}", path=str(path)) from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid config file {path}: {e}", path=str(path)) from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Invalid config file {path}: expected a JSON object", path=str(path))

    values = {}
    for key, value in raw.items():
        attr = CONFIG_KEYS.get(key)
        if attr is None:
            logger.warning("Unknown config key %r in %s", key, path)
            continue
        if value is None:
            continue
        if attr in ('exclude_patterns', 'ignore_patterns'):
            value = split_patterns(value)
        values[attr] = value
    logger.debug("Loaded config %s: %s", path, values)
    return values


def resolve_options(overrides: dict, config_path=None) -> Options:
    """
    Merge built-in defaults, the config file and explicit overrides, in that
    order of increasing priority. Overrides set to None are treated as unset.

    Without an explicit config_path the default file is used only if present.
    """
    values = {}
    if config_path:
        values.update(load_config(config_path))
    elif os.path.isfile(DEFAULT_CONFIG_FILE):
        values.update(load_config(DEFAULT_CONFIG_FILE))

    for key, value in overrides.items():
        if value is None:
            continue
        if key in ('exclude_patterns', 'ignore_patterns'):
            value = split_patterns(value)
            if not value:
                continue
        values[key] = value

    known = {f.name for f in fields(Options)}
    return Options(**{k: v for k, v in values.items() if k in known})
