"""
apppath - Executable-Relative Path Resolution
Settings and Logging

Copyright (c) 2026 Kay Schäfer. All Rights Reserved.
Proprietary and confidential. See LICENSE for details.

Loads ``apppath.yaml`` from beside the executable (or from the file
named by ``APPPATH_CONFIG``), fills gaps from ``DEFAULT_SETTINGS`` and
configures logging with an optional rotating log file.  The ``paths``
table holds named paths that the command line can resolve by name.
"""

import copy
import logging
import logging.handlers
from pathlib import Path
from typing import List, Optional, Union

import yaml

from .app_path import AppPath
from .errors import ResolutionError
from .overrides import OverrideSource, env, literal
from .resolver import PathResolver

logger = logging.getLogger(__name__)

SETTINGS_FILE = "apppath.yaml"
SETTINGS_ENV = "APPPATH_CONFIG"

# ---------------------------------------------------------------------------
# Default settings – used as fallback when keys are missing / invalid
# ---------------------------------------------------------------------------
DEFAULT_SETTINGS: dict = {
    "logging": {
        "level": "WARNING",
        "file": "",
        "console": True,
        "max_bytes": 5 * 1024 * 1024,   # 5 MB
        "backup_count": 5,
    },
    "paths": {},
}


# ---------------------------------------------------------------------------
# Settings validation
# ---------------------------------------------------------------------------
def _is_count(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _is_level(value) -> bool:
    return isinstance(value, str) and isinstance(logging.getLevelName(value.upper()), int)


_LOGGING_CHECKS = {
    "level": _is_level,
    "file": lambda value: isinstance(value, str),
    "console": lambda value: isinstance(value, bool),
    "max_bytes": _is_count,
    "backup_count": _is_count,
}


def _logging_block(raw) -> dict:
    """Validate the ``logging`` block key by key against its defaults.

    Unknown keys are kept as given.
    """
    block = copy.deepcopy(DEFAULT_SETTINGS["logging"])
    if raw is None:
        return block
    if not isinstance(raw, dict):
        logger.warning("Settings 'logging' is not a mapping – using defaults")
        return block
    for key, value in raw.items():
        check = _LOGGING_CHECKS.get(key)
        if check is not None and not check(value):
            logger.warning(
                "Settings 'logging.%s' is invalid (%r) – using default %r",
                key, value, block[key],
            )
            continue
        block[key] = value
    return block


def _paths_table(raw) -> dict:
    """Keep the named path entries that carry a usable ``path``."""
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        logger.warning("Settings 'paths' is not a mapping – no named paths")
        return {}
    table = {}
    for name, entry in raw.items():
        if isinstance(entry, str) or (isinstance(entry, dict) and entry.get("path")):
            table[str(name)] = copy.deepcopy(entry)
        else:
            logger.warning("Path entry '%s' has no 'path' value – skipped", name)
    return table


def _validated(raw: dict) -> dict:
    settings = {
        "logging": _logging_block(raw.get("logging")),
        "paths": _paths_table(raw.get("paths")),
    }
    for key, value in raw.items():
        if key not in settings:
            settings[key] = copy.deepcopy(value)
    return settings


def settings_path(resolver: Optional[PathResolver] = None) -> AppPath:
    """Location of the settings file.

    ``APPPATH_CONFIG`` wins when set; otherwise ``apppath.yaml`` beside
    the executable.  Raises a resolution error if the executable cannot
    be located and the location is relative.
    """
    resolver = resolver or PathResolver()
    return resolver.try_resolve(SETTINGS_FILE, [env(SETTINGS_ENV)])


def load_settings(
    path: Optional[Union[str, Path]] = None,
    resolver: Optional[PathResolver] = None,
) -> dict:
    """Load settings from a YAML file with validation.

    Missing keys or wrong types fall back to ``DEFAULT_SETTINGS``.
    If the file is absent, cannot be parsed, or its default location
    cannot be resolved because the executable is unknown, the full
    defaults are returned.

    Args:
        path:     Settings file.  Defaults to :func:`settings_path`.
        resolver: Resolver used to locate the default file.

    Returns:
        Validated settings dictionary.
    """
    if path:
        config_path = Path(path)
    else:
        try:
            config_path = settings_path(resolver).path
        except ResolutionError as exc:
            logger.warning("Settings file cannot be located: %s – using defaults", exc)
            return copy.deepcopy(DEFAULT_SETTINGS)
    try:
        with open(config_path, "r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except FileNotFoundError:
        logger.info("Settings file not found: %s – using defaults", config_path)
        return copy.deepcopy(DEFAULT_SETTINGS)
    except yaml.YAMLError as exc:
        logger.error("Error parsing settings file: %s – using defaults", exc)
        return copy.deepcopy(DEFAULT_SETTINGS)
    if not isinstance(raw, dict):
        logger.warning("Settings file did not produce a mapping – using defaults")
        return copy.deepcopy(DEFAULT_SETTINGS)
    logger.info("Settings loaded from %s", config_path)
    return _validated(raw)


def save_settings(
    settings: dict,
    path: Optional[Union[str, Path]] = None,
    resolver: Optional[PathResolver] = None,
) -> AppPath:
    """Write *settings* to a YAML file, creating parent directories.

    Returns:
        The path that was written.

    Raises:
        DirectoryCreationFailed: the parent directory could not be made.
        OSError: the file itself could not be written.
    """
    target = AppPath(path) if path else settings_path(resolver)
    target.create_parents()
    with open(target, "w", encoding="utf-8") as fh:
        yaml.safe_dump(settings, fh, default_flow_style=False, sort_keys=False)
    logger.info("Settings saved to %s", target)
    return target


# ---------------------------------------------------------------------------
# Named paths
# ---------------------------------------------------------------------------
def _entry_sources(entry: dict) -> List[OverrideSource]:
    names = entry.get("env") or []
    if isinstance(names, str):
        names = [names]
    sources: List[OverrideSource] = [env(name) for name in names]
    if entry.get("override"):
        sources.append(literal(str(entry["override"])))
    return sources


def named_path(
    settings: dict, name: str, resolver: Optional[PathResolver] = None
) -> AppPath:
    """Resolve the entry *name* of the ``paths`` table.

    An entry is either a plain path string or a mapping::

        paths:
          config:
            path: config.toml
            env: [MYAPP_CONFIG, CONFIG_FILE]
            override: /etc/myapp/config.toml

    Environment variables are consulted first, in order, then the
    literal ``override``, then ``path``.

    Raises:
        KeyError: *name* is not in the table.
        ValueError: the entry has no ``path``.
    """
    table = settings.get("paths") or {}
    if name not in table:
        raise KeyError(f"No path named {name!r}")
    entry = table[name]
    if isinstance(entry, str):
        entry = {"path": entry}
    if not isinstance(entry, dict) or not entry.get("path"):
        raise ValueError(f"Path entry {name!r} needs a 'path' value")
    resolver = resolver or PathResolver()
    return resolver.try_resolve(str(entry["path"]), _entry_sources(entry))


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
def setup_logging(
    settings: dict,
    resolver: Optional[PathResolver] = None,
    level: Optional[int] = None,
) -> List[logging.Handler]:
    """Configure the root logger from the ``logging`` settings block.

    A relative log file is placed beside the executable and its parent
    directories are created.  *level* overrides the configured level.

    Returns:
        The handlers attached to the root logger.
    """
    log_cfg = settings.get("logging", {})
    if level is None:
        level = getattr(logging, str(log_cfg.get("level", "WARNING")).upper(), logging.WARNING)
    log_file = log_cfg.get("file")
    fmt = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    handlers: list = []
    if log_cfg.get("console", True):
        handlers.append(logging.StreamHandler())
    if log_file:
        resolver = resolver or PathResolver()
        target = resolver.try_resolve(log_file).create_parents()
        rotating = logging.handlers.RotatingFileHandler(
            target,
            maxBytes=log_cfg.get("max_bytes", DEFAULT_SETTINGS["logging"]["max_bytes"]),
            backupCount=log_cfg.get("backup_count", DEFAULT_SETTINGS["logging"]["backup_count"]),
            encoding="utf-8",
        )
        handlers.append(rotating)

    handlers = handlers or [logging.StreamHandler()]
    logging.basicConfig(level=level, format=fmt, handlers=handlers, force=True)
    return handlers
