"""
apppath - Executable-Relative Path Resolution
Override Sources

Copyright (c) 2026 Kay Schäfer. All Rights Reserved.
Proprietary and confidential. See LICENSE for details.

An override replaces the caller's default path when it is present.
Three concrete sources cover the supported forms:

* **EnvOverride**      – an environment variable, read at evaluation time
* **ValueOverride**    – a value the caller already has (``None`` = absent)
* **FunctionOverride** – a zero-argument callable, only invoked when needed

Sources are evaluated strictly in priority order; evaluation stops at the
first one that yields a value.
"""

import abc
import logging
import os
from typing import Any, Callable, Iterable, Optional, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, bytes, "os.PathLike[str]", "os.PathLike[bytes]"]


def to_native(value: PathLike) -> str:
    """Convert a path-like value to the platform's native ``str`` form."""
    return os.fsdecode(os.fspath(value))


# ---------------------------------------------------------------------------
# Source types
# ---------------------------------------------------------------------------
class OverrideSource(abc.ABC):
    """A possible replacement for the default path."""

    @abc.abstractmethod
    def value(self) -> Optional[str]:
        """Return the override path, or ``None`` when it is absent."""

    @abc.abstractmethod
    def describe(self) -> str:
        """Short label used in log messages."""


class EnvOverride(OverrideSource):
    """Environment variable override.

    Looked up in ``os.environ`` on every evaluation, so changes to the
    process environment are always reflected.  A variable that is unset
    or set to the empty string counts as absent.
    """

    def __init__(self, name: str):
        if not name:
            raise ValueError("Environment variable name must not be empty")
        self.name = name

    def value(self) -> Optional[str]:
        return os.environ.get(self.name) or None

    def describe(self) -> str:
        return f"env {self.name}"

    def __repr__(self) -> str:
        return f"EnvOverride({self.name!r})"


class ValueOverride(OverrideSource):
    """Pre-computed override, e.g. parsed from a command-line flag."""

    def __init__(self, value: Optional[PathLike]):
        self._value = None if value is None else to_native(value)

    def value(self) -> Optional[str]:
        return self._value

    def describe(self) -> str:
        return "value" if self._value is not None else "value (absent)"

    def __repr__(self) -> str:
        return f"ValueOverride({self._value!r})"


class FunctionOverride(OverrideSource):
    """Deferred override computed by a zero-argument callable.

    The callable runs on each evaluation and only when every
    higher-priority source was absent.  Returning ``None`` means absent.
    """

    def __init__(self, func: Callable[[], Optional[PathLike]]):
        if not callable(func):
            raise TypeError(f"Override function must be callable, got {type(func).__name__}")
        self._func = func

    def value(self) -> Optional[str]:
        result = self._func()
        return None if result is None else to_native(result)

    def describe(self) -> str:
        return f"function {getattr(self._func, '__name__', repr(self._func))}"

    def __repr__(self) -> str:
        return f"FunctionOverride({self._func!r})"


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------
def env(name: str) -> EnvOverride:
    return EnvOverride(name)


def literal(value: PathLike) -> ValueOverride:
    """A value that is always present."""
    if value is None:
        raise ValueError("literal() needs a value; use optional() for maybe-absent values")
    return ValueOverride(value)


def optional(value: Optional[PathLike]) -> ValueOverride:
    return ValueOverride(value)


def deferred(func: Callable[[], Optional[PathLike]]) -> FunctionOverride:
    return FunctionOverride(func)


def as_override(obj: Any) -> OverrideSource:
    """Coerce a convenience argument into an :class:`OverrideSource`.

    Sources pass through unchanged, callables become deferred overrides
    and everything else (``None``, strings, path objects) a pre-computed
    value.  Environment variables must be named explicitly with
    :func:`env` because a bare string is taken as a path.
    """
    if isinstance(obj, OverrideSource):
        return obj
    if callable(obj):
        return FunctionOverride(obj)
    return ValueOverride(obj)


def first_present(sources: Iterable[OverrideSource]) -> Optional[str]:
    """Return the value of the first present source, or ``None``.

    Sources after the first present one are never evaluated.
    """
    for source in sources:
        candidate = source.value()
        if candidate is not None:
            logger.debug("Override from %s: %s", source.describe(), candidate)
            return candidate
    return None
