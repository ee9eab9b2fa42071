"""
apppath - Executable-Relative Path Resolution
Path Resolver

Copyright (c) 2026 Kay Schäfer. All Rights Reserved.
Proprietary and confidential. See LICENSE for details.

Turns a caller-supplied path plus optional overrides into an
:class:`AppPath`.

Resolution order (first match wins):

1. The first present override source, in the order given.
2. The caller's path.

The chosen path is returned unchanged when it is absolute; a relative
one is joined onto the executable's directory.  The base directory is
only looked up in that second case, so an absolute path or override can
never fail.
"""

import logging
import os
from typing import Any, Iterable, Optional

from .app_path import AppPath
from .base_dir import ExecutableBaseDirectory, default_base_directory
from .errors import AppPathError, abort
from .overrides import OverrideSource, PathLike, as_override, first_present, to_native

logger = logging.getLogger(__name__)


class PathResolver:
    """Resolve paths against an executable base directory.

    Args:
        base_dir: The :class:`ExecutableBaseDirectory` to join relative
                  paths onto.  Defaults to the process-wide cell; tests
                  pass ``ExecutableBaseDirectory.fixed(...)``.
    """

    def __init__(self, base_dir: Optional[ExecutableBaseDirectory] = None):
        self.base_dir = base_dir if base_dir is not None else default_base_directory()

    def try_resolve(
        self, path: PathLike, overrides: Iterable[OverrideSource] = ()
    ) -> AppPath:
        """Resolve *path*, letting *overrides* replace it in priority order.

        Raises:
            ExecutableNotFound: a relative path needed the base directory
                and the executable could not be located.
            InvalidExecutablePath: the reported executable path is unusable.
        """
        chosen = first_present(overrides)
        if chosen is None:
            chosen = to_native(path)
        if os.path.isabs(chosen):
            return AppPath(chosen)
        return AppPath(os.path.join(self.base_dir.try_get(), chosen))

    def resolve(
        self, path: PathLike, overrides: Iterable[OverrideSource] = ()
    ) -> AppPath:
        """Infallible :meth:`try_resolve`; aborts the process on failure."""
        try:
            return self.try_resolve(path, overrides)
        except AppPathError as exc:
            abort(exc)

    def try_resolve_with(self, default: PathLike, override: Any) -> AppPath:
        """Single-override form of :meth:`try_resolve`.

        *override* may be an :class:`OverrideSource`, a zero-argument
        callable, a path or ``None``.
        """
        return self.try_resolve(default, (as_override(override),))

    def resolve_with(self, default: PathLike, override: Any) -> AppPath:
        return self.resolve(default, (as_override(override),))


# ---------------------------------------------------------------------------
# Module-level shortcuts bound to the process-wide base directory
# ---------------------------------------------------------------------------
_default_resolver = PathResolver()


def try_resolve(path: PathLike, overrides: Iterable[OverrideSource] = ()) -> AppPath:
    return _default_resolver.try_resolve(path, overrides)


def resolve(path: PathLike, overrides: Iterable[OverrideSource] = ()) -> AppPath:
    return _default_resolver.resolve(path, overrides)


def try_resolve_with(default: PathLike, override: Any) -> AppPath:
    return _default_resolver.try_resolve_with(default, override)


def resolve_with(default: PathLike, override: Any) -> AppPath:
    return _default_resolver.resolve_with(default, override)
