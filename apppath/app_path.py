"""
apppath - Executable-Relative Path Resolution
Resolved Path Value

Copyright (c) 2026 Kay Schäfer. All Rights Reserved.
Proprietary and confidential. See LICENSE for details.

``AppPath`` holds the final, usable path produced by the resolver.  It
behaves like any other path object (``os.fspath``, ``open()``,
``pathlib``) and adds the two directory-creation helpers applications
need before writing files next to their executable.
"""

import functools
import logging
import os
from pathlib import Path
from typing import Optional

from .errors import DirectoryCreationFailed
from .overrides import PathLike, to_native

logger = logging.getLogger(__name__)

_SEPARATORS = os.sep + (os.altsep or "")


@functools.total_ordering
class AppPath:
    """Immutable resolved path.

    Equality, ordering and hashing use the stored native path string, so
    ``AppPath`` values work as dictionary keys and sort predictably.
    The string is kept exactly as resolved; ``.`` and ``..`` segments
    are not collapsed, and the path operations below keep them too.

    The constructor wraps *path* verbatim and does not resolve it: a
    relative ``AppPath("config.toml")`` stays relative to the working
    directory.  Use :func:`apppath.resolve` or :func:`apppath.try_resolve`
    to place a path next to the executable.
    """

    __slots__ = ("_path",)

    def __init__(self, path: PathLike):
        object.__setattr__(self, "_path", to_native(path))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (AppPath, (self._path,))

    # ---- Path protocol --------------------------------------------------
    def __fspath__(self) -> str:
        return self._path

    def __str__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"AppPath({self._path!r})"

    @property
    def path(self) -> Path:
        """The resolved path as a :class:`pathlib.Path`."""
        return Path(self._path)

    # ---- Comparison -----------------------------------------------------
    def __eq__(self, other) -> bool:
        if not isinstance(other, AppPath):
            return NotImplemented
        return self._path == other._path

    def __lt__(self, other) -> bool:
        if not isinstance(other, AppPath):
            return NotImplemented
        return self._path < other._path

    def __hash__(self) -> int:
        return hash(self._path)

    # ---- Path operations ------------------------------------------------
    def join(self, *parts: PathLike) -> "AppPath":
        """Append *parts*; an absolute part replaces what came before."""
        return AppPath(os.path.join(self._path, *(to_native(p) for p in parts)))

    def __truediv__(self, other: PathLike) -> "AppPath":
        return self.join(other)

    @property
    def parent(self) -> Optional["AppPath"]:
        """The containing path, or ``None`` for a filesystem root.

        Only the last component is dropped.  A bare relative name has
        ``.`` as its parent.
        """
        trimmed = self._path.rstrip(_SEPARATORS) or self._path
        head = os.path.dirname(trimmed)
        if head == trimmed:
            return None
        if not head:
            return None if trimmed == os.curdir else AppPath(os.curdir)
        return AppPath(head)

    def with_suffix(self, suffix: str) -> "AppPath":
        """Replace the final suffix (or add one); ``""`` removes it."""
        if suffix and (not suffix.startswith(".") or suffix == "."
                       or any(sep in suffix for sep in _SEPARATORS)):
            raise ValueError(f"Invalid suffix {suffix!r}")
        if not os.path.basename(self._path):
            raise ValueError(f"{self!r} has an empty name")
        root, _ = os.path.splitext(self._path)
        return AppPath(root + suffix)

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def stem(self) -> str:
        return self.path.stem

    @property
    def suffix(self) -> str:
        return self.path.suffix

    def exists(self) -> bool:
        return os.path.exists(self._path)

    def is_file(self) -> bool:
        return os.path.isfile(self._path)

    def is_dir(self) -> bool:
        return os.path.isdir(self._path)

    # ---- Directory creation ---------------------------------------------
    def create_parents(self) -> "AppPath":
        """Create every missing parent directory of this path.

        Already-existing directories are fine, including ones created
        concurrently by another thread or process.

        Raises:
            DirectoryCreationFailed: the operating system refused.
        """
        parent = self.parent
        if parent is not None:
            _make_dirs(parent.path)
        return self

    def create_dir(self) -> "AppPath":
        """Create this path as a directory, including missing parents.

        Raises:
            DirectoryCreationFailed: the operating system refused, or a
                non-directory already exists at this path.
        """
        _make_dirs(self.path)
        return self


def _make_dirs(directory: Path) -> None:
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreationFailed(directory, exc) from exc
    logger.debug("Directory ensured: %s", directory)
