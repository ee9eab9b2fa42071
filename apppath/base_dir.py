"""
apppath - Executable-Relative Path Resolution
Executable Base Directory

Copyright (c) 2026 Kay Schäfer. All Rights Reserved.
Proprietary and confidential. See LICENSE for details.

Locates the directory that contains the running executable and caches
it for the lifetime of the process.  The lookup is lazy and thread-safe:
concurrent first callers share a single computation and observe the
same outcome.
"""

import logging
import os
import sys
import threading
from pathlib import Path
from typing import Callable, Optional, Union

from .errors import (
    AppPathError,
    ExecutableNotFound,
    InvalidExecutablePath,
    ResolutionError,
    abort,
)

logger = logging.getLogger(__name__)

Locator = Callable[[], Optional[str]]


def locate_executable() -> Optional[str]:
    """Return the raw path of the running program.

    * **Frozen / EXE** (``sys.frozen`` is set): ``sys.executable``, the
      bundled binary itself.
    * **Script**: the ``__file__`` of the ``__main__`` module.
    * **Interactive / ``-c`` / embedded**: ``sys.executable``, which may be
      ``None`` or ``""`` when the interpreter cannot tell.
    """
    if getattr(sys, "frozen", False):
        return sys.executable
    main = sys.modules.get("__main__")
    script = getattr(main, "__file__", None)
    if script:
        return script
    return sys.executable


def directory_of(executable: Optional[Union[str, os.PathLike]]) -> Path:
    """Turn a raw executable path into its containing directory.

    Raises:
        ExecutableNotFound: *executable* is ``None`` or cannot be made
            absolute.
        InvalidExecutablePath: *executable* is empty.
    """
    if executable is None:
        raise ExecutableNotFound("the interpreter did not report an executable path")
    raw = os.fsdecode(os.fspath(executable))
    if not raw.strip():
        raise InvalidExecutablePath("executable path is empty - unsupported environment")
    try:
        absolute = Path(os.path.abspath(raw))
    except OSError as exc:
        raise ExecutableNotFound(f"cannot make {raw!r} absolute: {exc}") from exc
    # The root has no parent; pathlib returns the root itself, which is the
    # base directory for an executable such as "/init".
    return absolute.parent


class _Attempt:
    """One in-flight computation shared by every thread waiting on it."""

    __slots__ = ("done", "directory", "error")

    def __init__(self):
        self.done = threading.Event()
        self.directory: Optional[Path] = None
        self.error: Optional[BaseException] = None


def _waiter_error(error: Optional[BaseException]) -> ResolutionError:
    """A fresh error for a thread that waited on a failed lookup."""
    if isinstance(error, ResolutionError):
        return type(error)(error.detail)
    return ExecutableNotFound(f"lookup in another thread failed: {error!r}")


class ExecutableBaseDirectory:
    """Process-wide, compute-once cache of the executable's directory.

    The cell starts uninitialised.  The first :meth:`try_get` runs the
    *locator*; a successful result is stored for good and returned as the
    identical object on every later call.  Threads that arrive while a
    computation is running wait for it and share its result; on failure
    each waiter raises its own error chained to the computing thread's.
    A failure is not stored, so a later call retries.
    """

    def __init__(self, locator: Optional[Locator] = None):
        self._locator = locator or locate_executable
        self._lock = threading.Lock()
        self._directory: Optional[Path] = None
        self._attempt: Optional[_Attempt] = None

    @classmethod
    def fixed(cls, directory: Union[str, os.PathLike]) -> "ExecutableBaseDirectory":
        """Return a cell already initialised to *directory*."""
        cell = cls(locator=lambda: None)
        cell._directory = Path(directory)
        return cell

    @property
    def is_initialized(self) -> bool:
        return self._directory is not None

    def try_get(self) -> Path:
        """Return the cached directory, computing it on first use.

        Raises:
            ExecutableNotFound: the executable could not be located.
            InvalidExecutablePath: the reported location is unusable.
        """
        directory = self._directory
        if directory is not None:
            return directory

        with self._lock:
            if self._directory is not None:
                return self._directory
            attempt = self._attempt
            owner = attempt is None
            if owner:
                attempt = self._attempt = _Attempt()

        if owner:
            self._run(attempt)
            if attempt.error is not None:
                raise attempt.error
            return attempt.directory

        attempt.done.wait()
        if attempt.directory is None:
            raise _waiter_error(attempt.error) from attempt.error
        return attempt.directory

    def get(self) -> Path:
        """Infallible variant of :meth:`try_get`; aborts on failure."""
        try:
            return self.try_get()
        except AppPathError as exc:
            abort(exc, "Failed to determine executable directory")

    def _run(self, attempt: _Attempt) -> None:
        try:
            try:
                raw = self._locator()
            except OSError as exc:
                raise ExecutableNotFound(str(exc)) from exc
            attempt.directory = directory_of(raw)
        except BaseException as exc:
            attempt.error = exc
            logger.debug("Executable directory lookup failed: %s", exc)
        finally:
            with self._lock:
                if attempt.directory is not None:
                    self._directory = attempt.directory
                    logger.debug("Executable directory cached: %s", attempt.directory)
                self._attempt = None
            attempt.done.set()


# ---------------------------------------------------------------------------
# Process-wide default
# ---------------------------------------------------------------------------
_default = ExecutableBaseDirectory()


def default_base_directory() -> ExecutableBaseDirectory:
    """Return the process-wide cell used when no other one is injected."""
    return _default


def try_exe_dir() -> Path:
    """Directory of the running executable (fallible)."""
    return _default.try_get()


def exe_dir() -> Path:
    """Directory of the running executable; aborts if it cannot be found."""
    return _default.get()
