"""
apppath - Executable-Relative Path Resolution
Error Types

Copyright (c) 2026 Kay Schäfer. All Rights Reserved.
Proprietary and confidential. See LICENSE for details.

Exception hierarchy shared by the resolver and the directory helpers.
Resolution failures (the executable cannot be located) and I/O failures
(a directory cannot be created) are kept in separate branches so callers
can handle them differently.
"""

import logging
from pathlib import Path
from typing import NoReturn, Union

logger = logging.getLogger(__name__)


class AppPathError(Exception):
    """Base class for every error raised by apppath."""


# ---------------------------------------------------------------------------
# Executable discovery
# ---------------------------------------------------------------------------
class ResolutionError(AppPathError):
    """The directory of the running executable could not be determined."""

    prefix = "Executable lookup failed"

    def __init__(self, detail: str):
        super().__init__(f"{self.prefix}: {detail}")
        self.detail = detail


class ExecutableNotFound(ResolutionError):
    """The interpreter could not report where the executable lives.

    Rare in practice: embedded interpreters with an unset
    ``sys.executable`` or a working directory that was deleted while the
    process was running.
    """

    prefix = "Failed to determine executable location"


class InvalidExecutablePath(ResolutionError):
    """The reported executable path is empty or otherwise unusable."""

    prefix = "Invalid executable path"


# ---------------------------------------------------------------------------
# Directory creation
# ---------------------------------------------------------------------------
class DirectoryCreationFailed(AppPathError):
    """Creating a directory (or its parents) failed with an ``OSError``."""

    def __init__(self, path: Union[str, Path], error: OSError):
        super().__init__(f"Failed to create directory {path}: {error}")
        self.path = Path(path)
        self.error = error


def describe(error: BaseException) -> str:
    """Return a single-line ``"<Kind>: <message>"`` diagnostic for *error*."""
    message = " ".join(str(error).split())
    return f"{type(error).__name__}: {message}"


def abort(error: AppPathError, action: str = "Failed to create AppPath") -> NoReturn:
    """Terminate the process for an unrecoverable resolution failure.

    Used by the infallible entry points.  The failure is logged at
    CRITICAL level and ``SystemExit`` is raised with a single-line
    message naming the failure kind, so the interpreter prints it to
    stderr and exits with status 1.
    """
    message = f"{action}: {describe(error)}"
    logger.critical("%s", message)
    raise SystemExit(message) from error
