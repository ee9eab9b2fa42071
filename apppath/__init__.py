"""
apppath - Executable-Relative Path Resolution
Package initialization

Copyright (c) 2026 Kay Schäfer. All Rights Reserved.
Proprietary and confidential. See LICENSE for details.
"""

__version__ = "0.1.0"
__author__ = "apppath Development Team"
__description__ = "Portable paths relative to the running executable"

from .app_path import AppPath
from .base_dir import ExecutableBaseDirectory, exe_dir, try_exe_dir
from .errors import (
    AppPathError,
    DirectoryCreationFailed,
    ExecutableNotFound,
    InvalidExecutablePath,
    ResolutionError,
)
from .overrides import (
    EnvOverride,
    FunctionOverride,
    OverrideSource,
    ValueOverride,
    deferred,
    env,
    literal,
    optional,
)
from .resolver import PathResolver, resolve, resolve_with, try_resolve, try_resolve_with

__all__ = [
    'AppPath',
    'AppPathError',
    'ResolutionError',
    'ExecutableNotFound',
    'InvalidExecutablePath',
    'DirectoryCreationFailed',
    'ExecutableBaseDirectory',
    'exe_dir',
    'try_exe_dir',
    'OverrideSource',
    'EnvOverride',
    'ValueOverride',
    'FunctionOverride',
    'env',
    'literal',
    'optional',
    'deferred',
    'PathResolver',
    'resolve',
    'try_resolve',
    'resolve_with',
    'try_resolve_with',
]
