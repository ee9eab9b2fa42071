"""
apppath - Executable-Relative Path Resolution
Command Line Interface

Copyright (c) 2026 Kay Schäfer. All Rights Reserved.
Proprietary and confidential. See LICENSE for details.

``apppath base``            print the executable directory
``apppath resolve PATH``    resolve a path (``--env`` / ``--override``)
``apppath named NAME``      resolve a named path from ``apppath.yaml``
"""

import argparse
import logging
import sys
from typing import List, Optional

from .base_dir import default_base_directory
from .errors import DirectoryCreationFailed, ResolutionError, describe
from .overrides import env, literal
from .resolver import PathResolver
from .settings import load_settings, named_path, setup_logging

EXIT_RESOLUTION_FAILED = 1
EXIT_DIRECTORY_FAILED = 2


def _cmd_base(args: argparse.Namespace, resolver: PathResolver) -> int:
    print(resolver.base_dir.try_get())
    return 0


def _cmd_resolve(args: argparse.Namespace, resolver: PathResolver) -> int:
    resolved = resolver.try_resolve(args.path, args.overrides or [])
    if args.mkdir:
        resolved.create_dir()
    elif args.parents:
        resolved.create_parents()
    print(resolved)
    return 0


def _cmd_named(args: argparse.Namespace, resolver: PathResolver) -> int:
    try:
        resolved = named_path(args.settings, args.name, resolver)
    except (KeyError, ValueError) as exc:
        print(f"apppath: {exc.args[0]}", file=sys.stderr)
        return EXIT_RESOLUTION_FAILED
    print(resolved)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apppath",
        description="Resolve paths relative to the running executable.",
    )
    parser.add_argument("--config", type=str, default=None, help="Settings YAML file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    base_parser = subparsers.add_parser("base", help="Print the executable directory.")
    base_parser.set_defaults(handler=_cmd_base)

    resolve_parser = subparsers.add_parser("resolve", help="Resolve a path.")
    resolve_parser.add_argument("path", type=str, help="Default path (relative or absolute).")
    # Both options append to one list so command-line order is priority order.
    resolve_parser.add_argument(
        "--env",
        dest="overrides",
        action="append",
        type=env,
        metavar="NAME",
        help="Environment variable that overrides the path when set.",
    )
    resolve_parser.add_argument(
        "--override",
        dest="overrides",
        action="append",
        type=literal,
        metavar="VALUE",
        help="Literal override path.",
    )
    mode = resolve_parser.add_mutually_exclusive_group()
    mode.add_argument("--parents", action="store_true", help="Create parent directories.")
    mode.add_argument("--mkdir", action="store_true", help="Create the path as a directory.")
    resolve_parser.set_defaults(handler=_cmd_resolve)

    named_parser = subparsers.add_parser("named", help="Resolve a named path from settings.")
    named_parser.add_argument("name", type=str)
    named_parser.set_defaults(handler=_cmd_named)
    return parser


def main(argv: Optional[List[str]] = None, resolver: Optional[PathResolver] = None) -> int:
    args = build_parser().parse_args(argv)
    resolver = resolver or PathResolver(default_base_directory())

    try:
        args.settings = load_settings(args.config, resolver)
        setup_logging(args.settings, resolver, level=logging.DEBUG if args.verbose else None)
        return args.handler(args, resolver)
    except ResolutionError as exc:
        print(f"apppath: {describe(exc)}", file=sys.stderr)
        return EXIT_RESOLUTION_FAILED
    except DirectoryCreationFailed as exc:
        print(f"apppath: {describe(exc)}", file=sys.stderr)
        return EXIT_DIRECTORY_FAILED


if __name__ == "__main__":
    sys.exit(main())
