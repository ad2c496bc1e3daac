# ============================================================
# SPDX-License-Identifier: GPL-3.0-or-later
# This program is part of the Origen version service project.
# Copyright (C) 2026  The Origen version service authors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
# ============================================================
"""Command line interface for the Origen version service.

Run with: origen-version <command>  (or python -m origen_version)

Commands:
    show   - Print the version string (or the full descriptor with --json)
    serve  - Start the HTTP service
"""

import argparse
import json
import sys

from origen_version import __service_name__
from origen_version.version import VERSION_DESCRIPTOR, VersionDescriptor


def run_show(descriptor: VersionDescriptor, as_json: bool = False) -> int:
    """Print the version descriptor.

    Args:
        descriptor: The version descriptor to print.
        as_json: Print every descriptor field as JSON instead of the
                 rendered string.

    Returns:
        Exit code.
    """
    if as_json:
        print(json.dumps(descriptor.to_dict(), indent=2))
    else:
        print(descriptor.render())
    return 0


def run_serve() -> int:
    """Start the HTTP service.

    Returns:
        Exit code.
    """
    from origen_version.app import main as serve_main

    serve_main()
    return 0


def build_parser(descriptor: VersionDescriptor) -> argparse.ArgumentParser:
    """Build the argument parser for the given descriptor."""
    parser = argparse.ArgumentParser(
        prog=__service_name__,
        description="Origen version service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables:
    ORIGEN_ENVIRONMENT  Environment mode: dev or prod (default: dev)
    LOG_LEVEL           Logging level (default: INFO)
    LOG_FORMAT          json or console (default: json)
    SERVICE_HOST        Host to bind to (default: 0.0.0.0)
    SERVICE_PORT        Port to bind to (default: 8080)

Examples:
    origen-version --version
    origen-version show --json
    origen-version serve
        """,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {descriptor.render()}",
    )

    subparsers = parser.add_subparsers(dest="command")

    show_parser = subparsers.add_parser("show", help="Print the version")
    show_parser.add_argument(
        "--json",
        action="store_true",
        help="Print all version fields as JSON",
    )

    subparsers.add_parser("serve", help="Start the HTTP service")

    return parser


def main(
    argv: list[str] | None = None,
    descriptor: VersionDescriptor | None = None,
) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command line arguments. Defaults to sys.argv[1:].
        descriptor: Version descriptor to report. Defaults to the
                    package's own version.

    Returns:
        Exit code from the executed command.
    """
    if descriptor is None:
        descriptor = VERSION_DESCRIPTOR

    parser = build_parser(descriptor)
    args = parser.parse_args(argv)

    if args.command == "show":
        return run_show(descriptor, as_json=args.json)
    elif args.command == "serve":
        return run_serve()
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
