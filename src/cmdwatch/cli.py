"""Command-line interface for cmdwatch."""

from __future__ import annotations

import argparse
import asyncio
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from cmdwatch import __version__
from cmdwatch.errors import UnknownScreenError, WatchError

console = Console(stderr=True, emoji=False, highlight=False)

BANNER = r"""               _       _
__      ____ _| |_ ___| |__
\ \ /\ / / _' | __/ __| '_ \
 \ V  V / (_| | || (__| | | |
  \_/\_/ \__,_|\__\___|_| |_|
"""

DESCRIPTION = (
    BANNER
    + """
Watch a command and its output. There is a delay between commands (-d)
and if a timeout (-t) is reached then watch will exit.

The paths (-p) are a space separated list of paths to watch for changes.
Directories are searched recursively. When no changes are detected the
command is not run.

The screen type determines how the output is displayed. The default, plain,
will just print the output to stdout with no formatting.

Screen types
    plain
        Plain text output.
    vt100
        VT100 terminal output.
"""
)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="cmdwatch",
        usage="%(prog)s [options] command [args...]",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=None,
        help="verbose output",
    )
    parser.add_argument(
        "-d", "--delay",
        type=float,
        metavar="SECONDS",
        help="delay in seconds between commands (default: 1)",
    )
    parser.add_argument(
        "-t", "--timeout",
        type=float,
        metavar="SECONDS",
        help="command timeout in seconds (default: 60)",
    )
    parser.add_argument(
        "-p", "--paths",
        metavar="PATHS",
        help="paths to watch for changes (optional)",
    )
    parser.add_argument(
        "-s", "--screen",
        metavar="TYPE",
        help="screen type: plain, vt100 (default: plain)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="config file, applied after the system/user/project files",
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="command to run, followed by its arguments",
    )
    return parser


def _overrides(parsed: argparse.Namespace) -> dict[str, Any]:
    return {
        "delay": parsed.delay,
        "timeout": parsed.timeout,
        "paths": parsed.paths,
        "screen": parsed.screen,
        "verbose": parsed.verbose,
    }


def fail(message: str) -> None:
    """Print a fatal error message to stderr."""
    console.print(f"[bold red]ERROR:[/bold red] {escape(message)}", soft_wrap=True)


def run_cli(args: Sequence[str]) -> int:
    """Run the CLI with the given arguments and return the exit code."""
    from cmdwatch.app import run_watch
    from cmdwatch.config import load_config
    from cmdwatch.logging import setup_logging

    parsed = create_parser().parse_args(args)

    command = list(parsed.command)
    if command[:1] == ["--"]:
        command = command[1:]

    try:
        config = load_config(command, overrides=_overrides(parsed), config_path=parsed.config)
        setup_logging(config.logging, verbose=config.verbose)
        return asyncio.run(run_watch(config))
    except UnknownScreenError as e:
        console.print(escape(str(e)), soft_wrap=True)
        return e.exit_code
    except WatchError as e:
        fail(str(e))
        return e.exit_code
    except KeyboardInterrupt:
        return 0
