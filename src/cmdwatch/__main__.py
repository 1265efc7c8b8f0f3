"""Entry point for cmdwatch.

Usage:
    cmdwatch [options] command [args...]
    python -m cmdwatch -d 2 -p "src tests" make test
"""

import sys


def main() -> int:
    """Main entry point for the cmdwatch CLI."""
    from cmdwatch.cli import run_cli

    return run_cli(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(main())
