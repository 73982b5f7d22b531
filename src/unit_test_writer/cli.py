"""Command-line interface for the unit test writer.

Usage: unit-test-writer [--verbose] <project-path>
"""

import argparse
import sys
from typing import Optional, Sequence

from logging_utils import configure_logging
from pipeline_errors import UsageError
from unit_test_writer.main import main

USAGE = "Usage: unit-test-writer [--verbose] <project-path>"


def parse_args(args: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        args: Command line arguments. Defaults to None, which uses sys.argv[1:].

    Returns:
        Parsed command-line arguments.

    Raises:
        UsageError: If the project path is missing.
    """
    parser = argparse.ArgumentParser(
        prog="unit-test-writer",
        description="Generate Bun unit tests for the JavaScript/TypeScript files of a project."
    )
    parser.add_argument(
        "project_path",
        nargs="?",
        help="Root directory of the project to generate tests for."
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging."
    )
    parsed_args = parser.parse_args(args)

    if not parsed_args.project_path:
        raise UsageError(USAGE)

    return parsed_args


def cli(args: Optional[Sequence[str]] = None) -> int:
    """Run the command-line interface.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    try:
        parsed_args = parse_args(args)
    except UsageError as e:
        print(e, file=sys.stderr)
        return 1

    configure_logging(parsed_args.verbose)
    return main(parsed_args.project_path)


if __name__ == "__main__":
    sys.exit(cli())
