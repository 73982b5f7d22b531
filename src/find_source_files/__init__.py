#!/usr/bin/env python3
"""
Find JavaScript and TypeScript source files in a project.

Files are yielded lazily in sorted order. Dependency directories such as
node_modules are never entered, whatever their depth.
"""

import argparse
import os
import sys
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

from logging_utils import configure_logging, get_logger
from pipeline_errors import PathError

logger = get_logger()

SOURCE_EXTENSIONS = frozenset({'.ts', '.tsx', '.js', '.jsx'})

# Directories that hold third-party packages
DEPENDENCY_DIRS = frozenset({'node_modules', 'vendor', 'bower_components', 'jspm_packages'})

TEST_FILE_MARKERS = ('.test.', '.spec.')


def parse_args(args: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed command-line arguments.
    """
    parser = argparse.ArgumentParser(description="Find JavaScript/TypeScript source files in a directory")
    parser.add_argument(
        "--directory",
        type=str,
        required=True,
        help="Directory to search for source files"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    return parser.parse_args(args)


def is_test_file(file_path: Path) -> bool:
    """Check if a file is an existing test file such as app.test.ts."""
    name = file_path.name.lower()
    return any(marker in name for marker in TEST_FILE_MARKERS)


def is_source_file(file_path: Path) -> bool:
    """Check if a file is a candidate for test generation.

    Args:
        file_path: Path to the file.

    Returns:
        True if the file has a recognized extension and is not a test file.
    """
    if file_path.suffix not in SOURCE_EXTENSIONS:
        return False
    return not is_test_file(file_path)


def should_skip_directory(dir_path: Path) -> bool:
    """Check if a directory is dependency storage or lies below one.

    Args:
        dir_path: Path to the directory.

    Returns:
        True if the directory should be skipped, False otherwise.
    """
    return any(part in DEPENDENCY_DIRS for part in dir_path.parts)


def _walk(root: Path, excluded: List[Path]) -> Iterator[str]:
    seen = {root.resolve()}

    for current, dirs, files in os.walk(root, followlinks=True):
        kept = []
        for name in sorted(dirs):
            dir_path = Path(current) / name
            if should_skip_directory(Path(name)):
                logger.debug(f"Skipping dependency directory: {dir_path}")
                continue
            real = dir_path.resolve()
            if real in excluded:
                logger.debug(f"Skipping excluded directory: {dir_path}")
                continue
            # A symlinked directory may point back into the tree
            if real in seen:
                continue
            seen.add(real)
            kept.append(name)
        dirs[:] = kept

        for name in sorted(files):
            file_path = Path(current) / name
            if is_source_file(file_path) and file_path.is_file():
                yield str(file_path)


def find_source_files(directory: str, exclude_dirs: Iterable[str] = ()) -> Iterator[str]:
    """Find source files in a directory.

    The root is checked immediately; the tree itself is walked lazily as the
    returned iterator is consumed.

    Args:
        directory: Directory to search for source files.
        exclude_dirs: Extra directories whose contents are never yielded.

    Returns:
        Iterator over the paths of candidate files, in sorted order.

    Raises:
        PathError: If the directory does not exist or is not a directory.
    """
    root = Path(directory)

    if not root.exists():
        raise PathError(f"Directory '{directory}' does not exist.")

    if not root.is_dir():
        raise PathError(f"'{directory}' is not a directory.")

    if should_skip_directory(root):
        logger.debug(f"Skipping dependency directory: {directory}")
        return iter(())

    excluded = [Path(d).resolve() for d in exclude_dirs]
    return _walk(root, excluded)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Print the candidate files of a directory, one per line.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        for file in find_source_files(args.directory):
            print(file)
    except PathError as e:
        logger.error(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
