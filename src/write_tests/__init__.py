#!/usr/bin/env python3
"""
Write unit tests for source files with a language model.

Each source file is read, turned into a generation request, sent to the model,
and the returned tests are saved in the output directory as
<testName>.test.ts or <testName>.test.js.
"""

import os
from pathlib import Path

from ai import GenerationClient, GenerationResult, build_request
from code_processor import CodeProcessor
from logging_utils import get_logger
from pipeline_errors import ReadError, WriteError

logger = get_logger()

TYPESCRIPT_EXTENSIONS = frozenset({'.ts', '.tsx'})


def output_file_name(test_name: str, source_ext: str) -> str:
    """Derive the output file name for a suggested test name.

    The test file language follows the source file: .test.ts for .ts/.tsx
    sources and .test.js otherwise. A trailing source extension on the
    suggested name is dropped, as is any directory part.

    Raises:
        WriteError: If the name has no usable file name component.
    """
    base_name = Path(test_name.strip().replace('\\', '/')).name
    if not base_name or base_name in ('.', '..') or '\0' in base_name:
        raise WriteError(f"Cannot derive a file name from test name {test_name!r}")

    if source_ext and base_name.endswith(source_ext) and base_name != source_ext:
        base_name = base_name[:-len(source_ext)]

    suffix = '.test.ts' if source_ext in TYPESCRIPT_EXTENSIONS else '.test.js'
    return f"{base_name}{suffix}"


def ensure_output_dir(output_dir: Path) -> Path:
    """Create the output directory and its parents if needed."""
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise WriteError(f"Error creating tests directory {output_dir}: {e}") from e
    return output_dir


def materialize(output_dir: Path, source_ext: str, result: GenerationResult) -> Path:
    """Save generated tests in the output directory.

    An existing file with the same name is overwritten, so two sources whose
    suggested names collide leave only the last one written.

    Args:
        output_dir: Directory receiving the test files.
        source_ext: Extension of the source file, including the dot.
        result: The decoded model answer.

    Returns:
        Path of the written test file.

    Raises:
        WriteError: If the directory or the file cannot be written.
    """
    output_dir = ensure_output_dir(Path(output_dir))
    test_file_path = output_dir / output_file_name(result.test_name, source_ext)

    try:
        test_file_path.write_text(result.tests, encoding='utf-8')
    except (OSError, ValueError) as e:
        raise WriteError(f"Error writing {test_file_path}: {e}") from e

    return test_file_path


def read_source(file_path: str) -> str:
    try:
        return Path(file_path).read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(f"Error reading {file_path}: {e}") from e


class WriteTestsProcessor(CodeProcessor):
    """Processor that generates unit tests for one source file at a time."""

    def __init__(self, client: GenerationClient, output_dir: Path):
        self.client = client
        self.output_dir = Path(output_dir)

    def process_file(self, file_path: str) -> str:
        code = read_source(file_path)
        logger.info(f"Generating tests for {file_path}")

        request = build_request(file_path, code)
        result = self.client.generate(request)

        test_file_path = materialize(self.output_dir, os.path.splitext(file_path)[1], result)
        logger.info(f"Tests saved to {test_file_path}")
        return str(test_file_path)
