"""Main module for the unit test writer."""

from pathlib import Path
from typing import Optional

from ai import GenerationClient
from code_processor import RunReport
from logging_utils import get_logger
from pipeline_errors import ConfigurationError, PathError, WriteError
from unit_test_writer.config import Settings, load_settings
from write_tests import WriteTestsProcessor, ensure_output_dir

logger = get_logger()


def generate_tests(project_path: str, settings: Settings,
                   client: Optional[GenerationClient] = None) -> RunReport:
    """Generate unit tests for every candidate file of a project.

    Args:
        project_path: Root directory of the project.
        settings: Settings of this run.
        client: Generation client to use. One is created from settings if None.

    Returns:
        The report of the run. Per-file failures are recorded, not raised.

    Raises:
        PathError: If project_path is not an existing directory.
        WriteError: If the output directory cannot be created.
    """
    output_dir = Path(project_path) / settings.output_dir_name
    owns_client = client is None
    client = client or GenerationClient(settings)

    try:
        processor = WriteTestsProcessor(client, output_dir)
        # Checks the root before anything is created under it
        source_files = processor.find_files(project_path, exclude_dirs=[str(output_dir)])
        ensure_output_dir(output_dir)
        logger.info(f"Writing tests to {output_dir}")
        return processor.process_files(source_files)
    finally:
        if owns_client:
            client.close()


def main(project_path: str) -> int:
    """Run the pipeline for a project.

    Returns:
        Exit code: 0 once every file has been attempted, 1 on a fatal error.
    """
    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    logger.debug(f"Using {settings}")

    try:
        report = generate_tests(project_path, settings)
    except (PathError, WriteError) as e:
        logger.error(f"Error: {e}")
        return 1

    for file_path, reason in report.failed.items():
        logger.warning(f"No tests written for {file_path}: {reason}")
    return 0
