#!/usr/bin/env python3
"""
Base module for processing source files one at a time.

A processor walks the files found by find_source_files and hands each one to
process_file(). A failure in one file is logged and the loop moves on, so a run
always finishes once the file sequence is exhausted.
"""

import time
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from find_source_files import find_source_files
from logging_utils import get_logger
from pipeline_errors import PipelineError

logger = get_logger()


class RunReport(BaseModel):
    """Outcome of one processing run."""

    attempted: List[str] = Field(default_factory=list)
    written: Dict[str, str] = Field(default_factory=dict)
    """Source file -> output file."""
    failed: Dict[str, str] = Field(default_factory=dict)
    """Source file -> reason."""


class CodeProcessor(ABC):
    """Base class for processors that handle source files one by one."""

    @abstractmethod
    def process_file(self, file_path: str) -> str:
        """Process a single source file.

        Args:
            file_path: Path of the source file.

        Returns:
            Path of the file produced for it.

        Raises:
            PipelineError: If the file could not be processed.
        """

    def find_files(self, directory: str, exclude_dirs: Iterable[str] = ()) -> Iterable[str]:
        """Find the files to process. Raises PathError for a bad directory."""
        return find_source_files(directory, exclude_dirs=exclude_dirs)

    def process_files(self, source_files: Iterable[str], report: Optional[RunReport] = None) -> RunReport:
        """Process every file, isolating failures per file.

        Args:
            source_files: Files to process, consumed lazily.
            report: Report to fill in. A new one is created if None.

        Returns:
            The report of attempted, written and failed files.
        """
        report = report if report is not None else RunReport()
        start_time = time.time()

        for file_path in source_files:
            report.attempted.append(file_path)
            try:
                report.written[file_path] = self.process_file(file_path)
            except PipelineError as e:
                logger.error(f"Error processing {file_path}: {type(e).__name__}: {e}")
                report.failed[file_path] = f"{type(e).__name__}: {e}"
            except Exception as e:
                logger.exception(f"Unexpected error processing {file_path}: {e}")
                report.failed[file_path] = f"{type(e).__name__}: {e}"

        total_duration = time.time() - start_time
        logger.info(
            f"Finished {len(report.attempted)} files in {total_duration:.2f} seconds: "
            f"{len(report.written)} written, {len(report.failed)} failed."
        )
        return report
