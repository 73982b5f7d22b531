"""
Error types shared by the test generation pipeline.

Fatal errors stop the run before any file is processed. Per-file errors are
caught by the processor loop, logged with the offending path and skipped.
"""

from typing import Optional


class PipelineError(Exception):
    """Base class for all pipeline errors."""


class UsageError(PipelineError):
    """The command line was missing a required argument."""


class ConfigurationError(PipelineError):
    """A required setting (such as the API key) is missing or invalid."""


class PathError(PipelineError):
    """The project root does not exist or is not a directory."""


class ReadError(PipelineError):
    """A source file could not be read."""


class TransportError(PipelineError):
    """The remote call did not complete with a success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(PipelineError):
    """The remote response could not be decoded into a usable result."""


class WriteError(PipelineError):
    """A generated test file could not be written."""
