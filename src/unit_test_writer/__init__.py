"""Generate unit tests for a JavaScript/TypeScript project with a language model."""

__version__ = "0.1.0"
