"""Configuration module for the unit test writer."""

import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from pipeline_errors import ConfigurationError

API_KEY_VAR = "OPENAI_API_KEY"
MODEL_VAR = "OPENAI_MODEL"
API_URL_VAR = "OPENAI_API_URL"
TIMEOUT_VAR = "OPENAI_TIMEOUT"

DEFAULT_MODEL = "gpt-4o"
DEFAULT_API_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_TIMEOUT = 120.0
DEFAULT_OUTPUT_DIR_NAME = "tests"


class Settings(BaseModel):
    """Settings read once at startup and handed to the generation client."""

    model_config = ConfigDict(frozen=True)

    api_key: str
    model: str = DEFAULT_MODEL
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    output_dir_name: str = DEFAULT_OUTPUT_DIR_NAME

    def __repr__(self) -> str:
        return f"Settings(model={self.model!r}, api_url={self.api_url!r}, timeout={self.timeout!r})"

    __str__ = __repr__


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build the settings from the environment.

    Args:
        environ: Mapping to read variables from. Defaults to os.environ after
                 loading a .env file from the working directory.

    Returns:
        The settings for this run.

    Raises:
        ConfigurationError: If the API key is missing or a value is malformed.
    """
    if environ is None:
        load_dotenv(Path(".env"))
        environ = os.environ

    api_key = (environ.get(API_KEY_VAR) or "").strip()
    if not api_key:
        raise ConfigurationError(f"{API_KEY_VAR} not set in environment variables.")

    raw_timeout = environ.get(TIMEOUT_VAR)
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
    except ValueError:
        raise ConfigurationError(f"{TIMEOUT_VAR} must be a number of seconds, got {raw_timeout!r}")
    if timeout <= 0:
        raise ConfigurationError(f"{TIMEOUT_VAR} must be positive, got {raw_timeout!r}")

    return Settings(
        api_key=api_key,
        model=environ.get(MODEL_VAR) or DEFAULT_MODEL,
        api_url=environ.get(API_URL_VAR) or DEFAULT_API_URL,
        timeout=timeout,
    )
