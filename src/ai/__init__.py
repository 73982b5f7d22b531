import json
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from ai.models import GenerationRequest, GenerationResult
from ai.prompts import build_request
from logging_utils import get_logger
from pipeline_errors import DecodeError, TransportError
from unit_test_writer.config import Settings

__all__ = [
    "GenerationClient",
    "GenerationRequest",
    "GenerationResult",
    "build_request",
    "decode_completion",
]

logger = get_logger()


def decode_completion(payload: Any) -> GenerationResult:
    """
    Decode a chat completion body into a GenerationResult.

    The model's answer arrives as a JSON document encoded inside
    choices[0].message.content, so the body is decoded twice.

    Args:
        payload: The raw response body (str or bytes) or an already parsed dict.

    Returns:
        The validated result.

    Raises:
        DecodeError: If either layer is not JSON, the envelope has no message
                     content, or tests/testName are missing or empty.
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except ValueError as e:
            raise DecodeError(f"Response body is not valid JSON: {e}") from e

    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise DecodeError(f"Response has no message content: {e!r}") from e

    if not isinstance(content, str):
        raise DecodeError(f"Message content is not a string: {type(content).__name__}")

    try:
        data = json.loads(content)
    except ValueError as e:
        raise DecodeError(f"Message content is not valid JSON: {e}\nResponse content: {content}") from e

    if not isinstance(data, dict):
        raise DecodeError(f"Message content is not a JSON object: {content}")

    try:
        return GenerationResult.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"Message content is missing tests or testName: {e}") from e


class GenerationClient:
    """
    Sends generation requests to an OpenAI-compatible chat completions endpoint.

    One request per call to generate(); nothing is retried or cached.
    """

    def __init__(self, settings: Settings, http_client: Optional[httpx.Client] = None):
        self.settings = settings
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(timeout=settings.timeout)

    def __enter__(self) -> "GenerationClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def _body(self, request: GenerationRequest) -> dict:
        return {
            "model": self.settings.model,
            "messages": request.messages(),
            "response_format": {"type": "json_object"},
        }

    def generate(self, request: GenerationRequest) -> GenerationResult:
        """
        Ask the model for unit tests for one file.

        Args:
            request: The request built for the source file.

        Returns:
            The decoded test code and suggested test name.

        Raises:
            TransportError: If the call fails or returns a non-success status.
            DecodeError: If the response cannot be decoded into a usable result.
        """
        headers = {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Content-Type": "application/json",
        }

        logger.debug(f"Calling {self.settings.api_url} with model {self.settings.model} for {request.file_path}")
        try:
            response = self._http.post(
                self.settings.api_url,
                headers=headers,
                json=self._body(request),
                timeout=self.settings.timeout,
            )
        except httpx.HTTPError as e:
            raise TransportError(f"API request failed: {e}") from e

        if not response.is_success:
            raise TransportError(
                f"API request failed with status: {response.status_code}",
                status_code=response.status_code,
            )

        return decode_completion(response.content)
