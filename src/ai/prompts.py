"""Prompt construction for unit test generation."""

from ai.models import GenerationRequest

TEST_PROMPT_TEMPLATE = """
Generate unit tests for the following code using Bun's native test runner format (import from "bun:test" and use describe, it and expect).
The tests should be written in the same language as the original code.
Please output only the code for the tests, without any extra explanation.
You provide output in JSON format: {{ "tests": "...", "testName": "..." }}.
"testName" is a meaningful name for the test case, it will be used for the file name.
File: {file_path}

Code:
-------------------------
{code}
-------------------------
"""


def build_request(file_path: str, content: str) -> GenerationRequest:
    """Build the generation request for one source file.

    Args:
        file_path: Path of the file being tested, embedded verbatim in the prompt.
        content: Source text of the file, embedded verbatim in the prompt.

    Returns:
        The request to send to the model.
    """
    return GenerationRequest(file_path=file_path, source=content, instruction=TEST_PROMPT_TEMPLATE)
