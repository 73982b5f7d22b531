"""Pydantic models exchanged with the language model."""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GenerationRequest(BaseModel):
    """Everything needed to ask the model for tests for one source file."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    source: str
    instruction: str

    @property
    def prompt(self) -> str:
        return self.instruction.format(file_path=self.file_path, code=self.source)

    def messages(self) -> List[Dict[str, str]]:
        return [{"role": "user", "content": self.prompt}]


class GenerationResult(BaseModel):
    """Decoded model answer: the test code and a name for the test file."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    tests: str
    test_name: str = Field(alias="testName")

    @field_validator("tests", "test_name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value
