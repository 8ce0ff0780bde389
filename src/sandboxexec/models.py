"""Language identifiers and Pydantic models for the HTTP adapter.

``Language`` is the closed set of identifiers the executor registry knows
about.  Request bodies are validated against it before anything reaches an
executor, so an unsupported language never gets past this layer.
"""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class Language(str, Enum):
    """Supported source languages."""

    PHP = "php"
    PYTHON = "python"
    JAVASCRIPT = "javascript"
    RUBY = "ruby"
    BASH = "bash"
    GO = "go"
    CPP = "cpp"


class ExecuteRequest(BaseModel):
    """Request body for a single code execution."""

    language: Language = Field(..., description="Language the code is written in.")
    code: str = Field(..., description="Source code to execute.")
    stdin: str = Field(default="", description="Standard input to pass to the program.")


class ExecuteResponse(BaseModel):
    """Response body for code execution."""

    stdout: str
    stderr: str
    exit_code: int
    duration_ms: int


class LanguagesResponse(BaseModel):
    languages: List[str] = Field(default_factory=list)
