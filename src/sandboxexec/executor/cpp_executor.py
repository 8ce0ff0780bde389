"""
Executor for compiling and running C++ programs.

The binary is written to ``/tmp`` inside the container and started only
if compilation succeeded.  Compiler diagnostics end up on stderr like
any other runtime error.
"""

from __future__ import annotations

from typing import List

from ..models import Language
from .base import CodeExecutor

BINARY_PATH = "/tmp/main"


class CppExecutor(CodeExecutor):
    """Compile with ``g++`` and run the result in the same container."""

    language = Language.CPP
    extension = "cpp"

    def runtime_command(self) -> List[str]:
        script = f"g++ -O2 -o {BINARY_PATH} {self.source_target} && {BINARY_PATH}"
        return ["sh", "-c", script]
