"""
Executor for running Python code snippets.

The interpreter is started with ``-u`` so output written before a forced
kill is not lost in a buffer.  The image is expected to ship only the
standard library; users cannot install packages at runtime because the
container has no network.
"""

from __future__ import annotations

from typing import List

from ..models import Language
from .base import CodeExecutor


class PythonExecutor(CodeExecutor):
    """Execute Python code using the image's interpreter."""

    language = Language.PYTHON
    extension = "py"

    def runtime_command(self) -> List[str]:
        return ["python", "-u", self.source_target]
