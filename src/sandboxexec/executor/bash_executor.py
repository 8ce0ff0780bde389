"""
Executor for running Bash scripts.

The script is passed to ``bash`` as an argument rather than executed
directly, because the mount is read‑only and cannot be made executable.
Only the core utilities of the image are available.
"""

from __future__ import annotations

from typing import List

from ..models import Language
from .base import CodeExecutor


class BashExecutor(CodeExecutor):
    """Execute Bash scripts in a ``bash`` image."""

    language = Language.BASH
    extension = "sh"

    def runtime_command(self) -> List[str]:
        return ["bash", self.source_target]
