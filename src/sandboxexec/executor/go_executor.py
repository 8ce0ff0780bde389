"""
Executor for running Go programs.

``go run`` compiles into the container's own build cache, so the mounted
source can stay read‑only.  Compilation time counts towards the CPU
ceiling.
"""

from __future__ import annotations

from typing import List

from ..models import Language
from .base import CodeExecutor


class GoExecutor(CodeExecutor):
    language = Language.GO
    extension = "go"

    def runtime_command(self) -> List[str]:
        return ["go", "run", self.source_target]
