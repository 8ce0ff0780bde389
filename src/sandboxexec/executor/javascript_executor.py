"""Executor for running JavaScript with Node.js."""

from __future__ import annotations

from typing import List

from ..models import Language
from .base import CodeExecutor


class JavaScriptExecutor(CodeExecutor):
    language = Language.JAVASCRIPT
    extension = "js"

    def runtime_command(self) -> List[str]:
        return ["node", self.source_target]
