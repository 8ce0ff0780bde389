"""Executor for running Ruby scripts."""

from __future__ import annotations

from typing import List

from ..models import Language
from .base import CodeExecutor


class RubyExecutor(CodeExecutor):
    language = Language.RUBY
    extension = "rb"

    def runtime_command(self) -> List[str]:
        return ["ruby", self.source_target]
