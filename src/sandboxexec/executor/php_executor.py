"""
Executor for running PHP scripts with the PHP CLI.

The submission is expected to open with ``<?php``; anything outside the
tags is echoed verbatim, exactly as ``php`` would do locally.
"""

from __future__ import annotations

from typing import List

from ..models import Language
from .base import CodeExecutor


class PHPExecutor(CodeExecutor):
    """Execute PHP scripts in a ``php`` image."""

    language = Language.PHP
    extension = "php"

    def runtime_command(self) -> List[str]:
        return ["php", self.source_target]
