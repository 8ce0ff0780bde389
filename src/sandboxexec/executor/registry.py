"""
Map language identifiers to executor instances.

The registry is built once from a :class:`~sandboxexec.config.Config`
and never changes afterwards.  It covers exactly the members of
:class:`~sandboxexec.models.Language`.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple, Type

from ..config import Config
from ..exceptions import UnsupportedLanguageError
from ..models import Language
from .base import CodeExecutor, ExecutionRequest, ExecutionResult
from .bash_executor import BashExecutor
from .cpp_executor import CppExecutor
from .go_executor import GoExecutor
from .javascript_executor import JavaScriptExecutor
from .php_executor import PHPExecutor
from .python_executor import PythonExecutor
from .ruby_executor import RubyExecutor

EXECUTOR_CLASSES: Tuple[Type[CodeExecutor], ...] = (
    PHPExecutor,
    PythonExecutor,
    JavaScriptExecutor,
    RubyExecutor,
    BashExecutor,
    GoExecutor,
    CppExecutor,
)


class ExecutorRegistry:
    """Immutable language → executor dispatch table."""

    def __init__(self, config: Config) -> None:
        executors: Dict[Language, CodeExecutor] = {}
        for cls in EXECUTOR_CLASSES:
            executors[cls.language] = cls(config.image_for(cls.language), config)
        missing = set(Language) - set(executors)
        if missing:
            raise RuntimeError(f"No executor registered for: {sorted(m.value for m in missing)}")
        self._executors: Mapping[Language, CodeExecutor] = MappingProxyType(executors)

    @property
    def languages(self) -> List[str]:
        return sorted(language.value for language in self._executors)

    def resolve(self, language: Language | str) -> CodeExecutor:
        """Return the executor for ``language``.

        Raises
        ------
        UnsupportedLanguageError
            If ``language`` is not one of the supported identifiers.
        """
        try:
            return self._executors[Language(language)]
        except (ValueError, KeyError):
            raise UnsupportedLanguageError(f"Unsupported language: {language}") from None

    def execute(self, language: Language | str, request: ExecutionRequest) -> ExecutionResult:
        return self.resolve(language).execute(request)
