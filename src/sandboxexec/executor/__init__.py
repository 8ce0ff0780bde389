"""
Execution backends for the sandbox service.

This package exposes one executor per supported language plus the
registry that selects between them.  Each executor writes the user's
code to an ephemeral file, runs it in a resource‑limited docker
container and returns the captured output.  Additional languages can be
added by implementing the ``CodeExecutor`` interface from ``base.py``,
adding a member to ``Language`` and listing the class in
``registry.EXECUTOR_CLASSES``.
"""

from .base import CodeExecutor, ExecutionRequest, ExecutionResult
from .bash_executor import BashExecutor
from .cpp_executor import CppExecutor
from .go_executor import GoExecutor
from .javascript_executor import JavaScriptExecutor
from .php_executor import PHPExecutor
from .python_executor import PythonExecutor
from .registry import ExecutorRegistry
from .ruby_executor import RubyExecutor

__all__ = [
    "ExecutionRequest",
    "ExecutionResult",
    "CodeExecutor",
    "ExecutorRegistry",
    "PHPExecutor",
    "PythonExecutor",
    "JavaScriptExecutor",
    "RubyExecutor",
    "BashExecutor",
    "GoExecutor",
    "CppExecutor",
]
