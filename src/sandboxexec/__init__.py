"""Sandboxed code execution package.

This package runs untrusted source code in one of several supported
languages inside a throwaway docker container with CPU‑time and memory
ceilings, and returns whatever the program wrote to stdout and stderr.

The top‑level modules include:

* ``config`` – process‑wide configuration read from environment variables.
* ``models`` – the closed language set and Pydantic request/response schemas.
* ``exceptions`` – infrastructure error types.
* ``executor`` – the per‑language executors and their shared helpers.
* ``api`` – a thin FastAPI application that validates requests and
  dispatches them to the executors.
"""

from .config import Config
from .executor import ExecutionRequest, ExecutionResult, ExecutorRegistry
from .models import Language

__all__ = [
    "Config",
    "ExecutionRequest",
    "ExecutionResult",
    "ExecutorRegistry",
    "Language",
]
