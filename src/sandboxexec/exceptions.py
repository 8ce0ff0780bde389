"""Infrastructure errors raised by the execution subsystem.

A failing user program is never an error here: its exit status and stderr
are returned as a normal result.  These exceptions cover the cases where
the subsystem itself could not do its job.

Hierarchy:
    SandboxExecError
    ├── WorkspaceError            ← source file could not be written
    ├── LaunchError               ← isolation CLI could not be started
    └── UnsupportedLanguageError  ← registry asked for an unknown language
"""

from __future__ import annotations


class SandboxExecError(Exception):
    """Base class for all execution subsystem errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class WorkspaceError(SandboxExecError):
    """Writing the ephemeral source file failed (disk full, permissions)."""


class LaunchError(SandboxExecError):
    """The isolation process could not be started."""


class UnsupportedLanguageError(SandboxExecError):
    """Raised when the registry is asked for a language outside the closed set.

    Requests are validated before dispatch, so reaching this is a bug in the
    caller rather than bad user input.
    """
