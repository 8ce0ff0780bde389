"""
Turn opaque termination codes into readable diagnostics.

Docker reports a container killed by SIGKILL (the OOM killer, or the hard
``RLIMIT_CPU``) as exit status 137, and one stopped by SIGXCPU (the soft
``RLIMIT_CPU``) as 152.  Neither means anything to the person who wrote
the program, so a short note is appended to stderr instead.

A program may also call ``exit(137)`` itself; the exit code alone cannot
tell the two apart, so the note says "most likely".
"""

from __future__ import annotations

from typing import Dict, Optional

FORCED_DOCKER_EXIT_CODE = 137
CPU_LIMIT_EXIT_CODE = 152

_DIAGNOSTICS: Dict[int, str] = {
    FORCED_DOCKER_EXIT_CODE: (
        "process exited with code 137. "
        "Most likely due to exceeding memory or CPU time limit."
    ),
    CPU_LIMIT_EXIT_CODE: (
        "process exited with code 152. "
        "Most likely due to exceeding CPU time limit."
    ),
}


def _append(stderr: str, note: str) -> str:
    if stderr and not stderr.endswith("\n"):
        stderr += "\n"
    return stderr + note


def diagnose(exit_code: int) -> Optional[str]:
    """Return the diagnostic for ``exit_code``, or ``None`` if it is ordinary."""
    return _DIAGNOSTICS.get(exit_code)


def normalize_stderr(
    exit_code: int,
    stderr: str,
    timed_out: bool = False,
    timeout: Optional[int] = None,
) -> str:
    """Return ``stderr`` with a termination note appended where one applies."""
    if timed_out:
        return _append(stderr, f"Execution timed out after {timeout} seconds.")
    note = diagnose(exit_code)
    if note is None:
        return stderr
    return _append(stderr, note)
