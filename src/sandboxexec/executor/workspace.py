"""
Ephemeral source files handed into the execution container.

Every execution gets its own file whose name is built from a fresh UUID,
so concurrent executions never share a path and need no locking.  Use
:func:`ephemeral_source` to create the file; it is removed again on every
exit path, including exceptions.
"""

from __future__ import annotations

import logging
import os
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from ..exceptions import WorkspaceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Workspace:
    """Handle to one ephemeral source file.

    Attributes
    ----------
    token: str
        Unique identifier shared by the file name and the container name.
    path: Path
        Absolute location of the file on the host.
    """

    token: str
    path: Path


def unique_file_name(extension: str) -> tuple[str, str]:
    """Return ``(token, file_name)`` for a new source file."""
    token = uuid.uuid4().hex
    return token, f"{token}.{extension}"


def create_temp_file(directory: Path, name: str, content: str) -> Path:
    """Write ``content`` to a new file ``name`` inside ``directory``.

    The file is opened in exclusive mode so an existing file is never
    overwritten.  Characters that cannot be encoded as UTF‑8 (lone
    surrogates) are replaced.  Any failure is raised as
    :class:`~sandboxexec.exceptions.WorkspaceError` and leaves no file
    behind.
    """
    path = Path(directory) / name
    created = False
    try:
        data = content.encode("utf-8", errors="replace")
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "xb") as handle:
            created = True
            handle.write(data)
        # The container may run as a different user than this process.
        os.chmod(path, 0o644)
    except (OSError, UnicodeError) as exc:
        if created:
            cleanup_file(path)
        raise WorkspaceError(f"Could not write source file {path}: {exc}") from exc
    return path.resolve()


def cleanup_file(path: Path) -> None:
    """Remove ``path``; failures are logged and swallowed."""
    try:
        os.remove(path)
    except FileNotFoundError:
        logger.warning("Source file %s was already removed", path)
    except OSError as exc:
        logger.warning("Error deleting source file %s: %s", path, exc)


@contextmanager
def ephemeral_source(directory: Path, extension: str, content: str) -> Iterator[Workspace]:
    """Create a source file for one execution and remove it afterwards."""
    token, name = unique_file_name(extension)
    path = create_temp_file(directory, name, content)
    try:
        yield Workspace(token=token, path=path)
    finally:
        cleanup_file(path)
