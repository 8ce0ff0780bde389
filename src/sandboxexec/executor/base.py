"""
Base interfaces and dataclasses for the language executors.

All concrete executors inherit from :class:`CodeExecutor`, which owns
the whole execution lifecycle: write the submission to an ephemeral file,
run it in a fresh docker container with CPU‑time and memory ceilings,
append a diagnostic when the container was force‑killed, and remove the
file again.  A subclass only states its file extension and the command
that runs the mounted source inside its image.

Resource limits are enforced by docker, not by this process.  The
orchestrator adds a wall‑clock deadline on top so that programs blocked
on I/O (which burn no CPU time) still end.
"""

from __future__ import annotations

import abc
import logging
import subprocess
from dataclasses import dataclass
from typing import ClassVar, List

from ..config import Config, ResourceLimits
from ..exceptions import LaunchError, WorkspaceError
from ..models import Language
from .normalizer import normalize_stderr
from .process import spawn
from .workspace import ephemeral_source

logger = logging.getLogger(__name__)

CONTAINER_NAME_PREFIX = "sandboxexec-"


@dataclass
class ExecutionRequest:
    """Source code and standard input for one execution."""

    code: str
    stdin: str = ""


@dataclass
class ExecutionResult:
    """What one execution produced.

    Attributes
    ----------
    stdout: str
        Everything the program printed before it ended, up to the output bound.
    stderr: str
        The program's error stream plus, when docker or the deadline
        killed it, a note explaining why.
    exit_code: int
        Container exit status; ``-1`` if no container was ever started.
    duration_ms: int
        Time between launching docker and its exit.
    """

    stdout: str
    stderr: str
    exit_code: int = 0
    duration_ms: int = 0


class CodeExecutor(abc.ABC):
    """
    Abstract base class defining the interface for code executors.

    Subclasses set :attr:`language` and :attr:`extension` and implement
    :meth:`runtime_command`.  Everything else is shared.
    """

    language: ClassVar[Language]
    extension: ClassVar[str]

    def __init__(self, image: str, config: Config) -> None:
        """
        Parameters
        ----------
        image: str
            Docker image that provides the language runtime.
        config: Config
            Process‑wide settings: resource ceilings, deadline, output
            bound, workspace directory and docker binary.
        """
        self.image = image
        self.config = config

    @property
    def limits(self) -> ResourceLimits:
        return self.config.limits

    @property
    def source_target(self) -> str:
        """Fixed in‑container path at which the source is mounted."""
        return f"/code.{self.extension}"

    @abc.abstractmethod
    def runtime_command(self) -> List[str]:
        """Command, run inside the image, that executes :attr:`source_target`."""
        raise NotImplementedError

    def build_command(self, source_path: str, container_name: str) -> List[str]:
        """Build the full ``docker run`` invocation for one execution."""
        limits = self.limits
        args = [
            self.config.docker_binary,
            "run",
            "-i",  # keep stdin open so it can be forwarded
            "--rm",
            "--name", container_name,
        ]
        if self.config.disable_network:
            args += ["--network", "none"]
        args += [
            "--ulimit", f"cpu={limits.cpu_time_seconds}",
            "--memory", f"{limits.memory_megabytes}m",
            "--memory-swap", f"{limits.memory_megabytes}m",
            "--mount", f"type=bind,source={source_path},target={self.source_target},readonly",
            self.image,
        ]
        return args + self.runtime_command()

    def execute(self, request: ExecutionRequest) -> ExecutionResult:
        """Run ``request.code`` and return its captured output.

        Failures of the submitted program are reported through the result.
        Failing to write the source file or to launch docker is reported
        the same way, with ``exit_code`` set to ``-1``.
        """
        try:
            with ephemeral_source(self.config.workspace_dir, self.extension, request.code) as workspace:
                container_name = CONTAINER_NAME_PREFIX + workspace.token
                command = self.build_command(str(workspace.path), container_name)
                logger.info("Running %s submission in container %s", self.language.value, container_name)
                raw = spawn(
                    command,
                    stdin_data=request.stdin,
                    timeout=self.config.max_execution_seconds,
                    max_output_bytes=self.config.max_output_bytes,
                    on_timeout=lambda: self._remove_container(container_name),
                )
        except WorkspaceError as exc:
            logger.error("Workspace failure for %s submission: %s", self.language.value, exc.message)
            return ExecutionResult(stdout="", stderr=exc.message, exit_code=-1)
        except LaunchError as exc:
            logger.error("Launch failure for %s submission: %s", self.language.value, exc.message)
            return ExecutionResult(stdout="", stderr=exc.message, exit_code=-1)

        stderr = normalize_stderr(
            raw.exit_code,
            raw.stderr,
            timed_out=raw.timed_out,
            timeout=self.config.max_execution_seconds,
        )
        if stderr != raw.stderr:
            logger.warning(
                "Container %s was terminated (exit_code=%s, timed_out=%s)",
                container_name,
                raw.exit_code,
                raw.timed_out,
            )
        logger.info(
            "Container %s finished: exit_code=%s, duration_ms=%s",
            container_name,
            raw.exit_code,
            raw.duration_ms,
        )
        return ExecutionResult(
            stdout=raw.stdout,
            stderr=stderr,
            exit_code=raw.exit_code,
            duration_ms=raw.duration_ms,
        )

    def _remove_container(self, container_name: str) -> None:
        # Killing the docker client does not stop the container it started.
        try:
            subprocess.run(
                [self.config.docker_binary, "rm", "-f", container_name],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=30,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            logger.warning("Could not remove container %s: %s", container_name, exc)
