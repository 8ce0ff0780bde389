"""Configuration loader.

The execution service reads its configuration from environment variables
once at startup.  The resulting :class:`Config` is frozen and handed to the
executor registry explicitly, so executors never consult the environment
themselves.  Reasonable defaults are provided so that local development
works out of the box.

Environment variables:

``SANDBOXEXEC_MAX_CPU_SECS``
    CPU time ceiling (in seconds) applied to each container through
    ``--ulimit cpu``.  Default is 2.

``SANDBOXEXEC_MAX_MEMORY_MB``
    Memory ceiling (in megabytes) applied to each container through
    ``--memory``.  Default is 128.

``SANDBOXEXEC_MAX_EXECUTION_SECONDS``
    Wall‑clock deadline (in seconds) after which the orchestrator kills
    the container itself.  This backs up the CPU ceiling for programs
    that sleep or block on input.  Default is 10.

``SANDBOXEXEC_MAX_OUTPUT_BYTES``
    Maximum number of bytes kept from each of stdout and stderr.
    Default is 1 MiB.

``SANDBOXEXEC_WORKSPACE_DIR``
    Directory in which ephemeral source files are written before being
    bind‑mounted into the container.  It must be visible to the docker
    daemon.  Defaults to ``sandboxexec`` under the system temp directory.

``SANDBOXEXEC_DOCKER_BINARY``
    The isolation CLI to invoke.  Defaults to ``docker``.

``SANDBOXEXEC_DISABLE_NETWORK``
    If ``true``, containers run with ``--network none``.  Defaults to ``true``.

``SANDBOXEXEC_<LANGUAGE>_IMAGE``
    Image used for a language, e.g. ``SANDBOXEXEC_PHP_IMAGE``.  Defaults
    to the official image listed in :data:`DEFAULT_IMAGES`.

``SANDBOXEXEC_LOG_LEVEL``
    Level for the ``sandboxexec`` logger.  Defaults to ``INFO``.

``PORT``
    The port on which the API server listens.  Defaults to 8080.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

from .models import Language


DEFAULT_IMAGES: Dict[str, str] = {
    Language.PHP.value: "php:8.3-cli",
    Language.PYTHON.value: "python:3.12-slim",
    Language.JAVASCRIPT.value: "node:20-slim",
    Language.RUBY.value: "ruby:3.3-slim",
    Language.BASH.value: "bash:5.2",
    Language.GO.value: "golang:1.22-alpine",
    Language.CPP.value: "gcc:13",
}


_TRUTHY = frozenset({"1", "true", "t", "yes", "y", "on"})


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    return default if raw is None else raw.strip().lower() in _TRUTHY


def _env_int(name: str, default: int, positive: bool = False) -> int:
    raw = os.getenv(name)
    if raw is None:
        value = default
    else:
        try:
            value = int(raw)
        except ValueError:
            raise ValueError(f"{name} is not an integer: {raw!r}") from None
    if positive and value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value}")
    return value


@dataclass(frozen=True)
class ResourceLimits:
    """Per‑container ceilings enforced by the isolation technology."""

    cpu_time_seconds: int
    memory_megabytes: int


@dataclass(frozen=True)
class Config:
    """Centralised, immutable configuration object."""

    max_cpu_secs: int = 2
    max_memory_mb: int = 128
    max_execution_seconds: int = 10
    max_output_bytes: int = 1024 * 1024
    workspace_dir: Path = field(
        default_factory=lambda: Path(tempfile.gettempdir()) / "sandboxexec"
    )
    docker_binary: str = "docker"
    disable_network: bool = True
    images: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_IMAGES))
    log_level: str = "INFO"
    port: int = 8080

    @property
    def limits(self) -> ResourceLimits:
        return ResourceLimits(
            cpu_time_seconds=self.max_cpu_secs,
            memory_megabytes=self.max_memory_mb,
        )

    def image_for(self, language: Language | str) -> str:
        key = language.value if isinstance(language, Language) else language
        return self.images[key]

    @classmethod
    def load(cls) -> "Config":
        max_cpu_secs = _env_int("SANDBOXEXEC_MAX_CPU_SECS", 2, positive=True)
        max_memory_mb = _env_int("SANDBOXEXEC_MAX_MEMORY_MB", 128, positive=True)
        max_execution_seconds = _env_int("SANDBOXEXEC_MAX_EXECUTION_SECONDS", 10, positive=True)
        max_output_bytes = _env_int("SANDBOXEXEC_MAX_OUTPUT_BYTES", 1024 * 1024, positive=True)

        workspace_env = os.getenv("SANDBOXEXEC_WORKSPACE_DIR")
        workspace_dir = (
            Path(workspace_env)
            if workspace_env
            else Path(tempfile.gettempdir()) / "sandboxexec"
        )

        images = {
            lang.value: os.getenv(f"SANDBOXEXEC_{lang.name}_IMAGE", DEFAULT_IMAGES[lang.value])
            for lang in Language
        }

        return cls(
            max_cpu_secs=max_cpu_secs,
            max_memory_mb=max_memory_mb,
            max_execution_seconds=max_execution_seconds,
            max_output_bytes=max_output_bytes,
            workspace_dir=workspace_dir,
            docker_binary=os.getenv("SANDBOXEXEC_DOCKER_BINARY", "docker"),
            disable_network=_env_flag("SANDBOXEXEC_DISABLE_NETWORK", True),
            images=images,
            log_level=os.getenv("SANDBOXEXEC_LOG_LEVEL", "INFO").upper(),
            port=_env_int("PORT", 8080),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """
        Alternate constructor used by the API to load configuration.

        This wrapper calls :meth:`load` to construct the configuration.
        """
        return cls.load()
