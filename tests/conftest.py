"""
Shared fixtures.

Most tests swap docker for a tiny fake isolation CLI.  It reads the
source file named in ``--mount``, prints it, then echoes stdin.  A
source starting with ``exit:<code>`` makes it write to stderr and exit
with that code instead, and ``sleep:<seconds>`` makes it hang.
"""

from __future__ import annotations

import stat
import sys
from pathlib import Path

import pytest

from sandboxexec.config import Config

FAKE_DOCKER = """#!{python}
import sys
import time

args = sys.argv[1:]
if args and args[0] == "rm":
    sys.exit(0)

source = None
for i, arg in enumerate(args):
    if arg == "--mount":
        parts = dict(p.split("=", 1) for p in args[i + 1].split(",") if "=" in p)
        source = parts["source"]

with open(source, encoding="utf-8") as handle:
    code = handle.read()

if code.startswith("exit:"):
    sys.stderr.write("boom")
    sys.exit(int(code.split(":", 1)[1]))
if code.startswith("sleep:"):
    time.sleep(float(code.split(":", 1)[1]))

sys.stdout.write(code)
sys.stdout.write(sys.stdin.read())
"""


@pytest.fixture
def fake_docker(tmp_path: Path) -> str:
    script = tmp_path / "fake-docker"
    script.write_text(FAKE_DOCKER.format(python=sys.executable), encoding="utf-8")
    script.chmod(script.stat().st_mode | stat.S_IXUSR)
    return str(script)


@pytest.fixture
def workspace_dir(tmp_path: Path) -> Path:
    path = tmp_path / "workspace"
    path.mkdir()
    return path


@pytest.fixture
def config(fake_docker: str, workspace_dir: Path) -> Config:
    return Config(
        max_cpu_secs=2,
        max_memory_mb=64,
        max_execution_seconds=5,
        workspace_dir=workspace_dir,
        docker_binary=fake_docker,
    )
