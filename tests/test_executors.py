"""
Executor tests against the fake isolation CLI from ``conftest.py``.

These cover the full lifecycle (source file, launch, normalisation,
cleanup) without a docker daemon.
"""

from __future__ import annotations

import dataclasses
from concurrent.futures import ThreadPoolExecutor

import pytest

from sandboxexec.config import Config
from sandboxexec.executor import (
    BashExecutor,
    CppExecutor,
    ExecutionRequest,
    GoExecutor,
    JavaScriptExecutor,
    PHPExecutor,
    PythonExecutor,
    RubyExecutor,
)
from sandboxexec.executor.base import CONTAINER_NAME_PREFIX
from sandboxexec.models import Language


@pytest.mark.parametrize(
    "executor_cls, runtime",
    [
        (PHPExecutor, ["php", "/code.php"]),
        (PythonExecutor, ["python", "-u", "/code.py"]),
        (JavaScriptExecutor, ["node", "/code.js"]),
        (RubyExecutor, ["ruby", "/code.rb"]),
        (BashExecutor, ["bash", "/code.sh"]),
        (GoExecutor, ["go", "run", "/code.go"]),
        (CppExecutor, ["sh", "-c", "g++ -O2 -o /tmp/main /code.cpp && /tmp/main"]),
    ],
)
def test_docker_invocation(executor_cls, runtime):
    config = Config(max_cpu_secs=2, max_memory_mb=64)
    executor = executor_cls("some/image:tag", config)
    ext = executor.extension

    cmd = executor.build_command(f"/tmp/sandboxexec/abc.{ext}", "sandboxexec-abc")

    assert cmd == [
        "docker", "run", "-i", "--rm",
        "--name", "sandboxexec-abc",
        "--network", "none",
        "--ulimit", "cpu=2",
        "--memory", "64m",
        "--memory-swap", "64m",
        "--mount", f"type=bind,source=/tmp/sandboxexec/abc.{ext},target=/code.{ext},readonly",
        "some/image:tag",
    ] + runtime


def test_network_flag_is_optional():
    config = Config(disable_network=False)
    cmd = PHPExecutor("php:8.3-cli", config).build_command("/tmp/x.php", "n")
    assert "--network" not in cmd


def test_execute_returns_output_and_removes_file(config, workspace_dir):
    executor = PHPExecutor("php:8.3-cli", config)

    result = executor.execute(ExecutionRequest(code='<?php echo "hi";', stdin=""))

    assert result.stdout == '<?php echo "hi";'
    assert result.stderr == ""
    assert result.exit_code == 0
    assert list(workspace_dir.iterdir()) == []


def test_execute_forwards_stdin(config):
    result = PythonExecutor("python:3.12-slim", config).execute(
        ExecutionRequest(code="print(input())\n", stdin="hello\n")
    )
    assert result.stdout == "print(input())\nhello\n"


def test_forced_termination_is_explained(config, workspace_dir):
    result = RubyExecutor("ruby", config).execute(ExecutionRequest(code="exit:137"))

    assert result.exit_code == 137
    assert result.stdout == ""
    assert result.stderr == (
        "boom\nprocess exited with code 137. "
        "Most likely due to exceeding memory or CPU time limit."
    )
    assert list(workspace_dir.iterdir()) == []


def test_ordinary_failure_is_passed_through(config):
    result = BashExecutor("bash", config).execute(ExecutionRequest(code="exit:1"))
    assert result.exit_code == 1
    assert result.stderr == "boom"


def test_deadline_produces_diagnostic(config, workspace_dir):
    config = dataclasses.replace(config, max_execution_seconds=1)
    result = GoExecutor("golang", config).execute(ExecutionRequest(code="sleep:30"))

    assert result.exit_code == -9
    assert result.stdout == ""
    assert result.stderr.endswith("Execution timed out after 1 seconds.")
    assert list(workspace_dir.iterdir()) == []


def test_removes_container_on_deadline(config, monkeypatch):
    config = dataclasses.replace(config, max_execution_seconds=1)
    executor = JavaScriptExecutor("node", config)
    removed = []
    monkeypatch.setattr(executor, "_remove_container", removed.append)

    executor.execute(ExecutionRequest(code="sleep:30"))

    assert len(removed) == 1
    assert removed[0].startswith(CONTAINER_NAME_PREFIX)


def test_launch_failure_becomes_result(config, workspace_dir, tmp_path):
    config = dataclasses.replace(config, docker_binary=str(tmp_path / "missing-docker"))
    result = CppExecutor("gcc", config).execute(ExecutionRequest(code="int main() {}"))

    assert result.exit_code == -1
    assert result.stdout == ""
    assert "Failed to launch" in result.stderr
    assert list(workspace_dir.iterdir()) == []


def test_workspace_failure_becomes_result(config, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    config = dataclasses.replace(config, workspace_dir=blocker)

    result = PHPExecutor("php", config).execute(ExecutionRequest(code="<?php"))

    assert result.exit_code == -1
    assert "Could not write source file" in result.stderr


def test_executor_languages_are_distinct():
    classes = [PHPExecutor, PythonExecutor, JavaScriptExecutor, RubyExecutor, BashExecutor, GoExecutor, CppExecutor]
    assert {cls.language for cls in classes} == set(Language)
    assert len({cls.extension for cls in classes}) == len(classes)


def test_concurrent_executions_do_not_mix(config, workspace_dir):
    config = dataclasses.replace(config, max_execution_seconds=60)
    executors = [cls("img", config) for cls in (PHPExecutor, PythonExecutor, RubyExecutor, BashExecutor, JavaScriptExecutor)]

    def run(i: int):
        executor = executors[i % len(executors)]
        return i, executor.execute(ExecutionRequest(code=f"program-{i};", stdin=f"input-{i}"))

    with ThreadPoolExecutor(max_workers=50) as pool:
        results = list(pool.map(run, range(50)))

    for i, result in results:
        assert result.stdout == f"program-{i};input-{i}"
        assert result.stderr == ""
    assert list(workspace_dir.iterdir()) == []


def test_unencodable_code_still_returns_result(config, workspace_dir):
    result = PHPExecutor("php", config).execute(ExecutionRequest(code="<?php echo 1; \ud800"))

    assert result.exit_code == 0
    assert result.stdout == "<?php echo 1; ?"
    assert list(workspace_dir.iterdir()) == []


def test_unencodable_stdin_still_returns_result(config, workspace_dir):
    result = PHPExecutor("php", config).execute(ExecutionRequest(code="x", stdin="\udc80"))

    assert result.exit_code == 0
    assert result.stdout == "x?"
    assert list(workspace_dir.iterdir()) == []


def test_launch_error_after_source_written_cleans_up(config, workspace_dir, monkeypatch):
    from sandboxexec.exceptions import LaunchError
    from sandboxexec.executor import base

    seen = []

    def refuse(command, **kwargs):
        seen.extend(workspace_dir.iterdir())
        raise LaunchError("docker: image not found")

    monkeypatch.setattr(base, "spawn", refuse)
    result = RubyExecutor("ruby", config).execute(ExecutionRequest(code="puts 1"))

    assert len(seen) == 1
    assert result.exit_code == -1
    assert result.stderr == "docker: image not found"
    assert list(workspace_dir.iterdir()) == []
