from __future__ import annotations

from sandboxexec.executor.normalizer import diagnose, normalize_stderr


def test_ordinary_exit_codes_pass_through():
    assert normalize_stderr(0, "") == ""
    assert normalize_stderr(1, "Traceback ...\n") == "Traceback ...\n"
    assert diagnose(2) is None


def test_sigkill_exit_code_gets_note():
    stderr = normalize_stderr(137, "")
    assert stderr == "process exited with code 137. Most likely due to exceeding memory or CPU time limit."


def test_note_is_put_on_its_own_line():
    stderr = normalize_stderr(137, "partial")
    assert stderr.startswith("partial\nprocess exited with code 137")


def test_sigxcpu_exit_code_gets_cpu_note():
    assert "CPU time limit" in normalize_stderr(152, "")


def test_deadline_note():
    assert normalize_stderr(-9, "x\n", timed_out=True, timeout=10) == "x\nExecution timed out after 10 seconds."
