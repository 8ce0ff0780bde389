"""
Process launch helper.

:func:`spawn` starts the isolation CLI, feeds it the submission's stdin,
and collects stdout, stderr and the exit status once the process has
terminated.  Stdin is written and both output pipes are drained on
separate threads, so a program that prints a lot before reading its
input cannot deadlock against us.  Each output stream is bounded; bytes
past the bound are read and discarded.
"""

from __future__ import annotations

import logging
import subprocess
import threading
import time
from dataclasses import dataclass
from typing import IO, Callable, List, Optional

from ..exceptions import LaunchError

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


@dataclass
class ProcessResult:
    """Raw outcome of a launched process.

    Attributes
    ----------
    stdout: str
        Captured standard output, decoded as UTF‑8.
    stderr: str
        Captured standard error, decoded as UTF‑8.
    exit_code: int
        Exit status of the process.  Negative values mean the process was
        killed by that signal number.
    duration_ms: int
        Wall‑clock time from launch to termination in milliseconds.
    timed_out: bool
        ``True`` if the process was killed because it outlived the deadline.
    """

    stdout: str
    stderr: str
    exit_code: int
    duration_ms: int
    timed_out: bool = False


class _BoundedBuffer:
    def __init__(self, limit: Optional[int]) -> None:
        self.limit = limit
        self.chunks: List[bytes] = []
        self.size = 0
        self.truncated = False

    def feed(self, chunk: bytes) -> None:
        if self.limit is None:
            self.chunks.append(chunk)
            return
        room = self.limit - self.size
        if room <= 0:
            self.truncated = True
            return
        if len(chunk) > room:
            chunk = chunk[:room]
            self.truncated = True
        self.chunks.append(chunk)
        self.size += len(chunk)

    def text(self) -> str:
        text = b"".join(self.chunks).decode("utf-8", errors="replace")
        if self.truncated:
            text += f"\n[output truncated after {self.limit} bytes]"
        return text


def _drain(stream: IO[bytes], buffer: _BoundedBuffer) -> None:
    try:
        while True:
            chunk = stream.read(_CHUNK_SIZE)
            if not chunk:
                break
            buffer.feed(chunk)
    finally:
        stream.close()


def _feed_stdin(stream: IO[bytes], data: bytes) -> None:
    try:
        if data:
            stream.write(data)
            stream.flush()
    except BrokenPipeError:
        # The program exited (or closed stdin) without reading everything.
        pass
    finally:
        try:
            stream.close()
        except BrokenPipeError:
            pass


def spawn(
    args: List[str],
    stdin_data: str = "",
    timeout: Optional[float] = None,
    max_output_bytes: Optional[int] = None,
    on_timeout: Optional[Callable[[], None]] = None,
) -> ProcessResult:
    """Run ``args`` to completion and capture its output.

    Parameters
    ----------
    args: list[str]
        Command and arguments to execute.
    stdin_data: str, optional
        Data written to the process's standard input.  The stream is closed
        once everything has been written, signalling end of input.
    timeout: float, optional
        Wall‑clock deadline in seconds.  When it expires the process is
        killed and ``on_timeout`` (if given) is invoked.
    max_output_bytes: int, optional
        Upper bound on the bytes kept from each of stdout and stderr.
    on_timeout: callable, optional
        Extra teardown to run when the deadline fires, such as removing a
        container the killed client left behind.

    Raises
    ------
    LaunchError
        If the process could not be started at all.
    """
    start_time = time.perf_counter()
    # Lone surrogates cannot reach the child as UTF‑8; replace them.
    stdin_bytes = stdin_data.encode("utf-8", errors="replace")
    try:
        process = subprocess.Popen(
            args,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except OSError as exc:
        raise LaunchError(f"Failed to launch {args[0]!r}: {exc}") from exc

    stdout_buf = _BoundedBuffer(max_output_bytes)
    stderr_buf = _BoundedBuffer(max_output_bytes)
    workers = [
        threading.Thread(target=_feed_stdin, args=(process.stdin, stdin_bytes), daemon=True),
        threading.Thread(target=_drain, args=(process.stdout, stdout_buf), daemon=True),
        threading.Thread(target=_drain, args=(process.stderr, stderr_buf), daemon=True),
    ]

    timed_out = False

    def kill_proc() -> None:
        nonlocal timed_out
        if process.poll() is not None:
            return
        timed_out = True
        logger.warning("Process %s exceeded %ss deadline; killing it", process.pid, timeout)
        try:
            process.kill()
        except OSError:
            pass
        if on_timeout is not None:
            on_timeout()

    timer = None
    try:
        if timeout is not None:
            timer = threading.Timer(timeout, kill_proc)
            timer.start()
        for worker in workers:
            worker.start()
        process.wait()
        for worker in workers:
            worker.join()
    except BaseException:
        # Never leave a launched process behind without a deadline.
        process.kill()
        process.wait()
        raise
    finally:
        duration = int((time.perf_counter() - start_time) * 1000)
        if timer:
            timer.cancel()

    exit_code = process.returncode if process.returncode is not None else -1
    if timed_out:
        exit_code = -9
    return ProcessResult(
        stdout=stdout_buf.text(),
        stderr=stderr_buf.text(),
        exit_code=exit_code,
        duration_ms=duration,
        timed_out=timed_out,
    )
