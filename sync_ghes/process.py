"""External command execution with live output streaming."""

from __future__ import annotations

import subprocess
import sys
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import IO, List, Mapping, Optional, Sequence

from .logging import get_logger

logger = get_logger("process")


@dataclass(frozen=True)
class CommandResult:
    """Captured output and exit status of a finished command."""

    stdout: str
    stderr: str
    exit_code: int


class CommandError(RuntimeError):
    """Raised when a command cannot be started, times out, or exits non-zero."""

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str],
        exit_code: Optional[int] = None,
        stderr: str = "",
        timed_out: bool = False,
    ) -> None:
        super().__init__(message)
        self.command = list(command)
        self.exit_code = exit_code
        self.stderr = stderr
        self.timed_out = timed_out


def run_command(
    command: str,
    args: Sequence[str] = (),
    *,
    allow_nonzero: bool = False,
    cwd: Path | str | None = None,
    env: Mapping[str, str] | None = None,
    timeout: float | None = None,
) -> CommandResult:
    """Run ``command`` with ``args`` (no shell) and return its captured output.

    Child stdout/stderr are echoed to this process's own streams as they arrive
    while also being buffered for the result.
    """
    argv = [command, *args]
    display = " ".join(argv)
    logger.debug("Running %s", display)

    try:
        process = subprocess.Popen(
            argv,
            cwd=str(cwd) if cwd is not None else None,
            env=dict(env) if env is not None else None,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as exc:
        raise CommandError(
            f"Failed to start '{command}': {exc}", command=argv, stderr=str(exc)
        ) from exc

    stdout_chunks: List[str] = []
    stderr_chunks: List[str] = []
    pumps = [
        threading.Thread(
            target=_pump, args=(process.stdout, "stdout", stdout_chunks), daemon=True
        ),
        threading.Thread(
            target=_pump, args=(process.stderr, "stderr", stderr_chunks), daemon=True
        ),
    ]
    for pump in pumps:
        pump.start()

    try:
        exit_code = process.wait(timeout=timeout)
    except subprocess.TimeoutExpired:
        process.kill()
        process.wait()
        for pump in pumps:
            pump.join()
        stderr = "".join(stderr_chunks)
        raise CommandError(
            f"Command '{display}' timed out after {timeout} seconds",
            command=argv,
            exit_code=process.returncode,
            stderr=stderr,
            timed_out=True,
        )

    for pump in pumps:
        pump.join()

    result = CommandResult(
        stdout="".join(stdout_chunks),
        stderr="".join(stderr_chunks),
        exit_code=exit_code,
    )
    if exit_code != 0 and not allow_nonzero:
        detail = result.stderr.strip()
        message = f"Command '{display}' failed with exit code {exit_code}"
        if detail:
            message = f"{message}: {detail}"
        raise CommandError(
            message, command=argv, exit_code=exit_code, stderr=result.stderr
        )
    logger.debug("%s exited with %d", display, exit_code)
    return result


def _pump(stream: Optional[IO[str]], sink_name: str, chunks: List[str]) -> None:
    if stream is None:
        return
    with stream:
        for line in stream:
            chunks.append(line)
            # Looked up per line so redirected/captured streams are honoured.
            sink = getattr(sys, sink_name)
            sink.write(line)
            sink.flush()


__all__ = ["CommandError", "CommandResult", "run_command"]
