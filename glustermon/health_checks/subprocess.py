# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
import subprocess
from typing import Optional, Protocol, Sequence


class ShellCommandOut(Protocol):
    returncode: int
    stdout: str


def describe_subprocess_exception(exc: Exception) -> str:
    """One line explaining why a command produced no output."""
    if isinstance(exc, subprocess.TimeoutExpired):
        return f"Error: command '{_join(exc.cmd)}' timed out after {exc.timeout} seconds."
    if isinstance(exc, OSError):
        return f"Error: could not run command: {exc}"
    return f"Error: unknown subprocess exception was raised: {exc}"


def _join(cmd: object) -> str:
    if isinstance(cmd, (list, tuple)):
        return " ".join(str(c) for c in cmd)
    return str(cmd)


def run_command(
    cmd: Sequence[str], timeout_secs: Optional[int] = None
) -> "subprocess.CompletedProcess[str]":
    """Run `cmd` without a shell, stderr folded into stdout.

    A non-zero exit status is not an error here; callers look at `returncode`.
    """
    return subprocess.run(
        list(cmd),
        encoding="utf-8",
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        timeout=timeout_secs,
    )
