"""Subprocess execution for the npm CLI.

Commands are argument lists run without a shell. Output is always
captured as text with ANSI escapes removed, because npm colors its
output and a colored `npm view` result never equals a plain version.
"""

import os
import re
import shutil
import subprocess
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path


class ShellError(Exception):
    """A command exited with a non-zero status.

    Attributes:
        cmd: The failed command as one string
        returncode: Exit status
        stdout: Captured standard output
        stderr: Captured standard error
    """

    def __init__(self, cmd: str, returncode: int, stdout: str, stderr: str) -> None:
        self.cmd = cmd
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(f"{cmd} exited with {returncode}")

    def __str__(self) -> str:
        lines = [f"Command failed: {self.cmd}", f"Exit code: {self.returncode}"]
        if self.stderr:
            lines.append(f"Stderr: {self.stderr}")
        return "\n".join(lines)


ANSI_PATTERN = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")


def strip_ansi(text: str) -> str:
    """Remove terminal color and cursor sequences from text."""
    return ANSI_PATTERN.sub("", text) if text else ""


def run(
    cmd: Sequence[str],
    cwd: Path | None = None,
    check: bool = True,
    timeout: int = 300,
    env: Mapping[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a command and capture its output.

    Args:
        cmd: Program and arguments
        cwd: Working directory
        check: Raise ShellError on a non-zero exit
        timeout: Seconds before the command is killed
        env: Variables added on top of the current environment,
            e.g. NPM_CONFIG_USERCONFIG

    Returns:
        CompletedProcess with cleaned stdout/stderr

    Raises:
        ShellError: If the command fails and check is True
        subprocess.TimeoutExpired: If the command runs past the timeout
    """
    result = subprocess.run(
        list(cmd),
        cwd=cwd,
        capture_output=True,
        text=True,
        timeout=timeout,
        env={**os.environ, **(env or {})},
    )
    result.stdout = strip_ansi(result.stdout)
    result.stderr = strip_ansi(result.stderr)

    if check and result.returncode != 0:
        raise ShellError(" ".join(cmd), result.returncode, result.stdout, result.stderr)
    return result


# Callable with the signature of run()
Runner = Callable[..., subprocess.CompletedProcess[str]]


def is_command_available(cmd: str) -> bool:
    """Return True if cmd resolves on PATH."""
    return shutil.which(cmd) is not None
