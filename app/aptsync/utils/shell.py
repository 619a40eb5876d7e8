"""Shell execution utilities.

Provides safe subprocess execution with proper error handling.
"""

import os
import shutil
import subprocess
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0

    @property
    def diagnostic(self) -> str:
        """Best available diagnostic text for a failed command.

        Prefers stderr, falls back to stdout and finally to the exit code.
        """
        return self.stderr.strip() or self.stdout.strip() or f"exit code {self.returncode}"


def run_command(args: list[str], *, timeout: float | None = 60.0) -> CommandResult:
    """Execute a command and capture its output.

    A non-zero exit status is returned in the result, not raised.

    Args:
        args: Command and arguments to execute.
        timeout: Maximum time in seconds to wait for command.

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    result = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
    )
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )


def command_exists(name: str) -> bool:
    """Check if a command exists in the system PATH.

    Args:
        name: Command name to check.

    Returns:
        True if command exists, False otherwise.
    """
    return shutil.which(name) is not None


def run_interactive(args: list[str]) -> int:
    """Execute a command interactively, inheriting the terminal.

    Unlike run_command(), this does NOT capture stdout/stderr, so the
    subprocess can prompt the user directly (e.g. for a sudo password).

    Args:
        args: Command and arguments to execute.

    Returns:
        Exit code of the command.

    Raises:
        FileNotFoundError: If command executable is not found.
        OSError: If command cannot be executed.
    """
    result = subprocess.run(args, check=False)
    return result.returncode


def is_root() -> bool:
    """Check whether the current process runs with root privileges."""
    return os.geteuid() == 0
