"""Subprocess execution utilities.

Provides command execution with:
- ANSI escape code stripping (keeps tag names and branch names clean)
- ShellError with full context on failure
- Optional timeout
- A shell-mode runner for user-configured commands (checks, steps, custom actions)
"""

import re
import subprocess
from pathlib import Path


class ShellError(Exception):
    """Exception raised when a command fails.

    Attributes:
        cmd: The command that failed
        returncode: Exit code of the failed command (127 if it could not be spawned)
        stdout: Standard output (ANSI stripped)
        stderr: Standard error (ANSI stripped)
    """

    def __init__(
        self,
        cmd: str,
        returncode: int,
        stdout: str,
        stderr: str,
    ) -> None:
        self.cmd = cmd
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(f"Command failed with exit code {returncode}: {cmd}")

    def __str__(self) -> str:
        parts = [f"Command failed: {self.cmd}"]
        parts.append(f"Exit code: {self.returncode}")
        if self.stderr:
            parts.append(f"Stderr: {self.stderr}")
        if self.stdout:
            parts.append(f"Stdout: {self.stdout}")
        return "\n".join(parts)


# Matches: ESC[...m, ESC[...;...m, OSC sequences and other control sequences
ANSI_PATTERN = re.compile(
    r"\x1b\[[0-9;]*[a-zA-Z]|\x1b\][^\x07]*\x07|\x1b[PX^_][^\x1b]*\x1b\\"
)

CONTROL_CHARS_PATTERN = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences and control characters from text.

    Args:
        text: Input text potentially containing ANSI codes

    Returns:
        Clean text with all ANSI sequences removed
    """
    if not text:
        return ""
    result = ANSI_PATTERN.sub("", text)
    result = CONTROL_CHARS_PATTERN.sub("", result)
    return result


def _finish(
    result: subprocess.CompletedProcess[str],
    cmd_display: str,
    check: bool,
) -> subprocess.CompletedProcess[str]:
    result.stdout = strip_ansi(result.stdout) if result.stdout else ""
    result.stderr = strip_ansi(result.stderr) if result.stderr else ""

    if check and result.returncode != 0:
        raise ShellError(
            cmd=cmd_display,
            returncode=result.returncode,
            stdout=result.stdout.strip(),
            stderr=result.stderr.strip(),
        )

    return result


def run(
    cmd: list[str],
    cwd: Path | None = None,
    check: bool = True,
    timeout: int | None = 300,
) -> subprocess.CompletedProcess[str]:
    """Execute a command without a shell.

    Args:
        cmd: Command and arguments
        cwd: Working directory for the command
        check: Whether to raise ShellError on non-zero exit
        timeout: Maximum execution time in seconds (None for no limit)

    Returns:
        CompletedProcess with ANSI-stripped stdout/stderr

    Raises:
        ShellError: If the command fails (or cannot be spawned) and check=True
        subprocess.TimeoutExpired: If command exceeds timeout
    """
    cmd_display = " ".join(cmd)

    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except OSError as e:
        # Executable missing or not runnable: report it like a shell would
        if not check:
            return subprocess.CompletedProcess(cmd, 127, "", str(e))
        raise ShellError(cmd=cmd_display, returncode=127, stdout="", stderr=str(e)) from e

    return _finish(result, cmd_display, check)


def run_shell(command: str, cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    """Execute a user-configured command line through the system shell.

    Used for checks, pre/post steps and custom actions, where the command is
    written by the project owner and may use pipes, ``&&`` and the like.
    No timeout is applied.

    Raises:
        ShellError: If the command exits non-zero or the shell cannot be
            started (e.g. cwd is missing)
    """
    try:
        result = subprocess.run(
            command,
            shell=True,
            cwd=cwd,
            capture_output=True,
            text=True,
        )
    except OSError as e:
        raise ShellError(cmd=command, returncode=127, stdout="", stderr=str(e)) from e

    return _finish(result, command, check=True)
