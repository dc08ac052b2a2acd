"""Git command runner with timeout handling."""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60
NETWORK_TIMEOUT = 120


@dataclass
class GitResult:
    """Result of a git command."""
    returncode: int
    stdout: str
    stderr: str
    timed_out: bool = False

    @property
    def success(self) -> bool:
        return self.returncode == 0 and not self.timed_out

    @property
    def output(self) -> str:
        """Combined stdout/stderr, stripped. Git splits diagnostics across both."""
        return "\n".join(s for s in (self.stdout.strip(), self.stderr.strip()) if s)


class GitError(Exception):
    """Raised when a git operation fails without conflict semantics."""

    def __init__(self, message: str, result: GitResult | None = None, command: list[str] | None = None):
        self.result = result
        self.command = command
        self.returncode = result.returncode if result else None
        self.stderr = result.stderr.strip() if result else ""
        super().__init__(message)

    @classmethod
    def from_result(cls, operation: str, result: GitResult, command: list[str] | None = None) -> "GitError":
        """Build an error whose message is prefixed with the failed operation."""
        detail = result.output or f"exit code {result.returncode}"
        return cls(f"{operation}: {detail}", result=result, command=command)


def run_git(
    args: list[str],
    cwd: Path,
    timeout: int = DEFAULT_TIMEOUT,
) -> GitResult:
    """
    Run a git command with timeout handling.

    Args:
        args: Git command arguments (e.g., ["status", "-s"])
        cwd: Repository the command acts on
        timeout: Timeout in seconds

    Returns:
        GitResult with returncode, stdout, stderr, and timed_out flag
    """
    cmd = ["git", "-C", str(cwd)] + args
    logger.debug(f"Running: {' '.join(cmd)}")
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
        return GitResult(
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )
    except subprocess.TimeoutExpired:
        logger.warning(f"git {' '.join(args)} timed out after {timeout}s")
        return GitResult(
            returncode=-1,
            stdout="",
            stderr=f"Command timed out after {timeout}s",
            timed_out=True,
        )


def run_git_checked(
    args: list[str],
    cwd: Path,
    operation: str,
    timeout: int = DEFAULT_TIMEOUT,
) -> GitResult:
    """Run a git command and raise GitError (prefixed with operation) on failure."""
    result = run_git(args, cwd, timeout=timeout)
    if not result.success:
        raise GitError.from_result(operation, result, command=["git"] + args)
    return result
