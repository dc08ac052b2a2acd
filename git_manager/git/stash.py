"""Git stash operations."""

import logging
from pathlib import Path

from git_manager.git.runner import GitError, run_git, run_git_checked
from git_manager.git.status import get_status
from git_manager.lib.types import OperationResult

logger = logging.getLogger(__name__)

DEFAULT_STASH_MESSAGE = "Auto stash before creating feature branch"


def stash_changes(repo: Path, message: str = DEFAULT_STASH_MESSAGE) -> bool:
    """
    Stash uncommitted changes.

    Returns:
        True if a stash entry was created, False if there was nothing to stash

    Raises:
        GitError: If git stash fails
    """
    if not get_status(repo).strip():
        return False

    result = run_git(["stash", "push", "-m", message], repo)
    if not result.success:
        raise GitError.from_result("Failed to stash changes", result)

    # Untracked-only trees show up in status but are not stashed
    if "No local changes to save" in result.output:
        logger.info("Nothing stashed: only untracked files present")
        return False

    logger.info(f"Stashed changes: {message}")
    return True


def apply_stash(repo: Path, pop: bool = True) -> OperationResult:
    """
    Apply the most recent stash.

    Args:
        repo: Path to repository
        pop: Remove the stash entry after applying (`git stash pop`);
             False keeps it (`git stash apply`)
    """
    if not has_stashes(repo):
        return OperationResult(success=False, message="Failed to apply stash: no stash entries found")

    command = "pop" if pop else "apply"
    result = run_git(["stash", command], repo)
    if result.success:
        return OperationResult(success=True, message="Stashed changes applied")
    return OperationResult(
        success=False,
        message=f"Failed to apply stash: {result.output}",
        is_conflict="CONFLICT" in result.output,
    )


def has_stashes(repo: Path) -> bool:
    """Check if there are any stash entries."""
    result = run_git_checked(["stash", "list"], repo, "Failed to check stashes")
    return bool(result.stdout.strip())

