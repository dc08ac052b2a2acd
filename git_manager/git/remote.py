"""Git remote operations."""

import logging
from pathlib import Path

from git_manager.git.branch import get_current_branch, get_local_branches
from git_manager.git.runner import NETWORK_TIMEOUT, run_git, run_git_checked
from git_manager.lib.types import OperationResult

logger = logging.getLogger(__name__)


def remote_branch_exists(repo: Path, branch: str, remote: str = "origin") -> bool:
    """Check if branch exists on the remote (queries the remote, not local refs)."""
    result = run_git(["ls-remote", "--heads", remote, branch], repo, timeout=NETWORK_TIMEOUT)
    if not result.success:
        logger.debug(f"ls-remote failed for {remote}/{branch}: {result.output}")
        return False
    return any(line.endswith(f"refs/heads/{branch}") for line in result.stdout.splitlines())


def pull_with_rebase(repo: Path, remote: str = "origin", branch: str | None = None) -> None:
    """Pull and rebase the current branch onto its remote counterpart."""
    args = ["pull", "--rebase", remote]
    if branch:
        args.append(branch)
    run_git_checked(args, repo, "Failed to pull with rebase", timeout=NETWORK_TIMEOUT)


def pull_latest_changes(repo: Path) -> str:
    """Pull the current branch from its upstream. Returns git's output."""
    result = run_git_checked(["pull"], repo, "Failed to pull latest changes", timeout=NETWORK_TIMEOUT)
    return result.output


def fetch_branch_updates(repo: Path, branch: str, remote: str = "origin") -> bool:
    """
    Fast-forward a local branch to its remote counterpart without checking it out.

    Uses `git fetch <remote> <branch>:<branch>`, which git only performs as a
    fast-forward and refuses for the checked-out branch.

    Returns:
        True if the branch was updated or already current, False when the
        update is not a fast-forward (diverged) or the fetch failed
    """
    result = run_git(["fetch", remote, f"{branch}:{branch}"], repo, timeout=NETWORK_TIMEOUT)
    if result.success:
        logger.info(f"Fetched {remote}/{branch} into {branch}")
        return True
    if "non-fast-forward" in result.output or "rejected" in result.output:
        logger.warning(f"{branch} has diverged from {remote}/{branch}; manual update required")
    else:
        logger.warning(f"Could not update {branch} from {remote}: {result.output}")
    return False


def push_to_remote(repo: Path, ref: str, remote: str = "origin") -> None:
    """
    Push a branch or tag.

    ref is pushed as a branch when it names a local branch, otherwise as a tag.
    """
    if ref in get_local_branches(repo):
        refspec = ref
    else:
        refspec = f"refs/tags/{ref}"
    run_git_checked(["push", remote, refspec], repo, f"Failed to push {ref}", timeout=NETWORK_TIMEOUT)
    logger.info(f"Pushed {ref} to {remote}")


def set_upstream_and_push(repo: Path, remote: str = "origin") -> OperationResult:
    """Push the current branch and set its upstream tracking."""
    branch = get_current_branch(repo)
    result = run_git(["push", "-u", remote, branch], repo, timeout=NETWORK_TIMEOUT)
    if result.success:
        return OperationResult(success=True, message=f"Pushed {branch} to {remote} and set upstream")
    return OperationResult(success=False, message=f"Failed to push {branch}: {result.output}")


def delete_remote_branch(repo: Path, branch: str, remote: str = "origin") -> None:
    """Delete a branch on the remote."""
    run_git_checked(
        ["push", remote, "--delete", branch],
        repo,
        f"Failed to delete remote branch {branch}",
        timeout=NETWORK_TIMEOUT,
    )
    logger.info(f"Deleted {remote}/{branch}")
