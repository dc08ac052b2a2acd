"""Git merge, cherry-pick and tag operations.

Merges and cherry-picks report conflicts as OperationResult values rather
than exceptions. A conflicted merge is left in place for manual resolution;
nothing here aborts or rolls back.
"""

import logging
from pathlib import Path

from git_manager.git.runner import GitResult, run_git, run_git_checked
from git_manager.lib.types import OperationResult

logger = logging.getLogger(__name__)


def get_conflicted_files(repo: Path) -> list[str]:
    """Get list of files with unresolved conflicts."""
    result = run_git(["diff", "--name-only", "--diff-filter=U"], repo)
    return [f.strip() for f in result.stdout.splitlines() if f.strip()]


def _is_conflict(repo: Path, result: GitResult) -> bool:
    return "CONFLICT" in result.output or bool(get_conflicted_files(repo))


def _conflict_result(repo: Path, result: GitResult, operation: str) -> OperationResult:
    """Build the failure result for a merge-like command."""
    if _is_conflict(repo, result):
        files = get_conflicted_files(repo)
        detail = f" in: {', '.join(files)}" if files else ""
        logger.warning(f"{operation} stopped on conflicts{detail}")
        return OperationResult(
            success=False,
            message=f"{operation} failed with conflicts{detail}",
            is_conflict=True,
        )
    return OperationResult(success=False, message=f"{operation} failed: {result.output}")


def merge_branch(repo: Path, source_branch: str) -> OperationResult:
    """Merge source_branch into the current branch with an explicit merge commit."""
    result = run_git(["merge", "--no-ff", "--no-edit", source_branch], repo)
    if result.success:
        return OperationResult(success=True, message=f"Merged {source_branch}")
    return _conflict_result(repo, result, f"Merge of {source_branch}")


def merge_feature_branch(repo: Path, branch: str, message: str) -> OperationResult:
    """Merge a feature branch with a merge commit carrying the given message."""
    result = run_git(["merge", "--no-ff", "-m", message, branch], repo)
    if result.success:
        return OperationResult(success=True, message=f"Successfully merged {branch}")
    return _conflict_result(repo, result, f"Merge of {branch}")


def squash_and_merge_branch(repo: Path, branch: str, message: str) -> OperationResult:
    """Squash all changes of branch into a single commit on the current branch."""
    result = run_git(["merge", "--squash", branch], repo)
    if not result.success:
        return _conflict_result(repo, result, f"Squash merge of {branch}")

    commit = run_git(["commit", "-m", message], repo)
    if not commit.success:
        if "nothing to commit" in commit.output:
            return OperationResult(success=False, message=f"Nothing to squash from {branch}")
        return OperationResult(success=False, message=f"Failed to commit squash of {branch}: {commit.output}")
    return OperationResult(success=True, message=f"Successfully squashed and merged {branch}")


def cherry_pick_commit(repo: Path, commit_hash: str) -> OperationResult:
    """Apply a single commit onto the current branch. Never raises on conflict."""
    result = run_git(["cherry-pick", commit_hash], repo)
    if result.success:
        return OperationResult(success=True, message=f"Successfully cherry-picked commit {commit_hash}")
    return _conflict_result(repo, result, f"Cherry-pick of {commit_hash}")


def create_tag(repo: Path, name: str) -> None:
    """Create an annotated tag at HEAD."""
    run_git_checked(["tag", "-a", name, "-m", f"Release {name}"], repo, f"Failed to create tag {name}")
    logger.info(f"Created tag {name}")
