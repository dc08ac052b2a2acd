"""Git branch operations."""

import logging
from pathlib import Path

from git_manager.git.runner import run_git, run_git_checked
from git_manager.lib.types import OperationResult

logger = logging.getLogger(__name__)


def get_current_branch(repo: Path) -> str:
    """Get the current branch name (empty string on detached HEAD)."""
    result = run_git_checked(["branch", "--show-current"], repo, "Failed to get current branch")
    return result.stdout.strip()


def _parse_branch_output(output: str) -> list[str]:
    """
    Strip the current-branch marker and indentation from `git branch` output.

    Detached HEAD shows up as "* (HEAD detached at <sha>)"; such entries are
    not branches and are skipped.
    """
    branches = []
    for line in output.splitlines():
        name = line.lstrip("*+ ").strip()
        if name and not name.startswith("("):
            branches.append(name)
    return branches


def get_local_branches(repo: Path) -> list[str]:
    """Get all local branch names."""
    result = run_git_checked(["branch"], repo, "Failed to get local branches")
    return _parse_branch_output(result.stdout)


def get_all_branches(repo: Path) -> list[str]:
    """
    Get local and remote-tracking branches as one deduplicated list.

    Remote-tracking names lose their "remotes/<remote>/" prefix and symbolic
    "HEAD -> ..." entries are dropped. Order is first appearance in
    `git branch -a` (local branches first).
    """
    result = run_git_checked(["branch", "-a"], repo, "Failed to get branches")
    seen: set[str] = set()
    branches = []
    for name in _parse_branch_output(result.stdout):
        if "HEAD ->" in name or name.endswith("/HEAD"):
            continue
        if name.startswith("remotes/"):
            # remotes/<remote>/<branch...>
            parts = name.split("/", 2)
            if len(parts) < 3:
                continue
            name = parts[2]
        if name not in seen:
            seen.add(name)
            branches.append(name)
    return branches


def get_main_branch(repo: Path) -> str | None:
    """
    Resolve the production branch name.

    Returns the first branch (local, then remote-tracking) that is literally
    "main" or starts with "master", or None when neither exists.
    """
    for branch in get_all_branches(repo):
        if branch == "main" or branch.startswith("master"):
            return branch
    return None


def checkout_branch(repo: Path, branch: str) -> None:
    """Checkout a branch. Raises GitError if it does not exist or checkout fails."""
    run_git_checked(["checkout", branch], repo, f"Failed to checkout branch {branch}")
    logger.info(f"Checked out {branch}")


def create_branch(repo: Path, name: str, start_point: str | None = None) -> None:
    """Create a branch from start_point (default: HEAD) and check it out."""
    args = ["checkout", "-b", name]
    if start_point:
        args.append(start_point)
    run_git_checked(args, repo, f"Failed to create branch {name}")
    logger.info(f"Created branch {name} from {start_point or 'HEAD'}")


def delete_local_branch(repo: Path, name: str, force: bool = False) -> OperationResult:
    """
    Delete a local branch.

    Non-force deletion uses `git branch -d`, which refuses unmerged branches;
    that refusal is reported with require_force=True so the caller can retry
    with force (`git branch -D`).
    """
    flag = "-D" if force else "-d"
    result = run_git(["branch", flag, name], repo)
    if result.success:
        return OperationResult(success=True, message=f"Branch {name} deleted successfully")
    return OperationResult(
        success=False,
        message=f"Failed to delete branch {name}: {result.output}",
        require_force=not force and "not fully merged" in result.output,
    )
