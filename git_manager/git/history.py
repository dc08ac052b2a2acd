"""Git history queries: tags and recent commits."""

from pathlib import Path

from git_manager.git.runner import run_git_checked
from git_manager.lib.types import Commit

# ASCII unit separator; never appears in author names or subjects
_FIELD_SEP = "\x1f"
_LOG_FORMAT = _FIELD_SEP.join(["%h", "%an", "%ad", "%s"])


def list_tags(repo: Path) -> list[str]:
    """List tags, most recently created first."""
    result = run_git_checked(["tag", "--sort=-creatordate"], repo, "Failed to list tags")
    return [t.strip() for t in result.stdout.splitlines() if t.strip()]


def get_latest_commits(repo: Path, count: int = 20) -> list[Commit]:
    """
    Get the most recent commits of the checked-out branch, newest first.

    Scoped to HEAD: to list another branch's commits it has to be checked
    out first.

    Args:
        repo: Path to repository
        count: Maximum number of commits to return

    Returns:
        List of Commit, possibly empty
    """
    result = run_git_checked(
        ["log", "-n", str(count), f"--pretty=format:{_LOG_FORMAT}", "--date=short"],
        repo,
        "Failed to get commits",
    )
    commits = []
    for line in result.stdout.splitlines():
        parts = line.split(_FIELD_SEP)
        if len(parts) != 4:
            continue
        hash_, author, date, message = parts
        commits.append(Commit(hash=hash_, author=author, date=date, message=message))
    return commits
