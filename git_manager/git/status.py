"""Git working tree status queries."""

import re
from pathlib import Path

from git_manager.git.runner import run_git, run_git_checked
from git_manager.lib.types import StatusEntry

# Short-format status codes (index + worktree columns)
_STATUS_LINE = re.compile(r'^([MADRCU? !T]{2}) (.+)$')


def is_git_repository(path: Path) -> bool:
    """Check if path is inside a git work tree."""
    result = run_git(["rev-parse", "--is-inside-work-tree"], path)
    return result.success and result.stdout.strip() == "true"


def get_status(repo: Path) -> str:
    """Get working tree status in short format (raw `git status -s` text)."""
    result = run_git_checked(["status", "-s"], repo, "Failed to get status")
    return result.stdout


def get_status_lines(repo: Path) -> list[str]:
    """Get non-empty `git status -s` lines."""
    return [line for line in get_status(repo).splitlines() if line.strip()]


def parse_status_lines(lines: list[str]) -> list[StatusEntry]:
    """
    Parse short-format status lines into entries.

    Renames ("R  old -> new") report the destination path. Lines that do not
    look like status output are skipped.
    """
    entries = []
    for line in lines:
        match = _STATUS_LINE.match(line)
        if not match:
            continue
        code, path = match.group(1), match.group(2)
        if " -> " in path:
            path = path.split(" -> ", 1)[1]
        # Paths with special characters are quoted by git
        if len(path) >= 2 and path.startswith('"') and path.endswith('"'):
            path = path[1:-1]
        entries.append(StatusEntry(code=code, path=path))
    return entries


def get_changed_files(repo: Path) -> list[str]:
    """Get list of changed files (staged + unstaged + untracked)."""
    return [entry.path for entry in parse_status_lines(get_status_lines(repo))]


def has_uncommitted_changes(repo: Path) -> bool:
    """Check if the working tree has any uncommitted changes (including untracked files)."""
    return bool(get_status(repo).strip())
