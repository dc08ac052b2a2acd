"""
Shared data types for git-manager.

This module contains dataclasses used across the git facade and the
workflows to avoid circular imports.
"""

from dataclasses import dataclass


@dataclass
class OperationResult:
    """Outcome of an operation whose failure is expected and recoverable.

    Used for merges, cherry-picks, branch deletion and stash application,
    where the caller chooses guidance based on the kind of failure.
    """
    success: bool
    message: str
    require_force: bool = False  # Non-force delete refused: branch not fully merged
    is_conflict: bool = False  # Merge/cherry-pick stopped on conflicts


@dataclass(frozen=True)
class StatusEntry:
    """One line of `git status -s`."""
    code: str  # Two-letter XY code, e.g. " M", "??", "R "
    path: str


@dataclass(frozen=True)
class Commit:
    """A commit as listed by get_latest_commits()."""
    hash: str
    author: str
    date: str
    message: str

    def label(self) -> str:
        """Display form used in commit pickers."""
        return f"{self.hash} - {self.date} - {self.message} ({self.author})"
