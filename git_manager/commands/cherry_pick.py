"""
Cherry-pick a commit from another branch onto the current one.

Commits can only be listed for the checked-out branch, so the source branch
is checked out briefly to read its history. Any stash taken here is restored
on every exit path, including a failed cherry-pick.
"""

import logging

from git_manager.git import (
    checkout_branch,
    cherry_pick_commit,
    get_current_branch,
    get_latest_commits,
)
from git_manager.lib import output
from git_manager.lib.config import RepoContext
from git_manager.lib.constants import CHERRY_PICK_COMMIT_LIMIT
from git_manager.lib.prompts import ConfirmPrompt, Prompter, SearchPrompt, SelectPrompt, choices_from
from git_manager.lib.types import Commit
from git_manager.workflow.steps import other_branches, restore_stash, stash_if_dirty

logger = logging.getLogger(__name__)


def _commits_of(ctx: RepoContext, source: str, current: str) -> list[Commit]:
    if source == current:
        return get_latest_commits(ctx.path, CHERRY_PICK_COMMIT_LIMIT)
    checkout_branch(ctx.path, source)
    try:
        return get_latest_commits(ctx.path, CHERRY_PICK_COMMIT_LIMIT)
    finally:
        checkout_branch(ctx.path, current)


def cherry_pick_changes(ctx: RepoContext, prompter: Prompter) -> bool:
    """
    Pick a commit from another branch and apply it to the current branch.

    Returns:
        True if the cherry-pick succeeded
    """
    output.heading("Cherry-pick")
    current = get_current_branch(ctx.path)
    stashed = stash_if_dirty(ctx, f"Auto stash before cherry-pick onto {current}")
    try:
        return _cherry_pick(ctx, prompter, current)
    finally:
        restore_stash(ctx, stashed)


def _cherry_pick(ctx: RepoContext, prompter: Prompter, current: str) -> bool:
    branches = other_branches(ctx)
    if not branches:
        output.info("No other branches to cherry-pick from")
        return False

    source = prompter.search(SearchPrompt(
        name="source_branch",
        message="Search for the branch to cherry-pick from:",
        choices=tuple(branches),
    ))

    commits = _commits_of(ctx, source, current)
    if not commits:
        output.info(f"No commits found on {source}")
        return False

    commit = prompter.select(SelectPrompt(
        name="commit",
        message="Select the commit to cherry-pick:",
        choices=choices_from(commits, label=Commit.label),
    ))
    if not prompter.confirm(ConfirmPrompt(
        name="confirm_cherry_pick",
        message=f"Cherry-pick {commit.hash} onto {current}?",
        default=True,
    )):
        output.info("Cancelled")
        return False

    output.step(f"Cherry-picking {commit.hash}...")
    result = cherry_pick_commit(ctx.path, commit.hash)
    if not result.success:
        output.error(result.message)
        output.detail("Resolve the conflicts, then run: git cherry-pick --continue")
        output.detail("Or give up with: git cherry-pick --abort")
        return False

    output.success(result.message)
    logger.info(f"Cherry-picked {commit.hash} from {source} onto {current}")
    return True
