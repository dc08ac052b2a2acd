"""
Steps shared by the git-manager workflows.

Each workflow follows the same outline: remember the current branch, stash
uncommitted work if there is any, move to a refreshed base branch, do its
mutation, restore the stash it took, report. These helpers implement the
common pieces. Nothing here rolls back: a failing step raises and leaves the
repository as the last successful git call left it.
"""

import logging
from contextlib import contextmanager

from git_manager.git import (
    apply_stash,
    checkout_branch,
    fetch_branch_updates,
    get_all_branches,
    get_current_branch,
    get_local_branches,
    has_uncommitted_changes,
    list_tags,
    pull_with_rebase,
    remote_branch_exists,
    stash_changes,
)
from git_manager.lib import output
from git_manager.lib.config import RepoContext
from git_manager.lib.constants import TAG_SUGGESTIONS
from git_manager.lib.prompts import Prompter, TextPrompt

logger = logging.getLogger(__name__)


class WorkflowError(Exception):
    """A workflow cannot continue."""


class PreconditionError(WorkflowError):
    """The repository is not in a state the workflow can start from."""


def stash_if_dirty(ctx: RepoContext, message: str) -> bool:
    """Stash uncommitted changes if there are any. Returns True if a stash was taken."""
    if not has_uncommitted_changes(ctx.path):
        return False
    output.step("Stashing uncommitted changes...")
    stashed = stash_changes(ctx.path, message)
    if stashed:
        output.success("Changes stashed")
    else:
        output.detail("Nothing to stash (untracked files stay in place)")
    return stashed


def restore_stash(ctx: RepoContext, stashed: bool) -> bool:
    """
    Pop the stash this workflow took.

    A failed pop is reported with recovery instructions and does not raise:
    by the time it runs, the workflow's own mutation has already happened.
    """
    if not stashed:
        return True
    output.step("Restoring stashed changes...")
    result = apply_stash(ctx.path)
    if result.success:
        output.success("Stashed changes restored")
        return True
    logger.warning(result.message)
    output.warning(result.message)
    output.detail("Your changes are still in the stash. Resolve any conflicts, then run: git stash pop")
    return False


def refresh_branch(ctx: RepoContext, branch: str) -> bool:
    """
    Bring a local branch up to date with its remote counterpart.

    The checked-out branch is pulled with rebase; any other branch is updated
    with the fetch model (fast-forward only, no checkout). A branch that does
    not exist on the remote is left alone.

    Returns:
        False when a non-current branch could not be fast-forwarded (reported
        as a warning), True otherwise

    Raises:
        GitError: if pulling the checked-out branch fails
    """
    if not remote_branch_exists(ctx.path, branch, ctx.remote):
        output.detail(f"{branch} is local only, nothing to update")
        return True

    if get_current_branch(ctx.path) == branch:
        output.step(f"Pulling latest changes for {branch}...")
        pull_with_rebase(ctx.path, ctx.remote, branch)
        return True

    output.step(f"Updating {branch} from {ctx.remote}...")
    if fetch_branch_updates(ctx.path, branch, ctx.remote):
        return True
    output.warning(f"{branch} could not be fast-forwarded to {ctx.remote}/{branch}; continuing with the local branch")
    return False


def require_base(ctx: RepoContext, base: str) -> None:
    """Raise PreconditionError unless base exists locally or on the remote."""
    if base not in get_all_branches(ctx.path):
        raise PreconditionError(f"Base branch {base} not found")


@contextmanager
def stash_kept_on_failure(stashed: bool):
    """Point the user at their stash when the enclosed steps raise."""
    try:
        yield
    except Exception:
        if stashed:
            output.warning("Your uncommitted changes were left in the stash")
            output.detail("Restore them with: git stash pop")
        raise


def checkout_updated_base(ctx: RepoContext, base: str) -> None:
    """Refresh base and check it out."""
    require_base(ctx, base)
    refresh_branch(ctx, base)
    if get_current_branch(ctx.path) != base:
        checkout_branch(ctx.path, base)


def require_no_branch_with_prefix(ctx: RepoContext, prefix: str) -> None:
    """Raise PreconditionError if any branch (local or remote) starts with prefix."""
    existing = [b for b in get_all_branches(ctx.path) if b.startswith(prefix)]
    if existing:
        raise PreconditionError(
            f"A {prefix.rstrip('/')} branch already exists: {', '.join(existing)}. "
            f"Finish it before starting a new one."
        )


def other_branches(ctx: RepoContext, local_only: bool = False) -> list[str]:
    """Branches other than the checked-out one."""
    current = get_current_branch(ctx.path)
    branches = get_local_branches(ctx.path) if local_only else get_all_branches(ctx.path)
    return [b for b in branches if b != current]


def select_tag(ctx: RepoContext, prompter: Prompter, kind: str) -> str:
    """Show the most recent tags and ask for the new version tag."""
    tags = list_tags(ctx.path)[:TAG_SUGGESTIONS]
    if tags:
        output.info("Recent tags:")
        for tag in tags:
            output.detail(tag)
    else:
        output.info("No tags found")
    return prompter.text(TextPrompt(
        name="tag",
        message=f"Enter the {kind} version tag:",
        default=tags[0] if tags else None,
        required=True,
    ))
