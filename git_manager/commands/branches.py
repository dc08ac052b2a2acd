"""
Branch workflows: list, checkout-and-update, batch delete.
"""

import logging

from git_manager.git import (
    GitError,
    apply_stash,
    checkout_branch,
    delete_local_branch,
    get_current_branch,
    get_local_branches,
    get_status_lines,
    parse_status_lines,
    pull_with_rebase,
    remote_branch_exists,
    stash_changes,
)
from git_manager.lib import output
from git_manager.lib.config import RepoContext
from git_manager.lib.prompts import CheckboxPrompt, ConfirmPrompt, Prompter, SearchPrompt, choices_from
from git_manager.lib.types import OperationResult
from git_manager.workflow.steps import other_branches

logger = logging.getLogger(__name__)


def list_branches(ctx: RepoContext) -> list[str]:
    """Print local branches, marking the checked-out one."""
    current = get_current_branch(ctx.path)
    branches = get_local_branches(ctx.path)
    output.heading("Local branches")
    for branch in branches:
        if branch == current:
            output.success(f"{branch} (current)")
        else:
            output.info(f"  {branch}")
    return branches


def checkout_branch_and_update(ctx: RepoContext, prompter: Prompter) -> str | None:
    """
    Switch to another branch, pull it, and carry uncommitted changes along.

    Uncommitted changes are stashed before the checkout and popped onto the
    new branch afterwards. A failed pull is reported and the checkout kept.

    Returns:
        The checked-out branch, or None when there is nothing to switch to
    """
    output.heading("Checkout branch")
    branches = other_branches(ctx)
    if not branches:
        output.info("No other branches to check out")
        return None

    branch = prompter.search(SearchPrompt(
        name="branch",
        message="Search for a branch to check out:",
        choices=tuple(branches),
    ))

    # Untracked files are never stashed; they stay in the working tree
    changed = [entry.path for entry in parse_status_lines(get_status_lines(ctx.path)) if entry.code != "??"]
    stashed = False
    if changed:
        output.step(f"Stashing {len(changed)} changed file(s)...")
        stashed = stash_changes(ctx.path, f"Auto stash before checking out {branch}")

    checkout_branch(ctx.path, branch)
    output.success(f"Checked out {branch}")

    if remote_branch_exists(ctx.path, branch, ctx.remote):
        output.step(f"Pulling latest changes for {branch}...")
        try:
            pull_with_rebase(ctx.path, ctx.remote, branch)
            output.success(f"{branch} is up to date")
        except GitError as e:
            logger.warning(str(e))
            output.warning(str(e))
    else:
        output.detail(f"{branch} is local only, nothing to pull")

    if stashed:
        result = apply_stash(ctx.path)
        if result.success:
            output.success("Restored changes:")
            for path in changed:
                output.detail(path)
        else:
            output.warning(result.message)
            output.detail("Your changes are still in the stash. Resolve any conflicts, then run: git stash pop")
    return branch


def delete_branches(ctx: RepoContext, prompter: Prompter) -> list[tuple[str, OperationResult]]:
    """
    Force-delete the selected local branches.

    Each branch is deleted independently; one failure does not stop the rest.

    Returns:
        (branch, result) per selected branch, empty when nothing was deleted
    """
    output.heading("Delete branches")
    branches = other_branches(ctx, local_only=True)
    if not branches:
        output.info("No branches to delete (only the current branch exists)")
        return []

    selected = prompter.checkbox(CheckboxPrompt(
        name="branches",
        message="Select branches to delete:",
        choices=choices_from(branches),
    ))
    if not selected:
        output.info("No branches selected")
        return []

    if not prompter.confirm(ConfirmPrompt(
        name="confirm_delete",
        message=f"Delete {len(selected)} branch(es)?",
        default=False,
    )):
        output.info("Cancelled")
        return []

    results = []
    for branch in selected:
        result = delete_local_branch(ctx.path, branch, force=True)
        if result.success:
            output.success(result.message)
        else:
            output.error(result.message)
        results.append((branch, result))
    failed = sum(1 for _, r in results if not r.success)
    logger.info(f"Deleted {len(results) - failed} of {len(results)} branch(es)")
    return results
