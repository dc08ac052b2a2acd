"""
Feature branch workflows: create a feature branch from develop, merge a
feature branch into the current branch.
"""

import logging

from git_manager.git import (
    create_branch,
    get_current_branch,
    get_local_branches,
    merge_feature_branch,
)
from git_manager.lib import output
from git_manager.lib.config import RepoContext
from git_manager.lib.constants import FEATURE_PREFIX
from git_manager.lib.naming import feature_branch_name
from git_manager.lib.prompts import Prompter, SearchPrompt, TextPrompt
from git_manager.workflow.steps import (
    checkout_updated_base,
    other_branches,
    require_base,
    restore_stash,
    stash_if_dirty,
    stash_kept_on_failure,
)

logger = logging.getLogger(__name__)


def create_feature_branch(ctx: RepoContext, prompter: Prompter) -> str:
    """
    Create feature/<issue>-<description> from an up-to-date develop.

    Returns:
        The new branch name (checked out on return)
    """
    output.heading("Create feature branch")
    require_base(ctx, ctx.develop_branch)
    stashed = stash_if_dirty(ctx, "Auto stash before creating feature branch")

    with stash_kept_on_failure(stashed):
        checkout_updated_base(ctx, ctx.develop_branch)

        issue_key = prompter.text(TextPrompt(name="issue_key", message="Enter the issue key (e.g. JIRA-123):"))
        description = prompter.text(TextPrompt(name="branch_name", message="Enter a short feature description:"))
        branch = feature_branch_name(issue_key, description)

        output.step(f"Creating {branch} from {ctx.develop_branch}...")
        create_branch(ctx.path, branch, ctx.develop_branch)
    output.success(f"Created and checked out {branch}")
    logger.info(f"Created feature branch {branch}")

    restore_stash(ctx, stashed)
    return branch


def merge_feature(ctx: RepoContext, prompter: Prompter) -> bool:
    """
    Merge a feature branch into the current branch with a merge commit.

    Returns:
        True if merged. On conflict the merge is left in progress and any
        stash taken here stays in the stash list.
    """
    output.heading("Merge feature branch")
    current = get_current_branch(ctx.path)
    stashed = stash_if_dirty(ctx, f"Auto stash before merging into {current}")

    features = [b for b in other_branches(ctx) if b.startswith(FEATURE_PREFIX)]
    if not features:
        output.info("No feature branches to merge")
        restore_stash(ctx, stashed)
        return False

    branch = prompter.search(SearchPrompt(
        name="feature_branch",
        message="Select the feature branch to merge:",
        choices=tuple(features),
    ))
    message = prompter.text(TextPrompt(
        name="commit_message",
        message="Merge commit message:",
        default=f"Merge {branch} into {current}",
    ))

    # Remote-only branches are merged from their remote-tracking ref
    ref = branch if branch in get_local_branches(ctx.path) else f"{ctx.remote}/{branch}"
    output.step(f"Merging {ref} into {current}...")
    result = merge_feature_branch(ctx.path, ref, message)
    if not result.success:
        output.error(result.message)
        if result.is_conflict:
            output.detail("Resolve the conflicts, then commit the merge.")
        if stashed:
            output.detail("Your uncommitted changes are stashed; run `git stash pop` once the merge is done.")
        return False

    output.success(result.message)
    restore_stash(ctx, stashed)
    return True
