"""
git-manager interactive menu.

Loops over a select menu of every workflow until the user picks Exit or
declines to return to the menu. In test mode the menu runs one action and
returns.
"""

import logging

from git_manager.commands.branches import checkout_branch_and_update, delete_branches, list_branches
from git_manager.commands.cherry_pick import cherry_pick_changes
from git_manager.commands.feature import create_feature_branch, merge_feature
from git_manager.commands.release import (
    create_hotfix_branch,
    create_release_branch,
    finish_hotfix,
    finish_release,
)
from git_manager.git import GitError, get_current_branch
from git_manager.lib import output
from git_manager.lib.config import RepoContext
from git_manager.lib.prompts import Choice, ConfirmPrompt, PromptCancelled, PromptError, Prompter, SelectPrompt
from git_manager.workflow.steps import WorkflowError

logger = logging.getLogger(__name__)

EXIT = "exit"

# (menu value, title, workflow)
MENU_ACTIONS = [
    ("branches", "List branches", lambda ctx, prompter: list_branches(ctx)),
    ("checkout-branch", "Checkout branch and update", checkout_branch_and_update),
    ("create-feature", "Create feature branch", create_feature_branch),
    ("merge-feature", "Merge feature branch", merge_feature),
    ("create-release", "Create release branch", create_release_branch),
    ("finish-release", "Finish release", finish_release),
    ("create-hotfix", "Create hotfix branch", create_hotfix_branch),
    ("finish-hotfix", "Finish hotfix", finish_hotfix),
    ("cherry-pick", "Cherry-pick a commit", cherry_pick_changes),
    ("delete-branches", "Delete branches", delete_branches),
]

_WORKFLOWS = {value: workflow for value, _, workflow in MENU_ACTIONS}


def _menu_prompt() -> SelectPrompt:
    choices = tuple(Choice(title=title, value=value) for value, title, _ in MENU_ACTIONS)
    return SelectPrompt(
        name="action",
        message="What would you like to do?",
        choices=choices + (Choice(title="Exit", value=EXIT),),
    )


def run_action(ctx: RepoContext, prompter: Prompter, action: str) -> bool:
    """
    Run one menu action, reporting failures instead of raising.

    Returns:
        True if the action completed without an error
    """
    try:
        _WORKFLOWS[action](ctx, prompter)
        return True
    except PromptCancelled:
        output.info("Cancelled")
    except (GitError, WorkflowError, PromptError) as e:
        logger.warning(f"{action} failed: {e}")
        output.error(str(e))
    return False


def show_interactive_menu(ctx: RepoContext, prompter: Prompter, test_mode: bool = False) -> None:
    """Show the main menu until the user exits."""
    output.heading("Git Manager")
    output.detail(f"Repository: {ctx.path}")
    output.detail(f"Current branch: {get_current_branch(ctx.path) or '(detached HEAD)'}")

    while True:
        try:
            action = prompter.select(_menu_prompt())
        except PromptCancelled:
            return
        if action == EXIT:
            return

        run_action(ctx, prompter, action)

        if test_mode:
            return
        try:
            again = prompter.confirm(ConfirmPrompt(
                name="return_to_menu",
                message="Return to main menu?",
                default=True,
            ))
        except PromptCancelled:
            return
        if not again:
            return
