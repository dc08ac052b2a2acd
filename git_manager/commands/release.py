"""
Release and hotfix workflows.

create_release_branch / create_hotfix_branch start a release/<tag> or
hotfix/<tag> branch. finish_release / finish_hotfix merge it into main and
develop, optionally tag, push, and delete the branch. The finish flow is
tracked by ReleaseFSM; do_release() returns the state it ended in.
"""

import logging

from git_manager.git import (
    GitError,
    checkout_branch,
    create_branch,
    create_tag,
    delete_local_branch,
    delete_remote_branch,
    get_all_branches,
    get_main_branch,
    merge_branch,
    push_to_remote,
    remote_branch_exists,
    set_upstream_and_push,
    stash_changes,
)
from git_manager.lib import output
from git_manager.lib.config import RepoContext
from git_manager.lib.constants import RELEASE_TYPES
from git_manager.lib.naming import strip_prefix
from git_manager.lib.prompts import ConfirmPrompt, Prompter, SelectPrompt, TextPrompt, choices_from
from git_manager.workflow.fsm import ReleaseFSM
from git_manager.workflow.steps import (
    PreconditionError,
    checkout_updated_base,
    refresh_branch,
    require_base,
    require_no_branch_with_prefix,
    restore_stash,
    select_tag,
    stash_if_dirty,
    stash_kept_on_failure,
)

logger = logging.getLogger(__name__)


def _create_release_like_branch(ctx: RepoContext, prompter: Prompter, release_type: str) -> str:
    prefix = RELEASE_TYPES[release_type]
    output.heading(f"Create {release_type} branch")
    require_no_branch_with_prefix(ctx, prefix)

    if release_type == "hotfix":
        base = get_main_branch(ctx.path)
        if base is None:
            raise PreconditionError("No main or master branch found")
    else:
        base = ctx.develop_branch
        require_base(ctx, base)

    stashed = stash_if_dirty(ctx, f"Auto stash before creating {release_type} branch")
    with stash_kept_on_failure(stashed):
        checkout_updated_base(ctx, base)

        tag = select_tag(ctx, prompter, release_type)
        branch = f"{prefix}{tag}"
        output.step(f"Creating {branch} from {base}...")
        create_branch(ctx.path, branch, base)
    output.success(f"Created and checked out {branch}")

    if release_type == "release":
        result = set_upstream_and_push(ctx.path, ctx.remote)
        if not result.success:
            # The branch exists locally; report and leave pushing to the user
            output.warning(result.message)
        else:
            output.success(result.message)

    restore_stash(ctx, stashed)
    logger.info(f"Created {release_type} branch {branch} from {base}")
    return branch


def create_release_branch(ctx: RepoContext, prompter: Prompter) -> str:
    """Create release/<tag> from develop and push it with upstream tracking."""
    return _create_release_like_branch(ctx, prompter, "release")


def create_hotfix_branch(ctx: RepoContext, prompter: Prompter) -> str:
    """Create hotfix/<tag> from the main branch."""
    return _create_release_like_branch(ctx, prompter, "hotfix")


def _merge_into(ctx: RepoContext, fsm: ReleaseFSM, target: str, branch: str) -> bool:
    output.step(f"Merging {branch} into {target}...")
    checkout_branch(ctx.path, target)
    result = merge_branch(ctx.path, branch)
    if result.success:
        output.success(f"Merged {branch} into {target}")
        return True
    if result.is_conflict:
        fsm.conflict()
        output.error(result.message)
        output.detail(f"Resolve the conflicts on {target} manually and commit the merge.")
        output.detail("Nothing was tagged, pushed or deleted.")
        return False
    # Non-conflict merge failures are faults
    raise GitError(result.message)


def do_release(ctx: RepoContext, prompter: Prompter, release_type: str) -> str:
    """
    Finish a release or hotfix branch.

    Merges into main and develop, optionally tags, pushes main, develop and
    the tag (in that order), deletes the branch locally and on the remote,
    and leaves develop checked out. A merge conflict stops the run with the
    merge in progress and the stash untouched.

    Returns:
        The terminal ReleaseFSM state

    Raises:
        PreconditionError: no main or master branch
        GitError: a git step failed (run ends in "failed")
    """
    prefix = RELEASE_TYPES[release_type]
    fsm = ReleaseFSM(release_type)
    output.heading(f"Finish {release_type}")

    candidates = [b for b in get_all_branches(ctx.path) if b.startswith(prefix)]
    if not candidates:
        fsm.no_candidates()
        output.info(f"No {release_type} branches found")
        return fsm.state

    branch = prompter.select(SelectPrompt(
        name="branch",
        message=f"Select the {release_type} branch to finish:",
        choices=choices_from(candidates),
    ))
    fsm.branch = branch
    fsm.select()
    tag_name = strip_prefix(branch, prefix)

    main = get_main_branch(ctx.path)
    if main is None:
        fsm.missing_main()
        raise PreconditionError("No main or master branch found")

    if not prompter.confirm(ConfirmPrompt(
        name="confirm_merge",
        message=f"Merge {branch} into {main} and {ctx.develop_branch}?",
        default=True,
    )):
        fsm.decline()
        output.info("Cancelled")
        return fsm.state
    create_tag_confirmed = prompter.confirm(ConfirmPrompt(
        name="confirm_tag",
        message=f"Create tag for {branch}?",
        default=True,
    ))
    fsm.confirm()

    try:
        stashed = _stash_best_effort(ctx, release_type)

        for base in (main, ctx.develop_branch):
            try:
                refresh_branch(ctx, base)
            except GitError as e:
                output.warning(f"Could not update {base}: {e}")

        # Make sure the branch exists locally before merging it
        checkout_branch(ctx.path, branch)

        fsm.merge_main()
        if not _merge_into(ctx, fsm, main, branch):
            return _stopped_on_conflict(fsm, stashed)
        fsm.merge_develop()
        if not _merge_into(ctx, fsm, ctx.develop_branch, branch):
            return _stopped_on_conflict(fsm, stashed)

        fsm.publish()
        if create_tag_confirmed:
            tag = prompter.text(TextPrompt(name="tag", message="Tag name:", default=tag_name))
            create_tag(ctx.path, tag)
            output.success(f"Created tag {tag}")
            refs = [main, ctx.develop_branch, tag]
        else:
            refs = [main, ctx.develop_branch]
        for ref in refs:
            push_to_remote(ctx.path, ref, ctx.remote)
            output.success(f"Pushed {ref}")

        fsm.clean_up()
        result = delete_local_branch(ctx.path, branch)
        if not result.success:
            fsm.fail()
            output.error(result.message)
            if result.require_force:
                output.detail(f"{branch} is not fully merged; delete it manually once you have checked why.")
            return fsm.state
        output.success(f"Deleted local branch {branch}")
        if remote_branch_exists(ctx.path, branch, ctx.remote):
            delete_remote_branch(ctx.path, branch, ctx.remote)
            output.success(f"Deleted {ctx.remote}/{branch}")

        checkout_branch(ctx.path, ctx.develop_branch)
        restore_stash(ctx, stashed)
    except GitError:
        fsm.fail()
        raise

    fsm.complete()
    output.success(f"Finished {branch}")
    return fsm.state


def _stopped_on_conflict(fsm: ReleaseFSM, stashed: bool) -> str:
    if stashed:
        output.detail("Your uncommitted changes are stashed; run `git stash pop` after resolving.")
    return fsm.state


def _stash_best_effort(ctx: RepoContext, release_type: str) -> bool:
    try:
        return stash_changes(ctx.path, f"Auto stash before finishing {release_type}")
    except GitError as e:
        output.warning(f"Could not stash changes: {e}")
        return False


def finish_release(ctx: RepoContext, prompter: Prompter) -> str:
    return do_release(ctx, prompter, "release")


def finish_hotfix(ctx: RepoContext, prompter: Prompter) -> str:
    return do_release(ctx, prompter, "hotfix")
