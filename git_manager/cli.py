#!/usr/bin/env python3
"""git-manager CLI entrypoint."""

import argparse
import logging
import sys
from pathlib import Path

from git_manager import __version__
from git_manager.commands import branches as cmd_branches_module
from git_manager.commands import cherry_pick as cmd_cherry_pick_module
from git_manager.commands import feature as cmd_feature_module
from git_manager.commands import interactive as cmd_interactive_module
from git_manager.commands import release as cmd_release_module
from git_manager.git import GitError, is_git_repository
from git_manager.lib import output
from git_manager.lib.config import Settings, load_settings
from git_manager.lib.constants import EXIT_ERROR, EXIT_SUCCESS
from git_manager.lib.prompts import CannedPrompter, PromptCancelled, PromptError, QuestionaryPrompter
from git_manager.workflow.steps import WorkflowError

logger = logging.getLogger(__name__)

# Finish outcomes reported with a failing exit code
FAILED_RELEASE_STATES = {"aborted_on_conflict", "failed"}


def get_prompter(settings: Settings):
    if settings.non_interactive:
        return CannedPrompter(settings.answers)
    return QuestionaryPrompter()


def cmd_interactive(args):
    cmd_interactive_module.show_interactive_menu(
        args.ctx,
        args.prompter,
        test_mode=args.settings.test_mode or args.settings.non_interactive,
    )
    return EXIT_SUCCESS


def cmd_branches(args):
    cmd_branches_module.list_branches(args.ctx)
    return EXIT_SUCCESS


def cmd_checkout_branch(args):
    cmd_branches_module.checkout_branch_and_update(args.ctx, args.prompter)
    return EXIT_SUCCESS


def cmd_delete_branches(args):
    cmd_branches_module.delete_branches(args.ctx, args.prompter)
    return EXIT_SUCCESS


def cmd_create_feature(args):
    cmd_feature_module.create_feature_branch(args.ctx, args.prompter)
    return EXIT_SUCCESS


def cmd_merge_feature(args):
    cmd_feature_module.merge_feature(args.ctx, args.prompter)
    return EXIT_SUCCESS


def cmd_create_release(args):
    cmd_release_module.create_release_branch(args.ctx, args.prompter)
    return EXIT_SUCCESS


def cmd_create_hotfix(args):
    cmd_release_module.create_hotfix_branch(args.ctx, args.prompter)
    return EXIT_SUCCESS


def _finish_exit_code(state: str) -> int:
    return EXIT_ERROR if state in FAILED_RELEASE_STATES else EXIT_SUCCESS


def cmd_finish_release(args):
    return _finish_exit_code(cmd_release_module.finish_release(args.ctx, args.prompter))


def cmd_finish_hotfix(args):
    return _finish_exit_code(cmd_release_module.finish_hotfix(args.ctx, args.prompter))


def cmd_cherry_pick(args):
    cmd_cherry_pick_module.cherry_pick_changes(args.ctx, args.prompter)
    return EXIT_SUCCESS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='git-manager', description='Git workflow helper')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-C', dest='repo', default='.', help='Repository path (default: current directory)')
    subparsers = parser.add_subparsers(dest='command')

    # interactive
    p_interactive = subparsers.add_parser('interactive', help='Open the interactive menu')
    p_interactive.set_defaults(func=cmd_interactive)

    # branches
    p_branches = subparsers.add_parser('branches', help='List local branches')
    p_branches.set_defaults(func=cmd_branches)

    # checkout-branch
    p_checkout = subparsers.add_parser('checkout-branch', help='Checkout a branch and pull it')
    p_checkout.set_defaults(func=cmd_checkout_branch)

    # delete-branches
    p_delete = subparsers.add_parser('delete-branches', help='Delete local branches')
    p_delete.set_defaults(func=cmd_delete_branches)

    # create-feature
    p_feature = subparsers.add_parser('create-feature', help='Create a feature branch from develop')
    p_feature.set_defaults(func=cmd_create_feature)

    # create-release
    p_release = subparsers.add_parser('create-release', help='Create a release branch from develop')
    p_release.set_defaults(func=cmd_create_release)

    # create-hotfix
    p_hotfix = subparsers.add_parser('create-hotfix', help='Create a hotfix branch from main')
    p_hotfix.set_defaults(func=cmd_create_hotfix)

    # finish-release
    p_finish_release = subparsers.add_parser('finish-release', help='Merge, tag and remove a release branch')
    p_finish_release.set_defaults(func=cmd_finish_release)

    # finish-hotfix
    p_finish_hotfix = subparsers.add_parser('finish-hotfix', help='Merge, tag and remove a hotfix branch')
    p_finish_hotfix.set_defaults(func=cmd_finish_hotfix)

    # cherry-pick
    p_cherry_pick = subparsers.add_parser('cherry-pick', help='Cherry-pick a commit from another branch')
    p_cherry_pick.set_defaults(func=cmd_cherry_pick)

    # merge-feature
    p_merge = subparsers.add_parser('merge-feature', help='Merge a feature branch into the current branch')
    p_merge.set_defaults(func=cmd_merge_feature)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    repo = Path(args.repo).resolve()
    if not is_git_repository(repo):
        output.error(f"{repo} is not a git repository")
        return EXIT_ERROR

    try:
        settings = load_settings(repo)
    except ValueError as e:
        output.error(str(e))
        return EXIT_ERROR
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.WARNING),
                        format='%(levelname)s %(name)s: %(message)s')

    args.settings = settings
    args.ctx = settings.repo_context(repo)
    args.prompter = get_prompter(settings)
    func = getattr(args, 'func', cmd_interactive)

    try:
        return func(args)
    except PromptCancelled:
        output.info("Cancelled")
        return EXIT_SUCCESS
    except (GitError, WorkflowError, PromptError) as e:
        logger.debug(f"{args.command or 'interactive'} failed", exc_info=True)
        output.error(str(e))
        return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())
