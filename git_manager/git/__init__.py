"""Git operations for git-manager.

Every function takes the repository path explicitly; nothing depends on the
process working directory.

Return type conventions:
- Functions returning OperationResult: expected, recoverable failures
  (conflicts, unmerged branches, missing stash). Caller checks .success.
  Examples: merge_branch(), cherry_pick_commit(), delete_local_branch()
- Functions returning bool: soft outcomes that never raise.
  Examples: stash_changes(), fetch_branch_updates(), remote_branch_exists()
- Functions returning None or parsed values: raise GitError on failure,
  with a message naming the failed operation.
  Examples: checkout_branch(), create_branch(), get_local_branches()
"""

from git_manager.git.runner import (
    GitError,
    GitResult,
    run_git,
)
from git_manager.git.status import (
    is_git_repository,
    get_status,
    get_status_lines,
    parse_status_lines,
    get_changed_files,
    has_uncommitted_changes,
)
from git_manager.git.branch import (
    get_current_branch,
    get_local_branches,
    get_all_branches,
    get_main_branch,
    checkout_branch,
    create_branch,
    delete_local_branch,
)
from git_manager.git.history import (
    list_tags,
    get_latest_commits,
)
from git_manager.git.stash import (
    stash_changes,
    apply_stash,
    has_stashes,
)
from git_manager.git.merge import (
    get_conflicted_files,
    merge_branch,
    merge_feature_branch,
    squash_and_merge_branch,
    cherry_pick_commit,
    create_tag,
)
from git_manager.git.remote import (
    remote_branch_exists,
    pull_with_rebase,
    pull_latest_changes,
    fetch_branch_updates,
    push_to_remote,
    set_upstream_and_push,
    delete_remote_branch,
)

__all__ = [
    # runner
    "GitError",
    "GitResult",
    "run_git",
    # status
    "is_git_repository",
    "get_status",
    "get_status_lines",
    "parse_status_lines",
    "get_changed_files",
    "has_uncommitted_changes",
    # branch
    "get_current_branch",
    "get_local_branches",
    "get_all_branches",
    "get_main_branch",
    "checkout_branch",
    "create_branch",
    "delete_local_branch",
    # history
    "list_tags",
    "get_latest_commits",
    # stash
    "stash_changes",
    "apply_stash",
    "has_stashes",
    # merge
    "get_conflicted_files",
    "merge_branch",
    "merge_feature_branch",
    "squash_and_merge_branch",
    "cherry_pick_commit",
    "create_tag",
    # remote
    "remote_branch_exists",
    "pull_with_rebase",
    "pull_latest_changes",
    "fetch_branch_updates",
    "push_to_remote",
    "set_upstream_and_push",
    "delete_remote_branch",
]
