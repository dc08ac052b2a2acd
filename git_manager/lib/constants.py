"""Shared constants for git-manager."""

# Branch prefixes with workflow semantics
FEATURE_PREFIX = "feature/"
RELEASE_PREFIX = "release/"
HOTFIX_PREFIX = "hotfix/"

RELEASE_TYPES = {
    "release": RELEASE_PREFIX,
    "hotfix": HOTFIX_PREFIX,
}

DEFAULT_REMOTE = "origin"
DEFAULT_DEVELOP_BRANCH = "develop"

# How many recent tags to suggest when asking for a version
TAG_SUGGESTIONS = 3
# How many commits to offer in the cherry-pick picker
CHERRY_PICK_COMMIT_LIMIT = 20

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
