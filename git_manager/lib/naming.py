"""Branch and tag name normalization."""

import re

# Anything other than ASCII word characters, whitespace and hyphens
_SPECIAL_CHARS = re.compile(r'[^\w\s-]', re.ASCII)
_SEPARATORS = re.compile(r'[\s_]+')


def normalize(text: str) -> str:
    """
    Convert free text into a kebab-case slug for branch names.

    Trims, lower-cases, removes special characters (keeping letters, digits,
    underscores, whitespace and hyphens), then collapses whitespace and
    underscore runs into a single hyphen. Idempotent.

        normalize("  Test Feature ")  -> "test-feature"
        normalize("JIRA-123")         -> "jira-123"
        normalize("fix: user_login!") -> "fix-user-login"
    """
    if text is None:
        raise TypeError("normalize() requires a string, got None")
    slug = text.strip().lower()
    slug = _SPECIAL_CHARS.sub('', slug)
    return _SEPARATORS.sub('-', slug)


to_kebab_case = normalize


def feature_branch_name(issue_key: str, description: str) -> str:
    """Derive feature/<issue>-<description> from user input."""
    return f"feature/{normalize(issue_key)}-{normalize(description)}"


def strip_prefix(branch: str, prefix: str) -> str:
    """release/1.2.0 -> 1.2.0 (unchanged when prefix does not match)."""
    if branch.startswith(prefix):
        return branch[len(prefix):]
    return branch
