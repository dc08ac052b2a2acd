"""
Configuration for git-manager.

Settings come from an optional .git-manager.env in the repository root,
overridden by GIT_MANAGER_* environment variables.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from . import envparse
from .constants import DEFAULT_DEVELOP_BRANCH, DEFAULT_REMOTE

logger = logging.getLogger(__name__)

SETTINGS_FILE = ".git-manager.env"
ENV_PREFIX = "GIT_MANAGER_"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class RepoContext:
    """Repository a workflow operates on. Passed explicitly to every git call."""
    path: Path
    remote: str = DEFAULT_REMOTE
    develop_branch: str = DEFAULT_DEVELOP_BRANCH


@dataclass
class Settings:
    """Runtime settings resolved at startup."""
    test_mode: bool = False  # Menu runs a single action
    non_interactive: bool = False  # Prompts answered from `answers` or defaults
    answers: dict = field(default_factory=dict)  # prompt name -> answer
    remote: str = DEFAULT_REMOTE
    develop_branch: str = DEFAULT_DEVELOP_BRANCH
    log_level: str = "WARNING"

    def repo_context(self, path: Path) -> RepoContext:
        return RepoContext(path=path, remote=self.remote, develop_branch=self.develop_branch)


def _is_true(value: str | None) -> bool:
    return value is not None and value.strip().lower() in _TRUE_VALUES


def _parse_answers(raw: str) -> dict:
    try:
        answers = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"{ENV_PREFIX}ANSWERS is not valid JSON: {e}") from e
    if not isinstance(answers, dict):
        raise ValueError(f"{ENV_PREFIX}ANSWERS must be a JSON object")
    return answers


def load_settings(repo_path: Path, environ: Mapping[str, str] | None = None) -> Settings:
    """
    Resolve settings for a repository.

    Args:
        repo_path: Repository root; .git-manager.env is read from here if present
        environ: Environment mapping (defaults to os.environ)

    Raises:
        ValueError: if the settings file or GIT_MANAGER_ANSWERS is malformed
    """
    env = os.environ if environ is None else environ
    settings = Settings()

    settings_file = Path(repo_path) / SETTINGS_FILE
    if settings_file.exists():
        file_values = envparse.load_env(settings_file)
        logger.debug(f"Loaded {settings_file}")
        settings.remote = file_values.get("REMOTE", settings.remote)
        settings.develop_branch = file_values.get("DEVELOP_BRANCH", settings.develop_branch)
        settings.log_level = file_values.get("LOG_LEVEL", settings.log_level)

    settings.test_mode = _is_true(env.get(f"{ENV_PREFIX}TEST"))
    settings.non_interactive = _is_true(env.get(f"{ENV_PREFIX}NON_INTERACTIVE"))
    if env.get(f"{ENV_PREFIX}ANSWERS"):
        settings.answers = _parse_answers(env[f"{ENV_PREFIX}ANSWERS"])
    settings.remote = env.get(f"{ENV_PREFIX}REMOTE") or settings.remote
    settings.develop_branch = env.get(f"{ENV_PREFIX}DEVELOP_BRANCH") or settings.develop_branch
    settings.log_level = (env.get(f"{ENV_PREFIX}LOG_LEVEL") or settings.log_level).upper()
    return settings
