"""Tests for git_manager.git module."""

import subprocess
from pathlib import Path
from unittest.mock import patch, MagicMock

import pytest

from git_manager.git.runner import run_git, run_git_checked, GitResult, GitError
from git_manager.git.status import (
    has_uncommitted_changes,
    get_changed_files,
    parse_status_lines,
)
from git_manager.git.branch import (
    get_all_branches,
    get_local_branches,
    get_main_branch,
    delete_local_branch,
)
from git_manager.git.merge import merge_branch, cherry_pick_commit
from git_manager.git.remote import push_to_remote
from git_manager.git.history import get_latest_commits
from git_manager.lib.types import StatusEntry

from conftest import git, commit_file


def ok(stdout="", stderr=""):
    return GitResult(returncode=0, stdout=stdout, stderr=stderr)


def fail(stdout="", stderr="", returncode=1):
    return GitResult(returncode=returncode, stdout=stdout, stderr=stderr)


class TestGitResult:
    """Test GitResult dataclass."""

    def test_success_when_returncode_zero(self):
        assert ok("ok").success is True

    def test_failure_when_returncode_nonzero(self):
        assert fail(stderr="error").success is False

    def test_failure_when_timed_out(self):
        result = GitResult(returncode=0, stdout="ok", stderr="", timed_out=True)
        assert result.success is False

    def test_output_combines_streams(self):
        assert GitResult(1, "out\n", "err\n").output == "out\nerr"


class TestRunGit:
    """Test run_git function."""

    @patch("git_manager.git.runner.subprocess.run")
    def test_returns_result_on_success(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="output", stderr="")
        result = run_git(["status"], Path("/tmp"))
        assert result.success
        assert result.stdout == "output"
        mock_run.assert_called_once()

    @patch("git_manager.git.runner.subprocess.run")
    def test_handles_timeout(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="git", timeout=30)
        result = run_git(["status"], Path("/tmp"))
        assert not result.success
        assert result.timed_out
        assert "timed out" in result.stderr

    @patch("git_manager.git.runner.subprocess.run")
    def test_passes_repo_with_C_flag(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        run_git(["status", "-s"], Path("/my/repo"))
        assert mock_run.call_args[0][0] == ["git", "-C", "/my/repo", "status", "-s"]

    @patch("git_manager.git.runner.subprocess.run")
    def test_checked_raises_with_operation_prefix(self, mock_run):
        mock_run.return_value = MagicMock(returncode=1, stdout="", stderr="error: pathspec 'nope' did not match")
        with pytest.raises(GitError) as exc_info:
            run_git_checked(["checkout", "nope"], Path("/tmp"), "Failed to checkout branch nope")
        assert str(exc_info.value).startswith("Failed to checkout branch nope: ")
        assert exc_info.value.returncode == 1
        assert exc_info.value.command == ["git", "checkout", "nope"]


class TestStatus:
    """Test status parsing."""

    def test_parse_status_lines(self):
        lines = [" M src/app.py", "?? new.txt", "R  old.py -> new.py", 'A  "with space.txt"', "garbage"]
        assert parse_status_lines(lines) == [
            StatusEntry(" M", "src/app.py"),
            StatusEntry("??", "new.txt"),
            StatusEntry("R ", "new.py"),
            StatusEntry("A ", "with space.txt"),
        ]

    @patch("git_manager.git.runner.run_git")
    def test_clean_tree(self, mock_run):
        mock_run.return_value = ok("")
        assert has_uncommitted_changes(Path("/tmp")) is False

    @patch("git_manager.git.runner.run_git")
    def test_dirty_tree(self, mock_run):
        mock_run.return_value = ok(" M file.txt\n?? other.txt\n")
        assert has_uncommitted_changes(Path("/tmp")) is True
        assert get_changed_files(Path("/tmp")) == ["file.txt", "other.txt"]


class TestBranches:
    """Test branch queries and deletion."""

    @patch("git_manager.git.runner.run_git")
    def test_all_branches_strips_remote_prefix_and_dedupes(self, mock_run):
        mock_run.return_value = ok(
            "  develop\n"
            "* main\n"
            "  remotes/origin/HEAD -> origin/main\n"
            "  remotes/origin/develop\n"
            "  remotes/origin/main\n"
            "  remotes/upstream/release/1.0\n"
        )
        assert get_all_branches(Path("/tmp")) == ["develop", "main", "release/1.0"]

    @patch("git_manager.git.runner.run_git")
    def test_detached_head_is_not_a_branch(self, mock_run):
        mock_run.return_value = ok("* (HEAD detached at a369218)\n  develop\n  main\n")
        assert get_local_branches(Path("/tmp")) == ["develop", "main"]

    @patch("git_manager.git.runner.run_git")
    def test_main_branch_prefers_first_match(self, mock_run):
        mock_run.return_value = ok("  develop\n* master\n")
        assert get_main_branch(Path("/tmp")) == "master"

    @patch("git_manager.git.runner.run_git")
    def test_main_branch_missing(self, mock_run):
        mock_run.return_value = ok("  develop\n* trunk\n")
        assert get_main_branch(Path("/tmp")) is None

    @patch("git_manager.git.branch.run_git")
    def test_force_delete_uses_capital_D(self, mock_run):
        mock_run.return_value = ok("Deleted branch x")
        result = delete_local_branch(Path("/tmp"), "x", force=True)
        assert result.success
        assert mock_run.call_args[0][0] == ["branch", "-D", "x"]

    @patch("git_manager.git.branch.run_git")
    def test_unmerged_delete_requires_force(self, mock_run):
        mock_run.return_value = fail(stderr="error: the branch 'x' is not fully merged.")
        result = delete_local_branch(Path("/tmp"), "x")
        assert mock_run.call_args[0][0] == ["branch", "-d", "x"]
        assert not result.success
        assert result.require_force


class TestMergeAndPush:
    """Test merge/cherry-pick result mapping and push refspecs."""

    @patch("git_manager.git.merge.run_git")
    def test_merge_uses_explicit_merge_commit(self, mock_run):
        mock_run.return_value = ok("Merge made by the 'ort' strategy.")
        assert merge_branch(Path("/tmp"), "release/1.0").success
        assert mock_run.call_args[0][0] == ["merge", "--no-ff", "--no-edit", "release/1.0"]

    @patch("git_manager.git.merge.run_git")
    def test_cherry_pick_conflict_is_a_result(self, mock_run):
        mock_run.side_effect = [
            fail(stdout="CONFLICT (content): Merge conflict in a.txt"),
            ok("a.txt\n"),
        ]
        result = cherry_pick_commit(Path("/tmp"), "abc123")
        assert not result.success
        assert result.is_conflict
        assert "a.txt" in result.message

    @patch("git_manager.git.runner.run_git")
    @patch("git_manager.git.remote.get_local_branches", return_value=["main", "develop"])
    def test_push_branch_vs_tag(self, _branches, mock_run):
        mock_run.return_value = ok()
        push_to_remote(Path("/tmp"), "main", "origin")
        assert mock_run.call_args[0][0] == ["push", "origin", "main"]
        push_to_remote(Path("/tmp"), "1.0.0", "origin")
        assert mock_run.call_args[0][0] == ["push", "origin", "refs/tags/1.0.0"]


class TestHistory:
    """Test commit listing against a real repository."""

    def test_latest_commits_newest_first(self, local_repo):
        first = commit_file(local_repo, "a.txt", "a\n", "Add a")
        second = commit_file(local_repo, "b.txt", "b\n", "Add b | with separators -")
        commits = get_latest_commits(local_repo, count=2)
        assert [c.hash for c in commits] == [
            git(local_repo, "rev-parse", "--short", second),
            git(local_repo, "rev-parse", "--short", first),
        ]
        assert commits[0].message == "Add b | with separators -"
        assert commits[0].author == "Test User"
        assert commits[0].label().endswith("- Add b | with separators - (Test User)")
