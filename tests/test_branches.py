"""Tests for branch listing, checkout-and-update and batch deletion."""

from unittest.mock import patch

from git_manager.commands.branches import checkout_branch_and_update, delete_branches, list_branches
from git_manager.git import get_current_branch, get_local_branches
from git_manager.lib.config import RepoContext
from git_manager.lib.prompts import CannedPrompter
from git_manager.workflow.steps import other_branches

from conftest import git, commit_file, clone


class TestListBranches:

    def test_marks_current(self, repo, capsys):
        assert list_branches(RepoContext(path=repo)) == ["develop", "main"]
        out = capsys.readouterr().out
        assert "main (current)" in out
        assert "develop" in out


class TestCheckoutBranchAndUpdate:

    def test_checkout_pulls_remote_changes(self, repo, remote_path, tmp_path):
        other = clone(remote_path, tmp_path / "other")
        git(other, "checkout", "-q", "develop")
        upstream = commit_file(other, "new.txt", "new\n")
        git(other, "push", "-q", "origin", "develop")
        git(repo, "fetch", "-q", "origin")

        prompter = CannedPrompter({"branch": "dev"})
        assert checkout_branch_and_update(RepoContext(path=repo), prompter) == "develop"

        assert get_current_branch(repo) == "develop"
        assert git(repo, "rev-parse", "HEAD") == upstream

    def test_changes_follow_the_checkout(self, repo, capsys):
        (repo / "README.md").write_text("# Carried over\n")
        checkout_branch_and_update(RepoContext(path=repo), CannedPrompter({"branch": "develop"}))

        assert get_current_branch(repo) == "develop"
        assert (repo / "README.md").read_text() == "# Carried over\n"
        assert git(repo, "stash", "list") == ""
        assert "README.md" in capsys.readouterr().out

    def test_untracked_files_are_not_reported_as_restored(self, repo, capsys):
        (repo / "README.md").write_text("# Carried over\n")
        (repo / "scratch.txt").write_text("untracked\n")
        checkout_branch_and_update(RepoContext(path=repo), CannedPrompter({"branch": "develop"}))

        out = capsys.readouterr().out
        restored = out.split("Restored changes:", 1)[1]
        assert "README.md" in restored
        assert "scratch.txt" not in restored
        assert (repo / "scratch.txt").exists()

    def test_local_only_branch_is_not_pulled(self, repo, capsys):
        git(repo, "branch", "scratch")
        checkout_branch_and_update(RepoContext(path=repo), CannedPrompter({"branch": "scratch"}))
        assert get_current_branch(repo) == "scratch"
        assert "local only" in capsys.readouterr().out

    def test_remote_only_branch_is_tracked(self, repo, remote_path, tmp_path):
        other = clone(remote_path, tmp_path / "other")
        git(other, "checkout", "-q", "-b", "feature/shared")
        commit_file(other, "shared.txt", "shared\n")
        git(other, "push", "-q", "origin", "feature/shared")
        git(repo, "fetch", "-q", "origin")

        checkout_branch_and_update(RepoContext(path=repo), CannedPrompter({"branch": "feature/shared"}))
        assert get_current_branch(repo) == "feature/shared"
        assert (repo / "shared.txt").exists()


class TestDeleteBranches:

    def test_only_current_branch_is_a_noop(self, local_repo):
        prompter = CannedPrompter({"branches": ["main"], "confirm_delete": True})
        with patch("git_manager.commands.branches.delete_local_branch") as mock_delete:
            assert delete_branches(RepoContext(path=local_repo), prompter) == []
        mock_delete.assert_not_called()
        assert prompter.asked == []

    def test_deletes_each_selected_branch(self, repo):
        git(repo, "branch", "merged")
        git(repo, "checkout", "-q", "-b", "unmerged")
        commit_file(repo, "x.txt", "x\n")
        git(repo, "checkout", "-q", "main")

        prompter = CannedPrompter({"branches": ["merged", "unmerged"], "confirm_delete": True})
        results = delete_branches(RepoContext(path=repo), prompter)

        assert [(b, r.success) for b, r in results] == [("merged", True), ("unmerged", True)]
        assert get_local_branches(repo) == ["develop", "main"]

    def test_failure_does_not_stop_the_batch(self, repo):
        git(repo, "branch", "a")
        git(repo, "branch", "b")
        # A branch checked out in another worktree cannot be deleted
        git(repo, "worktree", "add", "-q", str(repo.parent / "wt"), "a")

        prompter = CannedPrompter({"branches": ["a", "b"], "confirm_delete": True})
        results = dict(delete_branches(RepoContext(path=repo), prompter))

        assert not results["a"].success
        assert results["b"].success
        assert "b" not in get_local_branches(repo)

    def test_declined_confirmation_deletes_nothing(self, repo):
        git(repo, "branch", "keep")
        prompter = CannedPrompter({"branches": ["keep"], "confirm_delete": False})
        assert delete_branches(RepoContext(path=repo), prompter) == []
        assert "keep" in get_local_branches(repo)


class TestDetachedHead:

    def test_detached_head_is_never_offered(self, repo):
        git(repo, "checkout", "-q", "--detach", "HEAD")
        prompter = CannedPrompter({"branches": ["develop"], "confirm_delete": True})

        results = delete_branches(RepoContext(path=repo), prompter)

        assert [branch for branch, _ in results] == ["develop"]
        assert get_local_branches(repo) == ["main"]
        assert not any(b.startswith("(") for b in other_branches(RepoContext(path=repo)))
