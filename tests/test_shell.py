"""
Tests for Local Repository Helpers
==================================

Tests for:
- git_branch on a branch and in detached HEAD state
- run_all stopping at the first failure
- copy_file replacing destination contents
"""

import shutil
import subprocess

import pytest

from farmhand.errors import DetachedHeadError
from farmhand.utils.shell import CommandOutput, copy_file, git_branch, run_all

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def _git(repo, *args):
    subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True)


@pytest.fixture
def git_repo(tmp_path):
    _git(tmp_path, "init", "-q")
    _git(tmp_path, "checkout", "-q", "-b", "feature")
    (tmp_path / "README").write_text("hello")
    _git(tmp_path, "add", "README")
    _git(
        tmp_path,
        "-c", "user.name=Test",
        "-c", "user.email=test@example.com",
        "commit", "-q", "-m", "init",
    )
    return tmp_path


@requires_git
class TestGitBranch:
    def test_returns_branch(self, git_repo):
        assert git_branch(git_repo) == "feature"

    def test_detached_head(self, git_repo):
        _git(git_repo, "checkout", "-q", "--detach")
        with pytest.raises(DetachedHeadError):
            git_branch(git_repo)

    def test_not_a_repository(self, tmp_path):
        with pytest.raises(subprocess.CalledProcessError):
            git_branch(tmp_path)


class TestRunAll:
    def test_runs_every_command(self, tmp_path):
        outputs = run_all(tmp_path, "echo one", "  echo two  ")
        assert outputs == [
            CommandOutput("echo one", "one", 0),
            CommandOutput("echo two", "two", 0),
        ]
        assert all(o.ok for o in outputs)

    def test_stops_at_first_failure(self, tmp_path):
        outputs = run_all(tmp_path, "echo one", "false", "echo three")
        assert [o.command for o in outputs] == ["echo one", "false"]
        assert not outputs[-1].ok

    def test_unknown_executable_is_a_failure(self, tmp_path):
        outputs = run_all(tmp_path, "definitely-not-a-real-command-xyz", "echo after")
        assert len(outputs) == 1
        assert outputs[0].returncode == 127

    def test_runs_in_directory(self, tmp_path):
        (tmp_path / "marker.txt").write_text("")
        (output,) = run_all(tmp_path, "ls")
        assert "marker.txt" in output.output


class TestCopyFile:
    def test_copies_contents(self, tmp_path):
        src = tmp_path / "src.bin"
        dst = tmp_path / "dst.bin"
        src.write_bytes(b"payload")
        copy_file(src, dst)
        assert dst.read_bytes() == b"payload"

    def test_replaces_existing_destination(self, tmp_path):
        src = tmp_path / "src.bin"
        dst = tmp_path / "dst.bin"
        src.write_bytes(b"new")
        dst.write_bytes(b"old and longer")
        copy_file(src, dst)
        assert dst.read_bytes() == b"new"

    def test_missing_source(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            copy_file(tmp_path / "missing", tmp_path / "dst")
