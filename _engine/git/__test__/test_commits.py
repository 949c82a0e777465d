import subprocess
from unittest.mock import patch

import pytest

from _models.model import ErrorKind
from _engine.errors import UpstreamFetchError
from _engine.git.command import run_git_command
from _engine.git.commits import (
    get_commit_diff,
    get_commit_info,
    get_recent_commit_hashes,
    parse_git_stats,
)

FULL_HASH = "0123456789abcdef0123456789abcdef01234567"

STATS = """ src/app.py | 12 +++++++-----
 README.md  |  1 +
 2 files changed, 8 insertions(+), 5 deletions(-)
"""


class TestParseGitStats:
    def test_files_and_counts(self):
        files, insertions, deletions = parse_git_stats(STATS)
        assert files == ["src/app.py", "README.md"]
        assert insertions == 8
        assert deletions == 5

    def test_only_insertions(self):
        assert parse_git_stats(" a.py | 1 +\n 1 file changed, 1 insertion(+)\n") == (["a.py"], 1, 0)

    def test_only_deletions(self):
        assert parse_git_stats(" 1 file changed, 3 deletions(-)\n") == ([], 0, 3)

    def test_empty(self):
        assert parse_git_stats("") == ([], 0, 0)


class TestGitCollaborator:
    def test_get_commit_info(self):
        outputs = [
            (0, "Fix login redirect\nAlice\n2024-01-02 10:30\nLonger body\n", ""),
            (0, STATS, ""),
        ]
        with patch("_engine.git.commits.run_git_command", side_effect=outputs) as git:
            info = get_commit_info(FULL_HASH, "/repo")

        assert info.hash == FULL_HASH
        assert info.short_hash == FULL_HASH[:12]
        assert info.message == "Fix login redirect"
        assert info.author == "Alice"
        assert info.date == "2024-01-02 10:30"
        assert info.files_changed == ["src/app.py", "README.md"]
        assert (info.insertions, info.deletions) == (8, 5)
        assert all(call.kwargs["cwd"] == "/repo" for call in git.call_args_list)

    def test_get_commit_info_failure(self):
        with patch("_engine.git.commits.run_git_command", return_value=(128, "", "fatal: bad object")):
            with pytest.raises(UpstreamFetchError) as exc_info:
                get_commit_info("deadbeef", "/repo")
        assert exc_info.value.kind == ErrorKind.UPSTREAM_FETCH_FAILED
        assert "bad object" in str(exc_info.value)

    def test_get_commit_diff_omits_header(self):
        with patch("_engine.git.commits.run_git_command", return_value=(0, "diff --git a/x b/x\n", "")) as git:
            assert get_commit_diff(FULL_HASH, "/repo") == "diff --git a/x b/x\n"
        assert git.call_args[0][0] == ["git", "show", "--format=", FULL_HASH]

    def test_get_recent_commit_hashes(self):
        stdout = "aaa111\nbbb222\n\nccc333"
        with patch("_engine.git.commits.run_git_command", return_value=(0, stdout, "")) as git:
            assert get_recent_commit_hashes(".", 3) == ["aaa111", "bbb222", "ccc333"]
        assert git.call_args[0][0] == ["git", "log", "-n3", "--pretty=format:%H"]

    def test_get_recent_commit_hashes_not_a_repo(self):
        with patch("_engine.git.commits.run_git_command", return_value=(128, "", "fatal: not a git repository")):
            with pytest.raises(UpstreamFetchError):
                get_recent_commit_hashes("/tmp", 10)


class TestRunGitCommand:
    def test_returns_output(self):
        completed = subprocess.CompletedProcess(["git"], 0, stdout="abc\n", stderr="")
        with patch("_engine.git.command.subprocess.run", return_value=completed) as run:
            assert run_git_command(["git", "rev-parse", "HEAD"], cwd="/repo") == (0, "abc\n", "")
        assert run.call_args.kwargs["cwd"] == "/repo"

    def test_git_missing(self):
        with patch("_engine.git.command.subprocess.run", side_effect=FileNotFoundError()):
            returncode, stdout, stderr = run_git_command(["git", "status"])
        assert returncode == 1
        assert stdout == ""
        assert "Git command not found" in stderr
