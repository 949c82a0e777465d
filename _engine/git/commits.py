import re
from typing import List, Tuple

from _models.model import CommitInfo
from _engine.errors import UpstreamFetchError
from .command import run_git_command

_INSERTIONS_RE = re.compile(r"(\d+) insertion")
_DELETIONS_RE = re.compile(r"(\d+) deletion")

SHORT_HASH_LENGTH = 12


def _run_or_raise(command: List[str], repo_path: str) -> str:
    returncode, stdout, stderr = run_git_command(command, cwd=repo_path)
    if returncode != 0:
        detail = stderr or f"exit code {returncode}"
        raise UpstreamFetchError(f"'{' '.join(command)}' failed: {detail}")
    return stdout


def get_recent_commit_hashes(repo_path: str, count: int) -> List[str]:
    """
    List the full hashes of the ``count`` most recent commits, newest first.

    Raises:
        UpstreamFetchError: git log failed (not a repository, git missing...).
    """
    stdout = _run_or_raise(["git", "log", f"-n{count}", "--pretty=format:%H"], repo_path)
    return [line.strip() for line in stdout.splitlines() if line.strip()]


def parse_git_stats(stats: str) -> Tuple[List[str], int, int]:
    """
    Parse ``git show --stat`` output.

    Args:
        stats (str): Lines like ``src/app.py | 12 +++---`` followed by a summary
                     such as ``2 files changed, 10 insertions(+), 3 deletions(-)``.

    Returns:
        Tuple[List[str], int, int]: Changed file paths, insertions, deletions.
    """
    files: List[str] = []
    insertions = 0
    deletions = 0

    for line in stats.splitlines():
        if "|" in line:
            file_part = line.split("|", 1)[0].strip()
            if file_part:
                files.append(file_part)
        elif "insertion" in line or "deletion" in line:
            match = _INSERTIONS_RE.search(line)
            if match:
                insertions = int(match.group(1))
            match = _DELETIONS_RE.search(line)
            if match:
                deletions = int(match.group(1))

    return files, insertions, deletions


def get_commit_info(commit_hash: str, repo_path: str) -> CommitInfo:
    """
    Collect metadata and change statistics for one commit.

    Raises:
        UpstreamFetchError: Either git command failed.
    """
    header = _run_or_raise(
        [
            "git",
            "show",
            "-s",
            "--pretty=format:%s%n%an%n%ad%n%b",
            "--date=format:%Y-%m-%d %H:%M",
            commit_hash,
        ],
        repo_path,
    )
    lines = header.splitlines()
    message = lines[0] if len(lines) > 0 else ""
    author = lines[1] if len(lines) > 1 else ""
    date = lines[2] if len(lines) > 2 else ""

    stats = _run_or_raise(["git", "show", "--stat", "--format=", commit_hash], repo_path)
    files_changed, insertions, deletions = parse_git_stats(stats)

    return CommitInfo(
        hash=commit_hash,
        short_hash=commit_hash[:SHORT_HASH_LENGTH],
        message=message,
        author=author,
        date=date,
        files_changed=files_changed,
        insertions=insertions,
        deletions=deletions,
    )


def get_commit_diff(commit_hash: str, repo_path: str) -> str:
    """
    Raw unified diff of one commit against its parent, without the commit header.

    Raises:
        UpstreamFetchError: git show failed.
    """
    return _run_or_raise(["git", "show", "--format=", commit_hash], repo_path)
