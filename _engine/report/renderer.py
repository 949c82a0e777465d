import os
import re
from datetime import datetime
from typing import Optional

from _models.model import CommitInfo

FILENAME_MESSAGE_LENGTH = 40

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_-]")

REPORT_TEMPLATE = """# Commit Analysis: {title}

## Commit Information

- **Full Hash:** `{hash}`
- **Short Hash:** `{short_hash}`
- **Author:** {author}
- **Commit Date:** {date}
- **Files Changed:** {files_changed}
- **Lines Added:** {insertions}
- **Lines Removed:** {deletions}

---

## Technical Analysis

{analysis}

---

## Change Details

{diff}

---

*Report generated at: {generated_at}*"""


def generate_final_document(
    commit_info: CommitInfo,
    analysis: str,
    diff: str,
    now: Optional[datetime] = None,
) -> str:
    """
    Render the markdown report for one analyzed commit.

    Args:
        commit_info (CommitInfo): Commit metadata.
        analysis (str): Cleaned analysis text.
        diff (str): The formatted diff that was analyzed.
        now (Optional[datetime]): Generation timestamp, defaults to the current time.

    Returns:
        str: The report document.
    """
    now = now or datetime.now()
    title_lines = commit_info.message.splitlines()
    title = title_lines[0] if title_lines and title_lines[0].strip() else "Untitled"

    return REPORT_TEMPLATE.format(
        title=title,
        hash=commit_info.hash,
        short_hash=commit_info.short_hash,
        author=commit_info.author,
        date=commit_info.date,
        files_changed=len(commit_info.files_changed),
        insertions=commit_info.insertions,
        deletions=commit_info.deletions,
        analysis=analysis,
        diff=diff,
        generated_at=now.strftime("%Y-%m-%d %H:%M:%S"),
    )


def generate_filename(message: str, now: Optional[datetime] = None) -> str:
    """
    Build a filesystem-safe report name such as
    ``commit_20240101_120000_Fix_login_redirect.md``.
    """
    now = now or datetime.now()
    date_prefix = now.strftime("%Y%m%d_%H%M%S")

    lines = message.splitlines()
    first_line = lines[0] if lines else "commit"
    safe_message = _UNSAFE_FILENAME_CHARS.sub("_", first_line[:FILENAME_MESSAGE_LENGTH]).strip("_")

    if not safe_message:
        return f"commit_{date_prefix}_untitled.md"
    return f"commit_{date_prefix}_{safe_message}.md"


def write_report(
    output_dir: str,
    commit_info: CommitInfo,
    analysis: str,
    diff: str,
    now: Optional[datetime] = None,
) -> str:
    """
    Render and save the report, creating ``output_dir`` if needed.

    Returns:
        str: Path of the written file.

    Raises:
        OSError: The directory or file could not be written.
    """
    now = now or datetime.now()
    os.makedirs(output_dir, exist_ok=True)
    output_path = os.path.join(output_dir, generate_filename(commit_info.message, now))

    with open(output_path, "w", encoding="utf-8") as f:
        f.write(generate_final_document(commit_info, analysis, diff, now))

    return output_path
