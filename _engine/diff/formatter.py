import re
from typing import List, NamedTuple, Union

FILE_HEADING_PREFIX = "### File: "
FENCE_OPEN = "\n```diff\n"
FENCE_CLOSE = "```\n\n"

_FILE_HEADER_RE = re.compile(r"^diff --git a/(.*) b/")
_HUNK_HEADER_RE = re.compile(r"^(@@ .* @@)(.*)")


# --- Line variants ---


class FileHeader(NamedTuple):
    path: str


class HunkHeader(NamedTuple):
    context: str


class ContentLine(NamedTuple):
    text: str


class OtherLine(NamedTuple):
    text: str


DiffLine = Union[FileHeader, HunkHeader, ContentLine, OtherLine]


def classify_line(line: str) -> DiffLine:
    """Tag one raw unified-diff line with its role."""
    match = _FILE_HEADER_RE.match(line)
    if match:
        return FileHeader(match.group(1))

    match = _HUNK_HEADER_RE.match(line)
    if match:
        return HunkHeader(match.group(2).strip())

    if line.startswith(("+", "-", " ")):
        return ContentLine(line)

    return OtherLine(line)


def parse_file_heading(line: str) -> Union[str, None]:
    """
    Return the path of a ``### File: <path>`` heading line, or None for any
    other line of a formatted diff.
    """
    line = line.rstrip("\r\n")
    if not line.startswith(FILE_HEADING_PREFIX):
        return None
    path = line[len(FILE_HEADING_PREFIX):].strip()
    return path or None


def has_code_changes(raw_diff: str) -> bool:
    """True when at least one line of the raw diff adds or removes something."""
    return any(line.startswith(("+", "-")) for line in raw_diff.split("\n"))


def format_diff_as_markdown(diff_text: str) -> str:
    """
    Convert a raw unified diff into markdown with one heading per file and
    fenced ``diff`` blocks around the changed and context lines.

    Hunk headers split blocks but add no heading. Metadata lines (index, mode,
    rename, "No newline at end of file") are dropped.

    Args:
        diff_text (str): Output of ``git show`` / ``git diff``.

    Returns:
        str: The formatted markdown. Empty when nothing in the input is a diff line.
    """
    output: List[str] = []
    in_block = False
    current_file = ""

    for line in diff_text.split("\n"):
        tagged = classify_line(line.rstrip("\r"))

        if isinstance(tagged, FileHeader):
            if in_block:
                output.append(FENCE_CLOSE)
                in_block = False
            if tagged.path != current_file:
                current_file = tagged.path
                output.append(f"{FILE_HEADING_PREFIX}{tagged.path}\n")
        elif isinstance(tagged, HunkHeader):
            if in_block:
                output.append(FENCE_CLOSE)
                in_block = False
        elif isinstance(tagged, ContentLine):
            if not in_block:
                output.append(FENCE_OPEN)
                in_block = True
            output.append(f"{tagged.text}\n")

    if in_block:
        output.append(FENCE_CLOSE)

    return "".join(output)
