from typing import Iterator, List

from _models.model import DiffChunk
from .formatter import parse_file_heading


def _iter_lines(text: str) -> Iterator[str]:
    """Yield the lines of text, each keeping its trailing newline."""
    start = 0
    while start < len(text):
        end = text.find("\n", start)
        if end == -1:
            yield text[start:]
            return
        yield text[start:end + 1]
        start = end + 1


def split_diff_into_chunks(diff: str, max_chunk_size: int) -> List[DiffChunk]:
    """
    Split a formatted diff into ordered chunks of at most ``max_chunk_size``
    characters, breaking only between lines.

    Lines keep their line endings, so joining every chunk's content gives back
    the input unchanged. A line longer than the bound still goes into a chunk
    whole.

    Args:
        diff (str): Markdown produced by ``format_diff_as_markdown``.
        max_chunk_size (int): Upper bound of a chunk, in characters.

    Returns:
        List[DiffChunk]: Chunks in diff order, each listing the files whose
        heading appears inside it.
    """
    chunks: List[DiffChunk] = []
    current_lines: List[str] = []
    current_files: List[str] = []
    current_size = 0

    for line in _iter_lines(diff):
        line_size = len(line)

        if current_size + line_size > max_chunk_size and current_lines:
            chunks.append(
                DiffChunk(
                    content="".join(current_lines),
                    files=current_files,
                    size=current_size,
                )
            )
            current_lines = []
            current_files = []
            current_size = 0

        file_path = parse_file_heading(line)
        if file_path and file_path not in current_files:
            current_files.append(file_path)

        current_lines.append(line)
        current_size += line_size

    if current_lines:
        chunks.append(
            DiffChunk(
                content="".join(current_lines),
                files=current_files,
                size=current_size,
            )
        )

    return chunks
