from typing import List, NamedTuple, Optional, Union

from _data.prompts import (
    ANALYSIS_PROMPT,
    CHUNK_ANALYSIS_PROMPT,
    SUMMARY_PROMPT,
    CONTEXT_LINE,
    CHUNK_LABEL,
    CHUNK_ERROR_PLACEHOLDER,
)


# --- Prompt request variants ---


class SingleShotRequest(NamedTuple):
    message: str
    diff: str


class ChunkAnalysisRequest(NamedTuple):
    message: str
    diff: str
    index: int  # 1-based
    total: int


class ConsolidationRequest(NamedTuple):
    message: str
    analyses: List[str]


PromptRequest = Union[SingleShotRequest, ChunkAnalysisRequest, ConsolidationRequest]


def chunk_error_placeholder(index: int, error: Exception) -> str:
    """Analysis text that stands in for a chunk whose generation failed."""
    return CHUNK_ERROR_PLACEHOLDER.format(index=index, error=error)


def combine_chunk_analyses(analyses: List[str]) -> str:
    return "\n\n".join(
        CHUNK_LABEL.format(index=i, analysis=analysis)
        for i, analysis in enumerate(analyses, 1)
    )


def build_prompt(request: PromptRequest, project_context: Optional[str] = None) -> str:
    """
    Render the prompt for one generation call.

    Args:
        request (PromptRequest): Which prompt to build, with its data.
        project_context (Optional[str]): Extra context line shared by every prompt.

    Returns:
        str: The complete prompt text.
    """
    context = CONTEXT_LINE.format(project_context=project_context) if project_context else ""

    if isinstance(request, SingleShotRequest):
        return ANALYSIS_PROMPT.format(
            context=context, message=request.message, diff=request.diff
        )
    if isinstance(request, ChunkAnalysisRequest):
        return CHUNK_ANALYSIS_PROMPT.format(
            context=context,
            index=request.index,
            total=request.total,
            message=request.message,
            diff=request.diff,
        )
    if isinstance(request, ConsolidationRequest):
        return SUMMARY_PROMPT.format(
            context=context,
            message=request.message,
            analyses=combine_chunk_analyses(request.analyses),
        )
    raise TypeError(f"Unsupported prompt request: {type(request).__name__}")
