from typing import List

from _models.config import PipelineConfig
from _models.model import AnalysisOutcome
from _engine.console import log, LABEL_CHUNK, LABEL_PROC, LABEL_ERROR
from _engine.diff.chunker import split_diff_into_chunks
from _engine.errors import AllChunksFailedError, EmptyResponseError, GenerationError
from _engine.ollama.client import OllamaClient, clean_ollama_response
from _engine.ollama.prompts import (
    SingleShotRequest,
    ChunkAnalysisRequest,
    ConsolidationRequest,
    build_prompt,
    chunk_error_placeholder,
)


def _generate_clean(client: OllamaClient, prompt: str) -> str:
    """Call the model and strip reasoning markup from the reply."""
    raw = client.generate(prompt)
    cleaned = clean_ollama_response(raw)
    if not cleaned:
        # Reply held nothing but reasoning markup
        raise GenerationError(1, EmptyResponseError("Response was empty after cleaning"))
    return cleaned


def analyze_large_diff(
    client: OllamaClient,
    message: str,
    formatted_diff: str,
    config: PipelineConfig,
) -> AnalysisOutcome:
    """
    Analyze an oversized diff chunk by chunk, then consolidate the partial
    analyses with one more generation call.

    A chunk whose call fails is replaced by an error placeholder and the loop
    moves on, unless ``config.abort_on_chunk_failure`` is set, in which case
    the failure propagates.

    Raises:
        AllChunksFailedError: No chunk produced a usable analysis.
        GenerationError: The consolidation call failed, or a chunk failed
            under the abort policy.
    """
    chunks = split_diff_into_chunks(formatted_diff, config.chunk_size)
    total = len(chunks)
    log(LABEL_CHUNK, f"Split into {total} chunks", "warning")

    analyses: List[str] = []
    failed: List[int] = []

    for index, chunk in enumerate(chunks, 1):
        files = ", ".join(chunk.files) if chunk.files else "continued"
        log(LABEL_PROC, f"Chunk {index}/{total} ({chunk.size} chars, files: {files})", "highlight")

        prompt = build_prompt(
            ChunkAnalysisRequest(message, chunk.content, index, total),
            config.project_context,
        )
        try:
            analyses.append(_generate_clean(client, prompt))
        except GenerationError as e:
            if config.abort_on_chunk_failure:
                raise
            log(LABEL_ERROR, f"Error in chunk {index}/{total}: {e} - continuing...", "warning")
            failed.append(index)
            analyses.append(chunk_error_placeholder(index, e))

    if len(failed) == total:
        raise AllChunksFailedError(total)

    prompt = build_prompt(ConsolidationRequest(message, analyses), config.project_context)
    final_analysis = _generate_clean(client, prompt)

    return AnalysisOutcome(
        text=final_analysis,
        strategy="chunked",
        chunk_count=total,
        failed_chunks=failed,
    )


def analyze_commit(
    client: OllamaClient,
    message: str,
    formatted_diff: str,
    config: PipelineConfig,
) -> AnalysisOutcome:
    """
    Produce the technical analysis of one commit.

    Diffs up to ``config.max_diff_size`` characters go to the model in a single
    prompt; larger ones take the chunked path.

    Args:
        client (OllamaClient): Generation client.
        message (str): First line of the commit message.
        formatted_diff (str): Markdown diff of the commit.
        config (PipelineConfig): Size thresholds and prompt context.

    Returns:
        AnalysisOutcome: The cleaned, non-empty analysis and how it was produced.
    """
    if len(formatted_diff) <= config.max_diff_size:
        prompt = build_prompt(SingleShotRequest(message, formatted_diff), config.project_context)
        return AnalysisOutcome(text=_generate_clean(client, prompt), strategy="single")

    log(LABEL_CHUNK, "Diff too large, splitting into chunks...", "warning")
    return analyze_large_diff(client, message, formatted_diff, config)
