from enum import Enum
from pydantic import BaseModel, Field
from typing import List, Optional


class ErrorKind(str, Enum):
    TRANSPORT_ERROR = "transport-error"
    BAD_STATUS = "bad-status"
    DECODE_ERROR = "decode-error"
    EMPTY_RESPONSE = "empty-response"
    GENERATION_FAILURE = "generation-failure"
    ALL_CHUNKS_FAILED = "all-chunks-failed"
    UPSTREAM_FETCH_FAILED = "upstream-fetch-failed"


class CommitInfo(BaseModel):
    hash: str
    short_hash: str
    message: str
    author: str
    date: str
    files_changed: List[str] = Field(default_factory=list)
    insertions: int = 0
    deletions: int = 0


class DiffChunk(BaseModel):
    content: str
    files: List[str]
    size: int


class GenerateRequest(BaseModel):
    model: str
    prompt: str
    stream: bool = False


class GenerateResponse(BaseModel):
    response: str


class AnalysisOutcome(BaseModel):
    text: str
    strategy: str  # "single" or "chunked"
    chunk_count: int = 1
    failed_chunks: List[int] = Field(default_factory=list)


class ProcessResult(BaseModel):
    status: str  # "success", "skipped" or "error"
    commit: str
    detail: str
    error_kind: Optional[ErrorKind] = None


class PipelineSummary(BaseModel):
    processed: int = 0
    skipped: int = 0
    errors: int = 0
    results: List[ProcessResult] = Field(default_factory=list)
