from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from _data.ollama import (
    BASE_URL,
    DEFAULT_MODEL,
    MAX_DIFF_SIZE,
    CHUNK_SIZE,
    MAX_RETRIES,
    RETRY_DELAY_SECONDS,
    OLLAMA_TIMEOUT_SECONDS,
)


class PipelineConfig(BaseModel):
    """
    Process-wide settings for one run. Built once at startup and never mutated.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    repo_path: str = "."
    model: str = DEFAULT_MODEL
    base_url: str = BASE_URL
    max_diff_size: int = Field(default=MAX_DIFF_SIZE, gt=0)
    chunk_size: int = Field(default=CHUNK_SIZE, gt=0)
    max_retries: int = Field(default=MAX_RETRIES, gt=0)
    retry_delay: float = Field(default=RETRY_DELAY_SECONDS, ge=0)
    request_timeout: float = Field(default=OLLAMA_TIMEOUT_SECONDS, gt=0)
    output_dir: str = "."
    project_context: Optional[str] = None
    abort_on_chunk_failure: bool = False

    @property
    def generate_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/generate"

    @property
    def tags_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/tags"
