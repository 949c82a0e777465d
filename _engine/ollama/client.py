import time
from typing import Callable, Optional

import requests
from pydantic import ValidationError

from _data.ollama import THINK_DELIMITERS
from _models.config import PipelineConfig
from _models.model import GenerateRequest, GenerateResponse
from _engine.console import console, log, LABEL_OLLAMA
from _engine.errors import (
    AttemptError,
    BadStatusError,
    EmptyResponseError,
    GenerationError,
    ResponseDecodeError,
    TransportError,
)


def clean_ollama_response(response: str) -> str:
    """
    Strip reasoning markup from a model reply.

    A closing delimiter drops everything up to and including it; an opening
    delimiter with no close drops everything from it onward. Both the
    ``think`` and ``thinking`` pairs are checked.

    Args:
        response (str): Raw text returned by Ollama.

    Returns:
        str: The cleaned text, trimmed on both ends.
    """
    cleaned = response

    for delimiter in THINK_DELIMITERS:
        position = cleaned.find(delimiter)
        if position == -1:
            continue
        if delimiter.startswith("</"):
            cleaned = cleaned[position + len(delimiter):].lstrip()
        else:
            cleaned = cleaned[:position].rstrip()

    return cleaned.strip()


class OllamaClient:
    """Blocking client for Ollama's ``/api/generate`` endpoint with retries."""

    def __init__(
        self,
        config: PipelineConfig,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.session = session or requests.Session()
        self._sleep = sleep

    def _attempt(self, payload: dict) -> str:
        """Run one request; raise an AttemptError subclass on any failure."""
        try:
            with console.status(
                f"[bold blue]Thinking ({self.config.model})...", spinner="moon"
            ):
                response = self.session.post(
                    self.config.generate_url,
                    json=payload,
                    timeout=self.config.request_timeout,
                )
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Connection error: {e}") from e

        if not 200 <= response.status_code < 300:
            raise BadStatusError(response.status_code, response.reason or "")

        try:
            result = GenerateResponse.model_validate_json(response.text)
        except ValidationError as e:
            raise ResponseDecodeError(
                f"Could not decode JSON response: {e.error_count()} validation error(s)"
            ) from e

        if not result.response.strip():
            raise EmptyResponseError("Empty response from Ollama")

        return result.response

    def generate(self, prompt: str) -> str:
        """
        Send a prompt and return the raw generated text.

        Every failure (connection, HTTP status, malformed body, blank reply)
        counts as one attempt. Between attempts the client waits
        ``retry_delay`` seconds.

        Args:
            prompt (str): Fully assembled prompt.

        Returns:
            str: The ``response`` field of the reply, unmodified.

        Raises:
            GenerationError: When all ``max_retries`` attempts failed.
        """
        payload = GenerateRequest(model=self.config.model, prompt=prompt).model_dump()
        max_attempts = self.config.max_retries
        last_error: Optional[AttemptError] = None

        for attempt in range(1, max_attempts + 1):
            log(LABEL_OLLAMA, f"Sending request... (attempt {attempt}/{max_attempts})", "info")
            try:
                text = self._attempt(payload)
            except AttemptError as e:
                last_error = e
                if attempt < max_attempts:
                    log(
                        LABEL_OLLAMA,
                        f"{e} - retrying in {self.config.retry_delay:g}s...",
                        "warning",
                    )
                    self._sleep(self.config.retry_delay)
                continue

            log(LABEL_OLLAMA, "Response received", "success")
            return text

        raise GenerationError(max_attempts, last_error)
