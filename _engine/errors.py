from typing import Optional

from _models.model import ErrorKind


class AnalyzerError(Exception):
    """Base class for every failure the commit analyzer reports."""

    kind: ErrorKind = ErrorKind.GENERATION_FAILURE


# --- Single generation attempt failures (retried by the client) ---


class AttemptError(AnalyzerError):
    pass


class TransportError(AttemptError):
    kind = ErrorKind.TRANSPORT_ERROR


class BadStatusError(AttemptError):
    kind = ErrorKind.BAD_STATUS

    def __init__(self, status_code: int, detail: str = ""):
        self.status_code = status_code
        self.detail = detail
        message = f"Ollama API error: HTTP {status_code}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class ResponseDecodeError(AttemptError):
    kind = ErrorKind.DECODE_ERROR


class EmptyResponseError(AttemptError):
    kind = ErrorKind.EMPTY_RESPONSE


# --- Fatal errors ---


class GenerationError(AnalyzerError):
    """Raised once a generation call has used up all of its attempts."""

    kind = ErrorKind.GENERATION_FAILURE

    def __init__(self, attempts: int, last_error: Optional[AttemptError] = None):
        self.attempts = attempts
        self.last_error = last_error
        reason = str(last_error) if last_error else "unknown error"
        super().__init__(f"Generation failed after {attempts} attempt(s): {reason}")


class AllChunksFailedError(AnalyzerError):
    kind = ErrorKind.ALL_CHUNKS_FAILED

    def __init__(self, total: int):
        self.total = total
        super().__init__(f"All {total} chunk(s) failed to analyze")


class UpstreamFetchError(AnalyzerError):
    kind = ErrorKind.UPSTREAM_FETCH_FAILED
