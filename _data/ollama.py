import os

BASE_URL: str = "http://localhost:11434/api"

DEFAULT_MODEL: str = "deepseek-r1:8b"

# Formatted diffs above this many characters are analyzed chunk by chunk
MAX_DIFF_SIZE: int = 8000
CHUNK_SIZE: int = 6000

MAX_RETRIES: int = 3
RETRY_DELAY_SECONDS: float = 1.0
OLLAMA_TIMEOUT_SECONDS: float = 600.0

DEFAULT_COMMIT_COUNT: int = 10

DEFAULT_CONFIG_DIR: str = "_data"
DEFAULT_CONFIG_FILE: str = os.path.join(DEFAULT_CONFIG_DIR, "default.json")

# Reasoning markup emitted by some models, checked in this order
THINK_DELIMITERS = ("</think>", "<think>", "</thinking>", "<thinking>")
