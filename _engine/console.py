from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

# Custom theme for consistent styling
custom_theme = Theme(
    {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "bold red",
        "highlight": "magenta",
        "muted": "bright_black",
    }
)

# Shared console instance for every module
console = Console(theme=custom_theme)

# --- Log labels ---
LABEL_INFO = "INFO"
LABEL_REPO = "REPO"
LABEL_MODEL = "MODEL"
LABEL_PROCESSING = "PROCESSING"
LABEL_SUCCESS = "SUCCESS"
LABEL_SKIPPED = "SKIPPED"
LABEL_ERROR = "ERROR"
LABEL_SUMMARY = "SUMMARY"
LABEL_DONE = "DONE"
LABEL_CHUNK = "CHUNK"
LABEL_PROC = "PROC"
LABEL_OLLAMA = "OLLAMA"

SEPARATOR = "─" * 60


def log(label: str, message: str = "", style: str = "info") -> None:
    """
    Print a labelled log line such as ``[OLLAMA] Response received``.

    Args:
        label (str): Short upper-case tag shown in brackets.
        message (str): Plain text; rich markup in it is escaped.
        style (str): Theme style used for the label.
    """
    console.print(f"[{style}]\\[{label}][/{style}] {escape(message)}")
