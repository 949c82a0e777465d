# Standard Library Imports
import sys
import argparse
import json
import os
from typing import Optional, Dict, Any, List

# Third-Party Library Imports
from pydantic import ValidationError
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text
from rich import print as rprint

# Internal Module Imports
from _data.ollama import DEFAULT_CONFIG_FILE, DEFAULT_COMMIT_COUNT
from _models.config import PipelineConfig
from _engine.console import console, log, SEPARATOR, LABEL_INFO, LABEL_REPO, LABEL_MODEL
from _engine.errors import UpstreamFetchError
from _engine.git.commits import get_recent_commit_hashes
from _engine.ollama.model import get_models, display_models, select_model, is_model_installed
from _engine.pipeline import run_pipeline, print_summary

# Command-line flags that map one-to-one onto PipelineConfig fields
CLI_CONFIG_FIELDS = {
    "repo": "repo_path",
    "model": "model",
    "base_url": "base_url",
    "max_diff_size": "max_diff_size",
    "chunk_size": "chunk_size",
    "retries": "max_retries",
    "retry_delay": "retry_delay",
    "timeout": "request_timeout",
    "output": "output_dir",
    "context": "project_context",
}


# --- Configuration File Management Functions ---


def load_config_file(path: str = DEFAULT_CONFIG_FILE) -> Dict[str, Any]:
    """
    Loads saved settings from the JSON configuration file.

    Returns:
        Dict[str, Any]: The stored settings, or an empty dict when the file is
                        missing or unreadable.
    """
    if not os.path.exists(path):
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError:
        console.print(f"[error]Error decoding JSON from config file: {path}. File might be corrupted.[/error]")
        return {}
    except OSError as e:
        console.print(f"[error]Unexpected error reading config file {path}: {e}[/error]")
        return {}

    if not isinstance(config, dict):
        console.print(f"[warning]Config file '{path}' does not contain a JSON object.[/warning]")
        return {}
    return config


def save_default_model(model_name: str, path: str = DEFAULT_CONFIG_FILE) -> bool:
    """
    Saves the given model name as the default in the configuration file,
    keeping any other settings already stored there.
    """
    config_data = load_config_file(path)
    config_data["model"] = model_name

    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(config_data, f, indent=4)
    except OSError as e:
        console.print(f"[error]Error saving default model to config file {path}: {e}[/error]")
        return False

    console.print(f"[success]✔[/success] Default model '[cyan]{model_name}[/cyan]' saved to [dim]{path}[/dim]")
    return True


def build_config(args: argparse.Namespace, file_values: Dict[str, Any]) -> PipelineConfig:
    """
    Merge defaults, the config file and command-line flags (highest priority).

    Raises:
        ValidationError: A value is missing its expected type or range.
    """
    values: Dict[str, Any] = dict(file_values)
    for arg_name, field_name in CLI_CONFIG_FIELDS.items():
        value = getattr(args, arg_name, None)
        if value is not None:
            values[field_name] = value
    if getattr(args, "strict_chunks", False):
        values["abort_on_chunk_failure"] = True
    return PipelineConfig(**values)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Analyze recent Git commits with an Ollama LLM and write one markdown report per commit."
    )
    parser.add_argument(
        "count",
        nargs="?",
        type=int,
        default=DEFAULT_COMMIT_COUNT,
        help="Number of most recent commits to analyze. Default: %(default)s",
    )
    parser.add_argument(
        "-c",
        "--commit",
        action="append",
        help="Specific commit hash to analyze (repeatable). Overrides COUNT.",
    )
    parser.add_argument("--repo", help="Path of the Git repository. Default: current directory")
    parser.add_argument("-m", "--model", help="Ollama model name to use for this run. Overrides default.")
    parser.add_argument("--base-url", dest="base_url", help="Ollama API base URL, e.g. http://localhost:11434/api")
    parser.add_argument("--output", help="Directory where report files are written. Default: current directory")
    parser.add_argument(
        "--max-diff-size",
        dest="max_diff_size",
        type=int,
        help="Largest formatted diff (characters) analyzed in a single request.",
    )
    parser.add_argument("--chunk-size", dest="chunk_size", type=int, help="Maximum chunk size (characters) for large diffs.")
    parser.add_argument("--retries", type=int, help="Attempts per Ollama request.")
    parser.add_argument("--retry-delay", dest="retry_delay", type=float, help="Seconds to wait between attempts.")
    parser.add_argument("--timeout", type=float, help="Ollama request timeout in seconds.")
    parser.add_argument("--context", help="Project context line added to every prompt.")
    parser.add_argument(
        "--strict-chunks",
        dest="strict_chunks",
        action="store_true",
        help="Abort a commit on the first failed chunk instead of continuing with a placeholder.",
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_FILE,
        help="JSON configuration file. Default: '%(default)s'",
    )
    parser.add_argument("--list-models", dest="list_models", action="store_true", help="List installed Ollama models and exit.")
    parser.add_argument(
        "--set-default-model",
        dest="set_default_model",
        action="store_true",
        help="Interactively select and save an Ollama model as the default.",
    )
    return parser


# --- Main Application Logic ---


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse arguments, resolve the configuration, list the commits and run the
    analysis pipeline over them. Returns the process exit status.
    """
    args = build_parser().parse_args(argv)

    rprint(
        Panel.fit(
            "[bold magenta]Commit Analyzer with Ollama[/bold magenta]\n"
            "[cyan]Technical reports for your Git history",
            title="[bold green]Welcome[/bold green]",
            border_style="green",
        )
    )

    try:
        config = build_config(args, load_config_file(args.config))
    except ValidationError as e:
        console.print(Panel(Text(str(e)), title="[bold red]Invalid configuration[/bold red]", border_style="red"))
        return 1

    if args.list_models:
        display_models(get_models(config))
        return 0

    if args.set_default_model:
        models = get_models(config)
        if not models:
            console.print("[error]No Ollama models found. Please ensure Ollama is running and models are downloaded.")
            return 1
        display_models(models)
        selected = select_model(models)
        if not selected:
            console.print("\n[warning]No model selected. Default model not changed.[/warning]")
            return 1
        return 0 if save_default_model(selected, args.config) else 1

    # Warn early when the model is missing; generation failures are still counted per commit
    models = get_models(config)
    if models and not is_model_installed(models, config.model):
        console.print(f"[warning]Model '{config.model}' is not installed on the Ollama server.[/warning]")

    if args.commit:
        commit_hashes = [c.strip() for c in args.commit if c.strip()]
    else:
        if args.count <= 0:
            console.print("[error]COUNT must be a positive number.[/error]")
            return 1
        try:
            commit_hashes = get_recent_commit_hashes(config.repo_path, args.count)
        except UpstreamFetchError as e:
            console.print(Panel(Text(str(e)), title="[bold red]Git Error[/bold red]", border_style="red"))
            return 1

    log(LABEL_INFO, f"Analyzing {len(commit_hashes)} commit(s)...", "info")
    log(LABEL_REPO, os.path.abspath(config.repo_path), "info")
    log(LABEL_MODEL, config.model, "warning")
    console.print(SEPARATOR)

    if not commit_hashes:
        console.print("[warning]No commits found. Nothing to analyze.[/warning]")
        return 0

    summary = run_pipeline(commit_hashes, config)
    print_summary(summary)
    return 0


def run() -> None:
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        # Handle Ctrl+C gracefully
        rprint("\n[bold yellow]✋ Operation cancelled by user.[/bold yellow]")
        sys.exit(0)
    except Exception as e:
        # Catch any other unexpected exceptions
        rprint(
            Panel(
                f"[bold red]An unexpected error occurred:[/bold red]\n[yellow]{escape(str(e))}[/yellow]",
                title="[bold red]Fatal Error[/bold red]",
                border_style="red",
            )
        )
        sys.exit(1)


# --- Entry Point ---
if __name__ == "__main__":
    run()
