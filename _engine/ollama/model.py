from typing import List, Optional

import requests
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from _models.config import PipelineConfig
from _engine.console import console


def get_models(config: PipelineConfig) -> List[dict]:
    """Get all models installed on the Ollama server"""
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]Loading models..."),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task("", total=None)
            response = requests.get(config.tags_url, timeout=config.request_timeout)

        if response.status_code == 200:
            return response.json().get("models", [])
        console.print(f"[error]Error listing models: HTTP {response.status_code}")
        return []
    except requests.exceptions.RequestException:
        console.print("[error]Unable to connect to Ollama server")
        console.print(f"[warning]Please check if Ollama is running at {config.base_url}")
        return []
    except ValueError:
        console.print("[error]Ollama returned an unreadable model list")
        return []


def is_model_installed(models: List[dict], model_name: str) -> bool:
    names = {m.get("name") for m in models} | {m.get("model") for m in models}
    if model_name in names:
        return True
    # "llama3" is served as "llama3:latest"
    return ":" not in model_name and f"{model_name}:latest" in names


def display_models(models: List[dict]) -> None:
    """Display models in table format"""
    if not models:
        console.print(
            Panel(
                "[italic yellow]No models installed on the system",
                title="[bold red]Warning",
                border_style="red",
            )
        )
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("No.", style="dim", width=6, justify="center")
    table.add_column("Model Name", style="cyan", min_width=20)
    table.add_column("Size", style="green", justify="right")
    table.add_column("Family", style="yellow")

    for i, model in enumerate(models, 1):
        name = model.get("name", "")
        size = f"{model.get('size', 0) / 1_000_000_000:.2f} GB"
        family = model.get("details", {}).get("family", "")
        table.add_row(str(i), name, size, family)

    console.print(
        Panel(table, title="[bold cyan]Installed Models", border_style="cyan")
    )


def select_model(models: List[dict]) -> Optional[str]:
    """Let the user select a model"""
    if not models:
        return None

    while True:
        console.print("\n[bold yellow]Please select a model (enter number or 'q' to quit):")
        choice = console.input("[bold cyan]>>> ").strip()

        if choice.lower() == "q":
            return None

        try:
            index = int(choice) - 1
        except ValueError:
            console.print("[error]Please enter a valid number")
            continue

        if 0 <= index < len(models):
            return models[index]["name"]
        console.print("[error]Invalid number")
