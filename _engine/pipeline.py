from typing import List, Optional

from rich.markup import escape
from rich.table import Table

from _models.config import PipelineConfig
from _models.model import PipelineSummary, ProcessResult
from _engine.analysis.orchestrator import analyze_commit
from _engine.console import (
    console,
    log,
    SEPARATOR,
    LABEL_PROCESSING,
    LABEL_SUCCESS,
    LABEL_SKIPPED,
    LABEL_ERROR,
    LABEL_SUMMARY,
    LABEL_DONE,
)
from _engine.diff.formatter import format_diff_as_markdown, has_code_changes
from _engine.errors import AnalyzerError
from _engine.git.commits import get_commit_info, get_commit_diff, SHORT_HASH_LENGTH
from _engine.ollama.client import OllamaClient
from _engine.report.renderer import write_report

NO_CHANGES_REASON = "no code changes detected"


def process_commit(client: OllamaClient, commit_hash: str, config: PipelineConfig) -> ProcessResult:
    """
    Fetch, analyze and report a single commit.

    Failures never escape: every outcome is returned as a ProcessResult with
    status ``success``, ``skipped`` or ``error``.
    """
    short = commit_hash[:SHORT_HASH_LENGTH]
    try:
        commit_info = get_commit_info(commit_hash, config.repo_path)
        raw_diff = get_commit_diff(commit_hash, config.repo_path)

        console.print(f"[bold white]Message:[/bold white] {escape(commit_info.message)}")
        console.print(
            f"[magenta]Author:[/magenta] {escape(commit_info.author)} "
            f"[muted]on[/muted] {escape(commit_info.date)}"
        )
        console.print(
            f"[green]Changes:[/green] +{commit_info.insertions} "
            f"[red]-{commit_info.deletions}[/red] lines in "
            f"{len(commit_info.files_changed)} file(s)"
        )

        if not has_code_changes(raw_diff):
            return ProcessResult(status="skipped", commit=commit_hash, detail=NO_CHANGES_REASON)

        formatted_diff = format_diff_as_markdown(raw_diff)
        console.print(f"[muted]Diff size:[/muted] {len(formatted_diff)} characters")

        outcome = analyze_commit(client, commit_info.message, formatted_diff, config)
        output_path = write_report(config.output_dir, commit_info, outcome.text, formatted_diff)
    except AnalyzerError as e:
        return ProcessResult(status="error", commit=commit_hash, detail=f"Commit {short}: {e}", error_kind=e.kind)
    except OSError as e:
        return ProcessResult(status="error", commit=commit_hash, detail=f"Commit {short}: could not write report: {e}")

    return ProcessResult(status="success", commit=commit_hash, detail=output_path)


def run_pipeline(
    commit_hashes: List[str],
    config: PipelineConfig,
    client: Optional[OllamaClient] = None,
) -> PipelineSummary:
    """
    Process commits one after another, in the given order, and count the outcomes.

    Args:
        commit_hashes (List[str]): Full commit hashes to analyze.
        config (PipelineConfig): Run configuration.
        client (Optional[OllamaClient]): Generation client; one is created from
                                         ``config`` when omitted.

    Returns:
        PipelineSummary: Counters and the per-commit results.
    """
    client = client or OllamaClient(config)
    summary = PipelineSummary()
    total = len(commit_hashes)

    for index, commit_hash in enumerate(commit_hashes, 1):
        console.print()
        log(LABEL_PROCESSING, f"Commit {index}/{total}", "success")

        result = process_commit(client, commit_hash, config)
        summary.results.append(result)

        if result.status == "success":
            log(LABEL_SUCCESS, f"Analysis saved to '{result.detail}'", "success")
            summary.processed += 1
        elif result.status == "skipped":
            log(LABEL_SKIPPED, result.detail, "warning")
            summary.skipped += 1
        else:
            log(LABEL_ERROR, result.detail, "error")
            summary.errors += 1

    return summary


def print_summary(summary: PipelineSummary) -> None:
    """Print the end-of-run counters as a rich table."""
    console.print(f"\n{SEPARATOR}")
    log(LABEL_SUMMARY, style="info")

    summary_table = Table(title="Analysis Results")
    summary_table.add_column("Metric", style="cyan", justify="right")
    summary_table.add_column("Count", style="magenta", justify="left")
    summary_table.add_row("Processed", str(summary.processed), style="bold green")
    summary_table.add_row("Skipped", str(summary.skipped), style="bold yellow" if summary.skipped else "dim")
    summary_table.add_row("Errors", str(summary.errors), style="bold red" if summary.errors else "dim")
    console.print(summary_table)

    log(LABEL_DONE, "Analysis finished!", "info")
