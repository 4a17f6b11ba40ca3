"""AI Refactor Tool - codebase analysis and AI-ready task prompts.

Usage:
    ai-refactor analyze <directory> [--ignore <pattern>]...
    ai-refactor work <analysis-dir> [--task <id>]
    ai-refactor status <analysis-dir>
"""

from __future__ import annotations

from datetime import datetime

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .errors import AnalysisError
from .logging import configure_logging
from .pipeline import load_backlog, load_context, run_analysis, task_prompt

console = Console()


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """AI Refactor Tool - analyze a codebase and generate AI-ready refactoring tasks.

    Everything runs offline. Prompts are printed for you to paste into the
    assistant of your choice.
    """
    configure_logging(verbose=verbose)


@cli.command()
@click.argument("directory")
@click.option("--ignore", "-i", "ignore", multiple=True, help="Additional name fragment to ignore (repeatable)")
def analyze(directory: str, ignore: tuple[str, ...]):
    """Analyze DIRECTORY and write results to DIRECTORY/ai-analysis.

    Examples:

        ai-refactor analyze .

        ai-refactor analyze ./webapp -i coverage -i .cache
    """
    try:
        run = run_analysis(directory, ignore_patterns=ignore)
    except AnalysisError as e:
        raise click.ClickException(str(e))

    summary = run.context.summary()
    frameworks = ", ".join(summary["frameworks"]) or "None"
    console.print(Panel.fit(
        f"[bold green]Analysis complete![/] Results saved in: {escape(str(run.analysis_dir))}\n"
        f"Found {summary['fileCount']} files with {summary['linesOfCode']} lines of code\n"
        f"Detected frameworks: {escape(frameworks)}\n"
        f"Tasks generated: {len(run.backlog.tasks)}",
        border_style="green",
    ))


@cli.command()
@click.argument("analysis_dir")
@click.option("--task", "-t", "task_id", default=None, help="Generate the prompt for a specific task")
def work(analysis_dir: str, task_id: str | None):
    """List pending tasks in ANALYSIS_DIR, or print one task's prompt."""
    try:
        if task_id:
            click.echo(task_prompt(analysis_dir, task_id), nl=False)
            return
        backlog = load_backlog(analysis_dir)
    except AnalysisError as e:
        raise click.ClickException(str(e))

    pending = backlog.pending()
    if not pending:
        console.print("[green]All tasks completed![/]")
        return

    console.print()
    console.print("[bold]--- PENDING TASKS ---[/]")
    for task in pending:
        console.print(
            f"[cyan]{escape(f'[{task.id}]')}[/] {escape(task.title)} "
            f"({task.priority.value}) - {task.estimated_effort.value}"
        )
        console.print(f"    {escape(task.description)}")
        console.print(f"    Tags: {escape(', '.join(task.tags) or 'none')}")
        console.print()
    console.print("Use --task <ID> to generate the prompt for a specific task")


@cli.command()
@click.argument("analysis_dir")
def status(analysis_dir: str):
    """Show project metrics from the last analysis in ANALYSIS_DIR."""
    try:
        context = load_context(analysis_dir)
    except AnalysisError as e:
        raise click.ClickException(str(e))
    if context is None:
        console.print("[yellow]No analysis found. Run analyze command first.[/]")
        return

    summary = context.get("summary", {})
    table = Table(title="Project Status", show_header=False, border_style="dim")
    table.add_column("Key", style="bold")
    table.add_column("Value")

    table.add_row("Files", str(summary.get("fileCount", 0)))
    table.add_row("Lines of Code", str(summary.get("linesOfCode", 0)))
    table.add_row("Complexity", str(summary.get("complexity", 0)))
    table.add_row("Frameworks", escape(", ".join(summary.get("frameworks", [])) or "None"))
    table.add_row("Has Tests", "Yes" if summary.get("hasTests") else "No")
    table.add_row("Last Analysis", _format_timestamp(context.get("timestamp", "")))

    console.print(table)


def _format_timestamp(value: str) -> str:
    try:
        return datetime.fromisoformat(value).astimezone().strftime("%Y-%m-%d %H:%M:%S")
    except ValueError:
        return value or "unknown"


if __name__ == "__main__":
    cli()
