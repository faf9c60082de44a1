"""
UI components module for the codedigest CLI.

Provides styled terminal output using Rich for results, warnings and errors.
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from codedigest.services.digest_models import SummaryResult, TreeResult


def render_summary_result(result: SummaryResult, console: Console) -> None:
    """
    Render the outcome of a summary run as a green panel.

    Args:
        result: Result returned by SummaryAssembler.generate().
        console: Rich Console instance for output.
    """
    summary = Table.grid(padding=1)
    summary.add_column(style="bold")
    summary.add_column()
    summary.add_row("Total Files:", str(result.total_files))
    summary.add_row("Processed:", str(result.processed_files))
    summary.add_row("Duration:", f"{result.duration_seconds:.2f}s")
    summary.add_row("Output:", str(result.output_path))

    if result.skipped_files:
        summary.add_row("Skipped Files:", f"[red]{len(result.skipped_files)}[/red]")

    console.print(
        Panel(
            summary,
            title="[bold green]Summary Complete[/bold green]",
            border_style="green",
            expand=False,
        )
    )

    if result.skipped_files:
        console.print("\n[bold red]Skipped Files:[/bold red]")
        for f in result.skipped_files[:5]:
            console.print(f"  - {f}")
        if len(result.skipped_files) > 5:
            console.print(f"  ... and {len(result.skipped_files) - 5} more")


def render_tree_result(result: TreeResult, console: Console) -> None:
    """Render the outcome of a tree run."""
    render_success(
        f"Folder + file structure ({result.entry_count} entries) saved to: {result.output_path}",
        console,
    )


def render_error(message: str, console: Console) -> None:
    """
    Render an error message in a visually distinct red panel.

    Args:
        message: Error message to display.
        console: Rich Console instance for output.
    """
    error_text = Text()
    error_text.append("Error: ", style="bold red")
    error_text.append(message, style="red")

    console.print(
        Panel(
            error_text,
            border_style="red",
            title="[bold red]Error[/bold red]",
            expand=False,
        )
    )


def render_success(message: str, console: Console) -> None:
    """
    Render a success message in a green panel.

    Args:
        message: Success message to display.
        console: Rich Console instance for output.
    """
    console.print(
        Panel(
            Text(message, style="green"),
            border_style="green",
            expand=False,
        )
    )
