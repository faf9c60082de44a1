"""
CLI for codedigest.

Provides the summary, tree and config commands.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.syntax import Syntax

from codedigest.cli.progress import ConsoleProgressReporter
from codedigest.cli.ui import render_error, render_summary_result, render_tree_result
from codedigest.core.config import DigestConfig, LoggingConfig, load_config
from codedigest.core.ignore_rules import IgnoreMatchMode
from codedigest.services import SummaryAssembler, TreeRenderer

# .env values become CODEDIGEST_* overrides
load_dotenv()

# Initialize Rich Console
console = Console()

app = typer.Typer(
    name="codedigest",
    help="Compact Markdown snapshots of a codebase",
    add_completion=False,
)

TARGETS_HELP = "Directories to scan, absolute or relative to the current directory (default: current directory)"


def configure_logging(config: LoggingConfig, verbose: bool = False) -> None:
    """Configure the root logger from the logging config section."""
    level = logging.DEBUG if verbose else getattr(logging, config.level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format=config.format, force=True)


def _load(config_path: Optional[Path], verbose: bool) -> DigestConfig:
    cfg = load_config(config_path)
    configure_logging(cfg.logging, verbose)
    return cfg


@app.command()
def summary(
    targets: Optional[list[str]] = typer.Argument(None, help=TARGETS_HELP),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (.yaml, .yml or .json)"
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o", help="Directory the summary is written to"
    ),
    ignore_mode: Optional[str] = typer.Option(
        None, "--ignore-mode", help="How ignore rules match: substring or basename"
    ),
    keep_whitespace: bool = typer.Option(
        False, "--keep-whitespace", help="Keep whitespace inside lines (blank lines are still dropped)"
    ),
    keep_comments: bool = typer.Option(False, "--keep-comments", help="Do not strip comments"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Concatenate cleaned source files into one Markdown summary."""
    try:
        cfg = _load(config_path, verbose)
        if output_dir is not None:
            cfg.output.directory = str(output_dir)
        if ignore_mode is not None:
            cfg.summary.ignore_mode = IgnoreMatchMode.parse(ignore_mode).value
        if keep_whitespace:
            cfg.summary.collapse_whitespace = False
        if keep_comments:
            cfg.summary.strip_comments = False

        with ConsoleProgressReporter(console) as reporter:
            assembler = SummaryAssembler(config=cfg, progress_callback=reporter)
            result = assembler.generate(Path.cwd(), targets)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    render_summary_result(result, console)


@app.command()
def tree(
    targets: Optional[list[str]] = typer.Argument(None, help=TARGETS_HELP),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (.yaml, .yml or .json)"
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o", help="Directory the tree is written to"
    ),
    depth: Optional[int] = typer.Option(
        None, "--depth", "-d", min=0, help="Maximum depth to render (default from config: 2)"
    ),
    full: bool = typer.Option(False, "--full", help="Render the whole tree, ignoring --depth"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Render a depth-limited tree of files and folders."""
    try:
        cfg = _load(config_path, verbose)
        if output_dir is not None:
            cfg.output.directory = str(output_dir)
        if full:
            cfg.tree.max_depth = None
        elif depth is not None:
            cfg.tree.max_depth = depth

        result = TreeRenderer(config=cfg).generate(Path.cwd(), targets)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    render_tree_result(result, console)


@app.command("config")
def show_config(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (.yaml, .yml or .json)"
    ),
):
    """Print the effective configuration as YAML."""
    try:
        cfg = load_config(config_path)
    except Exception as e:
        render_error(str(e), console)
        raise typer.Exit(1)

    console.print(Syntax(cfg.to_yaml(), "yaml"))


if __name__ == "__main__":
    app()
