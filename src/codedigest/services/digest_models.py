"""
Data models shared by the summary and tree services.

Contains the run-scoped context, per-file records and command results.
"""

import math
from dataclasses import dataclass, field
from pathlib import Path


def completion_percent(processed: int, total: int) -> int:
    """Percentage of processed files, rounded half up. An empty run is complete."""
    if total <= 0:
        return 100
    return math.floor(processed * 100 / total + 0.5)


@dataclass
class RunContext:
    """
    Mutable state of a single summary run.

    A fresh context is created for every run and passed explicitly to each
    step; nothing is carried over between runs.

    Attributes:
        total_files: Accepted files counted by the pre-scan pass
        processed_files: Files handled so far by the main pass
        last_folder: Top-level folder of the previously summarized file
        skipped_files: Relative paths of files that could not be read
    """

    total_files: int = 0
    processed_files: int = 0
    last_folder: str | None = None
    skipped_files: list[str] = field(default_factory=list)

    @property
    def percent(self) -> int:
        """Completion percentage, rounded half up."""
        return completion_percent(self.processed_files, self.total_files)


@dataclass
class SourceFile:
    """A file read and cleaned for the summary."""

    relative_path: str
    language: str
    top_level_folder: str
    raw_content: str
    cleaned_content: str


@dataclass
class SummaryResult:
    """Result of a summary run."""

    output_path: Path
    document: str
    total_files: int = 0
    processed_files: int = 0
    skipped_files: list[str] = field(default_factory=list)
    duration_seconds: float = 0.0


@dataclass
class TreeNode:
    """
    A file or directory in the rendered folder tree.

    Attributes:
        name: Base name
        relative_path: Path relative to the scan root
        is_dir: True for directories
        children: Child nodes, ordered by relative path
    """

    name: str
    relative_path: str
    is_dir: bool
    children: list["TreeNode"] = field(default_factory=list)


@dataclass
class TreeResult:
    """Result of a tree run."""

    output_path: Path
    document: str
    entry_count: int = 0
