"""
Summary Assembler for codedigest.

Coordinates the summary workflow: pre-scan count, file reading, comment
stripping, whitespace normalization and the final document write.
"""

import logging
import time
from pathlib import Path
from typing import Callable, Iterator, Optional, Sequence

from codedigest.core.comment_stripper import CommentStripper
from codedigest.core.config import DigestConfig
from codedigest.core.file_scanner import (
    FileScanner,
    FileScannerInterface,
    LanguageRegistry,
    ScannedFile,
    get_default_registry,
)
from codedigest.core.path_utils import atomic_write_text, resolve_output_dir, resolve_targets
from codedigest.core.whitespace import normalize_whitespace
from codedigest.services.digest_models import RunContext, SourceFile, SummaryResult

logger = logging.getLogger(__name__)


def render_file_block(relative_path: str, language: str, content: str) -> str:
    """Render one file as its path followed by a fenced code block."""
    return f"{relative_path}:\n```{language}\n{content}\n```\n\n"


def render_folder_banner(folder: str) -> str:
    """Render the line announcing that a top-level folder is finished."""
    return f"\n---\n\nAfter finishing all code summary of {folder}\n"


def build_summary_document(files: Sequence[SourceFile], context: RunContext | None = None) -> str:
    """
    Concatenate file blocks, inserting a banner whenever the folder changes.

    Files are taken in the order given; they are not grouped or sorted.

    Args:
        files: Cleaned files in traversal order
        context: Run context whose last_folder is updated (a new one if None)

    Returns:
        The summary document
    """
    context = context or RunContext()
    return "".join(_append_file(context, source) for source in files)


def _append_file(context: RunContext, source: SourceFile) -> str:
    """Render a file block, preceded by a banner when the top-level folder changes."""
    banner = ""
    if source.top_level_folder != context.last_folder:
        if context.last_folder is not None:
            banner = render_folder_banner(context.last_folder)
        context.last_folder = source.top_level_folder
    return banner + render_file_block(source.relative_path, source.language, source.cleaned_content)


class SummaryAssembler:
    """
    Service producing the code summary document.

    Walks every target twice: once to count accepted files and once to read,
    clean and append them. The document is written once, after the main
    pass, whatever the counts turned out to be.
    """

    def __init__(
        self,
        config: Optional[DigestConfig] = None,
        file_scanner: Optional[FileScannerInterface] = None,
        comment_stripper: Optional[CommentStripper] = None,
        progress_callback: Optional[Callable[[int, int, str], None]] = None,
    ):
        """
        Initialize the summary assembler.

        Args:
            config: Configuration (default: DigestConfig())
            file_scanner: Scanner applying the filter predicate (default:
                          FileScanner built from the summary config)
            comment_stripper: Comment stripper (default: CommentStripper())
            progress_callback: Optional callback(current, total, message)
        """
        self._config = config or DigestConfig()
        self._file_scanner = file_scanner or FileScanner(
            language_registry=self._load_registry(),
            ignore_rules=self._config.summary.ignore_rules(),
        )
        self._comment_stripper = comment_stripper or CommentStripper()
        self._progress_callback = progress_callback

    def _load_registry(self) -> LanguageRegistry:
        """Use the configured languages file, or the packaged defaults."""
        languages_file = self._config.summary.languages_file
        if languages_file:
            return LanguageRegistry.from_yaml(languages_file)
        return get_default_registry()

    def _report_progress(self, current: int, total: int, message: str) -> None:
        """Report progress if callback is set."""
        if self._progress_callback:
            self._progress_callback(current, total, message)
        logger.debug(f"Progress: {current}/{total} - {message}")

    def _iter_accepted(self, targets: list[Path], root: Path) -> Iterator[ScannedFile]:
        for target in targets:
            yield from self._file_scanner.scan(target, scan_root=root)

    def generate(
        self, root: Path, targets: Optional[Sequence[str | Path]] = None
    ) -> SummaryResult:
        """
        Summarize the targets and write the document.

        Args:
            root: Scan root; relative paths and folder banners are based on it
            targets: Directories to walk (default: the root itself)

        Returns:
            SummaryResult with the output path, document and counters

        Raises:
            OSError: If the document cannot be written
        """
        start_time = time.time()
        root = Path(root).resolve()
        resolved = resolve_targets(root, targets)
        context = RunContext()

        self._report_progress(0, 0, "Starting scan...")
        context.total_files = sum(1 for _ in self._iter_accepted(resolved, root))
        logger.info(f"Total files to process: {context.total_files}")
        self._report_progress(0, context.total_files, f"Total files to process: {context.total_files}")

        parts: list[str] = []
        for scanned in self._iter_accepted(resolved, root):
            source = self._process_file(scanned, context)
            if source is not None:
                parts.append(_append_file(context, source))

            context.processed_files += 1
            self._report_progress(
                context.processed_files,
                context.total_files,
                f"Processing: {scanned.relative_path}",
            )

        if context.processed_files != context.total_files:
            logger.warning(
                f"Processed {context.processed_files} files but counted {context.total_files}; "
                "the tree changed during the run"
            )

        document = "".join(parts)
        output_path = (
            resolve_output_dir(root, self._config.output.directory)
            / self._config.summary.output_filename
        )
        atomic_write_text(output_path, document)
        logger.info(f"Summary saved to {output_path}")

        return SummaryResult(
            output_path=output_path,
            document=document,
            total_files=context.total_files,
            processed_files=context.processed_files,
            skipped_files=list(context.skipped_files),
            duration_seconds=time.time() - start_time,
        )

    def _process_file(self, scanned: ScannedFile, context: RunContext) -> SourceFile | None:
        """
        Read and clean a single file.

        Returns:
            SourceFile, or None if the file couldn't be read
        """
        try:
            raw = scanned.path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            logger.warning(f"File disappeared before it could be read: {scanned.path}")
            context.skipped_files.append(scanned.relative_path)
            return None
        except OSError as e:
            logger.warning(f"Error reading file: {scanned.path} - {e}")
            context.skipped_files.append(scanned.relative_path)
            return None

        cleaned = raw
        if self._config.summary.strip_comments:
            cleaned = self._comment_stripper.strip(cleaned, scanned.language)
        cleaned = normalize_whitespace(
            cleaned, collapse_whitespace=self._config.summary.collapse_whitespace
        )

        return SourceFile(
            relative_path=scanned.relative_path,
            language=scanned.language,
            top_level_folder=scanned.top_level_folder,
            raw_content=raw,
            cleaned_content=cleaned,
        )
