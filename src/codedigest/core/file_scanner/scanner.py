"""
FileScanner implementation for recursive directory walking.
"""

import logging
import os
import stat
from pathlib import Path
from typing import Iterator

from codedigest.core.ignore_rules import IgnoreRules

from .interfaces import FileScannerInterface
from .language_registry import UNKNOWN_LANGUAGE, LanguageRegistry, get_default_registry
from .models import ScannedFile, WalkEntry

logger = logging.getLogger(__name__)


class FileScanner(FileScannerInterface):
    """
    Concrete implementation of FileScannerInterface.

    Provides:
    - Depth-first pre-order walking with an optional depth bound
    - Entries of each directory visited in lexical name order
    - Extension filtering through a LanguageRegistry
    - Literal ignore rules (substring or exact base name)
    - Vanished or unreadable entries skipped with a warning
    """

    def __init__(
        self,
        language_registry: LanguageRegistry | None = None,
        ignore_rules: IgnoreRules | None = None,
    ):
        """
        Initialize the FileScanner.

        Args:
            language_registry: Registry used to classify extensions.
                              If None, uses the global default registry.
            ignore_rules: Ignore rules to apply. If None, nothing is ignored.
        """
        self._language_registry = language_registry or get_default_registry()
        self._ignore_rules = ignore_rules or IgnoreRules()

    @property
    def ignore_rules(self) -> IgnoreRules:
        return self._ignore_rules

    def accepts(self, relative_path: str, name: str) -> str | None:
        """
        Apply the filter predicate to a file.

        Args:
            relative_path: File path relative to the scan root
            name: File base name

        Returns:
            The file's language tag if it is accepted, otherwise None
        """
        language = self._language_registry.detect_from_path(Path(name))
        if language == UNKNOWN_LANGUAGE:
            return None
        if self._ignore_rules.excludes_file(relative_path, name):
            return None
        return language

    def walk(
        self, root_path: Path, scan_root: Path | None = None, max_depth: int | None = None
    ) -> Iterator[WalkEntry]:
        """
        Walk a directory tree in depth-first pre-order.

        Args:
            root_path: Directory to walk
            scan_root: Directory relative paths are computed against
            max_depth: Depth bound; None walks the whole tree

        Yields:
            WalkEntry objects for every visited entry
        """
        root_path = Path(root_path)
        scan_root = Path(scan_root) if scan_root is not None else root_path

        if not root_path.is_dir():
            logger.debug(f"Skipping missing target: {root_path}")
            return

        yield from self._walk_directory(root_path, scan_root, 0, max_depth)

    def _walk_directory(
        self, current_path: Path, scan_root: Path, depth: int, max_depth: int | None
    ) -> Iterator[WalkEntry]:
        """
        Recursively walk a directory.

        Args:
            current_path: Directory being walked
            scan_root: Directory relative paths are computed against
            depth: Depth of current_path's children below the target
            max_depth: Depth bound; None walks the whole tree

        Yields:
            WalkEntry objects for current_path's children and descendants
        """
        if max_depth is not None and depth >= max_depth:
            return

        try:
            names = sorted(os.listdir(current_path))
        except FileNotFoundError:
            logger.warning(f"Directory disappeared before it could be listed: {current_path}")
            return
        except PermissionError as e:
            logger.warning(f"Permission denied accessing directory: {current_path} - {e}")
            return
        except OSError as e:
            logger.warning(f"Error accessing directory: {current_path} - {e}")
            return

        for name in names:
            entry_path = current_path / name
            relative_path = os.path.relpath(entry_path, scan_root)
            if self._ignore_rules.prunes_entry(relative_path, name):
                logger.debug(f"Ignoring: {entry_path}")
                continue

            try:
                is_dir = stat.S_ISDIR(entry_path.stat().st_mode)
            except FileNotFoundError:
                logger.warning(f"Entry disappeared before it could be read: {entry_path}")
                continue
            except OSError as e:
                logger.warning(f"Error reading entry: {entry_path} - {e}")
                continue

            yield WalkEntry(
                path=entry_path,
                relative_path=relative_path,
                depth=depth,
                name=name,
                is_dir=is_dir,
            )

            if is_dir:
                yield from self._walk_directory(entry_path, scan_root, depth + 1, max_depth)

    def scan(self, root_path: Path, scan_root: Path | None = None) -> Iterator[ScannedFile]:
        """
        Yield the files under root_path accepted by the filter predicate.

        Args:
            root_path: Directory to scan
            scan_root: Directory relative paths are computed against

        Yields:
            ScannedFile objects in traversal order
        """
        for entry in self.walk(root_path, scan_root=scan_root):
            if entry.is_dir:
                continue
            language = self.accepts(entry.relative_path, entry.name)
            if language is None:
                continue
            yield ScannedFile(
                path=entry.path,
                relative_path=entry.relative_path,
                language=language,
            )
