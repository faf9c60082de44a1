"""
Abstract interfaces for file scanning operations.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path

from .models import ScannedFile, WalkEntry


class FileScannerInterface(ABC):
    """
    Abstract interface for file scanning operations.

    Implementations walk directories depth-first and apply the extension and
    ignore filters shared by the pre-scan and the main summary pass.
    """

    @abstractmethod
    def walk(
        self, root_path: Path, scan_root: Path | None = None, max_depth: int | None = None
    ) -> Iterator[WalkEntry]:
        """
        Walk a directory tree in depth-first pre-order.

        Args:
            root_path: Directory to walk
            scan_root: Directory relative paths are computed against
                       (defaults to root_path)
            max_depth: Entries at depth >= max_depth are not visited;
                       None walks the whole tree

        Yields:
            WalkEntry objects for every visited entry

        Notes:
            - A missing root yields nothing
            - Entries that vanish or cannot be read are logged and skipped
        """
        pass

    @abstractmethod
    def scan(self, root_path: Path, scan_root: Path | None = None) -> Iterator[ScannedFile]:
        """
        Yield the files under root_path accepted by the filter predicate.

        Args:
            root_path: Directory to scan
            scan_root: Directory relative paths are computed against

        Yields:
            ScannedFile objects for files with a mapped extension that are
            not ignored
        """
        pass
