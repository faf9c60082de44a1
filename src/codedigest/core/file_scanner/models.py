"""
Data models for the file scanner module.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class WalkEntry:
    """
    A filesystem entry visited by the tree walker.

    Attributes:
        path: Absolute path of the entry
        relative_path: Path relative to the scan root, native separators
        depth: Depth below the walked target (0 = direct child)
        name: Base name of the entry
        is_dir: True for directories
    """

    path: Path
    relative_path: str
    depth: int
    name: str
    is_dir: bool


@dataclass
class ScannedFile:
    """
    A file accepted by the scanner's filter predicate.

    Content is read lazily by the consumer so the pre-scan pass never
    touches file contents.

    Attributes:
        path: Absolute path to the file
        relative_path: Path relative to the scan root
        language: Language tag from the registry
    """

    path: Path
    relative_path: str
    language: str

    @property
    def top_level_folder(self) -> str:
        """First segment of the file's relative directory ('.' for root files)."""
        parent = Path(self.relative_path).parent
        return parent.parts[0] if parent.parts else "."
