"""
Tree Renderer for codedigest.

Builds a folder hierarchy from walked entries in one pass and renders it
with box-drawing connectors.
"""

import itertools
import logging
import os
from pathlib import Path
from typing import Iterable, Optional, Sequence

from codedigest.core.config import DigestConfig
from codedigest.core.file_scanner import FileScanner, FileScannerInterface, WalkEntry
from codedigest.core.path_utils import atomic_write_text, resolve_output_dir, resolve_targets
from codedigest.services.digest_models import TreeNode, TreeResult

logger = logging.getLogger(__name__)

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_INDENT = "│   "
BLANK_INDENT = "    "


def build_tree(entries: Iterable[WalkEntry]) -> list[TreeNode]:
    """
    Build the node hierarchy from entries in depth-first pre-order.

    Depth-0 entries become top-level nodes, ordered by parent directory
    first so that the entries of each walked target stay together. Every
    sibling list is ordered by name, case-insensitively.

    Args:
        entries: Walk entries, each directory directly followed by its
                 descendants

    Returns:
        Top-level nodes
    """
    roots: list[TreeNode] = []
    # open_dirs[d] is the most recent node seen at depth d
    open_dirs: list[TreeNode] = []

    for entry in entries:
        node = TreeNode(name=entry.name, relative_path=entry.relative_path, is_dir=entry.is_dir)
        if entry.depth == 0:
            roots.append(node)
        else:
            open_dirs[entry.depth - 1].children.append(node)
        del open_dirs[entry.depth:]
        open_dirs.append(node)

    _sort_nodes(roots)
    return roots


def _parent_of(node: TreeNode) -> str:
    return os.path.dirname(node.relative_path)


def _sort_key(node: TreeNode) -> tuple[str, str, str, str]:
    parent = _parent_of(node)
    # lowercase before uppercase on ties
    return (parent.casefold(), parent.swapcase(), node.name.casefold(), node.name.swapcase())


def _sort_nodes(nodes: list[TreeNode]) -> None:
    nodes.sort(key=_sort_key)
    for node in nodes:
        _sort_nodes(node.children)


def render_tree(nodes: Sequence[TreeNode]) -> str:
    """
    Render nodes as an indented ASCII tree, one line per entry.

    Top-level nodes sharing a parent directory form one sibling group; each
    group ends with its own last-child connector.

    Example:
        ├── src/
        │   └── app.ts
        └── README.md
    """
    lines: list[str] = []
    for _, group in itertools.groupby(nodes, key=_parent_of):
        _render_level(list(group), "", lines)
    return "".join(lines)


def _render_level(nodes: Sequence[TreeNode], prefix: str, lines: list[str]) -> None:
    for index, node in enumerate(nodes):
        is_last = index == len(nodes) - 1
        connector = LAST_BRANCH if is_last else BRANCH
        suffix = "/" if node.is_dir else ""
        lines.append(f"{prefix}{connector}{node.name}{suffix}\n")
        if node.children:
            _render_level(node.children, prefix + (BLANK_INDENT if is_last else PIPE_INDENT), lines)


def count_nodes(nodes: Sequence[TreeNode]) -> int:
    """Count nodes including all their descendants."""
    return sum(1 + count_nodes(node.children) for node in nodes)


class TreeRenderer:
    """
    Service producing the folder structure document.
    """

    def __init__(
        self,
        config: Optional[DigestConfig] = None,
        file_scanner: Optional[FileScannerInterface] = None,
    ):
        """
        Initialize the tree renderer.

        Args:
            config: Configuration (default: DigestConfig())
            file_scanner: Walker (default: FileScanner with the tree ignore rules)
        """
        self._config = config or DigestConfig()
        self._file_scanner = file_scanner or FileScanner(
            ignore_rules=self._config.tree.ignore_rules()
        )

    def collect(
        self, root: Path, targets: list[Path], max_depth: Optional[int]
    ) -> list[TreeNode]:
        """Walk every target and build the combined hierarchy."""
        entries: list[WalkEntry] = []
        for target in targets:
            entries.extend(self._file_scanner.walk(target, scan_root=root, max_depth=max_depth))
        logger.debug(f"Collected {len(entries)} tree entries")
        return build_tree(entries)

    def generate(
        self,
        root: Path,
        targets: Optional[Sequence[str | Path]] = None,
    ) -> TreeResult:
        """
        Render the folder tree of the targets and write the document.

        Args:
            root: Scan root; entry paths are relative to it
            targets: Directories to walk (default: the root itself)

        Returns:
            TreeResult with the output path and document

        Raises:
            OSError: If the document cannot be written
        """
        root = Path(root).resolve()
        nodes = self.collect(root, resolve_targets(root, targets), self._config.tree.max_depth)

        document = "```\n" + render_tree(nodes) + "```"
        output_path = (
            resolve_output_dir(root, self._config.output.directory)
            / self._config.tree.output_filename
        )
        atomic_write_text(output_path, document)
        logger.info(f"Folder structure saved to {output_path}")

        return TreeResult(output_path=output_path, document=document, entry_count=count_nodes(nodes))
