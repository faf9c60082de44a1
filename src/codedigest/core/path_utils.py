"""
Path utilities for codedigest.

Provides target resolution for the command line, output directory creation
and atomic document writes shared by the summary and tree commands.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


def resolve_targets(root: Path, selected: Optional[Sequence[str | Path]] = None) -> list[Path]:
    """
    Resolve the directories a run walks.

    Relative targets are resolved against root; absolute ones are kept.
    Targets that don't exist are dropped without error. With no targets
    the root itself is the only target.

    Args:
        root: Scan root (usually the working directory)
        selected: Target directories from the command line

    Returns:
        List of existing target paths, in the order given
    """
    if not selected:
        return [root]

    targets = []
    for target in selected:
        path = Path(target)
        if not path.is_absolute():
            path = root / path
        if not path.exists():
            logger.debug(f"Skipping missing target: {path}")
            continue
        targets.append(path)
    return targets


def resolve_output_dir(root: Path, directory: str | Path) -> Path:
    """Resolve a configured output directory against the scan root."""
    path = Path(directory).expanduser()
    return path if path.is_absolute() else root / path


def ensure_directory_exists(path: Path) -> bool:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Path to the directory to ensure exists.

    Returns:
        True if the directory exists or was created successfully,
        False if creation failed (e.g., permission error).
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
        return True
    except (OSError, PermissionError):
        return False


def atomic_write_text(path: Path, text: str, encoding: str = "utf-8") -> None:
    """
    Write text to a temp file next to path, then move it into place.

    The destination is either left untouched or fully replaced; a failed
    write removes the temp file.

    Raises:
        OSError: If the directory can't be created or the write fails
    """
    if not ensure_directory_exists(path.parent):
        raise OSError(f"Could not create output directory: {path.parent}")

    tmp = path.with_name(path.name + ".tmp")
    try:
        with tmp.open("w", encoding=encoding, newline="") as f:
            f.write(text)
        os.replace(tmp, path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise
