"""
Ignore rules for the summary and tree commands.

An ignore rule is a literal string. Two matching modes exist:

- ``substring``: a file is excluded when any rule occurs anywhere in its
  path relative to the scan root. ``Migrations`` therefore also excludes
  ``Migrations2/x.cs`` and ``io`` excludes ``src/actions.js``.
- ``basename``: an entry is excluded when its base name equals a rule
  exactly. Excluded directories are not descended into.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class IgnoreMatchMode(str, Enum):
    """
    How ignore rules are compared against a path.

    Inherits from str so config values compare and serialize as plain strings.
    """

    SUBSTRING = "substring"
    BASENAME = "basename"

    @classmethod
    def parse(cls, value: "str | IgnoreMatchMode") -> "IgnoreMatchMode":
        """
        Parse a mode from its config string.

        Raises:
            ValueError: If the value is not a known mode
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Invalid ignore mode: {value!r}. Valid modes: {valid}") from None


@dataclass(frozen=True)
class IgnoreRules:
    """
    A set of literal ignore rules with their matching mode.

    Attributes:
        patterns: Literal strings to match
        mode: Matching mode (substring by default)
    """

    patterns: tuple[str, ...] = field(default_factory=tuple)
    mode: IgnoreMatchMode = IgnoreMatchMode.SUBSTRING

    def __post_init__(self) -> None:
        object.__setattr__(self, "patterns", tuple(self.patterns))
        object.__setattr__(self, "mode", IgnoreMatchMode.parse(self.mode))

    def prunes_entry(self, relative_path: str, name: str) -> bool:
        """
        Check whether a walked entry, file or directory, must be skipped.

        A pruned directory is not descended into. Every path below a directory
        contains the directory's own relative path, so pruning it drops exactly
        the entries that substring matching would drop one by one.
        """
        return self.excludes_file(relative_path, name)

    def excludes_file(self, relative_path: str, name: str) -> bool:
        """
        Check whether a file is excluded by these rules.

        Args:
            relative_path: File path relative to the scan root
            name: File base name

        Returns:
            True if the file must be left out
        """
        if self.mode is IgnoreMatchMode.BASENAME:
            return name in self.patterns
        for pattern in self.patterns:
            if pattern in relative_path:
                logger.debug(f"Ignoring {relative_path} (matches {pattern!r})")
                return True
        return False
