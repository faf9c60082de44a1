"""
Comment Stripper - Removes comments from source text by language.

Each language tag belongs to a comment family, and each family is a short
list of regular expressions applied in order with multiline matching.
This is a lexical strip: comment markers inside string literals are
removed too.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class CommentFamily(str, Enum):
    """Comment syntax families known to the stripper."""

    C_STYLE = "c_style"
    HASH = "hash"
    MARKUP = "markup"
    STYLESHEET = "stylesheet"
    INDENTED_HASH = "indented_hash"
    SQL = "sql"
    PLAIN = "plain"


_LINE_SLASH = re.compile(r"//.*$", re.MULTILINE)
_BLOCK_SLASH_STAR = re.compile(r"/\*[\s\S]*?\*/", re.MULTILINE)
_LINE_HASH = re.compile(r"#.*$", re.MULTILINE)
_MARKUP_COMMENT = re.compile(r"<!--[\s\S]*?-->", re.MULTILINE)
_LEADING_HASH = re.compile(r"^\s*#.*", re.MULTILINE)
_LINE_DOUBLE_DASH = re.compile(r"--.*$", re.MULTILINE)


@dataclass(frozen=True)
class CommentRule:
    """A family's removal patterns, applied in order."""

    family: CommentFamily
    patterns: tuple[re.Pattern[str], ...]

    def apply(self, content: str) -> str:
        for pattern in self.patterns:
            content = pattern.sub("", content)
        return content


FAMILY_RULES: dict[CommentFamily, CommentRule] = {
    CommentFamily.C_STYLE: CommentRule(CommentFamily.C_STYLE, (_LINE_SLASH, _BLOCK_SLASH_STAR)),
    CommentFamily.HASH: CommentRule(CommentFamily.HASH, (_LINE_HASH,)),
    CommentFamily.MARKUP: CommentRule(CommentFamily.MARKUP, (_MARKUP_COMMENT,)),
    CommentFamily.STYLESHEET: CommentRule(CommentFamily.STYLESHEET, (_BLOCK_SLASH_STAR,)),
    CommentFamily.INDENTED_HASH: CommentRule(CommentFamily.INDENTED_HASH, (_LEADING_HASH,)),
    CommentFamily.SQL: CommentRule(CommentFamily.SQL, (_LINE_DOUBLE_DASH, _BLOCK_SLASH_STAR)),
    CommentFamily.PLAIN: CommentRule(CommentFamily.PLAIN, ()),
}

DEFAULT_LANGUAGE_FAMILIES: dict[str, CommentFamily] = {
    # C-style: // and /* */
    "js": CommentFamily.C_STYLE,
    "javascript": CommentFamily.C_STYLE,
    "ts": CommentFamily.C_STYLE,
    "typescript": CommentFamily.C_STYLE,
    "java": CommentFamily.C_STYLE,
    "c": CommentFamily.C_STYLE,
    "cpp": CommentFamily.C_STYLE,
    "csharp": CommentFamily.C_STYLE,
    "php": CommentFamily.C_STYLE,
    "swift": CommentFamily.C_STYLE,
    "scala": CommentFamily.C_STYLE,
    "kotlin": CommentFamily.C_STYLE,
    "go": CommentFamily.C_STYLE,
    "rust": CommentFamily.C_STYLE,
    "dart": CommentFamily.C_STYLE,
    # Hash comments
    "python": CommentFamily.HASH,
    "ruby": CommentFamily.HASH,
    "bash": CommentFamily.HASH,
    "shell": CommentFamily.HASH,
    "sh": CommentFamily.HASH,
    "dockerfile": CommentFamily.HASH,
    "perl": CommentFamily.HASH,
    "r": CommentFamily.HASH,
    # Markup
    "html": CommentFamily.MARKUP,
    "xml": CommentFamily.MARKUP,
    "vue": CommentFamily.MARKUP,
    "svelte": CommentFamily.MARKUP,
    # Style sheets
    "css": CommentFamily.STYLESHEET,
    "scss": CommentFamily.STYLESHEET,
    "less": CommentFamily.STYLESHEET,
    # Config formats: only whole-line comments
    "yaml": CommentFamily.INDENTED_HASH,
    "yml": CommentFamily.INDENTED_HASH,
    "ini": CommentFamily.INDENTED_HASH,
    "toml": CommentFamily.INDENTED_HASH,
    "sql": CommentFamily.SQL,
    # No comment syntax
    "json": CommentFamily.PLAIN,
    "markdown": CommentFamily.PLAIN,
    "md": CommentFamily.PLAIN,
    "txt": CommentFamily.PLAIN,
    "text": CommentFamily.PLAIN,
}


class CommentStripper:
    """
    Strips comments from text according to the language tag.

    Example:
        >>> stripper = CommentStripper()
        >>> stripper.strip("x = 1  # one", "python")
        'x = 1  '
        >>> stripper.register("groovy", CommentFamily.C_STYLE).strip("a // b", "groovy")
        'a '
    """

    def __init__(self, language_families: dict[str, CommentFamily] | None = None):
        self._families: dict[str, CommentFamily] = dict(
            DEFAULT_LANGUAGE_FAMILIES if language_families is None else language_families
        )

    def register(self, language: str, family: CommentFamily | str) -> "CommentStripper":
        """
        Assign a language tag to a comment family.

        Returns:
            Self for method chaining
        """
        self._families[language.lower()] = CommentFamily(family)
        return self

    def family_for(self, language: str) -> CommentFamily | None:
        """Get the comment family of a language tag, or None if unknown."""
        return self._families.get(language.lower())

    def strip(self, content: str, language: str) -> str:
        """
        Remove comments from content.

        Args:
            content: Raw file text
            language: Language tag of the file

        Returns:
            Text with comment syntax removed; unchanged for plain-text and
            unknown tags
        """
        family = self.family_for(language)
        if family is None:
            logger.debug(f"No comment rules for language {language!r}, leaving content as is")
            return content
        return FAMILY_RULES[family].apply(content)


_default_stripper = CommentStripper()


def strip_comments(content: str, language: str) -> str:
    """Strip comments using the default language-to-family table."""
    return _default_stripper.strip(content, language)
