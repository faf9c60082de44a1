"""
Core Layer - Configuration, file scanning, ignore rules and text cleaning.
"""

from codedigest.core.comment_stripper import CommentFamily, CommentStripper, strip_comments
from codedigest.core.config import (
    DigestConfig,
    LoggingConfig,
    OutputConfig,
    SummaryConfig,
    TreeConfig,
    load_config,
)
from codedigest.core.file_scanner import (
    FileScanner,
    FileScannerInterface,
    LanguageRegistry,
    ScannedFile,
    WalkEntry,
    get_default_registry,
)
from codedigest.core.ignore_rules import IgnoreMatchMode, IgnoreRules
from codedigest.core.whitespace import normalize_whitespace

__all__ = [
    # Config
    "DigestConfig",
    "SummaryConfig",
    "TreeConfig",
    "OutputConfig",
    "LoggingConfig",
    "load_config",
    # FileScanner
    "ScannedFile",
    "WalkEntry",
    "FileScannerInterface",
    "FileScanner",
    "LanguageRegistry",
    "get_default_registry",
    # Ignore rules
    "IgnoreMatchMode",
    "IgnoreRules",
    # Text cleaning
    "CommentFamily",
    "CommentStripper",
    "strip_comments",
    "normalize_whitespace",
]
