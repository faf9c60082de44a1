"""
FileScanner module for codedigest.

Provides depth-first directory walking with extension classification and
literal ignore rules.
"""

from .interfaces import FileScannerInterface
from .language_registry import UNKNOWN_LANGUAGE, LanguageRegistry, get_default_registry
from .models import ScannedFile, WalkEntry
from .scanner import FileScanner

__all__ = [
    # Main classes
    "FileScanner",
    "FileScannerInterface",
    "ScannedFile",
    "WalkEntry",
    # Language registry
    "LanguageRegistry",
    "get_default_registry",
    "UNKNOWN_LANGUAGE",
]
