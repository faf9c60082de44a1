"""
codedigest - Compact Markdown snapshots of a codebase.

Walks a directory tree, strips comments and formatting from source files and
concatenates them into a single Markdown document, and renders a
depth-limited folder tree alongside it.
"""

__version__ = "0.1.0"
