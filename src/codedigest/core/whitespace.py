"""
Whitespace normalization for summary output.

The transform is lossy on purpose: summaries are meant to be read, not
compiled or reformatted back.
"""

import re

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_whitespace(content: str, collapse_whitespace: bool = True) -> str:
    """
    Drop blank lines and optionally all whitespace inside each line.

    Args:
        content: Text to normalize
        collapse_whitespace: Remove every whitespace character within the
                             remaining lines, not only at their edges

    Returns:
        Normalized text joined with '\\n' and stripped at both ends
    """
    lines = content.replace("\r\n", "\n").split("\n")
    kept = [line for line in lines if line.strip() != ""]
    if collapse_whitespace:
        kept = [_WHITESPACE_RUN.sub("", line) for line in kept]
    return "\n".join(kept).strip()
