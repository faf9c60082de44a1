"""
Service Layer - SummaryAssembler and TreeRenderer.
"""

from codedigest.services.digest_models import (
    RunContext,
    SourceFile,
    SummaryResult,
    TreeNode,
    TreeResult,
    completion_percent,
)
from codedigest.services.summary_assembler import SummaryAssembler, build_summary_document
from codedigest.services.tree_renderer import TreeRenderer, build_tree, render_tree

__all__ = [
    "SummaryAssembler",
    "TreeRenderer",
    "RunContext",
    "SourceFile",
    "SummaryResult",
    "TreeNode",
    "TreeResult",
    "build_summary_document",
    "build_tree",
    "render_tree",
    "completion_percent",
]
