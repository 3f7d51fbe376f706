"""
Diff: comparación estructural y renderizado del estado antes/después.
"""

from ebsattach.core.diff.engine import Delta, DeltaKind, compare, count_changes, diff_documents
from ebsattach.core.diff.render import DiffLine, format_plain, render_diff, to_rich_text

__all__ = [
    "Delta",
    "DeltaKind",
    "compare",
    "count_changes",
    "diff_documents",
    "DiffLine",
    "format_plain",
    "render_diff",
    "to_rich_text",
]
