"""
Diff module for line-level reconciliation.

Provides:
- A self-contained shortest edit script over lines
- Modification grouping, line numbering and summary statistics
"""

from contentdiff.core.diff.edit_script import compute_edit_script
from contentdiff.core.diff.text_diff import (
    LineReconciler,
    normalize_newlines,
    reconcile,
    split_lines,
)

__all__ = [
    # Edit script
    'compute_edit_script',
    # Reconciliation
    'LineReconciler',
    'normalize_newlines',
    'reconcile',
    'split_lines',
]
