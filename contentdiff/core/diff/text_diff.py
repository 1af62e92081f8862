"""
Line reconciliation engine.

Turns two decoded texts into an annotated, line-numbered reconciliation:
- Line ending normalization
- Line splitting that ignores the final terminator
- Minimal edit script between the line sequences
- Grouping of adjacent delete/insert runs into modified lines
- Summary statistics
"""

from __future__ import annotations

import logging
from typing import Iterator, Sequence

from contentdiff.core.diff.edit_script import compute_edit_script
from contentdiff.core.models import (
    AnnotatedLine,
    DiffLineType,
    DiffSummary,
    EditOp,
    EditOpType,
    ReconcileResult,
)


def normalize_newlines(text: str) -> str:
    """Convert Windows and legacy Mac line endings to ``\\n``."""
    return text.replace('\r\n', '\n').replace('\r', '\n')


def split_lines(text: str) -> list[str]:
    """
    Split normalized text into lines.

    A trailing newline terminates the last line rather than starting
    an empty one, so ``"a\\n"`` and ``"a"`` both give ``["a"]``.
    """
    if not text:
        return []
    lines = text.split('\n')
    if lines[-1] == '':
        lines.pop()
    return lines


def change_percent(changes: int, total_lines: int) -> int:
    """Rounded (half up) share of changed lines, clamped to [0, 100]."""
    if total_lines <= 0:
        return 0
    percent = (200 * changes + total_lines) // (2 * total_lines)
    return min(100, max(0, percent))


class _LineCounter:
    """Running old/new line numbers, both starting at 1."""

    def __init__(self):
        self.old = 1
        self.new = 1

    def unchanged(self, text: str) -> AnnotatedLine:
        line = AnnotatedLine(DiffLineType.UNCHANGED, self.old, self.new, text, text)
        self.old += 1
        self.new += 1
        return line

    def modified(self, before: str, after: str) -> AnnotatedLine:
        line = AnnotatedLine(DiffLineType.MODIFIED, self.old, self.new, before, after)
        self.old += 1
        self.new += 1
        return line

    def removed(self, text: str) -> AnnotatedLine:
        line = AnnotatedLine(DiffLineType.REMOVED, self.old, None, text, None)
        self.old += 1
        return line

    def added(self, text: str) -> AnnotatedLine:
        line = AnnotatedLine(DiffLineType.ADDED, None, self.new, None, text)
        self.new += 1
        return line


class LineReconciler:
    """
    Engine for reconciling two texts line by line.

    A DELETED run immediately followed by an INSERTED run is read as a
    modification group: lines are paired by position, and whatever is
    left over on the longer side is reported as removed or added.
    """

    def reconcile(self, original_text: str, comparison_text: str) -> ReconcileResult:
        """
        Reconcile two decoded texts.

        Args:
            original_text: The original (left) content
            comparison_text: The comparison (right) content

        Returns:
            ReconcileResult with annotated lines and a summary
        """
        original_lines = split_lines(normalize_newlines(original_text))
        comparison_lines = split_lines(normalize_newlines(comparison_text))

        script = compute_edit_script(original_lines, comparison_lines)
        lines = list(self.annotate(script))
        summary = self.summarize(lines, len(original_lines), len(comparison_lines))

        logging.debug(f"LineReconciler - {len(script)} runs, summary {summary}")
        return ReconcileResult(lines=lines, summary=summary)

    def annotate(self, script: Sequence[EditOp]) -> Iterator[AnnotatedLine]:
        """Convert an edit script into numbered, annotated lines."""
        counter = _LineCounter()
        i = 0

        while i < len(script):
            current = script[i]
            following = script[i + 1] if i + 1 < len(script) else None

            if (current.op == EditOpType.DELETED
                    and following is not None
                    and following.op == EditOpType.INSERTED):
                yield from self._modification_group(counter, current.lines, following.lines)
                i += 2
                continue

            if current.op == EditOpType.EQUAL:
                for text in current.lines:
                    yield counter.unchanged(text)
            elif current.op == EditOpType.DELETED:
                for text in current.lines:
                    yield counter.removed(text)
            else:
                for text in current.lines:
                    yield counter.added(text)
            i += 1

    def _modification_group(
        self,
        counter: _LineCounter,
        deleted: Sequence[str],
        inserted: Sequence[str]
    ) -> Iterator[AnnotatedLine]:
        paired = min(len(deleted), len(inserted))

        for before, after in zip(deleted[:paired], inserted[:paired]):
            yield counter.modified(before, after)
        for text in deleted[paired:]:
            yield counter.removed(text)
        for text in inserted[paired:]:
            yield counter.added(text)

    def summarize(
        self,
        lines: Sequence[AnnotatedLine],
        original_count: int,
        comparison_count: int
    ) -> DiffSummary:
        """Calculate summary statistics from annotated lines."""
        summary = DiffSummary(total_lines=max(original_count, comparison_count))

        for line in lines:
            if line.line_type == DiffLineType.ADDED:
                summary.added += 1
            elif line.line_type == DiffLineType.REMOVED:
                summary.removed += 1
            elif line.line_type == DiffLineType.MODIFIED:
                summary.modified += 1

        summary.identical = summary.total_changes == 0
        summary.change_percent = change_percent(summary.total_changes, summary.total_lines)
        return summary


def reconcile(original_text: str, comparison_text: str) -> ReconcileResult:
    """Reconcile two decoded texts with a default engine."""
    return LineReconciler().reconcile(original_text, comparison_text)
