"""
Core data models for content classification and line reconciliation.

This module defines the data structures shared across the package:
- Classification models (hints and verdicts)
- Edit script models
- Annotated line and summary models
- File descriptor and comparison result models

All models are:
- UI-agnostic (rendering is left to the caller)
- Serializable through ``to_dict`` (camelCase keys for renderers)
- Immutable where practical
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Optional


# =============================================================================
# Enumerations
# =============================================================================

class ContentKind(Enum):
    """Text/binary verdict for a buffer."""
    TEXT = "text"
    BINARY = "binary"


class EditOpType(Enum):
    """Type of run in an edit script."""
    EQUAL = auto()      # Run present in both sequences
    INSERTED = auto()   # Run present only in the comparison sequence
    DELETED = auto()    # Run present only in the original sequence


class DiffLineType(Enum):
    """Type of line in a reconciliation result."""
    UNCHANGED = "unchanged"  # Line exists in both inputs, identical
    ADDED = "added"          # Line exists only in the comparison input
    REMOVED = "removed"      # Line exists only in the original input
    MODIFIED = "modified"    # Line paired across a delete/insert group


# =============================================================================
# Classification Models
# =============================================================================

@dataclass(frozen=True)
class ClassificationHint:
    """
    Optional metadata supplied by the caller.

    The classifier never infers these; they come from upload metadata
    or the file name.
    """
    declared_media_type: Optional[str] = None
    file_extension: Optional[str] = None  # lowercase, no leading dot


@dataclass(frozen=True)
class Classification:
    """Text/binary verdict plus a best-effort media type."""
    is_text: bool
    media_type: str

    @property
    def kind(self) -> ContentKind:
        return ContentKind.TEXT if self.is_text else ContentKind.BINARY


# =============================================================================
# Reconciliation Models
# =============================================================================

@dataclass(frozen=True)
class EditOp:
    """A contiguous run of lines in an edit script."""
    op: EditOpType
    lines: tuple[str, ...]

    @property
    def count(self) -> int:
        return len(self.lines)


@dataclass
class AnnotatedLine:
    """
    A single line in a reconciliation result.

    ``unchanged`` and ``modified`` lines carry both line numbers and both
    texts; ``added`` lines only the new side, ``removed`` lines only the
    old side.
    """
    line_type: DiffLineType
    old_line_number: Optional[int] = None
    new_line_number: Optional[int] = None
    before_text: Optional[str] = None
    after_text: Optional[str] = None

    @property
    def is_change(self) -> bool:
        return self.line_type != DiffLineType.UNCHANGED

    @property
    def prefix(self) -> str:
        """Get the diff prefix character."""
        prefixes = {
            DiffLineType.UNCHANGED: ' ',
            DiffLineType.ADDED: '+',
            DiffLineType.REMOVED: '-',
            DiffLineType.MODIFIED: '!',
        }
        return prefixes[self.line_type]

    def to_dict(self) -> dict[str, Any]:
        return {
            'type': self.line_type.value,
            'oldNumber': self.old_line_number,
            'newNumber': self.new_line_number,
            'before': self.before_text,
            'after': self.after_text,
        }


@dataclass
class DiffSummary:
    """Aggregate statistics about a reconciliation."""
    identical: bool = True
    total_lines: int = 0
    added: int = 0
    removed: int = 0
    modified: int = 0
    change_percent: int = 0

    @property
    def total_changes(self) -> int:
        """Total number of changed lines."""
        return self.added + self.removed + self.modified

    def to_dict(self) -> dict[str, Any]:
        return {
            'identical': self.identical,
            'totalLines': self.total_lines,
            'added': self.added,
            'removed': self.removed,
            'modified': self.modified,
            'changePercent': self.change_percent,
        }

    def __str__(self) -> str:
        return (f"+{self.added} -{self.removed} "
                f"~{self.modified} ({self.change_percent}%)")


@dataclass
class ReconcileResult:
    """Annotated lines plus their summary."""
    lines: list[AnnotatedLine]
    summary: DiffSummary


# =============================================================================
# Comparison Models
# =============================================================================

@dataclass
class FileDescriptor:
    """Metadata about one compared input."""
    name: str
    extension: str
    size: int
    media_type: str
    hash: str
    kind: ContentKind
    warnings: list[str] = field(default_factory=list)

    @property
    def is_text(self) -> bool:
        return self.kind == ContentKind.TEXT

    def to_dict(self) -> dict[str, Any]:
        data = {
            'name': self.name,
            'extension': self.extension,
            'size': self.size,
            'mime': self.media_type,
            'hash': self.hash,
            'kind': self.kind.value,
        }
        if self.warnings:
            data['warnings'] = list(self.warnings)
        return data


@dataclass
class CompareResult:
    """
    Complete result of comparing two inputs.

    ``text_diff`` is only present when both inputs classified as text.
    """
    files: tuple[FileDescriptor, FileDescriptor]
    summary: DiffSummary
    text_diff: Optional[list[AnnotatedLine]] = None
    warnings: list[str] = field(default_factory=list)

    @property
    def is_text_comparison(self) -> bool:
        return self.text_diff is not None

    @property
    def has_differences(self) -> bool:
        return not self.summary.identical

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            'files': [descriptor.to_dict() for descriptor in self.files],
            'summary': self.summary.to_dict(),
        }
        if self.text_diff is not None:
            data['textDiff'] = [line.to_dict() for line in self.text_diff]
        if self.warnings:
            data['warnings'] = list(self.warnings)
        return data
