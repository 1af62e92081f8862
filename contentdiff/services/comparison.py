"""
Comparison service that assembles classification and reconciliation.

Given two inputs (in memory or on disk) it:
- Describes each input (size, hash, media type, kind)
- Reconciles the two texts when both inputs classify as text
- Falls back to a byte-identity summary otherwise
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from contentdiff.core.detect.classifier import ContentClassifier
from contentdiff.core.diff.text_diff import LineReconciler
from contentdiff.core.models import (
    ClassificationHint,
    CompareResult,
    DiffSummary,
    FileDescriptor,
)
from contentdiff.services.file_io import FileIOService, extension_of
from contentdiff.services.hashing import hash_buffer
from contentdiff.services.settings import ApplicationSettings


BINARY_WARNING = "One or both files are binary. Text diff view is not available."
REPLACED_WARNING = "Some bytes in {name} could not be decoded and were replaced."


class ComparisonError(Exception):
    """Raised when an input cannot be loaded for comparison."""
    pass


@dataclass
class LoadedInput:
    """One classified input, with decoded text when it is text."""
    descriptor: FileDescriptor
    text: Optional[str] = None


class ComparisonService:
    """Service that compares two inputs end to end."""

    def __init__(self, settings: Optional[ApplicationSettings] = None):
        self.settings = settings or ApplicationSettings()
        self.classifier = ContentClassifier(self.settings.classifier.to_options())
        self.reconciler = LineReconciler()
        self.file_io = FileIOService(
            default_encoding=self.settings.decoder.default_encoding,
            detection_confidence=self.settings.decoder.detection_confidence,
        )

    def load_input(
        self,
        name: str,
        data: bytes,
        declared_media_type: Optional[str] = None
    ) -> LoadedInput:
        """Classify one input and decode it if it is text."""
        extension = extension_of(name)
        classification = self.classifier.classify(
            data,
            ClassificationHint(declared_media_type=declared_media_type, file_extension=extension),
        )

        descriptor = FileDescriptor(
            name=name,
            extension=extension,
            size=len(data),
            media_type=classification.media_type,
            hash=hash_buffer(data),
            kind=classification.kind,
        )

        text = None
        if classification.is_text:
            decoded = self.file_io.decode_text(data)
            text = decoded.text
            if decoded.replaced:
                descriptor.warnings.append(REPLACED_WARNING.format(name=name))

        logging.debug(
            f"ComparisonService - {name}: {descriptor.kind.value} ({descriptor.media_type})"
        )
        return LoadedInput(descriptor=descriptor, text=text)

    def compare_buffers(
        self,
        left_name: str,
        left_data: bytes,
        right_name: str,
        right_data: bytes,
        left_media_type: Optional[str] = None,
        right_media_type: Optional[str] = None
    ) -> CompareResult:
        """
        Compare two in-memory inputs.

        Args:
            left_name: File name of the original input
            left_data: Contents of the original input
            right_name: File name of the comparison input
            right_data: Contents of the comparison input
            left_media_type: Declared media type of the original input
            right_media_type: Declared media type of the comparison input

        Returns:
            CompareResult combining both descriptors and the summary
        """
        left = self.load_input(left_name, left_data, left_media_type)
        right = self.load_input(right_name, right_data, right_media_type)
        return self.assemble(left, right)

    def compare_files(
        self,
        left_path: Path | str,
        right_path: Path | str
    ) -> CompareResult:
        """
        Compare two files on disk.

        Raises:
            ComparisonError: If either file cannot be read
        """
        left_path, right_path = Path(left_path), Path(right_path)
        max_size = self.settings.comparison.max_file_size

        left_read = self.file_io.read_bytes(left_path, max_size=max_size)
        if not left_read.success:
            raise ComparisonError(left_read.error)

        right_read = self.file_io.read_bytes(right_path, max_size=max_size)
        if not right_read.success:
            raise ComparisonError(right_read.error)

        return self.compare_buffers(
            left_path.name, left_read.data,
            right_path.name, right_read.data,
        )

    def assemble(self, left: LoadedInput, right: LoadedInput) -> CompareResult:
        """Combine two loaded inputs into a single result."""
        warnings: list[str] = []
        for loaded in (left, right):
            warnings.extend(loaded.descriptor.warnings)

        if left.text is not None and right.text is not None:
            reconciled = self.reconciler.reconcile(left.text, right.text)
            return CompareResult(
                files=(left.descriptor, right.descriptor),
                summary=reconciled.summary,
                text_diff=reconciled.lines,
                warnings=warnings,
            )

        same_bytes = (left.descriptor.hash == right.descriptor.hash
                      and left.descriptor.size == right.descriptor.size)
        warnings.append(BINARY_WARNING)

        return CompareResult(
            files=(left.descriptor, right.descriptor),
            summary=DiffSummary(
                identical=same_bytes,
                total_lines=0,
                change_percent=0 if same_bytes else 100,
            ),
            text_diff=None,
            warnings=warnings,
        )
