"""
ContentDiff - content classification and line reconciliation.
"""

from contentdiff.core.detect import ClassifierOptions, ContentClassifier, classify
from contentdiff.core.diff import LineReconciler, reconcile
from contentdiff.core.models import (
    AnnotatedLine,
    Classification,
    ClassificationHint,
    CompareResult,
    ContentKind,
    DiffLineType,
    DiffSummary,
    FileDescriptor,
    ReconcileResult,
)

__version__ = "1.0.0"

__all__ = [
    'AnnotatedLine',
    'Classification',
    'ClassificationHint',
    'ClassifierOptions',
    'CompareResult',
    'ContentClassifier',
    'ContentKind',
    'DiffLineType',
    'DiffSummary',
    'FileDescriptor',
    'LineReconciler',
    'ReconcileResult',
    'classify',
    'reconcile',
    '__version__',
]
