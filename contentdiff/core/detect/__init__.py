"""
Detection module for classifying raw content.

Provides:
- Magic-number signature sniffing
- Text/binary classification from hints and content
"""

from contentdiff.core.detect.classifier import (
    ContentClassifier,
    ClassifierOptions,
    classify,
)
from contentdiff.core.detect.signatures import (
    Signature,
    sniff_signature,
)

__all__ = [
    # Classification
    'ContentClassifier',
    'ClassifierOptions',
    'classify',
    # Signatures
    'Signature',
    'sniff_signature',
]
