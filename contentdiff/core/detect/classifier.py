"""
Text/binary content classifier.

Decides whether a byte buffer should be treated as text, using, in order:
- Magic-number signature sniffing
- The caller's declared media type
- The caller's file extension
- Control-byte ratio over a leading sample
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from contentdiff.core.detect.signatures import sniff_signature
from contentdiff.core.models import Classification, ClassificationHint


DEFAULT_SNIFF_BYTES = 4096
DEFAULT_CONTROL_RATIO_THRESHOLD = 0.1

GENERIC_BINARY_TYPE = 'application/octet-stream'
PLAIN_TEXT_TYPE = 'text/plain'

TEXT_MEDIA_PREFIXES: tuple[str, ...] = (
    'text/',
    'application/json',
    'application/xml',
    'application/yaml',
    'application/x-yaml',
    'application/toml',
    'application/javascript',
    'application/typescript',
    'application/graphql',
)

BINARY_MEDIA_PREFIXES: tuple[str, ...] = (
    'image/',
    'audio/',
    'video/',
    'application/pdf',
    'application/zip',
    'application/x-zip-compressed',
    'application/gzip',
    'application/x-gzip',
    'application/x-tar',
    'application/x-7z-compressed',
    'application/x-rar-compressed',
    'application/vnd.rar',
    'application/x-bzip2',
    'application/x-xz',
)

# Declared types that carry no information about the content
GENERIC_MEDIA_TYPES = frozenset({
    '',
    'application/octet-stream',
    'application/x-empty',
    'binary/octet-stream',
})

TEXT_EXTENSIONS = frozenset({
    # Plain and structured text
    'txt', 'md', 'markdown', 'rst', 'json', 'yaml', 'yml', 'xml', 'toml',
    'csv', 'tsv', 'ini', 'cfg', 'conf', 'log', 'graphql', 'gql', 'sql',
    # Web
    'ts', 'tsx', 'js', 'jsx', 'mjs', 'cjs', 'css', 'scss', 'less',
    'html', 'htm', 'vue', 'svelte',
    # Source code
    'py', 'pyi', 'rb', 'php', 'pl', 'lua', 'go', 'rs', 'java', 'kt',
    'scala', 'swift', 'c', 'h', 'cc', 'cpp', 'hpp', 'cs', 'm', 'r',
    'sh', 'bash', 'zsh', 'ps1', 'bat',
})

# ASCII control codes that do not appear in ordinary text.
# BEL, BS, TAB, LF, VT, FF and CR (0x07-0x0D) are not counted.
CONTROL_BYTES = frozenset(range(0x00, 0x07)) | frozenset(range(0x0E, 0x20))


@dataclass
class ClassifierOptions:
    """Tunable parameters for content sniffing."""
    sniff_bytes: int = DEFAULT_SNIFF_BYTES
    control_ratio_threshold: float = DEFAULT_CONTROL_RATIO_THRESHOLD
    extra_text_extensions: frozenset[str] = field(default_factory=frozenset)

    def is_text_extension(self, extension: str) -> bool:
        return extension in TEXT_EXTENSIONS or extension in self.extra_text_extensions


def normalize_media_type(media_type: Optional[str]) -> str:
    """Lowercase a media type and drop any parameters."""
    if not media_type:
        return ''
    return media_type.split(';', 1)[0].strip().lower()


def normalize_extension(extension: Optional[str]) -> str:
    """Lowercase an extension and drop any leading dot."""
    if not extension:
        return ''
    return extension.strip().lstrip('.').lower()


def media_type_is_text(media_type: str) -> Optional[bool]:
    """
    Look up a normalized media type in the prefix tables.

    Returns:
        True for text types, False for binary types, None if undecided
    """
    if media_type.startswith(TEXT_MEDIA_PREFIXES):
        return True
    if media_type.startswith(BINARY_MEDIA_PREFIXES):
        return False
    return None


def control_ratio(data: bytes, sniff_bytes: int = DEFAULT_SNIFF_BYTES) -> float:
    """
    Fraction of control bytes in the leading sample.

    A NUL byte anywhere in the sample short-circuits to 1.0.
    """
    sample = data[:sniff_bytes]
    if not sample:
        return 0.0
    if b'\x00' in sample:
        return 1.0
    control_count = sum(1 for byte in sample if byte in CONTROL_BYTES)
    return control_count / len(sample)


class ContentClassifier:
    """
    Classifier for raw byte buffers.

    Stateless apart from its options; one instance can be shared across
    threads.
    """

    def __init__(self, options: Optional[ClassifierOptions] = None):
        self.options = options or ClassifierOptions()

    def classify(
        self,
        data: bytes,
        hint: Optional[ClassificationHint] = None
    ) -> Classification:
        """
        Classify a buffer as text or binary.

        Args:
            data: Full contents of the input
            hint: Optional declared media type and file extension

        Returns:
            Classification with a verdict and a non-empty media type
        """
        hint = hint or ClassificationHint()

        signature = sniff_signature(data)
        if signature is not None:
            logging.debug(f"ContentClassifier - Signature matched {signature.media_type}")
            return Classification(is_text=signature.is_text, media_type=signature.media_type)

        declared = (hint.declared_media_type or '').strip()
        normalized = normalize_media_type(declared)
        extension = normalize_extension(hint.file_extension)
        extension_is_text = bool(extension) and self.options.is_text_extension(extension)

        media_type = declared or (PLAIN_TEXT_TYPE if extension_is_text else GENERIC_BINARY_TYPE)

        if normalized not in GENERIC_MEDIA_TYPES:
            verdict = media_type_is_text(normalized)
            if verdict is not None:
                return Classification(is_text=verdict, media_type=media_type)

        if extension_is_text:
            return Classification(is_text=True, media_type=media_type)

        ratio = control_ratio(data, self.options.sniff_bytes)
        is_text = ratio < self.options.control_ratio_threshold
        logging.debug(f"ContentClassifier - Control ratio {ratio:.3f}, text={is_text}")
        return Classification(is_text=is_text, media_type=media_type)


def classify(
    data: bytes,
    hint: Optional[ClassificationHint] = None,
    options: Optional[ClassifierOptions] = None
) -> Classification:
    """Classify a buffer with default or supplied options."""
    return ContentClassifier(options).classify(data, hint)
