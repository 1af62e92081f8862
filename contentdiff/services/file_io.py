"""
File I/O service for reading inputs and decoding text.

Handles:
- Reading raw bytes with size guards
- Encoding detection (BOM, UTF-8, chardet)
- Permissive decoding that never raises
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import chardet


@dataclass
class ReadResult:
    """Result of a file read operation."""
    success: bool
    data: bytes = b''
    error: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class DecodedText:
    """Decoded text with the encoding that produced it."""
    text: str
    encoding: str
    bom: bool = False
    replaced: bool = False  # True if invalid sequences were substituted


# Byte order marks, longest first
BOMS = (
    (b'\xef\xbb\xbf', 'utf-8-sig'),
    (b'\xff\xfe', 'utf-16-le'),
    (b'\xfe\xff', 'utf-16-be'),
)


def extension_of(name: str) -> str:
    """
    Lowercase extension of a file name without the dot.

    Returns an empty string when there is no extension or the name
    ends with a dot.
    """
    last = name.rfind('.')
    if last == -1 or last == len(name) - 1:
        return ''
    return name[last + 1:].lower()


class FileIOService:
    """Service for safe file reading and text decoding."""

    def __init__(
        self,
        default_encoding: str = 'utf-8',
        detection_confidence: float = 0.7
    ):
        self.default_encoding = default_encoding
        self.detection_confidence = detection_confidence

    def read_bytes(
        self,
        path: Path | str,
        max_size: Optional[int] = None
    ) -> ReadResult:
        """
        Read the full contents of a file.

        Args:
            path: Path to the file
            max_size: Maximum file size in bytes (no limit if None)

        Returns:
            ReadResult with the bytes or error information
        """
        path = Path(path)

        if not path.exists():
            return ReadResult(success=False, error=f"File not found: {path}")

        if not path.is_file():
            return ReadResult(success=False, error=f"Not a file: {path}")

        try:
            if max_size is not None:
                file_size = path.stat().st_size
                if file_size > max_size:
                    return ReadResult(
                        success=False,
                        error=f"File too large ({file_size / 1024 / 1024:.2f} MB). "
                              f"Max size is {max_size / 1024 / 1024:.2f} MB."
                    )

            return ReadResult(success=True, data=path.read_bytes())

        except PermissionError:
            logging.warning(f"FileIOService - Permission denied reading {path}")
            return ReadResult(success=False, error=f"Permission denied: {path}")
        except OSError as e:
            logging.warning(f"FileIOService - Failed to read {path}: {e}")
            return ReadResult(success=False, error=f"OS error: {e}")

    def decode_text(self, data: bytes) -> DecodedText:
        """
        Decode bytes classified as text.

        Tries a byte order mark, then strict UTF-8, then chardet's guess
        when it is confident enough, and finally the default encoding
        with invalid sequences replaced. Never raises.
        """
        for bom, encoding in BOMS:
            if not data.startswith(bom):
                continue
            payload = data[len(bom):]
            codec = encoding.replace('-sig', '')
            try:
                return DecodedText(text=payload.decode(codec), encoding=encoding, bom=True)
            except UnicodeDecodeError:
                logging.debug(f"FileIOService - Invalid {codec} after byte order mark")
                return DecodedText(
                    text=payload.decode(codec, errors='replace'),
                    encoding=encoding,
                    bom=True,
                    replaced=True
                )

        try:
            return DecodedText(text=data.decode('utf-8'), encoding='utf-8')
        except UnicodeDecodeError:
            logging.debug("FileIOService - Content is not valid UTF-8, detecting encoding")

        detected = self._detect_encoding(data)
        if detected:
            try:
                return DecodedText(text=data.decode(detected), encoding=detected)
            except (UnicodeDecodeError, LookupError) as e:
                logging.debug(f"FileIOService - Detected encoding {detected} failed: {e}")

        return DecodedText(
            text=data.decode(self.default_encoding, errors='replace'),
            encoding=self.default_encoding,
            replaced=True
        )

    def _detect_encoding(self, data: bytes) -> Optional[str]:
        """Guess the encoding with chardet, if confident enough."""
        if not data:
            return None

        result = chardet.detect(data)
        encoding = result.get('encoding')
        confidence = result.get('confidence') or 0.0

        if encoding and confidence > self.detection_confidence:
            encoding = encoding.lower()
            # ASCII is a subset of UTF-8
            if encoding == 'ascii':
                return 'utf-8'
            return encoding

        return None
