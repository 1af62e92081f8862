"""
Magic-number signatures for known container formats.

The table is checked against the leading bytes of a buffer. A match is
authoritative: its media type wins over any caller-supplied hint, and the
entry itself says whether the container holds text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Signature:
    """A magic-number prefix, optionally at an offset."""
    magic: bytes
    media_type: str
    is_text: bool = False
    offset: int = 0
    # Second marker for container formats such as RIFF
    marker: bytes = b''
    marker_offset: int = 0

    @property
    def required_length(self) -> int:
        """Minimum buffer length needed to test this signature."""
        return max(
            self.offset + len(self.magic),
            self.marker_offset + len(self.marker),
        )

    def matches(self, header: bytes) -> bool:
        if len(header) < self.required_length:
            return False
        if header[self.offset:self.offset + len(self.magic)] != self.magic:
            return False
        if self.marker:
            end = self.marker_offset + len(self.marker)
            return header[self.marker_offset:end] == self.marker
        return True


# Ordered: more specific entries come before shorter prefixes they share.
SIGNATURES: tuple[Signature, ...] = (
    # Images
    Signature(b'\x89PNG\r\n\x1a\n', 'image/png'),
    Signature(b'\xff\xd8\xff', 'image/jpeg'),
    Signature(b'GIF87a', 'image/gif'),
    Signature(b'GIF89a', 'image/gif'),
    Signature(b'RIFF', 'image/webp', marker=b'WEBP', marker_offset=8),
    Signature(b'BM', 'image/bmp', marker=b'\x00\x00\x00\x00', marker_offset=6),
    Signature(b'II*\x00', 'image/tiff'),
    Signature(b'MM\x00*', 'image/tiff'),
    Signature(b'\x00\x00\x01\x00', 'image/x-icon'),
    Signature(b'8BPS', 'image/vnd.adobe.photoshop'),
    # Audio
    Signature(b'RIFF', 'audio/wav', marker=b'WAVE', marker_offset=8),
    Signature(b'ID3', 'audio/mpeg'),
    Signature(b'fLaC', 'audio/x-flac'),
    Signature(b'OggS', 'audio/ogg'),
    Signature(b'MThd', 'audio/midi'),
    # Video
    Signature(b'RIFF', 'video/vnd.avi', marker=b'AVI ', marker_offset=8),
    Signature(b'ftypqt', 'video/quicktime', offset=4),
    Signature(b'ftyp', 'video/mp4', offset=4),
    Signature(b'\x1aE\xdf\xa3', 'video/webm'),
    # Documents
    Signature(b'%PDF-', 'application/pdf'),
    Signature(b'{\\rtf', 'application/rtf', is_text=True),
    Signature(b'<?xml ', 'application/xml', is_text=True),
    # Archives and compressed streams
    Signature(b'PK\x03\x04', 'application/zip'),
    Signature(b'PK\x05\x06', 'application/zip'),
    Signature(b'PK\x07\x08', 'application/zip'),
    Signature(b'\x1f\x8b', 'application/gzip'),
    Signature(b'BZh', 'application/x-bzip2'),
    Signature(b'\xfd7zXZ\x00', 'application/x-xz'),
    Signature(b"7z\xbc\xaf'\x1c", 'application/x-7z-compressed'),
    Signature(b'Rar!\x1a\x07', 'application/x-rar-compressed'),
    Signature(b'(\xb5/\xfd', 'application/zstd'),
    Signature(b'ustar', 'application/x-tar', offset=257),
    # Fonts
    Signature(b'wOFF', 'font/woff'),
    Signature(b'wOF2', 'font/woff2'),
    Signature(b'OTTO\x00', 'font/otf'),
    Signature(b'\x00\x01\x00\x00\x00', 'font/ttf'),
    # Executables and bytecode
    Signature(b'\x7fELF', 'application/x-elf'),
    Signature(b'\x00asm', 'application/wasm'),
    Signature(b'\xca\xfe\xba\xbe', 'application/java-vm'),
    Signature(b'\xcf\xfa\xed\xfe', 'application/x-mach-binary'),
    Signature(b'\xce\xfa\xed\xfe', 'application/x-mach-binary'),
    # Databases
    Signature(b'SQLite format 3\x00', 'application/x-sqlite3'),
)

# Enough leading bytes to evaluate every entry in the table.
HEADER_SIZE = max(signature.required_length for signature in SIGNATURES)


def sniff_signature(data: bytes) -> Optional[Signature]:
    """Return the first signature matching the leading bytes, if any."""
    header = data[:HEADER_SIZE]
    for signature in SIGNATURES:
        if signature.matches(header):
            return signature
    return None
