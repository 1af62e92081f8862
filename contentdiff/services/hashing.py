"""
Hashing for content identity checks.
"""

import hashlib


def hash_buffer(data: bytes) -> str:
    """Hex SHA-256 digest of a buffer."""
    return hashlib.sha256(data).hexdigest()
