"""Services module - file access, hashing, settings and result assembly."""

from contentdiff.services.comparison import ComparisonError, ComparisonService
from contentdiff.services.file_io import FileIOService, ReadResult, extension_of
from contentdiff.services.hashing import hash_buffer
from contentdiff.services.settings import ApplicationSettings, SettingsManager

__all__ = [
    'ApplicationSettings',
    'ComparisonError',
    'ComparisonService',
    'FileIOService',
    'ReadResult',
    'SettingsManager',
    'extension_of',
    'hash_buffer',
]
