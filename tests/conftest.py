"""Shared test configuration for contentdiff."""

import logging

import pytest

from contentdiff.core.detect.classifier import ContentClassifier
from contentdiff.core.diff.text_diff import LineReconciler
from contentdiff.services.comparison import ComparisonService


PNG_HEADER = b'\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR'


@pytest.fixture
def classifier():
    return ContentClassifier()


@pytest.fixture
def reconciler():
    return LineReconciler()


@pytest.fixture
def service():
    return ComparisonService()


@pytest.fixture
def write_file(tmp_path):
    """Write bytes or text under tmp_path and return the path."""
    def _write(name, content):
        path = tmp_path / name
        if isinstance(content, str):
            content = content.encode('utf-8')
        path.write_bytes(content)
        return path
    return _write


@pytest.fixture(scope="session")
def qt_core_app():
    """A QCoreApplication for tests that exercise Qt workers."""
    from PyQt6.QtCore import QCoreApplication
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by setup_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
