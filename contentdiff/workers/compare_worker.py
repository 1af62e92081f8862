"""
Workers for file comparison operations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal

from contentdiff.core.models import CompareResult
from contentdiff.services.comparison import ComparisonError, ComparisonService
from contentdiff.services.settings import ApplicationSettings
from contentdiff.workers.base_worker import BaseWorker


class PairCompareWorker(BaseWorker):
    """
    Worker for comparing two files.

    Runs the comparison service in a background thread.
    """

    def __init__(
        self,
        left_path: str | Path,
        right_path: str | Path,
        settings: Optional[ApplicationSettings] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent=parent)
        self.left_path = Path(left_path)
        self.right_path = Path(right_path)
        self.settings = settings or ApplicationSettings()

    def do_work(self) -> CompareResult:
        """Perform the comparison."""
        self.report_status(f"Comparing {self.left_path.name}...")
        service = ComparisonService(self.settings)

        result = service.compare_files(self.left_path, self.right_path)

        self.report_status("Complete")
        return result


@dataclass
class PairOutcome:
    """Outcome of one pair in a batch."""
    left_path: Path
    right_path: Path
    result: Optional[CompareResult] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.result is not None


class BatchCompareWorker(BaseWorker):
    """
    Worker for comparing many independent file pairs.

    A pair that cannot be read is recorded with its error and the
    batch continues.
    """

    # Signal emitted for each pair compared
    pair_compared = pyqtSignal(int, object)  # (index, PairOutcome)

    def __init__(
        self,
        pairs: list[tuple[str | Path, str | Path]],
        settings: Optional[ApplicationSettings] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent=parent)
        self.pairs = [(Path(left), Path(right)) for left, right in pairs]
        self.settings = settings or ApplicationSettings()

    def do_work(self) -> list[PairOutcome]:
        """Compare all pairs in order."""
        outcomes: list[PairOutcome] = []
        service = ComparisonService(self.settings)
        total = len(self.pairs)

        for i, (left_path, right_path) in enumerate(self.pairs):
            self.check_cancelled()
            self.report_progress(i, total, left_path.name)

            outcome = PairOutcome(left_path=left_path, right_path=right_path)
            try:
                outcome.result = service.compare_files(left_path, right_path)
            except ComparisonError as e:
                logging.warning(f"BatchCompareWorker - Skipping {left_path} / {right_path}: {e}")
                outcome.error = str(e)

            outcomes.append(outcome)
            self.pair_compared.emit(i, outcome)

        self.report_progress(total, total, "Complete")
        return outcomes
