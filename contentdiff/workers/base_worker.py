"""
Base class for comparison workers.

A worker is a QObject whose `run` slot can be invoked directly or
after `moveToThread`; results and failures are reported through
`WorkerSignals`.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Any, Optional

from PyQt6.QtCore import QMutex, QMutexLocker, QObject, pyqtSignal, pyqtSlot


class WorkerState(Enum):
    """Lifecycle of a worker run."""
    PENDING = auto()
    RUNNING = auto()
    CANCELLED = auto()
    COMPLETED = auto()
    FAILED = auto()


class WorkerSignals(QObject):
    """Signals shared by all comparison workers."""
    started = pyqtSignal()
    progress = pyqtSignal(int, int, str)  # (done, total, label)
    status = pyqtSignal(str)
    finished = pyqtSignal(object)  # result
    error = pyqtSignal(str, str)  # (exception name, message)
    cancelled = pyqtSignal()


class CancelledException(Exception):
    """Raised inside `do_work` to stop at a cancellation point."""
    pass


class BaseWorker(QObject):
    """
    Runs `do_work` once and reports how it ended.

    Subclasses implement `do_work` and call `check_cancelled` between
    units of work.
    """

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.signals = WorkerSignals()
        self._lock = QMutex()
        self._cancel_requested = False
        self._state = WorkerState.PENDING
        self._result: Any = None
        self._error: Optional[tuple[str, str]] = None

    @property
    def state(self) -> WorkerState:
        with QMutexLocker(self._lock):
            return self._state

    @property
    def is_cancelled(self) -> bool:
        with QMutexLocker(self._lock):
            return self._cancel_requested

    @property
    def result(self) -> Any:
        return self._result

    @property
    def error(self) -> Optional[tuple[str, str]]:
        return self._error

    def cancel(self) -> None:
        """Ask the worker to stop at its next cancellation point."""
        with QMutexLocker(self._lock):
            self._cancel_requested = True

    def _set_state(self, state: WorkerState) -> None:
        with QMutexLocker(self._lock):
            self._state = state

    @pyqtSlot()
    def run(self) -> None:
        self._set_state(WorkerState.RUNNING)
        self.signals.started.emit()
        name = type(self).__name__

        try:
            result = self.do_work()
        except CancelledException:
            result = None
        except Exception as e:
            logging.error(f"{name} - Failed: {e}")
            self._error = (type(e).__name__, str(e))
            self._set_state(WorkerState.FAILED)
            self.signals.error.emit(*self._error)
            return

        if self.is_cancelled:
            logging.info(f"{name} - Cancelled")
            self._set_state(WorkerState.CANCELLED)
            self.signals.cancelled.emit()
            return

        self._result = result
        self._set_state(WorkerState.COMPLETED)
        self.signals.finished.emit(result)

    def do_work(self) -> Any:
        raise NotImplementedError

    def report_progress(self, done: int, total: int, label: str = "") -> None:
        self.signals.progress.emit(done, total, label)

    def report_status(self, message: str) -> None:
        self.signals.status.emit(message)

    def check_cancelled(self) -> None:
        """Raise CancelledException if `cancel` was called."""
        if self.is_cancelled:
            raise CancelledException("Operation cancelled")
