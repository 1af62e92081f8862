"""
Background workers for non-blocking comparisons.

Provides QObject workers, movable to a QThread, for:
- Comparing one file pair
- Comparing a batch of independent file pairs

All workers use Qt signals for thread-safe communication
with the caller's thread.
"""

from contentdiff.workers.base_worker import (
    BaseWorker,
    CancelledException,
    WorkerSignals,
    WorkerState,
)
from contentdiff.workers.compare_worker import (
    BatchCompareWorker,
    PairCompareWorker,
    PairOutcome,
)

__all__ = [
    # Base
    'BaseWorker',
    'CancelledException',
    'WorkerSignals',
    'WorkerState',
    # Compare
    'BatchCompareWorker',
    'PairCompareWorker',
    'PairOutcome',
]
