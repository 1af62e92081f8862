"""Tests for Qt comparison workers, run synchronously."""

import pytest

from contentdiff.workers.base_worker import WorkerState
from contentdiff.workers.compare_worker import BatchCompareWorker, PairCompareWorker


pytestmark = pytest.mark.usefixtures("qt_core_app")


class TestPairCompareWorker:

    def test_completes_with_result(self, write_file):
        left = write_file("a.txt", "one\ntwo\n")
        right = write_file("b.txt", "one\n2\n")
        worker = PairCompareWorker(left, right)
        finished = []
        statuses = []
        worker.signals.finished.connect(finished.append)
        worker.signals.status.connect(statuses.append)

        worker.run()

        assert worker.state == WorkerState.COMPLETED
        assert worker.result.summary.modified == 1
        assert finished == [worker.result]
        assert statuses[-1] == "Complete"

    def test_unreadable_input_fails(self, write_file, tmp_path):
        left = write_file("a.txt", "one\n")
        worker = PairCompareWorker(left, tmp_path / "missing.txt")
        errors = []
        worker.signals.error.connect(lambda kind, message: errors.append((kind, message)))

        worker.run()

        assert worker.state == WorkerState.FAILED
        assert worker.result is None
        assert worker.error[0] == "ComparisonError"
        assert errors == [worker.error]


class TestBatchCompareWorker:

    def test_compares_all_pairs(self, write_file, tmp_path):
        pairs = [
            (write_file("a1.txt", "x\n"), write_file("b1.txt", "x\n")),
            (write_file("a2.txt", "x\n"), tmp_path / "missing.txt"),
            (write_file("a3.txt", "x\n"), write_file("b3.txt", "y\n")),
        ]
        worker = BatchCompareWorker(pairs)
        compared = []
        progress = []
        worker.pair_compared.connect(lambda index, outcome: compared.append(index))
        worker.signals.progress.connect(lambda current, total, message: progress.append(current))

        worker.run()

        outcomes = worker.result
        assert worker.state == WorkerState.COMPLETED
        assert [outcome.success for outcome in outcomes] == [True, False, True]
        assert outcomes[0].result.summary.identical is True
        assert "File not found" in outcomes[1].error
        assert outcomes[2].result.summary.modified == 1
        assert compared == [0, 1, 2]
        assert progress == [0, 1, 2, 3]

    def test_cancelled_before_start(self, write_file):
        pairs = [(write_file("a.txt", "x\n"), write_file("b.txt", "y\n"))]
        worker = BatchCompareWorker(pairs)
        cancelled = []
        worker.signals.cancelled.connect(lambda: cancelled.append(True))

        worker.cancel()
        worker.run()

        assert worker.state == WorkerState.CANCELLED
        assert worker.result is None
        assert cancelled == [True]

    def test_cancelled_between_pairs(self, write_file):
        pairs = [
            (write_file("a1.txt", "x\n"), write_file("b1.txt", "y\n")),
            (write_file("a2.txt", "x\n"), write_file("b2.txt", "y\n")),
        ]
        worker = BatchCompareWorker(pairs)
        compared = []
        finished = []

        def on_pair(index, outcome):
            compared.append(index)
            worker.cancel()

        worker.pair_compared.connect(on_pair)
        worker.signals.finished.connect(finished.append)

        worker.run()

        assert worker.state == WorkerState.CANCELLED
        assert compared == [0]
        assert finished == []

    def test_empty_batch(self):
        worker = BatchCompareWorker([])
        worker.run()
        assert worker.state == WorkerState.COMPLETED
        assert worker.result == []
