"""
Test result aggregation
"""
import threading
import pytest
from string_searcher.core.models import SearchWarning, WarningKind
from string_searcher.search.aggregator import ResultAggregator


class TestResultAggregator:
    """Test thread-safe recording"""

    def test_record_keeps_order(self):
        aggregator = ResultAggregator()
        for line in (1, 4, 9):
            aggregator.record("a.txt", line)

        assert aggregator.snapshot() == {"a.txt": [1, 4, 9]}

    def test_snapshot_is_a_copy(self):
        aggregator = ResultAggregator()
        aggregator.record("a.txt", 1)

        snapshot = aggregator.snapshot()
        snapshot["a.txt"].append(99)

        assert aggregator.snapshot() == {"a.txt": [1]}

    def test_concurrent_writers(self):
        aggregator = ResultAggregator()

        def worker(index):
            for line in range(1, 501):
                aggregator.record(f"file{index}", line)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        snapshot = aggregator.snapshot()
        assert len(snapshot) == 8
        for lines in snapshot.values():
            assert lines == list(range(1, 501))

    def test_warnings(self):
        aggregator = ResultAggregator()
        warning = SearchWarning(kind=WarningKind.UNREADABLE_FILE, path="x", message="gone")
        aggregator.add_warning(warning)

        assert aggregator.warnings() == [warning]


if __name__ == '__main__':
    pytest.main([__file__])
