"""
Thread-safe collection of search results
"""
import threading
from typing import Dict, List
from string_searcher.core.models import SearchWarning


class ResultAggregator:
    """
    Mapping from file path to matching line numbers, shared by all workers.

    The lock guards the mapping's structure only. Each file is scanned by a
    single worker from top to bottom, so its line numbers arrive in order.
    Read with ``snapshot()`` once every worker has finished.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._matches: Dict[str, List[int]] = {}
        self._warnings: List[SearchWarning] = []

    def record(self, file_path: str, line_number: int):
        with self._lock:
            self._matches.setdefault(file_path, []).append(line_number)

    def add_warning(self, warning: SearchWarning):
        with self._lock:
            self._warnings.append(warning)

    def snapshot(self) -> Dict[str, List[int]]:
        with self._lock:
            return {path: list(lines) for path, lines in self._matches.items()}

    def warnings(self) -> List[SearchWarning]:
        with self._lock:
            return list(self._warnings)
