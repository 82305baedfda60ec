"""
Search engine orchestrating the walk, the workers and the aggregation
"""
import os
import threading
from enum import Enum
from typing import Callable, List, Optional, Protocol, Sequence
from string_searcher.core.config import SearchConfig
from string_searcher.core.models import SearchResult, SearchStatistics, WarningKind
from string_searcher.search.aggregator import ResultAggregator
from string_searcher.search.partition import partition
from string_searcher.search.patterns import LineScanner
from string_searcher.storage.walker import DirectoryWalker, ListEntries
from string_searcher.utils.helpers import get_hardware_concurrency, list_directory_entries
from string_searcher.utils.logger import get_logger


class Clock(Protocol):
    def now(self) -> float:
        ...


def run_workers(tasks: Sequence[Callable[[], object]]):
    """
    Run each task on its own thread and wait for all of them

    Threads are named ``scan-worker-<n>``. The first exception raised by a
    task is re-raised once every thread has joined.
    """
    errors: List[Exception] = []
    errors_lock = threading.Lock()

    def guarded(task):
        try:
            task()
        except Exception as e:
            with errors_lock:
                errors.append(e)

    threads = [
        threading.Thread(target=guarded, args=(task,), name=f"scan-worker-{index}")
        for index, task in enumerate(tasks)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    if errors:
        raise errors[0]


class EngineState(str, Enum):
    IDLE = "idle"
    WALKING = "walking"
    PARTITIONING = "partitioning"
    SCANNING = "scanning"
    JOINED = "joined"
    DONE = "done"


class SearchEngine:
    """
    Main search engine

    A recursive search walks the tree, splits the files into one batch per
    worker and scans the batches on their own threads. A single-file search
    scans the one file on the calling thread.
    """

    def __init__(self, worker_count: Optional[int] = None, clock: Optional[Clock] = None,
                 list_entries: ListEntries = list_directory_entries):
        if worker_count is not None and worker_count < 1:
            raise ValueError(f"worker_count must be at least 1, got {worker_count}")
        self.worker_count = worker_count or get_hardware_concurrency()
        self.clock = clock
        self.list_entries = list_entries
        self.logger = get_logger("SearchEngine")
        self.state = EngineState.IDLE
        self.transitions: List[EngineState] = [EngineState.IDLE]

    def search(self, config: SearchConfig) -> SearchResult:
        """
        Run one search

        Args:
            config: Validated search configuration

        Returns:
            SearchResult with matches, statistics and I/O warnings
        """
        self.state = EngineState.IDLE
        self.transitions = [EngineState.IDLE]
        started = self.clock.now() if self.clock else None

        self.logger.info(
            f"Starting search: pattern='{config.pattern}', recursive={config.recursive}, "
            f"ignore_case={config.case_insensitive}"
        )

        aggregator = ResultAggregator()
        scanner = LineScanner(warning_sink=aggregator.add_warning)

        if config.recursive:
            statistics = self._search_tree(config, scanner, aggregator)
        else:
            statistics = self._search_file(config, scanner, aggregator)

        matches = aggregator.snapshot()
        warnings = aggregator.warnings()
        statistics.total_matches = sum(len(lines) for lines in matches.values())
        statistics.files_unreadable = sum(1 for w in warnings if w.kind == WarningKind.UNREADABLE_FILE)
        statistics.directories_unreadable = sum(
            1 for w in warnings if w.kind == WarningKind.UNREADABLE_DIRECTORY
        )
        if started is not None:
            statistics.elapsed_seconds = self.clock.now() - started

        self._transition(EngineState.DONE)
        self.logger.info(
            f"Search completed: {statistics.total_matches} matches in {len(matches)} files, "
            f"{statistics.files_searched} files searched"
        )
        return SearchResult(matches=matches, statistics=statistics, warnings=warnings)

    def _search_file(self, config: SearchConfig, scanner: LineScanner,
                     aggregator: ResultAggregator) -> SearchStatistics:
        file_path = os.path.join(os.path.abspath(config.root), config.file_path)

        self._transition(EngineState.SCANNING)
        opened = scanner.scan_batch((file_path,), config.pattern, config.case_insensitive, aggregator)
        return SearchStatistics(files_searched=opened, worker_count=1)

    def _search_tree(self, config: SearchConfig, scanner: LineScanner,
                     aggregator: ResultAggregator) -> SearchStatistics:
        self._transition(EngineState.WALKING)
        walker = DirectoryWalker(self.list_entries, warning_sink=aggregator.add_warning)
        files = tuple(walker.walk(config.root, config.mask, config.max_depth))

        self._transition(EngineState.PARTITIONING)
        batches = partition(files, self.worker_count)
        statistics = SearchStatistics(files_searched=len(files), worker_count=len(batches))

        if not batches:
            self.logger.info("No files matched the mask, nothing to scan")
            return statistics

        self._transition(EngineState.SCANNING)
        self.logger.debug(f"Scanning {len(files)} files on {len(batches)} workers")

        run_workers([
            lambda batch=batch: scanner.scan_batch(batch, config.pattern, config.case_insensitive, aggregator)
            for batch in batches
        ])

        self._transition(EngineState.JOINED)
        return statistics

    def _transition(self, state: EngineState):
        self.logger.debug(f"State {self.state.value} -> {state.value}")
        self.state = state
        self.transitions.append(state)


def search(pattern: str, root: str = ".", mask: Optional[str] = None, recursive: bool = True,
           case_insensitive: bool = False, max_depth: int = 0, file_path: Optional[str] = None,
           worker_count: Optional[int] = None, clock: Optional[Clock] = None) -> SearchResult:
    """
    Convenience wrapper building the configuration and running one search

    Raises:
        InvalidConfiguration: If the arguments do not form a valid search
    """
    config = SearchConfig.create(
        pattern=pattern,
        root=root,
        mask=mask,
        recursive=recursive,
        case_insensitive=case_insensitive,
        max_depth=max_depth,
        file_path=file_path,
    )
    return SearchEngine(worker_count=worker_count, clock=clock).search(config)
