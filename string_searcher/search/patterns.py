"""
Line scanning for search patterns
"""
from typing import Callable, Iterable, List, Optional, Tuple
from string_searcher.core.models import SearchWarning, WarningKind
from string_searcher.search.aggregator import ResultAggregator
from string_searcher.utils.logger import get_logger


Match = Tuple[str, int]
WarningSink = Callable[[SearchWarning], None]


def fold_ascii(data: bytes) -> bytes:
    """
    Lowercase ``A-Z`` only

    ``bytes.lower`` never touches bytes outside the ASCII range, so
    multi-byte UTF-8 sequences pass through unchanged.
    """
    return data.lower()


def encode_pattern(pattern: str, case_insensitive: bool = False) -> bytes:
    """Encode a search pattern for byte-wise comparison, folded if requested"""
    encoded = pattern.encode("utf-8")
    return fold_ascii(encoded) if case_insensitive else encoded


class LineScanner:
    """
    Scans files line by line for a substring.

    Files are read as bytes, so any encoding (or none) can be searched. An
    unopenable file is logged and reported to ``warning_sink``; it never
    raises.
    """

    def __init__(self, warning_sink: Optional[WarningSink] = None):
        self.warning_sink = warning_sink
        self.logger = get_logger("LineScanner")

    def scan(self, file_path: str, pattern: str, case_insensitive: bool = False) -> List[Match]:
        """
        Find the lines of a file that contain ``pattern``

        Args:
            file_path: File to scan
            pattern: Substring to look for
            case_insensitive: Fold ASCII letters before comparing

        Returns:
            (file_path, line_number) pairs in increasing line order, 1-based
        """
        needle = encode_pattern(pattern, case_insensitive)
        matches = []
        self._scan_lines(file_path, needle, case_insensitive,
                         lambda line_number: matches.append((file_path, line_number)))
        return matches

    def scan_batch(self, batch: Iterable[str], pattern: str, case_insensitive: bool,
                   aggregator: ResultAggregator) -> int:
        """
        Scan every file of a batch, recording matches into ``aggregator``

        Returns:
            Number of files in the batch that were read to the end. A file
            that fails to open or fails part way through is reported as
            unreadable and not counted, although matches found before the
            failure are kept.
        """
        needle = encode_pattern(pattern, case_insensitive)
        opened = 0

        for file_path in batch:
            def record(line_number, path=file_path):
                aggregator.record(path, line_number)

            if self._scan_lines(file_path, needle, case_insensitive, record):
                opened += 1

        return opened

    def _scan_lines(self, file_path: str, needle: bytes, case_insensitive: bool,
                    on_match: Callable[[int], None]) -> bool:
        try:
            f = open(file_path, 'rb')
        except OSError as e:
            self._report(file_path, e)
            return False

        try:
            with f:
                for line_number, line in enumerate(f, 1):
                    if case_insensitive:
                        line = fold_ascii(line)
                    if needle in line.rstrip(b"\r\n"):
                        on_match(line_number)
        except OSError as e:
            # Lines before the failure have already been reported
            self._report(file_path, e)
            return False

        return True

    def _report(self, file_path: str, error: OSError):
        self.logger.warning(f"Could not read file: {file_path} ({error})")
        if self.warning_sink is not None:
            self.warning_sink(SearchWarning(
                kind=WarningKind.UNREADABLE_FILE,
                path=file_path,
                message=str(error),
            ))
