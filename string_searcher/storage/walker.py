"""
Directory enumeration with mask and depth filtering
"""
import os
from typing import Callable, List, Optional, Tuple
from string_searcher.core.config import FileMask
from string_searcher.core.models import SearchWarning, WarningKind
from string_searcher.utils.helpers import DirectoryEntry, list_directory_entries
from string_searcher.utils.logger import get_logger


ListEntries = Callable[[str], List[DirectoryEntry]]
WarningSink = Callable[[SearchWarning], None]


class DirectoryWalker:
    """
    Enumerates candidate files below a root directory.

    The walk is iterative: pending directories live on an explicit stack,
    so arbitrarily deep trees cannot exhaust the interpreter's recursion
    limit. Only ``list_entries`` touches the filesystem; filtering and depth
    accounting are independent of the platform.
    """

    def __init__(self, list_entries: ListEntries = list_directory_entries,
                 warning_sink: Optional[WarningSink] = None):
        self.list_entries = list_entries
        self.warning_sink = warning_sink
        self.logger = get_logger("DirectoryWalker")

    def walk(self, root: str, mask: Optional[FileMask] = None, max_depth: int = 0) -> List[str]:
        """
        Collect the files below ``root`` that pass ``mask``

        Args:
            root: Directory to start from
            mask: File name filter, None matches everything
            max_depth: Deepest subdirectory level to enter, 0 for unlimited

        Returns:
            Absolute file paths in enumeration order
        """
        mask = mask or FileMask()
        root = os.path.abspath(root)
        files: List[str] = []

        # (directory, depth below root)
        stack: List[Tuple[str, int]] = [(root, 0)]

        while stack:
            directory, depth = stack.pop()

            try:
                entries = self.list_entries(directory)
            except OSError as e:
                self._report(directory, e)
                continue

            for entry in entries:
                if entry.is_dir:
                    if max_depth > 0 and depth + 1 > max_depth:
                        continue
                    stack.append((entry.path, depth + 1))
                elif entry.is_file and mask.matches(entry.name):
                    files.append(entry.path)

        self.logger.debug(f"Walk of {root} found {len(files)} files matching '{mask}'")
        return files

    def _report(self, directory: str, error: OSError):
        self.logger.warning(f"Could not list directory: {directory} ({error})")
        if self.warning_sink is not None:
            self.warning_sink(SearchWarning(
                kind=WarningKind.UNREADABLE_DIRECTORY,
                path=directory,
                message=str(error),
            ))
