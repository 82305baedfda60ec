"""
Utility functions for the string searcher
"""
import os
import time
from dataclasses import dataclass
from typing import List
import psutil


@dataclass(frozen=True)
class DirectoryEntry:
    """One immediate entry of a directory listing"""
    path: str
    name: str
    is_dir: bool
    is_file: bool


def list_directory_entries(directory: str) -> List[DirectoryEntry]:
    """
    List the immediate entries of a directory

    Symlinked directories are reported as neither file nor directory so
    that a walk never follows them. Symlinked files count as files.

    Args:
        directory: Directory to list

    Returns:
        List of entries in the order the filesystem returns them

    Raises:
        OSError: If the directory cannot be listed
    """
    entries = []
    with os.scandir(directory) as it:
        for entry in it:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = not is_dir and entry.is_file()
            except OSError:
                is_dir = is_file = False
            entries.append(DirectoryEntry(entry.path, entry.name, is_dir, is_file))
    return entries


def get_hardware_concurrency() -> int:
    """Number of logical CPUs, at least 1"""
    return psutil.cpu_count(logical=True) or 1


class MonotonicClock:
    """Clock collaborator backed by ``time.perf_counter``"""

    def now(self) -> float:
        return time.perf_counter()


def format_duration(seconds: float) -> str:
    """
    Format a duration in human readable format

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string
    """
    if seconds < 1:
        return f"{int(seconds * 1000)} milliseconds"
    if seconds < 60:
        return f"{seconds:.2f} seconds"
    return f"{int(seconds // 60)} minutes {int(seconds % 60)} seconds"
