"""
Result types returned by the search engine
"""
from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class WarningKind(str, Enum):
    """I/O conditions that are reported but never abort a search"""
    UNREADABLE_FILE = "unreadable_file"
    UNREADABLE_DIRECTORY = "unreadable_directory"


class SearchWarning(BaseModel):
    """A file or directory that had to be skipped"""
    model_config = ConfigDict(frozen=True)

    kind: WarningKind
    path: str
    message: str = ""


class SearchStatistics(BaseModel):
    """Counters collected during one search"""
    files_searched: int = 0
    files_unreadable: int = 0
    directories_unreadable: int = 0
    total_matches: int = 0
    worker_count: int = 0
    elapsed_seconds: Optional[float] = None


class SearchResult(BaseModel):
    """
    Outcome of one search invocation

    ``matches`` maps each file path to its matching line numbers, 1-based and
    strictly increasing. Files without matches are absent.
    """
    matches: Dict[str, List[int]] = Field(default_factory=dict)
    statistics: SearchStatistics = Field(default_factory=SearchStatistics)
    warnings: List[SearchWarning] = Field(default_factory=list)

    @property
    def total_matches(self) -> int:
        return sum(len(lines) for lines in self.matches.values())

    def sorted_matches(self) -> List[tuple]:
        """Return (path, line numbers) pairs ordered by path"""
        return sorted(self.matches.items())
