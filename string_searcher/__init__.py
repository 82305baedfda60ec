"""
String Searcher

A parallel, line-oriented substring search over a file or a directory tree,
reporting which files contain a pattern and on which lines.
"""

__version__ = "0.1.0"

from .core.config import SearchConfig, FileMask
from .core.exceptions import SearchError, InvalidConfiguration
from .core.models import SearchResult, SearchStatistics, SearchWarning, WarningKind
from .search.engine import SearchEngine, search

__all__ = [
    "SearchConfig",
    "FileMask",
    "SearchError",
    "InvalidConfiguration",
    "SearchResult",
    "SearchStatistics",
    "SearchWarning",
    "WarningKind",
    "SearchEngine",
    "search",
]
