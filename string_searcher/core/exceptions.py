"""
Exception types for the string searcher
"""


class SearchError(Exception):
    """Base class for errors raised by the search engine"""


class InvalidConfiguration(SearchError, ValueError):
    """
    Raised when a search is configured in a way that cannot run.

    Always raised before the filesystem is touched, so no partial work
    is ever attempted for an invalid configuration.
    """
