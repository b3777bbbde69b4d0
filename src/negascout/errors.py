"""Exceptions raised by the search engine itself.

Errors coming from a game state or a hook are never wrapped; they reach the
caller unchanged once the state has been restored.
"""


class SearchError(Exception):
    """Base class for engine-detected contract violations."""


class InvalidSearchError(SearchError, ValueError):
    """Raised for a bad depth, colour or search window."""


class InvalidOptionError(SearchError, ValueError):
    """Raised for unknown or out-of-range search options."""


class MoveOrderError(SearchError):
    """Raised when move ordering yields a move the state does not offer."""
