"""Negascout (principal variation search) for any two-player game.

Quick start::

    from negascout import NegascoutEngine

    result = NegascoutEngine().search(state, depth=6)
    print(result.score, result.best_line)

``state`` can be any object implementing :class:`IGameState`.
"""

from negascout.engine import NegascoutEngine, applied, negascout
from negascout.errors import (
    InvalidOptionError,
    InvalidSearchError,
    MoveOrderError,
    SearchError,
)
from negascout.heuristics import HeuristicEngine
from negascout.search import (
    DEFAULT_OPTIONS,
    INF,
    IGameState,
    SearchOptions,
    SearchResult,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_OPTIONS",
    "INF",
    "HeuristicEngine",
    "IGameState",
    "InvalidOptionError",
    "InvalidSearchError",
    "MoveOrderError",
    "NegascoutEngine",
    "SearchError",
    "SearchOptions",
    "SearchResult",
    "applied",
    "negascout",
]
