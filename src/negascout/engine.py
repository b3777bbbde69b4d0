"""Negascout (principal variation search) over any :class:`IGameState`."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from negascout.errors import InvalidSearchError, MoveOrderError
from negascout.search import (
    DEFAULT_OPTIONS,
    INF,
    IGameState,
    Move,
    Score,
    SearchOptions,
    SearchResult,
)

_LOGGER = logging.getLogger(__name__)

OptionsArg = Mapping[str, Any] | SearchOptions | None


@contextmanager
def applied(state: IGameState, move: Move) -> Iterator[IGameState]:
    """Apply *move* for the duration of the block, undoing it on every exit."""
    state.apply(move)
    try:
        yield state
    finally:
        state.undo(move)


@dataclass(slots=True)
class _SearchContext:
    """Per-call state threaded through the recursion."""

    options: SearchOptions
    nodes: int = 0


def _validate(depth: int, alpha: Score, beta: Score, colour: int) -> None:
    if depth < 0:
        raise InvalidSearchError(f"Search depth must be >= 0, got {depth}")
    if type(colour) is not int or colour not in (1, -1):
        raise InvalidSearchError(f"colour must be 1 or -1, got {colour}")
    if not alpha < beta:
        raise InvalidSearchError(f"Empty search window: alpha={alpha}, beta={beta}")


class NegascoutEngine:
    """Negascout searcher with overridable cache and move-ordering hooks.

    Subclasses customise the search by overriding :meth:`cache_lookup`,
    :meth:`cache_update` and :meth:`order_moves`. Options passed to
    :meth:`search` are merged into the engine's options and kept for
    later calls until :meth:`reset_options` is used.
    """

    __slots__ = ("_options", "_nodes")

    def __init__(self, options: SearchOptions | None = None) -> None:
        self._options = options or DEFAULT_OPTIONS
        self._nodes = 0

    @property
    def options(self) -> SearchOptions:
        return self._options

    @property
    def nodes(self) -> int:
        """Nodes visited by the last search."""
        return self._nodes

    def reset_options(self) -> None:
        self._options = DEFAULT_OPTIONS

    def search(
        self,
        state: IGameState,
        depth: int = 10,
        alpha: Score = -INF,
        beta: Score = INF,
        colour: int = 1,
        options: OptionsArg = None,
    ) -> SearchResult:
        """Search *state* to *depth* plies inside the ``(alpha, beta)`` window.

        Args:
            state: Position to search. It is mutated during the search and
                restored before this method returns or raises.
            depth: Remaining plies, ``>= 0``.
            alpha: Lower bound of the interesting score range.
            beta: Upper bound of the interesting score range.
            colour: ``1`` if the side to move maximises ``evaluate()``,
                ``-1`` if it minimises it.
            options: A mapping of overrides merged into :attr:`options`, or a
                complete :class:`SearchOptions` that replaces them. Either
                way the result is kept for later searches.

        Returns:
            The score from the side to move's point of view and the best
            line found.
        """
        _validate(depth, alpha, beta, colour)
        self._options = self._options.merged(options)

        _LOGGER.debug(
            "Searching depth=%d window=(%s, %s) colour=%d %s",
            depth,
            alpha,
            beta,
            colour,
            self._options,
        )
        result = self._run(state, depth, alpha, beta, colour)
        _LOGGER.debug(
            "Search done: score=%s line=%s nodes=%d",
            result.score,
            result.best_line,
            self._nodes,
        )
        return result

    # ── Hooks ────────────────────────────────────────────────────────────

    def cache_lookup(self, state: IGameState, depth: int) -> Score | None:
        """Return a stored score for *state* to skip searching it.

        Scores are in the fixed perspective of ``state.evaluate()``.
        ``None`` means a miss; *depth* tells how deep the caller will search.
        """
        return None

    def cache_update(self, state: IGameState, depth: int, score: Score) -> None:
        """Record the *score* obtained for *state* searched to *depth*.

        Called once for every visited node, cache hits included. Scores
        from a narrowed window can be bounds rather than exact values.
        """

    def order_moves(
        self,
        state: IGameState,
        depth: int,
        alpha: Score,
        beta: Score,
        colour: int,
    ) -> Sequence[Move]:
        """Moves to explore at this node, most promising first."""
        return state.moves()

    # ── Recursion ────────────────────────────────────────────────────────

    def _run(
        self,
        state: IGameState,
        depth: int,
        alpha: Score,
        beta: Score,
        colour: int,
    ) -> SearchResult:
        ctx = _SearchContext(self._options)
        try:
            return self._negascout(ctx, state, depth, alpha, beta, colour)
        finally:
            self._nodes = ctx.nodes

    def _negascout(
        self,
        ctx: _SearchContext,
        state: IGameState,
        depth: int,
        alpha: Score,
        beta: Score,
        colour: int,
    ) -> SearchResult:
        ctx.nodes += 1

        cached = self.cache_lookup(state, depth)
        if cached is not None:
            self.cache_update(state, depth, cached)
            return SearchResult(colour * cached)

        if depth == 0 or state.is_terminal():
            result = SearchResult(colour * state.evaluate())
        else:
            result = self._maximize_alpha(ctx, state, depth, alpha, beta, colour)

        self.cache_update(state, depth, colour * result.score)
        return result

    def _maximize_alpha(
        self,
        ctx: _SearchContext,
        state: IGameState,
        depth: int,
        alpha: Score,
        beta: Score,
        colour: int,
    ) -> SearchResult:
        moves = self.order_moves(state, depth, alpha, beta, colour)
        if ctx.options.check_moves:
            moves = list(moves)
            self._check_moves(state, moves)

        best = SearchResult(alpha)
        for index, move in enumerate(moves):
            with applied(state, move):
                result = self._search_child(
                    ctx, state, index == 0, depth, alpha, beta, colour
                )
            if result.score > alpha:
                best = result.prepend(move)
                alpha = result.score
            if alpha >= beta:
                break
        return best

    def _search_child(
        self,
        ctx: _SearchContext,
        child: IGameState,
        first: bool,
        depth: int,
        alpha: Score,
        beta: Score,
        colour: int,
    ) -> SearchResult:
        depth -= 1
        colour = -colour

        # No null window exists once alpha + 1 rounds back to alpha.
        if first or not ctx.options.null_window or alpha + 1 == alpha:
            return self._negascout(ctx, child, depth, -beta, -alpha, colour).negate()

        probe = self._negascout(ctx, child, depth, -alpha - 1, -alpha, colour).negate()
        if alpha < probe.score < beta:
            return self._negascout(
                ctx, child, depth, -beta, -probe.score, colour
            ).negate()
        return probe

    def _check_moves(self, state: IGameState, moves: Sequence[Move]) -> None:
        legal = state.moves()
        for move in moves:
            if move not in legal:
                raise MoveOrderError(
                    f"Ordered move {move!r} is not one of {list(legal)!r}"
                )


def negascout(
    state: IGameState,
    depth: int = 10,
    alpha: Score = -INF,
    beta: Score = INF,
    colour: int = 1,
    options: OptionsArg = None,
) -> SearchResult:
    """Plain Negascout search with the default hooks.

    Unlike :meth:`NegascoutEngine.search` nothing is remembered between
    calls: *options* are merged over the defaults for this call only.
    """
    _validate(depth, alpha, beta, colour)
    engine = NegascoutEngine(DEFAULT_OPTIONS.merged(options))
    return engine._run(state, depth, alpha, beta, colour)
