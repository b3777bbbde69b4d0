"""Shallow-search-first move ordering for the Negascout engine."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from negascout.engine import NegascoutEngine, applied, negascout
from negascout.search import IGameState, Move, Score

_LOGGER = logging.getLogger(__name__)


class HeuristicEngine(NegascoutEngine):
    """Negascout engine that sorts moves by a shallow alpha-beta probe.

    Each candidate is searched to ``options.shallow_depth`` plies with the
    null window disabled, and moves are tried best-first in the full
    search. The probes run through the plain :func:`negascout` entry point,
    so they neither reorder recursively nor touch this engine's cache hooks.
    """

    __slots__ = ()

    def order_moves(
        self,
        state: IGameState,
        depth: int,
        alpha: Score,
        beta: Score,
        colour: int,
    ) -> Sequence[Move]:
        probe_options = replace(self.options, null_window=False)
        scores: list[Score] = []
        moves = list(state.moves())
        for move in moves:
            with applied(state, move):
                probe = negascout(
                    state,
                    probe_options.shallow_depth,
                    -beta,
                    -alpha,
                    -colour,
                    probe_options,
                )
            scores.append(-probe.score)

        order = sorted(range(len(moves)), key=scores.__getitem__, reverse=True)
        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug(
                "Reordered %d moves at depth %d: %s",
                len(moves),
                depth,
                [(moves[i], scores[i]) for i in order],
            )
        return [moves[i] for i in order]
