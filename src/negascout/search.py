"""Shared search models, options and the game-state protocol."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, fields, replace
from typing import Any, Final, Protocol, runtime_checkable

from negascout.errors import InvalidOptionError

# Opaque token, interpreted only by the game state.
Move = Any
Score = float

INF: Final = float("inf")


@runtime_checkable
class IGameState(Protocol):
    """Capabilities a position must expose to be searched.

    The engine borrows one mutable instance for a whole search and keeps
    ``apply``/``undo`` calls strictly paired.
    """

    def evaluate(self) -> Score:
        """Static evaluation from a fixed, side-independent perspective."""
        ...

    def moves(self) -> Sequence[Move]:
        """Legal moves from the current position."""
        ...

    def apply(self, move: Move) -> None:
        """Make *move* in place."""
        ...

    def undo(self, move: Move) -> None:
        """Take back the most recently applied *move*."""
        ...

    def is_terminal(self) -> bool:
        """Return *True* if the search must not descend from here."""
        ...


@dataclass(slots=True)
class SearchResult:
    """Score of a node together with its principal variation.

    ``best_line`` is built bottom-up: empty at a leaf, each parent
    prepends the move it chose.
    """

    score: Score
    best_line: list[Move] = field(default_factory=list)

    @property
    def best_move(self) -> Move | None:
        return self.best_line[0] if self.best_line else None

    def negate(self) -> SearchResult:
        """Flip the score to the other side's perspective."""
        self.score = -self.score
        return self

    def prepend(self, move: Move) -> SearchResult:
        """Put *move* in front of the best line."""
        self.best_line.insert(0, move)
        return self


@dataclass(slots=True, frozen=True)
class SearchOptions:
    """Settings shared by every node of one search call."""

    null_window: bool = True
    # 0 still evaluates each candidate's immediate child position.
    shallow_depth: int = 0
    check_moves: bool = False

    def __post_init__(self) -> None:
        if self.shallow_depth < 0:
            raise InvalidOptionError(
                f"shallow_depth must be >= 0, got {self.shallow_depth}"
            )

    def merged(
        self, overrides: Mapping[str, Any] | SearchOptions | None
    ) -> SearchOptions:
        """Return these options with *overrides* applied.

        A mapping changes only the keys it names. A :class:`SearchOptions`
        instance is taken as is, replacing every field.
        """
        if overrides is None:
            return self
        if isinstance(overrides, SearchOptions):
            return overrides

        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise InvalidOptionError(f"Unknown search option(s): {', '.join(unknown)}")
        return replace(self, **overrides)


DEFAULT_OPTIONS: Final = SearchOptions()
