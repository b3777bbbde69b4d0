"""Game-state doubles and reference searches shared across the test suite."""

from __future__ import annotations

import random
from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

_NEVER = 10_000


class CounterState:
    """Running total where every move adds 1, 2 or 3.

    Optimal play alternates 3 (maximiser) and 1 (minimiser). Counts every
    ``apply`` and ``moves`` call so tests can measure search effort.
    """

    def __init__(
        self,
        *,
        terminate_at: int = _NEVER,
        seed: int | None = None,
        fail_after: int | None = None,
        scale: float = 1,
    ) -> None:
        self.number = 0
        self.depth = 0
        self.terminate_at = terminate_at
        self.applied = 0
        self.moves_calls = 0
        self.evaluations = 0
        self._rng = random.Random(seed) if seed is not None else None
        self._fail_after = fail_after
        self._scale = scale

    def evaluate(self) -> float:
        self.evaluations += 1
        if self._fail_after is not None and self.evaluations > self._fail_after:
            raise RuntimeError("evaluation failed")
        return self.number

    def moves(self) -> list[float]:
        self.moves_calls += 1
        moves = [1 * self._scale, 2 * self._scale, 3 * self._scale]
        if self._rng is not None:
            self._rng.shuffle(moves)
        return moves

    def apply(self, move: float) -> None:
        self.number += move
        self.depth += 1
        self.applied += 1

    def undo(self, move: float) -> None:
        self.number -= move
        self.depth -= 1

    def is_terminal(self) -> bool:
        return self.depth >= self.terminate_at

    def snapshot(self) -> tuple[float, int]:
        return self.number, self.depth


@dataclass(slots=True)
class TreeNode:
    value: int
    children: list[TreeNode] = field(default_factory=list)


class TreeState:
    """Walks an explicit game tree; moves are child indices."""

    def __init__(self, root: TreeNode) -> None:
        self.path = [root]
        self.applied = 0

    @property
    def node(self) -> TreeNode:
        return self.path[-1]

    def evaluate(self) -> int:
        return self.node.value

    def moves(self) -> list[int]:
        return list(range(len(self.node.children)))

    def apply(self, move: int) -> None:
        self.path.append(self.node.children[move])
        self.applied += 1

    def undo(self, move: int) -> None:
        child = self.path.pop()
        assert self.node.children[move] is child, "unbalanced apply/undo"

    def is_terminal(self) -> bool:
        return not self.node.children

    def snapshot(self) -> tuple[int, ...]:
        return tuple(id(node) for node in self.path)


def build_tree(rng: random.Random, height: int) -> TreeNode:
    node = TreeNode(rng.randint(-50, 50))
    if height > 0:
        node.children = [build_tree(rng, height - 1) for _ in range(rng.randint(2, 4))]
    return node


def brute_force(state: object, depth: int, colour: int) -> int:
    """Full-width negamax without pruning."""
    if depth == 0 or state.is_terminal():
        return colour * state.evaluate()
    best = None
    for move in state.moves():
        state.apply(move)
        score = -brute_force(state, depth - 1, -colour)
        state.undo(move)
        if best is None or score > best:
            best = score
    return best


@pytest.fixture
def counter_state() -> Callable[..., CounterState]:
    """Factory for :class:`CounterState` doubles."""
    return CounterState


@pytest.fixture
def tree_state() -> Callable[[int, int], TreeState]:
    """Factory building a seeded random tree of the given height."""

    def _make(seed: int, height: int = 4) -> TreeState:
        return TreeState(build_tree(random.Random(seed), height))

    return _make


@pytest.fixture
def minimax() -> Callable[[object, int, int], int]:
    return brute_force
