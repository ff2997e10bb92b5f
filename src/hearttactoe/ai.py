"""Rule-based computer opponent for HeartTacToe, in a weak and a strong flavour."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence

from .game import WINNING_LINES, Cell, Marker, empty_cells

logger = logging.getLogger(__name__)

CENTER = 4
CORNERS = (0, 2, 6, 8)
EDGES = (1, 3, 5, 7)

# Probability gates of the weak opponent.
WEAK_BLOCK_PROBABILITY = 0.5
WEAK_CENTER_PROBABILITY = 0.3
WEAK_RANDOM_PROBABILITY = 0.7


class Strength(str, Enum):
    WEAK = "weak"
    STRONG = "strong"


@dataclass(frozen=True)
class Decision:
    index: int
    rule: str  # which priority rule produced the move


def completing_move(
    board: Sequence[Cell], marker: Marker, candidates: Sequence[int]
) -> Optional[int]:
    """First candidate cell that gives ``marker`` three in a row.

    Only lines through the candidate count; a line already complete on the
    board does not make every empty cell a winning move.
    """
    for i in candidates:
        if board[i] is not None:
            continue
        for line in WINNING_LINES:
            if i in line and all(j == i or board[j] == marker for j in line):
                return i
    return None


def _empty_among(board: Sequence[Cell], cells: Sequence[int]) -> List[int]:
    return [i for i in cells if board[i] is None]


# ---------- policies ----------


def _strong_policy(
    board: Sequence[Cell],
    me: Marker,
    opp: Marker,
    empty: List[int],
    rng: random.Random,
) -> Decision:
    win = completing_move(board, me, empty)
    if win is not None:
        return Decision(win, "win")
    block = completing_move(board, opp, empty)
    if block is not None:
        return Decision(block, "block")
    if board[CENTER] is None:
        return Decision(CENTER, "center")
    corners = _empty_among(board, CORNERS)
    if corners:
        return Decision(rng.choice(corners), "corner")
    edges = _empty_among(board, EDGES)
    if edges:
        return Decision(rng.choice(edges), "edge")
    return Decision(rng.choice(empty), "random")


def _weak_policy(
    board: Sequence[Cell],
    me: Marker,
    opp: Marker,
    empty: List[int],
    rng: random.Random,
) -> Decision:
    # Never looks for its own win; only sometimes notices a threat.
    if rng.random() < WEAK_BLOCK_PROBABILITY:
        block = completing_move(board, opp, empty)
        if block is not None:
            return Decision(block, "block")
    if board[CENTER] is None and rng.random() < WEAK_CENTER_PROBABILITY:
        return Decision(CENTER, "center")
    if rng.random() < WEAK_RANDOM_PROBABILITY:
        return Decision(rng.choice(empty), "random")
    corners = _empty_among(board, CORNERS)
    if corners:
        return Decision(rng.choice(corners), "corner")
    return Decision(rng.choice(empty), "random")


Policy = Callable[
    [Sequence[Cell], Marker, Marker, List[int], random.Random], Decision
]

POLICIES: Dict[Strength, Policy] = {
    Strength.WEAK: _weak_policy,
    Strength.STRONG: _strong_policy,
}


# ---------- player ----------


@dataclass
class OpponentAI:
    """Computer player choosing cells for ``player`` against ``opponent``.

    The random generator is injected so games and tests can be replayed from a
    seed:
      - OpponentAI(player="O", opponent="X", strength=Strength.WEAK)
      - choose(board) -> cell index, or None on a full board
    """

    player: Marker = "O"
    opponent: Marker = "X"
    strength: Strength = Strength.STRONG
    rng: random.Random = field(default_factory=random.Random, repr=False)

    def __post_init__(self) -> None:
        self.strength = Strength(self.strength)
        if self.player == self.opponent:
            raise ValueError("Players must use distinct markers")

    def decide(self, board: Sequence[Cell]) -> Optional[Decision]:
        empty = empty_cells(board)
        if not empty:
            return None
        policy = POLICIES[self.strength]
        decision = policy(board, self.player, self.opponent, empty, self.rng)
        logger.debug(
            "%s opponent %r picks cell %d (%s)",
            self.strength.value,
            self.player,
            decision.index,
            decision.rule,
        )
        return decision

    def choose(self, board: Sequence[Cell]) -> Optional[int]:
        decision = self.decide(board)
        return decision.index if decision else None


def select_move(
    board: Sequence[Cell],
    opponent: Marker,
    human: Marker,
    strength: Strength = Strength.STRONG,
    rng: Optional[random.Random] = None,
) -> Optional[int]:
    """Cell index the opponent marks next, or None if the board is full."""
    ai = OpponentAI(
        player=opponent,
        opponent=human,
        strength=strength,
        rng=rng if rng is not None else random.Random(),
    )
    return ai.choose(board)
