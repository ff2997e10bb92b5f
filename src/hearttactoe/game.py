"""Board rules, outcome detection and the game session for HeartTacToe."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

Marker = str  # any non-empty symbol, "X" and "O" by default
Cell = Optional[Marker]  # None means empty
Line = Tuple[int, int, int]

HUMAN: Marker = "X"
COMPUTER: Marker = "O"

# Scan order matters: rows, then columns, then diagonals.
WINNING_LINES: Tuple[Line, ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

BOARD_SIZE = 9


# ---------- Board model ----------


@dataclass(frozen=True)
class Outcome:
    """Result derived from a board: undecided, a win for ``winner``, or a draw."""

    winner: Optional[Marker] = None
    line: Optional[Line] = None
    drawn: bool = False

    @property
    def undecided(self) -> bool:
        return self.winner is None and not self.drawn


UNDECIDED = Outcome()
DRAW = Outcome(drawn=True)


def new_board() -> List[Cell]:
    return [None] * BOARD_SIZE


def empty_cells(board: Sequence[Cell]) -> List[int]:
    """Indices of empty cells in ascending order."""
    return [i for i, c in enumerate(board) if c is None]


def detect_outcome(board: Sequence[Cell]) -> Outcome:
    """Classify ``board``.

    The first fully-marked line in ``WINNING_LINES`` order decides the winner.
    Boards holding more than one winning line cannot come from legal play;
    for those the reported line is simply the first one found.
    """
    for line in WINNING_LINES:
        a, b, c = line
        v = board[a]
        if v is not None and v == board[b] == board[c]:
            return Outcome(winner=v, line=line)
    if all(c is not None for c in board):
        return DRAW
    return UNDECIDED


def validate_board(board: Sequence[Cell], markers: Sequence[Marker]) -> None:
    """Reject malformed input before it reaches the core functions."""
    if len(markers) != 2:
        raise ValueError("Exactly two markers are required")
    first, second = markers
    for m in (first, second):
        if not isinstance(m, str) or not m:
            raise ValueError(f"Invalid marker {m!r}")
    if first == second:
        raise ValueError("Markers must be distinct")
    if len(board) != BOARD_SIZE:
        raise ValueError(f"Board must have {BOARD_SIZE} cells, got {len(board)}")
    for i, c in enumerate(board):
        if c is not None and c not in (first, second):
            raise ValueError(f"Cell {i} holds unknown marker {c!r}")


# ---------- Game session ----------


class GameStatus(str, Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"
    DRAWN = "drawn"


@dataclass
class TicTacToeGame:
    """One human-versus-computer game.

    Owns the board and the status state machine. ``awaiting_opponent`` is set
    after every human move that leaves the game open and blocks further human
    moves until the computer has replied.
    """

    human: Marker = HUMAN
    computer: Marker = COMPUTER
    board: List[Cell] = field(default_factory=new_board)
    status: GameStatus = GameStatus.PLAYING
    awaiting_opponent: bool = False
    last_move: Optional[int] = None
    move_log: List[Dict[str, object]] = field(default_factory=list)

    def __post_init__(self) -> None:
        validate_board(self.board, (self.human, self.computer))

    # ---- API used by UI ----

    def outcome(self) -> Outcome:
        return detect_outcome(self.board)

    def empty_cells(self) -> List[int]:
        return empty_cells(self.board)

    @property
    def finished(self) -> bool:
        return self.status is not GameStatus.PLAYING

    def play_human(self, index: int) -> Outcome:
        if self.finished:
            raise ValueError("Game already finished")
        if self.awaiting_opponent:
            raise ValueError("Waiting for the opponent's move")
        self._place(self.human, index)

        outcome = self.outcome()
        if outcome.winner == self.human:
            self.status = GameStatus.WON
        elif outcome.drawn:
            self.status = GameStatus.DRAWN
        else:
            self.awaiting_opponent = True
        return outcome

    def play_opponent(self, index: int) -> Outcome:
        if self.finished:
            raise ValueError("Game already finished")
        if not self.awaiting_opponent:
            raise ValueError("It is not the opponent's turn")
        self._place(self.computer, index)
        self.awaiting_opponent = False

        outcome = self.outcome()
        if outcome.winner == self.computer:
            self.status = GameStatus.LOST
        elif outcome.drawn:
            self.status = GameStatus.DRAWN
        return outcome

    def reset(self) -> None:
        self.board = new_board()
        self.status = GameStatus.PLAYING
        self.awaiting_opponent = False
        self.last_move = None
        self.move_log.clear()

    # ---- helpers ----

    def _place(self, marker: Marker, index: int) -> None:
        if not 0 <= index < BOARD_SIZE:
            raise ValueError(f"Cell index {index} is out of range")
        if self.board[index] is not None:
            raise ValueError("Cell already occupied")
        self.board[index] = marker
        self.last_move = index
        self.move_log.append({"player": marker, "cell": index})
