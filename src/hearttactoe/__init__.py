"""HeartTacToe package exposing game rules, the computer opponent, and the web API."""

from .ai import OpponentAI, Strength, select_move
from .game import Outcome, TicTacToeGame, detect_outcome, empty_cells
from .ui import app

__all__ = [
    "OpponentAI",
    "Outcome",
    "Strength",
    "TicTacToeGame",
    "app",
    "detect_outcome",
    "empty_cells",
    "select_move",
]
