"""Unit tests for HeartTacToe board rules and the game session."""

import itertools

import pytest

from hearttactoe.game import (
    DRAW,
    UNDECIDED,
    WINNING_LINES,
    GameStatus,
    TicTacToeGame,
    detect_outcome,
    empty_cells,
    new_board,
    validate_board,
)

_ = None


def test_empty_board_is_undecided():
    outcome = detect_outcome(new_board())
    assert outcome == UNDECIDED
    assert outcome.undecided


def test_row_column_and_diagonal_wins():
    row = ["O", "O", "O", "X", "X", _, _, _, "X"]
    column = ["X", "O", _, "X", "O", _, "X", _, _]
    diagonal = ["O", "X", "X", _, "X", _, "X", "O", "O"]

    assert detect_outcome(row).winner == "O"
    assert detect_outcome(row).line == (0, 1, 2)
    assert detect_outcome(column).line == (0, 3, 6)
    assert detect_outcome(diagonal).winner == "X"
    assert detect_outcome(diagonal).line == (2, 4, 6)


def test_full_board_without_line_is_draw():
    board = ["X", "O", "X", "X", "O", "O", "O", "X", "X"]
    assert detect_outcome(board) == DRAW


def test_win_on_last_cell_is_not_a_draw():
    board = ["X", "O", "X", "O", "X", "O", "O", "X", "X"]
    outcome = detect_outcome(board)
    assert outcome.winner == "X"
    assert not outcome.drawn


def test_rows_are_scanned_before_columns():
    board = ["X", "X", "X", "X", "O", _, "X", "O", "O"]
    assert detect_outcome(board).line == (0, 1, 2)


def test_any_two_markers_work():
    board = ["heart", "cross", _, "cross", "heart", _, _, _, "heart"]
    assert detect_outcome(board).winner == "heart"


def test_every_filling_matches_reference():
    for cells in itertools.product((_, "X", "O"), repeat=9):
        board = list(cells)
        owners = {
            board[a]
            for a, b, c in WINNING_LINES
            if board[a] is not None and board[a] == board[b] == board[c]
        }
        outcome = detect_outcome(board)
        if owners:
            assert outcome.winner in owners
            assert not outcome.drawn
        elif all(c is not None for c in board):
            assert outcome == DRAW
        else:
            assert outcome == UNDECIDED


def test_legal_play_never_yields_two_winners():
    seen = set()
    stack = [(tuple(new_board()), "X")]
    while stack:
        board, player = stack.pop()
        if board in seen:
            continue
        seen.add(board)
        winners = {
            board[a]
            for a, b, c in WINNING_LINES
            if board[a] is not None and board[a] == board[b] == board[c]
        }
        assert len(winners) <= 1
        if not detect_outcome(board).undecided:
            continue
        nxt = "O" if player == "X" else "X"
        for i in empty_cells(board):
            child = list(board)
            child[i] = player
            stack.append((tuple(child), nxt))
    assert len(seen) == 5478


def test_empty_cells_is_ascending_and_repeatable():
    board = [_, "X", _, "O", _, _, "X", _, "O"]
    first = empty_cells(board)
    assert first == [0, 2, 4, 5, 7]
    assert empty_cells(board) == first
    assert empty_cells(["X"] * 9) == []


@pytest.mark.parametrize(
    "board, markers",
    [
        ([_] * 8, ("X", "O")),
        ([_] * 10, ("X", "O")),
        (["Z"] + [_] * 8, ("X", "O")),
        ([_] * 9, ("X", "X")),
        ([_] * 9, ("X", "")),
        ([_] * 9, ("X",)),
    ],
)
def test_validate_board_rejects_malformed_input(board, markers):
    with pytest.raises(ValueError):
        validate_board(board, markers)


def test_validate_board_accepts_custom_markers():
    validate_board(["A", "B"] + [_] * 7, ("A", "B"))


# ---------- session ----------


def test_human_win_ends_game():
    game = TicTacToeGame()
    for human, computer in ((0, 3), (1, 4)):
        game.play_human(human)
        game.play_opponent(computer)
    outcome = game.play_human(2)
    assert outcome.winner == "X"
    assert game.status is GameStatus.WON
    assert not game.awaiting_opponent
    with pytest.raises(ValueError):
        game.play_human(5)


def test_opponent_win_loses_game():
    game = TicTacToeGame()
    for human, computer in ((0, 4), (1, 2), (8, 6)):
        game.play_human(human)
        game.play_opponent(computer)
    assert game.status is GameStatus.LOST
    assert game.outcome().line == (2, 4, 6)


def test_draw_on_last_human_move():
    game = TicTacToeGame()
    for human, computer in ((0, 1), (2, 4), (3, 5), (7, 6)):
        game.play_human(human)
        game.play_opponent(computer)
    game.play_human(8)
    assert game.status is GameStatus.DRAWN
    assert game.empty_cells() == []


def test_human_must_wait_for_opponent():
    game = TicTacToeGame()
    game.play_human(0)
    assert game.awaiting_opponent
    with pytest.raises(ValueError):
        game.play_human(1)
    game.play_opponent(4)
    assert not game.awaiting_opponent
    with pytest.raises(ValueError):
        game.play_opponent(5)


def test_occupied_and_out_of_range_cells_rejected():
    game = TicTacToeGame()
    game.play_human(0)
    game.play_opponent(4)
    with pytest.raises(ValueError):
        game.play_human(4)
    with pytest.raises(ValueError):
        game.play_human(9)
    assert game.board[4] == "O"


def test_move_log_and_last_move():
    game = TicTacToeGame()
    game.play_human(6)
    game.play_opponent(4)
    assert game.last_move == 4
    assert game.move_log == [{"player": "X", "cell": 6}, {"player": "O", "cell": 4}]


@pytest.mark.parametrize("moves", [(), (0,), (0, 3, 1, 4, 2)])
def test_reset_restores_fresh_game(moves):
    game = TicTacToeGame()
    for i, cell in enumerate(moves):
        if i % 2 == 0:
            game.play_human(cell)
        else:
            game.play_opponent(cell)
    game.reset()
    assert game.board == new_board()
    assert game.outcome() == UNDECIDED
    assert game.status is GameStatus.PLAYING
    assert not game.awaiting_opponent
    assert game.last_move is None
    assert game.move_log == []


def test_session_rejects_identical_markers():
    with pytest.raises(ValueError):
        TicTacToeGame(human="X", computer="X")
