"""FastAPI service hosting HeartTacToe games against the computer."""

from __future__ import annotations

import logging
import random
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from fastapi import BackgroundTasks, FastAPI, HTTPException
from pydantic import BaseModel, Field

from .ai import OpponentAI, Strength
from .game import GameStatus, TicTacToeGame

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """Container for an active game and its computer opponent."""

    game: TicTacToeGame
    ai: OpponentAI
    ai_pending: bool = False
    last_active: float = field(default_factory=lambda: time.time())
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(title="HeartTacToe", description="Tic-tac-toe against the computer")


AI_THINK_DELAY: float = 1.0
WIN_REVEAL_DELAY: float = 0.5
SESSION_TTL_SECONDS = 60 * 60  # 1 hour since the last request


class NewGameRequest(BaseModel):
    """Request payload for starting a new game."""

    strength: Strength = Field(
        default=Strength.WEAK,
        description="Opponent strength",
    )
    seed: Optional[int] = Field(
        default=None,
        description="Seed for the opponent's random choices",
    )


class MoveRequest(BaseModel):
    """Request payload for submitting a move on an existing game."""

    cell: int = Field(ge=0, le=8)


def _cleanup_sessions() -> None:
    """Remove sessions idle for longer than the TTL with no opponent turn running."""

    now = time.time()
    expired = [
        game_id
        for game_id, session in list(SESSIONS.items())
        if not session.ai_pending
        and now - session.last_active >= SESSION_TTL_SECONDS
    ]
    for game_id in expired:
        SESSIONS.pop(game_id, None)
    if expired:
        logger.info("Dropped %d idle game(s)", len(expired))


def _create_session(
    strength: Strength, seed: Optional[int] = None
) -> Tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    _cleanup_sessions()
    game = TicTacToeGame()
    ai = OpponentAI(
        player=game.computer,
        opponent=game.human,
        strength=strength,
        rng=random.Random(seed),
    )
    session = GameSession(game=game, ai=ai)
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    logger.info("Created %s game %s", strength.value, session_id)
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        session = SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc
    session.last_active = time.time()
    return session


def _run_ai_turn(game_id: str) -> None:
    session = SESSIONS.get(game_id)
    if not session:
        return

    time.sleep(max(0.0, AI_THINK_DELAY))

    reveal_later = False
    with session.lock:
        try:
            game = session.game
            if game.finished or not game.awaiting_opponent:
                return
            cell = session.ai.choose(game.board)
            if cell is None:
                return
            game.play_opponent(cell)
            reveal_later = game.status is GameStatus.LOST
        finally:
            if not reveal_later:
                session.ai_pending = False

    if reveal_later:
        # The winning move shows on the board before the loss is reported.
        time.sleep(max(0.0, WIN_REVEAL_DELAY))
        with session.lock:
            session.ai_pending = False
        logger.info("Game %s lost to the computer", game_id)


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        game = session.game
        outcome = game.outcome()
        status = GameStatus.PLAYING if session.ai_pending else game.status
        reveal = status is not GameStatus.PLAYING
        return {
            "id": game_id,
            "strength": session.ai.strength.value,
            "human": game.human,
            "computer": game.computer,
            "board": [c if c is not None else "" for c in game.board],
            "status": status.value,
            "winner": outcome.winner if reveal else None,
            "winningLine": list(outcome.line) if reveal and outcome.line else None,
            "emptyCells": game.empty_cells(),
            "lastMove": game.last_move,
            "moveLog": list(game.move_log),
            "aiPending": session.ai_pending,
        }


def _apply_player_move(
    game_id: str,
    session: GameSession,
    cell: int,
    background_tasks: Optional[BackgroundTasks] = None,
) -> None:
    with session.lock:
        game = session.game
        if session.ai_pending:
            raise HTTPException(status_code=400, detail="AI is completing its move")
        try:
            game.play_human(cell)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        should_schedule_ai = game.awaiting_opponent
        if should_schedule_ai:
            session.ai_pending = True
        elif game.finished:
            logger.info("Game %s finished: %s", game_id, game.status.value)

    if should_schedule_ai and background_tasks is not None:
        background_tasks.add_task(_run_ai_turn, game_id)


@app.post("/api/game")
def create_game(request: NewGameRequest) -> Dict[str, object]:
    game_id, session = _create_session(request.strength, request.seed)
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(
    game_id: str, request: MoveRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    session = _get_session(game_id)
    _apply_player_move(game_id, session, request.cell, background_tasks)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/reset")
def reset_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        if session.ai_pending:
            raise HTTPException(status_code=400, detail="AI is completing its move")
        session.game.reset()
    logger.info("Reset game %s", game_id)
    return _serialize_session(game_id, session)
