"""FastAPI REST interface: many independent games, one per id."""

import logging
import threading
import uuid
from typing import Dict, Optional, Tuple

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from gridchess.config import CONFIG
from gridchess.main import Game

logging.basicConfig(level=CONFIG.log_level)
_log = logging.getLogger(__name__)

app = FastAPI(title=CONFIG.ui.engine_name, version="1.0.0")

games: Dict[str, Game] = {}
_game_locks: Dict[str, threading.Lock] = {}
_games_lock = threading.Lock()


class NewGameRequest(BaseModel):
    difficulty: Optional[str] = None
    engine_color: Optional[str] = None  # "white", "black" or "none"
    fen: Optional[str] = None


class MoveRequest(BaseModel):
    move: str  # UCI format e.g. "e2e4"


class SelectRequest(BaseModel):
    row: int = Field(ge=0, le=7)
    col: int = Field(ge=0, le=7)


def _get_game(game_id: str) -> Tuple[Game, threading.Lock]:
    """Look up a game and its lock; the game becomes the most recently used."""
    with _games_lock:
        game = games.pop(game_id, None)
        if game is None:
            raise HTTPException(status_code=404, detail=f"Unknown game: {game_id}")
        games[game_id] = game
        return game, _game_locks.setdefault(game_id, threading.Lock())


def _register(game: Game) -> str:
    game_id = uuid.uuid4().hex
    with _games_lock:
        # evict the least recently used games once the registry is full
        while games and len(games) >= CONFIG.game.max_games:
            stale = next(iter(games))
            del games[stale]
            _game_locks.pop(stale, None)
            _log.info("Evicted idle game %s", stale)
        games[game_id] = game
        _game_locks[game_id] = threading.Lock()
    return game_id


def _describe(game_id: str, game: Game) -> dict:
    status = game.status()
    return {
        "id": game_id,
        "fen": game.fen(),
        "turn": game.side_to_move.value,
        "legal_moves": [m.uci() for m in game.legal_moves()],
        "status": status.outcome.value,
        "winner": status.winner.value if status.winner else None,
        "in_check": game.in_check,
        "history": list(game.history),
    }


@app.post("/games")
def create_game(req: NewGameRequest = NewGameRequest()):
    engine_color = req.engine_color if req.engine_color is not None else "config"
    try:
        game = Game(difficulty=req.difficulty, engine_color=engine_color)
        if req.fen:
            game.set_fen(req.fen)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    # an engine playing white opens the game
    if game.engine_to_move():
        game.engine_move()
    game_id = _register(game)
    _log.info("Created game %s (difficulty=%s)", game_id, game.difficulty.value)
    return _describe(game_id, game)


@app.get("/games/{game_id}")
def get_game(game_id: str):
    game, lock = _get_game(game_id)
    with lock:
        return _describe(game_id, game)


@app.post("/games/{game_id}/select")
def select_square(game_id: str, req: SelectRequest):
    game, lock = _get_game(game_id)
    with lock:
        if game.state.is_over:
            raise HTTPException(status_code=400, detail="Game is already over")
        targets = game.select(req.row, req.col)
        return {
            "selected": list(game.state.selected) if game.state.selected else None,
            "targets": [m.uci() for m in targets],
            "game": _describe(game_id, game),
        }


@app.post("/games/{game_id}/move")
def make_move(game_id: str, req: MoveRequest):
    game, lock = _get_game(game_id)
    with lock:
        if game.state.is_over:
            raise HTTPException(status_code=400, detail="Game is already over")
        if not game.make_move(req.move):
            raise HTTPException(status_code=400, detail=f"Illegal move: {req.move}")
        return _describe(game_id, game)


@app.post("/games/{game_id}/engine")
def engine_move(game_id: str):
    game, lock = _get_game(game_id)
    with lock:
        if game.state.is_over:
            raise HTTPException(status_code=400, detail="Game is already over")
        move = game.engine_move()
        data = _describe(game_id, game)
        data["engine_move"] = move.uci() if move else None
        return data


@app.post("/games/{game_id}/reset")
def reset_game(game_id: str):
    game, lock = _get_game(game_id)
    with lock:
        game.reset()
        _log.info("Reset game %s", game_id)
        if game.engine_to_move():
            game.engine_move()
        return _describe(game_id, game)


@app.delete("/games/{game_id}")
def delete_game(game_id: str):
    with _games_lock:
        game = games.pop(game_id, None)
        _game_locks.pop(game_id, None)
    if game is None:
        raise HTTPException(status_code=404, detail=f"Unknown game: {game_id}")
    return {"deleted": game_id}
