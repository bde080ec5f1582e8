import logging
import random
from typing import List, Optional

from gridchess.config import CONFIG
from gridchess.controller import GameState, commit_move, new_game, select_square, status_of
from gridchess.core.board import Board
from gridchess.core.legality import GameStatus, get_all_safe_moves, is_king_in_check
from gridchess.core.pieces import Color, Move
from gridchess.notation import board_from_fen, board_to_fen, render_ascii
from gridchess.policy import Difficulty, choose_move

logger = logging.getLogger(__name__)


def parse_engine_color(value) -> Optional[Color]:
    """Color the engine plays: a Color, "white", "black", or None/"none" for two humans."""
    if value is None or isinstance(value, Color):
        return value
    if value == "none":
        return None
    return Color(value)


class Game:
    """One game: controller state, a display history, and an optional engine side."""

    def __init__(self, difficulty=None, engine_color="config", auto_reply: bool = True,
                 rng: Optional[random.Random] = None):
        if engine_color == "config":
            engine_color = CONFIG.game.engine_color
        self.difficulty = Difficulty(difficulty or CONFIG.game.default_difficulty)
        self.engine_color = parse_engine_color(engine_color)
        self.auto_reply = auto_reply
        self.rng = rng or random.Random()
        self.state = new_game()
        self.history: List[str] = []

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def side_to_move(self) -> Color:
        return self.state.side_to_move

    @property
    def in_check(self) -> bool:
        return is_king_in_check(self.state.board, self.state.side_to_move)

    def reset(self):
        self.state = new_game()
        self.history.clear()

    def set_fen(self, fen: str):
        """Load a position; raises ValueError for malformed FEN."""
        board, side = board_from_fen(fen)
        self.state = new_game(board, side)
        self.history.clear()

    def fen(self) -> str:
        return board_to_fen(self.state.board, self.state.side_to_move)

    def status(self) -> GameStatus:
        return status_of(self.state)

    def legal_moves(self) -> List[Move]:
        if self.state.is_over:
            return []
        return get_all_safe_moves(self.state.board, self.state.side_to_move)

    def select(self, row: int, col: int) -> List[Move]:
        """Feed a square click; returns the legal moves of the current selection."""
        self._advance(select_square(self.state, row, col))
        return list(self.state.legal_targets)

    def make_move(self, move_str: str) -> bool:
        """Play a UCI move (e.g. 'e2e4'). Returns True if it was legal."""
        try:
            move = Move.from_uci(move_str)
        except ValueError:
            return False
        return self._advance(commit_move(self.state, move))

    def engine_to_move(self) -> bool:
        return not self.state.is_over and self.state.side_to_move is self.engine_color

    def engine_move(self) -> Optional[Move]:
        """Let the engine play the side to move. None if no move was committed."""
        if self.state.is_over:
            return None
        move = choose_move(self.state.board, self.state.side_to_move, self.difficulty, rng=self.rng)
        if move is None:
            return None
        if not self._record(commit_move(self.state, move)):
            return None
        return move

    def print_board(self):
        print(render_ascii(self.state.board))

    def _advance(self, new_state: GameState) -> bool:
        """Adopt ``new_state``; returns True if it carries a new move."""
        moved = self._record(new_state)
        if moved and self.auto_reply and self.engine_to_move():
            self.engine_move()
        return moved

    def _record(self, new_state: GameState) -> bool:
        moved = new_state.ply != self.state.ply
        if moved:
            self.history.append(new_state.last_move.uci())
        self.state = new_state
        return moved
