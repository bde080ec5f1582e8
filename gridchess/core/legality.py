"""Check detection and the legal-move filter.

A move is legal when, played on a copy of the board, it does not leave the
mover's own king attacked. This filter is the only source of legal moves
for the controller and the search.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from gridchess.core.board import Board, apply_move, clone
from gridchess.core.movegen import generate_pseudo_moves
from gridchess.core.pieces import Color, Move

logger = logging.getLogger(__name__)


def is_king_in_check(board: Board, color: Color) -> bool:
    """True if any opposing piece has a pseudo-move onto ``color``'s king.

    A board without a king of ``color`` is corrupt; it is reported as in
    check so callers treat it as lost rather than crash.
    """
    king = board.find_king(color)
    if king is None:
        logger.warning("No %s king on board %r; treating position as check", color.value, board)
        return True

    for r, c, _ in board.pieces(color.opponent):
        for move in generate_pseudo_moves(board, r, c):
            if move.target == king:
                return True
    return False


def get_safe_moves(board: Board, row: int, col: int, mover: Color) -> List[Move]:
    safe = []
    for move in generate_pseudo_moves(board, row, col):
        sim = apply_move(clone(board), move)
        if not is_king_in_check(sim, mover):
            safe.append(move)
    return safe


def get_all_safe_moves(board: Board, color: Color) -> List[Move]:
    """Every legal move for ``color``. Empty means checkmate or stalemate."""
    moves = []
    for r, c, _ in board.pieces(color):
        moves.extend(get_safe_moves(board, r, c, color))
    return moves


def gives_check(board: Board, move: Move) -> bool:
    """Does ``move`` leave the opponent of the moving piece in check?"""
    piece = board.piece_at(move.from_row, move.from_col)
    if piece is None:
        return False
    sim = apply_move(clone(board), move)
    return is_king_in_check(sim, piece.color.opponent)


class Outcome(Enum):
    ONGOING = "ongoing"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


@dataclass(frozen=True)
class GameStatus:
    outcome: Outcome
    winner: Optional[Color] = None

    @property
    def is_over(self) -> bool:
        return self.outcome is not Outcome.ONGOING


def game_status(board: Board, side_to_move: Color) -> GameStatus:
    if get_all_safe_moves(board, side_to_move):
        return GameStatus(Outcome.ONGOING)
    if is_king_in_check(board, side_to_move):
        return GameStatus(Outcome.CHECKMATE, side_to_move.opponent)
    return GameStatus(Outcome.STALEMATE)
