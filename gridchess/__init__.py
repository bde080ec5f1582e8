"""
GridChess: a chess rules engine with a minimax opponent.

The board is a plain 8x8 grid. Legal moves come from pseudo-legal
generation filtered by a simulated check test, and the engine opponent
plays at three strengths (random, greedy, alpha-beta minimax).

Modules:
    core.pieces    — Colors, piece kinds, Piece and Move values
    core.board     — The grid board, initial setup, cloning, move application
    core.movegen   — Pseudo-legal move generation per piece kind
    core.legality  — Check detection, legal-move filter, game status
    core.evaluator — Static evaluation (material + positional terms)
    core.search    — Alpha-beta minimax with move ordering
    policy         — Difficulty levels and move choice
    controller     — Turn controller state machine
    main           — Game wrapper used by the CLI and the REST API
    notation       — FEN / UCI / text diagram interop
"""

from typing import List, Optional

from gridchess.core.board import Board, apply_move, create_initial_board
from gridchess.core.legality import GameStatus, Outcome, game_status, get_safe_moves
from gridchess.core.legality import is_king_in_check as is_in_check
from gridchess.core.pieces import Color, Move, Piece, PieceKind
from gridchess.policy import Difficulty, choose_move


def legal_moves_from(board: Board, row: int, col: int, side_to_move: Optional[Color] = None) -> List[Move]:
    """Legal moves of the piece on (row, col).

    Empty for an empty or off-board square, or when ``side_to_move`` is
    given and the piece belongs to the other side.
    """
    piece = board.piece_at(row, col)
    if piece is None or (side_to_move is not None and piece.color is not side_to_move):
        return []
    return get_safe_moves(board, row, col, piece.color)
