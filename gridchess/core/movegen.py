"""Pseudo-legal move generation.

Moves follow each piece's movement pattern and occupancy rules but do not
check whether the mover's own king is left attacked; see
``gridchess.core.legality`` for that. Generation reads only the board it
is given.
"""

from typing import List

from gridchess.core.board import Board, is_empty, is_occupied_by_opponent, on_board
from gridchess.core.pieces import Color, Move, Piece, PieceKind

ORTHOGONALS = ((-1, 0), (1, 0), (0, -1), (0, 1))
DIAGONALS = ((-1, -1), (-1, 1), (1, -1), (1, 1))
KNIGHT_JUMPS = ((-2, -1), (-2, 1), (-1, -2), (-1, 2), (1, -2), (1, 2), (2, -1), (2, 1))
KING_STEPS = ORTHOGONALS + DIAGONALS

SLIDER_RAYS = {
    PieceKind.BISHOP: DIAGONALS,
    PieceKind.ROOK: ORTHOGONALS,
    PieceKind.QUEEN: ORTHOGONALS + DIAGONALS,
}

PAWN_START_ROW = {Color.WHITE: 6, Color.BLACK: 1}


def _pawn_moves(board: Board, row: int, col: int, piece: Piece) -> List[Move]:
    moves = []
    step = piece.color.forward
    if is_empty(board, row + step, col):
        moves.append(Move(row, col, row + step, col))
        if row == PAWN_START_ROW[piece.color] and is_empty(board, row + 2 * step, col):
            moves.append(Move(row, col, row + 2 * step, col))
    for dc in (-1, 1):
        if is_occupied_by_opponent(board, row + step, col + dc, piece.color):
            moves.append(Move(row, col, row + step, col + dc))
    return moves


def _step_moves(board: Board, row: int, col: int, piece: Piece, offsets) -> List[Move]:
    moves = []
    for dr, dc in offsets:
        r, c = row + dr, col + dc
        if is_empty(board, r, c) or is_occupied_by_opponent(board, r, c, piece.color):
            moves.append(Move(row, col, r, c))
    return moves


def _slide_moves(board: Board, row: int, col: int, piece: Piece, rays) -> List[Move]:
    moves = []
    for dr, dc in rays:
        r, c = row + dr, col + dc
        while on_board(r, c):
            if is_empty(board, r, c):
                moves.append(Move(row, col, r, c))
            else:
                if is_occupied_by_opponent(board, r, c, piece.color):
                    moves.append(Move(row, col, r, c))
                break
            r += dr
            c += dc
    return moves


def generate_pseudo_moves(board: Board, row: int, col: int) -> List[Move]:
    """Pseudo-legal moves of the piece on (row, col); [] for an empty or off-board square."""
    piece = board.piece_at(row, col)
    if piece is None:
        return []

    kind = piece.kind
    if kind is PieceKind.PAWN:
        return _pawn_moves(board, row, col, piece)
    if kind is PieceKind.KNIGHT:
        return _step_moves(board, row, col, piece, KNIGHT_JUMPS)
    if kind is PieceKind.KING:
        return _step_moves(board, row, col, piece, KING_STEPS)
    if kind in SLIDER_RAYS:
        return _slide_moves(board, row, col, piece, SLIDER_RAYS[kind])
    raise ValueError(f"unknown piece kind: {kind!r}")


def count_pseudo_moves(board: Board, color: Color) -> int:
    return sum(len(generate_pseudo_moves(board, r, c)) for r, c, _ in board.pieces(color))
