"""FEN and diagram interop, built on python-chess's parsers.

python-chess is used only to read and write notation. Castling rights and
en passant squares are not part of this engine's rules, so they are
dropped on input and written as "-" on output.
"""

from typing import Tuple

import chess

from gridchess.core.board import Board
from gridchess.core.pieces import Color, Piece


def _to_chess_square(row: int, col: int) -> int:
    return chess.square(col, 7 - row)


def board_from_fen(fen: str) -> Tuple[Board, Color]:
    """Parse a FEN string into a grid board and the side to move.

    Raises ValueError for malformed FEN.
    """
    parsed = chess.Board(fen)
    board = Board()
    for sq, piece in parsed.piece_map().items():
        board.set_piece(7 - chess.square_rank(sq), chess.square_file(sq), Piece.from_symbol(piece.symbol()))
    side = Color.WHITE if parsed.turn == chess.WHITE else Color.BLACK
    return board, side


def _to_base_board(board: Board) -> chess.BaseBoard:
    base = chess.BaseBoard(None)
    for r, c, piece in board.pieces():
        base.set_piece_at(_to_chess_square(r, c), chess.Piece.from_symbol(piece.symbol()))
    return base


def board_to_fen(board: Board, side_to_move: Color = Color.WHITE) -> str:
    turn = "w" if side_to_move is Color.WHITE else "b"
    return f"{_to_base_board(board).board_fen()} {turn} - - 0 1"


def render_ascii(board: Board) -> str:
    """Text diagram with rank and file labels, white at the bottom."""
    rows = str(_to_base_board(board)).splitlines()
    lines = [f"{8 - i} {row}" for i, row in enumerate(rows)]
    lines.append("  a b c d e f g h")
    return "\n".join(lines)
