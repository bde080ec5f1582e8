"""8x8 grid board: the single source of truth for a position.

Row 0 is black's back rank, row 7 is white's. Every query here accepts
off-board coordinates and answers "empty / not applicable" so the
generator can probe neighbours without bounds checks of its own.
"""

from typing import Iterator, List, Optional, Tuple

from gridchess.core.pieces import Color, Move, Piece, PieceKind

BOARD_SIZE = 8

BACK_RANK = [
    PieceKind.ROOK, PieceKind.KNIGHT, PieceKind.BISHOP, PieceKind.QUEEN,
    PieceKind.KING, PieceKind.BISHOP, PieceKind.KNIGHT, PieceKind.ROOK,
]


def on_board(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


class Board:
    def __init__(self, grid: Optional[List[List[Optional[Piece]]]] = None):
        """Wrap an existing grid, or start from an empty one."""
        if grid is None:
            grid = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        self.grid = grid

    def piece_at(self, row: int, col: int) -> Optional[Piece]:
        if not on_board(row, col):
            return None
        return self.grid[row][col]

    def set_piece(self, row: int, col: int, piece: Optional[Piece]):
        self.grid[row][col] = piece

    def pieces(self, color: Optional[Color] = None) -> Iterator[Tuple[int, int, Piece]]:
        """Yield (row, col, piece) in row-major order."""
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                p = self.grid[r][c]
                if p is not None and (color is None or p.color is color):
                    yield r, c, p

    def find_king(self, color: Color) -> Optional[Tuple[int, int]]:
        for r, c, p in self.pieces(color):
            if p.kind is PieceKind.KING:
                return r, c
        return None

    def copy(self) -> "Board":
        # Pieces are frozen, so copying the rows is a full value copy.
        return Board([row[:] for row in self.grid])

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid == other.grid

    def __repr__(self) -> str:
        rows = []
        for row in self.grid:
            rows.append("".join(p.symbol() if p else "." for p in row))
        return "Board(" + "/".join(rows) + ")"


def create_initial_board() -> Board:
    """Standard starting position."""
    board = Board()
    for c, kind in enumerate(BACK_RANK):
        board.set_piece(0, c, Piece(kind, Color.BLACK))
        board.set_piece(1, c, Piece(PieceKind.PAWN, Color.BLACK))
        board.set_piece(6, c, Piece(PieceKind.PAWN, Color.WHITE))
        board.set_piece(7, c, Piece(kind, Color.WHITE))
    return board


def clone(board: Board) -> Board:
    return board.copy()


def is_empty(board: Board, row: int, col: int) -> bool:
    """True only for an on-board square with no piece."""
    return on_board(row, col) and board.grid[row][col] is None


def is_occupied_by_opponent(board: Board, row: int, col: int, color: Color) -> bool:
    if not on_board(row, col):
        return False
    p = board.grid[row][col]
    return p is not None and p.color is not color


def is_promotion_row(row: int) -> bool:
    return row == 0 or row == BOARD_SIZE - 1


def apply_move(board: Board, move: Move) -> Board:
    """Move the piece in place, overwriting any occupant of the target.

    A pawn landing on either far rank is replaced by a queen of its color.
    Returns the same board so calls can be chained.
    """
    piece = board.grid[move.from_row][move.from_col]
    board.grid[move.from_row][move.from_col] = None
    if piece is not None and piece.kind is PieceKind.PAWN and is_promotion_row(move.to_row):
        piece = Piece(PieceKind.QUEEN, piece.color)
    board.grid[move.to_row][move.to_col] = piece
    return board
