"""Piece catalogue and move value types.

Colors and piece kinds are enums so the generator can match them
exhaustively. ``Piece`` and ``Move`` are frozen dataclasses: a promotion
replaces the piece on its square instead of editing it, and a move never
carries capture/promotion/check flags (those are derived from the board).
"""

from dataclasses import dataclass
from enum import Enum

import chess


class Color(Enum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def forward(self) -> int:
        """Row delta of a pawn step: white moves toward row 0."""
        return -1 if self is Color.WHITE else 1


class PieceKind(Enum):
    PAWN = "p"
    KNIGHT = "n"
    BISHOP = "b"
    ROOK = "r"
    QUEEN = "q"
    KING = "k"


@dataclass(frozen=True)
class Piece:
    kind: PieceKind
    color: Color

    def symbol(self) -> str:
        """FEN letter: uppercase for white, lowercase for black."""
        s = self.kind.value
        return s.upper() if self.color is Color.WHITE else s

    @classmethod
    def from_symbol(cls, symbol: str) -> "Piece":
        color = Color.WHITE if symbol.isupper() else Color.BLACK
        return cls(PieceKind(symbol.lower()), color)


def square_name(row: int, col: int) -> str:
    """Algebraic name of a grid square (row 0 is rank 8)."""
    return chess.square_name(chess.square(col, 7 - row))


@dataclass(frozen=True)
class Move:
    from_row: int
    from_col: int
    to_row: int
    to_col: int

    def __post_init__(self):
        coords = (self.from_row, self.from_col, self.to_row, self.to_col)
        if any(not 0 <= v < 8 for v in coords):
            raise ValueError(f"Move off the board: {coords}")

    @property
    def target(self) -> tuple:
        return self.to_row, self.to_col

    def uci(self) -> str:
        return square_name(self.from_row, self.from_col) + square_name(self.to_row, self.to_col)

    @classmethod
    def from_uci(cls, text: str) -> "Move":
        """Parse long algebraic notation ("e2e4", "e7e8q").

        Raises ValueError on malformed input. A promotion suffix is
        accepted and dropped since promotion is always to a queen.
        """
        m = chess.Move.from_uci(text.strip())
        if not m:
            raise ValueError(f"null move is not a move: {text!r}")
        fr, fc = 7 - chess.square_rank(m.from_square), chess.square_file(m.from_square)
        tr, tc = 7 - chess.square_rank(m.to_square), chess.square_file(m.to_square)
        return cls(fr, fc, tr, tc)

    def __str__(self) -> str:
        return self.uci()
