"""Static evaluation: a signed score where positive favours white.

Terms, all additive and each signed by the side it belongs to:
    - material
    - central occupation (d4, e4, d5, e5)
    - mobility, counted on pseudo-legal moves
    - pawn structure (isolated and doubled pawns)
    - king safety (an enemy piece next to the king)

Mobility intentionally counts pseudo-moves rather than legal moves: it is
much cheaper and keeps engine play reproducible against the reference.
"""

from typing import Dict, List, Optional

from gridchess.config import CONFIG, EvalConfig
from gridchess.core.board import Board
from gridchess.core.movegen import KING_STEPS, count_pseudo_moves
from gridchess.core.pieces import Color, PieceKind

CENTER_SQUARES = frozenset({(3, 3), (3, 4), (4, 3), (4, 4)})


def _sign(color: Color) -> int:
    return 1 if color is Color.WHITE else -1


class Evaluator:
    def __init__(self, cfg: Optional[EvalConfig] = None):
        self.cfg = cfg or CONFIG.eval
        self.values: Dict[PieceKind, int] = {
            kind: self.cfg.piece_values[kind.name] for kind in PieceKind
        }

    def evaluate(self, board: Board) -> int:
        score = 0
        pawn_files: Dict[Color, List[int]] = {Color.WHITE: [], Color.BLACK: []}

        for r, c, piece in board.pieces():
            sign = _sign(piece.color)
            score += sign * self.values[piece.kind]
            if (r, c) in CENTER_SQUARES:
                score += sign * self.cfg.center_bonus
            if piece.kind is PieceKind.PAWN:
                pawn_files[piece.color].append(c)

        score += self._eval_mobility(board)
        score += self._eval_pawns(pawn_files[Color.WHITE]) - self._eval_pawns(pawn_files[Color.BLACK])
        score += self._eval_king_safety(board, Color.WHITE) - self._eval_king_safety(board, Color.BLACK)
        return score

    def _eval_mobility(self, board: Board) -> int:
        diff = count_pseudo_moves(board, Color.WHITE) - count_pseudo_moves(board, Color.BLACK)
        # int() truncates toward zero so mirrored positions score symmetrically
        return int(diff * self.cfg.mobility_weight)

    def _eval_pawns(self, files: List[int]) -> int:
        """Penalty (<= 0) for one side's pawns, given the file of each pawn."""
        score = 0
        for f in files:
            if (f - 1) not in files and (f + 1) not in files:
                score -= self.cfg.isolated_pawn_penalty
            if files.count(f) > 1:
                score -= self.cfg.doubled_pawn_penalty
        return score

    def _eval_king_safety(self, board: Board, color: Color) -> int:
        king = board.find_king(color)
        if king is None:
            return 0
        kr, kc = king
        for dr, dc in KING_STEPS:
            neighbour = board.piece_at(kr + dr, kc + dc)
            if neighbour is not None and neighbour.color is not color:
                return -self.cfg.king_danger_penalty
        return 0


_default_evaluator: Optional[Evaluator] = None


def evaluate(board: Board) -> int:
    """Evaluate with the process-wide configuration."""
    global _default_evaluator
    if _default_evaluator is None:
        _default_evaluator = Evaluator()
    return _default_evaluator.evaluate(board)
