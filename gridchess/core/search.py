import logging
import time
from typing import List, Optional, Tuple

from gridchess.core.board import Board, apply_move, clone
from gridchess.core.evaluator import Evaluator
from gridchess.core.legality import get_all_safe_moves, gives_check, is_king_in_check
from gridchess.core.pieces import Color, Move
from gridchess.core.utils import format_info

logger = logging.getLogger(__name__)

INF = 1000000
# Far outside any material total, so a mate always outweighs evaluation.
MATE_SCORE = 10000

# Plies searched by the hard level, counting the engine's own move.
HARD_DEPTH = 3


class SearchEngine:
    def __init__(self, evaluator: Optional[Evaluator] = None, depth: int = HARD_DEPTH):
        self.evaluator = evaluator or Evaluator()
        self.max_depth = depth
        self.nodes = 0

    def search_best_move(self, board: Board, color: Color) -> Tuple[Optional[Move], int]:
        """Best move for ``color`` and its minimax score (white-positive).

        Each candidate is played on a copy and searched ``max_depth - 1``
        further plies with a full window. Ties keep the earlier move.
        Returns (None, terminal score) when ``color`` has no legal move.
        """
        self.nodes = 0
        start_time = time.time()
        moves = get_all_safe_moves(board, color)
        if not moves:
            return None, self._terminal_score(board, color)

        maximizing = color is Color.WHITE
        reply_is_white = not maximizing
        best_move = None
        best_score = -INF if maximizing else INF

        for move in moves:
            child = apply_move(clone(board), move)
            score = self.minimax(child, self.max_depth - 1, -INF, INF, reply_is_white)
            if (maximizing and score > best_score) or (not maximizing and score < best_score):
                best_score = score
                best_move = move

        elapsed = time.time() - start_time
        logger.debug(format_info("minimax", self.max_depth, best_score, self.nodes, elapsed, best_move))
        return best_move, best_score

    def minimax(self, board: Board, depth: int, alpha: int, beta: int, maximizing_is_white: bool) -> int:
        """Alpha-beta minimax; the maximizer is white.

        Cut-offs only skip siblings that cannot change the result, so the
        value equals plain minimax at the same depth.
        """
        self.nodes += 1
        if depth == 0:
            return self.evaluator.evaluate(board)

        color = Color.WHITE if maximizing_is_white else Color.BLACK
        moves = get_all_safe_moves(board, color)
        if not moves:
            return self._terminal_score(board, color)

        if maximizing_is_white:
            best = -INF
            for move in self.order_moves(board, moves):
                child = apply_move(clone(board), move)
                score = self.minimax(child, depth - 1, alpha, beta, False)
                best = max(best, score)
                alpha = max(alpha, score)
                if beta <= alpha:
                    break
            return best

        best = INF
        for move in self.order_moves(board, moves):
            child = apply_move(clone(board), move)
            score = self.minimax(child, depth - 1, alpha, beta, True)
            best = min(best, score)
            beta = min(beta, score)
            if beta <= alpha:
                break
        return best

    def order_moves(self, board: Board, moves: List[Move]) -> List[Move]:
        """Captures first, then checking moves, then the rest (stable)."""
        def rank(move: Move) -> int:
            if board.piece_at(move.to_row, move.to_col) is not None:
                return 0
            if gives_check(board, move):
                return 1
            return 2

        return sorted(moves, key=rank)

    @staticmethod
    def _terminal_score(board: Board, color: Color) -> int:
        """Score for ``color`` to move with no legal moves."""
        if is_king_in_check(board, color):
            return -MATE_SCORE if color is Color.WHITE else MATE_SCORE
        return 0


def minimax(board: Board, depth: int, alpha: int, beta: int, maximizing_is_white: bool) -> int:
    return SearchEngine(depth=depth).minimax(board, depth, alpha, beta, maximizing_is_white)
