"""Shared pytest fixtures for the GridChess suites."""

import pytest

from gridchess.core.board import apply_move, clone
from gridchess.core.legality import get_all_safe_moves, is_king_in_check
from gridchess.core.pieces import Color
from gridchess.core.search import MATE_SCORE


def _plain_minimax(evaluator, board, depth, white):
    if depth == 0:
        return evaluator.evaluate(board)
    color = Color.WHITE if white else Color.BLACK
    moves = get_all_safe_moves(board, color)
    if not moves:
        if is_king_in_check(board, color):
            return -MATE_SCORE if white else MATE_SCORE
        return 0
    scores = [_plain_minimax(evaluator, apply_move(clone(board), m), depth - 1, not white) for m in moves]
    return max(scores) if white else min(scores)


@pytest.fixture
def plain_minimax():
    """Exhaustive minimax without pruning: ``plain_minimax(evaluator, board, depth, white)``."""
    return _plain_minimax
