"""Engine strength levels.

easy   - uniformly random legal move
medium - one-ply greedy on the static evaluation
hard   - alpha-beta minimax, ``HARD_DEPTH`` plies including the move itself

The hard depth is a fixed constant chosen for response time.
"""

import logging
import random
import time
from enum import Enum
from typing import Optional

from gridchess.core.board import Board, apply_move, clone
from gridchess.core.evaluator import Evaluator
from gridchess.core.legality import get_all_safe_moves
from gridchess.core.pieces import Color, Move
from gridchess.core.search import HARD_DEPTH, SearchEngine
from gridchess.core.utils import format_info

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


def _pick_random(board: Board, color: Color, rng: random.Random) -> Optional[Move]:
    moves = get_all_safe_moves(board, color)
    return rng.choice(moves) if moves else None


def _pick_greedy(board: Board, color: Color, evaluator: Evaluator) -> Optional[Move]:
    moves = get_all_safe_moves(board, color)
    start_time = time.time()
    maximizing = color is Color.WHITE
    best_move, best_score = None, None
    for move in moves:
        score = evaluator.evaluate(apply_move(clone(board), move))
        if best_score is None or (score > best_score if maximizing else score < best_score):
            best_move, best_score = move, score
    logger.debug(format_info("greedy", 1, best_score, len(moves), time.time() - start_time, best_move))
    return best_move


def choose_move(board: Board, color: Color, difficulty, rng: Optional[random.Random] = None,
                evaluator: Optional[Evaluator] = None) -> Optional[Move]:
    """Pick a legal move for ``color``; None if it has none.

    ``difficulty`` may be a Difficulty or its string value. The board is
    never modified.
    """
    difficulty = Difficulty(difficulty)
    if difficulty is Difficulty.EASY:
        return _pick_random(board, color, rng or random.Random())
    evaluator = evaluator or Evaluator()
    if difficulty is Difficulty.MEDIUM:
        return _pick_greedy(board, color, evaluator)
    move, _score = SearchEngine(evaluator, depth=HARD_DEPTH).search_best_move(board, color)
    return move
