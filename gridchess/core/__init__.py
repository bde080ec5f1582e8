"""Core rules and search: board, move generation, legality, evaluation, search."""

from .pieces import Color, Move, Piece, PieceKind
from .board import Board, apply_move, clone, create_initial_board, is_empty, is_occupied_by_opponent
from .movegen import generate_pseudo_moves
from .legality import GameStatus, Outcome, game_status, get_all_safe_moves, get_safe_moves, is_king_in_check
from .evaluator import Evaluator, evaluate
from .search import SearchEngine, minimax
