"""Turn controller: the game's selection/move state machine.

    AWAITING_SELECTION --own piece--> PIECE_SELECTED
    PIECE_SELECTED --legal target--> move committed, side flips, then
        CHECKMATE / STALEMATE if the new side has no legal move,
        otherwise AWAITING_SELECTION
    PIECE_SELECTED --anything else--> AWAITING_SELECTION

Transitions are functions returning a new ``GameState``; a committed move
is played on a copy of the board, so earlier states stay valid. Terminal
phases absorb every transition.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from gridchess.core.board import Board, apply_move, clone, create_initial_board
from gridchess.core.legality import GameStatus, Outcome, game_status, get_safe_moves
from gridchess.core.pieces import Color, Move

logger = logging.getLogger(__name__)


class Phase(Enum):
    AWAITING_SELECTION = "awaiting_selection"
    PIECE_SELECTED = "piece_selected"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


@dataclass(frozen=True)
class GameState:
    board: Board
    side_to_move: Color = Color.WHITE
    phase: Phase = Phase.AWAITING_SELECTION
    selected: Optional[Tuple[int, int]] = None
    legal_targets: Tuple[Move, ...] = ()
    winner: Optional[Color] = None
    last_move: Optional[Move] = None
    ply: int = 0

    @property
    def is_over(self) -> bool:
        return self.phase in (Phase.CHECKMATE, Phase.STALEMATE)


def new_game(board: Optional[Board] = None, side_to_move: Color = Color.WHITE) -> GameState:
    """Fresh game from the starting position, or from a supplied board."""
    state = GameState(board=board if board is not None else create_initial_board(),
                      side_to_move=side_to_move)
    return _classify(state)


def clear_selection(state: GameState) -> GameState:
    if state.is_over:
        return state
    return replace(state, phase=Phase.AWAITING_SELECTION, selected=None, legal_targets=())


def select_square(state: GameState, row: int, col: int) -> GameState:
    """Handle a click on (row, col)."""
    if state.is_over:
        return state

    if state.phase is Phase.PIECE_SELECTED:
        for move in state.legal_targets:
            if move.target == (row, col):
                return commit_move(state, move)
        if state.selected == (row, col):
            return clear_selection(state)

    piece = state.board.piece_at(row, col)
    if piece is not None and piece.color is state.side_to_move:
        targets = get_safe_moves(state.board, row, col, state.side_to_move)
        return replace(state, phase=Phase.PIECE_SELECTED, selected=(row, col), legal_targets=tuple(targets))
    return clear_selection(state)


def commit_move(state: GameState, move: Move) -> GameState:
    """Play ``move`` if legal for the side to move; otherwise return ``state`` unchanged."""
    if state.is_over:
        return state
    piece = state.board.piece_at(move.from_row, move.from_col)
    if piece is None or piece.color is not state.side_to_move:
        return state
    if move not in get_safe_moves(state.board, move.from_row, move.from_col, state.side_to_move):
        logger.debug("Rejected illegal move %s for %s", move.uci(), state.side_to_move.value)
        return state

    board = apply_move(clone(state.board), move)
    logger.info("%s plays %s", state.side_to_move.value, move.uci())
    switched = GameState(board=board, side_to_move=state.side_to_move.opponent,
                         last_move=move, ply=state.ply + 1)
    return _classify(switched)


def status_of(state: GameState) -> GameStatus:
    if state.phase is Phase.CHECKMATE:
        return GameStatus(Outcome.CHECKMATE, state.winner)
    if state.phase is Phase.STALEMATE:
        return GameStatus(Outcome.STALEMATE)
    return GameStatus(Outcome.ONGOING)


def _classify(state: GameState) -> GameState:
    status = game_status(state.board, state.side_to_move)
    if status.outcome is Outcome.CHECKMATE:
        logger.info("Checkmate, %s wins", status.winner.value)
        return replace(state, phase=Phase.CHECKMATE, winner=status.winner)
    if status.outcome is Outcome.STALEMATE:
        logger.info("Stalemate")
        return replace(state, phase=Phase.STALEMATE)
    return state
