"""
Integration test suite for GridChess.

Tests components working together end-to-end:
- Random playouts cross-checked against python-chess move generation
- Engine vs engine games at every difficulty
- Alpha-beta vs plain minimax on positions reached in play
- FastAPI REST API (game lifecycle, errors, engine replies)
- CLI game loop with scripted input
"""

import random

import chess
import pytest

from gridchess.core.board import apply_move, create_initial_board
from gridchess.core.legality import Outcome, game_status, get_all_safe_moves, is_king_in_check
from gridchess.core.pieces import Color, Move, PieceKind
from gridchess.core.search import INF, SearchEngine
from gridchess.main import Game
from gridchess.notation import board_from_fen, board_to_fen
from gridchess.policy import Difficulty, choose_move


def to_chess_move(board, move):
    """Our move as a python-chess move (queen promotion made explicit)."""
    piece = board.piece_at(move.from_row, move.from_col)
    text = move.uci()
    if piece.kind is PieceKind.PAWN and move.to_row in (0, 7):
        text += "q"
    return chess.Move.from_uci(text)


def reference_moves(ref):
    """python-chess legal moves without en passant or underpromotion."""
    return {
        m.uci()[:4] for m in ref.legal_moves
        if not ref.is_en_passant(m) and m.promotion in (None, chess.QUEEN)
    }


# ════════════════════════════════════════════════════════════════════════════
#  RANDOM PLAYOUTS VS PYTHON-CHESS
# ════════════════════════════════════════════════════════════════════════════


class TestPlayoutsAgainstReference:
    """Random games where every position is checked against python-chess."""

    @pytest.mark.parametrize("seed", [1, 2, 3, 4])
    def test_legal_moves_agree(self, seed):
        rng = random.Random(seed)
        board = create_initial_board()
        ref = chess.Board(board_to_fen(board, Color.WHITE))
        side = Color.WHITE

        for _ply in range(120):
            ours = get_all_safe_moves(board, side)
            assert {m.uci() for m in ours} == reference_moves(ref), board_to_fen(board, side)
            if not ours:
                break
            move = rng.choice(ours)
            ref.push(to_chess_move(board, move))
            apply_move(board, move)
            side = side.opponent
            assert board_to_fen(board, side).split()[0] == ref.board_fen()

    @pytest.mark.parametrize("seed", [5, 6])
    def test_terminal_status_agrees(self, seed):
        rng = random.Random(seed)
        board = create_initial_board()
        ref = chess.Board(board_to_fen(board, Color.WHITE))
        side = Color.WHITE

        for _ply in range(200):
            status = game_status(board, side)
            if status.is_over:
                if status.outcome is Outcome.CHECKMATE:
                    assert ref.is_checkmate()
                    assert status.winner is side.opponent
                else:
                    assert ref.is_stalemate()
                break
            assert is_king_in_check(board, side) == ref.is_check()
            move = rng.choice(get_all_safe_moves(board, side))
            ref.push(to_chess_move(board, move))
            apply_move(board, move)
            side = side.opponent


# ════════════════════════════════════════════════════════════════════════════
#  ENGINE VS ENGINE
# ════════════════════════════════════════════════════════════════════════════


class TestFullGame:
    """The controller and policy can play complete games without crashing."""

    def test_easy_vs_easy_completes(self):
        game = Game(difficulty="easy", engine_color=None, rng=random.Random(11))
        for _ in range(150):
            if game.state.is_over:
                break
            legal = game.legal_moves()
            move = game.engine_move()
            assert move in legal
        assert len(game.history) > 10

    def test_medium_vs_easy(self):
        rng = random.Random(21)
        board = create_initial_board()
        side = Color.WHITE
        for _ in range(30):
            if game_status(board, side).is_over:
                break
            level = Difficulty.MEDIUM if side is Color.WHITE else Difficulty.EASY
            move = choose_move(board, side, level, rng=rng)
            assert move in get_all_safe_moves(board, side)
            apply_move(board, move)
            side = side.opponent

    def test_hard_converts_endgame(self):
        """Hard engine with king and rook plays only legal moves and keeps the rook."""
        board, side = board_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
        rng = random.Random(3)
        for _ in range(6):
            if game_status(board, side).is_over:
                break
            level = Difficulty.HARD if side is Color.WHITE else Difficulty.EASY
            move = choose_move(board, side, level, rng=rng)
            assert move in get_all_safe_moves(board, side)
            apply_move(board, move)
            side = side.opponent
        assert any(p.kind is PieceKind.ROOK for _, _, p in board.pieces(Color.WHITE))

    def test_hard_prefers_mate_over_material(self):
        # Ra8 mates; Rxd1 would only win a knight
        board, side = board_from_fen("6k1/5ppp/8/8/8/8/8/R2nK3 w - - 0 1")
        move = choose_move(board, side, "hard")
        assert move == Move.from_uci("a1a8")

    def test_engine_as_white_through_wrapper(self):
        game = Game(difficulty="medium", engine_color="white")
        move = game.engine_move()
        assert move is not None
        assert game.side_to_move is Color.BLACK
        assert game.make_move("e7e5") or game.make_move("e7e6")
        assert len(game.history) == 3


# ════════════════════════════════════════════════════════════════════════════
#  SEARCH PIPELINE
# ════════════════════════════════════════════════════════════════════════════


class TestSearchPipeline:
    @pytest.mark.parametrize("seed", [8, 9])
    def test_pruned_equals_plain_on_played_positions(self, seed, plain_minimax):
        rng = random.Random(seed)
        board = create_initial_board()
        side = Color.WHITE
        for _ in range(12):
            moves = get_all_safe_moves(board, side)
            if not moves:
                break
            apply_move(board, rng.choice(moves))
            side = side.opponent

        engine = SearchEngine()
        white = side is Color.WHITE
        assert engine.minimax(board, 2, -INF, INF, white) == plain_minimax(engine.evaluator, board, 2, white)

    def test_narrow_window_does_not_break_bounds(self):
        board, _ = board_from_fen("4k3/8/8/3q4/8/8/3R4/4K3 w - - 0 1")
        engine = SearchEngine()
        full = engine.minimax(board, 2, -INF, INF, True)
        # a fail-high window still reports a value at least beta
        assert engine.minimax(board, 2, full - 1, full, True) >= full


# ════════════════════════════════════════════════════════════════════════════
#  REST API INTEGRATION
# ════════════════════════════════════════════════════════════════════════════


class TestAPIIntegration:
    """Tests FastAPI REST API endpoints."""

    @pytest.fixture(autouse=True)
    def setup_client(self):
        from fastapi.testclient import TestClient
        from interface.api import _game_locks, app, games

        self.client = TestClient(app)
        games.clear()
        _game_locks.clear()

    def _new(self, **body):
        body.setdefault("engine_color", "none")
        response = self.client.post("/games", json=body)
        assert response.status_code == 200
        return response.json()

    def test_create_game(self):
        data = self._new()
        assert data["fen"] == "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w - - 0 1"
        assert data["turn"] == "white"
        assert data["status"] == "ongoing"
        assert len(data["legal_moves"]) == 20
        assert data["history"] == []

    def test_games_are_independent(self):
        a = self._new()
        b = self._new()
        self.client.post(f"/games/{a['id']}/move", json={"move": "e2e4"})
        assert self.client.get(f"/games/{b['id']}").json()["turn"] == "white"
        assert self.client.get(f"/games/{a['id']}").json()["turn"] == "black"

    def test_post_move_valid(self):
        game_id = self._new()["id"]
        response = self.client.post(f"/games/{game_id}/move", json={"move": "e2e4"})
        assert response.status_code == 200
        data = response.json()
        assert data["history"] == ["e2e4"]
        assert "4P3" in data["fen"]

    def test_post_move_illegal(self):
        game_id = self._new()["id"]
        response = self.client.post(f"/games/{game_id}/move", json={"move": "e2e5"})
        assert response.status_code == 400
        assert self.client.get(f"/games/{game_id}").json()["history"] == []

    def test_post_move_invalid_format(self):
        game_id = self._new()["id"]
        response = self.client.post(f"/games/{game_id}/move", json={"move": "zzzz"})
        assert response.status_code == 400

    def test_engine_replies_automatically(self):
        game_id = self._new(difficulty="medium", engine_color="black")["id"]
        data = self.client.post(f"/games/{game_id}/move", json={"move": "e2e4"}).json()
        assert len(data["history"]) == 2
        assert data["turn"] == "white"

    def test_engine_opens_as_white(self):
        data = self._new(difficulty="easy", engine_color="white")
        assert len(data["history"]) == 1
        assert data["turn"] == "black"

    def test_engine_endpoint(self):
        game_id = self._new(difficulty="easy")["id"]
        data = self.client.post(f"/games/{game_id}/engine").json()
        assert data["engine_move"] is not None
        assert data["history"] == [data["engine_move"]]

    def test_select_endpoint(self):
        game_id = self._new()["id"]
        data = self.client.post(f"/games/{game_id}/select", json={"row": 7, "col": 6}).json()
        assert data["selected"] == [7, 6]
        assert sorted(data["targets"]) == ["g1f3", "g1h3"]
        data = self.client.post(f"/games/{game_id}/select", json={"row": 5, "col": 5}).json()
        assert data["game"]["history"] == ["g1f3"]

    def test_select_out_of_range(self):
        game_id = self._new()["id"]
        response = self.client.post(f"/games/{game_id}/select", json={"row": 8, "col": 0})
        assert response.status_code == 422

    def test_fools_mate_flow(self):
        game_id = self._new()["id"]
        for mv in ["f2f3", "e7e5", "g2g4", "d8h4"]:
            assert self.client.post(f"/games/{game_id}/move", json={"move": mv}).status_code == 200
        data = self.client.get(f"/games/{game_id}").json()
        assert data["status"] == "checkmate"
        assert data["winner"] == "black"
        assert data["in_check"] is True
        assert data["legal_moves"] == []
        response = self.client.post(f"/games/{game_id}/move", json={"move": "a2a3"})
        assert response.status_code == 400
        assert self.client.post(f"/games/{game_id}/engine").status_code == 400

    def test_create_from_fen(self):
        fen = "k7/8/1Q6/8/8/8/8/7K b - - 0 1"
        data = self._new(fen=fen)
        assert data["fen"] == fen
        assert data["status"] == "stalemate"
        assert data["winner"] is None

    def test_create_invalid(self):
        assert self.client.post("/games", json={"fen": "invalid"}).status_code == 400
        assert self.client.post("/games", json={"difficulty": "godlike"}).status_code == 400
        assert self.client.post("/games", json={"engine_color": "green"}).status_code == 400

    def test_reset(self):
        game_id = self._new()["id"]
        self.client.post(f"/games/{game_id}/move", json={"move": "e2e4"})
        data = self.client.post(f"/games/{game_id}/reset").json()
        assert data["history"] == []
        assert data["turn"] == "white"

    def test_moves_hold_the_game_lock(self):
        from interface.api import _game_locks, games

        game_id = self._new()["id"]
        game = games[game_id]
        seen = []
        original = game.make_move

        def make_move(uci):
            seen.append(_game_locks[game_id].locked())
            return original(uci)

        game.make_move = make_move
        assert self.client.post(f"/games/{game_id}/move", json={"move": "e2e4"}).status_code == 200
        assert seen == [True]
        assert not _game_locks[game_id].locked()

    def test_registry_evicts_least_recently_used(self, monkeypatch):
        from gridchess.config import CONFIG

        monkeypatch.setattr(CONFIG.game, "max_games", 2)
        first = self._new()["id"]
        second = self._new()["id"]
        assert self.client.get(f"/games/{first}").status_code == 200
        third = self._new()["id"]
        assert self.client.get(f"/games/{second}").status_code == 404
        assert self.client.get(f"/games/{first}").status_code == 200
        assert self.client.get(f"/games/{third}").status_code == 200

    def test_unknown_and_deleted_game(self):
        assert self.client.get("/games/missing").status_code == 404
        game_id = self._new()["id"]
        assert self.client.delete(f"/games/{game_id}").status_code == 200
        assert self.client.get(f"/games/{game_id}").status_code == 404
        assert self.client.delete(f"/games/{game_id}").status_code == 404


# ════════════════════════════════════════════════════════════════════════════
#  CLI INTEGRATION
# ════════════════════════════════════════════════════════════════════════════


class TestCLIIntegration:
    def test_two_player_fools_mate(self, monkeypatch, capsys):
        from interface import cli

        inputs = iter(["f2f3", "e2e9", "e7e5", "g2g4", "d8h4"])
        monkeypatch.setattr("builtins.input", lambda _prompt="": next(inputs))
        cli.main(["--engine-color", "none"])
        out = capsys.readouterr().out
        assert "Illegal move, try again." in out
        assert "Checkmate! Black wins!" in out

    def test_engine_replies(self, monkeypatch, capsys):
        from interface import cli

        monkeypatch.setattr(cli.CONFIG.game, "ai_move_delay_ms", 0)
        inputs = iter(["e2e4"])

        def fake_input(_prompt=""):
            try:
                return next(inputs)
            except StopIteration:
                raise EOFError

        monkeypatch.setattr("builtins.input", fake_input)
        with pytest.raises(EOFError):
            cli.main(["--engine-color", "black", "--difficulty", "easy"])
        assert "Engine plays:" in capsys.readouterr().out
