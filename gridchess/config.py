# gridchess/config.py
from dataclasses import dataclass, field
from typing import Dict
import os
import tomllib

# Defaults (tenths of a pawn)
PIECE_VALUES = {
    "PAWN": 10,
    "KNIGHT": 30,
    "BISHOP": 30,
    "ROOK": 50,
    "QUEEN": 90,
    "KING": 900,
}

@dataclass
class EvalConfig:
    piece_values: Dict[str, int] = field(default_factory=lambda: PIECE_VALUES.copy())
    center_bonus: int = 5
    mobility_weight: float = 0.5
    isolated_pawn_penalty: int = 5
    doubled_pawn_penalty: int = 5
    king_danger_penalty: int = 15

@dataclass
class GameConfig:
    default_difficulty: str = "hard"
    engine_color: str = "black"   # "white", "black" or "none"
    ai_move_delay_ms: int = 100   # pause before the engine replies in the CLI
    max_games: int = 100          # API registry size; least recently used games are evicted

@dataclass
class UIConfig:
    engine_name: str = "GridChess"
    engine_author: str = "GridChess developers"
    api_port: int = 8000

@dataclass
class Config:
    eval: EvalConfig = field(default_factory=EvalConfig)
    game: GameConfig = field(default_factory=GameConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("eval", "game", "ui"):
            target = getattr(cfg, section)
            for k, v in raw.get(section, {}).items():
                if hasattr(target, k):
                    setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"]).upper()
        return cfg

# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("GRIDCHESS_CONFIG_TOML", "config.toml"))
# allow env override of the log level for quick debugging
if os.environ.get("GRIDCHESS_LOG_LEVEL"):
    CONFIG.log_level = os.environ["GRIDCHESS_LOG_LEVEL"].upper()
