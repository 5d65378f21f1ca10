from __future__ import annotations

import os

from .models.enums import KingCaptureRule, Side
from .models.game import RuleOptions


def _seconds(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else None


KING_CAPTURE = KingCaptureRule(os.getenv("TAFL_KING_CAPTURE", "strict").lower())
GAME_SECONDS = _seconds("TAFL_GAME_SECONDS")
TURN_SECONDS = _seconds("TAFL_TURN_SECONDS")
FIRST_SIDE = Side(os.getenv("TAFL_FIRST_SIDE", "attacker").lower())
DEFAULT_SCENARIO = os.getenv("TAFL_DEFAULT_SCENARIO", "hnefatafl")
MAX_GAMES = int(os.getenv("MAX_GAMES", "50"))
LOG_LEVEL = os.getenv("TAFL_LOG_LEVEL", "INFO").upper()


def default_rules() -> RuleOptions:
    return RuleOptions(
        king_capture=KING_CAPTURE,
        game_seconds=GAME_SECONDS,
        turn_seconds=TURN_SECONDS,
        first_side=FIRST_SIDE,
    )
