from __future__ import annotations

import uuid

from pydantic import BaseModel, Field

from .board import Board
from .enums import GameStatus, KingCaptureRule, Side, WinReason
from .scenario import Scenario


class RuleOptions(BaseModel):
    king_capture: KingCaptureRule = KingCaptureRule.STRICT
    game_seconds: float | None = Field(default=None, gt=0)  # whole-game budget per side
    turn_seconds: float | None = Field(default=None, gt=0)  # limit for a single turn
    first_side: Side = Side.ATTACKER


class TurnState(BaseModel):
    side_to_move: Side = Side.ATTACKER
    move_number: int = 1


class GameOutcome(BaseModel):
    status: GameStatus = GameStatus.IN_PROGRESS
    winner: Side | None = None
    reason: WinReason | None = None

    @classmethod
    def won(cls, winner: Side, reason: WinReason) -> GameOutcome:
        return cls(status=GameStatus.WON, winner=winner, reason=reason)

    @property
    def ended(self) -> bool:
        return self.status == GameStatus.WON


class GameClock(BaseModel):
    game_seconds: float | None = None
    turn_seconds: float | None = None
    remaining: dict[Side, float] = Field(default_factory=dict)
    turn_started_at: float | None = None  # monotonic timestamp, None = stopped

    @property
    def timed(self) -> bool:
        return self.game_seconds is not None or self.turn_seconds is not None


class GameState(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    scenario: Scenario
    rules: RuleOptions = Field(default_factory=RuleOptions)
    board: Board
    turn: TurnState = Field(default_factory=TurnState)
    outcome: GameOutcome = Field(default_factory=GameOutcome)
    clock: GameClock = Field(default_factory=GameClock)
