from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from .enums import ActionKind, ActionLogResult, Coord, MoveError, Side
from .game import GameOutcome, GameState, RuleOptions
from .scenario import Scenario

# ----- Actions -----


class MoveAction(BaseModel):
    kind: ActionKind = ActionKind.MOVE
    src: Coord
    dst: Coord


class MoveResult(BaseModel):
    applied: bool
    error: MoveError | None = None
    captured: list[Coord] = Field(default_factory=list)
    game_ended: bool = False
    outcome: GameOutcome = Field(default_factory=GameOutcome)
    side_to_move: Side


# ----- API IO -----


class CreateGameRequest(BaseModel):
    # a registered scenario name or an inline scenario; None picks the default
    scenario: str | Scenario | None = None
    rules: RuleOptions | None = None


class GameView(BaseModel):
    id: str
    state: GameState
    # board[row][col]: "" for an empty square, else "<side>_<kind>"
    board: list[list[str]]
    # world-space frame for a renderer: upper-left and lower-right corners
    extent: tuple[tuple[float, float], tuple[float, float]]


class MoveRequest(BaseModel):
    src: Coord
    dst: Coord


class MoveResponse(BaseModel):
    result: MoveResult
    game: GameView


class LegalMovesResponse(BaseModel):
    src: Coord
    destinations: list[Coord]


# ----- Action Log -----


class ActionLogEntry(BaseModel):
    ts: datetime = Field(default_factory=datetime.now)
    game_id: str
    move_number: int
    side: Side | None = None
    action: MoveAction
    result: ActionLogResult = ActionLogResult.APPLIED
    message: str | None = None
    captured: list[Coord] = Field(default_factory=list)


class ActionLogResponse(BaseModel):
    entries: list[ActionLogEntry]
