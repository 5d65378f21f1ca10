from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...models.enums import Coord, Side
    from ...models.game import GameState

from ...events import ActionEvent, event_bus
from ...models.api import MoveAction
from ...models.enums import ActionLogResult


def actor_side(state: GameState, action: MoveAction) -> Side | None:
    p = state.board.piece_at(action.src)
    return p.side if p is not None else None


def log_event(
    state: GameState,
    action: MoveAction,
    result: ActionLogResult,
    message: str | None = None,
    captured: list[Coord] | None = None,
    side: Side | None = None,
) -> None:
    event_bus.emit(
        ActionEvent(
            game_id=state.id,
            move_number=state.turn.move_number,
            side=side if side is not None else actor_side(state, action),
            action=action,
            result=result,
            message=message,
            captured=list(captured or []),
        )
    )


def log_illegal(state: GameState, action: MoveAction, explanation: str) -> None:
    log_event(state, action, ActionLogResult.ILLEGAL, explanation)


def log_error(state: GameState, action: MoveAction, error: Exception) -> None:
    log_event(state, action, ActionLogResult.ERROR, str(error))
