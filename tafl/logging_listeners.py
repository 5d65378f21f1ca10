from __future__ import annotations

import logging

from . import storage
from .config import LOG_LEVEL
from .events import (
    ActionEvent,
    GameEnded,
    MoveCommitted,
    PiecesCaptured,
    TurnChanged,
    event_bus,
)
from .models.api import ActionLogEntry
from .models.enums import ActionLogResult

log = logging.getLogger("tafl")

_registered = False


def _on_action_event(ev: ActionEvent) -> None:
    # Convert event to ActionLogEntry JSON for the per-game log
    entry = ActionLogEntry(
        game_id=ev.game_id,
        move_number=ev.move_number,
        side=ev.side,
        action=ev.action,
        result=ev.result,
        message=ev.message,
        captured=ev.captured,
    )
    storage.logs.append(ev.game_id, entry.model_dump_json())
    level = logging.ERROR if ev.result == ActionLogResult.ERROR else logging.INFO
    log.log(
        level,
        "game=%s move=%d %s %s->%s %s%s",
        ev.game_id,
        ev.move_number,
        ev.side.value if ev.side else "-",
        ev.action.src,
        ev.action.dst,
        ev.result.value,
        f" ({ev.message})" if ev.message else "",
    )


def _trace(ev: MoveCommitted | PiecesCaptured | TurnChanged | GameEnded) -> None:
    log.debug("event %s %s", type(ev).__name__, ev)


def _on_game_ended(ev: GameEnded) -> None:
    log.info("game=%s won by %s: %s", ev.game_id, ev.winner.value, ev.reason.value)


def register_listeners() -> None:
    global _registered
    if _registered:
        return
    _registered = True
    log.setLevel(LOG_LEVEL)
    event_bus.subscribe(ActionEvent, _on_action_event)
    for et in (MoveCommitted, PiecesCaptured, TurnChanged, GameEnded):
        event_bus.subscribe(et, _trace)
    event_bus.subscribe(GameEnded, _on_game_ended)
