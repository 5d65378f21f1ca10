from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar, cast

if TYPE_CHECKING:
    from collections.abc import Callable

    from .models.api import MoveAction
    from .models.enums import ActionLogResult, Coord, Side, WinReason


@dataclass
class ActionEvent:
    game_id: str
    move_number: int
    side: Side | None
    action: MoveAction
    result: ActionLogResult
    message: str | None = None
    captured: list[Coord] = field(default_factory=list)


@dataclass
class MoveCommitted:
    game_id: str
    side: Side
    piece_id: int
    src: Coord
    dst: Coord


@dataclass
class PiecesCaptured:
    game_id: str
    by: Side
    positions: list[Coord]


@dataclass
class TurnChanged:
    game_id: str
    side_to_move: Side
    move_number: int


@dataclass
class GameEnded:
    game_id: str
    winner: Side
    reason: WinReason


GameEvent = MoveCommitted | PiecesCaptured | TurnChanged | GameEnded

T = TypeVar("T")


class EventBus:
    def __init__(self) -> None:
        self._subs: dict[type[Any], list[object]] = {}

    def subscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        lst = self._subs.setdefault(event_type, [])
        lst.append(cast("object", handler))

    def unsubscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        lst = self._subs.get(event_type, [])
        if handler in lst:
            lst.remove(handler)

    def emit(self, event: Any) -> None:
        et = type(event)
        for h in self._subs.get(et, []):
            # Let exceptions propagate; callers decide how to handle them
            cast("Callable[[Any], None]", h)(event)

    def emit_all(self, events: list[Any]) -> None:
        for ev in events:
            self.emit(ev)


# Global bus instance
event_bus = EventBus()
