from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ...events import GameEvent
    from ...models.api import MoveAction, MoveResult
    from ...models.enums import MoveError
    from ...models.game import GameState


class ActionHandler(Protocol):
    action_type: type

    def evaluate(self, state: GameState, action: MoveAction) -> tuple[bool, MoveError | None]: ...

    def apply(
        self, state: GameState, action: MoveAction, now: float
    ) -> tuple[MoveResult, list[GameEvent]]: ...


Registry = dict[type, ActionHandler]
