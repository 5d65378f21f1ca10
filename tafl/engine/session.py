"""Single-game facade.

A Game owns one GameState and serialises every mutation behind a lock.
Readers get deep copies, so a renderer can hold a snapshot without locking.
"""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING

from ..events import event_bus
from ..models.api import MoveAction
from .core import TaflEngine

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..core.primitives import Explanation
    from ..events import EventBus
    from ..models.api import MoveResult
    from ..models.enums import Coord
    from ..models.game import GameOutcome, GameState, RuleOptions
    from ..models.scenario import Scenario


class Game:
    def __init__(
        self,
        scenario: Scenario | None = None,
        rules: RuleOptions | None = None,
        *,
        state: GameState | None = None,
        engine: TaflEngine | None = None,
        now: Callable[[], float] = time.monotonic,
        bus: EventBus | None = None,
    ):
        """Start a game from `scenario`, or adopt an existing `state` as is."""
        self.engine = engine or TaflEngine()
        self.now = now
        self.bus = bus or event_bus
        self._lock = threading.RLock()
        if state is not None:
            self._state = state
        elif scenario is not None:
            self._state = self.engine.create_game(scenario, rules, now=self.now())
        else:
            raise ValueError("a scenario or a state is required")

    @property
    def id(self) -> str:
        return self._state.id

    def current_state(self) -> GameState:
        with self._lock:
            return self._state.model_copy(deep=True)

    def legal_destinations(self, c: Coord) -> set[Coord] | None:
        with self._lock:
            return self.engine.legal_destinations(self._state, tuple(c))

    def evaluate_move(self, src: Coord, dst: Coord) -> Explanation:
        with self._lock:
            action = MoveAction(src=src, dst=dst)
            return self.engine.explain_move(self._state, action, self.now())

    def submit_move(self, src: Coord, dst: Coord) -> MoveResult:
        with self._lock:
            action = MoveAction(src=src, dst=dst)
            result, events = self.engine.process_move(self._state, action, self.now())
            self.bus.emit_all(events)
            return result

    def check_clock(self) -> GameOutcome:
        with self._lock:
            outcome, events = self.engine.check_clock(self._state, self.now())
            self.bus.emit_all(events)
            return outcome.model_copy()

    def new_game(self) -> None:
        with self._lock:
            self.engine.new_game(self._state, self.now())
