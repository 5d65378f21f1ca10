from __future__ import annotations

from typing import TYPE_CHECKING

from ...models.game import GameOutcome, TurnState
from . import clock as clocks

if TYPE_CHECKING:
    from ...models.game import GameState


def initialize_game(state: GameState, now: float) -> None:
    state.turn = TurnState(side_to_move=state.rules.first_side)
    state.outcome = GameOutcome()
    state.clock = clocks.new_clock(state.rules, now)


def end_turn(state: GameState, now: float) -> None:
    side = state.turn.side_to_move
    clocks.charge(state.clock, side, now)
    state.turn.side_to_move = side.opponent
    state.turn.move_number += 1
