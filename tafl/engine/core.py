from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..models.enums import Coord
    from ..models.scenario import Scenario
    from .actions.base import Registry

from ..core.primitives import Explanation
from ..events import GameEnded
from ..models.api import MoveAction, MoveResult
from ..models.game import GameOutcome, GameState, RuleOptions
from ..scenarios.loader import build_board
from .actions.move import MoveHandler
from .logging.logger import log_error, log_illegal
from .systems import capture, movement, turn, victory
from .systems import clock as clocks

default_handlers: Registry = {
    MoveHandler.action_type: MoveHandler(),
}


class TaflEngine:
    """Stateless rules over a GameState; callers own the state and its locking."""

    def __init__(self, handlers: Registry | None = None):
        self.handlers: Registry = handlers or default_handlers

    # ---------- setup ----------

    def create_game(
        self, scenario: Scenario, rules: RuleOptions | None = None, now: float = 0.0
    ) -> GameState:
        state = GameState(
            scenario=scenario, rules=rules or RuleOptions(), board=build_board(scenario)
        )
        turn.initialize_game(state, now)
        return state

    def new_game(self, state: GameState, now: float) -> None:
        """Restart from the scenario's initial position, keeping id and rules."""
        state.board = build_board(state.scenario)
        turn.initialize_game(state, now)

    # ---------- queries ----------

    def evaluate(self, state: GameState, action: MoveAction):
        h = self.handlers.get(type(action))
        if not h:
            raise TypeError(f"unsupported action {type(action).__name__}")
        return h.evaluate(state, action)

    def legal_destinations(self, state: GameState, c: Coord) -> set[Coord] | None:
        p = state.board.piece_at(c)
        if p is None:
            return None
        return movement.legal_destinations(state.board, p)

    def explain_move(
        self, state: GameState, action: MoveAction, now: float | None = None
    ) -> Explanation:
        steps: list[dict[str, Any]] = []
        # same order as process_move: a fallen flag rejects before anything else
        flag = victory.check_clock(state, now) if now is not None else state.outcome
        running = state.outcome.ended or not flag.ended
        steps.append({"check": "clock", "ok": running})
        if not running:
            return Explanation(
                ok=False,
                steps=steps,
                outcome={
                    "error": "game_already_ended",
                    "winner": flag.winner.value,
                    "reason": flag.reason.value,
                },
            )
        ok, err = self.evaluate(state, action)
        checks = [
            ("game_in_progress", "game_already_ended"),
            ("piece_at_src", "no_piece_at_source"),
            ("side_to_move", "wrong_side_to_move"),
            ("reachable", "illegal_destination"),
        ]
        for check, code in checks:
            passed = err is None or err.value != code
            steps.append({"check": check, "ok": passed})
            if not passed:
                return Explanation(ok=False, steps=steps, outcome={"error": code})

        # dry run on a copy: what would be captured and would the game end
        g2 = state.model_copy(deep=True)
        mover = g2.board.piece_at(action.src)
        g2.board.move_piece(mover.id, action.dst)
        report = capture.resolve_captures(g2.board, mover)
        out = victory.check(g2)
        return Explanation(
            ok=ok,
            steps=steps,
            outcome={
                "captured": [list(p.pos) for p in report.captured],
                "king_checked": report.king_checked,
                "game_ends": out.ended,
                "winner": out.winner.value if out.winner else None,
                "reason": out.reason.value if out.reason else None,
            },
        )

    # ---------- transitions ----------

    def check_clock(self, state: GameState, now: float) -> tuple[GameOutcome, list[Any]]:
        if state.outcome.ended:
            return state.outcome, []
        out = victory.check_clock(state, now)
        if not out.ended:
            return out, []
        clocks.stop(state.clock, state.turn.side_to_move, now)
        state.outcome = out
        return out, [GameEnded(game_id=state.id, winner=out.winner, reason=out.reason)]

    def process_move(
        self, state: GameState, action: MoveAction, now: float
    ) -> tuple[MoveResult, list[Any]]:
        _, events = self.check_clock(state, now)
        ok, err = self.evaluate(state, action)
        if not ok:
            log_illegal(state, action, err.value)
            result = MoveResult(
                applied=False,
                error=err,
                game_ended=state.outcome.ended,
                outcome=state.outcome.model_copy(),
                side_to_move=state.turn.side_to_move,
            )
            return result, events
        try:
            result, applied_events = self.handlers[type(action)].apply(state, action, now)
        except Exception as e:
            log_error(state, action, e)
            raise
        return result, events + applied_events
