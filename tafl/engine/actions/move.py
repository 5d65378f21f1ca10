from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ...events import GameEnded, MoveCommitted, PiecesCaptured, TurnChanged
from ...models.api import MoveAction, MoveResult
from ...models.enums import ActionLogResult, MoveError
from ..logging.logger import log_event
from ..systems import capture, movement, turn, victory
from ..systems import clock as clocks
from .base import ActionHandler

if TYPE_CHECKING:
    from ...models.game import GameState


class MoveHandler(ActionHandler):
    action_type = MoveAction

    def evaluate(self, state: GameState, action: MoveAction):
        if state.outcome.ended:
            return False, MoveError.GAME_ALREADY_ENDED
        p = state.board.piece_at(action.src)
        if p is None:
            return False, MoveError.NO_PIECE_AT_SOURCE
        if p.side != state.turn.side_to_move:
            return False, MoveError.WRONG_SIDE_TO_MOVE
        if not movement.can_reach(state.board, p, action.dst):
            return False, MoveError.ILLEGAL_DESTINATION
        return True, None

    def apply(self, state: GameState, action: MoveAction, now: float):
        board = state.board
        piece = board.piece_at(action.src)
        side = piece.side
        board.move_piece(piece.id, action.dst)
        events: list[Any] = [
            MoveCommitted(
                game_id=state.id,
                side=side,
                piece_id=piece.id,
                src=action.src,
                dst=action.dst,
            )
        ]

        report = capture.resolve_captures(board, piece)
        captured = [p.pos for p in report.captured]
        if report.happened:
            events.append(PiecesCaptured(game_id=state.id, by=side, positions=captured))
        log_event(state, action, ActionLogResult.APPLIED, captured=captured, side=side)

        outcome = victory.check(state)
        if outcome.ended:
            state.outcome = outcome
            clocks.stop(state.clock, side, now)
            events.append(GameEnded(game_id=state.id, winner=outcome.winner, reason=outcome.reason))
        else:
            turn.end_turn(state, now)
            events.append(
                TurnChanged(
                    game_id=state.id,
                    side_to_move=state.turn.side_to_move,
                    move_number=state.turn.move_number,
                )
            )

        result = MoveResult(
            applied=True,
            captured=captured,
            game_ended=state.outcome.ended,
            outcome=state.outcome.model_copy(),
            side_to_move=state.turn.side_to_move,
        )
        return result, events
