from __future__ import annotations

from typing import TYPE_CHECKING

from ...models.board import DIRECTIONS
from ...models.enums import KingCaptureRule, Side, WinReason
from ...models.game import GameOutcome
from . import clock as clocks

if TYPE_CHECKING:
    from ...models.board import Board
    from ...models.game import GameState


def king_escaped(board: Board) -> bool:
    king = board.king()
    return king is not None and board.is_escape(king.pos)


def king_surrounded(board: Board, rule: KingCaptureRule) -> bool:
    king = board.king()
    if king is None:
        return False
    x, y = king.pos
    for dx, dy in DIRECTIONS:
        n = (x + dx, y + dy)
        if not board.is_on_board(n):
            if rule == KingCaptureRule.STRICT:
                return False
            continue
        p = board.piece_at(n)
        if p is not None:
            if p.side != Side.ATTACKER:
                return False
            continue
        if rule == KingCaptureRule.STRICT:
            return False
        if not (board.is_escape(n) or board.is_throne(n)):
            return False
    return True


def check(state: GameState) -> GameOutcome:
    """Board-based outcome; an outcome that is already decided is returned as is."""
    if state.outcome.ended:
        return state.outcome
    board = state.board
    if king_escaped(board):
        return GameOutcome.won(Side.DEFENDER, WinReason.KING_ESCAPED)
    if king_surrounded(board, state.rules.king_capture):
        return GameOutcome.won(Side.ATTACKER, WinReason.KING_SURROUNDED)
    return state.outcome


def check_clock(state: GameState, now: float) -> GameOutcome:
    if state.outcome.ended:
        return state.outcome
    side = state.turn.side_to_move
    if clocks.expired(state.clock, side, now):
        return GameOutcome.won(side.opponent, WinReason.OPPONENT_CLOCK_EXPIRED)
    return state.outcome
