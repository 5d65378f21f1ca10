from __future__ import annotations

from typing import TYPE_CHECKING

from ...models.enums import Side
from ...models.game import GameClock

if TYPE_CHECKING:
    from ...models.game import RuleOptions


def new_clock(rules: RuleOptions, now: float) -> GameClock:
    clock = GameClock(game_seconds=rules.game_seconds, turn_seconds=rules.turn_seconds)
    if rules.game_seconds is not None:
        clock.remaining = {side: rules.game_seconds for side in Side}
    if clock.timed:
        clock.turn_started_at = now
    return clock


def turn_elapsed(clock: GameClock, now: float) -> float:
    if clock.turn_started_at is None:
        return 0.0
    return max(0.0, now - clock.turn_started_at)


def remaining(clock: GameClock, side: Side, side_to_move: Side, now: float) -> float | None:
    """Seconds `side` has left before its flag falls; None when untimed."""
    elapsed = turn_elapsed(clock, now) if side == side_to_move else 0.0
    limits: list[float] = []
    if clock.game_seconds is not None:
        limits.append(clock.remaining.get(side, clock.game_seconds) - elapsed)
    if clock.turn_seconds is not None:
        limits.append(clock.turn_seconds - elapsed)
    return min(limits) if limits else None


def expired(clock: GameClock, side_to_move: Side, now: float) -> bool:
    left = remaining(clock, side_to_move, side_to_move, now)
    return left is not None and left <= 0


def charge(clock: GameClock, side: Side, now: float) -> None:
    """Book the finished turn of `side` and start the next turn's timer."""
    if not clock.timed:
        return
    if clock.game_seconds is not None:
        left = clock.remaining.get(side, clock.game_seconds)
        clock.remaining[side] = max(0.0, left - turn_elapsed(clock, now))
    clock.turn_started_at = now


def stop(clock: GameClock, side: Side, now: float) -> None:
    if clock.turn_started_at is None:
        return
    if clock.game_seconds is not None:
        left = clock.remaining.get(side, clock.game_seconds)
        clock.remaining[side] = max(0.0, left - turn_elapsed(clock, now))
    clock.turn_started_at = None
