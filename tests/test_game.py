import pytest

from tafl.engine.session import Game
from tafl.events import (
    ActionEvent,
    EventBus,
    GameEnded,
    MoveCommitted,
    PiecesCaptured,
    TurnChanged,
    event_bus,
)
from tafl.models.enums import ActionLogResult, MoveError, Side, WinReason
from tafl.models.game import RuleOptions
from tests.utils.boards import MINI


class FakeClock:
    def __init__(self) -> None:
        self.t = 0.0

    def __call__(self) -> float:
        return self.t


@pytest.fixture()
def recorder():
    bus = EventBus()
    seen: list = []
    for et in (MoveCommitted, PiecesCaptured, TurnChanged, GameEnded):
        bus.subscribe(et, seen.append)
    return bus, seen


@pytest.fixture()
def actions():
    seen: list[ActionEvent] = []
    event_bus.subscribe(ActionEvent, seen.append)
    yield seen
    event_bus.unsubscribe(ActionEvent, seen.append)


def _board_dump(game: Game) -> dict:
    return game.current_state().board.model_dump()


def test_attacker_moves_first():
    g = Game(MINI)
    st = g.current_state()
    assert st.turn.side_to_move == Side.ATTACKER
    assert st.turn.move_number == 1
    assert not st.outcome.ended


def test_rejected_moves_leave_state_unchanged():
    g = Game(MINI)
    before = _board_dump(g)
    cases = [
        (((4, 4), (4, 3)), MoveError.WRONG_SIDE_TO_MOVE),
        (((2, 2), (2, 3)), MoveError.NO_PIECE_AT_SOURCE),
        (((6, 3), (5, 4)), MoveError.ILLEGAL_DESTINATION),
        (((3, 4), (3, 3)), MoveError.ILLEGAL_DESTINATION),  # throne
        (((5, 6), (6, 6)), MoveError.ILLEGAL_DESTINATION),  # escape square
    ]
    for (src, dst), err in cases:
        res = g.submit_move(src, dst)
        assert not res.applied
        assert res.error == err
        assert res.side_to_move == Side.ATTACKER
    assert _board_dump(g) == before
    assert g.current_state().turn.move_number == 1


def test_side_is_checked_before_destination():
    g = Game(MINI)
    # defender piece, diagonal target: the side check comes first
    assert g.submit_move((4, 4), (3, 3)).error == MoveError.WRONG_SIDE_TO_MOVE


def test_capture_move_events_in_order(recorder):
    bus, seen = recorder
    g = Game(MINI, bus=bus)
    res = g.submit_move((5, 6), (5, 4))
    assert res.applied and res.error is None
    assert res.captured == [(4, 4)]
    assert not res.game_ended
    assert res.side_to_move == Side.DEFENDER

    assert [type(e) for e in seen] == [MoveCommitted, PiecesCaptured, TurnChanged]
    assert seen[0].src == (5, 6) and seen[0].dst == (5, 4)
    assert seen[1].positions == [(4, 4)] and seen[1].by == Side.ATTACKER
    assert seen[2].side_to_move == Side.DEFENDER and seen[2].move_number == 2

    st = g.current_state()
    assert st.board.piece_at((4, 4)) is None
    assert st.board.piece_at((5, 4)).side == Side.ATTACKER


def test_quiet_move_has_no_capture_event(recorder):
    bus, seen = recorder
    g = Game(MINI, bus=bus)
    g.submit_move((6, 3), (6, 2))
    assert [type(e) for e in seen] == [MoveCommitted, TurnChanged]


def test_king_escape_ends_the_game(recorder):
    bus, seen = recorder
    g = Game(MINI, bus=bus)
    assert g.submit_move((6, 3), (6, 2)).applied
    res = g.submit_move((0, 2), (0, 0))
    assert res.applied and res.game_ended
    assert res.outcome.winner == Side.DEFENDER
    assert res.outcome.reason == WinReason.KING_ESCAPED
    # no flip after the final move
    assert res.side_to_move == Side.DEFENDER
    assert [type(e) for e in seen][-2:] == [MoveCommitted, GameEnded]

    after = g.submit_move((6, 2), (6, 1))
    assert after.error == MoveError.GAME_ALREADY_ENDED
    # ended beats every other check
    assert g.submit_move((2, 2), (2, 3)).error == MoveError.GAME_ALREADY_ENDED
    assert sum(isinstance(e, GameEnded) for e in seen) == 1


def test_legal_destinations_query():
    g = Game(MINI)
    assert g.legal_destinations((2, 2)) is None
    dests = g.legal_destinations((0, 2))
    assert (0, 0) in dests and (0, 6) in dests
    assert g.legal_destinations((5, 6)) == {(5, 5), (5, 4), (5, 3), (5, 2), (5, 1), (5, 0), (4, 6), (3, 6), (2, 6), (1, 6)}


def test_snapshot_is_detached():
    g = Game(MINI)
    snap = g.current_state()
    snap.board.move_piece(snap.board.piece_at((6, 3)).id, (6, 2))
    snap.turn.side_to_move = Side.DEFENDER
    fresh = g.current_state()
    assert fresh.board.piece_at((6, 3)) is not None
    assert fresh.turn.side_to_move == Side.ATTACKER


def test_evaluate_move_explains_without_applying():
    g = Game(MINI)
    ex = g.evaluate_move((5, 6), (5, 4))
    assert ex.ok
    assert [s["check"] for s in ex.steps] == [
        "clock",
        "game_in_progress",
        "piece_at_src",
        "side_to_move",
        "reachable",
    ]
    assert ex.outcome["captured"] == [[4, 4]]
    assert ex.outcome["game_ends"] is False
    assert g.current_state().board.piece_at((4, 4)) is not None

    bad = g.evaluate_move((4, 4), (4, 3))
    assert not bad.ok
    assert bad.steps[-1] == {"check": "side_to_move", "ok": False}
    assert bad.outcome == {"error": "wrong_side_to_move"}


def test_clock_expiry_ends_game_for_opponent(recorder):
    bus, seen = recorder
    clock = FakeClock()
    g = Game(MINI, RuleOptions(game_seconds=10), now=clock, bus=bus)
    clock.t = 4.0
    assert g.submit_move((6, 3), (6, 2)).applied
    clock.t = 8.0
    assert not g.check_clock().ended
    clock.t = 14.0
    out = g.check_clock()
    assert out.winner == Side.ATTACKER
    assert out.reason == WinReason.OPPONENT_CLOCK_EXPIRED
    assert isinstance(seen[-1], GameEnded)
    # idempotent: no second transition
    g.check_clock()
    assert sum(isinstance(e, GameEnded) for e in seen) == 1


def test_move_after_flag_fall_is_rejected():
    clock = FakeClock()
    g = Game(MINI, RuleOptions(turn_seconds=5), now=clock)
    clock.t = 6.0
    res = g.submit_move((6, 3), (6, 2))
    assert not res.applied
    assert res.error == MoveError.GAME_ALREADY_ENDED
    assert res.game_ended and res.outcome.winner == Side.DEFENDER
    assert g.current_state().board.piece_at((6, 3)) is not None


def test_new_game_restores_start_position():
    g = Game(MINI)
    gid = g.id
    g.submit_move((5, 6), (5, 4))
    g.new_game()
    st = g.current_state()
    assert st.id == gid
    assert st.board.piece_at((4, 4)) is not None
    assert st.turn.side_to_move == Side.ATTACKER and st.turn.move_number == 1


def test_defender_may_open_when_configured():
    g = Game(MINI, RuleOptions(first_side=Side.DEFENDER))
    assert g.submit_move((6, 3), (6, 2)).error == MoveError.WRONG_SIDE_TO_MOVE
    assert g.submit_move((4, 4), (4, 3)).applied


def test_every_request_reaches_the_action_log(actions):
    g = Game(MINI)
    g.submit_move((2, 2), (2, 3))
    g.submit_move((5, 6), (5, 4))
    mine = [a for a in actions if a.game_id == g.id]
    assert [a.result for a in mine] == [ActionLogResult.ILLEGAL, ActionLogResult.APPLIED]
    assert mine[0].message == "no_piece_at_source"
    assert mine[1].side == Side.ATTACKER and mine[1].captured == [(4, 4)]
    assert mine[1].move_number == 1


def test_evaluate_agrees_with_submit_after_flag_fall():
    clock = FakeClock()
    g = Game(MINI, RuleOptions(turn_seconds=5), now=clock)
    clock.t = 4.0
    assert g.evaluate_move((6, 3), (6, 2)).ok
    clock.t = 6.0
    ex = g.evaluate_move((6, 3), (6, 2))
    assert not ex.ok
    assert ex.steps == [{"check": "clock", "ok": False}]
    assert ex.outcome == {
        "error": "game_already_ended",
        "winner": "defender",
        "reason": "opponent_clock_expired",
    }
    # the dry run does not end the game by itself
    assert not g.current_state().outcome.ended
    res = g.submit_move((6, 3), (6, 2))
    assert ex.ok == res.applied
    assert res.error == MoveError.GAME_ALREADY_ENDED
