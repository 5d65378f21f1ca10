from pydantic import TypeAdapter

from tafl import storage
from tafl.engine.session import Game
from tafl.logging_listeners import register_listeners
from tafl.models.api import ActionLogEntry
from tafl.models.enums import ActionLogResult
from tafl.storage import ActionLogStore, GameStore
from tests.utils.boards import MINI


def test_store_evicts_least_recently_used():
    store = GameStore(max_games=2)
    g1, g2, g3 = Game(MINI), Game(MINI), Game(MINI)
    store.save(g1)
    store.save(g2)
    assert store.get(g1.id) is g1  # touch: g2 is now the oldest
    evicted = store.save(g3)
    assert evicted == [g2.id]
    assert store.get(g2.id) is None
    assert [g.id for g in store.list_all()] == [g3.id, g1.id]


def test_store_delete():
    store = GameStore(max_games=5)
    g = Game(MINI)
    store.save(g)
    assert store.delete(g.id)
    assert not store.delete(g.id)
    assert store.get(g.id) is None


def test_log_store_keeps_newest_entries():
    logs = ActionLogStore(max_entries=3)
    for i in range(5):
        logs.append("g", str(i))
    assert logs.list("g") == ["2", "3", "4"]
    assert logs.list("g", limit=2) == ["3", "4"]
    assert logs.list("other") == []
    logs.drop("g")
    assert logs.list("g") == []


def test_listener_writes_action_log_entries():
    register_listeners()
    register_listeners()  # idempotent
    g = Game(MINI)
    g.submit_move((4, 4), (4, 3))
    g.submit_move((6, 3), (6, 2))
    ta = TypeAdapter(ActionLogEntry)
    entries = [ta.validate_json(raw) for raw in storage.logs.list(g.id)]
    assert [e.result for e in entries] == [ActionLogResult.ILLEGAL, ActionLogResult.APPLIED]
    assert entries[0].message == "wrong_side_to_move"
    assert entries[1].action.src == (6, 3) and entries[1].action.dst == (6, 2)
