from __future__ import annotations

import threading
from collections import OrderedDict, deque
from typing import TYPE_CHECKING

from .config import MAX_GAMES

if TYPE_CHECKING:
    from .engine.session import Game


class GameStore:
    """In-process store of live games, least-recently-used evicted past the cap."""

    def __init__(self, max_games: int = MAX_GAMES) -> None:
        self.max_games = max_games
        self._data: OrderedDict[str, Game] = OrderedDict()
        self._lock = threading.Lock()

    def _touch(self, gid: str) -> None:
        self._data.move_to_end(gid)

    def _enforce_cap(self) -> list[str]:
        evicted: list[str] = []
        while len(self._data) > self.max_games:
            gid, _ = self._data.popitem(last=False)
            evicted.append(gid)
        return evicted

    def save(self, game: Game) -> list[str]:
        with self._lock:
            self._data[game.id] = game
            self._touch(game.id)
            evicted = self._enforce_cap()
        for gid in evicted:
            logs.drop(gid)
        return evicted

    def get(self, gid: str) -> Game | None:
        with self._lock:
            game = self._data.get(gid)
            if game is not None:
                self._touch(gid)
            return game

    def delete(self, gid: str) -> bool:
        with self._lock:
            found = self._data.pop(gid, None) is not None
        logs.drop(gid)
        return found

    def list_all(self) -> list[Game]:
        with self._lock:
            # most recently used first
            return list(reversed(self._data.values()))


class ActionLogStore:
    """Per-game action log of JSON lines, newest last, bounded per game."""

    def __init__(self, max_entries: int = 1000) -> None:
        self.max_entries = max_entries
        self._data: dict[str, deque[str]] = {}
        self._lock = threading.Lock()

    def append(self, gid: str, raw: str) -> None:
        with self._lock:
            self._data.setdefault(gid, deque(maxlen=self.max_entries)).append(raw)

    def list(self, gid: str, limit: int = 50) -> list[str]:
        with self._lock:
            entries = self._data.get(gid)
            if not entries:
                return []
            return list(entries)[-limit:]

    def drop(self, gid: str) -> None:
        with self._lock:
            self._data.pop(gid, None)


games = GameStore()
logs = ActionLogStore()


def save(game: Game) -> list[str]:
    return games.save(game)


def get(gid: str) -> Game | None:
    return games.get(gid)


def delete(gid: str) -> bool:
    return games.delete(gid)


def list_all() -> list[Game]:
    return games.list_all()
