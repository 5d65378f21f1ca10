"""Shieldwall capture.

A row of pieces standing on a board edge is captured as a whole when every
piece in it is pinned by an enemy on its inner side and both ends of the row
are closed by enemies or escape squares.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from ...errors import InvariantViolation
from ...models.enums import Coord

if TYPE_CHECKING:
    from ...models.board import Board, Piece

# (along-edge steps, step towards the interior)
_EdgeAxes = tuple[tuple[Coord, Coord], Coord]


def edge_axes(board: Board, pos: Coord) -> _EdgeAxes | None:
    """Along/across directions for a square on the edge, None for interior squares.

    Edges are tried left, right, top, bottom; only the king can stand on a
    corner, where the first match wins.
    """
    x, y = pos
    if x == 0:
        return ((0, -1), (0, 1)), (1, 0)
    if x == board.cols - 1:
        return ((0, -1), (0, 1)), (-1, 0)
    if y == 0:
        return ((-1, 0), (1, 0)), (0, 1)
    if y == board.rows - 1:
        return ((-1, 0), (1, 0)), (0, -1)
    return None


def find_shieldwall(board: Board, start: Piece) -> list[Piece]:
    """Pieces of the wall containing `start` if the whole wall is captured, else []."""
    axes = edge_axes(board, start.pos)
    if axes is None:
        return []
    along, across = axes

    queue: deque[Piece] = deque([start])
    seen: set[int] = {start.id}
    wall: list[Piece] = []

    while queue:
        q = queue.popleft()
        x, y = q.pos

        inner = (x + across[0], y + across[1])
        if not board.is_on_board(inner):
            raise InvariantViolation("board should be at least 2x2")
        pinner = board.piece_at(inner)
        if pinner is None or pinner.side == q.side:
            return []

        for dx, dy in along:
            n = (x + dx, y + dy)
            if not board.is_on_board(n):
                continue
            other = board.piece_at(n)
            if other is None:
                if board.is_escape(n):
                    continue
                return []
            if other.side == q.side and other.id not in seen:
                seen.add(other.id)
                queue.append(other)

        wall.append(q)

    return wall


def shieldwall_capture(board: Board, start: Piece) -> list[Piece]:
    """Remove the captured wall from the board; the king in a wall survives."""
    captured: list[Piece] = []
    for p in find_shieldwall(board, start):
        if p.is_king:
            continue
        captured.append(board.remove_piece(p.id))
    return captured
