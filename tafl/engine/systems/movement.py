from __future__ import annotations

from typing import TYPE_CHECKING

from ...models.board import DIRECTIONS

if TYPE_CHECKING:
    from ...models.board import Board, Piece
    from ...models.enums import Coord


def can_enter(board: Board, piece: Piece, c: Coord) -> bool:
    """Empty, and only the king may stand on the throne or an escape square."""
    if not board.is_empty(c):
        return False
    if piece.is_king:
        return True
    return not board.is_throne(c) and not board.is_escape(c)


def legal_destinations(board: Board, piece: Piece) -> set[Coord]:
    """Squares reachable along a rank or file without passing a blocked square."""
    x, y = piece.pos
    reach: set[Coord] = set()
    for dx, dy in DIRECTIONS:
        cur = (x + dx, y + dy)
        while board.is_on_board(cur) and can_enter(board, piece, cur):
            reach.add(cur)
            cur = (cur[0] + dx, cur[1] + dy)
    return reach


def can_reach(board: Board, piece: Piece, dst: Coord) -> bool:
    return dst in legal_destinations(board, piece)
