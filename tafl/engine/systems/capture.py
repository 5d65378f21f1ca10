from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .shieldwall import shieldwall_capture

if TYPE_CHECKING:
    from ...models.board import Board, Piece
    from ...models.enums import Coord


@dataclass
class CaptureReport:
    captured: list[Piece] = field(default_factory=list)
    # the moved piece touched the enemy king, so its surrounding must be judged
    king_checked: bool = False

    @property
    def happened(self) -> bool:
        return bool(self.captured)


def mirror(mover_pos: Coord, victim_pos: Coord) -> Coord:
    """Square on the far side of the victim, seen from the mover."""
    return 2 * victim_pos[0] - mover_pos[0], 2 * victim_pos[1] - mover_pos[1]


def is_hostile(board: Board, victim: Piece, c: Coord) -> bool:
    """An enemy of the victim, an escape square or the empty throne."""
    if not board.is_on_board(c):
        return False
    other = board.piece_at(c)
    if other is not None:
        return other.side != victim.side
    return board.is_escape(c) or board.is_throne(c)


def resolve_captures(board: Board, mover: Piece) -> CaptureReport:
    """Run custodian and shieldwall captures around a piece that just moved.

    Neighbours are visited left, right, up, down and everything capturable is
    removed in this single pass.
    """
    report = CaptureReport()
    for victim in board.neighbors(mover.pos):
        if not victim.alive or victim.side == mover.side:
            continue
        if victim.is_king:
            # custodian-immune; it may still anchor a shieldwall of its soldiers
            report.king_checked = True
            report.captured.extend(shieldwall_capture(board, victim))
            continue
        if is_hostile(board, victim, mirror(mover.pos, victim.pos)):
            report.captured.append(board.remove_piece(victim.id))
        else:
            report.captured.extend(shieldwall_capture(board, victim))
    return report
