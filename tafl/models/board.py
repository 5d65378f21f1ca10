from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, Field, PrivateAttr, model_validator

from ..errors import InvariantViolation
from .enums import Coord, PieceKind, Side

Point = tuple[float, float]  # world coordinates, y grows upwards

# left, right, up, down
DIRECTIONS: tuple[Coord, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class Piece(BaseModel):
    id: int  # slot index in Board.pieces
    side: Side
    kind: PieceKind = PieceKind.SOLDIER
    pos: Coord
    alive: bool = True

    @property
    def is_king(self) -> bool:
        return self.kind == PieceKind.KING


class BoardGeometry(BaseModel):
    """Screen layout of the fields; only used for world <-> square conversion."""

    field_size: float = 50.0
    border_width: float = 4.0
    outer_border_width: float = 12.0
    center: Point = (0.0, 0.0)

    @property
    def pitch(self) -> float:
        # distance between the centres of two neighbouring fields
        return self.field_size + self.border_width


class Board(BaseModel):
    cols: int = Field(ge=2)
    rows: int = Field(ge=2)
    throne: Coord
    escapes: list[Coord]
    fields: list[list[int]] = Field(default_factory=list)  # fields[row][col]
    pieces: list[Piece] = Field(default_factory=list)
    geometry: BoardGeometry = Field(default_factory=BoardGeometry)

    _index: dict[Coord, int] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def _check_layout(self) -> Board:
        if not self.is_on_board(self.throne):
            raise ValueError("throne must be on the board")
        for e in self.escapes:
            if not self.is_on_board(e):
                raise ValueError(f"escape square {e} must be on the board")
        if self.throne in self.escapes:
            raise ValueError("throne and escape squares must be disjoint")
        seen: set[Coord] = set()
        for i, p in enumerate(self.pieces):
            if p.id != i:
                raise ValueError(f"piece at slot {i} has id {p.id}")
            if not p.alive:
                continue
            if not self.is_on_board(p.pos):
                raise ValueError(f"piece {p.id} is off the board at {p.pos}")
            if p.pos in seen:
                raise ValueError(f"two pieces share square {p.pos}")
            seen.add(p.pos)
        return self

    def model_post_init(self, __context) -> None:
        self._index = {p.pos: p.id for p in self.pieces if p.alive}

    # ---------- geometry ----------

    @property
    def width(self) -> float:
        return self.cols * self.geometry.pitch

    @property
    def height(self) -> float:
        return self.rows * self.geometry.pitch

    def _upper_left_corner(self) -> Point:
        cx, cy = self.geometry.center
        return cx - self.width / 2, cy + self.height / 2

    def outer_extent(self) -> tuple[Point, Point]:
        """Upper-left and lower-right corners of the whole frame, outer border included."""
        left, top = self._upper_left_corner()
        ob = self.geometry.outer_border_width
        return (left - ob, top + ob), (left + self.width + ob, top - self.height - ob)

    def world_to_square(self, point: Point) -> Coord | None:
        """Square under a world point, None outside the field area."""
        left, top = self._upper_left_corner()
        x_adj = point[0] - left
        y_adj = top - point[1]
        if x_adj < 0 or x_adj >= self.width or y_adj < 0 or y_adj >= self.height:
            return None
        pitch = self.geometry.pitch
        col = min(int(x_adj // pitch), self.cols - 1)
        row = min(int(y_adj // pitch), self.rows - 1)
        return col, row

    def square_to_world(self, c: Coord) -> Point:
        """World position of the centre of a field."""
        left, top = self._upper_left_corner()
        pitch = self.geometry.pitch
        return left + (c[0] + 0.5) * pitch, top - (c[1] + 0.5) * pitch

    # ---------- queries ----------

    def is_on_board(self, c: Coord) -> bool:
        x, y = c
        return 0 <= x < self.cols and 0 <= y < self.rows

    def is_throne(self, c: Coord) -> bool:
        return c == self.throne

    def is_escape(self, c: Coord) -> bool:
        return c in self.escapes

    def piece_at(self, c: Coord) -> Piece | None:
        pid = self._index.get(c)
        return self.pieces[pid] if pid is not None else None

    def is_empty(self, c: Coord) -> bool:
        return c not in self._index

    def living(self) -> Iterator[Piece]:
        return (p for p in self.pieces if p.alive)

    def king(self) -> Piece | None:
        return next((p for p in self.living() if p.is_king), None)

    def neighbor_squares(self, c: Coord) -> list[Coord]:
        x, y = c
        cand = [(x + dx, y + dy) for dx, dy in DIRECTIONS]
        return [n for n in cand if self.is_on_board(n)]

    def neighbors(self, c: Coord) -> list[Piece]:
        """Occupied orthogonal neighbours, ordered left, right, up, down."""
        out: list[Piece] = []
        for n in self.neighbor_squares(c):
            p = self.piece_at(n)
            if p is not None:
                out.append(p)
        return out

    # ---------- mutations ----------

    def move_piece(self, piece_id: int, dst: Coord) -> Piece:
        p = self._living_piece(piece_id)
        if not self.is_on_board(dst):
            raise InvariantViolation(f"move of piece {piece_id} off the board to {dst}")
        if dst in self._index:
            raise InvariantViolation(f"move of piece {piece_id} onto occupied {dst}")
        del self._index[p.pos]
        p.pos = dst
        self._index[dst] = p.id
        return p

    def remove_piece(self, piece_id: int) -> Piece:
        p = self._living_piece(piece_id)
        if self._index.get(p.pos) != p.id:
            raise InvariantViolation(f"piece {piece_id} is not indexed at {p.pos}")
        del self._index[p.pos]
        p.alive = False
        return p

    def _living_piece(self, piece_id: int) -> Piece:
        if not 0 <= piece_id < len(self.pieces):
            raise InvariantViolation(f"unknown piece {piece_id}")
        p = self.pieces[piece_id]
        if not p.alive:
            raise InvariantViolation(f"piece {piece_id} was already captured")
        return p
