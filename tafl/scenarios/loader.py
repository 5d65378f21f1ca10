from __future__ import annotations

from dataclasses import dataclass

from ..errors import ScenarioError
from ..models.board import Board, BoardGeometry, Piece
from ..models.enums import Coord, FieldKind, PieceKind, ScenarioErrorKind, Side
from ..models.scenario import Scenario

SIDES = {"a": Side.ATTACKER, "d": Side.DEFENDER}
KINDS = {"k": PieceKind.KING, "s": PieceKind.SOLDIER}


@dataclass
class ParsedStructure:
    cols: int
    rows: int
    fields: list[list[int]]  # fields[row][col]

    def cells(self, kind: FieldKind) -> list[Coord]:
        return [
            (x, y)
            for y, row in enumerate(self.fields)
            for x, digit in enumerate(row)
            if digit == kind
        ]


@dataclass
class Placement:
    side: Side
    kind: PieceKind
    pos: Coord
    line: int


def parse_structure(text: str) -> ParsedStructure:
    lines = [ln.strip() for ln in text.splitlines()]
    # drop surrounding blank lines; blank lines inside the grid stay and fail below
    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    if not lines:
        raise ScenarioError(ScenarioErrorKind.EMPTY_STRUCTURE, "board grid is empty")

    cols = len(lines[0])
    fields: list[list[int]] = []
    for n, line in enumerate(lines, start=1):
        bad = next((c for c in line if not c.isdigit() or not c.isascii()), None)
        if bad is not None:
            raise ScenarioError(
                ScenarioErrorKind.INVALID_CHARACTER,
                f"grid may only contain digits, got {bad!r}",
                n,
            )
        if len(line) != cols:
            raise ScenarioError(
                ScenarioErrorKind.INCONSISTENT_ROW_LENGTH,
                f"row has {len(line)} fields, expected {cols}",
                n,
            )
        fields.append([int(c) for c in line])

    rows = len(fields)
    if cols < 2 or rows < 2:
        raise ScenarioError(
            ScenarioErrorKind.BOARD_TOO_SMALL, f"board is {cols}x{rows}, minimum 2x2"
        )
    return ParsedStructure(cols=cols, rows=rows, fields=fields)


def parse_placements(text: str, cols: int, rows: int) -> list[Placement]:
    out: list[Placement] = []
    for n, raw in enumerate(text.splitlines(), start=1):
        tokens = raw.split()
        if not tokens:
            continue
        if len(tokens) < 4:
            raise ScenarioError(
                ScenarioErrorKind.NOT_ENOUGH_TOKENS,
                "a piece is described by 4 space-separated values",
                n,
            )
        side_tok, kind_tok, x_tok, y_tok = tokens[:4]
        if side_tok not in SIDES:
            raise ScenarioError(
                ScenarioErrorKind.INVALID_SIDE, f"side must be a or d, got {side_tok!r}", n
            )
        if kind_tok not in KINDS:
            raise ScenarioError(
                ScenarioErrorKind.INVALID_KIND, f"kind must be k or s, got {kind_tok!r}", n
            )
        try:
            x, y = int(x_tok), int(y_tok)
        except ValueError:
            raise ScenarioError(
                ScenarioErrorKind.INVALID_COORDINATE,
                f"coordinates must be integers, got {x_tok!r} {y_tok!r}",
                n,
            ) from None
        if not (0 <= x < cols and 0 <= y < rows):
            raise ScenarioError(
                ScenarioErrorKind.OUT_OF_BOUNDS, f"({x}, {y}) is not on the board", n
            )
        out.append(Placement(side=SIDES[side_tok], kind=KINDS[kind_tok], pos=(x, y), line=n))
    return out


def _special_squares(sc: Scenario, parsed: ParsedStructure) -> tuple[Coord, list[Coord]]:
    if sc.throne is not None:
        throne = tuple(sc.throne)
    else:
        marked = parsed.cells(FieldKind.THRONE)
        if len(marked) > 1:
            raise ScenarioError(
                ScenarioErrorKind.MULTIPLE_THRONES, f"grid marks {len(marked)} thrones"
            )
        throne = marked[0] if marked else (parsed.cols // 2, parsed.rows // 2)

    if sc.escapes is not None:
        escapes = [tuple(e) for e in sc.escapes]
    else:
        escapes = parsed.cells(FieldKind.ESCAPE) or [
            (0, 0),
            (parsed.cols - 1, 0),
            (0, parsed.rows - 1),
            (parsed.cols - 1, parsed.rows - 1),
        ]

    for c in [throne, *escapes]:
        if not (0 <= c[0] < parsed.cols and 0 <= c[1] < parsed.rows):
            raise ScenarioError(
                ScenarioErrorKind.OUT_OF_BOUNDS, f"special square {c} is not on the board"
            )
    if throne in escapes:
        raise ScenarioError(
            ScenarioErrorKind.THRONE_ON_ESCAPE, f"{throne} is both throne and escape"
        )
    return throne, escapes


def _check_pieces(placements: list[Placement], throne: Coord, escapes: list[Coord]) -> None:
    taken: set[Coord] = set()
    kings = 0
    for p in placements:
        if p.pos in taken:
            raise ScenarioError(
                ScenarioErrorKind.DUPLICATE_POSITION, f"{p.pos} holds two pieces", p.line
            )
        taken.add(p.pos)
        if p.kind == PieceKind.KING:
            kings += 1
            if p.side != Side.DEFENDER:
                raise ScenarioError(
                    ScenarioErrorKind.KING_NOT_DEFENDER, "the king must be a defender", p.line
                )
            if kings > 1:
                raise ScenarioError(
                    ScenarioErrorKind.MULTIPLE_KINGS, "only one king is allowed", p.line
                )
            if p.pos in escapes:
                raise ScenarioError(
                    ScenarioErrorKind.KING_ON_ESCAPE,
                    f"the king may not start on escape square {p.pos}",
                    p.line,
                )
        elif p.pos == throne or p.pos in escapes:
            raise ScenarioError(
                ScenarioErrorKind.SOLDIER_ON_SPECIAL_SQUARE,
                f"a soldier may not start on {p.pos}",
                p.line,
            )
    if kings == 0:
        raise ScenarioError(ScenarioErrorKind.MISSING_KING, "the defenders need a king")


def build_board(sc: Scenario) -> Board:
    """Parse a scenario into a fresh Board. Raises ScenarioError on bad input."""
    parsed = parse_structure(sc.structure)
    placements = parse_placements(sc.placements, parsed.cols, parsed.rows)
    throne, escapes = _special_squares(sc, parsed)
    _check_pieces(placements, throne, escapes)
    return Board(
        cols=parsed.cols,
        rows=parsed.rows,
        throne=throne,
        escapes=escapes,
        fields=parsed.fields,
        pieces=[
            Piece(id=i, side=p.side, kind=p.kind, pos=p.pos)
            for i, p in enumerate(placements)
        ],
        geometry=sc.geometry or BoardGeometry(),
    )
