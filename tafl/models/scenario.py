from pydantic import BaseModel

from .board import BoardGeometry
from .enums import Coord


class Scenario(BaseModel):
    """Textual description of a starting position.

    `structure` is a grid of digits (one line per row), `placements` holds one
    `<a|d> <k|s> <col> <row>` line per piece. `throne` and `escapes` override
    what the grid marks with digits 1 and 4.
    """

    name: str = "custom"
    structure: str
    placements: str
    throne: Coord | None = None
    escapes: list[Coord] | None = None
    geometry: BoardGeometry | None = None
