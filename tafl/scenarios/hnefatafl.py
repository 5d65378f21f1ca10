from ..core.scenario_registry import register_scenario
from ..models.scenario import Scenario

STRUCTURE = """
40033333004
00000300000
00000000000
30000200003
30002220003
33022122033
30002220003
30000200003
00000000000
00000300000
40033333004
"""

PLACEMENTS = """
a s 0 3
a s 0 4
a s 0 5
a s 0 6
a s 0 7
a s 1 5
a s 3 0
d s 3 5
a s 3 10
a s 4 0
d s 4 4
d s 4 5
d s 4 6
a s 4 10
a s 5 0
a s 5 1
d s 5 3
d s 5 4
d k 5 5
d s 5 6
d s 5 7
a s 5 9
a s 5 10
a s 6 0
d s 6 4
d s 6 5
d s 6 6
a s 6 10
a s 7 0
d s 7 5
a s 7 10
a s 9 5
a s 10 3
a s 10 4
a s 10 5
a s 10 6
a s 10 7
"""


def hnefatafl() -> Scenario:
    """11x11 board, 24 attackers against 12 defenders and the king."""
    return Scenario(name="hnefatafl", structure=STRUCTURE, placements=PLACEMENTS)


register_scenario("hnefatafl", hnefatafl)
