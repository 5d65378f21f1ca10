from ..core.scenario_registry import register_scenario
from ..models.scenario import Scenario

STRUCTURE = """
4003004
0003000
0002000
3321233
0002000
0003000
4003004
"""

PLACEMENTS = """
a s 3 0
a s 3 1
a s 0 3
a s 1 3
a s 5 3
a s 6 3
a s 3 5
a s 3 6
d s 3 2
d s 2 3
d k 3 3
d s 4 3
d s 3 4
"""


def brandubh() -> Scenario:
    """7x7 cross: 8 attackers against 4 defenders and the king."""
    return Scenario(name="brandubh", structure=STRUCTURE, placements=PLACEMENTS)


register_scenario("brandubh", brandubh)
