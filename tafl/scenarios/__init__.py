"""Scenario registrations.

Importing a scenario module registers it via side effects.
"""

from .brandubh import brandubh  # noqa: F401
from .hnefatafl import hnefatafl  # noqa: F401
from .loader import build_board  # noqa: F401
