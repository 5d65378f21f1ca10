from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class Explanation(BaseModel):
    """Detailed reasoning for the UI (which checks passed, and what a move would do)."""

    ok: bool
    steps: list[dict[str, Any]] = Field(default_factory=list)
    outcome: dict[str, Any] = Field(default_factory=dict)
