from __future__ import annotations

from .models.enums import ScenarioErrorKind


class InvariantViolation(RuntimeError):
    """Board state the engine's own contracts should have made impossible."""


class ScenarioError(ValueError):
    def __init__(
        self, kind: ScenarioErrorKind, message: str, line: int | None = None
    ) -> None:
        self.kind = kind
        self.line = line
        where = f" (line {line})" if line is not None else ""
        super().__init__(f"{kind.value}: {message}{where}")
