"""
errors.py
=========
Layout failure taxonomy.

None of these escape the renderer: a broken payload degrades to a blank
chart (or a chart missing one planet) and is reported as a Diagnostic.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class LayoutErrorKind(str, Enum):
    INVALID_ASCENDANT = "InvalidAscendant"
    ORPHAN_PLANET     = "OrphanPlanet"
    EMPTY_PAYLOAD     = "EmptyPayload"


@dataclass(frozen=True)
class Diagnostic:
    kind:    LayoutErrorKind
    message: str
    context: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message, **self.context}


class LayoutError(ValueError):
    """Raised by the layout engine when the chart cannot be anchored."""

    def __init__(self, kind: LayoutErrorKind, message: str, **context):
        super().__init__(message)
        self.kind = kind
        self.context = context

    @property
    def diagnostic(self) -> Diagnostic:
        return Diagnostic(self.kind, str(self), dict(self.context))
