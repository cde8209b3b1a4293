from backend.models.puzzle import (
    Anchor,
    InvalidMove,
    Operation,
    PuzzleDefinition,
    Step,
    compute,
)

__all__ = [
    "Anchor",
    "InvalidMove",
    "Operation",
    "PuzzleDefinition",
    "Step",
    "compute",
]
