from backend.engine.gameplay.game import (
    OUTCOME_DELAY,
    GamePlay,
    OperationSelection,
    Outcome,
    SlotSelection,
)

__all__ = [
    "OUTCOME_DELAY",
    "GamePlay",
    "OperationSelection",
    "Outcome",
    "SlotSelection",
]
