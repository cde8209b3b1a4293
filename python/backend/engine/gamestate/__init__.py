from backend.engine.gamestate.state import (
    AnchorSelected,
    GameState,
    Idle,
    OperationPending,
    Selection,
)

__all__ = ["AnchorSelected", "GameState", "Idle", "OperationPending", "Selection"]
