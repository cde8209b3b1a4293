from backend.engine.gamesolver.solver import Move, Solver

__all__ = ["Move", "Solver"]
