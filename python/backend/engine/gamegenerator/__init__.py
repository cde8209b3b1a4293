from backend.engine.gamegenerator.generator import GENERATION_OPERATIONS, GameGenerator

__all__ = ["GENERATION_OPERATIONS", "GameGenerator"]
