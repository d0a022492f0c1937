from .ai_controller import AIController
from .heuristic_agent import HeuristicAgent, HeuristicWeights, PlacementEval, compute_best_move

__all__ = [
    "AIController",
    "HeuristicAgent",
    "HeuristicWeights",
    "PlacementEval",
    "compute_best_move",
]
