"""Play module - game controller, batch simulation and human input."""

from .controller import (
    PLAYER,
    OPPONENT,
    GamePhase,
    LearningRule,
    GameResult,
    GameController,
)
from .simulator import Simulator, SimulationSummary
from .human import prompt_move, format_choices

__all__ = [
    "PLAYER",
    "OPPONENT",
    "GamePhase",
    "LearningRule",
    "GameResult",
    "GameController",
    "Simulator",
    "SimulationSummary",
    "prompt_move",
    "format_choices",
]
