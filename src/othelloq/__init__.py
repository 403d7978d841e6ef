"""
othelloq - Othello with tabular reinforcement learning.

Two agents play Othello on an N x N board; an agent with a learning strategy
improves its move choice from a Q-table updated by Q-learning, SARSA or
Monte Carlo control.

Usage:
    from othelloq.agent import Agent
    from othelloq.play import GameController, Simulator
    from othelloq.utils import make_rng

    rng = make_rng(0)
    learner = Agent("epsilon-greedy", rng=rng)
    controller = GameController(learner, Agent("random", rng=rng), board_size=4, rng=rng)
    summary = Simulator(controller).run(1000)
"""

__version__ = "0.1.0"

from . import game
from . import agent
from . import play
from . import utils

__all__ = [
    "game",
    "agent",
    "play",
    "utils",
    "__version__",
]
