"""Utilities module."""

from .config import (
    Config,
    GameConfig,
    AgentConfig,
    SimulationConfig,
    get_default_config,
)
from .seed import set_seed, make_rng, spawn_rngs
from .logging import (
    Logger,
    ProgressMetrics,
    console,
    create_progress,
    print_config,
    print_board,
)

__all__ = [
    "Config",
    "GameConfig",
    "AgentConfig",
    "SimulationConfig",
    "get_default_config",
    "set_seed",
    "make_rng",
    "spawn_rngs",
    "Logger",
    "ProgressMetrics",
    "console",
    "create_progress",
    "print_config",
    "print_board",
]
