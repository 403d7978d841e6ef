"""
Configuration management for Othello Q-learning runs.

Uses dataclasses for clean configuration with sensible defaults.
Supports loading from YAML files.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional
import yaml


@dataclass
class GameConfig:
    """Board configuration."""

    board_size: int = 4
    verbose: bool = False  # Print the board after every move


@dataclass
class AgentConfig:
    """Agent configuration."""

    strategy: str = "random"
    learning_rate: float = 0.1
    discount_rate: float = 0.9
    epsilon: float = 0.01
    temperature: float = 1.0


@dataclass
class SimulationConfig:
    """Batch simulation configuration."""

    num_games: int = 10_000
    log_count: int = 10  # Progress reports per run


def _default_player() -> AgentConfig:
    return AgentConfig(strategy="epsilon-greedy")


@dataclass
class Config:
    """Full run configuration."""

    # Component configs
    game: GameConfig = field(default_factory=GameConfig)
    player: AgentConfig = field(default_factory=_default_player)
    opponent: AgentConfig = field(default_factory=AgentConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)

    # Global settings
    learning_rule: str = "monte-carlo"
    q_table_path: Optional[str] = None
    log_dir: str = "runs"

    # Random seed (None draws fresh entropy)
    seed: Optional[int] = 42

    def save(self, path: str) -> None:
        """Save config to YAML file."""
        with open(path, "w") as f:
            yaml.dump(asdict(self), f, default_flow_style=False, sort_keys=False)

    @classmethod
    def load(cls, path: str) -> Config:
        """Load config from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        # Parse nested configs
        return cls(
            game=GameConfig(**data.get("game", {})),
            player=AgentConfig(**{**asdict(_default_player()), **data.get("player", {})}),
            opponent=AgentConfig(**data.get("opponent", {})),
            simulation=SimulationConfig(**data.get("simulation", {})),
            learning_rule=data.get("learning_rule", "monte-carlo"),
            q_table_path=data.get("q_table_path"),
            log_dir=data.get("log_dir", "runs"),
            seed=data.get("seed", 42),
        )

    def ensure_dirs(self) -> None:
        """Create output directories if they don't exist."""
        Path(self.log_dir).mkdir(parents=True, exist_ok=True)
        if self.q_table_path:
            Path(self.q_table_path).parent.mkdir(parents=True, exist_ok=True)


def get_default_config() -> Config:
    """Get default configuration: epsilon-greedy learner vs random opponent on 4x4."""
    return Config()
