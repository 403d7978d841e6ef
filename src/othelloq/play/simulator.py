"""
Batch simulation of many games through one GameController.

The simulator only reads per-game results and the controller's tallies;
learning happens inside the controller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ..utils.logging import Logger, ProgressMetrics
from .controller import PLAYER, GameController, GameResult


@dataclass
class SimulationSummary:
    """Results from the player's perspective."""

    wins: int
    losses: int
    draws: int
    total_games: int
    player_avg_score: float
    opponent_avg_score: float

    @property
    def win_rate(self) -> float:
        return self.wins / self.total_games if self.total_games > 0 else 0.0

    @property
    def score(self) -> float:
        """Win rate counting draws as half."""
        return (self.wins + 0.5 * self.draws) / self.total_games if self.total_games > 0 else 0.0


class Simulator:
    """
    Runs a batch of games and reports running statistics.

    Args:
        controller: Controller holding the two agents
        logger: Receives a ProgressMetrics record at every report interval
    """

    def __init__(self, controller: GameController, logger: Optional[Logger] = None):
        self.controller = controller
        self.logger = logger

    def run(
        self,
        num_games: int,
        log_count: int = 10,
        progress_callback: Callable[[int, GameResult], None] = None,
    ) -> SimulationSummary:
        """
        Play `num_games` games.

        Args:
            num_games: Number of games to play
            log_count: How many progress reports to emit over the run
            progress_callback: Optional callback(games_completed, result)

        Returns:
            SimulationSummary for this batch
        """
        if num_games < 0:
            raise ValueError(f"num_games must be non-negative, got {num_games}")
        interval = max(1, num_games // max(1, log_count))

        wins = losses = draws = 0
        total_player_score = 0
        total_opponent_score = 0

        for i in range(1, num_games + 1):
            result = self.controller.play_one_game()
            total_player_score += result.player_score
            total_opponent_score += result.opponent_score

            if result.winner is None:
                draws += 1
            elif result.winner == PLAYER:
                wins += 1
            else:
                losses += 1

            if progress_callback:
                progress_callback(i, result)

            if self.logger is not None and i % interval == 0:
                self.logger.log_progress(ProgressMetrics(
                    iteration=i,
                    player_win_rate=wins / i,
                    player_avg_score=total_player_score / i,
                    opponent_win_rate=losses / i,
                    opponent_avg_score=total_opponent_score / i,
                    draw_rate=draws / i,
                    q_table_size=len(self.controller.player.q_table),
                ))

        games = wins + losses + draws
        return SimulationSummary(
            wins=wins,
            losses=losses,
            draws=draws,
            total_games=games,
            player_avg_score=total_player_score / games if games else 0.0,
            opponent_avg_score=total_opponent_score / games if games else 0.0,
        )
