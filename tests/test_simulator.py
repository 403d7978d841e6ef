"""Tests for batch simulation, logging and configuration."""

import json

import numpy as np
import pytest
import yaml

from othelloq.agent import Agent
from othelloq.play import GameController, Simulator
from othelloq.utils import (
    AgentConfig,
    Config,
    Logger,
    ProgressMetrics,
    get_default_config,
    make_rng,
    spawn_rngs,
)


def make_simulator(seed=0, logger=None, player="epsilon-greedy"):
    player_rng, opponent_rng, game_rng = spawn_rngs(seed, 3)
    controller = GameController(
        Agent(player, rng=player_rng),
        Agent("random", rng=opponent_rng),
        board_size=4,
        rng=game_rng,
    )
    return Simulator(controller, logger=logger)


class TestSimulator:
    def test_summary_counts(self):
        simulator = make_simulator()
        summary = simulator.run(30)

        assert summary.total_games == 30
        assert summary.wins + summary.losses + summary.draws == 30
        assert summary.wins == simulator.controller.player_wins
        assert summary.losses == simulator.controller.opponent_wins
        assert 0.0 <= summary.win_rate <= 1.0
        assert summary.score == pytest.approx((summary.wins + 0.5 * summary.draws) / 30)
        assert 0 < summary.player_avg_score + summary.opponent_avg_score <= 16

    def test_progress_callback(self):
        seen = []
        make_simulator(seed=1).run(12, progress_callback=lambda n, r: seen.append(n))
        assert seen == list(range(1, 13))

    def test_zero_games(self):
        summary = make_simulator().run(0)
        assert summary.total_games == 0
        assert summary.win_rate == 0.0
        assert summary.score == 0.0

    def test_negative_games_raise(self):
        with pytest.raises(ValueError):
            make_simulator().run(-1)

    def test_learner_table_grows(self):
        simulator = make_simulator(seed=2)
        simulator.run(20)
        size_after_20 = len(simulator.controller.player.q_table)
        simulator.run(20)
        assert len(simulator.controller.player.q_table) >= size_after_20 > 0


class TestLogger:
    def test_progress_reports(self, tmp_path):
        logger = Logger(log_dir=str(tmp_path), verbose=False)
        make_simulator(seed=3, logger=logger).run(50, log_count=5)

        assert [m.iteration for m in logger.metrics_history] == [10, 20, 30, 40, 50]
        lines = logger.log_file.read_text().splitlines()
        assert len(lines) == 5
        record = json.loads(lines[-1])
        assert record["iteration"] == 50
        assert record["q_table_size"] > 0
        total = record["player_win_rate"] + record["opponent_win_rate"] + record["draw_rate"]
        assert total == pytest.approx(1.0)

    def test_fewer_games_than_reports(self, tmp_path):
        logger = Logger(log_dir=str(tmp_path), verbose=False)
        make_simulator(seed=4, logger=logger).run(3, log_count=10)
        assert [m.iteration for m in logger.metrics_history] == [1, 2, 3]

    def test_no_log_dir(self):
        logger = Logger(log_dir=None, verbose=False)
        logger.log_progress(ProgressMetrics(
            iteration=1,
            player_win_rate=1.0,
            player_avg_score=10.0,
            opponent_win_rate=0.0,
            opponent_avg_score=6.0,
            draw_rate=0.0,
            q_table_size=4,
        ))
        assert logger.log_file is None
        assert len(logger.metrics_history) == 1
        assert logger.metrics_history[0].timestamp

    def test_verbose_prints_table(self, tmp_path, capsys):
        logger = Logger(log_dir=str(tmp_path), verbose=True)
        make_simulator(seed=5, logger=logger).run(2, log_count=1)
        assert "Q-table Size" in capsys.readouterr().out

    def test_messages_follow_verbosity(self, capsys):
        Logger(log_dir=None, verbose=True).log_success("Saved [q] table")
        Logger(log_dir=None, verbose=False).log_error("hidden")
        out = capsys.readouterr().out
        assert "Saved [q] table" in out
        assert "hidden" not in out


class TestConfig:
    def test_defaults(self):
        config = get_default_config()
        assert config.game.board_size == 4
        assert config.player.strategy == "epsilon-greedy"
        assert config.player.epsilon == 0.01
        assert config.opponent.strategy == "random"
        assert config.simulation.num_games == 10_000
        assert config.learning_rule == "monte-carlo"

    def test_save_load(self, tmp_path):
        config = Config()
        config.game.board_size = 6
        config.player = AgentConfig(strategy="boltzmann", temperature=0.5)
        config.learning_rule = "sarsa"
        config.q_table_path = "tables/q.npz"
        path = tmp_path / "config.yaml"

        config.save(str(path))
        loaded = Config.load(str(path))

        assert loaded == config

    def test_partial_yaml_uses_defaults(self, tmp_path):
        path = tmp_path / "partial.yaml"
        path.write_text(yaml.dump({"game": {"board_size": 8}, "seed": 7}))

        config = Config.load(str(path))

        assert config.game.board_size == 8
        assert config.seed == 7
        assert config.player.strategy == "epsilon-greedy"
        assert config.opponent.strategy == "random"
        assert config.simulation.log_count == 10

    def test_partial_player_section_keeps_learner(self, tmp_path):
        path = tmp_path / "player.yaml"
        path.write_text("player:\n  learning_rate: 0.2\n")

        config = Config.load(str(path))

        assert config.player.learning_rate == 0.2
        assert config.player.strategy == "epsilon-greedy"
        assert config.player.epsilon == 0.01
        assert config.opponent.strategy == "random"

    def test_ensure_dirs(self, tmp_path):
        config = Config(log_dir=str(tmp_path / "runs"), q_table_path=str(tmp_path / "q" / "t.npz"))
        config.ensure_dirs()
        assert (tmp_path / "runs").is_dir()
        assert (tmp_path / "q").is_dir()


class TestSeed:
    def test_make_rng_reproducible(self):
        assert make_rng(3).random() == make_rng(3).random()

    def test_spawned_rngs_independent(self):
        a, b = spawn_rngs(0, 2)
        assert a.random() != b.random()
        first = [g.random() for g in spawn_rngs(9, 3)]
        second = [g.random() for g in spawn_rngs(9, 3)]
        assert first == second
