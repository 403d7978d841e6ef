"""
Game controller: plays one full game between two agents.

The two roles ("player" and "opponent") are assigned colors at random at the
start of every game; white always moves first. Each role's (state, action)
pairs are recorded into its own trajectory, and the learning rule decides
when the agents' value tables are updated:

- monte-carlo: once per agent at the end of the game, crediting every move
  with the agent's final stone count
- q-learning / sarsa: one-step updates with reward 0 whenever a role moves
  again, plus a terminal update with the final stone count
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from ..agent import Agent, Trajectory
from ..game import BLACK, WHITE, Board, Coord, Stone, coord_label, initial_board, opponent, render
from ..utils.logging import console, print_board

PLAYER = "player"
OPPONENT = "opponent"
ROLES = (PLAYER, OPPONENT)


class GamePhase(Enum):
    IN_PROGRESS = "in-progress"
    AWAITING_MOVE = "awaiting-move"
    PASSED = "passed"
    TERMINAL = "terminal"


class LearningRule(Enum):
    """When and how the agents learn from a game."""
    MONTE_CARLO = "monte-carlo"
    Q_LEARNING = "q-learning"
    SARSA = "sarsa"

    @classmethod
    def parse(cls, name: str | LearningRule) -> LearningRule:
        if isinstance(name, LearningRule):
            return name
        key = name.strip().lower().replace("_", "-")
        try:
            return cls(key)
        except ValueError:
            available = ", ".join(r.value for r in cls)
            raise ValueError(f"Unknown learning rule '{name}'. Available: {available}") from None


@dataclass
class GameResult:
    """Outcome of one game."""

    player_color: Stone
    player_score: int
    opponent_score: int
    winner: Optional[str]  # PLAYER, OPPONENT, or None for a draw
    num_moves: int
    num_passes: int

    @property
    def opponent_color(self) -> Stone:
        return opponent(self.player_color)

    @property
    def is_draw(self) -> bool:
        return self.winner is None


class GameController:
    """
    Plays games between a learning `player` and an `opponent`.

    The controller keeps running win tallies across games; the board and
    trajectories are rebuilt for every game.

    Args:
        player: First role's agent
        opponent: Second role's agent
        board_size: Even board size >= 2
        rng: Generator for the color assignment
        learning_rule: Update rule applied during and after each game
        verbose: Print the board and game events to the console
    """

    def __init__(
        self,
        player: Agent,
        opponent: Agent,
        board_size: int = 4,
        rng: Optional[np.random.Generator] = None,
        learning_rule: LearningRule | str = LearningRule.MONTE_CARLO,
        verbose: bool = False,
    ):
        self.agents = {PLAYER: player, OPPONENT: opponent}
        self.board_size = board_size
        self.rng = rng if rng is not None else np.random.default_rng()
        self.learning_rule = LearningRule.parse(learning_rule)
        self.verbose = verbose

        # Validates the size before any game is played
        self.board: Board = initial_board(board_size)
        self.colors: dict[str, Stone] = {PLAYER: WHITE, OPPONENT: BLACK}
        self.trajectories: dict[str, Trajectory] = {role: Trajectory() for role in ROLES}
        self.phase = GamePhase.IN_PROGRESS
        self.turn_color: Stone = WHITE
        self.turn_count = 0

        self.player_wins = 0
        self.opponent_wins = 0
        self.draws = 0

    @property
    def player(self) -> Agent:
        return self.agents[PLAYER]

    @property
    def opponent(self) -> Agent:
        return self.agents[OPPONENT]

    @property
    def games_played(self) -> int:
        return self.player_wins + self.opponent_wins + self.draws

    def role_of(self, color: Stone) -> str:
        return PLAYER if self.colors[PLAYER] == color else OPPONENT

    def scores(self) -> dict[str, int]:
        return {role: self.board.score(self.colors[role]) for role in ROLES}

    def _reset(self) -> None:
        self.board = initial_board(self.board_size)
        if self.rng.random() < 0.5:
            self.colors = {PLAYER: WHITE, OPPONENT: BLACK}
        else:
            self.colors = {PLAYER: BLACK, OPPONENT: WHITE}
        self.trajectories = {role: Trajectory() for role in ROLES}
        self.phase = GamePhase.IN_PROGRESS
        self.turn_color = WHITE
        self.turn_count = 0

    def _step_update(self, role: str, state: int, action: Coord, legal: list[Coord]) -> None:
        """Bootstrap the role's previous move from the position it now faces."""
        previous = self.trajectories[role].last
        if previous is None:
            return
        prev_state, prev_action = previous
        agent = self.agents[role]
        if self.learning_rule is LearningRule.Q_LEARNING:
            agent.update(prev_state, prev_action, state, legal, 0.0)
        elif self.learning_rule is LearningRule.SARSA:
            agent.update_sarsa(prev_state, prev_action, state, action, 0.0)

    def _terminal_update(self, role: str, reward: float) -> None:
        agent = self.agents[role]
        trajectory = self.trajectories[role]
        if self.learning_rule is LearningRule.MONTE_CARLO:
            agent.update_monte_carlo(trajectory, reward)
            return

        last = trajectory.last
        if last is None:
            return
        state, action = last
        if self.learning_rule is LearningRule.Q_LEARNING:
            agent.update(state, action, None, [], reward)
        else:
            agent.update_sarsa(state, action, None, None, reward)

    def _show(self, message: Optional[str] = None) -> None:
        if not self.verbose:
            return
        if message is not None:
            console.print(message)
            return
        scores = self.scores()
        title = (
            f"Turn {self.turn_count} | player ({self.colors[PLAYER].name.lower()}) {scores[PLAYER]}"
            f" - opponent ({self.colors[OPPONENT].name.lower()}) {scores[OPPONENT]}"
        )
        print_board(render(self.board), title=title)

    def play_one_game(self) -> GameResult:
        """Play a complete game and let both agents learn from it."""
        self._reset()
        pass_count = 0
        num_moves = 0
        num_passes = 0

        self._show()
        while True:
            self.phase = GamePhase.AWAITING_MOVE
            role = self.role_of(self.turn_color)
            agent = self.agents[role]
            state = self.board.encode_state()
            legal = self.board.legal_moves(self.turn_color)

            if legal:
                action = agent.select_action(state, legal)
                self._step_update(role, state, action, legal)
                self.board.apply_move(action, self.turn_color)
                self.trajectories[role].record(state, action)
                pass_count = 0
                num_moves += 1
                self._show(f"[cyan]{role} plays {coord_label(action)}[/]")
                self._show()
            else:
                self.phase = GamePhase.PASSED
                pass_count += 1
                num_passes += 1
                self._show(f"[yellow]{role} has no legal move and passes[/]")

            if self.board.is_terminal(pass_count):
                break

            self.turn_count += 1
            self.turn_color = opponent(self.turn_color)
            self.phase = GamePhase.IN_PROGRESS

        self.phase = GamePhase.TERMINAL
        return self._finish(pass_count, num_moves, num_passes)

    def _finish(self, pass_count: int, num_moves: int, num_passes: int) -> GameResult:
        scores = self.scores()
        for role in ROLES:
            self._terminal_update(role, float(scores[role]))

        if scores[PLAYER] > scores[OPPONENT]:
            winner: Optional[str] = PLAYER
            self.player_wins += 1
        elif scores[PLAYER] < scores[OPPONENT]:
            winner = OPPONENT
            self.opponent_wins += 1
        else:
            winner = None
            self.draws += 1

        if pass_count >= 2:
            self._show("[yellow]Neither side can move. Game over.[/]")
        elif scores[PLAYER] == 0 or scores[OPPONENT] == 0:
            self._show("[magenta]Perfect game![/]")
        self._show(f"[bold]{'Draw' if winner is None else winner + ' wins'}[/] ({scores[PLAYER]}-{scores[OPPONENT]})")

        return GameResult(
            player_color=self.colors[PLAYER],
            player_score=scores[PLAYER],
            opponent_score=scores[OPPONENT],
            winner=winner,
            num_moves=num_moves,
            num_passes=num_passes,
        )
