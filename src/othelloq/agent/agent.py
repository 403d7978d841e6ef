"""
Tabular reinforcement-learning agent.

The agent knows nothing about Othello: states and actions are opaque values
that are snapshotted into StateActionKeys. It owns a Q-table plus the
Monte Carlo return statistics, selects actions through the policy registered
for its strategy, and offers three update rules:

- update: one-step off-policy Q-learning (bootstraps on the best next action)
- update_sarsa: one-step on-policy SARSA (bootstraps on the chosen next action)
- update_monte_carlo: running mean of the realized end-of-game reward

Agents whose strategy does not learn (manual, random) ignore every update.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, Optional, Sequence, Tuple

import numpy as np

from .persistence import load_q_table, save_q_table
from .policies import Strategy, get_selector
from .qtable import QTable, ReturnStats, StateActionKey, freeze

InputFn = Callable[[Any, list], Any]


class Trajectory:
    """Ordered (state, action) pairs visited by one player in one game."""

    def __init__(self):
        self.steps: list[Tuple[Any, Any]] = []

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[Tuple[Any, Any]]:
        return iter(self.steps)

    def record(self, state: Any, action: Any) -> None:
        self.steps.append((freeze(state), freeze(action)))

    @property
    def last(self) -> Optional[Tuple[Any, Any]]:
        return self.steps[-1] if self.steps else None


class Agent:
    """
    Q-table agent.

    Args:
        strategy: Move-selection strategy (enum or name)
        learning_rate: Step size in (0, 1]
        discount_rate: Bootstrap discount in [0, 1]
        epsilon: Exploration probability for epsilon-greedy, in [0, 1]
        temperature: Boltzmann temperature, > 0
        rng: Random generator used for every random draw
        input_fn: Collaborator asked for moves under the manual strategy
    """

    def __init__(
        self,
        strategy: Strategy | str = Strategy.RANDOM,
        learning_rate: float = 0.1,
        discount_rate: float = 0.9,
        epsilon: float = 0.01,
        temperature: float = 1.0,
        rng: Optional[np.random.Generator] = None,
        input_fn: Optional[InputFn] = None,
    ):
        if not 0.0 < learning_rate <= 1.0:
            raise ValueError(f"learning_rate must be in (0, 1], got {learning_rate}")
        if not 0.0 <= discount_rate <= 1.0:
            raise ValueError(f"discount_rate must be in [0, 1], got {discount_rate}")
        if not 0.0 <= epsilon <= 1.0:
            raise ValueError(f"epsilon must be in [0, 1], got {epsilon}")
        if temperature <= 0.0:
            raise ValueError(f"temperature must be positive, got {temperature}")

        self.strategy = Strategy.parse(strategy)
        self.learning_rate = learning_rate
        self.discount_rate = discount_rate
        self.epsilon = epsilon
        self.temperature = temperature
        self.rng = rng if rng is not None else np.random.default_rng()
        self.input_fn = input_fn

        self.q_table = QTable()
        self.returns = ReturnStats()

    def __repr__(self) -> str:
        return f"Agent(strategy={self.strategy.value}, q_table={len(self.q_table)} entries)"

    @property
    def learns(self) -> bool:
        return self.strategy.learns

    def q_value(self, state: Any, action: Any) -> float:
        """Learned value of taking `action` in `state` (0.0 if never written)."""
        return self.q_table.get(StateActionKey.of(state, action))

    def set_q_value(self, state: Any, action: Any, value: float) -> None:
        self.q_table[StateActionKey.of(state, action)] = value

    def select_action(self, state: Any, legal_actions: Sequence[Any]) -> Any:
        """Choose one of `legal_actions` according to the agent's strategy."""
        if len(legal_actions) == 0:
            raise ValueError("select_action needs at least one legal action")
        return get_selector(self.strategy)(self, state, legal_actions)

    def _blend(self, state: Any, action: Any, reward: float, bootstrap: float) -> None:
        target = reward + self.discount_rate * bootstrap
        value = (1 - self.learning_rate) * self.q_value(state, action) + self.learning_rate * target
        self.set_q_value(state, action, value)

    def update(
        self,
        state: Any,
        action: Any,
        next_state: Any,
        next_legal_actions: Sequence[Any],
        reward: float,
    ) -> None:
        """
        Q-learning update.

        Q(s, a) <- (1 - lr) Q(s, a) + lr (r + discount * max_a' Q(s', a'))

        The max over an empty `next_legal_actions` (terminal successor) is 0.
        """
        if not self.learns:
            return
        best_next = max(
            (self.q_value(next_state, a) for a in next_legal_actions),
            default=0.0,
        )
        self._blend(state, action, reward, best_next)

    def update_sarsa(
        self,
        state: Any,
        action: Any,
        next_state: Any,
        next_action: Any,
        reward: float,
    ) -> None:
        """
        SARSA update, bootstrapping on the action actually taken next.

        Pass next_action=None for a terminal successor (bootstrap of 0).
        """
        if not self.learns:
            return
        next_q = 0.0 if next_action is None else self.q_value(next_state, next_action)
        self._blend(state, action, reward, next_q)

    def update_monte_carlo(self, trajectory: Iterable[Tuple[Any, Any]], final_reward: float) -> None:
        """
        Monte Carlo update from a finished game.

        Every (state, action) occurrence in the trajectory is credited with
        the same undiscounted `final_reward`; its Q-value becomes the mean of
        all rewards credited to it so far.
        """
        if not self.learns:
            return
        for state, action in trajectory:
            key = StateActionKey.of(state, action)
            self.q_table[key] = self.returns.record(key, final_reward)

    def save_q_table(self, path: str | Path) -> None:
        """Write the Q-table to `path`."""
        save_q_table(self.q_table, path)

    def load_q_table(self, path: str | Path) -> None:
        """
        Replace the Q-table with the one stored at `path`.

        Monte Carlo return statistics are reset, so the loaded values are
        averaged afresh from the returns observed after the load.
        """
        self.q_table = load_q_table(path)
        self.returns.clear()
