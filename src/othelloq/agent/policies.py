"""
Action-selection policies.

Each Strategy has exactly one selector registered for it. A selector takes
the agent, the current state and the legal actions, and returns one of the
legal actions. All randomness is drawn from the agent's generator.

Probability-based policies (roulette, Boltzmann) build a weight per action,
fall back to a uniform choice when the weights sum to (effectively) zero,
and otherwise sample by walking the cumulative distribution.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Sequence

import numpy as np

if TYPE_CHECKING:
    from .agent import Agent


# Weight sums below this are treated as an all-zero distribution
WEIGHT_EPSILON = np.finfo(float).eps


class Strategy(Enum):
    """Closed set of move-selection strategies."""
    MANUAL = "manual"
    RANDOM = "random"
    GREEDY = "greedy"
    EPSILON_GREEDY = "epsilon-greedy"
    ROULETTE = "roulette"
    BOLTZMANN = "boltzmann"

    @property
    def learns(self) -> bool:
        """Whether updates to the value table have any effect."""
        return self not in (Strategy.MANUAL, Strategy.RANDOM)

    @classmethod
    def parse(cls, name: str | Strategy) -> Strategy:
        """Resolve a strategy from its value, enum name or a legacy alias."""
        if isinstance(name, Strategy):
            return name
        key = name.strip().lower().replace("_", "-")
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            available = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown strategy '{name}'. Available: {available}") from None


_ALIASES = {
    "man": "manual",
    "human": "manual",
    "e-greedy": "epsilon-greedy",
    "boltzman": "boltzmann",
}


Selector = Callable[["Agent", Any, Sequence[Any]], Any]

_SELECTORS: dict[Strategy, Selector] = {}


def register_selector(strategy: Strategy):
    """Decorator to register the selector for a strategy."""
    def decorator(fn: Selector) -> Selector:
        _SELECTORS[strategy] = fn
        return fn
    return decorator


def get_selector(strategy: Strategy) -> Selector:
    if strategy not in _SELECTORS:
        raise ValueError(f"No selector registered for {strategy.value}")
    return _SELECTORS[strategy]


def sample_index(probs: Sequence[float], rng: np.random.Generator) -> int:
    """
    Sample an index from a probability distribution.

    Draws u in [0, 1) and returns the first index whose interval
    [acc, acc + p) contains u. If rounding leaves u past the last interval,
    the last index is returned.
    """
    u = rng.random()
    acc = 0.0
    for i, p in enumerate(probs):
        if acc <= u < acc + p:
            return i
        acc += p
    return len(probs) - 1


def uniform_choice(actions: Sequence[Any], rng: np.random.Generator) -> Any:
    return actions[int(rng.integers(len(actions)))]


def sample_weighted(actions: Sequence[Any], weights: np.ndarray, rng: np.random.Generator) -> Any:
    """
    Choose an action with probability proportional to its weight.

    Weights must be non-negative. A sum below WEIGHT_EPSILON falls back to a
    uniform choice.
    """
    total = float(np.sum(weights))
    if total < WEIGHT_EPSILON:
        return uniform_choice(actions, rng)
    probs = weights / total
    return actions[sample_index(probs, rng)]


def q_values(agent: Agent, state: Any, actions: Sequence[Any]) -> np.ndarray:
    return np.array([agent.q_value(state, a) for a in actions], dtype=np.float64)


@register_selector(Strategy.MANUAL)
def select_manual(agent: Agent, state: Any, actions: Sequence[Any]) -> Any:
    """Ask the input collaborator until it answers with a legal action."""
    if agent.input_fn is None:
        raise RuntimeError("Manual strategy requires an input function")
    while True:
        choice = agent.input_fn(state, list(actions))
        if choice is not None and choice in actions:
            return choice


@register_selector(Strategy.RANDOM)
def select_random(agent: Agent, state: Any, actions: Sequence[Any]) -> Any:
    return uniform_choice(actions, agent.rng)


@register_selector(Strategy.GREEDY)
def select_greedy(agent: Agent, state: Any, actions: Sequence[Any]) -> Any:
    """Pick the highest-valued action, breaking ties uniformly at random."""
    values = q_values(agent, state, actions)
    best = np.flatnonzero(values == values.max())
    if len(best) == 1:
        return actions[int(best[0])]
    return actions[int(agent.rng.choice(best))]


@register_selector(Strategy.EPSILON_GREEDY)
def select_epsilon_greedy(agent: Agent, state: Any, actions: Sequence[Any]) -> Any:
    if agent.rng.random() < agent.epsilon:
        return select_random(agent, state, actions)
    return select_greedy(agent, state, actions)


@register_selector(Strategy.ROULETTE)
def select_roulette(agent: Agent, state: Any, actions: Sequence[Any]) -> Any:
    """Sample in proportion to the Q-values, shifted to be non-negative."""
    weights = q_values(agent, state, actions)
    if weights.min() < 0:
        weights = weights - weights.min()
    return sample_weighted(actions, weights, agent.rng)


@register_selector(Strategy.BOLTZMANN)
def select_boltzmann(agent: Agent, state: Any, actions: Sequence[Any]) -> Any:
    """Sample from exp(Q / temperature)."""
    values = q_values(agent, state, actions)
    with np.errstate(over="ignore"):
        weights = np.exp(values / agent.temperature)
    if not np.all(np.isfinite(weights)):
        # Same distribution, computed without overflow
        weights = np.exp((values - values.max()) / agent.temperature)
    return sample_weighted(actions, weights, agent.rng)
