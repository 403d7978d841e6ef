"""
Tabular value storage for the learning agent.

Keys are (state, action) pairs compared by value. Both parts are frozen when
the key is built, so mutating the objects a key was made from never changes
an entry that is already stored.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Hashable, Iterator, Optional

import numpy as np


def freeze(value: Any) -> Hashable:
    """
    Take an immutable snapshot of a state or action.

    Lists, tuples and numpy arrays become nested tuples, numpy scalars become
    Python scalars, anything else is deep-copied.
    """
    if isinstance(value, np.ndarray):
        return freeze(value.tolist())
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    if isinstance(value, np.generic):
        return value.item()
    return copy.deepcopy(value)


@dataclass(frozen=True)
class StateActionKey:
    """Value-hashed (state, action) pair."""

    state: Hashable
    action: Hashable

    @classmethod
    def of(cls, state: Any, action: Any) -> StateActionKey:
        return cls(state=freeze(state), action=freeze(action))


class QTable:
    """
    Mapping from StateActionKey to a learned value.

    `get` never inserts: unseen keys read as the default (0.0) and the table
    only grows through explicit assignment.
    """

    def __init__(self, entries: Optional[dict[StateActionKey, float]] = None):
        self._values: dict[StateActionKey, float] = dict(entries or {})

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: StateActionKey) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[StateActionKey]:
        return iter(self._values)

    def __getitem__(self, key: StateActionKey) -> float:
        return self._values[key]

    def __setitem__(self, key: StateActionKey, value: float) -> None:
        self._values[key] = float(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QTable):
            return NotImplemented
        return self._values == other._values

    def get(self, key: StateActionKey, default: float = 0.0) -> float:
        return self._values.get(key, default)

    def items(self):
        return self._values.items()


class ReturnStats:
    """
    Per-key visit counts and cumulative returns for Monte Carlo control.

    Entries are created on first write.
    """

    def __init__(self):
        self.visits: dict[StateActionKey, int] = {}
        self.return_sums: dict[StateActionKey, float] = {}

    def __len__(self) -> int:
        return len(self.visits)

    def record(self, key: StateActionKey, reward: float) -> float:
        """
        Add one observed return for `key`.

        Returns:
            Running mean of every return recorded for `key`
        """
        self.visits[key] = self.visits.setdefault(key, 0) + 1
        self.return_sums[key] = self.return_sums.setdefault(key, 0.0) + reward
        return self.return_sums[key] / self.visits[key]

    def clear(self) -> None:
        self.visits.clear()
        self.return_sums.clear()
