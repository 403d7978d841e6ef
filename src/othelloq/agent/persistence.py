"""
Q-table persistence.

Tables are stored as a compressed numpy archive with one entry per array:
- states: decimal strings (state keys can exceed 64 bits on large boards)
- rows, cols: the action coordinate
- values: learned values

No pickling is involved, so loading a file never executes code.
"""

from __future__ import annotations

import io
from pathlib import Path

import numpy as np

from .qtable import QTable, StateActionKey


def _check_key(key: StateActionKey) -> None:
    action = key.action
    if not (isinstance(key.state, int) and isinstance(action, tuple) and len(action) == 2):
        raise ValueError(f"Cannot persist key {key!r}: expected (int state, (row, col) action)")


def dumps_q_table(table: QTable) -> bytes:
    """Serialize a Q-table to bytes."""
    keys = list(table)
    for key in keys:
        _check_key(key)

    buffer = io.BytesIO()
    np.savez_compressed(
        buffer,
        states=np.array([str(k.state) for k in keys], dtype=np.str_),
        rows=np.array([k.action[0] for k in keys], dtype=np.int64),
        cols=np.array([k.action[1] for k in keys], dtype=np.int64),
        values=np.array([table[k] for k in keys], dtype=np.float64),
    )
    return buffer.getvalue()


def loads_q_table(data: bytes) -> QTable:
    """Rebuild a Q-table from `dumps_q_table` output."""
    with np.load(io.BytesIO(data)) as archive:
        states = archive["states"]
        rows = archive["rows"]
        cols = archive["cols"]
        values = archive["values"]

    table = QTable()
    for state, row, col, value in zip(states, rows, cols, values):
        key = StateActionKey(state=int(state), action=(int(row), int(col)))
        table[key] = float(value)
    return table


def save_q_table(table: QTable, path: str | Path) -> None:
    """Save a Q-table to disk, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(dumps_q_table(table))


def load_q_table(path: str | Path) -> QTable:
    """Load a Q-table from disk."""
    return loads_q_table(Path(path).read_bytes())
