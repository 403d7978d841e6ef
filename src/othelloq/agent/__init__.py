"""Agent module - Q-table, selection policies and update rules."""

from .qtable import StateActionKey, QTable, ReturnStats, freeze
from .policies import Strategy, sample_index, register_selector, get_selector
from .agent import Agent, Trajectory
from .persistence import dumps_q_table, loads_q_table, save_q_table, load_q_table

__all__ = [
    "StateActionKey",
    "QTable",
    "ReturnStats",
    "freeze",
    "Strategy",
    "sample_index",
    "register_selector",
    "get_selector",
    "Agent",
    "Trajectory",
    "dumps_q_table",
    "loads_q_table",
    "save_q_table",
    "load_q_table",
]
