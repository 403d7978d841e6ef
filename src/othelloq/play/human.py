"""
Terminal input for the manual strategy.
"""

from __future__ import annotations

from typing import Any, Optional

import typer
from rich.markup import escape

from ..game import Coord, coord_label
from ..utils.logging import console


def format_choices(legal_actions: list[Coord]) -> str:
    """List candidate moves as '[0]:b1 [1]:c4 ...'."""
    return " ".join(f"[{i}]:{coord_label(a)}" for i, a in enumerate(legal_actions))


def prompt_move(state: Any, legal_actions: list[Coord]) -> Optional[Coord]:
    """
    Ask the human for a move.

    Returns the chosen action, or None when the index is out of range so the
    caller asks again.
    """
    console.print("Choose your move by number:")
    console.print(escape(format_choices(legal_actions)))
    index = typer.prompt("Your move", type=int)
    if 0 <= index < len(legal_actions):
        return legal_actions[index]
    console.print(f"[red]Enter a number 0-{len(legal_actions) - 1}[/]")
    return None
