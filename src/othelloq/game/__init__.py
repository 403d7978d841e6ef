"""Game module - Othello rules and state encoding."""

from .othello import (
    Stone,
    EMPTY,
    BLACK,
    WHITE,
    Coord,
    DIRECTIONS,
    Board,
    opponent,
    initial_board,
    encode_state,
    decode_state,
    coord_label,
    render,
)

__all__ = [
    "Stone",
    "EMPTY",
    "BLACK",
    "WHITE",
    "Coord",
    "DIRECTIONS",
    "Board",
    "opponent",
    "initial_board",
    "encode_state",
    "decode_state",
    "coord_label",
    "render",
]
