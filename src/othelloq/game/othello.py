"""
Othello (Reversi) board engine.

Board representation:
- N x N grid, N even and at least 2
- 0 = empty
- 1 = black stone
- 2 = white stone

The board is mutated in place as a game progresses. Its canonical label
(`encode_state`) reads the cells row-major as the digits of a base-3 number,
so two boards of the same size share a key exactly when their grids match.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple

import numpy as np


class Stone(IntEnum):
    """Content of a single cell."""
    EMPTY = 0
    BLACK = 1
    WHITE = 2


EMPTY = Stone.EMPTY
BLACK = Stone.BLACK
WHITE = Stone.WHITE

Coord = Tuple[int, int]

# The eight compass directions walked when looking for flanked runs
DIRECTIONS: tuple[Coord, ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)

STONE_CHARS = {EMPTY: "-", BLACK: "*", WHITE: "@"}


def opponent(color: Stone) -> Stone:
    """Return the opposing color."""
    if color == BLACK:
        return WHITE
    if color == WHITE:
        return BLACK
    raise ValueError(f"{color!r} has no opponent")


def _check_size(size: int) -> None:
    if size < 2 or size % 2 != 0:
        raise ValueError(f"Board size must be an even number >= 2, got {size}")


@dataclass
class Board:
    """Mutable N x N Othello board."""
    grid: np.ndarray  # shape (N, N), dtype int8

    def __post_init__(self):
        if self.grid.ndim != 2 or self.grid.shape[0] != self.grid.shape[1]:
            raise ValueError(f"Board must be square, got shape {self.grid.shape}")
        _check_size(self.grid.shape[0])
        if self.grid.dtype != np.int8:
            self.grid = self.grid.astype(np.int8)

    @classmethod
    def initial(cls, size: int = 4) -> Board:
        """Create a board with the four starting stones around the center."""
        _check_size(size)
        board = cls(grid=np.zeros((size, size), dtype=np.int8))
        half = size // 2
        board.set(half - 1, half - 1, WHITE)
        board.set(half, half, WHITE)
        board.set(half, half - 1, BLACK)
        board.set(half - 1, half, BLACK)
        return board

    @property
    def size(self) -> int:
        return self.grid.shape[0]

    def copy(self) -> Board:
        return Board(grid=self.grid.copy())

    def get(self, row: int, col: int) -> Stone:
        return Stone(int(self.grid[row, col]))

    def set(self, row: int, col: int, stone: Stone) -> None:
        self.grid[row, col] = int(stone)

    def on_board(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def _flanked_run(self, row: int, col: int, dr: int, dc: int, color: Stone) -> list[Coord]:
        """
        Walk from (row, col) in direction (dr, dc) over opposing stones.

        Returns the opposing stones passed over if the walk ends on a stone of
        `color`, otherwise an empty list (including the zero-length case).
        """
        other = opponent(color)
        run: list[Coord] = []
        r, c = row + dr, col + dc
        while self.on_board(r, c) and self.grid[r, c] == other:
            run.append((r, c))
            r += dr
            c += dc
        if run and self.on_board(r, c) and self.grid[r, c] == color:
            return run
        return []

    def flips(self, row: int, col: int, color: Stone) -> list[Coord]:
        """Return every stone that placing `color` at (row, col) would flip."""
        flipped: list[Coord] = []
        for dr, dc in DIRECTIONS:
            flipped.extend(self._flanked_run(row, col, dr, dc, color))
        return flipped

    def is_legal(self, row: int, col: int, color: Stone) -> bool:
        if self.grid[row, col] != EMPTY:
            return False
        return any(self._flanked_run(row, col, dr, dc, color) for dr, dc in DIRECTIONS)

    def legal_moves(self, color: Stone) -> list[Coord]:
        """Return the empty cells where `color` may play, in row-major order."""
        return [
            (row, col)
            for row in range(self.size)
            for col in range(self.size)
            if self.is_legal(row, col, color)
        ]

    def apply_move(self, coord: Coord, color: Stone) -> list[Coord]:
        """
        Place `color` at `coord` and flip every flanked run, in place.

        The caller must pass a coordinate taken from `legal_moves(color)`.
        Placing on an occupied cell or a cell that flips nothing is a
        contract violation and raises AssertionError.

        Returns:
            Coordinates of the flipped stones
        """
        row, col = coord
        assert self.grid[row, col] == EMPTY, f"Cell {coord_label(coord)} is occupied"
        flipped = self.flips(row, col, color)
        assert flipped, f"{Stone(color).name} at {coord_label(coord)} flanks nothing"

        self.set(row, col, color)
        for r, c in flipped:
            self.set(r, c, color)
        return flipped

    def score(self, color: Stone) -> int:
        """Number of cells holding `color`."""
        return int(np.count_nonzero(self.grid == int(color)))

    def counts(self) -> dict[Stone, int]:
        return {stone: self.score(stone) for stone in Stone}

    def is_full(self) -> bool:
        return self.score(BLACK) + self.score(WHITE) == self.size ** 2

    def is_terminal(self, pass_count: int = 0) -> bool:
        """
        Check if the game is over.

        The game ends after two consecutive forced passes, when the board is
        full, or when either color has been wiped out.
        """
        if pass_count >= 2:
            return True
        if self.is_full():
            return True
        return self.score(BLACK) == 0 or self.score(WHITE) == 0

    def encode_state(self) -> int:
        return encode_state(self)


def initial_board(size: int = 4) -> Board:
    """Create the starting position for an N x N game."""
    return Board.initial(size)


def encode_state(board: Board) -> int:
    """
    Encode the board as its canonical integer key.

    Cells are read row-major as base-3 digits, most significant first.
    """
    key = 0
    for value in board.grid.ravel():
        key = key * 3 + int(value)
    return key


def decode_state(key: int, size: int) -> Board:
    """
    Rebuild the board whose `encode_state` is `key`.

    Args:
        key: Canonical state key
        size: Board size the key was produced for

    Returns:
        New Board
    """
    _check_size(size)
    if key < 0:
        raise ValueError(f"State key must be non-negative, got {key}")

    cells = np.zeros(size * size, dtype=np.int8)
    remaining = key
    for i in range(size * size - 1, -1, -1):
        remaining, digit = divmod(remaining, 3)
        cells[i] = digit
    if remaining:
        raise ValueError(f"State key {key} does not fit a {size}x{size} board")

    return Board(grid=cells.reshape(size, size))


def coord_label(coord: Coord) -> str:
    """Human-readable cell name, column letter then 1-based row: (0, 1) -> 'b1'."""
    row, col = coord
    return f"{chr(ord('a') + col)}{row + 1}"


def render(board: Board) -> str:
    """
    Render the board as a string for display.

    - '*' = black
    - '@' = white
    - '-' = empty
    """
    size = board.size
    rule = "  " + "-" * (4 * size + 1)

    lines = []
    lines.append("    " + "   ".join(chr(ord("a") + c) for c in range(size)))
    lines.append(rule)
    for r in range(size):
        cells = "|".join(f" {STONE_CHARS[board.get(r, c)]} " for c in range(size))
        lines.append(f"{r + 1:<2}|{cells}|")
        lines.append(rule)

    return "\n".join(lines)
