"""Tests for Othello game rules."""

import numpy as np
import pytest

from othelloq.game import (
    EMPTY,
    BLACK,
    WHITE,
    Board,
    initial_board,
    opponent,
    coord_label,
    render,
)


def play_random_moves(board, rng, max_moves=100):
    """Play random legal moves in place, yielding (color, coord, before) per move."""
    color = WHITE
    passes = 0
    for _ in range(max_moves):
        legal = board.legal_moves(color)
        if legal:
            passes = 0
            coord = legal[int(rng.integers(len(legal)))]
            before = board.copy()
            board.apply_move(coord, color)
            yield color, coord, before
        else:
            passes += 1
        if board.is_terminal(passes):
            return
        color = opponent(color)


class TestInitialBoard:
    @pytest.mark.parametrize("size", [2, 4, 6, 8])
    def test_two_stones_each(self, size):
        board = initial_board(size)
        assert board.grid.shape == (size, size)
        assert board.score(BLACK) == 2
        assert board.score(WHITE) == 2
        assert board.score(EMPTY) == size * size - 4

    def test_center_diagonal_pattern(self):
        board = initial_board(8)
        assert board.get(3, 3) == WHITE
        assert board.get(4, 4) == WHITE
        assert board.get(4, 3) == BLACK
        assert board.get(3, 4) == BLACK

    @pytest.mark.parametrize("size", [-2, 0, 1, 3, 5])
    def test_invalid_size_raises(self, size):
        with pytest.raises(ValueError):
            initial_board(size)

    def test_non_square_grid_raises(self):
        with pytest.raises(ValueError):
            Board(grid=np.zeros((4, 6), dtype=np.int8))

    def test_grid_cast_to_int8(self):
        board = Board(grid=np.zeros((4, 4), dtype=np.int64))
        assert board.grid.dtype == np.int8


class TestLegalMoves:
    def test_white_opening_moves(self):
        board = initial_board(4)
        assert set(board.legal_moves(WHITE)) == {(0, 2), (1, 3), (2, 0), (3, 1)}

    def test_black_opening_moves(self):
        board = initial_board(4)
        assert set(board.legal_moves(BLACK)) == {(0, 1), (1, 0), (2, 3), (3, 2)}

    def test_no_duplicates(self):
        board = initial_board(8)
        moves = board.legal_moves(WHITE)
        assert len(moves) == len(set(moves))

    def test_zero_length_run_does_not_qualify(self):
        # (0, 0) touches only white stones and empties
        board = initial_board(4)
        board.set(0, 1, WHITE)
        assert not board.is_legal(0, 0, WHITE)

    def test_run_ending_at_edge_is_not_legal(self):
        board = Board(grid=np.zeros((4, 4), dtype=np.int8))
        board.set(0, 1, BLACK)
        board.set(0, 2, BLACK)
        board.set(0, 3, BLACK)
        assert not board.is_legal(0, 0, WHITE)
        board.set(0, 3, WHITE)
        assert board.is_legal(0, 0, WHITE)

    def test_run_ending_on_empty_is_not_legal(self):
        board = Board(grid=np.zeros((4, 4), dtype=np.int8))
        board.set(1, 1, BLACK)
        assert board.legal_moves(WHITE) == []

    def test_legal_moves_are_empty_cells(self):
        rng = np.random.default_rng(0)
        for _ in range(20):
            board = initial_board(6)
            for color, _, _ in play_random_moves(board, rng):
                for r, c in board.legal_moves(opponent(color)):
                    assert board.get(r, c) == EMPTY

    def test_two_by_two_has_no_moves(self):
        board = initial_board(2)
        assert board.legal_moves(WHITE) == []
        assert board.legal_moves(BLACK) == []


class TestApplyMove:
    def test_opening_flank_flips_one_stone(self):
        board = initial_board(4)
        flipped = board.apply_move((3, 1), WHITE)

        assert flipped == [(2, 1)]
        assert board.get(3, 1) == WHITE
        assert board.get(2, 1) == WHITE
        assert board.score(WHITE) == 4
        assert board.score(BLACK) == 1

    @pytest.mark.parametrize("coord", [(0, 2), (1, 3), (2, 0), (3, 1)])
    def test_every_opening_move_flips_exactly_one(self, coord):
        board = initial_board(4)
        flipped = board.apply_move(coord, WHITE)
        assert len(flipped) == 1
        assert board.score(WHITE) == 4
        assert board.score(BLACK) == 1

    def test_flips_in_several_directions(self):
        grid = np.array([
            [2, 0, 2, 0],
            [1, 1, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ], dtype=np.int8)
        board = Board(grid=grid)

        flipped = board.apply_move((2, 0), WHITE)

        assert set(flipped) == {(1, 0), (1, 1)}
        assert board.score(WHITE) == 5
        assert board.score(BLACK) == 0

    def test_long_run_is_flipped(self):
        board = Board(grid=np.zeros((6, 6), dtype=np.int8))
        for c in range(1, 5):
            board.set(2, c, BLACK)
        board.set(2, 5, WHITE)

        flipped = board.apply_move((2, 0), WHITE)

        assert flipped == [(2, 1), (2, 2), (2, 3), (2, 4)]
        assert board.score(BLACK) == 0

    def test_occupied_cell_fails_loudly(self):
        board = initial_board(4)
        with pytest.raises(AssertionError):
            board.apply_move((1, 1), WHITE)

    def test_non_flanking_cell_fails_loudly(self):
        board = initial_board(4)
        with pytest.raises(AssertionError):
            board.apply_move((0, 0), WHITE)
        # Board untouched by the rejected call
        assert board.score(WHITE) == 2
        assert board.get(0, 0) == EMPTY

    def test_move_grows_color_and_shrinks_empty_by_one(self):
        rng = np.random.default_rng(1)
        for _ in range(20):
            board = initial_board(6)
            for color, _, before in play_random_moves(board, rng):
                assert board.score(color) > before.score(color)
                assert board.score(color) >= before.score(color) + 2
                assert board.score(EMPTY) == before.score(EMPTY) - 1
                assert board.score(BLACK) + board.score(WHITE) + board.score(EMPTY) == 36


class TestTerminal:
    def test_initial_not_terminal(self):
        assert not initial_board(4).is_terminal(0)

    def test_single_pass_not_terminal(self):
        assert not initial_board(4).is_terminal(1)

    def test_two_passes_terminal(self):
        assert initial_board(4).is_terminal(2)

    def test_full_board_terminal(self):
        board = Board(grid=np.array([[1, 2], [2, 1]], dtype=np.int8))
        assert board.is_full()
        assert board.is_terminal(0)

    def test_wiped_out_color_terminal(self):
        board = Board(grid=np.zeros((4, 4), dtype=np.int8))
        board.set(0, 0, WHITE)
        board.set(0, 1, WHITE)
        assert board.is_terminal(0)

    def test_two_by_two_starts_full(self):
        assert initial_board(2).is_terminal(0)


class TestHelpers:
    def test_opponent(self):
        assert opponent(BLACK) == WHITE
        assert opponent(WHITE) == BLACK
        with pytest.raises(ValueError):
            opponent(EMPTY)

    def test_coord_label(self):
        assert coord_label((0, 0)) == "a1"
        assert coord_label((0, 1)) == "b1"
        assert coord_label((3, 2)) == "c4"

    def test_counts(self):
        counts = initial_board(4).counts()
        assert counts[BLACK] == 2
        assert counts[WHITE] == 2
        assert counts[EMPTY] == 12

    def test_copy_is_independent(self):
        board = initial_board(4)
        clone = board.copy()
        clone.apply_move((3, 1), WHITE)
        assert board.score(WHITE) == 2


class TestRender:
    def test_render_initial(self):
        output = render(initial_board(4))
        assert output.count("*") == 2
        assert output.count("@") == 2
        assert "a   b   c   d" in output
        assert output.splitlines()[2].startswith("1 |")

    def test_render_empty(self):
        output = render(Board(grid=np.zeros((2, 2), dtype=np.int8)))
        assert "*" not in output
        assert "@" not in output
        assert output.count("-") > 4
