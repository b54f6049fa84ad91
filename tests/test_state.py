"""
Unit Tests for Board State

Tests for the game position and rules, focusing on:
    - Position construction and immutability
    - Move application and successor generation
    - Terminal detection (line order, draws, early exit)
    - Utility scoring
"""

import random

import numpy as np
import pytest
from tictactoe_engine.board import (
    Mark,
    Outcome,
    Position,
    apply_move,
    generate_successors,
    is_terminal,
    move_between,
    position_from_string,
    utility,
)


class TestPosition:
    """Tests for Position construction."""

    def test_empty_position(self):
        """Test the empty starting position."""

        position = Position.empty(3, Mark.X)

        assert position.size == 3
        assert position.plies == 0
        assert position.side_to_move == Mark.X
        assert not position.cells.any(), "All cells should be empty"

    def test_empty_position_other_side_first(self):
        position = Position.empty(4, Mark.O)

        assert position.size == 4
        assert position.side_to_move == Mark.O

    def test_board_too_small_raises(self):
        with pytest.raises(ValueError):
            Position.empty(2)

    def test_empty_side_to_move_raises(self):
        with pytest.raises(ValueError):
            Position.empty(3, Mark.EMPTY)

    def test_from_cells_derives_plies(self):
        """Test that the ply count always matches the marks on the board."""

        position = Position.from_cells([[1, 0, 0], [0, -1, 0], [0, 0, 1]], Mark.O)

        assert position.plies == 3
        assert position.mark_at(1, 1) == Mark.O

    def test_from_cells_rejects_non_square(self):
        with pytest.raises(ValueError):
            Position.from_cells([[0, 0, 0], [0, 0, 0]], Mark.X)

    def test_from_cells_rejects_unknown_values(self):
        with pytest.raises(ValueError):
            Position.from_cells([[2, 0, 0], [0, 0, 0], [0, 0, 0]], Mark.X)

    @pytest.mark.parametrize("value", [1.7, 0.5, -0.2])
    def test_from_cells_rejects_fractional_values(self, value):
        """Test that fractions are rejected instead of truncated to a mark."""

        with pytest.raises(ValueError):
            Position.from_cells([[value, 0, 0], [0, 0, 0], [0, 0, 0]], Mark.X)

    @pytest.mark.parametrize("value", [300, -129, 2**40])
    def test_from_cells_rejects_out_of_range_integers(self, value):
        with pytest.raises(ValueError):
            Position.from_cells([[value, 0, 0], [0, 0, 0], [0, 0, 0]], Mark.X)

    def test_from_cells_accepts_whole_floats(self):
        position = Position.from_cells([[1.0, 0.0, 0.0], [0.0, -1.0, 0.0], [0.0, 0.0, 0.0]], Mark.X)

        assert position.plies == 2
        assert position.cells.dtype == np.int8

    def test_constructor_copies_cells(self):
        """Test that a position does not share or lock the caller's array."""

        base = np.zeros((3, 3), dtype=np.int8)
        position = Position(base[:], 0, Mark.X)

        base[0, 0] = Mark.X

        assert position.is_empty(0, 0), "Outside writes must not reach the position"
        assert base.flags.writeable, "Caller's array must stay writeable"
        assert not position.cells.flags.writeable

    def test_cells_are_read_only(self):
        """Test that a position's grid cannot be modified in place."""

        position = Position.empty(3)

        with pytest.raises(ValueError):
            position.cells[0, 0] = Mark.X

    def test_equality_and_hash(self):
        a = position_from_string("x__/_o_/___")
        b = position_from_string("x__/_o_/___")
        c = position_from_string("x__/_o_/___", side_to_move=Mark.O)

        assert a == b
        assert hash(a) == hash(b)
        assert a != c, "Side to move is part of the position"
        assert len({a, b, c}) == 2

    def test_empty_cells_row_major(self):
        position = position_from_string("x_o/_x_/oo_", side_to_move=Mark.X)

        assert position.empty_cells() == [(0, 1), (1, 0), (1, 2), (2, 2)]


class TestApplyMove:
    """Tests for placing a single mark."""

    def test_places_side_to_move_mark(self):
        parent = Position.empty(3, Mark.X)

        child = apply_move(parent, 1, 2)

        assert child.mark_at(1, 2) == Mark.X
        assert child.plies == 1
        assert child.side_to_move == Mark.O

    def test_parent_is_unchanged(self):
        parent = Position.empty(3, Mark.X)

        apply_move(parent, 0, 0)

        assert parent.plies == 0
        assert parent.is_empty(0, 0), "Parent grid must not change"

    def test_occupied_cell_raises(self):
        position = position_from_string("x__/___/___")

        with pytest.raises(ValueError):
            apply_move(position, 0, 0)

    @pytest.mark.parametrize("row, col", [(3, 0), (0, 3), (-1, 0), (0, -1)])
    def test_out_of_range_raises(self, row, col):
        with pytest.raises(ValueError):
            apply_move(Position.empty(3), row, col)

    def test_wrong_mark_raises(self):
        position = Position.empty(3, Mark.X)

        with pytest.raises(ValueError):
            apply_move(position, 0, 0, Mark.O)

    def test_matching_mark_accepted(self):
        position = Position.empty(3, Mark.X)

        assert apply_move(position, 0, 0, Mark.X).mark_at(0, 0) == Mark.X


class TestGenerateSuccessors:
    """Tests for successor generation."""

    @pytest.mark.parametrize(
        "board",
        ["___/___/___", "x__/_o_/___", "xo_/ox_/x_o", "x___/_o__/____/____"],
    )
    def test_successor_properties(self, board):
        """Test count, single-cell difference, ply increment and side flip."""

        parent = position_from_string(board)
        size = parent.size

        successors = generate_successors(parent, random.Random(0))

        assert len(successors) == size * size - parent.plies
        seen = set()
        for child in successors:
            changed = np.argwhere(parent.cells != child.cells)
            assert len(changed) == 1, "Exactly one cell should change"
            row, col = changed[0]
            assert parent.is_empty(row, col), "Changed cell must have been empty"
            assert child.mark_at(row, col) == parent.side_to_move
            assert child.plies == parent.plies + 1
            assert child.side_to_move == parent.side_to_move.opponent()
            seen.add((int(row), int(col)))

        assert seen == set(parent.empty_cells()), "Every empty cell used once"

    def test_full_board_has_no_successors(self):
        position = position_from_string("xox/xoo/oxx")

        assert generate_successors(position, random.Random(0)) == []

    def test_order_is_shuffled(self):
        """Test that successor order varies between calls."""

        rng = random.Random(99)
        position = Position.empty(3)

        orders = {
            tuple(move_between(position, s) for s in generate_successors(position, rng))
            for _ in range(20)
        }

        assert len(orders) > 1, "Successor order should be randomized"

    def test_same_seed_same_order(self):
        position = Position.empty(3)

        first = generate_successors(position, random.Random(5))
        second = generate_successors(position, random.Random(5))

        assert first == second

    def test_works_without_generator(self):
        assert len(generate_successors(Position.empty(3))) == 9


class TestIsTerminal:
    """Tests for terminal detection."""

    def test_early_positions_skip_line_check(self):
        """
        Test that boards with fewer than 2N-1 marks are never terminal.

        The grid holds a complete row, which legal play cannot produce this
        early; the early exit must report the position as live anyway.
        """
        position = Position.from_cells([[1, 1, 1], [0, 0, 0], [0, 0, 0]], Mark.O)

        assert is_terminal(position) == (False, Outcome.NONE)

    @pytest.mark.parametrize(
        "board, outcome",
        [
            ("x_o/ox_/o_x", Outcome.X_WINS),  # main diagonal
            ("x_o/xo_/o_x", Outcome.O_WINS),  # anti-diagonal
            ("xxx/oo_/___", Outcome.X_WINS),  # row
            ("ox_/ox_/o_x", Outcome.O_WINS),  # column
            ("xxxx/ooo_/____/____", Outcome.X_WINS),  # 4x4 row
            ("o__x/o_x_/ox__/x_o_", Outcome.X_WINS),  # 4x4 anti-diagonal
        ],
    )
    def test_wins(self, board, outcome):
        assert is_terminal(position_from_string(board)) == (True, outcome)

    def test_draw(self):
        assert is_terminal(position_from_string("xox/xoo/oxx")) == (True, Outcome.DRAW)

    def test_live_position(self):
        assert is_terminal(position_from_string("xo_/ox_/x_o")) == (False, Outcome.NONE)

    def test_rows_checked_top_to_bottom(self):
        """Test that the first complete line in scan order decides the winner."""

        top_x = Position.from_cells([[1, 1, 1], [-1, -1, -1], [0, 0, 0]], Mark.X)
        top_o = Position.from_cells([[-1, -1, -1], [1, 1, 1], [0, 0, 0]], Mark.X)

        assert is_terminal(top_x) == (True, Outcome.X_WINS)
        assert is_terminal(top_o) == (True, Outcome.O_WINS)

    def test_main_diagonal_checked_before_anti_diagonal(self):
        """
        Test that the main diagonal wins a tie with the anti-diagonal.

        Any row or column crosses both diagonals, so a full diagonal can only
        coexist with a full line of the other mark when both are diagonals
        on an even board.
        """
        main_o = Position.from_cells(
            [[-1, 0, 0, 1], [0, -1, 1, 0], [0, 1, -1, 0], [1, 0, 0, -1]], Mark.X
        )
        main_x = Position.from_cells(
            [[1, 0, 0, -1], [0, 1, -1, 0], [0, -1, 1, 0], [-1, 0, 0, 1]], Mark.X
        )

        assert is_terminal(main_o) == (True, Outcome.O_WINS)
        assert is_terminal(main_x) == (True, Outcome.X_WINS)

    def test_idempotent(self):
        position = position_from_string("xxx/oo_/___")

        assert is_terminal(position) == is_terminal(position)
        terminal, outcome = is_terminal(position)
        assert utility(position, outcome) == utility(position, outcome)


class TestUtility:
    """Tests for utility scoring."""

    def test_x_win(self):
        position = position_from_string("xxx/oo_/___")

        assert utility(position, Outcome.X_WINS) == 10 - 5

    def test_o_win(self):
        position = position_from_string("ooo/xx_/x__")

        assert utility(position, Outcome.O_WINS) == -10 + 6

    def test_draw_and_none_score_zero(self):
        position = position_from_string("xox/xoo/oxx")

        assert utility(position, Outcome.DRAW) == 0
        assert utility(position, Outcome.NONE) == 0

    @pytest.mark.parametrize(
        "board",
        [
            "xxx/oo_/___",
            "ooo/xx_/x__",
            "x_o/ox_/o_x",
            "ox_/ox_/o_x",
            "xxxx/ooo_/____/____",
        ],
    )
    def test_sign_and_magnitude(self, board):
        """Test |utility| == N*N + 1 - plies with the winner's sign."""

        position = position_from_string(board)
        terminal, outcome = is_terminal(position)
        value = utility(position, outcome)

        assert terminal
        assert abs(value) == position.size ** 2 + 1 - position.plies
        if outcome == Outcome.X_WINS:
            assert value > 0
        else:
            assert value < 0

    def test_faster_win_scores_higher(self):
        fast = position_from_string("xxx/oo_/___")
        slow = position_from_string("xxx/oo_/o_x", side_to_move=Mark.O)

        assert utility(fast, Outcome.X_WINS) > utility(slow, Outcome.X_WINS) > 0


class TestMoveBetween:
    """Tests for finding the cell a move filled."""

    def test_finds_cell(self):
        parent = Position.empty(3)
        child = apply_move(parent, 2, 1)

        assert move_between(parent, child) == (2, 1)

    def test_identical_positions_raise(self):
        position = Position.empty(3)

        with pytest.raises(ValueError):
            move_between(position, position)

    def test_two_changes_raise(self):
        parent = Position.empty(3)
        grandchild = apply_move(apply_move(parent, 0, 0), 1, 1)

        with pytest.raises(ValueError):
            move_between(parent, grandchild)
