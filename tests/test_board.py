"""Tests for board construction, encoding and validation."""

import pytest

from rulerift.board import (
    Board,
    Cell,
    create_board,
    preset_level,
    set_relation,
    validate_board,
)
from rulerift.errors import InvalidStateError
from rulerift.models import Direction, Relation


class TestCreateBoard:
    def test_empty_square_board(self) -> None:
        board = create_board(4)
        assert board.size == 4
        assert all(cell.is_empty for row in board.cells for cell in row)

    @pytest.mark.parametrize("size", [0, 1, 2])
    def test_too_small(self, size: int) -> None:
        with pytest.raises(InvalidStateError):
            create_board(size)


class TestFromRows:
    def test_markers(self) -> None:
        board = Board.from_rows(["1 . #", "...", "# # 3"])
        assert board.cell(0, 0).value == 1
        assert board.cell(0, 1).is_empty
        assert board.cell(0, 2).blocked
        assert board.cell(2, 2).is_filled

    def test_unknown_marker(self) -> None:
        with pytest.raises(InvalidStateError):
            Board.from_rows(["..x", "...", "..."])

    @pytest.mark.parametrize("rows", [["7...", "....", "....", "...."], ["0..", "...", "..."]])
    def test_value_out_of_range(self, rows) -> None:
        with pytest.raises(InvalidStateError):
            Board.from_rows(rows)

    def test_state_key(self) -> None:
        board = Board.from_rows([". 1 #", "...", "..."])
        assert board.state_key() == ".1B|...|..."
        assert str(board) == ".1B\n...\n..."


class TestRelations:
    def test_set_relation_mirrors(self) -> None:
        board = create_board(3)
        set_relation(board, 0, 0, Direction.RIGHT, Relation.LESS_THAN)
        assert board.cell(0, 0).relations[Direction.RIGHT] is Relation.LESS_THAN
        assert board.cell(0, 1).relations[Direction.LEFT] is Relation.GREATER_THAN
        validate_board(board)

    def test_relation_off_board(self) -> None:
        board = create_board(3)
        with pytest.raises(InvalidStateError):
            set_relation(board, 0, 0, Direction.UP, Relation.LESS_THAN)

    def test_relation_key_distinguishes_layouts(self) -> None:
        a = create_board(3)
        b = create_board(3)
        set_relation(a, 0, 0, Direction.RIGHT, Relation.LESS_THAN)
        set_relation(b, 0, 0, Direction.DOWN, Relation.LESS_THAN)
        assert a.state_key() == b.state_key()
        assert a.relation_key() != b.relation_key()
        assert create_board(3).relation_key() == ""


class TestValidateBoard:
    def test_not_square(self) -> None:
        board = Board([[Cell() for _ in range(3)] for _ in range(2)] + [[Cell()]])
        with pytest.raises(InvalidStateError):
            validate_board(board)

    def test_unmirrored_relation(self) -> None:
        board = create_board(3)
        board.cell(1, 1).relations[Direction.UP] = Relation.GREATER_THAN
        with pytest.raises(InvalidStateError):
            validate_board(board)

    def test_relation_pointing_off_board(self) -> None:
        board = create_board(3)
        board.cell(0, 0).relations[Direction.LEFT] = Relation.LESS_THAN
        with pytest.raises(InvalidStateError):
            validate_board(board)


    def test_value_out_of_range(self) -> None:
        board = create_board(3)
        board.cell(1, 2).value = 9
        with pytest.raises(InvalidStateError):
            validate_board(board)


class TestCopyAndReset:
    def test_copy_is_independent(self) -> None:
        board = create_board(3)
        set_relation(board, 0, 0, Direction.RIGHT, Relation.LESS_THAN)
        clone = board.copy()
        assert clone == board

        clone.cell(1, 1).value = 2
        clone.cell(0, 1).relations.clear()
        assert board.cell(1, 1).value is None
        assert Direction.LEFT in board.cell(0, 1).relations
        assert clone != board

    def test_reset_keeps_relations(self) -> None:
        board = Board.from_rows(["1 # .", "...", "..."])
        set_relation(board, 2, 0, Direction.RIGHT, Relation.GREATER_THAN)
        board.reset()
        assert board.state_key() == "...|...|..."
        assert board.cell(2, 1).relations[Direction.LEFT] is Relation.LESS_THAN


class TestPresetLevel:
    def test_five_by_five(self) -> None:
        board = preset_level(5)
        validate_board(board)
        assert board.cell(1, 2).blocked
        assert board.cell(0, 0).relations[Direction.RIGHT] is Relation.LESS_THAN
        assert board.cell(3, 3).relations[Direction.UP] is Relation.LESS_THAN
        assert board.cell(3, 2).relations[Direction.RIGHT] is Relation.GREATER_THAN

    def test_small_boards_are_plain(self) -> None:
        board = preset_level(4)
        assert board == create_board(4)
