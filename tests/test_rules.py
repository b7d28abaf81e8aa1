"""Tests for the constraint engine."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from rulerift.board import create_board, set_relation
from rulerift.graph import articulation_points, build_graph
from rulerift.models import Direction, GameStatus, Relation, SideResources
from rulerift.rules import (
    can_place_block,
    can_place_number,
    game_status,
    has_legal_move,
    is_complete,
    region_connected,
    valid_numbers,
)


class TestCanPlaceNumber:
    def test_row_and_column_uniqueness(self, make_board) -> None:
        board = make_board("1 . .", ". . .", ". 2 .")
        assert not can_place_number(board, 0, 1, 1)
        assert not can_place_number(board, 0, 1, 2)
        assert can_place_number(board, 0, 1, 3)

    def test_range(self) -> None:
        board = create_board(3)
        assert not can_place_number(board, 0, 0, 0)
        assert not can_place_number(board, 0, 0, 4)

    def test_filled_or_blocked_target(self, make_board) -> None:
        board = make_board("1 # .", "...", "...")
        assert not can_place_number(board, 0, 0, 2)
        assert not can_place_number(board, 0, 1, 2)

    def test_blocked_cells_do_not_count_toward_uniqueness(self, make_board) -> None:
        board = make_board("# . .", "...", "...")
        board.cell(0, 0).value = 2
        assert can_place_number(board, 0, 1, 2)

    def test_relation_checked_against_filled_neighbour(self) -> None:
        board = create_board(4)
        set_relation(board, 0, 0, Direction.RIGHT, Relation.LESS_THAN)
        # Empty neighbour: relation not yet enforced
        assert valid_numbers(board, 0, 0) == [1, 2, 3, 4]

        board.cell(0, 1).value = 2
        assert valid_numbers(board, 0, 0) == [1]

    def test_relation_ignored_when_neighbour_blocked(self) -> None:
        board = create_board(3)
        set_relation(board, 1, 1, Direction.DOWN, Relation.GREATER_THAN)
        board.cell(2, 1).value = 3
        board.cell(2, 1).blocked = True
        assert can_place_number(board, 1, 1, 1)

    def test_revalidate_filled_cell(self, make_board) -> None:
        board = make_board("1 1 .", "...", "...")
        assert not can_place_number(board, 0, 0, 1, revalidate=True)
        assert can_place_number(board, 0, 0, 2, revalidate=True)


class TestCanPlaceBlock:
    def test_empty_corner_and_centre(self) -> None:
        board = create_board(3)
        assert can_place_block(board, 0, 0)
        assert can_place_block(board, 1, 1)

    def test_filled_cell(self, make_board) -> None:
        board = make_board("1 . .", "...", "...")
        assert not can_place_block(board, 0, 0)

    def test_blocked_neighbour(self, make_board) -> None:
        board = make_board("# . .", "...", "...")
        assert not can_place_block(board, 0, 1)
        assert not can_place_block(board, 1, 0)
        assert can_place_block(board, 1, 1)

    def test_corridor_middle_rejected(self, corridor_board) -> None:
        assert not can_place_block(corridor_board, 2, 2)
        assert (2, 2) in articulation_points(build_graph(corridor_board))

    def test_rejected_by_connectivity_alone(self, hub_board) -> None:
        assert not any(
            hub_board.cell(r, c).blocked for r, c in hub_board.neighbors(2, 2)
        )
        assert not can_place_block(hub_board, 2, 2)
        articulation = articulation_points(build_graph(hub_board))
        assert (2, 2) in articulation
        assert not can_place_block(hub_board, 2, 2, articulation)

    def test_flood_fill_restores_cell(self, hub_board) -> None:
        before = hub_board.snapshot()
        can_place_block(hub_board, 2, 2)
        assert hub_board.snapshot() == before


class TestRegionConnected:
    def test_connected(self, hub_board) -> None:
        assert region_connected(hub_board)

    def test_split(self, make_board) -> None:
        board = make_board(". # .", ". # .", ". # .")
        assert not region_connected(board)

    def test_everything_blocked(self, make_board) -> None:
        assert region_connected(make_board("###", "###", "###"))


class TestGameStatus:
    def test_complete_board(self, complete_board, both_tokens) -> None:
        assert is_complete(complete_board)
        assert game_status(complete_board, both_tokens) is GameStatus.COMPLETE

    def test_full_board_with_violation_is_not_complete(self, make_board) -> None:
        board = make_board("1 2 3", "2 3 1", "3 2 1")
        assert not is_complete(board)

    def test_completion_reported_before_exhaustion(self, complete_board, no_tokens) -> None:
        assert not has_legal_move(complete_board, has_block=False)
        assert game_status(complete_board, no_tokens) is GameStatus.COMPLETE

    def test_no_moves(self, make_board) -> None:
        # Only (0,0) is open and its row and column rule out 1, 2 and 3.
        board = make_board(". 2 3", "1 3 2", "2 1 1")
        assert valid_numbers(board, 0, 0) == []
        status = game_status(board, SideResources(has_block=False))
        assert status is GameStatus.NO_MOVES

    def test_block_token_keeps_side_alive(self, make_board, both_tokens) -> None:
        board = make_board(". 2 3", "1 3 2", "2 1 1")
        assert game_status(board, both_tokens) is GameStatus.ACTIVE

    def test_active(self, empty_board, both_tokens) -> None:
        assert game_status(empty_board, both_tokens) is GameStatus.ACTIVE

    @pytest.mark.parametrize("has_block", [True, False])
    def test_has_legal_move_on_empty_board(self, empty_board, has_block) -> None:
        assert has_legal_move(empty_board, has_block)


def _random_board(rnd, n):
    """Mostly-Latin board with some blocks, stray values and relations.

    Values come from a shuffled cyclic Latin square so that complete boards
    actually occur; a few cells get an arbitrary value instead.
    """
    perm = list(range(1, n + 1))
    rnd.shuffle(perm)
    board = create_board(n)
    for r, c in board.coords():
        cell = board.cell(r, c)
        roll = rnd.random()
        if roll < 0.15:
            cell.blocked = True
        elif roll < 0.25:
            cell.value = rnd.randint(1, n)
        elif roll < 0.3:
            continue
        else:
            cell.value = perm[(r + c) % n]
    for _ in range(rnd.randint(0, 2 * n)):
        r, c = rnd.randrange(n), rnd.randrange(n)
        direction = rnd.choice(list(Direction))
        if board.neighbor_coord(r, c, direction) is None:
            continue
        set_relation(board, r, c, direction, rnd.choice(list(Relation)))
    return board


@given(st.randoms(use_true_random=False), st.integers(min_value=3, max_value=4))
@settings(max_examples=200, deadline=None)
def test_complete_boards_satisfy_every_constraint(rnd, n) -> None:
    board = _random_board(rnd, n)
    if not is_complete(board):
        return
    for i in range(n):
        row = [board.cell(i, c) for c in range(n)]
        col = [board.cell(r, i) for r in range(n)]
        for line in (row, col):
            values = [cell.value for cell in line if not cell.blocked]
            assert None not in values
            assert len(values) == len(set(values))
    for r, c in board.coords():
        cell = board.cell(r, c)
        if cell.blocked:
            continue
        for direction, relation in cell.relations.items():
            nr, nc = board.neighbor_coord(r, c, direction)
            neighbor = board.cell(nr, nc)
            if neighbor.blocked:
                continue
            assert relation.holds(cell.value, neighbor.value)
