"""
Shared pytest fixtures for the RuleRift tests.

Board fixtures are function-scoped: the engine mutates boards in place, so
every test gets its own copy.
"""

from typing import Callable

import pytest

from rulerift.board import Board, create_board
from rulerift.models import SideResources


# =============================================================================
# BOARD LAYOUTS
# =============================================================================

# Cell (0,0) has no legal value: its row holds 2 and 4, its column 1 and 3.
DEAD_CELL_ROWS = (
    ". 2 . 4",
    "1 . . .",
    "3 . . .",
    ". . . .",
)

# Single-row corridor of open cells; every inner cell is a cut vertex.
CORRIDOR_ROWS = (
    "# # # # #",
    "# # # # #",
    ". . . . .",
    "# # # # #",
    "# # # # #",
)

# Blocking (2,2) is refused by connectivity alone: none of its neighbours
# is blocked, but (1,2) and (3,2) hang off it.
HUB_ROWS = (
    ". . # . .",
    ". # . # .",
    ". . . . .",
    ". # . # .",
    ". . # . .",
)

# One empty cell left; only 3 fits.
ONE_GAP_ROWS = (
    "1 2 .",
    "2 3 1",
    "3 1 2",
)

COMPLETE_ROWS = (
    "1 2 3",
    "2 3 1",
    "3 1 2",
)


@pytest.fixture
def make_board() -> Callable[..., Board]:
    """Factory building a board from row strings."""
    def _make(*rows: str) -> Board:
        return Board.from_rows(rows)
    return _make


@pytest.fixture
def empty_board() -> Board:
    return create_board(4)


@pytest.fixture
def dead_cell_board() -> Board:
    return Board.from_rows(DEAD_CELL_ROWS)


@pytest.fixture
def corridor_board() -> Board:
    return Board.from_rows(CORRIDOR_ROWS)


@pytest.fixture
def hub_board() -> Board:
    return Board.from_rows(HUB_ROWS)


@pytest.fixture
def one_gap_board() -> Board:
    return Board.from_rows(ONE_GAP_ROWS)


@pytest.fixture
def complete_board() -> Board:
    return Board.from_rows(COMPLETE_ROWS)


@pytest.fixture
def both_tokens() -> SideResources:
    return SideResources(has_block=True, opponent_has_block=True)


@pytest.fixture
def no_tokens() -> SideResources:
    return SideResources(has_block=False, opponent_has_block=False)
