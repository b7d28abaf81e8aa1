"""
Move ordering heuristics for the RuleRift selectors.

Good ordering lets alpha-beta cut earlier and lets the greedy selector
truncate a long candidate list without dropping the obvious moves.

The module provides:
- `MoveTypePriority` - Priority values for move types
- `center_distance()` - Manhattan distance from the board centre
- `order_by_center()` - Place-before-block, then centre proximity
- `order_for_search()` - Place-before-block, then value, then position

Usage Example:
```python
from rulerift.ai.move_ordering import order_for_search

ordered = order_for_search(moves)[:branch_limit]
```
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models import Move


class MoveTypePriority(IntEnum):
    """Priority values for the two move types.

    Higher values are searched first. Placing a number makes progress and
    keeps the scarce block token in hand, so it always comes first.
    """

    PLACE = 1
    BLOCK = 0


def type_priority(move: Move) -> int:
    return MoveTypePriority.PLACE if move.is_place else MoveTypePriority.BLOCK


def center_distance(row: int, col: int, size: int) -> float:
    """Manhattan distance from ``(row, col)`` to the centre of the board."""
    center = (size - 1) / 2
    return abs(row - center) + abs(col - center)


def order_by_center(moves: list[Move], size: int) -> list[Move]:
    """Order moves place-before-block, then nearest the centre first.

    Ties keep their incoming order.
    """
    return sorted(
        moves,
        key=lambda m: (-type_priority(m), center_distance(m.row, m.col, size)),
    )


def order_for_search(moves: list[Move]) -> list[Move]:
    """Deterministic ordering for alpha-beta search.

    Moves are ordered as:
    1. Place moves before block moves
    2. Higher placed values first (large values settle inequalities)
    3. Row, then column, ascending

    The last key makes the order total, so search results never depend on
    the order the generator happened to emit.
    """
    return sorted(
        moves,
        key=lambda m: (
            -type_priority(m),
            -(m.value or 0),
            m.row,
            m.col,
        ),
    )
