"""
Constraint engine for RuleRift.

Legality predicates shared by the move generator, the selectors and any
host turn loop:

- :func:`can_place_number` - Latin-square uniqueness plus inequality
  relations toward filled neighbours.
- :func:`can_place_block` - empty target, no blocked orthogonal neighbour,
  and the open region must stay in one piece.
- :func:`region_connected` - flood fill over the non-blocked cells.
- :func:`is_complete` - every open cell filled and re-validated.
- :func:`game_status` - completion first, then exhaustion.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import AbstractSet, List, Optional, Set

from .board import Board, Coord
from .models import GameStatus, SideResources

logger = logging.getLogger(__name__)


def _used_values(board: Board, r: int, c: int) -> Set[int]:
    """Values held by other non-blocked cells in row ``r`` and column ``c``."""
    cells = board.cells
    used: Set[int] = set()
    for i in range(len(cells)):
        if i != c:
            other = cells[r][i]
            if not other.blocked and other.value is not None:
                used.add(other.value)
        if i != r:
            other = cells[i][c]
            if not other.blocked and other.value is not None:
                used.add(other.value)
    return used


def _relations_hold(board: Board, r: int, c: int, value: int) -> bool:
    cells = board.cells
    n = len(cells)
    for direction, relation in cells[r][c].relations.items():
        dr, dc = direction.offset
        nr, nc = r + dr, c + dc
        if not (0 <= nr < n and 0 <= nc < n):
            continue
        neighbor = cells[nr][nc]
        # Checked only once both endpoints are filled
        if neighbor.blocked or neighbor.value is None:
            continue
        if not relation.holds(value, neighbor.value):
            return False
    return True


def can_place_number(
    board: Board,
    r: int,
    c: int,
    value: int,
    revalidate: bool = False,
) -> bool:
    """Return True if ``value`` may be written into ``(r, c)``.

    With ``revalidate=True`` the cell's current value is ignored, so an
    already-filled cell can be re-checked against its row, column and
    neighbours; :func:`is_complete` uses this.
    """
    cell = board.cells[r][c]
    if cell.blocked:
        return False
    if not revalidate and cell.value is not None:
        return False
    if value < 1 or value > len(board.cells):
        return False
    if value in _used_values(board, r, c):
        return False
    return _relations_hold(board, r, c, value)


def valid_numbers(board: Board, r: int, c: int) -> List[int]:
    """All values that :func:`can_place_number` accepts for ``(r, c)``."""
    cell = board.cells[r][c]
    if cell.blocked or cell.value is not None:
        return []
    used = _used_values(board, r, c)
    return [
        v for v in range(1, len(board.cells) + 1)
        if v not in used and _relations_hold(board, r, c, v)
    ]


def region_connected(board: Board) -> bool:
    """True iff every non-blocked cell is reachable from every other."""
    cells = board.cells
    n = len(cells)
    open_count = 0
    start: Optional[Coord] = None
    for r in range(n):
        for c in range(n):
            if not cells[r][c].blocked:
                open_count += 1
                if start is None:
                    start = (r, c)

    if start is None:
        return True

    seen = {start}
    queue = deque([start])
    while queue:
        r, c = queue.popleft()
        for nr, nc in ((r, c + 1), (r, c - 1), (r + 1, c), (r - 1, c)):
            if (
                0 <= nr < n
                and 0 <= nc < n
                and not cells[nr][nc].blocked
                and (nr, nc) not in seen
            ):
                seen.add((nr, nc))
                queue.append((nr, nc))

    return len(seen) == open_count


def can_place_block(
    board: Board,
    r: int,
    c: int,
    articulation: Optional[AbstractSet[Coord]] = None,
) -> bool:
    """Return True if ``(r, c)`` may be blocked.

    Args:
        board: Board to check. It is toggled and restored when no
            articulation set is supplied.
        r, c: Target cell.
        articulation: Cut vertices of the current open region, as returned
            by :func:`rulerift.graph.articulation_points`. When given, a cell
            is safe to block iff it is not a cut vertex, and no flood fill
            runs. The set must describe ``board`` as it is now.
    """
    cells = board.cells
    cell = cells[r][c]
    if cell.blocked or cell.value is not None:
        return False

    for nr, nc in board.neighbors(r, c):
        if cells[nr][nc].blocked:
            return False

    if articulation is not None:
        return (r, c) not in articulation

    cell.blocked = True
    try:
        return region_connected(board)
    finally:
        cell.blocked = False


def is_complete(board: Board) -> bool:
    """True iff every open cell is filled and every value re-validates."""
    for r, row in enumerate(board.cells):
        for c, cell in enumerate(row):
            if cell.blocked:
                continue
            if cell.value is None:
                return False
            if not can_place_number(board, r, c, cell.value, revalidate=True):
                return False
    return True


def has_legal_move(board: Board, has_block: bool) -> bool:
    """True if the side to move has at least one legal move.

    Stops at the first legal move instead of enumerating them all.
    """
    for r, row in enumerate(board.cells):
        for c, cell in enumerate(row):
            if not cell.is_empty:
                continue
            if valid_numbers(board, r, c):
                return True
            if has_block and can_place_block(board, r, c):
                return True
    return False


def game_status(board: Board, resources: SideResources) -> GameStatus:
    """Classify ``board`` for the side about to move.

    Completion is checked before exhaustion: a complete board is reported
    as ``COMPLETE`` even though nobody can move on it.
    """
    if is_complete(board):
        return GameStatus.COMPLETE
    if not has_legal_move(board, resources.has_block):
        logger.debug("Side to move has no legal moves")
        return GameStatus.NO_MOVES
    return GameStatus.ACTIVE
