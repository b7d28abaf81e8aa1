"""
Mutable board representation for the RuleRift engine.

This module provides a Pydantic-free grid that search code mutates in place
and restores through :class:`MoveUndo` records, avoiding a full board copy
for every candidate move:

- ``Cell``: value, blocked flag and the inequality relations toward its
  four neighbours.
- ``Board``: square matrix of cells plus copy/reset/encoding helpers.
- ``MoveUndo``: the minimal prior state needed to revert one applied move.

Relations are set once at level construction via :func:`set_relation`,
which mirrors them onto the neighbour. Only ``value`` and ``blocked``
change during play.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .errors import InvalidStateError
from .models import Direction, Relation

logger = logging.getLogger(__name__)

MIN_BOARD_SIZE = 3

Coord = Tuple[int, int]

# Fixed neighbour order used everywhere adjacency is walked.
DIRECTIONS: Tuple[Direction, ...] = (
    Direction.RIGHT,
    Direction.LEFT,
    Direction.DOWN,
    Direction.UP,
)


@dataclass(slots=True)
class Cell:
    """One grid position."""

    value: Optional[int] = None
    blocked: bool = False
    relations: Dict[Direction, Relation] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """True for a non-blocked cell with no value yet."""
        return not self.blocked and self.value is None

    @property
    def is_filled(self) -> bool:
        return not self.blocked and self.value is not None


@dataclass(slots=True)
class MoveUndo:
    """Captures the state of one cell before a move touched it."""

    row: int
    col: int
    prev_value: Optional[int]
    prev_blocked: bool


class Board:
    """Square grid of :class:`Cell` objects.

    The board is exclusively owned by whichever decision is running; the
    apply/undo helpers in :mod:`rulerift.moves` rely on that.
    """

    __slots__ = ("cells",)

    def __init__(self, cells: List[List[Cell]]) -> None:
        self.cells = cells

    @classmethod
    def create(cls, size: int) -> "Board":
        return cls([[Cell() for _ in range(size)] for _ in range(size)])

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Board":
        """Build a board from row strings.

        ``.`` is an empty cell, ``#`` a blocked cell and a digit a filled
        cell. Whitespace is ignored so rows may be written ``". 1 . #"``.
        Digits must lie in ``1..len(rows)``.
        """
        n = len(rows)
        cells: List[List[Cell]] = []
        for row in rows:
            parsed: List[Cell] = []
            for ch in row:
                if ch.isspace():
                    continue
                if ch == ".":
                    parsed.append(Cell())
                elif ch == "#":
                    parsed.append(Cell(blocked=True))
                elif ch.isdigit():
                    value = int(ch)
                    if not 1 <= value <= n:
                        raise InvalidStateError(
                            f"Cell value {value} outside 1..{n}",
                            context={"row": row},
                        )
                    parsed.append(Cell(value=value))
                else:
                    raise InvalidStateError(
                        f"Unknown cell marker {ch!r}",
                        context={"row": row},
                    )
            cells.append(parsed)
        return cls(cells)

    @property
    def size(self) -> int:
        return len(self.cells)

    def cell(self, r: int, c: int) -> Cell:
        return self.cells[r][c]

    def in_bounds(self, r: int, c: int) -> bool:
        n = len(self.cells)
        return 0 <= r < n and 0 <= c < n

    def neighbor_coord(
        self, r: int, c: int, direction: Direction
    ) -> Optional[Coord]:
        dr, dc = direction.offset
        nr, nc = r + dr, c + dc
        if self.in_bounds(nr, nc):
            return (nr, nc)
        return None

    def neighbors(self, r: int, c: int) -> Iterator[Coord]:
        """In-bounds orthogonal neighbours of ``(r, c)``, blocked or not."""
        for direction in DIRECTIONS:
            coord = self.neighbor_coord(r, c, direction)
            if coord is not None:
                yield coord

    def coords(self) -> Iterator[Coord]:
        n = len(self.cells)
        for r in range(n):
            for c in range(n):
                yield (r, c)

    def open_coords(self) -> List[Coord]:
        """Coordinates of every non-blocked cell, row-major."""
        return [
            (r, c)
            for r, row in enumerate(self.cells)
            for c, cell in enumerate(row)
            if not cell.blocked
        ]

    def copy(self) -> "Board":
        return Board([
            [
                Cell(
                    value=cell.value,
                    blocked=cell.blocked,
                    relations=dict(cell.relations),
                )
                for cell in row
            ]
            for row in self.cells
        ])

    def reset(self) -> None:
        """Clear every value and block, keeping the relations."""
        for row in self.cells:
            for cell in row:
                cell.value = None
                cell.blocked = False

    def snapshot(self) -> Tuple:
        """Hashable image of the full board, relations included."""
        return tuple(
            tuple(
                (
                    cell.value,
                    cell.blocked,
                    tuple(sorted(
                        (d.value, rel.value)
                        for d, rel in cell.relations.items()
                    )),
                )
                for cell in row
            )
            for row in self.cells
        )

    def state_key(self) -> str:
        """Compact ``B`` / ``.`` / digit encoding of values and blocks."""
        return "|".join(
            "".join(
                "B" if cell.blocked
                else ("." if cell.value is None else str(cell.value))
                for cell in row
            )
            for row in self.cells
        )

    def relation_key(self) -> str:
        """Canonical encoding of every recorded relation."""
        parts = []
        for r, row in enumerate(self.cells):
            for c, cell in enumerate(row):
                for direction in DIRECTIONS:
                    rel = cell.relations.get(direction)
                    if rel is not None:
                        parts.append(f"{r}.{c}{direction.value[0]}{rel.value}")
        return ",".join(parts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.snapshot() == other.snapshot()

    def __str__(self) -> str:
        return "\n".join(self.state_key().split("|"))

    def __repr__(self) -> str:
        return f"Board(size={self.size}, state={self.state_key()!r})"


def create_board(size: int) -> Board:
    """Return an empty ``size`` × ``size`` board."""
    if size < MIN_BOARD_SIZE:
        raise InvalidStateError(
            f"Board side must be at least {MIN_BOARD_SIZE}",
            context={"size": size},
        )
    return Board.create(size)


def set_relation(
    board: Board,
    r: int,
    c: int,
    direction: Direction,
    relation: Relation,
) -> None:
    """Record ``relation`` on ``(r, c)`` toward ``direction`` and mirror it.

    ``set_relation(board, 0, 0, Direction.RIGHT, Relation.LESS_THAN)`` means
    the value at (0,0) must be smaller than the value at (0,1), and (0,1)
    records ``>`` toward the left.
    """
    if not board.in_bounds(r, c):
        raise InvalidStateError(
            "Relation anchored off the board",
            context={"row": r, "col": c},
        )
    neighbor = board.neighbor_coord(r, c, direction)
    if neighbor is None:
        raise InvalidStateError(
            "Relation points off the board",
            context={"row": r, "col": c, "direction": direction.value},
        )
    nr, nc = neighbor
    board.cell(r, c).relations[direction] = relation
    board.cell(nr, nc).relations[direction.opposite] = relation.mirrored()


def validate_board(board: Board) -> None:
    """Fail fast on boards the engine cannot reason about."""
    n = board.size
    if n < MIN_BOARD_SIZE:
        raise InvalidStateError(
            f"Board side must be at least {MIN_BOARD_SIZE}",
            context={"size": n},
        )
    for r, row in enumerate(board.cells):
        if len(row) != n:
            raise InvalidStateError(
                "Board is not square",
                context={"row": r, "width": len(row), "height": n},
            )
        for c, cell in enumerate(row):
            if cell.value is not None and not 1 <= cell.value <= n:
                raise InvalidStateError(
                    f"Cell value {cell.value} outside 1..{n}",
                    context={"row": r, "col": c},
                )
    for r, c in board.coords():
        for direction, relation in board.cell(r, c).relations.items():
            neighbor = board.neighbor_coord(r, c, direction)
            if neighbor is None:
                raise InvalidStateError(
                    "Relation points off the board",
                    context={"row": r, "col": c, "direction": direction.value},
                )
            back = board.cell(*neighbor).relations.get(direction.opposite)
            if back != relation.mirrored():
                raise InvalidStateError(
                    "Relation pair is not mirrored",
                    context={"row": r, "col": c, "direction": direction.value},
                )


def preset_level(size: int) -> Board:
    """Sample level used by the game's default setup.

    Boards of side 5 and up get one pre-blocked cell and four relations;
    smaller boards come back empty.
    """
    board = create_board(size)
    if size < 5:
        return board

    board.cell(1, 2).blocked = True
    set_relation(board, 0, 0, Direction.RIGHT, Relation.LESS_THAN)
    set_relation(board, 2, 3, Direction.DOWN, Relation.GREATER_THAN)
    set_relation(board, 4, 0, Direction.RIGHT, Relation.LESS_THAN)
    set_relation(board, 3, 3, Direction.LEFT, Relation.LESS_THAN)
    logger.debug(f"Built preset level of size {size}")
    return board
