"""
Move generation and application for RuleRift.

Generation walks the grid once, emitting a ``Place`` move for every legal
value of every empty cell and, when the side still owns its block token, a
``Block`` move for every cell the constraint engine accepts. Block legality
uses the articulation set of the current position as a fast path, computed
once per call instead of one flood fill per cell.

Application comes in two flavours:

- :func:`apply_move` / :func:`undo_move` (and the :func:`applied` context
  manager) mutate the board for hypothetical search and restore it exactly.
- :func:`play_move` validates and permanently applies a real move, returning
  the updated side resources.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import AbstractSet, Iterator, List, Optional

from .board import Board, Coord, MoveUndo
from .errors import InvalidMoveError
from .graph import articulation_points, build_graph
from .models import Move, MoveType, SideResources
from .rules import can_place_block, can_place_number, region_connected, valid_numbers

logger = logging.getLogger(__name__)


def block_fast_path(board: Board) -> Optional[AbstractSet[Coord]]:
    """Articulation set usable by :func:`can_place_block`, if valid.

    The cut-vertex shortcut is only equivalent to a flood fill while the
    open region is a single component, so ``None`` is returned otherwise.
    """
    if not region_connected(board):
        return None
    return articulation_points(build_graph(board))


def get_legal_moves(
    board: Board,
    has_block: bool,
    articulation: Optional[AbstractSet[Coord]] = None,
) -> List[Move]:
    """Generate all legal moves for the side to move.

    Args:
        board: Current board.
        has_block: Whether the side still owns its block token.
        articulation: Precomputed cut vertices of ``board``; computed here
            when blocks are possible and none is supplied.

    Returns:
        Legal moves in board order. Callers must not rely on the order;
        use :func:`get_sorted_legal_moves` for a ranked list.
    """
    if has_block and articulation is None:
        articulation = block_fast_path(board)

    moves: List[Move] = []
    for r, row in enumerate(board.cells):
        for c, cell in enumerate(row):
            if not cell.is_empty:
                continue
            for value in valid_numbers(board, r, c):
                moves.append(Move.place(r, c, value))
            if has_block and can_place_block(board, r, c, articulation):
                moves.append(Move.block(r, c))
    return moves


def get_sorted_legal_moves(
    board: Board,
    has_block: bool,
    articulation: Optional[AbstractSet[Coord]] = None,
) -> List[Move]:
    """Legal moves with every ``Place`` ahead of every ``Block``."""
    moves = get_legal_moves(board, has_block, articulation)
    moves.sort(key=lambda m: 0 if m.is_place else 1)
    return moves


def is_legal(board: Board, move: Move, has_block: bool) -> bool:
    """Legality predicate for ``move`` by type."""
    if not board.in_bounds(move.row, move.col):
        return False
    if move.type == MoveType.PLACE:
        return can_place_number(board, move.row, move.col, move.value)
    return has_block and can_place_block(board, move.row, move.col)


def apply_move(board: Board, move: Move) -> MoveUndo:
    """Mutate ``board`` with ``move`` and return what is needed to revert it.

    No legality check happens here; search only applies generated moves.
    """
    cell = board.cells[move.row][move.col]
    undo = MoveUndo(
        row=move.row,
        col=move.col,
        prev_value=cell.value,
        prev_blocked=cell.blocked,
    )
    if move.type == MoveType.PLACE:
        cell.value = move.value
    else:
        cell.blocked = True
    return undo


def undo_move(board: Board, undo: MoveUndo) -> None:
    cell = board.cells[undo.row][undo.col]
    cell.value = undo.prev_value
    cell.blocked = undo.prev_blocked


@contextmanager
def applied(board: Board, move: Move) -> Iterator[Board]:
    """Apply ``move`` for the duration of the block, then revert it.

    The revert runs on every exit path, including early ``break``/``return``
    from the caller's loop and exceptions.
    """
    undo = apply_move(board, move)
    try:
        yield board
    finally:
        undo_move(board, undo)


def play_move(
    board: Board,
    move: Move,
    resources: SideResources,
) -> SideResources:
    """Validate and permanently apply ``move`` for the side to move.

    Returns:
        The acting side's resources after the move (a block consumes the
        token).

    Raises:
        InvalidMoveError: if ``move`` is not legal for ``board`` and
            ``resources``.
    """
    if not is_legal(board, move, resources.has_block):
        raise InvalidMoveError(
            "Move is not legal on this board",
            move=str(move),
            context={"has_block": resources.has_block},
        )
    apply_move(board, move)
    logger.debug(f"Played {move}")
    return resources.after(move)
