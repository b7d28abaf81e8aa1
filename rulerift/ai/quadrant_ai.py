"""Quadrant (divide and conquer) AI implementation for RuleRift.

Splits the board into four axis-aligned quadrants at ``mid = N // 2``, asks
the greedy selector for the best move strictly inside each one, and plays
the best of those four by a cheap rating (type bias plus a small centre
term). This spreads play across the grid instead of letting the global
greedy pass settle into one corner.

Boards smaller than :data:`MIN_PARTITION_SIZE` skip partitioning, and if no
quadrant yields a move the selector falls back to an unrestricted greedy
pass.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from ..board import Board
from ..models import AIConfig, AIType, Move, SideResources
from .base import BaseAI
from .greedy_ai import GreedyAI
from .heuristic_weights import QUADRANT_WEIGHTS
from .move_ordering import center_distance

logger = logging.getLogger(__name__)

MIN_PARTITION_SIZE = 4

QUADRANT_COUNT = 4


def quadrant_filter(n: int, index: int) -> Callable[[int, int], bool]:
    """Region predicate for quadrant ``index`` of an ``n`` × ``n`` board.

    Index bit 1 selects the bottom half and bit 0 the right half:
    0 top-left, 1 top-right, 2 bottom-left, 3 bottom-right.
    """
    mid = n // 2
    r_min, r_max = (mid, n) if index & 2 else (0, mid)
    c_min, c_max = (mid, n) if index & 1 else (0, mid)

    def _in_quadrant(r: int, c: int) -> bool:
        return r_min <= r < r_max and c_min <= c < c_max

    return _in_quadrant


class QuadrantAI(BaseAI):
    """Greedy search run per quadrant, best quadrant wins."""

    ai_type = AIType.QUADRANT

    WEIGHT_PLACE_BIAS = QUADRANT_WEIGHTS["WEIGHT_PLACE_BIAS"]
    WEIGHT_BLOCK_BIAS = QUADRANT_WEIGHTS["WEIGHT_BLOCK_BIAS"]
    WEIGHT_CENTER_DISTANCE = QUADRANT_WEIGHTS["WEIGHT_CENTER_DISTANCE"]

    def __init__(self, config: Optional[AIConfig] = None) -> None:
        super().__init__(config)
        self.greedy = GreedyAI(self.config)

    def select_move(
        self,
        board: Board,
        resources: SideResources,
        region: Optional[Callable[[int, int], bool]] = None,
    ) -> Optional[Move]:
        """Return the best per-quadrant greedy move, or ``None``.

        ``region`` further restricts every quadrant (and the fallback) when
        given. One call counts as one decision in ``move_count``; the inner
        greedy passes do not touch ``self.greedy.move_count``.
        """
        self.check_board(board)
        n = board.size
        if n < MIN_PARTITION_SIZE:
            self.move_count += 1
            return self.greedy.best_move(board, resources, region)

        rated: List[Tuple[float, int, Move]] = []
        for index in range(QUADRANT_COUNT):
            in_quadrant = quadrant_filter(n, index)
            if region is not None:
                in_quadrant = _both(in_quadrant, region)
            move = self.greedy.best_move(board, resources, in_quadrant)
            if move is not None:
                rated.append((self.rate_candidate(move, n), index, move))

        if rated:
            # Highest rating wins; earlier quadrant on equal ratings
            score, index, best = max(rated, key=lambda t: (t[0], -t[1]))
            logger.debug(
                f"QuadrantAI: chose {best} from quadrant {index} "
                f"(rating={score:.3f})"
            )
            self.move_count += 1
            return best

        logger.debug("QuadrantAI: no quadrant produced a move, using global greedy")
        self.move_count += 1
        return self.greedy.best_move(board, resources, region)

    def rate_candidate(self, move: Move, n: int) -> float:
        """Type bias minus a small penalty for distance from the centre."""
        score = self.WEIGHT_PLACE_BIAS if move.is_place else self.WEIGHT_BLOCK_BIAS
        score -= center_distance(move.row, move.col, n) * self.WEIGHT_CENTER_DISTANCE
        return score

    def evaluate_position(
        self, board: Board, resources: SideResources
    ) -> float:
        return self.greedy.evaluate_position(board, resources)


def _both(
    first: Callable[[int, int], bool],
    second: Callable[[int, int], bool],
) -> Callable[[int, int], bool]:
    return lambda r, c: first(r, c) and second(r, c)
