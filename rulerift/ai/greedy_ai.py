"""
Greedy AI implementation for RuleRift.

This selector scores every legal candidate one ply deep with a structural
evaluator and plays the best one. Each candidate is applied to the live
board, scored, and reverted; no board copy is made per candidate.

Score terms (weights in :mod:`rulerift.ai.heuristic_weights`):

- **Domain**: minus the number of legal values left across all empty open
  cells. A move that leaves any empty cell with no legal value is a dead
  end and scores ``-inf`` without computing the other terms.
- **Fragmentation** (block moves only): heavy penalty per extra connected
  component, moderate bonus per component merged away.
- **Chokepoints**: light penalty per new articulation point, a reward per
  removed one, and a flat bonus when none remain.
- **Type bias**: placing a number beats spending the block token.
- **Centre bias**: ``max(0, radius - manhattan distance to centre)``.
- **Local degree**: small bonus per open neighbour of the moved-on cell,
  capped.

Ties are broken by a jitter far smaller than any structural difference.

Configuration:

- ``RULERIFT_GREEDY_CANDIDATE_CAP`` (default: 120)
  When the candidate list is longer, it is pre-sorted place-before-block
  and by centre distance and truncated before full evaluation.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from typing import Callable, FrozenSet, Optional

from ..board import Board, Coord
from ..errors import ConfigurationError
from ..graph import GridGraph, articulation_points, build_graph, count_components
from ..models import AIConfig, AIType, Move, SideResources
from ..moves import applied
from ..rules import valid_numbers
from .base import BaseAI
from .heuristic_weights import GREEDY_WEIGHTS
from .move_ordering import center_distance, order_by_center

logger = logging.getLogger(__name__)

GREEDY_CANDIDATE_CAP = int(os.getenv('RULERIFT_GREEDY_CANDIDATE_CAP', '120'))

RegionFilter = Callable[[int, int], bool]

DEAD_END = -math.inf


@dataclass(slots=True)
class StructureSnapshot:
    """Graph measurements of the position before any candidate is tried.

    Computed once per decision and shared by every candidate, since the
    pre-move board is the same for all of them.
    """

    graph: GridGraph
    articulation: FrozenSet[Coord]
    components: int

    @classmethod
    def of(cls, board: Board) -> "StructureSnapshot":
        graph = build_graph(board)
        return cls(
            graph=graph,
            articulation=articulation_points(graph),
            components=count_components(graph),
        )


def domain_score(board: Board) -> float:
    """Minus the total count of legal values over empty open cells.

    Returns ``-inf`` as soon as one empty cell has no legal value.
    """
    score = 0
    for r, row in enumerate(board.cells):
        for c, cell in enumerate(row):
            if not cell.is_empty:
                continue
            count = len(valid_numbers(board, r, c))
            if count == 0:
                return DEAD_END
            score -= count
    return float(score)


class GreedyAI(BaseAI):
    """One-ply structural evaluator."""

    ai_type = AIType.GREEDY

    WEIGHT_DOMAIN = GREEDY_WEIGHTS["WEIGHT_DOMAIN"]
    WEIGHT_NEW_FRAGMENT_PENALTY = GREEDY_WEIGHTS["WEIGHT_NEW_FRAGMENT_PENALTY"]
    WEIGHT_MERGED_FRAGMENT_BONUS = GREEDY_WEIGHTS["WEIGHT_MERGED_FRAGMENT_BONUS"]
    WEIGHT_NEW_CHOKEPOINT_PENALTY = GREEDY_WEIGHTS["WEIGHT_NEW_CHOKEPOINT_PENALTY"]
    WEIGHT_REMOVED_CHOKEPOINT_BONUS = GREEDY_WEIGHTS["WEIGHT_REMOVED_CHOKEPOINT_BONUS"]
    WEIGHT_NO_CHOKEPOINT_BONUS = GREEDY_WEIGHTS["WEIGHT_NO_CHOKEPOINT_BONUS"]
    WEIGHT_PLACE_BIAS = GREEDY_WEIGHTS["WEIGHT_PLACE_BIAS"]
    WEIGHT_BLOCK_BIAS = GREEDY_WEIGHTS["WEIGHT_BLOCK_BIAS"]
    WEIGHT_CENTER_RADIUS = GREEDY_WEIGHTS["WEIGHT_CENTER_RADIUS"]
    WEIGHT_LOCAL_DEGREE = GREEDY_WEIGHTS["WEIGHT_LOCAL_DEGREE"]
    WEIGHT_LOCAL_DEGREE_CAP = GREEDY_WEIGHTS["WEIGHT_LOCAL_DEGREE_CAP"]
    WEIGHT_TIE_JITTER = GREEDY_WEIGHTS["WEIGHT_TIE_JITTER"]

    def __init__(self, config: Optional[AIConfig] = None) -> None:
        super().__init__(config)
        cap = self.config.candidate_cap
        self.candidate_cap: int = cap if cap is not None else GREEDY_CANDIDATE_CAP
        if self.candidate_cap <= 0:
            raise ConfigurationError(
                "Candidate cap must be positive",
                context={"candidate_cap": self.candidate_cap},
            )

    def select_move(
        self,
        board: Board,
        resources: SideResources,
        region: Optional[RegionFilter] = None,
    ) -> Optional[Move]:
        """Return the best legal move inside ``region``.

        Args:
            board: Current board; restored before returning.
            resources: Token flags; only ``has_block`` matters here.
            region: Optional ``(row, col) -> bool`` predicate restricting
                where the move may land.

        Returns:
            The highest-scoring candidate. When every candidate is a dead
            end the least bad one is still returned; ``None`` only when the
            region holds no legal move at all.
        """
        self.check_board(board)
        move = self.best_move(board, resources, region)
        self.move_count += 1
        return move

    def best_move(
        self,
        board: Board,
        resources: SideResources,
        region: Optional[RegionFilter] = None,
    ) -> Optional[Move]:
        """Search step of :meth:`select_move` without validation or counting.

        Composite selectors call this once per sub-region so that only the
        outer decision shows up in ``move_count``.
        """
        candidates = self.get_valid_moves(board, resources)
        if region is not None:
            candidates = [m for m in candidates if region(m.row, m.col)]
        if not candidates:
            return None

        if len(candidates) > self.candidate_cap:
            candidates = order_by_center(candidates, board.size)
            candidates = candidates[:self.candidate_cap]

        before = StructureSnapshot.of(board)
        best: Optional[Move] = None
        best_score = -math.inf

        for move in candidates:
            score = self._score_move(board, move, before)
            score += self.rng.random() * self.WEIGHT_TIE_JITTER
            if best is None or score > best_score:
                best = move
                best_score = score

        if best_score == DEAD_END:
            logger.debug(
                f"GreedyAI: every candidate is a dead end, playing {best}"
            )
        else:
            logger.debug(f"GreedyAI: chose {best} (score={best_score:.3f})")
        return best

    def evaluate_move(self, board: Board, move: Move) -> float:
        """Structural score of ``move`` on ``board`` (no tie-break jitter)."""
        return self._score_move(board, move, StructureSnapshot.of(board))

    def get_evaluation_breakdown(
        self, board: Board, move: Move
    ) -> dict[str, float]:
        """Per-term scores of ``move``, plus their ``total``."""
        terms = self._score_terms(board, move, StructureSnapshot.of(board))
        terms["total"] = sum(terms.values())
        return terms

    def evaluate_position(
        self, board: Board, resources: SideResources
    ) -> float:
        """Domain pressure of the position plus the no-chokepoint bonus."""
        domain = domain_score(board)
        if domain == DEAD_END:
            return DEAD_END
        score = self.WEIGHT_DOMAIN * domain
        if not articulation_points(build_graph(board)):
            score += self.WEIGHT_NO_CHOKEPOINT_BONUS
        return score

    def _score_move(
        self, board: Board, move: Move, before: StructureSnapshot
    ) -> float:
        return sum(self._score_terms(board, move, before).values())

    def _score_terms(
        self, board: Board, move: Move, before: StructureSnapshot
    ) -> dict[str, float]:
        with applied(board, move):
            domain = domain_score(board)
            if domain == DEAD_END:
                return {"domain": DEAD_END}

            if move.is_block:
                after = StructureSnapshot.of(board)
            else:
                # Placing a number leaves the open-cell graph unchanged
                after = before

        terms: dict[str, float] = {"domain": self.WEIGHT_DOMAIN * domain}

        terms["fragmentation"] = 0.0
        if move.is_block:
            delta = after.components - before.components
            if delta > 0:
                terms["fragmentation"] = -delta * self.WEIGHT_NEW_FRAGMENT_PENALTY
            elif delta < 0:
                terms["fragmentation"] = -delta * self.WEIGHT_MERGED_FRAGMENT_BONUS

        chokepoints = 0.0
        art_delta = len(after.articulation) - len(before.articulation)
        if art_delta > 0:
            chokepoints -= art_delta * self.WEIGHT_NEW_CHOKEPOINT_PENALTY
        elif art_delta < 0:
            chokepoints -= art_delta * self.WEIGHT_REMOVED_CHOKEPOINT_BONUS
        if not after.articulation:
            chokepoints += self.WEIGHT_NO_CHOKEPOINT_BONUS
        terms["chokepoints"] = chokepoints

        terms["type_bias"] = (
            self.WEIGHT_PLACE_BIAS if move.is_place else self.WEIGHT_BLOCK_BIAS
        )

        dist = center_distance(move.row, move.col, board.size)
        terms["center"] = max(0.0, self.WEIGHT_CENTER_RADIUS - dist)

        degree = after.graph.degree(move.position)
        terms["local_degree"] = (
            min(degree, self.WEIGHT_LOCAL_DEGREE_CAP) * self.WEIGHT_LOCAL_DEGREE
        )
        return terms


def greedy_choose(
    board: Board,
    resources: SideResources,
    region: Optional[RegionFilter] = None,
    config: Optional[AIConfig] = None,
) -> Optional[Move]:
    """Convenience wrapper: one greedy decision with a fresh selector."""
    return GreedyAI(config).select_move(board, resources, region)
