"""Adversarial AI implementation for RuleRift.

Depth-limited two-player minimax with alpha-beta pruning, a transposition
memo and deterministic move ordering. The acting side is always the
maximizer; every score means "how good is this for the acting side".

Search details:

- **Mutation with undo.** Candidate moves are applied to the caller's board
  through :func:`rulerift.moves.applied`, which reverts on every exit path,
  including pruning cutoffs. The board is identical before and after a
  call.
- **Per-decision memo.** A :class:`SearchContext` owns the transposition
  table for one top-level call and is discarded afterwards. Keys encode the
  cell values and blocks, the (fixed) relations, the side to move and both
  block tokens.
- **Terminal positions.** A complete board, or a side to move with no legal
  move, is a loss for the side to move. The magnitude is
  ``WEIGHT_LOSS_SCORE`` plus the remaining depth, so a loss further from
  the root is preferred over an immediate one.
- **Leaves.** At depth 0 the static evaluator credits filled cells, the
  mobility difference between the sides, and block tokens in hand.
- **Branch limit.** Only the top ``branch_limit`` moves by
  :func:`rulerift.ai.move_ordering.order_for_search` are explored per
  node. This trades completeness for bounded latency.

Configuration:

- ``RULERIFT_ADVERSARIAL_DEPTH`` (default: 3)
- ``RULERIFT_ADVERSARIAL_BRANCH_LIMIT`` (default: 20)
- ``RULERIFT_MEMO_MAX_ENTRIES`` (default: 200000)
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from ..board import Board
from ..errors import ConfigurationError
from ..models import AIConfig, AIType, Move, SideResources
from ..moves import applied, block_fast_path, get_legal_moves
from ..rules import is_complete
from .base import BaseAI
from .bounded_transposition_table import (
    Bound,
    BoundedTranspositionTable,
    MemoEntry,
)
from .heuristic_weights import ADVERSARIAL_WEIGHTS
from .move_ordering import order_for_search

logger = logging.getLogger(__name__)

ADVERSARIAL_DEPTH = int(os.getenv('RULERIFT_ADVERSARIAL_DEPTH', '3'))
ADVERSARIAL_BRANCH_LIMIT = int(
    os.getenv('RULERIFT_ADVERSARIAL_BRANCH_LIMIT', '20')
)
MEMO_MAX_ENTRIES = int(os.getenv('RULERIFT_MEMO_MAX_ENTRIES', '200000'))


@dataclass
class SearchContext:
    """State owned by exactly one top-level decision."""

    board: Board
    horizon: int
    memo: BoundedTranspositionTable
    relation_key: str = ""
    nodes_visited: int = 0
    cutoffs: int = 0

    def key(self, maximizing: bool, max_block: bool, min_block: bool) -> str:
        return (
            f"{self.board.state_key()}#{self.relation_key}"
            f"#{'X' if maximizing else 'N'}{int(max_block)}{int(min_block)}"
        )


class AdversarialAI(BaseAI):
    """Minimax with alpha-beta pruning over a fixed horizon."""

    ai_type = AIType.ADVERSARIAL

    WEIGHT_FILLED_CELL = ADVERSARIAL_WEIGHTS["WEIGHT_FILLED_CELL"]
    WEIGHT_MOBILITY = ADVERSARIAL_WEIGHTS["WEIGHT_MOBILITY"]
    WEIGHT_BLOCK_TOKEN = ADVERSARIAL_WEIGHTS["WEIGHT_BLOCK_TOKEN"]
    WEIGHT_LOSS_SCORE = ADVERSARIAL_WEIGHTS["WEIGHT_LOSS_SCORE"]

    def __init__(self, config: Optional[AIConfig] = None) -> None:
        super().__init__(config)
        self.depth: int = (
            self.config.depth
            if self.config.depth is not None
            else ADVERSARIAL_DEPTH
        )
        self.branch_limit: int = (
            self.config.branch_limit
            if self.config.branch_limit is not None
            else ADVERSARIAL_BRANCH_LIMIT
        )
        self.memo_max_entries: int = (
            self.config.memo_max_entries
            if self.config.memo_max_entries is not None
            else MEMO_MAX_ENTRIES
        )
        if self.depth <= 0 or self.branch_limit <= 0:
            raise ConfigurationError(
                "Search depth and branch limit must be positive",
                context={"depth": self.depth, "branch_limit": self.branch_limit},
            )
        # Diagnostics from the most recent decision
        self.nodes_visited: int = 0
        self.last_score: Optional[float] = None

    def select_move(
        self,
        board: Board,
        resources: SideResources,
        depth: Optional[int] = None,
    ) -> Optional[Move]:
        """Search ``depth`` plies ahead and return the root's best move.

        Args:
            board: Current board; restored before returning.
            resources: Token flags for the acting (maximizing) side and the
                opponent.
            depth: Horizon for this call; defaults to the configured depth.

        Returns:
            The best move found, or ``None`` if the acting side has no legal
            move.

        Raises:
            ConfigurationError: if ``depth`` is not positive.
        """
        horizon = self.depth if depth is None else depth
        if horizon <= 0:
            raise ConfigurationError(
                "Search depth must be positive",
                context={"depth": horizon},
            )
        self.check_board(board)

        ctx = SearchContext(
            board=board,
            horizon=horizon,
            memo=BoundedTranspositionTable(max_entries=self.memo_max_entries),
            relation_key=board.relation_key(),
        )
        score, move = self._alpha_beta(
            ctx,
            horizon,
            -math.inf,
            math.inf,
            True,
            resources.has_block,
            resources.opponent_has_block,
        )

        self.nodes_visited = ctx.nodes_visited
        self.last_score = score if move is not None else None
        logger.debug(
            f"AdversarialAI: chose {move} (score={score}, depth={ctx.horizon}, "
            f"nodes={ctx.nodes_visited}, cutoffs={ctx.cutoffs}, "
            f"memo={ctx.memo.stats()})"
        )
        self.move_count += 1
        return move

    def evaluate_position(
        self, board: Board, resources: SideResources
    ) -> float:
        """Static evaluation with the acting side as maximizer."""
        articulation = block_fast_path(board)
        max_moves = len(get_legal_moves(board, resources.has_block, articulation))
        min_moves = len(
            get_legal_moves(board, resources.opponent_has_block, articulation)
        )
        return self._static_score(
            board,
            max_moves,
            min_moves,
            resources.has_block,
            resources.opponent_has_block,
        )

    def _static_score(
        self,
        board: Board,
        max_moves: int,
        min_moves: int,
        max_block: bool,
        min_block: bool,
    ) -> float:
        filled = sum(
            1 for row in board.cells for cell in row if cell.is_filled
        )
        score = filled * self.WEIGHT_FILLED_CELL
        score += (max_moves - min_moves) * self.WEIGHT_MOBILITY
        if max_block:
            score += self.WEIGHT_BLOCK_TOKEN
        if min_block:
            score -= self.WEIGHT_BLOCK_TOKEN
        return score

    def _loss_for(self, maximizing: bool, depth: int) -> float:
        """Terminal score when the side to move has lost.

        Larger remaining depth means closer to the root, so the loss is
        sharper there.
        """
        magnitude = self.WEIGHT_LOSS_SCORE + depth
        return -magnitude if maximizing else magnitude

    def _alpha_beta(
        self,
        ctx: SearchContext,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
        max_block: bool,
        min_block: bool,
    ) -> Tuple[float, Optional[Move]]:
        ctx.nodes_visited += 1
        board = ctx.board
        key = ctx.key(maximizing, max_block, min_block)

        alpha_orig, beta_orig = alpha, beta
        entry = ctx.memo.get(key)
        if entry is not None and entry.depth >= depth:
            if entry.bound == Bound.EXACT:
                return entry.score, entry.move
            if entry.bound == Bound.LOWER:
                alpha = max(alpha, entry.score)
            elif entry.bound == Bound.UPPER:
                beta = min(beta, entry.score)
            if alpha >= beta:
                return entry.score, entry.move

        if is_complete(board):
            score = self._loss_for(maximizing, depth)
            ctx.memo.put(key, MemoEntry(score, depth, Bound.EXACT))
            return score, None

        to_move_block = max_block if maximizing else min_block
        other_block = min_block if maximizing else max_block
        articulation = (
            block_fast_path(board) if (max_block or min_block) else None
        )
        legal = get_legal_moves(board, to_move_block, articulation)

        if not legal:
            score = self._loss_for(maximizing, depth)
            ctx.memo.put(key, MemoEntry(score, depth, Bound.EXACT))
            return score, None

        if depth == 0:
            other_count = len(get_legal_moves(board, other_block, articulation))
            if maximizing:
                max_moves, min_moves = len(legal), other_count
            else:
                max_moves, min_moves = other_count, len(legal)
            score = self._static_score(
                board, max_moves, min_moves, max_block, min_block
            )
            ctx.memo.put(key, MemoEntry(score, depth, Bound.EXACT))
            return score, None

        branch = order_for_search(legal)[:self.branch_limit]

        best_move: Optional[Move] = None
        if maximizing:
            value = -math.inf
            for move in branch:
                next_block = max_block and not move.is_block
                with applied(board, move):
                    child, _ = self._alpha_beta(
                        ctx, depth - 1, alpha, beta, False,
                        next_block, min_block,
                    )
                if best_move is None or child > value:
                    value = child
                    best_move = move
                alpha = max(alpha, value)
                if beta <= alpha:
                    ctx.cutoffs += 1
                    break
        else:
            value = math.inf
            for move in branch:
                next_block = min_block and not move.is_block
                with applied(board, move):
                    child, _ = self._alpha_beta(
                        ctx, depth - 1, alpha, beta, True,
                        max_block, next_block,
                    )
                if best_move is None or child < value:
                    value = child
                    best_move = move
                beta = min(beta, value)
                if beta <= alpha:
                    ctx.cutoffs += 1
                    break

        if value <= alpha_orig:
            bound = Bound.UPPER
        elif value >= beta_orig:
            bound = Bound.LOWER
        else:
            bound = Bound.EXACT
        ctx.memo.put(key, MemoEntry(value, depth, bound, best_move))
        return value, best_move
