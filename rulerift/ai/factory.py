"""Selector factory for RuleRift.

Single place that maps an :class:`~rulerift.models.AIType` onto a selector
class. The set of strategies is closed; there is no runtime registry.

Usage:
    from rulerift.ai.factory import AIFactory, select_move

    # Create a selector with explicit type and config
    ai = AIFactory.create(AIType.ADVERSARIAL, AIConfig(depth=2))

    # One-shot decision, as a turn loop would call it
    move = select_move(board, SideResources(), AIConfig(ai_type=AIType.QUADRANT))

    # Restrict a greedy decision to the top row
    move = select_move(board, SideResources(), region=lambda r, c: r == 0)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

from ..errors import ConfigurationError
from ..models import AIConfig, AIType, Move, SideResources

if TYPE_CHECKING:
    from ..board import Board
    from .base import BaseAI

logger = logging.getLogger(__name__)


class AIFactory:
    """Factory for creating selector instances."""

    # Cache for imported selector classes (lazy loading)
    _class_cache: dict[AIType, type[BaseAI]] = {}

    @classmethod
    def _get_ai_class(cls, ai_type: AIType) -> type[BaseAI]:
        """Get the selector class for a given type, with lazy loading.

        Raises:
            ConfigurationError: If the type is not one of the built-in
                strategies
        """
        if ai_type in cls._class_cache:
            return cls._class_cache[ai_type]

        if ai_type == AIType.GREEDY:
            from .greedy_ai import GreedyAI
            ai_class = GreedyAI
        elif ai_type == AIType.QUADRANT:
            from .quadrant_ai import QuadrantAI
            ai_class = QuadrantAI
        elif ai_type == AIType.ADVERSARIAL:
            from .adversarial_ai import AdversarialAI
            ai_class = AdversarialAI
        else:
            raise ConfigurationError(
                f"Unsupported AI type: {ai_type}",
                context={"ai_type": str(ai_type)},
            )

        cls._class_cache[ai_type] = ai_class
        return ai_class

    @classmethod
    def create(
        cls,
        ai_type: AIType,
        config: Optional[AIConfig] = None,
    ) -> BaseAI:
        """Create a selector with explicit type and configuration.

        When ``config`` is given its ``ai_type`` is overridden by the
        ``ai_type`` argument so the two can never disagree.
        """
        ai_class = cls._get_ai_class(ai_type)
        if config is None:
            config = AIConfig(ai_type=ai_type)
        elif config.ai_type != ai_type:
            config = config.model_copy(update={"ai_type": ai_type})
        return ai_class(config)

    @classmethod
    def from_config(cls, config: AIConfig) -> BaseAI:
        return cls.create(config.ai_type, config)


def select_move(
    board: Board,
    resources: SideResources,
    config: Optional[AIConfig] = None,
    *,
    region: Optional[Callable[[int, int], bool]] = None,
    depth: Optional[int] = None,
) -> Optional[Move]:
    """Choose a move for the side described by ``resources``.

    This is the entry point a turn loop calls. ``None`` means the side has
    no legal move and has lost.

    ``region`` is forwarded to the greedy and quadrant selectors and
    ``depth`` to the adversarial one.

    Raises:
        ConfigurationError: if ``region`` or ``depth`` is given for a
            selector that does not take it.
    """
    config = config or AIConfig()
    kwargs: dict[str, Any] = {}
    if region is not None:
        if config.ai_type == AIType.ADVERSARIAL:
            raise ConfigurationError(
                "Region filters are not supported by the adversarial selector",
                context={"ai_type": str(config.ai_type)},
            )
        kwargs["region"] = region
    if depth is not None:
        if config.ai_type != AIType.ADVERSARIAL:
            raise ConfigurationError(
                f"Search depth is only supported by {AIType.ADVERSARIAL}",
                context={"ai_type": str(config.ai_type), "depth": depth},
            )
        kwargs["depth"] = depth

    ai = AIFactory.from_config(config)
    move = ai.select_move(board, resources, **kwargs)
    if move is None:
        logger.info(f"{ai!r}: no legal move available")
    return move
