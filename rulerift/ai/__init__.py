"""Move-selection strategies for RuleRift.

The recommended entry point is the factory:

    from rulerift.ai import AIConfig, AIType, select_move

    move = select_move(board, resources, AIConfig(ai_type=AIType.ADVERSARIAL))

For direct access to the selector classes:

    from rulerift.ai import GreedyAI, QuadrantAI, AdversarialAI

Layout:
- base.py: BaseAI abstract base class
- factory.py: AIFactory and the select_move() entry point
- greedy_ai.py: one-ply structural evaluator
- quadrant_ai.py: greedy search per quadrant
- adversarial_ai.py: minimax with alpha-beta and a per-decision memo
- heuristic_weights.py: named weight tables
- move_ordering.py: ranking helpers shared by the selectors
- bounded_transposition_table.py: LRU memo used by the adversarial search
"""

from ..models import AIConfig, AIType
from .adversarial_ai import AdversarialAI, SearchContext
from .base import BaseAI
from .factory import AIFactory, select_move
from .greedy_ai import GreedyAI, greedy_choose
from .quadrant_ai import QuadrantAI, quadrant_filter

__all__ = [
    "AIConfig",
    "AIFactory",
    "AIType",
    "AdversarialAI",
    "BaseAI",
    "GreedyAI",
    "QuadrantAI",
    "SearchContext",
    "greedy_choose",
    "quadrant_filter",
    "select_move",
]
