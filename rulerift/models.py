"""
Pydantic models for the RuleRift engine.

Value objects that cross the engine boundary: moves, side resource flags,
selector configuration and the small enums they use. The mutable grid that
search mutates in place lives in :mod:`rulerift.board`.
"""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Relation(str, Enum):
    """Inequality recorded on a cell toward one neighbour."""
    LESS_THAN = "<"
    GREATER_THAN = ">"

    def mirrored(self) -> "Relation":
        """Relation the neighbour records back toward this cell."""
        if self is Relation.LESS_THAN:
            return Relation.GREATER_THAN
        return Relation.LESS_THAN

    def holds(self, value: int, neighbor_value: int) -> bool:
        if self is Relation.LESS_THAN:
            return value < neighbor_value
        return value > neighbor_value


class Direction(str, Enum):
    """Orthogonal direction from a cell to a neighbour."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def offset(self) -> Tuple[int, int]:
        return _OFFSETS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_OFFSETS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class MoveType(str, Enum):
    """Move type enumeration"""
    PLACE = "place"
    BLOCK = "block"


class GameStatus(str, Enum):
    """Outcome of checking a board at the start of a turn."""
    ACTIVE = "active"
    COMPLETE = "complete"
    NO_MOVES = "no_moves"


class AIType(str, Enum):
    """Closed set of move-selection strategies."""
    GREEDY = "greedy"
    QUADRANT = "quadrant"
    ADVERSARIAL = "adversarial"


class Move(BaseModel):
    """Move representation.

    ``Place`` moves carry the value written into ``(row, col)``; ``Block``
    moves carry no value. Moves are immutable and hashable so search code
    can use them as dictionary keys.
    """
    model_config = ConfigDict(frozen=True)

    type: MoveType
    row: int = Field(ge=0)
    col: int = Field(ge=0)
    value: Optional[int] = Field(None, ge=1)

    @model_validator(mode="after")
    def _check_value_matches_type(self) -> "Move":
        if self.type == MoveType.PLACE and self.value is None:
            raise ValueError("place moves need a value")
        if self.type == MoveType.BLOCK and self.value is not None:
            raise ValueError("block moves carry no value")
        return self

    @classmethod
    def place(cls, row: int, col: int, value: int) -> "Move":
        return cls(type=MoveType.PLACE, row=row, col=col, value=value)

    @classmethod
    def block(cls, row: int, col: int) -> "Move":
        return cls(type=MoveType.BLOCK, row=row, col=col)

    @property
    def is_place(self) -> bool:
        return self.type == MoveType.PLACE

    @property
    def is_block(self) -> bool:
        return self.type == MoveType.BLOCK

    @property
    def position(self) -> Tuple[int, int]:
        return (self.row, self.col)

    def __str__(self) -> str:
        if self.is_place:
            return f"place {self.value}@({self.row},{self.col})"
        return f"block@({self.row},{self.col})"


class SideResources(BaseModel):
    """Block-token availability, seen from the side about to move.

    Each side owns at most one block token, consumed the first time it
    plays a ``Block`` move. The flags travel alongside the board rather
    than inside it.
    """
    model_config = ConfigDict(frozen=True)

    has_block: bool = True
    opponent_has_block: bool = True

    def after(self, move: Move) -> "SideResources":
        """Flags for the same side once it has played ``move``."""
        if move.is_block and self.has_block:
            return SideResources(
                has_block=False,
                opponent_has_block=self.opponent_has_block,
            )
        return self

    def swapped(self) -> "SideResources":
        """The same flags seen from the opponent's seat."""
        return SideResources(
            has_block=self.opponent_has_block,
            opponent_has_block=self.has_block,
        )


class AIConfig(BaseModel):
    """Selector configuration.

    Fields left as ``None`` fall back to the module defaults of the chosen
    selector, which in turn read ``RULERIFT_*`` environment variables.
    """
    model_config = ConfigDict(frozen=True)

    ai_type: AIType = AIType.GREEDY
    depth: Optional[int] = Field(None, ge=1)
    branch_limit: Optional[int] = Field(None, ge=1)
    candidate_cap: Optional[int] = Field(None, ge=1)
    memo_max_entries: Optional[int] = Field(None, ge=1)
    rng_seed: Optional[int] = None
