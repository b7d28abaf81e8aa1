"""
RuleRift Error Hierarchy

Exceptions raised by the engine when a caller breaks its contract.
All custom exceptions inherit from RuleRiftError for easy catching.

Running out of legal moves is not an error: selectors return ``None`` and
the turn loop decides what that means.

Usage:
    from rulerift.errors import InvalidMoveError

    try:
        resources = play_move(board, move, resources)
    except InvalidMoveError as e:
        logger.warning(f"Rejected move: {e.message}")
"""

from typing import Any

__all__ = [
    "ConfigurationError",
    "InvalidMoveError",
    "InvalidStateError",
    "RuleRiftError",
]


class RuleRiftError(Exception):
    """Base exception for all RuleRift errors.

    Attributes:
        code: Machine-readable error code for categorization
        message: Human-readable error description
        context: Additional context for debugging
    """
    code: str = "RULERIFT_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


class InvalidStateError(RuleRiftError):
    """Malformed board handed to the engine.

    Raised for non-square grids, boards below the minimum size, and
    relation pairs that are not mirrored between neighbours.
    """
    code: str = "INVALID_STATE"


class InvalidMoveError(RuleRiftError):
    """Move that cannot be applied to the current board.

    Raised when a caller asks the engine to play a move that fails the
    legality predicate for its type, including a block by a side whose
    token is already spent.

    Attributes:
        move: Short description of the offending move, if known
    """
    code: str = "INVALID_MOVE"

    def __init__(
        self,
        message: str,
        move: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.move = move
        if move:
            self.context["move"] = move


class ConfigurationError(RuleRiftError):
    """Selector configured with out-of-range parameters.

    Raised for non-positive search depths, branch limits or candidate caps,
    and for strategy names the factory does not know.
    """
    code: str = "CONFIGURATION_ERROR"
