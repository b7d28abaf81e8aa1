"""Heuristic weight profiles for the RuleRift selectors.

Single source of truth for the scalar weights used by the greedy,
quadrant and adversarial selectors. Keys mirror the ``WEIGHT_*`` attribute
names on the selector classes, so the class attributes read straight
from these tables.
"""

from __future__ import annotations

HeuristicWeights = dict[str, float]


# --- Greedy one-ply structural evaluator ------------------------------------
#
# Fragmentation dominates: a block that splits the open region costs far
# more than any positional bonus can recover. Chokepoint changes are a
# light nudge on top of the domain term.

GREEDY_WEIGHTS: HeuristicWeights = {
    "WEIGHT_DOMAIN": 1.0,
    "WEIGHT_NEW_FRAGMENT_PENALTY": 60.0,
    "WEIGHT_MERGED_FRAGMENT_BONUS": 30.0,
    "WEIGHT_NEW_CHOKEPOINT_PENALTY": 6.0,
    "WEIGHT_REMOVED_CHOKEPOINT_BONUS": 8.0,
    "WEIGHT_NO_CHOKEPOINT_BONUS": 6.0,
    "WEIGHT_PLACE_BIAS": 20.0,
    "WEIGHT_BLOCK_BIAS": 2.0,
    "WEIGHT_CENTER_RADIUS": 6.0,
    "WEIGHT_LOCAL_DEGREE": 0.7,
    "WEIGHT_LOCAL_DEGREE_CAP": 4.0,
    "WEIGHT_TIE_JITTER": 1e-6,
}


# --- Quadrant candidate rating ----------------------------------------------
#
# Only rates the per-quadrant winners against each other; the structural
# work has already been done by the greedy pass inside each quadrant.

QUADRANT_WEIGHTS: HeuristicWeights = {
    "WEIGHT_PLACE_BIAS": 10.0,
    "WEIGHT_BLOCK_BIAS": 3.0,
    "WEIGHT_CENTER_DISTANCE": 0.05,
}


# --- Adversarial static evaluator -------------------------------------------
#
# LOSS_SCORE must dwarf anything the static terms can produce so that a
# forced loss is never traded for material.

ADVERSARIAL_WEIGHTS: HeuristicWeights = {
    "WEIGHT_FILLED_CELL": 5.0,
    "WEIGHT_MOBILITY": 2.0,
    "WEIGHT_BLOCK_TOKEN": 10.0,
    "WEIGHT_LOSS_SCORE": 10000.0,
}


HEURISTIC_WEIGHT_PROFILES: dict[str, HeuristicWeights] = {
    "greedy": GREEDY_WEIGHTS,
    "quadrant": QUADRANT_WEIGHTS,
    "adversarial": ADVERSARIAL_WEIGHTS,
}


def get_weights(profile_id: str) -> HeuristicWeights:
    """Return a copy of the named profile.

    Raises:
        KeyError: if ``profile_id`` is unknown.
    """
    return dict(HEURISTIC_WEIGHT_PROFILES[profile_id])
