"""
Scoring strategies: per-factor multipliers and A/B strategy assignment.

apply_strategy_multipliers()
----------------------------
    adjusted[factor][option][action] = round_half_up(score * m(factor) * 10) / 10

where ``m(factor)`` is the strategy's multiplier for that factor, or ``1``
when the strategy does not mention it. Rounding is half-up to one decimal
place (``2.25 -> 2.3``, ``-2.25 -> -2.2``) so that every caller computes
identical tables; Python's built-in ``round()`` rounds half-to-even and is
not used here.

select_strategy()
-----------------
    1. ``override`` key, when given (admin preview).
    2. ``catalog.active``.
    3. If A/B testing is on and ``user_id % 100 >= ab_test_percentage``,
       the user is in group B and gets ``catalog.ab_test_alternate``.
"""

from __future__ import annotations

import logging
import math
from typing import Mapping, Optional

from declutter_advisor.models.settings import StrategyCatalog, StrategyConfig, WeightTable

logger = logging.getLogger(__name__)


def apply_strategy_multipliers(
    weights:     Mapping[str, Mapping[str, Mapping[str, float]]],
    multipliers: Optional[Mapping[str, Optional[float]]],
) -> WeightTable:
    """Return a new weight table scaled by per-factor multipliers.

    The input table is never mutated. Factors missing from ``multipliers``,
    or mapped to ``None``, keep their scores (after one-decimal rounding).
    An explicit ``0`` is honoured.

    Args:
        weights:     Weight table ``factor -> option -> action -> score``.
        multipliers: ``factor -> multiplier``; ``None`` or empty means all ``1``.

    Returns:
        A freshly allocated weight table.
    """
    multipliers = multipliers or {}
    adjusted: WeightTable = {}

    for factor, options in weights.items():
        multiplier = multipliers.get(factor)
        if multiplier is None:
            multiplier = 1
        adjusted[factor] = {}
        for option, scores in options.items():
            adjusted[factor][option] = {
                action: _round_tenth(score * multiplier * 10)
                for action, score in scores.items()
            }

    return adjusted


def select_strategy(
    catalog:  StrategyCatalog,
    user_id:  Optional[int] = None,
    override: Optional[str] = None,
) -> tuple[str, Optional[StrategyConfig]]:
    """Pick the strategy a user should be scored with.

    Args:
        catalog:  Stored strategy catalog.
        user_id:  Numeric user id used for A/B group assignment.
        override: Strategy key forced by the caller; skips A/B assignment.

    Returns:
        ``(strategy_key, config)``. ``config`` is ``None`` when the key is not
        present in ``catalog.strategies``.
    """
    if override:
        key = override
    else:
        key = catalog.active or "balanced"
        if (
            catalog.ab_test_enabled
            and catalog.ab_test_percentage
            and user_id is not None
            and user_id % 100 >= catalog.ab_test_percentage
        ):
            key = catalog.ab_test_alternate or key
            logger.debug("User %s assigned to A/B group B (strategy '%s').", user_id, key)

    config = catalog.strategies.get(key)
    if config is None:
        logger.warning("Strategy '%s' not found in catalog; scoring without multipliers.", key)
    return key, config


# ── Helper ────────────────────────────────────────────────────────────────────

def _round_tenth(scaled: float) -> float:
    return math.floor(scaled + 0.5) / 10
