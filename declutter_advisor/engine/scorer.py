"""
Recommendation scoring: aggregates questionnaire weights into a score
vector, applies personality-profile adjustments, and resolves the winner.

Score vector
------------
One entry per ``ActionType`` (always all six), zero-initialised, signed.

    scores[action] = sum over factors of weights[factor][answer][action]
                     + profile adjustments

Profile adjustments (all applicable rules fire)
-----------------------------------------------
    minimalist   : minimalistLevel == extreme        -> discard +2, donate +2, keep -1
    maximalist   : minimalistLevel == maximalist     -> keep +2, storage +1
    budget       : budgetPriority == very-important
                   and value answer != low           -> sell +2
    budget       : budgetPriority == not-important   -> donate +2
    sentimental  : sentimentalValue == very-sentimental -> keep +1, storage +1
    space        : livingSpace in {small-apartment, studio} -> storage -1, donate +1

Tie resolution
--------------
    1. Collect every action whose score equals the maximum.
    2. One action -> it wins.
    3. Several -> walk tie_break_order and return the first tied action.

The breakdown records what was added where, for explainability only; it is
never read back by the decision logic.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

from declutter_advisor.models.item import ItemAnswers, PersonalityProfile
from declutter_advisor.models.settings import DEFAULT_TIE_BREAK_ORDER
from declutter_advisor.taxonomy.disposition_taxonomy import (
    ALL_ACTIONS,
    ALL_FACTORS,
    ActionType,
    Factor,
    is_valid_option,
)
from declutter_advisor.taxonomy.profile_taxonomy import (
    COMPACT_LIVING_SPACES,
    BudgetPriority,
    MinimalistLevel,
    SentimentalValue,
)

logger = logging.getLogger(__name__)

ScoreVector = dict[ActionType, float]

_MINIMALIST_DELTAS: dict[ActionType, int] = {
    ActionType.DISCARD: 2, ActionType.DONATE: 2, ActionType.KEEP: -1,
}
_MAXIMALIST_DELTAS: dict[ActionType, int] = {
    ActionType.KEEP: 2, ActionType.STORAGE: 1,
}
_BUDGET_SELL_DELTAS: dict[ActionType, int] = {ActionType.SELL: 2}
_BUDGET_DONATE_DELTAS: dict[ActionType, int] = {ActionType.DONATE: 2}
_SENTIMENTAL_DELTAS: dict[ActionType, int] = {
    ActionType.KEEP: 1, ActionType.STORAGE: 1,
}
_COMPACT_SPACE_DELTAS: dict[ActionType, int] = {
    ActionType.STORAGE: -1, ActionType.DONATE: 1,
}


@dataclass
class ScoreBreakdown:
    """Per-factor and per-profile-rule score contributions.

    Attributes:
        factors: One record per factor: the ``action -> score`` entries applied
                 for the recorded answer. Empty when the factor contributed
                 nothing.
        profile: Profile rule key -> ``action -> delta`` for every rule that fired.
    """

    factors: dict[Factor, dict[str, Any]] = field(
        default_factory=lambda: {factor: {} for factor in ALL_FACTORS}
    )
    profile: dict[str, dict[str, float]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Render as ``{usage: {...}, ..., space: {...}, profile: {...}}``."""
        result: dict[str, dict[str, Any]] = {
            factor.value: dict(self.factors.get(factor, {})) for factor in ALL_FACTORS
        }
        result["profile"] = {rule: dict(deltas) for rule, deltas in self.profile.items()}
        return result


def empty_scores() -> ScoreVector:
    """Return a score vector with every action at zero."""
    return {action: 0 for action in ALL_ACTIONS}


def aggregate_factor_scores(
    answers: ItemAnswers,
    weights: Mapping[str, Mapping[str, Mapping[str, Any]]],
) -> tuple[ScoreVector, ScoreBreakdown]:
    """Sum weight-table entries for every answered factor.

    Unanswered factors, and answers with no table entry, contribute nothing.
    Action keys outside ``ActionType`` are kept in the breakdown but never
    enter the score vector.

    Args:
        answers: Questionnaire answers for one item.
        weights: Weight table (already strategy-adjusted, if applicable).

    Returns:
        ``(scores, breakdown)``, both freshly allocated.
    """
    scores = empty_scores()
    breakdown = ScoreBreakdown()

    for factor in ALL_FACTORS:
        option = answers.option_for(factor)
        if option is None:
            continue

        factor_weights = weights.get(factor.value)
        option_weights = factor_weights.get(option) if factor_weights else None
        if not option_weights:
            if not is_valid_option(factor, option):
                logger.debug("Unknown %s answer %r contributes nothing.", factor.value, option)
            continue

        breakdown.factors[factor] = dict(option_weights)
        for action, score in option_weights.items():
            target = _as_action(action)
            if target is None:
                logger.debug("Ignoring unknown action %r in %s weights.", action, factor.value)
                continue
            scores[target] += score

    return scores, breakdown


def apply_profile_adjustments(
    scores:    ScoreVector,
    breakdown: ScoreBreakdown,
    profile:   Optional[PersonalityProfile],
    answers:   ItemAnswers,
) -> None:
    """Add profile-driven deltas to ``scores`` and record them in ``breakdown``.

    Both arguments belong to the current call; no shared state is touched.
    A ``None`` profile, or a profile missing an attribute, skips those rules.
    """
    if profile is None:
        return

    if profile.minimalist_level == MinimalistLevel.EXTREME:
        _apply(scores, breakdown, "minimalist", _MINIMALIST_DELTAS)
    elif profile.minimalist_level == MinimalistLevel.MAXIMALIST:
        _apply(scores, breakdown, "maximalist", _MAXIMALIST_DELTAS)

    if profile.budget_priority == BudgetPriority.VERY_IMPORTANT and answers.value != "low":
        _apply(scores, breakdown, "budget", _BUDGET_SELL_DELTAS)
    elif profile.budget_priority == BudgetPriority.NOT_IMPORTANT:
        _apply(scores, breakdown, "budget", _BUDGET_DONATE_DELTAS)

    if profile.sentimental_value == SentimentalValue.VERY_SENTIMENTAL:
        _apply(scores, breakdown, "sentimental", _SENTIMENTAL_DELTAS)

    if profile.living_space in COMPACT_LIVING_SPACES:
        _apply(scores, breakdown, "space", _COMPACT_SPACE_DELTAS)


def resolve_tie(
    scores:          ScoreVector,
    tie_break_order: Sequence[ActionType],
) -> tuple[ActionType, list[ActionType]]:
    """Select the winning action.

    Args:
        scores:          Full score vector (all six actions).
        tie_break_order: Priority ranking used when the maximum is shared.

    Returns:
        ``(winner, top_actions)`` where ``top_actions`` lists every action
        holding the maximum score, in ``ActionType`` order.
    """
    max_score = max(scores.values())

    top_actions: list[ActionType] = []
    for action in ALL_ACTIONS:
        if scores[action] == max_score:
            top_actions.append(action)

    if len(top_actions) == 1:
        return top_actions[0], top_actions

    for action in tie_break_order:
        if action in top_actions:
            return ActionType(action), top_actions

    logger.warning(
        "Tie-break order %r does not cover tied actions %r; using default order.",
        list(tie_break_order),
        top_actions,
    )
    for action in DEFAULT_TIE_BREAK_ORDER:
        if action in top_actions:
            return action, top_actions

    return top_actions[0], top_actions


def score_margin(scores: ScoreVector, winner: ActionType) -> float:
    """Winner's score minus the best score among the other actions."""
    runner_up = -math.inf
    for action, score in scores.items():
        if action != winner and score > runner_up:
            runner_up = score
    return scores[winner] - runner_up


# ── Helpers ───────────────────────────────────────────────────────────────────

def _apply(
    scores:    ScoreVector,
    breakdown: ScoreBreakdown,
    rule:      str,
    deltas:    Mapping[ActionType, int],
) -> None:
    for action, delta in deltas.items():
        scores[action] += delta
    breakdown.profile[rule] = {action.value: delta for action, delta in deltas.items()}


def _as_action(key: str) -> Optional[ActionType]:
    try:
        return ActionType(key)
    except ValueError:
        return None
