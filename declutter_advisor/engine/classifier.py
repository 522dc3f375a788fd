"""
Classification entry points.

    classify(answers, profile, settings)              -> ActionType
    classify_with_details(answers, profile, settings) -> ClassificationReport

Both run through ``_evaluate()``, so they can never disagree on the chosen
action for the same inputs.

Settings resolution (per field, independently)
----------------------------------------------
    weights         -> settings.weights          or DEFAULT_WEIGHTS
    thresholds      -> settings.thresholds       or DEFAULT_THRESHOLDS
    strategy_config -> settings.strategy_config  (multipliers applied to weights)

A supplied field replaces its default wholesale. ``settings=None`` behaves
exactly like ``{}``. Nothing here raises on malformed input: bad settings
fields fall back to defaults and unanswered questions contribute zero.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from declutter_advisor.engine.defaults import (
    DEFAULT_STRATEGY_NAME,
    DEFAULT_THRESHOLDS,
    DEFAULT_WEIGHTS,
)
from declutter_advisor.engine.scorer import (
    ScoreBreakdown,
    ScoreVector,
    aggregate_factor_scores,
    apply_profile_adjustments,
    resolve_tie,
    score_margin,
)
from declutter_advisor.engine.strategy import apply_strategy_multipliers
from declutter_advisor.models.item import ItemAnswers, PersonalityProfile
from declutter_advisor.models.settings import EngineSettings
from declutter_advisor.taxonomy.disposition_taxonomy import ALL_ACTIONS, ActionType

logger = logging.getLogger(__name__)

AnswersInput = ItemAnswers | Mapping[str, Any] | None
ProfileInput = PersonalityProfile | Mapping[str, Any] | None
SettingsInput = EngineSettings | Mapping[str, Any] | None


@dataclass
class ClassificationReport:
    """Full-detail result of one classification.

    Attributes:
        recommendation:       Winning action.
        scores:               Final score vector (all six actions).
        breakdown:            Per-factor and per-profile-rule contributions.
        max_score:            Highest score in ``scores``.
        tied_recommendations: Actions sharing ``max_score`` when more than
                              one did, else ``None``.
        strategy_used:        Strategy name, or ``"Default"``.
        score_margin:         ``max_score`` minus the best other score
                              (0 on a tie).
        is_decisive:          ``score_margin >= minimum_score_difference``.
    """

    recommendation:       ActionType
    scores:               ScoreVector
    breakdown:            ScoreBreakdown
    max_score:            float
    tied_recommendations: Optional[list[ActionType]]
    strategy_used:        str
    score_margin:         float
    is_decisive:          bool

    def to_dict(self) -> dict[str, Any]:
        """Render with the camelCase keys used by API clients."""
        return {
            "recommendation":      self.recommendation.value,
            "scores":              {a.value: self.scores[a] for a in ALL_ACTIONS},
            "breakdown":           self.breakdown.to_dict(),
            "maxScore":            self.max_score,
            "tiedRecommendations": (
                [a.value for a in self.tied_recommendations]
                if self.tied_recommendations is not None else None
            ),
            "strategyUsed":        self.strategy_used,
            "scoreMargin":         self.score_margin,
            "isDecisive":          self.is_decisive,
        }


def classify(
    answers:  AnswersInput,
    profile:  ProfileInput = None,
    settings: SettingsInput = None,
) -> ActionType:
    """Return the recommended action for one item.

    Args:
        answers:  Questionnaire answers (model or mapping).
        profile:  Personality profile, or ``None`` to skip profile rules.
        settings: Engine settings, a raw settings mapping, or ``None``.

    Returns:
        One of the six ``ActionType`` values. Always returns a result.
    """
    return _evaluate(answers, profile, settings).recommendation


def classify_with_details(
    answers:  AnswersInput,
    profile:  ProfileInput = None,
    settings: SettingsInput = None,
) -> ClassificationReport:
    """Return the recommendation together with its full score breakdown.

    Same arguments as ``classify()``.
    """
    return _evaluate(answers, profile, settings)


def _evaluate(
    answers:  AnswersInput,
    profile:  ProfileInput,
    settings: SettingsInput,
) -> ClassificationReport:
    item = ItemAnswers.coerce(answers)
    person = PersonalityProfile.coerce(profile)
    resolved = EngineSettings.coerce(settings)

    weights = resolved.weights if resolved.weights is not None else DEFAULT_WEIGHTS
    thresholds = resolved.thresholds if resolved.thresholds is not None else DEFAULT_THRESHOLDS
    strategy = resolved.strategy_config

    if strategy is not None and strategy.multipliers is not None:
        weights = apply_strategy_multipliers(weights, strategy.multipliers)

    scores, breakdown = aggregate_factor_scores(item, weights)
    apply_profile_adjustments(scores, breakdown, person, item)

    winner, top_actions = resolve_tie(scores, thresholds.tie_break_order)
    margin = score_margin(scores, winner)

    report = ClassificationReport(
        recommendation=winner,
        scores=scores,
        breakdown=breakdown,
        max_score=scores[winner],
        tied_recommendations=top_actions if len(top_actions) > 1 else None,
        strategy_used=(strategy.name if strategy and strategy.name else DEFAULT_STRATEGY_NAME),
        score_margin=margin,
        is_decisive=margin >= thresholds.minimum_score_difference,
    )

    logger.debug(
        "Classified %r as %s (max=%s, tied=%s, strategy=%s).",
        item.name,
        report.recommendation.value,
        report.max_score,
        report.tied_recommendations,
        report.strategy_used,
    )
    return report
