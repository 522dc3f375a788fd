"""
Batch evaluation: classify many items against one profile and settings.

Usage flow
----------
1. evaluate_items(items, profile, settings)
   -> list[ItemEvaluation]  (one per input item, input order preserved)

2. summarize_evaluations(evaluations)
   -> dict[action, count]    (all six actions, zero-filled)

3. reporter.write_evaluations_csv / write_evaluations_json
   -> files under an output directory
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from declutter_advisor.engine.classifier import (
    ClassificationReport,
    ProfileInput,
    SettingsInput,
    classify_with_details,
)
from declutter_advisor.engine.reasoning import build_reasoning
from declutter_advisor.models.item import ItemAnswers, PersonalityProfile
from declutter_advisor.models.settings import EngineSettings
from declutter_advisor.taxonomy.disposition_taxonomy import ALL_ACTIONS, ActionType


@dataclass
class ItemEvaluation:
    """One evaluated item.

    Attributes:
        answers:   Normalised questionnaire answers.
        report:    Full-detail classification report.
        reasoning: Justification text for ``report.recommendation``.
    """

    answers:   ItemAnswers
    report:    ClassificationReport
    reasoning: str


def evaluate_items(
    items:    Iterable[ItemAnswers | Mapping[str, Any]],
    profile:  ProfileInput = None,
    settings: SettingsInput = None,
) -> list[ItemEvaluation]:
    """Classify and explain every item.

    Profile and settings are normalised once and shared across items; each
    item still gets its own score vector and breakdown.
    """
    person = PersonalityProfile.coerce(profile)
    resolved = EngineSettings.coerce(settings)

    evaluations: list[ItemEvaluation] = []
    for raw in items:
        answers = ItemAnswers.coerce(raw)
        report = classify_with_details(answers, person, resolved)
        evaluations.append(
            ItemEvaluation(
                answers=answers,
                report=report,
                reasoning=build_reasoning(report.recommendation, answers, person),
            )
        )
    return evaluations


def summarize_evaluations(evaluations: Iterable[ItemEvaluation]) -> dict[ActionType, int]:
    """Count recommendations per action (every action present, zero-filled)."""
    counts: dict[ActionType, int] = {action: 0 for action in ALL_ACTIONS}
    for ev in evaluations:
        counts[ev.report.recommendation] += 1
    return counts
