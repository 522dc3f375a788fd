"""
Reasoning text for a chosen recommendation.

Each action has one fixed opening sentence (with the item name interpolated)
followed by conditional sentences gated on specific answers and profile
attributes. Sentences are joined with single spaces in a fixed order.

The action is an input: this module never looks at scores, so it can
explain a recommendation that was computed elsewhere (or overridden by the
user).
"""

from __future__ import annotations

from typing import Any, Mapping

from declutter_advisor.models.item import ItemAnswers, PersonalityProfile
from declutter_advisor.taxonomy.disposition_taxonomy import (
    ActionType,
    ConditionOption,
    ReplaceabilityOption,
    SentimentalOption,
    UsageOption,
    ValueOption,
)
from declutter_advisor.taxonomy.profile_taxonomy import BudgetPriority, MinimalistLevel

DEFAULT_ITEM_NAME = "This item"


def build_reasoning(
    action:  ActionType | str,
    answers: ItemAnswers | Mapping[str, Any] | None,
    profile: PersonalityProfile | Mapping[str, Any] | None = None,
) -> str:
    """Assemble the human-readable justification for ``action``.

    Args:
        action:  Chosen recommendation.
        answers: Questionnaire answers (only ``name`` and the gating fields
                 are read).
        profile: Optional personality profile.

    Returns:
        Space-joined sentences. Empty if ``action`` is not a known action.
    """
    answers = ItemAnswers.coerce(answers)
    profile = PersonalityProfile.coerce(profile)
    item_name = answers.name or DEFAULT_ITEM_NAME
    minimalist_level = profile.minimalist_level if profile else None
    budget_priority = profile.budget_priority if profile else None

    reasons: list[str] = []

    if action == ActionType.KEEP:
        reasons.append(f"{item_name} appears to be something you should keep in your home.")
        if answers.used == UsageOption.YES:
            reasons.append(
                "You use this item regularly, which shows it serves an active "
                "purpose in your life."
            )
        if answers.sentimental == SentimentalOption.HIGH:
            reasons.append("Its strong sentimental value makes it worth holding onto.")
        if minimalist_level == MinimalistLevel.MAXIMALIST:
            reasons.append(
                "Based on your personality profile, you appreciate having variety "
                "and enjoy collecting meaningful items."
            )

    elif action == ActionType.STORAGE:
        reasons.append(f"{item_name} would be best placed in storage.")
        if answers.used in (UsageOption.RARELY, UsageOption.NO):
            reasons.append(
                "You don't use this frequently enough to warrant prime real estate "
                "in your living space."
            )
        if answers.replace == ReplaceabilityOption.DIFFICULT:
            reasons.append(
                "This item would be hard to replace, so it's worth keeping, just "
                "not in your main living areas."
            )

    elif action == ActionType.ACCESSIBLE:
        reasons.append(f"{item_name} should be kept in an easily accessible location.")
        if answers.used == UsageOption.YES:
            reasons.append(
                "You use this item enough that it should be easy to reach when needed."
            )

    elif action == ActionType.SELL:
        reasons.append(f"{item_name} is a good candidate for selling.")
        if answers.value in (ValueOption.HIGH, ValueOption.MEDIUM):
            reasons.append(
                "This item has monetary value that you could recoup through selling."
            )
        if budget_priority == BudgetPriority.VERY_IMPORTANT:
            reasons.append(
                "Based on your profile, recouping money from items is important to you."
            )

    elif action == ActionType.DONATE:
        reasons.append(f"{item_name} would make a wonderful donation.")
        if answers.condition in (ConditionOption.GOOD, ConditionOption.FAIR):
            reasons.append(
                "It's in decent enough condition for someone else to use and appreciate."
            )
        if budget_priority == BudgetPriority.NOT_IMPORTANT:
            reasons.append(
                "Based on your profile, you prefer donating over selling, which is "
                "a generous choice."
            )

    elif action == ActionType.DISCARD:
        reasons.append(f"{item_name} can be discarded.")
        if answers.condition == ConditionOption.POOR:
            reasons.append(
                "Its poor condition means it's not suitable for donation or resale."
            )
        if minimalist_level == MinimalistLevel.EXTREME:
            reasons.append(
                "As someone who values minimalism, letting go of items like this "
                "will help you achieve your goals."
            )

    return " ".join(reasons)

