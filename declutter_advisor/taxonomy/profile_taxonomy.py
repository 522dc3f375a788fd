"""
Personality profile vocabulary.

Users fill in a personality profile once; its answers nudge every
recommendation they receive. Only four attributes affect scoring
(``minimalistLevel``, ``budgetPriority``, ``sentimentalValue``,
``livingSpace``). The rest (``declutterGoal``, ``timeCommitment``, ...) are
stored alongside but carry no scoring rule.

Values not listed here are accepted by the profile model and simply match
no rule.

This module has NO imports from any other ``declutter_advisor`` package.
"""

from enum import StrEnum


class MinimalistLevel(StrEnum):
    EXTREME = "extreme"
    MODERATE = "moderate"
    CASUAL = "casual"
    MAXIMALIST = "maximalist"


class BudgetPriority(StrEnum):
    VERY_IMPORTANT = "very-important"
    SOMEWHAT_IMPORTANT = "somewhat-important"
    NOT_IMPORTANT = "not-important"


class SentimentalValue(StrEnum):
    VERY_SENTIMENTAL = "very-sentimental"
    MODERATELY_SENTIMENTAL = "moderately-sentimental"
    SELECTIVELY_SENTIMENTAL = "selectively-sentimental"
    NOT_SENTIMENTAL = "not-sentimental"


class LivingSpace(StrEnum):
    SMALL_APARTMENT = "small-apartment"
    STUDIO = "studio"
    APARTMENT = "apartment"
    SMALL_HOUSE = "small-house"
    LARGE_HOUSE = "large-house"
    STORAGE = "storage"


# Living spaces treated as cramped by the space rule.
COMPACT_LIVING_SPACES: frozenset[str] = frozenset({
    LivingSpace.SMALL_APARTMENT,
    LivingSpace.STUDIO,
})
