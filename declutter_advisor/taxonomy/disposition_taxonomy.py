"""
Disposition taxonomy for household item evaluation.

Two closed vocabularies drive every recommendation:
  - ``ActionType`` is the *outcome*: what should happen to the item?
  - ``Factor`` is the *question*: which questionnaire dimension scored it?

Each ``Factor`` has its own closed set of answer options (``UsageOption``,
``ConditionOption``, ...). ``FACTOR_OPTIONS`` is the canonical integrity
contract tying the two together:
  - Every ``Factor`` must have an entry.
  - Every option enum member appears under exactly one factor.

``ANSWER_FIELDS`` maps each factor to the user-facing questionnaire field
name (``usage`` is answered in the ``used`` field, ``replaceability`` in
``replace``).

Display labels (``ACTION_LABELS``, ``FACTOR_LABELS``, ``OPTION_LABELS``) are
presentation metadata only; nothing in the engine branches on them.

This module has NO imports from any other ``declutter_advisor`` package.
"""

from enum import StrEnum


class ActionType(StrEnum):
    """Disposition recommended for an item."""

    KEEP = "keep"
    """Keep the item in the home."""

    STORAGE = "storage"
    """Keep the item, but move it out of the main living areas."""

    ACCESSIBLE = "accessible"
    """Keep the item somewhere easy to reach."""

    SELL = "sell"
    """Recoup the item's monetary value."""

    DONATE = "donate"
    """Give the item to someone who will use it."""

    DISCARD = "discard"
    """Throw the item away or recycle it."""


class Factor(StrEnum):
    """Questionnaire dimension contributing to the base score."""

    USAGE = "usage"
    SENTIMENTAL = "sentimental"
    CONDITION = "condition"
    VALUE = "value"
    REPLACEABILITY = "replaceability"
    SPACE = "space"


class UsageOption(StrEnum):
    YES = "yes"
    RARELY = "rarely"
    NO = "no"


class SentimentalOption(StrEnum):
    HIGH = "high"
    SOME = "some"
    NONE = "none"


class ConditionOption(StrEnum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class ValueOption(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ReplaceabilityOption(StrEnum):
    DIFFICULT = "difficult"
    MODERATE = "moderate"
    EASY = "easy"


class SpaceOption(StrEnum):
    YES = "yes"
    LIMITED = "limited"
    NO = "no"


# ── Integrity contracts ───────────────────────────────────────────────────────

ALL_ACTIONS: tuple[ActionType, ...] = tuple(ActionType)

# Fixed processing order for aggregation and breakdown rendering.
ALL_FACTORS: tuple[Factor, ...] = (
    Factor.USAGE,
    Factor.SENTIMENTAL,
    Factor.CONDITION,
    Factor.VALUE,
    Factor.REPLACEABILITY,
    Factor.SPACE,
)

FACTOR_OPTIONS: dict[Factor, type[StrEnum]] = {
    Factor.USAGE:          UsageOption,
    Factor.SENTIMENTAL:    SentimentalOption,
    Factor.CONDITION:      ConditionOption,
    Factor.VALUE:          ValueOption,
    Factor.REPLACEABILITY: ReplaceabilityOption,
    Factor.SPACE:          SpaceOption,
}

ANSWER_FIELDS: dict[Factor, str] = {
    Factor.USAGE:          "used",
    Factor.SENTIMENTAL:    "sentimental",
    Factor.CONDITION:      "condition",
    Factor.VALUE:          "value",
    Factor.REPLACEABILITY: "replace",
    Factor.SPACE:          "space",
}


# ── Display labels ────────────────────────────────────────────────────────────

ACTION_LABELS: dict[ActionType, str] = {
    ActionType.KEEP:       "Keep It",
    ActionType.STORAGE:    "Put in Storage",
    ActionType.ACCESSIBLE: "Keep Accessible",
    ActionType.SELL:       "Sell It",
    ActionType.DONATE:     "Donate It",
    ActionType.DISCARD:    "Discard It",
}

FACTOR_LABELS: dict[Factor, str] = {
    Factor.USAGE:          "Usage Frequency",
    Factor.SENTIMENTAL:    "Sentimental Value",
    Factor.CONDITION:      "Condition",
    Factor.VALUE:          "Monetary Value",
    Factor.REPLACEABILITY: "Replaceability",
    Factor.SPACE:          "Space Availability",
}

OPTION_LABELS: dict[Factor, dict[str, str]] = {
    Factor.USAGE: {
        UsageOption.YES: "Regularly",
        UsageOption.RARELY: "Rarely",
        UsageOption.NO: "Never",
    },
    Factor.SENTIMENTAL: {
        SentimentalOption.HIGH: "High",
        SentimentalOption.SOME: "Some",
        SentimentalOption.NONE: "None",
    },
    Factor.CONDITION: {
        ConditionOption.EXCELLENT: "Excellent",
        ConditionOption.GOOD: "Good",
        ConditionOption.FAIR: "Fair",
        ConditionOption.POOR: "Poor",
    },
    Factor.VALUE: {
        ValueOption.HIGH: "High",
        ValueOption.MEDIUM: "Medium",
        ValueOption.LOW: "Low",
    },
    Factor.REPLACEABILITY: {
        ReplaceabilityOption.DIFFICULT: "Difficult",
        ReplaceabilityOption.MODERATE: "Moderate",
        ReplaceabilityOption.EASY: "Easy",
    },
    Factor.SPACE: {
        SpaceOption.YES: "Yes",
        SpaceOption.LIMITED: "Limited",
        SpaceOption.NO: "No",
    },
}


def is_valid_option(factor: Factor, option: str) -> bool:
    """Return True if ``option`` is a defined answer for ``factor``."""
    return option in {m.value for m in FACTOR_OPTIONS[factor]}
