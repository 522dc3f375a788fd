"""
Questionnaire answers and personality profile models.

``ItemAnswers`` holds one answer per questionnaire factor, keyed by the
user-facing field names (``used``, ``sentimental``, ``condition``, ``value``,
``replace``, ``space``) plus the item ``name`` used in reasoning text.

``PersonalityProfile`` is the user's free-form profile. Attribute names
follow the stored camelCase keys (``minimalistLevel``) and are also
accepted in snake_case. Unknown attributes are kept, not rejected.

Both models are deliberately permissive: any field may be missing, empty, or
hold a value outside the known vocabulary. Such values match no weight-table
entry or profile rule and contribute nothing to the score.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from declutter_advisor.taxonomy.disposition_taxonomy import ANSWER_FIELDS, Factor


def _blank_to_none(v: Any) -> Optional[str]:
    """Normalise an optional answer: ``None`` and ``""`` mean "not answered"."""
    if v is None:
        return None
    text = str(v)
    return text if text != "" else None


class ItemAnswers(BaseModel):
    """Questionnaire answers for a single item.

    Attributes:
        name: Item name interpolated into reasoning text.
        used: Usage frequency (``yes`` / ``rarely`` / ``no``).
        sentimental: Sentimental attachment (``high`` / ``some`` / ``none``).
        condition: Physical condition (``excellent`` / ``good`` / ``fair`` / ``poor``).
        value: Monetary value (``high`` / ``medium`` / ``low``).
        replace: Replaceability (``difficult`` / ``moderate`` / ``easy``).
        space: Space availability (``yes`` / ``limited`` / ``no``).
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: Optional[str] = None
    used: Optional[str] = None
    sentimental: Optional[str] = None
    condition: Optional[str] = None
    value: Optional[str] = None
    replace: Optional[str] = None
    space: Optional[str] = None

    @field_validator(
        "name", "used", "sentimental", "condition", "value", "replace", "space",
        mode="before",
    )
    @classmethod
    def normalise_blank(cls, v: Any) -> Optional[str]:
        return _blank_to_none(v)

    def option_for(self, factor: Factor) -> Optional[str]:
        """Return the recorded option for ``factor``, or ``None`` if unanswered."""
        return getattr(self, ANSWER_FIELDS[factor])

    @classmethod
    def coerce(cls, answers: "ItemAnswers | Mapping[str, Any] | None") -> "ItemAnswers":
        """Accept an ``ItemAnswers`` instance, a plain mapping, or ``None``."""
        if isinstance(answers, ItemAnswers):
            return answers
        if answers is None:
            return cls()
        return cls.model_validate(dict(answers))


class PersonalityProfile(BaseModel):
    """A user's personality profile.

    Only ``minimalist_level``, ``budget_priority``, ``sentimental_value`` and
    ``living_space`` affect scoring. The remaining known attributes are
    carried for completeness; arbitrary extra attributes are preserved.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    minimalist_level: Optional[str] = None
    budget_priority: Optional[str] = None
    sentimental_value: Optional[str] = None
    living_space: Optional[str] = None
    declutter_goal: Optional[str] = None
    time_commitment: Optional[str] = None
    future_goals: Optional[str] = None
    keeping_style: Optional[str] = None

    @field_validator(
        "minimalist_level", "budget_priority", "sentimental_value", "living_space",
        "declutter_goal", "time_commitment", "future_goals", "keeping_style",
        mode="before",
    )
    @classmethod
    def normalise_blank(cls, v: Any) -> Optional[str]:
        return _blank_to_none(v)

    @classmethod
    def coerce(
        cls, profile: "PersonalityProfile | Mapping[str, Any] | None"
    ) -> "PersonalityProfile | None":
        """Accept a profile instance, a plain mapping, or ``None`` (no profile)."""
        if profile is None or isinstance(profile, PersonalityProfile):
            return profile
        return cls.model_validate(dict(profile))
