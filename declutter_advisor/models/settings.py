"""
Runtime-tunable engine settings.

These models mirror the settings document kept in the external settings
store (camelCase keys, e.g. ``tieBreakOrder``); snake_case field names are
accepted as well.

Override semantics are wholesale, never deep-merged: when ``weights`` is
supplied it replaces the entire default weight table, when ``thresholds`` is
supplied it replaces both threshold fields, and so on. Each top-level field
falls back to its built-in default independently.

Inside a supplied field, malformed pieces are dropped one at a time, each
with a warning, and the rest of the field is kept:

  weights          a factor or option that is not an object, or a score that
                   is not numeric, is dropped (it then contributes nothing).
  multipliers      a null or non-numeric multiplier means ``1``.
  thresholds       a non-numeric ``minimumScoreDifference`` becomes ``2``;
                   anything but a permutation of all six actions in
                   ``tieBreakOrder`` becomes ``DEFAULT_TIE_BREAK_ORDER``.

Only a field that is not an object at all is rejected as a whole.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from declutter_advisor.taxonomy.disposition_taxonomy import ALL_ACTIONS, ActionType

logger = logging.getLogger(__name__)

# factor -> option -> action -> score. Sparse; keys are plain strings because
# tables arrive from external storage.
WeightTable = dict[str, dict[str, dict[str, float]]]

DEFAULT_TIE_BREAK_ORDER: tuple[ActionType, ...] = (
    ActionType.KEEP,
    ActionType.ACCESSIBLE,
    ActionType.STORAGE,
    ActionType.SELL,
    ActionType.DONATE,
    ActionType.DISCARD,
)

DEFAULT_MINIMUM_SCORE_DIFFERENCE = 2.0

_SETTINGS_CONFIG = ConfigDict(
    frozen=True,
    populate_by_name=True,
    alias_generator=to_camel,
)


def is_full_permutation(order: Any) -> bool:
    """Return True if ``order`` lists every ``ActionType`` exactly once."""
    if not isinstance(order, (list, tuple)):
        return False
    values = [str(a) for a in order]
    return len(values) == len(ALL_ACTIONS) and set(values) == {a.value for a in ALL_ACTIONS}


def as_number(value: Any) -> Optional[float]:
    """Return ``value`` as a float, or ``None`` if it is not numeric.

    Numeric strings (``"1.5"``) are accepted; booleans are not.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def prune_weight_table(table: Mapping[str, Any]) -> WeightTable:
    """Drop the malformed entries of a raw weight table, keeping the rest."""
    pruned: WeightTable = {}
    for factor, options in table.items():
        if not isinstance(options, Mapping):
            logger.warning("Dropping weights for factor %r: not an object (%r).", factor, options)
            continue
        pruned[factor] = {}
        for option, scores in options.items():
            if not isinstance(scores, Mapping):
                logger.warning(
                    "Dropping weights for %s answer %r: not an object (%r).", factor, option, scores
                )
                continue
            pruned[factor][option] = {}
            for action, score in scores.items():
                number = as_number(score)
                if number is None:
                    logger.warning(
                        "Dropping non-numeric weight %s.%s.%s = %r.", factor, option, action, score
                    )
                    continue
                pruned[factor][option][action] = number
    return pruned


class Thresholds(BaseModel):
    """Decision thresholds.

    Attributes:
        minimum_score_difference: Margin at which a recommendation counts as
            decisive. Reported only; never changes the chosen action.
        tie_break_order: Priority ranking applied when several actions share
            the maximum score.
    """

    model_config = _SETTINGS_CONFIG

    minimum_score_difference: float = DEFAULT_MINIMUM_SCORE_DIFFERENCE
    tie_break_order: list[ActionType] = list(DEFAULT_TIE_BREAK_ORDER)

    @field_validator("minimum_score_difference", mode="before")
    @classmethod
    def validate_minimum_score_difference(cls, v: Any) -> float:
        number = as_number(v)
        if number is None:
            logger.warning(
                "minimumScoreDifference %r is not a number; using %s.",
                v,
                DEFAULT_MINIMUM_SCORE_DIFFERENCE,
            )
            return DEFAULT_MINIMUM_SCORE_DIFFERENCE
        return number

    @field_validator("tie_break_order", mode="before")
    @classmethod
    def validate_tie_break_order(cls, v: Any) -> Any:
        if v is None or not is_full_permutation(v):
            logger.warning(
                "tieBreakOrder %r is not a permutation of all actions; "
                "using default order.",
                v,
            )
            return list(DEFAULT_TIE_BREAK_ORDER)
        return list(v)


class StrategyConfig(BaseModel):
    """A named set of per-factor multipliers.

    Missing factors, and factors whose multiplier is ``None``, use ``1``.
    """

    model_config = _SETTINGS_CONFIG

    name: Optional[str] = None
    description: Optional[str] = None
    multipliers: Optional[dict[str, Optional[float]]] = None

    @field_validator("multipliers", mode="before")
    @classmethod
    def validate_multipliers(cls, v: Any) -> Any:
        if not isinstance(v, Mapping):
            return v
        cleaned: dict[str, Optional[float]] = {}
        for factor, multiplier in v.items():
            number = as_number(multiplier)
            if number is None and multiplier is not None:
                logger.warning(
                    "Multiplier for %r is not a number (%r); using 1.", factor, multiplier
                )
            cleaned[factor] = number
        return cleaned


class StrategyCatalog(BaseModel):
    """The stored set of strategies plus A/B test assignment settings.

    Attributes:
        active: Key of the strategy served to everyone (group A).
        ab_test_enabled: Whether group B gets ``ab_test_alternate``.
        ab_test_percentage: Users with ``user_id % 100`` below this value
            stay in group A.
        ab_test_alternate: Strategy key served to group B.
        strategies: Strategy key -> ``StrategyConfig``.
    """

    model_config = _SETTINGS_CONFIG

    active: str = "balanced"
    ab_test_enabled: bool = False
    ab_test_percentage: float = 50
    ab_test_alternate: Optional[str] = None
    strategies: dict[str, StrategyConfig] = {}


class EngineSettings(BaseModel):
    """Settings passed to the classifier.

    ``None`` in any field means "use the built-in default" for that field.
    ``active_strategy`` is the catalog key the strategy came from, for display.
    """

    model_config = _SETTINGS_CONFIG

    weights: Optional[WeightTable] = None
    thresholds: Optional[Thresholds] = None
    strategy_config: Optional[StrategyConfig] = None
    active_strategy: Optional[str] = None

    @field_validator("weights", mode="before")
    @classmethod
    def validate_weights(cls, v: Any) -> Any:
        if not isinstance(v, Mapping):
            return v
        return prune_weight_table(v)

    @classmethod
    def coerce(
        cls, settings: "EngineSettings | Mapping[str, Any] | None"
    ) -> "EngineSettings":
        """Build settings from an instance, a raw mapping, or ``None``.

        Raw mappings are validated one top-level field at a time. A field that
        fails validation is logged and dropped, so the default applies for it
        alone. Never raises.
        """
        if isinstance(settings, EngineSettings):
            return settings
        if not settings:
            return cls()

        fields: dict[str, Any] = {}
        for field_name, field in cls.model_fields.items():
            raw = _lookup(settings, field_name, field.alias)
            if raw is None:
                continue
            try:
                validated = cls.model_validate({field_name: raw})
            except ValidationError as exc:
                logger.warning(
                    "Ignoring malformed '%s' setting (%d error(s)); using default.",
                    field.alias or field_name,
                    exc.error_count(),
                )
                continue
            fields[field_name] = getattr(validated, field_name)

        return cls(**fields)


def _lookup(mapping: Mapping[str, Any], name: str, alias: Optional[str]) -> Any:
    if alias and alias in mapping:
        return mapping[alias]
    return mapping.get(name)
