"""
Built-in engine defaults: weight table, thresholds, and strategy catalog.

All values are constructed once at import and are read-only:
``DEFAULT_WEIGHTS`` is a nested ``MappingProxyType`` and the settings models
are frozen. Callers pass them (or replacements) explicitly into the engine;
nothing in the engine reads them as hidden state except as the fallback for
an omitted settings field.

Default weight table
--------------------
    usage           yes        keep 3, accessible 2
                    rarely     storage 2, accessible 1
                    no         donate 2, sell 1, discard 1
    sentimental     high       keep 3, storage 2
                    some       keep 1, storage 2
                    none       sell 1, donate 1
    condition       excellent  keep 1, sell 2, donate 1
                    good       keep 1, sell 2, donate 1
                    fair       donate 2, discard 1
                    poor       discard 3
    value           high       keep 2, sell 3
                    medium     sell 2, donate 1
                    low        donate 2, discard 1
    replaceability  difficult  keep 2, storage 2
                    moderate   storage 1
                    easy       donate 1, discard 1
    space           yes        keep 2, accessible 3
                    limited    storage 2
                    no         storage 1, sell 1, donate 1
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from declutter_advisor.models.settings import (
    DEFAULT_TIE_BREAK_ORDER,
    StrategyCatalog,
    StrategyConfig,
    Thresholds,
)

DEFAULT_STRATEGY_NAME = "Default"


def _freeze(table: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType({
        k: _freeze(v) if isinstance(v, Mapping) else v for k, v in table.items()
    })


_WEIGHTS: dict[str, dict[str, dict[str, float]]] = {
    "usage": {
        "yes":       {"keep": 3, "accessible": 2},
        "rarely":    {"storage": 2, "accessible": 1},
        "no":        {"donate": 2, "sell": 1, "discard": 1},
    },
    "sentimental": {
        "high":      {"keep": 3, "storage": 2},
        "some":      {"keep": 1, "storage": 2},
        "none":      {"sell": 1, "donate": 1},
    },
    "condition": {
        "excellent": {"keep": 1, "sell": 2, "donate": 1},
        "good":      {"keep": 1, "sell": 2, "donate": 1},
        "fair":      {"donate": 2, "discard": 1},
        "poor":      {"discard": 3},
    },
    "value": {
        "high":      {"keep": 2, "sell": 3},
        "medium":    {"sell": 2, "donate": 1},
        "low":       {"donate": 2, "discard": 1},
    },
    "replaceability": {
        "difficult": {"keep": 2, "storage": 2},
        "moderate":  {"storage": 1},
        "easy":      {"donate": 1, "discard": 1},
    },
    "space": {
        "yes":       {"keep": 2, "accessible": 3},
        "limited":   {"storage": 2},
        "no":        {"storage": 1, "sell": 1, "donate": 1},
    },
}

DEFAULT_WEIGHTS: Mapping[str, Mapping[str, Mapping[str, float]]] = _freeze(_WEIGHTS)

DEFAULT_THRESHOLDS = Thresholds(
    minimum_score_difference=2,
    tie_break_order=list(DEFAULT_TIE_BREAK_ORDER),
)

DEFAULT_STRATEGY_MULTIPLIERS: Mapping[str, float] = MappingProxyType({
    "usage": 1,
    "sentimental": 1,
    "condition": 1,
    "value": 1,
    "replaceability": 1,
    "space": 1,
})

BUILTIN_STRATEGIES: Mapping[str, StrategyConfig] = MappingProxyType({
    "balanced": StrategyConfig(
        name="Balanced",
        description="Equal consideration of all factors",
        multipliers=dict(DEFAULT_STRATEGY_MULTIPLIERS),
    ),
    "minimalist": StrategyConfig(
        name="Minimalist",
        description="Favors letting go of items",
        multipliers={"usage": 1.5, "sentimental": 0.5, "condition": 1,
                     "value": 0.8, "replaceability": 0.7, "space": 1.5},
    ),
    "sentimental": StrategyConfig(
        name="Sentimental",
        description="Prioritizes emotional attachment",
        multipliers={"usage": 0.8, "sentimental": 2, "condition": 0.8,
                     "value": 0.5, "replaceability": 1.5, "space": 0.7},
    ),
    "practical": StrategyConfig(
        name="Practical",
        description="Focuses on usage and condition",
        multipliers={"usage": 2, "sentimental": 0.5, "condition": 1.5,
                     "value": 1, "replaceability": 1, "space": 1.2},
    ),
    "financial": StrategyConfig(
        name="Financial",
        description="Maximizes monetary value recovery",
        multipliers={"usage": 0.8, "sentimental": 0.5, "condition": 1.5,
                     "value": 2, "replaceability": 0.8, "space": 0.8},
    ),
})

DEFAULT_STRATEGY_CATALOG = StrategyCatalog(
    active="balanced",
    ab_test_enabled=False,
    ab_test_percentage=50,
    strategies=dict(BUILTIN_STRATEGIES),
)


def default_weight_table() -> dict[str, dict[str, dict[str, float]]]:
    """Return a mutable deep copy of the default weight table."""
    return {
        factor: {option: dict(scores) for option, scores in options.items()}
        for factor, options in DEFAULT_WEIGHTS.items()
    }
