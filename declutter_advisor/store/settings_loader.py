"""
Settings store reader.

The surrounding application keeps recommendation settings as three entries
of a key/value settings table. This module reads an exported copy of that
table (a JSON object) and turns it into ``EngineSettings`` for one user::

    {
      "recommendation_weights":    {...weight table...},
      "recommendation_thresholds": {"minimumScoreDifference": 2, "tieBreakOrder": [...]},
      "recommendation_strategies": {"active": "balanced", "abTestEnabled": false,
                                    "abTestPercentage": 50, "strategies": {...}}
    }

Values may also be JSON-encoded strings (as stored in the table); they are
decoded, and kept as-is when they are not valid JSON.

Failure policy: reading settings must never block or break classification.
A missing file, unreadable JSON, or an invalid entry is logged at WARNING and
the affected part falls back to the built-in defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from declutter_advisor.engine.defaults import (
    DEFAULT_STRATEGY_CATALOG,
    DEFAULT_THRESHOLDS,
    default_weight_table,
)
from declutter_advisor.engine.strategy import select_strategy
from declutter_advisor.models.settings import EngineSettings, StrategyCatalog

logger = logging.getLogger(__name__)

WEIGHTS_KEY = "recommendation_weights"
THRESHOLDS_KEY = "recommendation_thresholds"
STRATEGIES_KEY = "recommendation_strategies"
SETTINGS_KEYS: tuple[str, ...] = (WEIGHTS_KEY, THRESHOLDS_KEY, STRATEGIES_KEY)


def load_settings_document(path: Path) -> dict[str, Any]:
    """Read the settings document from ``path``.

    Args:
        path: JSON file holding the settings entries.

    Returns:
        Dict of recognised settings keys to decoded values. Unknown top-level
        keys are dropped.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the top-level JSON value is not an object.
    """
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"Settings file {path} must contain a JSON object.")

    document: dict[str, Any] = {}
    for key in SETTINGS_KEYS:
        if key in raw:
            document[key] = _decode_value(raw[key])
    return document


def resolve_engine_settings(
    document:     Mapping[str, Any],
    user_id:      Optional[int] = None,
    strategy_key: Optional[str] = None,
) -> EngineSettings:
    """Resolve a settings document into ``EngineSettings`` for one user.

    Args:
        document:     Output of ``load_settings_document()`` (or equivalent).
        user_id:      Numeric user id for A/B strategy assignment.
        strategy_key: Force this strategy (admin preview); skips A/B.

    Returns:
        ``EngineSettings``; each part that is missing or invalid is left unset
        so the engine default applies.
    """
    resolved = EngineSettings.coerce({
        "weights":    document.get(WEIGHTS_KEY),
        "thresholds": document.get(THRESHOLDS_KEY),
    })

    raw_catalog = document.get(STRATEGIES_KEY)
    if raw_catalog is None and strategy_key is None:
        return resolved

    catalog = _catalog_from(raw_catalog)
    key, strategy = select_strategy(catalog, user_id=user_id, override=strategy_key)

    return resolved.model_copy(update={"strategy_config": strategy, "active_strategy": key})


def load_engine_settings(
    path:         Optional[Path],
    user_id:      Optional[int] = None,
    strategy_key: Optional[str] = None,
) -> EngineSettings:
    """Load and resolve settings from ``path``; never raises.

    ``path=None`` means no settings store is configured: built-in defaults.
    The built-in strategy catalog is still consulted when ``strategy_key``
    is given.
    """
    document: dict[str, Any] = {}
    if path is not None:
        try:
            document = load_settings_document(path)
        except FileNotFoundError:
            logger.warning("Settings file not found: %s; using built-in defaults.", path)
        except (OSError, ValueError) as exc:
            logger.warning("Could not read settings file %s (%s); using built-in defaults.", path, exc)

    return resolve_engine_settings(document, user_id=user_id, strategy_key=strategy_key)


def load_strategy_catalog(path: Optional[Path]) -> StrategyCatalog:
    """Return the stored strategy catalog, or the built-in one on any failure."""
    if path is None:
        return DEFAULT_STRATEGY_CATALOG
    try:
        document = load_settings_document(path)
    except (OSError, ValueError) as exc:
        logger.warning("Could not read settings file %s (%s); using built-in strategies.", path, exc)
        return DEFAULT_STRATEGY_CATALOG
    return _catalog_from(document.get(STRATEGIES_KEY))


def default_settings_document() -> dict[str, Any]:
    """Return the full default settings document (camelCase keys).

    This is what an operator writes to the settings store to reset every
    recommendation setting to its built-in value.
    """
    return {
        WEIGHTS_KEY:    default_weight_table(),
        THRESHOLDS_KEY: DEFAULT_THRESHOLDS.model_dump(by_alias=True, mode="json"),
        STRATEGIES_KEY: DEFAULT_STRATEGY_CATALOG.model_dump(
            by_alias=True, exclude_none=True, mode="json"
        ),
    }


# ── Helpers ───────────────────────────────────────────────────────────────────

def _decode_value(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


def _catalog_from(raw: Any) -> StrategyCatalog:
    if raw is None:
        return DEFAULT_STRATEGY_CATALOG
    try:
        return StrategyCatalog.model_validate(raw)
    except ValidationError as exc:
        logger.warning(
            "Ignoring malformed '%s' (%d error(s)); using built-in strategies.",
            STRATEGIES_KEY,
            exc.error_count(),
        )
        return DEFAULT_STRATEGY_CATALOG

