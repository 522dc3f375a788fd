"""
Tests for declutter_advisor/store/settings_loader.py.

What we test
------------
load_settings_document():
  - Recognised keys kept, unknown keys dropped.
  - JSON-encoded string values decoded.
  - Non-object top level raises ValueError.

resolve_engine_settings() / load_engine_settings():
  - Missing file or bad JSON -> defaults with a warning, never raises.
  - No stored catalog and no forced key -> no strategy.
  - Stored catalog -> active strategy, A/B assignment, forced key.
  - Malformed catalog -> built-in strategies.

default_settings_document():
  - Round-trips through the loader to the built-in defaults.
"""

from __future__ import annotations

import json
import logging

import pytest

from declutter_advisor.engine.classifier import classify_with_details
from declutter_advisor.engine.defaults import BUILTIN_STRATEGIES, default_weight_table
from declutter_advisor.models.settings import DEFAULT_TIE_BREAK_ORDER
from declutter_advisor.store.settings_loader import (
    STRATEGIES_KEY,
    THRESHOLDS_KEY,
    WEIGHTS_KEY,
    default_settings_document,
    load_engine_settings,
    load_settings_document,
    load_strategy_catalog,
    resolve_engine_settings,
)
from declutter_advisor.taxonomy.disposition_taxonomy import ActionType as A

_CATALOG = {
    "active": "balanced",
    "abTestEnabled": True,
    "abTestPercentage": 50,
    "abTestAlternate": "minimalist",
    "strategies": {
        "balanced": {"name": "Balanced", "multipliers": {}},
        "minimalist": {"name": "Minimalist", "multipliers": {"usage": 1.5}},
    },
}


class TestLoadSettingsDocument:
    def test_keeps_known_keys(self, settings_file):
        path = settings_file({
            WEIGHTS_KEY: {"usage": {"yes": {"keep": 1}}},
            "theme": "dark",
        })
        assert load_settings_document(path) == {WEIGHTS_KEY: {"usage": {"yes": {"keep": 1}}}}

    def test_decodes_string_values(self, settings_file):
        path = settings_file({THRESHOLDS_KEY: json.dumps({"minimumScoreDifference": 3})})
        assert load_settings_document(path)[THRESHOLDS_KEY] == {"minimumScoreDifference": 3}

    def test_undecodable_string_kept(self, settings_file):
        path = settings_file({WEIGHTS_KEY: "not json"})
        assert load_settings_document(path)[WEIGHTS_KEY] == "not json"

    def test_top_level_array_rejected(self, settings_file):
        path = settings_file([1, 2, 3])
        with pytest.raises(ValueError, match="JSON object"):
            load_settings_document(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings_document(tmp_path / "nope.json")


class TestResolveEngineSettings:
    def test_empty_document(self):
        settings = resolve_engine_settings({})
        assert settings.weights is None
        assert settings.thresholds is None
        assert settings.strategy_config is None
        assert settings.active_strategy is None

    def test_weights_and_thresholds(self):
        settings = resolve_engine_settings({
            WEIGHTS_KEY: {"usage": {"yes": {"keep": 1}}},
            THRESHOLDS_KEY: {"tieBreakOrder": list(reversed([a.value for a in DEFAULT_TIE_BREAK_ORDER]))},
        })
        assert settings.weights == {"usage": {"yes": {"keep": 1.0}}}
        assert settings.thresholds.tie_break_order[0] is A.DISCARD

    def test_active_strategy(self):
        settings = resolve_engine_settings({STRATEGIES_KEY: _CATALOG}, user_id=149)
        assert settings.active_strategy == "balanced"
        assert settings.strategy_config.name == "Balanced"

    def test_ab_group_b(self):
        settings = resolve_engine_settings({STRATEGIES_KEY: _CATALOG}, user_id=250)
        assert settings.active_strategy == "minimalist"
        assert settings.strategy_config.multipliers == {"usage": 1.5}

    def test_forced_key_uses_builtin_catalog(self):
        settings = resolve_engine_settings({}, strategy_key="financial")
        assert settings.strategy_config == BUILTIN_STRATEGIES["financial"]

    def test_malformed_catalog_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING):
            settings = resolve_engine_settings({STRATEGIES_KEY: {"strategies": "lots"}})
        assert settings.active_strategy == "balanced"
        assert settings.strategy_config == BUILTIN_STRATEGIES["balanced"]
        assert STRATEGIES_KEY in caplog.text


class TestLoadEngineSettings:
    def test_no_path(self):
        settings = load_engine_settings(None)
        assert settings.weights is None
        assert settings.strategy_config is None

    def test_missing_file_warns(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            settings = load_engine_settings(tmp_path / "nope.json")
        assert settings.weights is None
        assert "not found" in caplog.text

    def test_bad_json_warns(self, tmp_path, caplog):
        path = tmp_path / "settings.json"
        path.write_text("{not json", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            settings = load_engine_settings(path)
        assert settings.thresholds is None
        assert "Could not read" in caplog.text

    def test_stored_settings_drive_classification(self, settings_file):
        path = settings_file({
            WEIGHTS_KEY: json.dumps({"usage": {"yes": {"sell": 2, "donate": 2}}}),
            THRESHOLDS_KEY: {"tieBreakOrder": ["discard", "donate", "sell", "keep",
                                               "accessible", "storage"]},
        })
        report = classify_with_details({"used": "yes"}, settings=load_engine_settings(path))
        assert report.recommendation is A.DONATE
        assert report.strategy_used == "Default"


class TestLoadStrategyCatalog:
    def test_builtin_when_no_path(self):
        catalog = load_strategy_catalog(None)
        assert set(catalog.strategies) == {
            "balanced", "minimalist", "sentimental", "practical", "financial",
        }

    def test_stored_catalog(self, settings_file):
        catalog = load_strategy_catalog(settings_file({STRATEGIES_KEY: _CATALOG}))
        assert catalog.ab_test_enabled is True
        assert set(catalog.strategies) == {"balanced", "minimalist"}

    def test_missing_file(self, tmp_path):
        catalog = load_strategy_catalog(tmp_path / "nope.json")
        assert catalog.active == "balanced"
        assert len(catalog.strategies) == 5


class TestDefaultSettingsDocument:
    def test_keys_and_camel_case(self):
        document = default_settings_document()
        assert set(document) == {WEIGHTS_KEY, THRESHOLDS_KEY, STRATEGIES_KEY}
        assert document[THRESHOLDS_KEY]["minimumScoreDifference"] == 2
        assert document[THRESHOLDS_KEY]["tieBreakOrder"][0] == "keep"
        assert document[STRATEGIES_KEY]["abTestEnabled"] is False
        assert "abTestAlternate" not in document[STRATEGIES_KEY]

    def test_weights_are_mutable_copy(self):
        document = default_settings_document()
        document[WEIGHTS_KEY]["usage"]["yes"]["keep"] = 99
        assert default_weight_table()["usage"]["yes"]["keep"] == 3

    def test_round_trip(self, settings_file, keep_answers):
        path = settings_file(default_settings_document())
        settings = load_engine_settings(path)
        report = classify_with_details(keep_answers, settings=settings)
        assert report.scores[A.KEEP] == 9
        assert report.strategy_used == "Balanced"
