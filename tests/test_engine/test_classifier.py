"""
Tests for declutter_advisor/engine/classifier.py.

What we test
------------
  - classify() and classify_with_details() agree on the recommendation.
  - Default weights, default thresholds, profile adjustments.
  - Partial settings: each field falls back independently; None == {}.
  - Malformed entries inside a supplied field are dropped alone; the valid
    weights, multipliers and tie-break order beside them still apply.
  - Strategy multipliers change scores and name the strategy used.
  - Ties: tiedRecommendations populated; tie-break order respected;
    malformed order falls back to the default.
  - Inputs are never mutated; repeated calls are independent.
  - to_dict() uses camelCase keys and string action values.
"""

from __future__ import annotations

import pytest

from declutter_advisor.engine.classifier import classify, classify_with_details
from declutter_advisor.engine.defaults import BUILTIN_STRATEGIES, default_weight_table
from declutter_advisor.models.settings import EngineSettings
from declutter_advisor.taxonomy.disposition_taxonomy import ActionType as A

_TIE_WEIGHTS = {"usage": {"yes": {"sell": 2, "donate": 2}}}
_REVERSED_ORDER = ["discard", "donate", "sell", "keep", "accessible", "storage"]


class TestDefaults:
    def test_keep_scenario(self, keep_answers):
        report = classify_with_details(keep_answers)
        assert report.recommendation is A.KEEP
        assert report.max_score == 9
        assert report.tied_recommendations is None
        assert report.strategy_used == "Default"
        assert report.score_margin == 4
        assert report.is_decisive is True

    def test_classify_matches_details(self, keep_answers, letting_go_answers, extreme_minimalist):
        for answers in (keep_answers, letting_go_answers):
            for profile in (None, extreme_minimalist):
                assert (
                    classify(answers, profile)
                    is classify_with_details(answers, profile).recommendation
                )

    def test_mapping_inputs(self):
        report = classify_with_details(
            {"used": "yes", "sentimental": "high", "condition": "good",
             "value": "medium", "replace": "moderate", "space": "yes"},
            {"minimalistLevel": "extreme"},
        )
        assert report.scores[A.KEEP] == 8
        assert report.scores[A.DONATE] == 4
        assert report.scores[A.DISCARD] == 2
        assert report.breakdown.profile["minimalist"]["keep"] == -1

    def test_minimalist_tips_letting_go(self, letting_go_answers, extreme_minimalist):
        report = classify_with_details(letting_go_answers, extreme_minimalist)
        assert report.recommendation is A.DONATE
        assert report.scores[A.DONATE] == 9
        assert report.scores[A.DISCARD] == 8
        assert report.scores[A.KEEP] == -1
        assert report.is_decisive is False

    def test_no_answers(self):
        report = classify_with_details({})
        assert report.recommendation is A.KEEP
        assert report.max_score == 0
        assert report.tied_recommendations == list(A)
        assert report.score_margin == 0

    def test_none_answers(self):
        assert classify(None) is A.KEEP


class TestSettingsResolution:
    def test_none_same_as_empty(self, keep_answers):
        assert (
            classify_with_details(keep_answers, None, None).scores
            == classify_with_details(keep_answers, None, {}).scores
        )

    def test_custom_weights_replace_defaults(self, keep_answers):
        report = classify_with_details(keep_answers, settings={"weights": _TIE_WEIGHTS})
        assert report.scores[A.KEEP] == 0
        assert report.scores[A.SELL] == 2

    def test_negative_weights(self):
        weights = {"usage": {"yes": {"keep": -1, "storage": -3, "accessible": -2,
                                     "sell": -5, "donate": -4, "discard": -6}}}
        report = classify_with_details({"used": "yes"}, settings={"weights": weights})
        assert report.recommendation is A.KEEP
        assert report.max_score == -1

    def test_thresholds_without_weights(self, keep_answers):
        report = classify_with_details(
            keep_answers, settings={"thresholds": {"minimumScoreDifference": 5}}
        )
        assert report.scores[A.KEEP] == 9
        assert report.is_decisive is False

    def test_minimum_difference_never_changes_winner(self, keep_answers):
        loose = classify(keep_answers, settings={"thresholds": {"minimumScoreDifference": 0}})
        strict = classify(keep_answers, settings={"thresholds": {"minimumScoreDifference": 100}})
        assert loose is strict is A.KEEP

    def test_non_object_weights_fall_back(self, keep_answers):
        report = classify_with_details(keep_answers, settings={"weights": "heavy"})
        assert report.scores[A.KEEP] == 9

    def test_engine_settings_instance(self, keep_answers):
        settings = EngineSettings(weights=default_weight_table())
        assert classify(keep_answers, settings=settings) is A.KEEP


class TestPartiallyMalformedSettings:
    def test_null_factor_keeps_rest_of_table(self, keep_answers):
        report = classify_with_details(
            keep_answers,
            settings={"weights": {"usage": {"yes": {"sell": 10}}, "sentimental": None}},
        )
        assert report.recommendation is A.SELL
        assert report.scores[A.SELL] == 10
        assert report.scores[A.KEEP] == 0

    def test_non_object_option_keeps_rest_of_table(self, keep_answers):
        report = classify_with_details(
            keep_answers, settings={"weights": {"usage": {"yes": {"sell": 10}, "no": 3}}}
        )
        assert report.recommendation is A.SELL
        assert report.scores[A.KEEP] == 0

    def test_non_numeric_score_contributes_nothing(self):
        report = classify_with_details(
            {"used": "yes"},
            settings={"weights": {"usage": {"yes": {"keep": "lots", "donate": 1}}}},
        )
        assert report.recommendation is A.DONATE
        assert report.scores[A.KEEP] == 0

    def test_null_multiplier_keeps_strategy(self, keep_answers):
        report = classify_with_details(
            keep_answers,
            settings={"strategyConfig": {"name": "Custom", "multipliers": {"usage": None, "value": 2}}},
        )
        assert report.strategy_used == "Custom"
        assert report.scores[A.KEEP] == pytest.approx(9)
        assert report.scores[A.SELL] == pytest.approx(6)
        assert report.scores[A.DONATE] == pytest.approx(3)

    def test_null_minimum_keeps_tie_break_order(self):
        report = classify_with_details(
            {},
            settings={"thresholds": {
                "minimumScoreDifference": None,
                "tieBreakOrder": ["discard", "donate", "sell", "storage", "accessible", "keep"],
            }},
        )
        assert report.recommendation is A.DISCARD
        assert report.is_decisive is False


class TestTies:
    def test_default_order(self):
        report = classify_with_details({"used": "yes"}, settings={"weights": _TIE_WEIGHTS})
        assert report.recommendation is A.SELL
        assert report.tied_recommendations == [A.SELL, A.DONATE]
        assert report.score_margin == 0
        assert report.is_decisive is False

    def test_custom_order(self):
        report = classify_with_details(
            {"used": "yes"},
            settings={
                "weights": _TIE_WEIGHTS,
                "thresholds": {"tieBreakOrder": _REVERSED_ORDER},
            },
        )
        assert report.recommendation is A.DONATE
        assert report.tied_recommendations == [A.SELL, A.DONATE]

    def test_malformed_order_uses_default(self):
        report = classify_with_details(
            {"used": "yes"},
            settings={"weights": _TIE_WEIGHTS, "thresholds": {"tieBreakOrder": ["donate"]}},
        )
        assert report.recommendation is A.SELL


class TestStrategies:
    def test_minimalist_strategy(self, keep_answers):
        cfg = BUILTIN_STRATEGIES["minimalist"]
        report = classify_with_details(keep_answers, settings={"strategyConfig": cfg.model_dump()})
        assert report.strategy_used == "Minimalist"
        assert report.recommendation is A.KEEP
        assert report.scores[A.KEEP] == pytest.approx(10.0)
        assert report.scores[A.ACCESSIBLE] == pytest.approx(7.5)

    def test_unnamed_strategy_reports_default(self, keep_answers):
        report = classify_with_details(
            keep_answers, settings={"strategyConfig": {"multipliers": {"usage": 2}}}
        )
        assert report.strategy_used == "Default"
        assert report.scores[A.KEEP] == pytest.approx(12.0)

    def test_strategy_without_multipliers(self, keep_answers):
        report = classify_with_details(keep_answers, settings={"strategyConfig": {"name": "Plain"}})
        assert report.strategy_used == "Plain"
        assert report.scores[A.KEEP] == 9

    def test_strategy_with_custom_weights(self):
        report = classify_with_details(
            {"used": "yes"},
            settings={
                "weights": {"usage": {"yes": {"donate": 3}}},
                "strategyConfig": {"name": "Half", "multipliers": {"usage": 0.5}},
            },
        )
        assert report.scores[A.DONATE] == pytest.approx(1.5)


class TestIsolation:
    def test_inputs_not_mutated(self, keep_answers):
        weights = default_weight_table()
        settings = {"weights": weights, "strategyConfig": {"multipliers": {"usage": 2}}}
        classify_with_details(keep_answers, {"minimalistLevel": "extreme"}, settings)
        assert weights == default_weight_table()
        assert settings["strategyConfig"] == {"multipliers": {"usage": 2}}

    def test_reports_are_independent(self, keep_answers, extreme_minimalist):
        first = classify_with_details(keep_answers, extreme_minimalist)
        first.scores[A.KEEP] = 100
        first.breakdown.profile.clear()
        second = classify_with_details(keep_answers, extreme_minimalist)
        assert second.scores[A.KEEP] == 8
        assert "minimalist" in second.breakdown.profile

    def test_profile_never_leaks_between_calls(self, keep_answers, extreme_minimalist):
        classify_with_details(keep_answers, extreme_minimalist)
        assert classify_with_details(keep_answers).scores[A.KEEP] == 9


class TestToDict:
    def test_keys_and_values(self, keep_answers):
        d = classify_with_details(keep_answers).to_dict()
        assert list(d) == [
            "recommendation", "scores", "breakdown", "maxScore",
            "tiedRecommendations", "strategyUsed", "scoreMargin", "isDecisive",
        ]
        assert d["recommendation"] == "keep"
        assert d["scores"]["accessible"] == 5
        assert d["tiedRecommendations"] is None
        assert d["breakdown"]["usage"] == {"keep": 3, "accessible": 2}
        assert d["breakdown"]["profile"] == {}
