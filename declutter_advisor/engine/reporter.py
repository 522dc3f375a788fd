"""
Evaluation report writer: CSV and JSON output for batch classifications.

All functions are pure I/O and consume in-memory ``ItemEvaluation`` lists.

Output files
------------
  <output_dir>/
    evaluations_{date}.csv   -- one row per item: answers, action, scores, reasoning
    evaluations_{date}.json  -- same data plus full breakdowns, structured JSON
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path

from declutter_advisor.engine.batch import ItemEvaluation, summarize_evaluations
from declutter_advisor.taxonomy.disposition_taxonomy import ACTION_LABELS, ALL_ACTIONS

logger = logging.getLogger(__name__)

_ANSWER_COLUMNS = ["used", "sentimental", "condition", "value", "replace", "space"]


def write_evaluations_csv(
    evaluations: list[ItemEvaluation],
    output_dir:  Path,
    run_date:    date | None = None,
) -> Path:
    """Write one CSV row per evaluated item.

    Columns: name, the six answer fields, recommendation, label, max_score,
             tied, strategy, one ``score_<action>`` column per action,
             reasoning.

    Args:
        evaluations: Output of ``evaluate_items()``.
        output_dir:  Directory to write into (created if missing).
        run_date:    Date label for the filename. Defaults to today.

    Returns:
        Path to the written CSV file.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    csv_path = output_dir / f"evaluations_{run_date}.csv"

    fieldnames = (
        ["name"]
        + _ANSWER_COLUMNS
        + ["recommendation", "label", "max_score", "tied", "strategy"]
        + [f"score_{a.value}" for a in ALL_ACTIONS]
        + ["reasoning"]
    )

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for ev in evaluations:
            report = ev.report
            row = {
                "name":           ev.answers.name or "",
                "recommendation": report.recommendation.value,
                "label":          ACTION_LABELS[report.recommendation],
                "max_score":      report.max_score,
                "tied":           "|".join(a.value for a in report.tied_recommendations or []),
                "strategy":       report.strategy_used,
                "reasoning":      ev.reasoning,
            }
            for col in _ANSWER_COLUMNS:
                row[col] = getattr(ev.answers, col) or ""
            for action in ALL_ACTIONS:
                row[f"score_{action.value}"] = report.scores[action]
            writer.writerow(row)

    logger.info("Wrote %d evaluation(s) to %s", len(evaluations), csv_path)
    return csv_path


def write_evaluations_json(
    evaluations: list[ItemEvaluation],
    output_dir:  Path,
    run_date:    date | None = None,
) -> Path:
    """Write evaluations as structured JSON.

    Structure::

        {
          "generated_at": "...",
          "total_items": 3,
          "summary": {"keep": 1, "storage": 0, ...},
          "items": [
            {"name": "...", "answers": {...}, "reasoning": "...",
             "recommendation": "keep", "scores": {...}, "breakdown": {...}, ...}
          ]
        }

    Returns:
        Path to the written JSON file.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"evaluations_{run_date}.json"

    summary = summarize_evaluations(evaluations)
    payload = {
        "generated_at": datetime.now(tz=timezone.utc).isoformat(),
        "total_items":  len(evaluations),
        "summary":      {action.value: count for action, count in summary.items()},
        "items": [
            {
                "name":      ev.answers.name,
                "answers":   ev.answers.model_dump(exclude={"name"}),
                "reasoning": ev.reasoning,
                **ev.report.to_dict(),
            }
            for ev in evaluations
        ],
    }

    json_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    logger.info("Wrote %d evaluation(s) to %s", len(evaluations), json_path)
    return json_path
