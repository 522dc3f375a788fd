"""
Declutter Advisor CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Read and validate inputs (answers, profile, settings store).
  4. Run the decision engine.
  5. Report result to stdout.

Install and run::

    pip install -e .
    declutter-advisor --help
    declutter-advisor validate-config
    declutter-advisor classify --name "Old lamp" --used rarely --condition fair
    declutter-advisor classify --answers item.json --profile profile.json --details
    declutter-advisor classify-batch items.csv --format json
    declutter-advisor list-strategies
    declutter-advisor export-defaults --output settings.json
"""

from __future__ import annotations

import csv
import json
import tomllib
from pathlib import Path
from typing import Any, Optional

import typer

app = typer.Typer(
    name="declutter-advisor",
    help="Household decluttering assistant: recommendation engine CLI.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _config_or_exit(config_path: Optional[str]):
    """Load and configure: AppConfig plus logging. Exits 1 on a bad config."""
    from pydantic import ValidationError

    from declutter_advisor.config import load_config
    from declutter_advisor.utils.logging import configure_logging

    try:
        config = load_config(Path(config_path) if config_path else None)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except tomllib.TOMLDecodeError as exc:
        typer.echo(f"[ERROR] Config file is not valid TOML: {exc}", err=True)
        raise typer.Exit(code=1)
    except ValidationError as exc:
        typer.echo(f"[ERROR] Invalid configuration ({exc.error_count()} error(s)):\n{exc}", err=True)
        raise typer.Exit(code=1)

    configure_logging(config.logging)
    return config


def _read_json_or_exit(path: str, what: str) -> Any:
    """Read a JSON input file, exiting with code 1 on any problem."""
    file_path = Path(path)
    if not file_path.exists():
        typer.echo(f"[ERROR] {what} file not found: {file_path}", err=True)
        raise typer.Exit(code=1)
    try:
        return json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        typer.echo(f"[ERROR] {what} file is not valid JSON: {exc}", err=True)
        raise typer.Exit(code=1)


def _read_object_or_exit(path: Optional[str], what: str) -> Optional[dict[str, Any]]:
    if path is None:
        return None
    data = _read_json_or_exit(path, what)
    if not isinstance(data, dict):
        typer.echo(f"[ERROR] {what} file must contain a JSON object.", err=True)
        raise typer.Exit(code=1)
    return data


def _resolve_settings(config, settings_path, user_id, strategy):
    """Load engine settings from the settings store (never fails)."""
    from declutter_advisor.store.settings_loader import load_engine_settings

    path = settings_path or config.engine.settings_file
    return load_engine_settings(
        Path(path) if path else None,
        user_id=user_id,
        strategy_key=strategy or config.engine.default_strategy,
    )


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Also dump every config field as JSON.",
    ),
) -> None:
    """Load the layered configuration and print the effective values.

    Exit code 1 when the file is missing or a value is invalid.
    """
    config = _config_or_exit(config_path)

    typer.echo("Effective configuration:")
    typer.echo(f"  Settings file:    {config.engine.settings_file or '(built-in defaults)'}")
    typer.echo(f"  Forced strategy:  {config.engine.default_strategy or '(none)'}")
    typer.echo(f"  Output dir:       {config.output.output_dir}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo(json.dumps(config.model_dump(), indent=2))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("classify")
def classify_item(
    answers_file: Optional[str] = typer.Option(
        None,
        "--answers",
        help="JSON file with questionnaire answers (name, used, sentimental, ...).",
    ),
    name: Optional[str] = typer.Option(None, "--name", help="Item name."),
    used: Optional[str] = typer.Option(None, "--used", help="yes | rarely | no"),
    sentimental: Optional[str] = typer.Option(None, "--sentimental", help="high | some | none"),
    condition: Optional[str] = typer.Option(
        None, "--condition", help="excellent | good | fair | poor"
    ),
    value: Optional[str] = typer.Option(None, "--value", help="high | medium | low"),
    replace: Optional[str] = typer.Option(None, "--replace", help="difficult | moderate | easy"),
    space: Optional[str] = typer.Option(None, "--space", help="yes | limited | no"),
    profile_file: Optional[str] = typer.Option(
        None,
        "--profile",
        help="JSON file with the personality profile (minimalistLevel, ...).",
    ),
    settings_path: Optional[str] = typer.Option(
        None,
        "--settings",
        help="Settings store export (JSON). Overrides [engine] settings_file.",
    ),
    user_id: Optional[int] = typer.Option(
        None,
        "--user-id",
        help="User id for A/B strategy assignment.",
    ),
    strategy: Optional[str] = typer.Option(
        None,
        "--strategy",
        help="Force a strategy key (e.g. minimalist). Skips A/B assignment.",
    ),
    details: bool = typer.Option(
        False,
        "--details",
        help="Show score table and per-factor breakdown.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the full-detail report as JSON.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Recommend what to do with one item.

    Answers come from --answers, from the individual options, or both
    (options override the file).
    """
    from declutter_advisor.engine.classifier import classify_with_details
    from declutter_advisor.engine.reasoning import build_reasoning
    from declutter_advisor.models.item import ItemAnswers, PersonalityProfile
    from declutter_advisor.reporting.formatters import (
        format_recommendation,
        format_report_details,
    )

    config = _config_or_exit(config_path)

    raw_answers = _read_object_or_exit(answers_file, "Answers") or {}
    overrides = {
        "name": name, "used": used, "sentimental": sentimental,
        "condition": condition, "value": value, "replace": replace, "space": space,
    }
    raw_answers.update({k: v for k, v in overrides.items() if v is not None})

    answers = ItemAnswers.coerce(raw_answers)
    profile = PersonalityProfile.coerce(_read_object_or_exit(profile_file, "Profile"))
    settings = _resolve_settings(config, settings_path, user_id, strategy)

    report = classify_with_details(answers, profile, settings)
    reasoning = build_reasoning(report.recommendation, answers, profile)

    if as_json:
        payload = report.to_dict()
        payload["reasoning"] = reasoning
        typer.echo(json.dumps(payload, indent=2))
        return

    typer.echo(format_recommendation(report, reasoning))
    if details:
        typer.echo("")
        typer.echo(format_report_details(report, answers))


@app.command("classify-batch")
def classify_batch(
    items_file: str = typer.Argument(
        ...,
        help="Items to evaluate: JSON array of answer objects, or CSV with a header row.",
    ),
    profile_file: Optional[str] = typer.Option(
        None,
        "--profile",
        help="JSON file with the personality profile.",
    ),
    settings_path: Optional[str] = typer.Option(
        None,
        "--settings",
        help="Settings store export (JSON). Overrides [engine] settings_file.",
    ),
    user_id: Optional[int] = typer.Option(None, "--user-id", help="User id for A/B assignment."),
    strategy: Optional[str] = typer.Option(None, "--strategy", help="Force a strategy key."),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        help="Directory for report files. Overrides [output] output_dir.",
    ),
    fmt: str = typer.Option(
        "csv",
        "--format",
        help="Report format: csv or json.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Evaluate many items and write a CSV or JSON report."""
    from declutter_advisor.engine.batch import evaluate_items
    from declutter_advisor.engine.reporter import (
        write_evaluations_csv,
        write_evaluations_json,
    )
    from declutter_advisor.models.item import PersonalityProfile
    from declutter_advisor.reporting.formatters import format_batch_summary

    config = _config_or_exit(config_path)

    fmt = fmt.lower()
    if fmt not in ("csv", "json"):
        typer.echo(f"[ERROR] --format must be 'csv' or 'json', got '{fmt}'.", err=True)
        raise typer.Exit(code=1)

    items_path = Path(items_file)
    if not items_path.exists():
        typer.echo(f"[ERROR] Items file not found: {items_path}", err=True)
        raise typer.Exit(code=1)

    if items_path.suffix.lower() == ".csv":
        with items_path.open(newline="", encoding="utf-8") as f:
            items: Any = list(csv.DictReader(f))
    else:
        items = _read_json_or_exit(items_file, "Items")
        if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
            typer.echo("[ERROR] JSON items file must contain an array of objects.", err=True)
            raise typer.Exit(code=1)

    profile = PersonalityProfile.coerce(_read_object_or_exit(profile_file, "Profile"))
    settings = _resolve_settings(config, settings_path, user_id, strategy)

    evaluations = evaluate_items(items, profile, settings)

    target_dir = Path(output_dir or config.output.output_dir)
    if fmt == "json":
        out_path = write_evaluations_json(evaluations, target_dir)
    else:
        out_path = write_evaluations_csv(evaluations, target_dir)

    typer.echo(format_batch_summary(evaluations))
    typer.echo(f"  Report: {out_path}")
    typer.echo("[OK] Batch evaluation complete.")


@app.command("list-strategies")
def list_strategies(
    settings_path: Optional[str] = typer.Option(
        None,
        "--settings",
        help="Settings store export (JSON). Overrides [engine] settings_file.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """List scoring strategies and their per-factor multipliers."""
    from declutter_advisor.reporting.formatters import format_strategy_table
    from declutter_advisor.store.settings_loader import load_strategy_catalog

    config = _config_or_exit(config_path)

    path = settings_path or config.engine.settings_file
    catalog = load_strategy_catalog(Path(path) if path else None)

    typer.echo(format_strategy_table(catalog.strategies, catalog.active))
    if catalog.ab_test_enabled:
        typer.echo(
            f"  A/B test: users with id % 100 >= {catalog.ab_test_percentage:g} "
            f"get '{catalog.ab_test_alternate or catalog.active}'"
        )


@app.command("export-defaults")
def export_defaults(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        help="Write the default settings document here instead of stdout.",
    ),
) -> None:
    """Print (or write) the built-in settings document.

    The output is the payload for resetting a settings store to defaults and
    can be passed back in with --settings.
    """
    from declutter_advisor.store.settings_loader import default_settings_document

    text = json.dumps(default_settings_document(), indent=2)
    if output is None:
        typer.echo(text)
        return

    out_path = Path(output)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(text + "\n", encoding="utf-8")
    typer.echo(f"[OK] Default settings written to {out_path}")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
