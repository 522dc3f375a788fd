"""
Recommendation decision engine: turns questionnaire answers, a personality
profile and runtime settings into one of six dispositions with a score
breakdown and a human-readable justification.

Modules
-------
defaults   : DEFAULT_WEIGHTS, DEFAULT_THRESHOLDS, BUILTIN_STRATEGIES,
             DEFAULT_STRATEGY_CATALOG: read-only built-in configuration.
strategy   : apply_strategy_multipliers() + select_strategy() (A/B assignment).
scorer     : aggregate_factor_scores() + apply_profile_adjustments()
             + resolve_tie(): pure functions, no I/O.
reasoning  : build_reasoning(): fixed sentence templates per action.
classifier : classify() + classify_with_details() + ClassificationReport.
batch      : ItemEvaluation + evaluate_items() + summarize_evaluations().
reporter   : write_evaluations_csv() + write_evaluations_json(): file output.
"""
