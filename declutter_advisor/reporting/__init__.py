"""
declutter_advisor.reporting: terminal output for CLI commands.

Modules:
  formatters : ASCII formatters for recommendations, score breakdowns,
               strategy tables and batch summaries.
"""
