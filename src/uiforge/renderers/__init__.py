"""Report rendering helpers: charts and text filters."""

from uiforge.renderers.charts import analysis_charts, chart_points, complexity_distribution, type_distribution
from uiforge.renderers.filters import escape_html_context, to_plain_text

__all__ = [
    "analysis_charts",
    "chart_points",
    "complexity_distribution",
    "escape_html_context",
    "to_plain_text",
    "type_distribution",
]
