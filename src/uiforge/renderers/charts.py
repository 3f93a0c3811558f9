"""Chart series for reports.

Charts are plain data (ChartData). Markdown and HTML renderings turn them
into bar lists; the json format emits the series as-is.
"""

from collections.abc import Iterable

from uiforge.models.analysis import AnalysisResult, ComponentInfo, ComponentType, DependencyInfo
from uiforge.models.migration import MigrationResult
from uiforge.models.report import ChartData

COMPLEXITY_COLORS = ["#28a745", "#ffc107", "#dc3545"]
DEPENDENCY_COLORS = ["#007bff", "#6c757d"]
COMPONENT_TYPE_COLORS = ["#17a2b8", "#6610f2", "#fd7e14"]
MIGRATION_COLORS = ["#28a745", "#dc3545"]


def complexity_distribution(components: Iterable[ComponentInfo]) -> dict[str, int]:
    """Count components per complexity level (low, medium, high)."""
    counts = {"low": 0, "medium": 0, "high": 0}
    for component in components:
        counts[component.complexity.level] += 1
    return counts


def type_distribution(components: Iterable[ComponentInfo]) -> dict[str, int]:
    """Count components per classification (component, page, hook)."""
    counts = {component_type.value: 0 for component_type in ComponentType}
    for component in components:
        counts[component.type.value] += 1
    return counts


def complexity_chart(components: Iterable[ComponentInfo]) -> ChartData:
    counts = complexity_distribution(components)
    return ChartData(
        chart_id="complexity-distribution",
        title="Complexity Distribution",
        labels=["Low", "Medium", "High"],
        data=[counts["low"], counts["medium"], counts["high"]],
        colors=list(COMPLEXITY_COLORS),
    )


def dependency_chart(dependencies: Iterable[DependencyInfo]) -> ChartData:
    production = development = 0
    for dependency in dependencies:
        if dependency.is_dev:
            development += 1
        else:
            production += 1
    return ChartData(
        chart_id="dependency-breakdown",
        title="Dependencies",
        labels=["Production", "Development"],
        data=[production, development],
        colors=list(DEPENDENCY_COLORS),
    )


def component_type_chart(components: Iterable[ComponentInfo]) -> ChartData:
    counts = type_distribution(components)
    return ChartData(
        chart_id="component-types",
        title="Component Types",
        labels=["Components", "Pages", "Hooks"],
        data=[counts["component"], counts["page"], counts["hook"]],
        colors=list(COMPONENT_TYPE_COLORS),
    )


def migration_chart(result: MigrationResult) -> ChartData:
    return ChartData(
        chart_id="migration-phases",
        title="Migration Phases",
        labels=["Completed", "Failed"],
        data=[len(result.completed_phases), len(result.failed_phases)],
        colors=list(MIGRATION_COLORS),
    )


def analysis_charts(analysis: AnalysisResult) -> list[ChartData]:
    """Standard chart set for analysis-based reports."""
    return [
        complexity_chart(analysis.components),
        dependency_chart(analysis.dependencies),
        component_type_chart(analysis.components),
    ]


def chart_points(chart: ChartData) -> list[dict[str, object]]:
    """Flatten a chart into label/value/color/percent rows for templates.

    Percentages are relative to the chart total and rounded to integers;
    an all-zero chart yields 0 for every row.
    """
    total = sum(chart.data)
    return [
        {
            "label": label,
            "value": value,
            "color": color,
            "percent": round(100 * value / total) if total else 0,
        }
        for label, value, color in zip(chart.labels, chart.data, chart.colors, strict=False)
    ]
