"""Reporting Engine: health, migration, architecture and executive reports.

All four reports share one pipeline:

1. Build a plain data context from an AnalysisResult or MigrationResult.
2. Render it in the configured format:
   - json: ``json.dumps`` of the context plus chart series
   - markdown: report template + charts + recommendations sections
   - plain: the markdown rendering passed through ``to_plain_text``
   - html: HTML fragment templates on an escaped context, wrapped in the
     Jinja2 page shell

Large projects (more than ``summary_threshold`` components) are summarized:
counts and distributions only, with no per-component names.

Every ``generate_*`` method returns a string and never raises; failures
produce an error report. The ``build_*`` counterparts return ReportResult.
"""

import json
import logging
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from uiforge.analyzers.filesystem import FileSystem, LocalFileSystem
from uiforge.exceptions import ReportDataError
from uiforge.models.analysis import AnalysisResult, ComponentInfo, ComponentType
from uiforge.models.migration import MigrationPhase, MigrationResult, MigrationState, RiskLevel
from uiforge.models.report import (
    ChartData,
    HealthStatus,
    Recommendation,
    ReportingContext,
    ReportKind,
    ReportResult,
)
from uiforge.renderers.charts import (
    analysis_charts,
    chart_points,
    complexity_distribution,
    migration_chart,
    type_distribution,
)
from uiforge.renderers.filters import collapse_blank_lines, escape_html_context, to_plain_text
from uiforge.templates.library import TemplateLibrary
from uiforge.templates.processor import TemplateProcessor
from uiforge.templates.renderer import HtmlReportRenderer, format_datetime

logger = logging.getLogger(__name__)

INVALID_DATA = "Invalid analysis data"
ERROR_HEADING = "Error generating report"

DEFAULT_TITLES = {
    ReportKind.HEALTH: "Health Report",
    ReportKind.MIGRATION: "Migration Report",
    ReportKind.ARCHITECTURE: "Architecture Report",
    ReportKind.EXECUTIVE: "Executive Summary",
}

SCORE_LABELS = [
    ("overall", "Overall"),
    ("code_quality", "Code Quality"),
    ("security", "Security"),
    ("performance", "Performance"),
    ("accessibility", "Accessibility"),
    ("maintainability", "Maintainability"),
    ("test_coverage", "Test Coverage"),
    ("documentation", "Documentation"),
]

GOD_COMPONENT_DEPENDENCIES = 5
TIGHT_COUPLING_IMPORTS = 3
MAX_FINDINGS = 10

PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}
RISK_ORDER = [RiskLevel.LOW, RiskLevel.MEDIUM, RiskLevel.HIGH]


@dataclass
class _ReportData:
    """Everything the renderer needs for one report."""

    kind: ReportKind
    context: dict[str, Any]
    generated_at: datetime
    charts: list[ChartData] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)


def technical_debt(maintainability: int, code_quality: int) -> str:
    """Technical debt label from maintainability and code quality.

    Examples:
        >>> technical_debt(90, 80)
        'Low'
        >>> technical_debt(50, 40)
        'High'
    """
    average = (maintainability + code_quality) / 2
    if average >= 80:
        return "Low"
    if average >= 60:
        return "Medium"
    return "High"


def _cap(findings: list[str]) -> list[str]:
    if len(findings) <= MAX_FINDINGS:
        return findings
    return findings[:MAX_FINDINGS] + [f"... and {len(findings) - MAX_FINDINGS} more"]


def _framework_label(analysis: AnalysisResult) -> str:
    framework = analysis.framework
    return f"{framework.name} {framework.version}".strip()


def _dependency_label(name: str, version: str | None) -> str:
    return f"{name}@{version}" if version else name


class ReportingEngine:
    """Renders reports from analysis and migration results.

    Usage:
        engine = ReportingEngine(ReportingContext(output_format="html"))
        html = engine.generate_health_report(analysis)
        engine.export_report(html, "reports/health.html")
    """

    def __init__(
        self,
        context: ReportingContext | None = None,
        filesystem: FileSystem | None = None,
        library: TemplateLibrary | None = None,
        processor: TemplateProcessor | None = None,
        renderer: HtmlReportRenderer | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            context: Output format, detail level and branding
            filesystem: I/O collaborator for export_report()
            library: Template table
            processor: Template processor for report bodies
            renderer: Jinja2 HTML shell renderer
        """
        self.context = context or ReportingContext()
        self.filesystem = filesystem or LocalFileSystem()
        self.library = library or TemplateLibrary()
        self.processor = processor or TemplateProcessor()
        self.renderer = renderer or HtmlReportRenderer()

    # =========================================================================
    # Public API
    # =========================================================================

    def generate_health_report(self, analysis: AnalysisResult) -> str:
        """Render the health report for an analysis."""
        return self.build_health_report(analysis).content

    def generate_migration_report(
        self,
        result: MigrationResult,
        phases: list[MigrationPhase] | None = None,
    ) -> str:
        """Render the migration report for a migration run."""
        return self.build_migration_report(result, phases).content

    def generate_architecture_report(self, analysis: AnalysisResult) -> str:
        """Render the architecture report for an analysis."""
        return self.build_architecture_report(analysis).content

    def generate_executive_summary(
        self,
        analysis: AnalysisResult,
        migration: MigrationResult | None = None,
    ) -> str:
        """Render the executive summary, optionally including a migration."""
        return self.build_executive_summary(analysis, migration).content

    def build_health_report(self, analysis: AnalysisResult) -> ReportResult:
        return self._build(
            ReportKind.HEALTH,
            isinstance(analysis, AnalysisResult),
            lambda: self._health_data(analysis),
        )

    def build_migration_report(
        self,
        result: MigrationResult,
        phases: list[MigrationPhase] | None = None,
    ) -> ReportResult:
        return self._build(
            ReportKind.MIGRATION,
            isinstance(result, MigrationResult),
            lambda: self._migration_data(result, phases),
        )

    def build_architecture_report(self, analysis: AnalysisResult) -> ReportResult:
        return self._build(
            ReportKind.ARCHITECTURE,
            isinstance(analysis, AnalysisResult),
            lambda: self._architecture_data(analysis),
        )

    def build_executive_summary(
        self,
        analysis: AnalysisResult,
        migration: MigrationResult | None = None,
    ) -> ReportResult:
        valid = isinstance(analysis, AnalysisResult) and (migration is None or isinstance(migration, MigrationResult))
        return self._build(
            ReportKind.EXECUTIVE,
            valid,
            lambda: self._executive_data(analysis, migration),
        )

    def export_report(self, content: str, relative_path: str | Path) -> Path:
        """Write report content below the project path.

        Args:
            content: Rendered report
            relative_path: Destination relative to ``context.project_path``

        Returns:
            Absolute path written

        Raises:
            OSError: If the directory or file cannot be written
        """
        destination = Path(self.context.project_path) / relative_path
        self.filesystem.mkdir(destination.parent)
        self.filesystem.write_text(destination, content)
        logger.info("Exported report to %s", destination)
        return destination

    # =========================================================================
    # Pipeline
    # =========================================================================

    def _build(self, kind: ReportKind, valid: bool, collect: Callable[[], _ReportData]) -> ReportResult:
        try:
            if not valid:
                raise ReportDataError(INVALID_DATA)
            data = collect()
            content = self._render(data)
        except ReportDataError as e:
            logger.warning("Cannot build %s report: %s", kind.value, e)
            return self._error_result(kind, str(e))
        except Exception as e:
            logger.error("Failed to generate %s report: %s", kind.value, e)
            return self._error_result(kind, str(e))

        logger.debug("Rendered %s report as %s (%d characters)", kind.value, self.context.output_format, len(content))
        return ReportResult(kind=kind, content=content)

    def _error_result(self, kind: ReportKind, message: str) -> ReportResult:
        if self.context.output_format == "json":
            content = json.dumps({"error": ERROR_HEADING, "message": message, "report": kind.value}, indent=2)
        else:
            content = f"{ERROR_HEADING}: {message}\n"
        return ReportResult(kind=kind, content=content, success=False, errors=[message])

    def _title(self, kind: ReportKind) -> str:
        branding = self.context.branding
        if branding is not None and branding.report_title:
            return branding.report_title
        return DEFAULT_TITLES[kind]

    def _render(self, data: _ReportData) -> str:
        output_format = self.context.output_format
        include_recommendations = self.context.include_recommendations

        if output_format == "json":
            payload = dict(data.context)
            payload["charts"] = [chart.to_dict() for chart in data.charts]
            if include_recommendations:
                payload["recommendations"] = [r.to_dict() for r in data.recommendations]
            return json.dumps(payload, indent=2, default=str)

        variant = "html" if output_format == "html" else "markdown"
        context = {
            **data.context,
            "charts": [
                {"title": chart.title, "chart_id": chart.chart_id, "points": chart_points(chart)}
                for chart in data.charts
            ]
            if self.context.include_charts
            else [],
            "recommendations": [r.to_dict() for r in data.recommendations] if include_recommendations else [],
        }
        if variant == "html":
            context = escape_html_context(context)

        body = "".join(
            self.processor.render(self.library.get(kind, variant), context)
            for kind in (f"{data.kind.value}-report", "charts-section", "recommendations-section")
        )
        body = collapse_blank_lines(body).rstrip() + "\n"

        if output_format == "plain":
            return to_plain_text(body)
        if output_format == "html":
            return self.renderer.render(
                body,
                title=data.context["title"],
                branding=self.context.branding,
                generated_at=data.generated_at,
            )
        return body

    # =========================================================================
    # Shared context pieces
    # =========================================================================

    def _summarize(self, analysis: AnalysisResult) -> bool:
        return (
            len(analysis.components) > self.context.summary_threshold
            or self.context.detail_level == "summary"
        )

    def _base_context(self, kind: ReportKind, analysis: AnalysisResult) -> dict[str, Any]:
        overall = analysis.quality.overall
        status = HealthStatus.from_score(overall)
        return {
            "title": self._title(kind),
            "project": {
                "name": analysis.project_name or analysis.root.name,
                "version": analysis.project_version,
            },
            "generated_at": format_datetime(analysis.timestamp),
            "framework": {
                "name": analysis.framework.name,
                "version": analysis.framework.version,
                "type": analysis.framework.type,
                "label": _framework_label(analysis),
            },
            "status": {"key": status.value, "label": status.label, "score": overall},
            "types": type_distribution(analysis.components),
            "complexity": complexity_distribution(analysis.components),
        }

    @staticmethod
    def _quality(analysis: AnalysisResult) -> dict[str, int]:
        quality = analysis.quality
        return {key: getattr(quality, key) for key, _ in SCORE_LABELS}

    @staticmethod
    def _findings(
        components: list[ComponentInfo],
        issues_of: Callable[[ComponentInfo], list[str]],
        summarized: bool,
    ) -> list[dict[str, str]]:
        """Per-component findings, or per-issue counts when summarized."""
        if summarized:
            counts = Counter(issue for component in components for issue in set(issues_of(component)))
            return [
                {"subject": issue, "detail": f"{count} component{'s' if count != 1 else ''}"}
                for issue, count in sorted(counts.items(), key=lambda item: (-item[1], item[0]))
            ]
        return [
            {"subject": component.name, "detail": "; ".join(issues_of(component))}
            for component in components
            if issues_of(component)
        ]

    def _smells(self, analysis: AnalysisResult, summarized: bool) -> list[dict[str, Any]]:
        graph = analysis.component_graph()

        god = [
            f"{c.name} ({len(c.dependencies)} dependencies)"
            for c in analysis.components
            if len(c.dependencies) > GOD_COMPONENT_DEPENDENCIES
        ]
        circular: list[str] = []
        for name, imports in graph.items():
            for other in imports:
                if name < other and name in graph.get(other, []):
                    circular.append(f"{name} <-> {other}")
        coupling = [
            f"{name} (imports {len(imports)} components)"
            for name, imports in graph.items()
            if len(imports) >= TIGHT_COUPLING_IMPORTS
        ]

        issues: list[dict[str, Any]] = []
        for kind, findings in (
            ("God Components", god),
            ("Circular Dependencies", circular),
            ("Tight Coupling", coupling),
        ):
            if not findings:
                continue
            if summarized:
                findings = _cap(findings)
            issues.append({"kind": kind, "findings": findings, "count": len(findings)})
        return issues

    def _recommendations(
        self,
        analysis: AnalysisResult | None,
        migration: MigrationResult | None = None,
        issues: list[dict[str, Any]] | None = None,
    ) -> list[Recommendation]:
        """Rule-based recommendations, highest priority first."""
        recs: list[Recommendation] = []

        if analysis is not None:
            quality = analysis.quality
            high_complexity = complexity_distribution(analysis.components)["high"]
            if quality.security < 80:
                recs.append(Recommendation(
                    "rec-security", "high", "security", "Address security findings",
                    f"Security scored {quality.security}/100; remove risky constructs and pin dependency versions.",
                ))
            if quality.accessibility < 80:
                recs.append(Recommendation(
                    "rec-accessibility", "high", "accessibility", "Improve accessibility",
                    f"Accessibility scored {quality.accessibility}/100; add ARIA attributes, roles and keyboard handlers.",
                ))
            if quality.test_coverage < 60:
                recs.append(Recommendation(
                    "rec-testing", "medium", "testing", "Increase test coverage",
                    f"Only {quality.test_coverage}% of components have a matching test file.",
                ))
            if quality.code_quality < 70 or high_complexity:
                recs.append(Recommendation(
                    "rec-complexity", "medium", "code-quality", "Reduce component complexity",
                    f"{high_complexity} components exceed the complexity threshold; split them into smaller pieces.",
                ))
            if quality.documentation < 50:
                recs.append(Recommendation(
                    "rec-documentation", "low", "documentation", "Document components",
                    f"Documentation scored {quality.documentation}/100; add JSDoc blocks and a README.",
                ))
            if quality.performance < 70:
                recs.append(Recommendation(
                    "rec-performance", "medium", "performance", "Review bundle size",
                    f"Performance scored {quality.performance}/100; audit production dependencies.",
                ))

        for issue in issues or []:
            if issue["kind"] == "God Components":
                recs.append(Recommendation(
                    "rec-god-components", "medium", "architecture", "Break up large components",
                    f"{issue['count']} components have more than {GOD_COMPONENT_DEPENDENCIES} dependencies.",
                ))
            elif issue["kind"] == "Circular Dependencies":
                recs.append(Recommendation(
                    "rec-circular", "high", "architecture", "Remove circular imports",
                    f"{issue['count']} component pairs import each other.",
                ))

        if migration is not None and not migration.success:
            recs.append(Recommendation(
                "rec-migration", "high", "migration", "Review the failed migration",
                "One or more phases failed; inspect the errors and consider rolling back from the backup.",
            ))

        return sorted(recs, key=lambda r: PRIORITY_ORDER[r.priority])

    # =========================================================================
    # Report contexts
    # =========================================================================

    def _health_data(self, analysis: AnalysisResult) -> _ReportData:
        summarized = self._summarize(analysis)
        quality = analysis.quality
        components = analysis.components
        production = analysis.production_dependencies
        development = analysis.dev_dependencies
        average = sum(c.complexity.cyclomatic for c in components) / len(components) if components else 0.0

        context = self._base_context(ReportKind.HEALTH, analysis)
        context.update({
            "summarized": summarized,
            "summary": {
                "component_count": len(components),
                "average_complexity": round(average, 1),
                "total_dependencies": len(analysis.dependencies),
                "production_dependencies": len(production),
                "development_dependencies": len(development),
            },
            "scores": [
                {
                    "key": key,
                    "label": label,
                    "value": getattr(quality, key),
                    "status": HealthStatus.from_score(getattr(quality, key)).label,
                }
                for key, label in SCORE_LABELS
            ],
            "quality": self._quality(analysis),
            "components": []
            if summarized
            else [
                {
                    "name": c.name,
                    "type": c.type.value,
                    "cyclomatic": c.complexity.cyclomatic,
                    "level": c.complexity.level,
                    "accessibility": c.accessibility.score,
                    "prop_count": len(c.props),
                }
                for c in components
            ],
            "dependencies": {
                "production": [_dependency_label(d.name, d.version) for d in production],
                "development": [_dependency_label(d.name, d.version) for d in development],
            },
            "security": self._findings(components, lambda c: c.security_issues, summarized),
            "accessibility": self._findings(components, lambda c: c.accessibility.issues, summarized),
        })
        issues = self._smells(analysis, summarized)
        return _ReportData(
            kind=ReportKind.HEALTH,
            context=context,
            generated_at=analysis.timestamp,
            charts=analysis_charts(analysis),
            recommendations=self._recommendations(analysis, issues=issues),
        )

    def _architecture_data(self, analysis: AnalysisResult) -> _ReportData:
        summarized = self._summarize(analysis)
        graph = analysis.component_graph()
        edges = sum(len(imports) for imports in graph.values())
        architecture = analysis.architecture
        hooks = analysis.components_of_type(ComponentType.HOOK)
        pages = analysis.components_of_type(ComponentType.PAGE)

        patterns = [
            {
                "name": "Component-Based Architecture",
                "description": f"{len(analysis.components)} components in a {architecture.structure} layout",
            }
        ]
        if hooks:
            patterns.append({"name": "Hooks Pattern", "description": f"{len(hooks)} custom hooks share stateful logic"})
        if architecture.routing != "none" or pages:
            routing = architecture.routing if architecture.routing != "none" else "page components"
            patterns.append({"name": "Page-based Routing", "description": f"Routes defined by {routing}"})
        if edges:
            patterns.append(
                {"name": "Component Composition", "description": f"{edges} internal imports between components"}
            )
        if architecture.typescript:
            patterns.append({"name": "TypeScript", "description": "Typed props and components"})
        if architecture.state_management:
            patterns.append(
                {"name": "State Management", "description": ", ".join(architecture.state_management)}
            )

        issues = self._smells(analysis, summarized)
        context = self._base_context(ReportKind.ARCHITECTURE, analysis)
        context.update({
            "summarized": summarized,
            "architecture": {
                "routing": architecture.routing,
                "styling": architecture.styling,
                "typescript": "Yes" if architecture.typescript else "No",
                "structure": architecture.structure,
                "state_management": list(architecture.state_management),
                "directories": list(architecture.directories),
            },
            "summary": {"component_count": len(analysis.components), "edge_count": edges},
            "graph": []
            if summarized
            else [{"name": name, "imports": imports} for name, imports in graph.items() if imports],
            "patterns": patterns,
            "issues": issues,
        })
        return _ReportData(
            kind=ReportKind.ARCHITECTURE,
            context=context,
            generated_at=analysis.timestamp,
            charts=analysis_charts(analysis),
            recommendations=self._recommendations(None, issues=issues),
        )

    def _executive_data(self, analysis: AnalysisResult, migration: MigrationResult | None) -> _ReportData:
        quality = analysis.quality
        high_complexity = complexity_distribution(analysis.components)["high"]
        vulnerabilities = sum(len(c.security_issues) for c in analysis.components)
        debt = technical_debt(quality.maintainability, quality.code_quality)

        risks: list[dict[str, str]] = []
        if vulnerabilities:
            risks.append({"level": "High", "description": f"{vulnerabilities} risky constructs in component code"})
        if quality.security < 70:
            risks.append({"level": "High", "description": f"Security score is {quality.security}/100"})
        if migration is not None and not migration.success:
            risks.append({"level": "High", "description": f"{len(migration.failed_phases)} migration phases failed"})
        if high_complexity:
            risks.append({"level": "Medium", "description": f"{high_complexity} components have high complexity"})
        if quality.accessibility < 70:
            risks.append({"level": "Medium", "description": f"Accessibility score is {quality.accessibility}/100"})
        if debt == "High":
            risks.append({"level": "Medium", "description": "Technical debt is high"})
        if quality.test_coverage < 50:
            risks.append({"level": "Low", "description": f"Test coverage is {quality.test_coverage}%"})

        context = self._base_context(ReportKind.EXECUTIVE, analysis)
        context.update({
            "quality": self._quality(analysis),
            "metrics": {
                "total_components": len(analysis.components),
                "dependencies": len(analysis.dependencies),
                "high_complexity": high_complexity,
                "security_vulnerabilities": vulnerabilities,
                "technical_debt": debt,
            },
            "migration": None
            if migration is None
            else {
                "status": "Success" if migration.success else "Failed",
                "completed": len(migration.completed_phases),
                "failed": len(migration.failed_phases),
                "modified": len(migration.modified_files),
            },
            "risks": risks,
        })
        charts = analysis_charts(analysis)
        if migration is not None:
            charts.append(migration_chart(migration))
        issues = self._smells(analysis, self._summarize(analysis))
        return _ReportData(
            kind=ReportKind.EXECUTIVE,
            context=context,
            generated_at=analysis.timestamp,
            charts=charts,
            recommendations=self._recommendations(analysis, migration, issues),
        )

    def _relative(self, path: Path) -> str:
        try:
            return str(Path(path).relative_to(self.context.project_path))
        except ValueError:
            return str(path)

    def _migration_data(self, result: MigrationResult, phases: list[MigrationPhase] | None) -> _ReportData:
        failed = set(result.failed_phases)
        completed = set(result.completed_phases)

        def outcome(phase_id: str) -> str:
            if phase_id in failed:
                return "Failed"
            if phase_id in completed:
                return "Completed"
            return "Not run"

        if phases is not None:
            rows = [
                {"id": p.id, "name": p.name, "risk": p.risk_level.value, "outcome": outcome(p.id)} for p in phases
            ]
            risks = [p.risk_level for p in phases]
        else:
            rows = [
                {"id": r.phase_id, "name": r.phase_id, "risk": "-", "outcome": outcome(r.phase_id)}
                for r in result.phase_results
            ]
            risks = []

        risk = max(risks, key=RISK_ORDER.index, default=RiskLevel.LOW)
        if result.failed_phases and risk == RiskLevel.LOW:
            risk = RiskLevel.MEDIUM
        if result.state == MigrationState.ABORTED:
            risk = RiskLevel.HIGH

        generated_at = datetime.now(UTC)
        summarized = len(result.modified_files) > self.context.summary_threshold
        context: dict[str, Any] = {
            "title": self._title(ReportKind.MIGRATION),
            "project": {"name": Path(self.context.project_path).resolve().name},
            "generated_at": format_datetime(generated_at),
            "status": "Success" if result.success else "Failed",
            "status_key": "success" if result.success else "failed",
            "state": result.state.value,
            "summary": {
                "completed": len(result.completed_phases),
                "failed": len(result.failed_phases),
                "modified": len(result.modified_files),
                "skipped": len(result.skipped_files),
                "errors": len(result.errors),
                "duration": f"{sum(r.duration_seconds for r in result.phase_results):.2f}s",
            },
            "risk_level": risk.value.capitalize(),
            "phases": rows,
            "completed_phases": list(result.completed_phases),
            "failed_phases": list(result.failed_phases),
            "modified_files": [] if summarized else [self._relative(p) for p in result.modified_files],
            "summarized": summarized,
            "errors": list(result.errors),
            "warnings": list(result.warnings),
            "rollback_recommended": bool(result.failed_phases),
            "backup_location": str(result.backup_location) if result.backup_location else None,
            "rollback_instructions": list(result.rollback_instructions),
        }
        return _ReportData(
            kind=ReportKind.MIGRATION,
            context=context,
            generated_at=generated_at,
            charts=[migration_chart(result)],
            recommendations=self._recommendations(None, result),
        )
