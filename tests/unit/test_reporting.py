"""Unit tests for the Reporting Engine."""

import json
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from tests.fixtures.builders import make_analysis, make_component
from uiforge.engines.reporting import (
    ERROR_HEADING,
    INVALID_DATA,
    ReportingEngine,
    technical_debt,
)
from uiforge.models.analysis import AnalysisResult
from uiforge.models.migration import (
    MigrationPhase,
    MigrationResult,
    MigrationState,
    PhaseResult,
    RiskLevel,
)
from uiforge.models.report import Branding, ReportingContext, ReportKind
from uiforge.templates.library import TemplateLibrary

FIXED_TIME = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)


def engine(**kwargs) -> ReportingEngine:
    """Build a reporting engine rooted at /proj."""
    kwargs.setdefault("project_path", Path("/proj"))
    return ReportingEngine(ReportingContext(**kwargs))


def migration_result(success: bool = False, **kwargs) -> MigrationResult:
    """A two-phase run where the second phase failed."""
    defaults = {
        "success": success,
        "completed_phases": ["setup"] if not success else ["setup", "rename"],
        "failed_phases": [] if success else ["rename"],
        "modified_files": [Path("/proj/src/components/Button.tsx")],
        "skipped_files": [],
        "backup_location": Path("/proj/.migration-backup/backup-20240102T030405000000Z"),
        "warnings": [],
        "errors": [] if success else ["Validation failed for src/components/Button.tsx (t1)"],
        "phase_results": [PhaseResult("setup", True), PhaseResult("rename", success)],
        "rollback_instructions": [] if success else ["Run: uiforge rollback backup --repo /proj"],
    }
    defaults.update(kwargs)
    return MigrationResult(**defaults)


PHASES = [
    MigrationPhase(id="setup", name="Setup", risk_level=RiskLevel.LOW),
    MigrationPhase(id="rename", name="Rename props", risk_level=RiskLevel.HIGH),
]


class TestTechnicalDebt:
    """Tests for the technical debt label."""

    @pytest.mark.parametrize(
        ("maintainability", "code_quality", "label"),
        [(90, 80, "Low"), (80, 80, "Low"), (70, 60, "Medium"), (60, 60, "Medium"), (50, 40, "High")],
    )
    def test_thresholds(self, maintainability: int, code_quality: int, label: str) -> None:
        assert technical_debt(maintainability, code_quality) == label


class TestHealthReport:
    """Tests for the health report."""

    def test_markdown_sections(self, healthy_analysis: AnalysisResult) -> None:
        analysis = replace(healthy_analysis, timestamp=FIXED_TIME)

        content = engine().generate_health_report(analysis)

        assert content.startswith("# Health Report\n")
        assert "**Project:** demo-app v2.0.0" in content
        assert "**Generated:** 2024-01-02 03:04:05 UTC" in content
        assert "**Framework:** React 18.2.0" in content
        assert "**Overall Health:** Good (85/100)" in content
        assert "4 components analyzed" in content
        assert "| Code Quality | 90/100 | Excellent |" in content
        assert "| Test Coverage | 70/100 | Fair |" in content
        assert "- Hooks: 1" in content
        assert "- Average Complexity: 2.0" in content
        assert "| Button | component | 2 (low) | 90/100 | 1 |" in content
        assert "**Production:** react@18.2.0" in content
        assert "**Development:** typescript@5.3.0" in content
        assert "No risky constructs found." in content
        assert "## Recommendations" not in content
        assert "## Charts" not in content
        assert "{{" not in content

    def test_findings_and_recommendations(self, troubled_analysis: AnalysisResult) -> None:
        content = engine().generate_health_report(troubled_analysis)

        assert "**Overall Health:** Critical (55/100)" in content
        assert "- **Dashboard**: Uses dangerouslySetInnerHTML" in content
        assert "- **Dashboard**: Clickable <div> without role, tabIndex or aria attributes" in content
        assert "## Recommendations" in content
        assert "- **[high] Address security findings**: Security scored 70/100" in content

    def test_recommendations_ordered_by_priority(self, troubled_analysis: AnalysisResult) -> None:
        data = json.loads(engine(output_format="json").generate_health_report(troubled_analysis))

        assert [r["id"] for r in data["recommendations"]] == [
            "rec-security",
            "rec-accessibility",
            "rec-circular",
            "rec-testing",
            "rec-complexity",
            "rec-performance",
            "rec-god-components",
            "rec-documentation",
        ]

    def test_recommendations_can_be_disabled(self, troubled_analysis: AnalysisResult) -> None:
        content = engine(include_recommendations=False).generate_health_report(troubled_analysis)

        assert "## Recommendations" not in content

    def test_large_projects_are_summarized(self, troubled_analysis: AnalysisResult) -> None:
        """Test that no component names appear above the threshold."""
        content = engine(summary_threshold=2).generate_health_report(troubled_analysis)

        assert "_Per-component detail omitted for 4 components; see the distributions above._" in content
        assert "- **Uses dangerouslySetInnerHTML**: 1 component" in content
        assert "Dashboard" not in content
        assert "| Component |" not in content

    @pytest.mark.parametrize("output_format", ["plain", "markdown", "html", "json"])
    def test_thousand_components_show_counts_only(self, output_format: str) -> None:
        analysis = make_analysis([make_component(f"Component{i}") for i in range(1000)])

        content = engine(output_format=output_format).generate_health_report(analysis)

        assert "1000 components" in content
        assert "Component999" not in content

    def test_summary_detail_level(self, healthy_analysis: AnalysisResult) -> None:
        content = engine(detail_level="summary").generate_health_report(healthy_analysis)

        assert "| Button |" not in content

    def test_charts_section(self, healthy_analysis: AnalysisResult) -> None:
        content = engine(include_charts=True).generate_health_report(healthy_analysis)

        assert "## Charts" in content
        assert "- Low: 4 (100%)" in content
        assert "- Production: 1 (50%)" in content
        assert "- Pages: 1 (25%)" in content

    def test_empty_project(self) -> None:
        content = engine().generate_health_report(make_analysis([]))

        assert "0 components analyzed" in content
        assert "- Average Complexity: 0.0" in content

    def test_json(self, healthy_analysis: AnalysisResult) -> None:
        data = json.loads(engine(output_format="json").generate_health_report(healthy_analysis))

        assert data["title"] == "Health Report"
        assert data["status"] == {"key": "good", "label": "Good", "score": 85}
        assert data["summary"]["component_count"] == 4
        assert [c["id"] for c in data["charts"]] == ["complexity-distribution", "dependency-breakdown", "component-types"]
        assert data["recommendations"] == []

    def test_plain(self, healthy_analysis: AnalysisResult) -> None:
        content = engine(output_format="plain").generate_health_report(healthy_analysis)

        assert content.startswith("Health Report\n=============\n")
        assert "**" not in content
        assert "|" not in content
        assert "Overall Health: Good (85/100)" in content

    def test_html_escapes_content(self, troubled_analysis: AnalysisResult) -> None:
        analysis = replace(troubled_analysis, project_name="<b>acme</b>", timestamp=FIXED_TIME)

        content = engine(output_format="html").generate_health_report(analysis)

        assert content.startswith("<!DOCTYPE html>")
        assert "<title>Health Report</title>" in content
        assert "<h1>Health Report</h1>" in content
        assert "&lt;b&gt;acme&lt;/b&gt;" in content
        assert "<b>acme</b>" not in content
        assert "Clickable &lt;div&gt; without role" in content
        assert 'class="summary status-critical"' in content
        assert "Generated 2024-01-02 03:04:05 UTC" in content

    def test_html_branding(self, healthy_analysis: AnalysisResult) -> None:
        branding = Branding(company_name="Acme", report_title="Acme Review", primary_color="#112233")

        content = engine(output_format="html", branding=branding).generate_health_report(healthy_analysis)

        assert "<title>Acme Review</title>" in content
        assert "<strong>Acme</strong>" in content
        assert "--primary: #112233;" in content
        assert " for Acme</p>" in content

    def test_branding_title_in_markdown(self, healthy_analysis: AnalysisResult) -> None:
        content = engine(branding=Branding(report_title="Frontend Review")).generate_health_report(healthy_analysis)

        assert content.startswith("# Frontend Review\n")


class TestArchitectureReport:
    """Tests for the architecture report."""

    def test_graph_patterns_and_issues(self, troubled_analysis: AnalysisResult) -> None:
        content = engine().generate_architecture_report(troubled_analysis)

        assert content.startswith("# Architecture Report\n")
        assert "- Dashboard -> Chart, Table, Filters" in content
        assert "- Chart -> Dashboard" in content
        assert "- **Component-Based Architecture**: 4 components in a modular layout" in content
        assert "- **Component Composition**: 4 internal imports between components" in content
        assert "- **TypeScript**: Typed props and components" in content
        assert "### God Components" in content
        assert "- Dashboard (7 dependencies)" in content
        assert "- Chart <-> Dashboard" in content
        assert "- Dashboard (imports 3 components)" in content
        assert "- **[high] Remove circular imports**" in content

    def test_page_and_hook_patterns(self, healthy_analysis: AnalysisResult) -> None:
        content = engine().generate_architecture_report(healthy_analysis)

        assert "- **Hooks Pattern**: 1 custom hooks share stateful logic" in content
        assert "- **Page-based Routing**: Routes defined by page components" in content
        assert "## Architectural Issues" not in content

    def test_no_imports(self) -> None:
        content = engine().generate_architecture_report(make_analysis([make_component("Solo")]))

        assert "No internal component imports." in content

    def test_summarized_findings_are_capped(self) -> None:
        """Test that long smell lists end with a remainder line."""
        components = [make_component(f"Widget{i:02d}", dependencies=list("abcdef")) for i in range(12)]

        content = engine(summary_threshold=0).generate_architecture_report(make_analysis(components))

        assert "- Widget09 (6 dependencies)" in content
        assert "Widget10 (6 dependencies)" not in content
        assert "- ... and 2 more" in content
        assert "_0 internal imports across 12 components._" in content


class TestExecutiveSummary:
    """Tests for the executive summary."""

    def test_healthy_project(self, healthy_analysis: AnalysisResult) -> None:
        content = engine().generate_executive_summary(healthy_analysis)

        assert content.startswith("# Executive Summary\n")
        assert "Health Score: Good (85/100)" in content
        assert "- Total Components: 4" in content
        assert "- Technical Debt: Low" in content
        assert "- **Low**: No significant risks identified." in content
        assert "## Migration Status" not in content

    def test_risks(self, troubled_analysis: AnalysisResult) -> None:
        content = engine().generate_executive_summary(troubled_analysis)

        assert "- Technical Debt: High" in content
        assert "- Security Vulnerabilities: 1" in content
        assert "- **High**: 1 risky constructs in component code" in content
        assert "- **Medium**: 1 components have high complexity" in content
        assert "- **Medium**: Accessibility score is 55/100" in content
        assert "- **Medium**: Technical debt is high" in content
        assert "- **Low**: Test coverage is 20%" in content

    def test_with_failed_migration(self, healthy_analysis: AnalysisResult) -> None:
        content = engine().generate_executive_summary(healthy_analysis, migration_result())

        assert "## Migration Status" in content
        assert "- Migration Status: Failed" in content
        assert "- Failed Phases: 1" in content
        assert "- **High**: 1 migration phases failed" in content
        assert "- **[high] Review the failed migration**" in content

    def test_invalid_migration_argument(self, healthy_analysis: AnalysisResult) -> None:
        result = engine().build_executive_summary(healthy_analysis, {"success": True})  # type: ignore[arg-type]

        assert not result.success
        assert result.errors == [INVALID_DATA]


class TestMigrationReport:
    """Tests for the migration report."""

    def test_failed_run_with_phases(self) -> None:
        content = engine().generate_migration_report(migration_result(), PHASES)

        assert content.startswith("# Migration Report\n")
        assert "**Project:** proj" in content
        assert "- Migration Status: Failed" in content
        assert "- Completed Phases: 1" in content
        assert "- Risk Level: High" in content
        assert "| setup | Setup | low | Completed |" in content
        assert "| rename | Rename props | high | Failed |" in content
        assert "- `src/components/Button.tsx`" in content
        assert "- Validation failed for src/components/Button.tsx (t1)" in content
        assert "**Rollback recommended:** one or more phases failed." in content
        assert "Backup Location: `/proj/.migration-backup/backup-20240102T030405000000Z`" in content
        assert "- Run: uiforge rollback backup --repo /proj" in content

    def test_rows_from_phase_results(self) -> None:
        """Test that without phase definitions the risk is derived from failures."""
        content = engine().generate_migration_report(migration_result())

        assert "| rename | rename | - | Failed |" in content
        assert "- Risk Level: Medium" in content

    def test_aborted_run_is_high_risk(self) -> None:
        result = migration_result(state=MigrationState.ABORTED)

        assert "- Risk Level: High" in engine().generate_migration_report(result)

    def test_successful_run(self) -> None:
        content = engine().generate_migration_report(migration_result(success=True), PHASES)

        assert "- Migration Status: Success" in content
        assert "- Risk Level: High" in content
        assert "Rollback recommended" not in content
        assert "## Errors" not in content
        assert "## Recommendations" not in content

    def test_unknown_phase_outcome(self) -> None:
        phases = [*PHASES, MigrationPhase(id="cleanup", name="Cleanup")]

        content = engine().generate_migration_report(migration_result(), phases)

        assert "| cleanup | Cleanup | low | Not run |" in content

    def test_file_list_summarized(self) -> None:
        content = engine(summary_threshold=0).generate_migration_report(migration_result())

        assert "_File list omitted for 1 modified files._" in content
        assert "Button.tsx`" not in content

    def test_phase_duration(self) -> None:
        """Test that phase wall-clock times are summed."""
        timed = [
            PhaseResult("setup", True, started_at=FIXED_TIME, finished_at=FIXED_TIME + timedelta(seconds=1.5)),
            PhaseResult("rename", False, started_at=FIXED_TIME, finished_at=FIXED_TIME + timedelta(seconds=0.25)),
        ]

        content = engine().generate_migration_report(migration_result(phase_results=timed), PHASES)

        assert "- Phase Duration: 1.75s" in content
        assert "- Phase Duration: 0.00s" in engine().generate_migration_report(migration_result(), PHASES)

    def test_json(self) -> None:
        data = json.loads(engine(output_format="json").generate_migration_report(migration_result(), PHASES))

        assert data["status"] == "Failed"
        assert data["risk_level"] == "High"
        assert data["modified_files"] == ["src/components/Button.tsx"]
        assert data["charts"][0]["data"] == [1, 1]

    def test_html(self) -> None:
        content = engine(output_format="html").generate_migration_report(migration_result(), PHASES)

        assert 'class="summary status-failed"' in content
        assert "<td>rename</td><td>Rename props</td><td>high</td><td>Failed</td>" in content


class TestErrorReports:
    """Tests for failure handling."""

    def test_invalid_analysis(self) -> None:
        content = engine().generate_health_report(None)  # type: ignore[arg-type]

        assert content == f"{ERROR_HEADING}: {INVALID_DATA}\n"

    def test_invalid_analysis_json(self) -> None:
        content = engine(output_format="json").generate_architecture_report("nope")  # type: ignore[arg-type]

        assert json.loads(content) == {"error": ERROR_HEADING, "message": INVALID_DATA, "report": "architecture"}

    def test_invalid_migration(self) -> None:
        result = engine().build_migration_report({})  # type: ignore[arg-type]

        assert result.kind == ReportKind.MIGRATION
        assert not result.success

    def test_template_failure_becomes_error_report(self, healthy_analysis: AnalysisResult) -> None:
        library = TemplateLibrary({("health-report", "markdown"): "{{#each components}}"})
        reporting = ReportingEngine(ReportingContext(), library=library)

        result = reporting.build_health_report(healthy_analysis)

        assert not result.success
        assert result.content.startswith(f"{ERROR_HEADING}: Unclosed block")

    def test_build_success(self, healthy_analysis: AnalysisResult) -> None:
        result = engine().build_health_report(healthy_analysis)

        assert result.success
        assert result.kind == ReportKind.HEALTH
        assert result.errors == []


class TestExportReport:
    """Tests for writing reports to disk."""

    def test_export_creates_directories(self, tmp_path: Path) -> None:
        reporting = engine(project_path=tmp_path)

        written = reporting.export_report("# Report\n", "reports/nested/health.md")

        assert written == tmp_path / "reports" / "nested" / "health.md"
        assert written.read_text() == "# Report\n"
