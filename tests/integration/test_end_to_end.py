"""End-to-end workflows across the analysis, generation, migration and reporting engines."""

import json
from pathlib import Path

from uiforge.engines.analysis import AnalysisEngine
from uiforge.engines.generation import GenerationEngine
from uiforge.engines.migration import MigrationEngine
from uiforge.engines.reporting import ReportingEngine
from uiforge.models.analysis import ComponentType
from uiforge.models.generation import ComponentSpec, ProjectSpec
from uiforge.models.migration import (
    MigrationContext,
    MigrationPhase,
    MigrationState,
    RiskLevel,
    Transformation,
    TransformationType,
)
from uiforge.models.report import ReportingContext


def write_files(root: Path, files) -> None:
    for generated in files:
        destination = root / generated.path
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(generated.content, encoding="utf-8")


class TestAnalyzeAndReport:
    """Analysis output feeding every report kind."""

    def test_sample_project(self, react_app_copy: Path) -> None:
        analysis = AnalysisEngine(react_app_copy).analyze_project()

        assert analysis.project_name == "sample-react-app"
        names = {c.name for c in analysis.components}
        assert {"Button", "Card", "HomePage", "useToggle"} <= names

        engine = ReportingEngine(ReportingContext(project_path=react_app_copy))
        health = engine.generate_health_report(analysis)
        architecture = engine.generate_architecture_report(analysis)
        summary = engine.generate_executive_summary(analysis)

        assert health.startswith("# Health Report")
        assert "**Project:** sample-react-app v1.2.0" in health
        assert architecture.strip()
        assert summary.strip()

        written = engine.export_report(health, "reports/health.md")
        assert written == react_app_copy / "reports" / "health.md"
        assert written.read_text() == health

    def test_json_report(self, react_app: Path) -> None:
        analysis = AnalysisEngine(react_app).analyze_project()

        content = ReportingEngine(ReportingContext(project_path=react_app, output_format="json")).generate_health_report(
            analysis
        )

        assert isinstance(json.loads(content), dict)


class TestGenerateThenAnalyze:
    """Generated projects are analyzable projects."""

    def test_generated_vite_project(self, tmp_path: Path) -> None:
        spec = ProjectSpec(
            name="shop",
            features=["typescript"],
            components=[ComponentSpec(name="Header", styling="css")],
        )
        result = GenerationEngine().generate_project(spec)
        assert result.success
        write_files(tmp_path, result.files)

        analysis = AnalysisEngine(tmp_path).analyze_project()

        assert analysis.project_name == "shop"
        header = next(c for c in analysis.components if c.name == "Header")
        assert header.type == ComponentType.COMPONENT
        assert not analysis.errors


class TestMigrateRollbackReport:
    """A migration run, its report and its rollback."""

    def phases(self) -> list[MigrationPhase]:
        return [
            MigrationPhase(
                id="rename-kind",
                name="Rename kind prop",
                risk_level=RiskLevel.MEDIUM,
                components=["Button", "Alert"],
                transformations=[
                    Transformation(id="variant", type=TransformationType.RENAME, source="kind", target="variant"),
                ],
            ),
            MigrationPhase(
                id="data-attrs",
                name="Drop data attributes",
                dependencies=["rename-kind"],
                components=["Button"],
                transformations=[
                    Transformation("strip", TransformationType.REMOVE, pattern=r" data-variant=\{variant\}"),
                ],
            ),
        ]

    def test_full_cycle(self, migration_project: Path) -> None:
        button = migration_project / "src" / "components" / "Button.tsx"
        alert = migration_project / "src" / "components" / "Alert.tsx"
        originals = {button: button.read_text(), alert: alert.read_text()}
        phases = self.phases()

        engine = MigrationEngine(MigrationContext(project_path=migration_project, phases=phases))
        result = engine.execute_migration()

        assert result.success
        assert result.state == MigrationState.COMPLETED
        assert result.completed_phases == ["rename-kind", "data-attrs"]
        assert button.read_text() == "export const Button = ({ variant }) => <button />;\n"
        assert "data-variant={variant}" in alert.read_text()
        assert result.backup_location is not None

        content = ReportingEngine(ReportingContext(project_path=migration_project)).generate_migration_report(
            result, phases
        )
        assert content.startswith("# Migration Report")
        assert "- Migration Status: Success" in content
        assert "| rename-kind | Rename kind prop | medium | Completed |" in content
        assert "| data-attrs | Drop data attributes | low | Completed |" in content

        rollback = engine.rollback(result.backup_location)

        assert rollback.success
        assert button.read_text() == originals[button]
        assert alert.read_text() == originals[alert]
