"""Unit tests for the Analysis Engine."""

import json
from pathlib import Path

import pytest

from tests.fixtures.builders import InMemoryFileSystem
from uiforge.config import AnalysisConfig
from uiforge.engines.analysis import AnalysisEngine
from uiforge.exceptions import ManifestNotFoundError, ManifestParseError
from uiforge.models.analysis import AnalysisResult, ComponentType

ROOT = Path("/proj")


class RecordingFileSystem(InMemoryFileSystem):
    """In-memory file system that remembers every glob call."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.globbed: list[tuple[Path, list[str]]] = []

    def glob(self, root: Path, patterns):
        patterns = list(patterns)
        self.globbed.append((root, patterns))
        return super().glob(root, patterns)


def project(files: dict[str, str], dependencies: dict[str, str] | None = None, **kwargs) -> InMemoryFileSystem:
    """Build an in-memory project with a package.json at /proj."""
    manifest = {"name": "mem-app", "version": "0.0.1", "dependencies": dependencies or {"react": "^18.2.0"}}
    contents = {"/proj/package.json": json.dumps(manifest)}
    contents.update({f"/proj/{name}": text for name, text in files.items()})
    return InMemoryFileSystem(contents, **kwargs)


class TestAnalyzeSampleProject:
    """Tests against the bundled sample React project."""

    @pytest.fixture
    def result(self, react_app: Path) -> AnalysisResult:
        """Analyze the sample project once per test."""
        return AnalysisEngine(react_app).analyze_project()

    def test_manifest_facts(self, result: AnalysisResult) -> None:
        assert result.project_name == "sample-react-app"
        assert result.project_version == "1.2.0"
        assert (result.framework.name, result.framework.version, result.framework.type) == ("React", "18.2.0", "spa")

    def test_components_discovered(self, result: AnalysisResult) -> None:
        """Test that tests and plain utility modules are not components."""
        assert [c.name for c in result.components] == ["Button", "Card", "useToggle", "HomePage"]
        assert [c.type for c in result.components] == [
            ComponentType.COMPONENT,
            ComponentType.COMPONENT,
            ComponentType.HOOK,
            ComponentType.PAGE,
        ]
        assert result.errors == []

    def test_component_details(self, result: AnalysisResult) -> None:
        button, card, hook, page = result.components

        assert button.prop_names == ["label", "variant", "onClick", "disabled"]
        assert button.accessibility.score == 85
        assert button.has_docs
        assert card.state == ["expanded"]
        assert card.dependencies == ["react", "./Button"]
        assert card.accessibility.issues == ["Clickable <div> without role, tabIndex or aria attributes"]
        assert card.complexity.cyclomatic == 2
        assert hook.has_docs
        assert page.security_issues == ["Uses dangerouslySetInnerHTML"]
        assert all(c.file_path.is_absolute() for c in result.components)

    def test_dependencies(self, result: AnalysisResult) -> None:
        assert [(d.name, d.version, d.is_dev) for d in result.dependencies] == [
            ("react", "18.2.0", False),
            ("react-dom", "18.2.0", False),
            ("zustand", "4.4.0", False),
            ("jest", "29.7.0", True),
            ("typescript", "5.3.0", True),
        ]

    def test_architecture(self, result: AnalysisResult) -> None:
        architecture = result.architecture

        assert architecture.routing == "pages-router"
        assert architecture.styling == "css"
        assert architecture.state_management == ["Zustand"]
        assert architecture.typescript is True
        assert architecture.structure == "modular"
        assert architecture.directories == ["components", "hooks", "pages", "utils"]

    def test_quality_scores(self, result: AnalysisResult) -> None:
        quality = result.quality

        assert quality.code_quality == 100
        assert quality.security == 90
        assert quality.performance == 85
        assert quality.accessibility == 66
        assert quality.test_coverage == 25
        assert quality.documentation == 60
        assert 0 <= quality.overall <= 100

    def test_component_graph(self, result: AnalysisResult) -> None:
        graph = result.component_graph()

        assert graph["Card"] == ["Button"]
        assert graph["HomePage"] == ["Card"]

    def test_analysis_is_deterministic(self, react_app: Path, result: AnalysisResult) -> None:
        """Test that two runs agree on everything but the timestamp."""
        again = AnalysisEngine(react_app).analyze_project()

        first, second = result.to_dict(), again.to_dict()
        first.pop("timestamp")
        second.pop("timestamp")
        assert first == second

    def test_assess_quality_matches_full_run(self, react_app: Path, result: AnalysisResult) -> None:
        assert AnalysisEngine(react_app).assess_quality() == result.quality


class TestAnalyzeInMemory:
    """Tests against an in-memory file system."""

    def test_missing_manifest_is_fatal(self) -> None:
        with pytest.raises(ManifestNotFoundError):
            AnalysisEngine(ROOT, filesystem=InMemoryFileSystem()).analyze_project()

    def test_malformed_manifest_is_fatal(self) -> None:
        fs = InMemoryFileSystem({"/proj/package.json": "{"})

        with pytest.raises(ManifestParseError):
            AnalysisEngine(ROOT, filesystem=fs).analyze_project()

    def test_unreadable_file_recorded(self) -> None:
        """Test that one unreadable file does not abort the analysis."""
        fs = project(
            {"src/A.tsx": "export const A = () => <p />;", "src/B.tsx": "export const B = () => <p />;"},
            unreadable=["/proj/src/B.tsx"],
        )

        result = AnalysisEngine(ROOT, filesystem=fs).analyze_project()

        assert [c.name for c in result.components] == ["A"]
        assert len(result.errors) == 1
        assert result.errors[0].component == "read"
        assert result.errors[0].file_path == "/proj/src/B.tsx"
        assert result.errors[0].recoverable is True

    def test_test_files_searched_below_source_roots(self) -> None:
        """Test that counting test files never walks the whole project."""
        fs = RecordingFileSystem(
            project(
                {
                    "src/A.tsx": "export const A = () => <p />;",
                    "src/A.test.tsx": "test('a', () => {});",
                    "tests/B.spec.ts": "test('b', () => {});",
                    "node_modules/lib/x.test.js": "test('x', () => {});",
                }
            ).files
        )
        config = AnalysisConfig()

        result = AnalysisEngine(ROOT, filesystem=fs, config=config).analyze_project()

        test_roots = [root for root, patterns in fs.globbed if patterns == config.test_patterns]
        assert test_roots == [ROOT / "src", ROOT / "tests"]
        assert result.quality.test_coverage == 100

    def test_wildcard_include_searches_project_root(self) -> None:
        fs = RecordingFileSystem(project({"Widget.tsx": "export const Widget = () => <p />;"}).files)
        config = AnalysisConfig(include_patterns=["**/*.tsx"])

        AnalysisEngine(ROOT, filesystem=fs, config=config).analyze_project()

        assert [root for root, patterns in fs.globbed if patterns == config.test_patterns] == [ROOT]

    def test_empty_project(self) -> None:
        result = AnalysisEngine(ROOT, filesystem=project({})).analyze_project()

        assert result.components == []
        assert result.quality.test_coverage == 0
        assert result.quality.documentation == 0
        assert result.architecture.structure == "flat"

    def test_excluded_dirs_and_stories(self) -> None:
        fs = project(
            {
                "src/A.tsx": "export const A = () => null;",
                "src/legacy/Old.tsx": "export const Old = () => null;",
                "src/A.stories.tsx": "export default {};",
                "src/types.d.ts": "export type X = string;",
            }
        )
        config = AnalysisConfig(exclude_dirs=["legacy"])

        result = AnalysisEngine(ROOT, filesystem=fs, config=config).analyze_project()

        assert [c.name for c in result.components] == ["A"]

    def test_app_router_pages_named_after_route(self) -> None:
        fs = project(
            {
                "app/dashboard/page.tsx": "export default function Page() { return <main />; }",
                "src/components/Modal/index.tsx": "export const Modal = () => null;",
            },
            dependencies={"next": "14.1.0", "react": "18.2.0"},
        )

        result = AnalysisEngine(ROOT, filesystem=fs).analyze_project()

        names = {c.name: c.type for c in result.components}
        assert names == {"DashboardPage": ComponentType.PAGE, "Modal": ComponentType.COMPONENT}
        assert result.architecture.routing == "app-router"
        assert result.framework.name == "Next.js"
        assert result.quality.performance == 95

    def test_security_and_unpinned_dependencies(self) -> None:
        fs = project(
            {"src/Risky.tsx": "export const Risky = () => { eval(x); return null; };"},
            dependencies={"react": "*", "lodash": "latest"},
        )

        result = AnalysisEngine(ROOT, filesystem=fs).analyze_project()

        assert result.quality.security == 100 - 10 - 2 * 5

    def test_styling_from_dependencies(self) -> None:
        fs = project({"src/A.tsx": "export const A = () => null;"}, dependencies={"react": "18", "tailwindcss": "3"})

        assert AnalysisEngine(ROOT, filesystem=fs).analyze_project().architecture.styling == "tailwind"

    def test_analyze_file_directly(self) -> None:
        engine = AnalysisEngine(ROOT, filesystem=InMemoryFileSystem())

        component = engine.analyze_file(
            Path("/proj/src/hooks/useAuth.ts"), "export function useAuth() { return null; }"
        )

        assert component.name == "useAuth"
        assert component.type == ComponentType.HOOK
