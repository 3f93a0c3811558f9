"""Analysis Engine: static analysis of a React project.

Pipeline per analyze_project() call:
1. Load package.json (fatal if missing or malformed)
2. Detect the framework from declared dependencies
3. Discover candidate files through the FileSystem collaborator
4. Run source heuristics per file (per-file failures are recorded, not raised)
5. Aggregate dependencies, architecture facts and quality scores

Each call builds a fresh AnalysisResult; the engine keeps no per-call state.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePath

from uiforge.analyzers import heuristics
from uiforge.analyzers.filesystem import FileSystem, LocalFileSystem
from uiforge.analyzers.manifest import (
    Manifest,
    detect_framework,
    detect_state_management,
    detect_styling,
    load_manifest,
)
from uiforge.config import AnalysisConfig
from uiforge.models.analysis import (
    AnalysisError,
    AnalysisResult,
    ArchitectureInfo,
    ComplexityInfo,
    ComponentInfo,
    ComponentType,
    FrameworkInfo,
    QualityScores,
)

logger = logging.getLogger(__name__)

JSX_EXTENSIONS = {".tsx", ".jsx"}
SCRIPT_EXTENSIONS = {".ts", ".js", ".mjs"}
EXCLUDED_SUFFIXES = (".test", ".spec", ".stories", ".d")
CONTAINER_STEMS = {"index", "page", "layout"}
TEST_DIRS = ("tests", "test", "__tests__", "e2e")
BUILD_DIRS = {"node_modules", "dist", "build"}

# Weights for the overall score; they sum to 1.0.
QUALITY_WEIGHTS = {
    "code_quality": 0.20,
    "security": 0.15,
    "performance": 0.15,
    "accessibility": 0.15,
    "maintainability": 0.15,
    "test_coverage": 0.10,
    "documentation": 0.10,
}

HIGH_COMPLEXITY_THRESHOLD = 10
DEPENDENCY_BUDGET = 20


def _clamp(value: float) -> int:
    return max(0, min(100, round(value)))


def _mean(values: list[int], default: int) -> float:
    return sum(values) / len(values) if values else float(default)


@dataclass
class _Inventory:
    """Intermediate per-call state shared by the aggregation steps."""

    manifest: Manifest
    framework: FrameworkInfo
    files: list[Path] = field(default_factory=list)
    components: list[ComponentInfo] = field(default_factory=list)
    errors: list[AnalysisError] = field(default_factory=list)


class AnalysisEngine:
    """Analyzes a React project rooted at a directory.

    Usage:
        engine = AnalysisEngine(Path("./my-app"))
        result = engine.analyze_project()
        print(result.framework.name, len(result.components))
    """

    def __init__(
        self,
        root: Path,
        filesystem: FileSystem | None = None,
        config: AnalysisConfig | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            root: Project root containing package.json
            filesystem: I/O collaborator (defaults to the local file system)
            config: Include/exclude patterns
        """
        self.root = Path(root)
        self.filesystem = filesystem or LocalFileSystem()
        self.config = config or AnalysisConfig()

    # =========================================================================
    # Public API
    # =========================================================================

    def analyze_project(self) -> AnalysisResult:
        """Run the full analysis.

        Returns:
            AnalysisResult snapshot

        Raises:
            ManifestNotFoundError: If package.json is missing
            ManifestParseError: If package.json is malformed
        """
        logger.info("Analyzing project: %s", self.root)
        inventory = self._build_inventory()
        quality = self._compute_quality(inventory)

        result = AnalysisResult(
            root=self.root,
            framework=inventory.framework,
            architecture=self._detect_architecture(inventory),
            components=inventory.components,
            dependencies=inventory.manifest.dependency_infos(),
            quality=quality,
            project_name=inventory.manifest.name,
            project_version=inventory.manifest.version,
            errors=inventory.errors,
        )
        logger.info(
            "Analysis complete: %d components, %d dependencies, overall quality %d",
            len(result.components),
            len(result.dependencies),
            quality.overall,
        )
        return result

    def assess_quality(self) -> QualityScores:
        """Compute quality scores only.

        Raises:
            ManifestNotFoundError: If package.json is missing
            ManifestParseError: If package.json is malformed
        """
        return self._compute_quality(self._build_inventory())

    def analyze_file(self, file_path: Path, content: str) -> ComponentInfo:
        """Run all source heuristics over one file's content.

        Args:
            file_path: Path of the file (used for naming and classification)
            content: File content

        Returns:
            ComponentInfo for the file
        """
        # Classify on the project-relative path so directories above the root never count.
        relative = self._relative(file_path)
        component_type = heuristics.determine_component_type(content, relative)
        name = self._component_name(relative, content, component_type)
        cyclomatic = heuristics.calculate_cyclomatic_complexity(content)

        return ComponentInfo(
            name=name,
            file_path=file_path,
            type=component_type,
            props=heuristics.extract_props(content, component_name=name),
            state=heuristics.extract_state(content),
            dependencies=heuristics.extract_dependencies(content),
            complexity=ComplexityInfo(
                cyclomatic=cyclomatic,
                maintainability_index=heuristics.calculate_maintainability_index(content, cyclomatic),
            ),
            accessibility=heuristics.analyze_accessibility(content),
            security_issues=heuristics.detect_security_issues(content),
            has_docs=heuristics.has_doc_comment(content),
            lines_of_code=heuristics.count_lines_of_code(content),
        )

    # =========================================================================
    # Discovery
    # =========================================================================

    def _build_inventory(self) -> _Inventory:
        manifest = load_manifest(self.root, self.filesystem)
        inventory = _Inventory(manifest=manifest, framework=detect_framework(manifest))
        inventory.files = self.discover_files()
        logger.debug("Discovered %d candidate files", len(inventory.files))

        for path in inventory.files:
            component = self._analyze_path(path, inventory.errors)
            if component is not None:
                inventory.components.append(component)

        return inventory

    def discover_files(self) -> list[Path]:
        """List candidate component files, minus excluded dirs, tests and stories."""
        candidates = self.filesystem.glob(self.root, self.config.include_patterns)
        return [path for path in candidates if self._is_candidate(path)]

    def _relative(self, path: Path) -> PurePath:
        try:
            return PurePath(path).relative_to(self.root.resolve())
        except ValueError:
            try:
                return PurePath(path).relative_to(self.root)
            except ValueError:
                return PurePath(path)

    def _is_candidate(self, path: Path) -> bool:
        relative = self._relative(path)
        if any(part in self.config.exclude_dirs for part in relative.parts[:-1]):
            return False
        if path.suffix not in JSX_EXTENSIONS | SCRIPT_EXTENSIONS:
            return False
        return not any(Path(path.stem).suffix == suffix for suffix in EXCLUDED_SUFFIXES)

    def _analyze_path(self, path: Path, errors: list[AnalysisError]) -> ComponentInfo | None:
        try:
            content = self.filesystem.read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping unreadable file %s: %s", path, e)
            errors.append(AnalysisError(component="read", message=str(e), file_path=str(path)))
            return None

        try:
            component = self.analyze_file(path, content)
        except Exception as e:
            logger.warning("Skipping file %s after heuristic failure: %s", path, e)
            errors.append(AnalysisError(component="heuristics", message=str(e), file_path=str(path)))
            return None

        # Plain .ts/.js modules only count when they export a hook.
        if path.suffix in SCRIPT_EXTENSIONS and component.type != ComponentType.HOOK:
            logger.debug("Ignoring non-component module %s", path)
            return None

        logger.debug("Analyzed %s as %s %s", path, component.type.value, component.name)
        return component

    @staticmethod
    def _component_name(file_path: Path, content: str, component_type: ComponentType) -> str:
        stem = PurePath(file_path).name.split(".")[0]
        if component_type == ComponentType.HOOK:
            exported = heuristics.extract_exported_name(content)
            return exported if exported and exported.startswith("use") else stem
        if stem in CONTAINER_STEMS:
            parent = PurePath(file_path).parent.name
            if parent and not parent.startswith(("(", "[")):
                base = heuristics.to_pascal_case(parent)
                return f"{base}Page" if component_type == ComponentType.PAGE and stem == "page" else base
            exported = heuristics.extract_exported_name(content)
            return exported or stem
        return stem

    # =========================================================================
    # Aggregation
    # =========================================================================

    def _detect_architecture(self, inventory: _Inventory) -> ArchitectureInfo:
        relative_paths = [self._relative(p) for p in inventory.files]

        routing = "none"
        for rel in relative_paths:
            parts = rel.parts[1:] if rel.parts[:1] == ("src",) else rel.parts
            if parts[:1] == ("app",) and PurePath(parts[-1]).stem == "page":
                routing = "app-router"
                break
            if parts[:1] == ("pages",):
                routing = "pages-router"

        styling = detect_styling(inventory.manifest)
        if styling is None:
            modules = self.filesystem.glob(self.root, ["src/**/*.module.css", "src/**/*.module.scss"])
            styling = "css-modules" if modules else "css"

        directories = sorted(
            {rel.parts[1] for rel in relative_paths if rel.parts[:1] == ("src",) and len(rel.parts) > 2}
        )
        if "features" in directories:
            structure = "feature-based"
        elif len(directories) > 1:
            structure = "modular"
        else:
            structure = "flat"

        typescript = (
            inventory.manifest.declares("typescript")
            or any(p.suffix in {".ts", ".tsx"} for p in inventory.files)
            or self.filesystem.exists(self.root / "tsconfig.json")
        )

        return ArchitectureInfo(
            routing=routing,
            styling=styling,
            state_management=detect_state_management(inventory.manifest),
            typescript=typescript,
            structure=structure,
            directories=directories,
        )

    def _test_roots(self) -> list[Path]:
        """Top-level directories holding sources or tests.

        Falls back to the project root when an include pattern starts with a
        wildcard or names a root-level file.
        """
        names: list[str] = []
        for pattern in self.config.include_patterns:
            parts = PurePath(pattern).parts
            if len(parts) < 2 or any(ch in parts[0] for ch in "*?["):
                return [self.root]
            if parts[0] not in names:
                names.append(parts[0])
        names.extend(name for name in TEST_DIRS if name not in names)
        return [self.root / name for name in names if self.filesystem.is_dir(self.root / name)]

    def _count_test_files(self) -> int:
        tests: set[Path] = set()
        for directory in self._test_roots():
            tests.update(self.filesystem.glob(directory, self.config.test_patterns))
        return sum(1 for path in tests if not any(part in BUILD_DIRS for part in self._relative(path).parts))

    def _compute_quality(self, inventory: _Inventory) -> QualityScores:
        components = inventory.components
        manifest = inventory.manifest

        cyclomatic = [c.complexity.cyclomatic for c in components]
        high_complexity = sum(1 for value in cyclomatic if value > HIGH_COMPLEXITY_THRESHOLD)
        avg_cyclomatic = _mean(cyclomatic, 1)

        code_quality = _clamp(100 - 4 * max(0.0, avg_cyclomatic - 5) - 2 * high_complexity)
        maintainability = _clamp(_mean([c.complexity.maintainability_index for c in components], 100))
        accessibility = _clamp(_mean([c.accessibility.score for c in components], 100))

        security_findings = sum(len(c.security_issues) for c in components)
        unpinned = sum(
            1 for version in manifest.dependencies.values() if version.strip() in {"*", "latest", ""}
        )
        security = _clamp(100 - 10 * security_findings - 5 * unpinned)

        framework = inventory.framework
        performance_base = 85 if framework.is_known else 70
        if framework.type in {"ssr", "ssg"}:
            performance_base += 10
        performance = _clamp(
            performance_base
            - max(0, len(manifest.dependencies) - DEPENDENCY_BUDGET)
            - 2 * high_complexity
        )

        test_files = self._count_test_files()
        test_coverage = _clamp(100 * test_files / len(components)) if components else 0

        documented = sum(1 for c in components if c.has_docs)
        has_readme = self.filesystem.exists(self.root / "README.md")
        documentation = _clamp(
            (80 * documented / len(components) if components else 0) + (20 if has_readme else 0)
        )

        scores = {
            "code_quality": code_quality,
            "security": security,
            "performance": performance,
            "accessibility": accessibility,
            "maintainability": maintainability,
            "test_coverage": test_coverage,
            "documentation": documentation,
        }
        overall = _clamp(sum(scores[name] * weight for name, weight in QUALITY_WEIGHTS.items()))

        return QualityScores(overall=overall, **scores)
