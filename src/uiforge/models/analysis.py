"""Analysis result entities.

This module contains entities produced by the Analysis Engine:
- AnalysisError: Non-fatal per-file errors encountered during analysis
- PropInfo: Single prop declaration extracted from a component
- ComplexityInfo / AccessibilityInfo: Per-component heuristic scores
- ComponentInfo: Structural facts derived from one source file
- DependencyInfo: Single manifest dependency
- FrameworkInfo / ArchitectureInfo: Project-level detections
- QualityScores: Aggregated 0-100 scores
- AnalysisResult: Immutable snapshot returned by analyze_project()
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Any


class ComponentType(Enum):
    """Classification of a source file."""

    PAGE = "page"
    COMPONENT = "component"
    HOOK = "hook"


@dataclass
class AnalysisError:
    """Non-fatal error encountered during analysis.

    Attributes:
        component: Stage that failed (read, heuristics, manifest)
        message: Error description
        file_path: File that caused the error (if applicable)
        recoverable: Whether analysis continued after this error
    """

    component: str
    message: str
    file_path: str | None = None
    recoverable: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "component": self.component,
            "message": self.message,
            "file_path": self.file_path,
            "recoverable": self.recoverable,
        }


@dataclass
class PropInfo:
    """Single prop declaration.

    Attributes:
        name: Prop name as declared
        type: Free-text type expression (e.g. "() => void", "'sm' | 'lg'")
        optional: Whether the prop may be omitted
        description: Optional human description (natural-language specs)
    """

    name: str
    type: str = "string"
    optional: bool = False
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "type": self.type,
            "optional": self.optional,
            "description": self.description,
        }


@dataclass
class ComplexityInfo:
    """Complexity metrics for one component."""

    cyclomatic: int = 1
    maintainability_index: int = 100

    @property
    def level(self) -> str:
        """Bucket used by reports: low (<=5), medium (<=10), high."""
        if self.cyclomatic <= 5:
            return "low"
        if self.cyclomatic <= 10:
            return "medium"
        return "high"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "cyclomatic": self.cyclomatic,
            "maintainabilityIndex": self.maintainability_index,
            "level": self.level,
        }


@dataclass
class AccessibilityInfo:
    """Accessibility score and detected issues for one component."""

    score: int = 100
    issues: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"score": self.score, "issues": list(self.issues)}


@dataclass
class ComponentInfo:
    """Structural facts derived from the static text of one source file.

    No cross-file linking happens here; ``dependencies`` holds raw module
    specifiers exactly as imported.

    Attributes:
        name: Component name (exported identifier or file stem)
        file_path: Path to the source file
        type: page, component or hook
        props: Declared props in declaration order
        state: State variable names from useState/useReducer
        dependencies: Ordered unique import specifiers
        complexity: Cyclomatic complexity and maintainability index
        accessibility: Accessibility score and issues
        security_issues: Risky constructs found in the source
        has_docs: Whether the file carries a JSDoc block
        lines_of_code: Non-blank line count
    """

    name: str
    file_path: Path
    type: ComponentType = ComponentType.COMPONENT
    props: list[PropInfo] = field(default_factory=list)
    state: list[str] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)
    complexity: ComplexityInfo = field(default_factory=ComplexityInfo)
    accessibility: AccessibilityInfo = field(default_factory=AccessibilityInfo)
    security_issues: list[str] = field(default_factory=list)
    has_docs: bool = False
    lines_of_code: int = 0

    @property
    def prop_names(self) -> list[str]:
        """Names of all declared props."""
        return [prop.name for prop in self.props]

    @property
    def local_dependencies(self) -> list[str]:
        """Relative import specifiers (./ or ../)."""
        return [dep for dep in self.dependencies if dep.startswith(".")]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "filePath": str(self.file_path),
            "type": self.type.value,
            "props": [prop.to_dict() for prop in self.props],
            "state": list(self.state),
            "dependencies": list(self.dependencies),
            "complexity": self.complexity.to_dict(),
            "accessibility": self.accessibility.to_dict(),
            "securityIssues": list(self.security_issues),
            "hasDocs": self.has_docs,
            "linesOfCode": self.lines_of_code,
        }


@dataclass
class DependencyInfo:
    """Single dependency declared in the project manifest.

    Attributes:
        name: Package name
        version: Declared version with range operators stripped
        is_dev: True for devDependencies
    """

    name: str
    version: str | None = None
    is_dev: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"name": self.name, "version": self.version, "isDev": self.is_dev}


@dataclass
class FrameworkInfo:
    """Detected front-end framework.

    Attributes:
        name: Display name (e.g. "Next.js") or "Unknown"
        version: Bare version string, empty when unknown
        type: Rendering model (ssr, ssg, spa, unknown)
    """

    name: str = "Unknown"
    version: str = ""
    type: str = "unknown"

    @property
    def is_known(self) -> bool:
        """Return True if a framework signature matched."""
        return self.name != "Unknown"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"name": self.name, "version": self.version, "type": self.type}


@dataclass
class ArchitectureInfo:
    """Project-level architecture detections.

    Attributes:
        routing: app-router, pages-router or none
        styling: Primary styling approach detected from dependencies/files
        state_management: State libraries found in dependencies
        typescript: Whether the project uses TypeScript
        structure: flat, modular or feature-based
        directories: Top-level directories under src/
    """

    routing: str = "none"
    styling: str = "css"
    state_management: list[str] = field(default_factory=list)
    typescript: bool = False
    structure: str = "flat"
    directories: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "routing": self.routing,
            "styling": self.styling,
            "stateManagement": list(self.state_management),
            "typescript": self.typescript,
            "structure": self.structure,
            "directories": list(self.directories),
        }


@dataclass
class QualityScores:
    """Aggregated quality scores, each an integer in 0..100."""

    overall: int = 0
    code_quality: int = 0
    security: int = 0
    performance: int = 0
    accessibility: int = 0
    maintainability: int = 0
    test_coverage: int = 0
    documentation: int = 0

    def __post_init__(self) -> None:
        """Validate score bounds."""
        for name, value in self.to_dict().items():
            if not isinstance(value, int) or not 0 <= value <= 100:
                raise ValueError(f"Quality score {name} must be an integer in 0..100 (got {value!r})")

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary for serialization."""
        return {
            "overall": self.overall,
            "codeQuality": self.code_quality,
            "security": self.security,
            "performance": self.performance,
            "accessibility": self.accessibility,
            "maintainability": self.maintainability,
            "testCoverage": self.test_coverage,
            "documentation": self.documentation,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Snapshot produced by one analyze_project() call.

    Attributes:
        root: Project root that was analyzed
        framework: Detected framework
        architecture: Detected architecture facts
        components: Components discovered and analyzed
        dependencies: Manifest dependencies (prod and dev)
        quality: Aggregated quality scores
        project_name: Manifest name
        project_version: Manifest version
        errors: Non-fatal errors (skipped files)
        timestamp: Analysis time (UTC)
    """

    root: Path
    framework: FrameworkInfo
    architecture: ArchitectureInfo
    components: list[ComponentInfo]
    dependencies: list[DependencyInfo]
    quality: QualityScores
    project_name: str = ""
    project_version: str = ""
    errors: list[AnalysisError] = field(default_factory=list)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def production_dependencies(self) -> list[DependencyInfo]:
        """Dependencies declared under ``dependencies``."""
        return [dep for dep in self.dependencies if not dep.is_dev]

    @property
    def dev_dependencies(self) -> list[DependencyInfo]:
        """Dependencies declared under ``devDependencies``."""
        return [dep for dep in self.dependencies if dep.is_dev]

    def components_of_type(self, component_type: ComponentType) -> list[ComponentInfo]:
        """Return components of the given classification."""
        return [c for c in self.components if c.type == component_type]

    def component_graph(self) -> dict[str, list[str]]:
        """Map each component to the analyzed components it imports.

        Relative specifiers are matched by their final path segment
        (``./Button``, ``../ui/Button/index`` -> ``Button``).
        """
        names = {c.name for c in self.components}
        graph: dict[str, list[str]] = {}
        for component in self.components:
            targets: list[str] = []
            for spec in component.local_dependencies:
                segments = [s for s in spec.split("/") if s not in {"", ".", ".."}]
                if segments and segments[-1] == "index":
                    segments = segments[:-1]
                if not segments:
                    continue
                target = segments[-1].split(".")[0]
                if target in names and target != component.name and target not in targets:
                    targets.append(target)
            graph[component.name] = targets
        return graph

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "root": str(self.root),
            "projectName": self.project_name,
            "projectVersion": self.project_version,
            "timestamp": self.timestamp.isoformat(),
            "framework": self.framework.to_dict(),
            "architecture": self.architecture.to_dict(),
            "components": [c.to_dict() for c in self.components],
            "dependencies": [d.to_dict() for d in self.dependencies],
            "quality": self.quality.to_dict(),
            "errors": [e.to_dict() for e in self.errors],
        }
