"""Generation inputs and outputs.

Inputs are three distinct validated spec types (ComponentSpec, PageSpec,
ProjectSpec). Each offers ``from_dict`` for untyped data (config files,
agent payloads) and ``validate()`` returning a list of error messages.

Outputs are GeneratedFile values collected into a GenerationResult. The
engine never writes or re-reads them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from uiforge.exceptions import SpecValidationError
from uiforge.models.analysis import PropInfo

NAME_REQUIRED = "Component name is required"

STYLING_APPROACHES = {"css-modules", "styled-components", "tailwind", "css", "emotion"}
FILE_STRUCTURES = {"flat", "nested", "feature-based"}
TEST_LOCATIONS = {"colocated", "test-directory", "separate"}
STORY_LOCATIONS = {"colocated", "stories-directory"}
PAGE_LAYOUTS = {"default", "dashboard", "landing"}
PLATFORMS = {"react", "nextjs"}


class FileType(Enum):
    """Tag on every generated file; downstream tooling dispatches on it."""

    COMPONENT = "component"
    TYPES = "types"
    STYLES = "styles"
    TEST = "test"
    STORY = "story"
    DOCS = "docs"
    LOCALE = "locale"
    CONFIG = "config"


def _prop_from_value(value: Any) -> PropInfo:
    """Build a PropInfo from a dict, a PropInfo or a bare name."""
    if isinstance(value, PropInfo):
        return value
    if isinstance(value, str):
        return PropInfo(name=value, type="string", optional=True)
    if isinstance(value, dict):
        if not value.get("name"):
            raise SpecValidationError(["Prop name is required"])
        return PropInfo(
            name=str(value["name"]),
            type=str(value.get("type", "string")),
            optional=bool(value.get("optional", False)),
            description=value.get("description"),
        )
    raise SpecValidationError([f"Invalid prop definition: {value!r}"])


# =============================================================================
# Generation Context
# =============================================================================


@dataclass(frozen=True)
class GenerationContext:
    """Target project conventions, fixed for the lifetime of an engine.

    Attributes:
        platform: Target platform (react, nextjs)
        architecture: component-library or application
        file_structure: flat, nested or feature-based component layout
        test_location: colocated, test-directory or separate
        story_location: colocated or stories-directory
        styling: Default styling approach for specs that do not set one
        typescript: Emit .tsx/.ts when True, .jsx/.js otherwise
        include_tests: Default for specs that do not set testing flags
        include_stories: Default for specs that do not set story flags
        include_docs: Default for specs that do not set docs flags
        components_dir: Root directory for generated components
    """

    platform: str = "react"
    architecture: str = "component-library"
    file_structure: str = "flat"
    test_location: str = "colocated"
    story_location: str = "colocated"
    styling: str = "css-modules"
    typescript: bool = True
    include_tests: bool = False
    include_stories: bool = False
    include_docs: bool = False
    components_dir: str = "src/components"

    def __post_init__(self) -> None:
        """Validate enumerated settings."""
        checks = [
            ("platform", self.platform, PLATFORMS),
            ("file_structure", self.file_structure, FILE_STRUCTURES),
            ("test_location", self.test_location, TEST_LOCATIONS),
            ("story_location", self.story_location, STORY_LOCATIONS),
            ("styling", self.styling, STYLING_APPROACHES),
        ]
        for name, value, valid in checks:
            if value not in valid:
                raise ValueError(f"Invalid {name}: {value}. Valid: {sorted(valid)}")

    @property
    def extension(self) -> str:
        """Extension for component files."""
        return ".tsx" if self.typescript else ".jsx"

    @property
    def script_extension(self) -> str:
        """Extension for non-JSX modules (hooks, configs)."""
        return ".ts" if self.typescript else ".js"


# =============================================================================
# Specs
# =============================================================================


@dataclass
class TestingOptions:
    """Per-spec output flags; ``None`` defers to the GenerationContext."""

    include_tests: bool | None = None
    include_stories: bool | None = None
    include_docs: bool | None = None


@dataclass
class AccessibilityOptions:
    """Accessibility options applied to generated markup."""

    aria_label: str | None = None
    keyboard: bool = True
    role: str | None = None


@dataclass
class ComponentSpec:
    """Structured input for generate_component().

    Attributes:
        name: PascalCase component name (required)
        type: button, form, modal, table, navigation or generic
        props: Declared props
        styling: Styling approach (None uses the context default)
        sub_components: Names of child components generated alongside
        hooks: Names of custom hooks generated alongside (use* prefix)
        features: Free-form feature flags (state, effects, ...)
        testing: Test/story/docs flags
        accessibility: Accessibility options
        locales: Locale codes for companion message files
        description: Human description carried into docs
        complexity: low, medium or high (drives suggestions)
    """

    name: str
    type: str = "generic"
    props: list[PropInfo] = field(default_factory=list)
    styling: str | None = None
    sub_components: list[str] = field(default_factory=list)
    hooks: list[str] = field(default_factory=list)
    features: list[str] = field(default_factory=list)
    testing: TestingOptions = field(default_factory=TestingOptions)
    accessibility: AccessibilityOptions = field(default_factory=AccessibilityOptions)
    locales: list[str] = field(default_factory=list)
    description: str = ""
    complexity: str = "low"

    def validate(self) -> list[str]:
        """Return validation errors (empty when valid)."""
        errors: list[str] = []
        if not self.name or not str(self.name).strip():
            errors.append(NAME_REQUIRED)
        if self.styling is not None and self.styling not in STYLING_APPROACHES:
            errors.append(f"Unsupported styling approach: {self.styling}")
        seen: set[str] = set()
        for prop in self.props:
            if prop.name in seen:
                errors.append(f"Duplicate prop: {prop.name}")
            seen.add(prop.name)
        return errors

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ComponentSpec":
        """Build a spec from untyped data.

        Accepts both snake_case and camelCase keys for the nested fields.

        Raises:
            SpecValidationError: If the name is missing or props are malformed
        """
        if not data.get("name"):
            raise SpecValidationError([NAME_REQUIRED])

        testing_data = data.get("testing") or {}
        a11y_data = data.get("accessibility") or {}
        localization = data.get("localization") or {}

        return cls(
            name=str(data["name"]),
            type=str(data.get("type", "generic")),
            props=[_prop_from_value(p) for p in data.get("props", [])],
            styling=data.get("styling"),
            sub_components=list(data.get("sub_components", data.get("subComponents", []))),
            hooks=list(data.get("hooks", [])),
            features=list(data.get("features", [])),
            testing=TestingOptions(
                include_tests=testing_data.get("include_tests", testing_data.get("includeTests")),
                include_stories=testing_data.get("include_stories", testing_data.get("includeStories")),
                include_docs=testing_data.get("include_docs", testing_data.get("includeDocs")),
            ),
            accessibility=AccessibilityOptions(
                aria_label=a11y_data.get("aria_label", a11y_data.get("ariaLabel")),
                keyboard=bool(a11y_data.get("keyboard", True)),
                role=a11y_data.get("role"),
            ),
            locales=list(localization.get("locales", [])),
            description=str(data.get("description", "")),
            complexity=str(data.get("complexity", "low")),
        )


@dataclass
class PageSpec:
    """Structured input for generate_page().

    Attributes:
        name: PascalCase page name (required)
        layout: default, dashboard or landing
        sections: Component names rendered in order
        components: Components generated alongside the page
        data_sources: Endpoints fetched on mount
        route: Route path for metadata/routing comments
        title: Document title
    """

    name: str
    layout: str = "default"
    sections: list[str] = field(default_factory=list)
    components: list[ComponentSpec] = field(default_factory=list)
    data_sources: list[str] = field(default_factory=list)
    route: str | None = None
    title: str | None = None

    def validate(self) -> list[str]:
        """Return validation errors (empty when valid)."""
        errors: list[str] = []
        if not self.name or not str(self.name).strip():
            errors.append("Page name is required")
        if self.layout not in PAGE_LAYOUTS:
            errors.append(f"Unsupported layout: {self.layout}")
        for component in self.components:
            errors.extend(component.validate())
        return errors

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PageSpec":
        """Build a page spec from untyped data.

        Raises:
            SpecValidationError: If the name is missing
        """
        if not data.get("name"):
            raise SpecValidationError(["Page name is required"])
        return cls(
            name=str(data["name"]),
            layout=str(data.get("layout", "default")),
            sections=[str(s) for s in data.get("sections", [])],
            components=[
                c if isinstance(c, ComponentSpec) else ComponentSpec.from_dict(c)
                for c in data.get("components", [])
            ],
            data_sources=[str(s) for s in data.get("data_sources", data.get("dataSources", []))],
            route=data.get("route"),
            title=data.get("title"),
        )


@dataclass
class ProjectSpec:
    """Structured input for generate_project().

    Attributes:
        name: npm package name (required)
        platform: react or nextjs
        styling: Styling approach for the whole project
        features: Tooling features (typescript, eslint, prettier, testing, storybook)
        components: Initial components
        description: Package description
        version: Initial package version
    """

    name: str
    platform: str = "react"
    styling: str = "css-modules"
    features: list[str] = field(default_factory=list)
    components: list[ComponentSpec] = field(default_factory=list)
    description: str = ""
    version: str = "0.1.0"

    def validate(self) -> list[str]:
        """Return validation errors (empty when valid)."""
        errors: list[str] = []
        if not self.name or not str(self.name).strip():
            errors.append("Project name is required")
        if self.platform not in PLATFORMS:
            errors.append(f"Unsupported platform: {self.platform}")
        if self.styling not in STYLING_APPROACHES:
            errors.append(f"Unsupported styling approach: {self.styling}")
        for component in self.components:
            errors.extend(component.validate())
        return errors

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProjectSpec":
        """Build a project spec from untyped data.

        Raises:
            SpecValidationError: If the name is missing
        """
        if not data.get("name"):
            raise SpecValidationError(["Project name is required"])
        return cls(
            name=str(data["name"]),
            platform=str(data.get("platform", data.get("framework", "react"))),
            styling=str(data.get("styling", "css-modules")),
            features=[str(f) for f in data.get("features", [])],
            components=[
                c if isinstance(c, ComponentSpec) else ComponentSpec.from_dict(c)
                for c in data.get("components", data.get("initialComponents", []))
            ],
            description=str(data.get("description", "")),
            version=str(data.get("version", "0.1.0")),
        )


# =============================================================================
# Outputs
# =============================================================================


@dataclass(frozen=True)
class GeneratedFile:
    """A file produced by the Generation Engine (not yet written to disk).

    Attributes:
        path: Project-relative path using forward slashes
        content: Full file text
        type: File tag
    """

    path: str
    content: str
    type: FileType

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"path": self.path, "content": self.content, "type": self.type.value}


@dataclass
class GenerationResult:
    """Outcome of a generation call.

    ``success`` is False only when nothing usable was produced; warnings
    describe degraded but successful output.

    Attributes:
        success: Whether generation completed
        files: Generated files in emission order
        warnings: Non-fatal notes
        errors: Failure messages (non-empty iff success is False)
        suggestions: Follow-up advice for the caller
    """

    success: bool = True
    files: list[GeneratedFile] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, *errors: str) -> "GenerationResult":
        """Create a failed result with no files."""
        return cls(success=False, errors=list(errors))

    def merge(self, other: "GenerationResult") -> None:
        """Fold another result's files and messages into this one."""
        self.files.extend(other.files)
        self.warnings.extend(other.warnings)
        self.errors.extend(other.errors)
        self.suggestions.extend(other.suggestions)
        if not other.success:
            self.success = False

    def files_of_type(self, file_type: FileType) -> list[GeneratedFile]:
        """Return generated files with the given tag."""
        return [f for f in self.files if f.type == file_type]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "success": self.success,
            "files": [f.to_dict() for f in self.files],
            "warnings": list(self.warnings),
            "errors": list(self.errors),
            "suggestions": list(self.suggestions),
        }
