"""uiforge configuration system.

Configuration is YAML-based with minimal CLI overrides (--format, --dry-run, --ci).
Supports environment variable substitution (${VAR}) in config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.uiforge/config.yaml
3. ./uiforge.yaml
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from uiforge.models.generation import GenerationContext
from uiforge.models.migration import MigrationContext, MigrationPhase
from uiforge.models.report import DETAIL_LEVELS, OUTPUT_FORMATS, Branding, ReportingContext

# =============================================================================
# Configuration Dataclasses
# =============================================================================

DEFAULT_INCLUDE_PATTERNS = [
    "src/**/*.tsx",
    "src/**/*.jsx",
    "src/**/*.ts",
    "src/**/*.js",
    "app/**/*.tsx",
    "app/**/*.jsx",
    "pages/**/*.tsx",
    "pages/**/*.jsx",
    "components/**/*.tsx",
    "components/**/*.jsx",
    "hooks/**/*.ts",
]

DEFAULT_EXCLUDE_DIRS = ["node_modules", "dist", "build", ".next", "coverage", "__tests__", ".migration-backup"]


@dataclass
class AnalysisConfig:
    """Analysis configuration.

    Attributes:
        include_patterns: Glob patterns (relative to the project root) for candidate files
        exclude_dirs: Directory names whose contents are never analyzed
        test_patterns: Glob patterns identifying test files (for test coverage)
    """

    include_patterns: list[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE_PATTERNS))
    exclude_dirs: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_DIRS))
    test_patterns: list[str] = field(
        default_factory=lambda: ["**/*.test.*", "**/*.spec.*", "**/__tests__/**/*.*"]
    )

    def __post_init__(self) -> None:
        """Validate analysis configuration."""
        if not self.include_patterns:
            raise ValueError("analysis.include_patterns must not be empty")


@dataclass
class GenerationConfig:
    """Generation configuration (mirrors GenerationContext).

    Attributes:
        platform: react or nextjs
        architecture: component-library or application
        file_structure: flat, nested or feature-based
        test_location: colocated, test-directory or separate
        story_location: colocated or stories-directory
        styling: Default styling approach
        typescript: Emit TypeScript
        include_tests: Generate tests for structured specs
        include_stories: Generate stories for structured specs
        include_docs: Generate docs for structured specs
        output_dir: Directory generated files are written under
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
    output_dir: str = "."

    def __post_init__(self) -> None:
        """Validate by building the corresponding context."""
        self.to_context()

    def to_context(self) -> GenerationContext:
        """Build the immutable GenerationContext for an engine."""
        return GenerationContext(
            platform=self.platform,
            architecture=self.architecture,
            file_structure=self.file_structure,
            test_location=self.test_location,
            story_location=self.story_location,
            styling=self.styling,
            typescript=self.typescript,
            include_tests=self.include_tests,
            include_stories=self.include_stories,
            include_docs=self.include_docs,
        )


@dataclass
class MigrationConfig:
    """Migration configuration.

    Attributes:
        source_framework: Framework migrated from
        target_framework: Framework migrated to
        dry_run: Never write files
        backup_enabled: Snapshot files before migrating
        backup_dir: Backup root relative to the project
        component_dirs: Directories searched for component files
        phases: Raw phase definitions (see MigrationPhase.from_dict)
    """

    source_framework: str = "react"
    target_framework: str = "react"
    dry_run: bool = False
    backup_enabled: bool = True
    backup_dir: str = ".migration-backup"
    component_dirs: list[str] = field(default_factory=lambda: ["src/components"])
    phases: list[dict[str, Any]] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate phase ids are unique."""
        ids = [str(p.get("id", "")) for p in self.phases]
        if any(not phase_id for phase_id in ids):
            raise ValueError("Every migration phase requires an id")
        duplicates = {phase_id for phase_id in ids if ids.count(phase_id) > 1}
        if duplicates:
            raise ValueError(f"Duplicate migration phase ids: {sorted(duplicates)}")

    def build_phases(self) -> list[MigrationPhase]:
        """Convert raw phase definitions to MigrationPhase objects."""
        return [MigrationPhase.from_dict(p) for p in self.phases]

    def to_context(
        self,
        project_path: Path,
        phases: list[MigrationPhase] | None = None,
        dry_run: bool | None = None,
    ) -> MigrationContext:
        """Build the MigrationContext for an engine.

        Args:
            project_path: Project root
            phases: Phases overriding the configured ones
            dry_run: Override for the configured dry_run flag
        """
        return MigrationContext(
            project_path=project_path,
            source_framework=self.source_framework,
            target_framework=self.target_framework,
            phases=phases if phases is not None else self.build_phases(),
            dry_run=self.dry_run if dry_run is None else dry_run,
            backup_enabled=self.backup_enabled,
            backup_dir=self.backup_dir,
            component_dirs=list(self.component_dirs),
        )


@dataclass
class BrandingConfig:
    """Report branding.

    Attributes:
        company_name: Company shown in report headers
        report_title: Custom report title
        logo: Logo URL for HTML reports
        primary_color: HTML accent color
        secondary_color: HTML secondary color
    """

    company_name: str | None = None
    report_title: str | None = None
    logo: str | None = None
    primary_color: str = "#007bff"
    secondary_color: str = "#6c757d"


@dataclass
class ReportingConfig:
    """Reporting configuration.

    Attributes:
        format: Output format (plain, markdown, html, json)
        output_dir: Directory (relative to the project) reports are exported to
        include_charts: Emit chart sections
        include_recommendations: Emit recommendation sections
        detail_level: summary, detailed or comprehensive
        summary_threshold: Component count above which lists are summarized
        branding: Optional branding
    """

    format: str = "markdown"
    output_dir: str = "reports"
    include_charts: bool = False
    include_recommendations: bool = True
    detail_level: str = "detailed"
    summary_threshold: int = 50
    branding: BrandingConfig | None = None

    def __post_init__(self) -> None:
        """Validate reporting configuration."""
        if self.format not in OUTPUT_FORMATS:
            raise ValueError(f"Invalid report format: {self.format}. Valid: {sorted(OUTPUT_FORMATS)}")
        if self.detail_level not in DETAIL_LEVELS:
            raise ValueError(f"Invalid detail level: {self.detail_level}. Valid: {sorted(DETAIL_LEVELS)}")

    def to_context(self, project_path: Path, output_format: str | None = None) -> ReportingContext:
        """Build the ReportingContext for an engine."""
        branding = None
        if self.branding is not None:
            branding = Branding(
                company_name=self.branding.company_name,
                report_title=self.branding.report_title,
                logo=self.branding.logo,
                primary_color=self.branding.primary_color,
                secondary_color=self.branding.secondary_color,
            )
        return ReportingContext(
            project_path=project_path,
            output_format=output_format or self.format,
            include_charts=self.include_charts,
            include_recommendations=self.include_recommendations,
            detail_level=self.detail_level,
            branding=branding,
            summary_threshold=self.summary_threshold,
        )


@dataclass
class UIForgeConfig:
    """Top-level uiforge configuration.

    Attributes:
        analysis: Analysis settings
        generation: Generation conventions
        migration: Migration settings and phases
        reporting: Report output settings
    """

    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    migration: MigrationConfig = field(default_factory=MigrationConfig)
    reporting: ReportingConfig = field(default_factory=ReportingConfig)

    # Runtime overrides (set by CLI)
    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


# =============================================================================
# Environment Variable Substitution
# =============================================================================

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)\}")


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in config values.

    Supports ${VAR} syntax, recursively through dicts and lists.

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted

    Raises:
        ValueError: If a referenced variable is not set
    """
    if isinstance(value, str):

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return _ENV_VAR_RE.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Search order:
    1. ./.uiforge/config.yaml
    2. ./uiforge.yaml

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".uiforge" / "config.yaml",
        start_path / "uiforge.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def _pick(data: dict[str, Any], defaults: Any, names: list[str]) -> dict[str, Any]:
    """Take known keys from a config section, falling back to dataclass defaults."""
    return {name: data.get(name, getattr(defaults, name)) for name in names}


def load_config_from_dict(data: dict[str, Any]) -> UIForgeConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        UIForgeConfig instance

    Raises:
        ValueError: If a section contains invalid values
    """
    data = substitute_env_vars(data)

    config = UIForgeConfig()

    if "analysis" in data:
        config.analysis = AnalysisConfig(
            **_pick(data["analysis"] or {}, config.analysis, ["include_patterns", "exclude_dirs", "test_patterns"])
        )

    if "generation" in data:
        config.generation = GenerationConfig(
            **_pick(
                data["generation"] or {},
                config.generation,
                [
                    "platform",
                    "architecture",
                    "file_structure",
                    "test_location",
                    "story_location",
                    "styling",
                    "typescript",
                    "include_tests",
                    "include_stories",
                    "include_docs",
                    "output_dir",
                ],
            )
        )

    if "migration" in data:
        config.migration = MigrationConfig(
            **_pick(
                data["migration"] or {},
                config.migration,
                [
                    "source_framework",
                    "target_framework",
                    "dry_run",
                    "backup_enabled",
                    "backup_dir",
                    "component_dirs",
                    "phases",
                ],
            )
        )

    if "reporting" in data:
        reporting_data = data["reporting"] or {}
        branding_data = reporting_data.get("branding")
        branding = None
        if isinstance(branding_data, dict):
            branding = BrandingConfig(
                **_pick(
                    branding_data,
                    BrandingConfig(),
                    ["company_name", "report_title", "logo", "primary_color", "secondary_color"],
                )
            )
        config.reporting = ReportingConfig(
            **_pick(
                reporting_data,
                config.reporting,
                [
                    "format",
                    "output_dir",
                    "include_charts",
                    "include_recommendations",
                    "detail_level",
                    "summary_threshold",
                ],
            ),
            branding=branding,
        )

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> UIForgeConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        UIForgeConfig instance

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is not None:
        with open(found_path) as f:
            data = yaml.safe_load(f) or {}
        config = load_config_from_dict(data)
        config._config_path = found_path
    else:
        config = UIForgeConfig()

    return config


def create_default_config() -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    return '''# uiforge configuration

# Static analysis
analysis:
  include_patterns:
    - "src/**/*.tsx"
    - "src/**/*.jsx"
    - "app/**/*.tsx"
    - "pages/**/*.tsx"
  exclude_dirs: ["node_modules", "dist", "build", ".next", "coverage"]

# Code generation conventions
generation:
  platform: "react"              # react, nextjs
  file_structure: "flat"         # flat, nested, feature-based
  test_location: "colocated"     # colocated, test-directory, separate
  story_location: "colocated"    # colocated, stories-directory
  styling: "css-modules"         # css-modules, styled-components, tailwind, css, emotion
  typescript: true
  include_tests: true
  include_stories: false
  include_docs: false

# Framework migration
migration:
  source_framework: "react"
  target_framework: "react"
  dry_run: true                  # Preview changes first
  backup_enabled: true
  component_dirs: ["src/components"]
  # phases:
  #   - id: "rename-props"
  #     name: "Rename legacy props"
  #     risk_level: "low"        # low, medium, high (high aborts on failure)
  #     components: ["*"]
  #     transformations:
  #       - id: "variant"
  #         type: "rename"       # replace, add, remove, rename, modify
  #         source: "kind"
  #         target: "variant"
  #         must_contain: "variant"

# Reports
reporting:
  format: "markdown"             # plain, markdown, html, json
  output_dir: "reports"
  include_charts: true
  include_recommendations: true
  detail_level: "detailed"       # summary, detailed, comprehensive
  # branding:
  #   company_name: "${COMPANY_NAME}"
  #   report_title: "Frontend Health"
'''
