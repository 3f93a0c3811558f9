"""Migration entities.

- Transformation: Single text-rewrite rule
- MigrationPhase: Dependency-ordered group of transformations
- MigrationContext: Configuration for one Migration Engine instance
- PhaseResult / MigrationResult: Outcome of execute_migration()
- RollbackResult: Outcome of rollback()
- ComponentMapping: Framework idiom translation entry
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

Validator = Callable[[str], bool]


class TransformationType(Enum):
    """Kinds of text transformation."""

    REPLACE = "replace"
    MODIFY = "modify"
    ADD = "add"
    REMOVE = "remove"
    RENAME = "rename"


class RiskLevel(Enum):
    """Phase risk level; a failed high-risk phase aborts the run."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MigrationState(Enum):
    """States of a single migration run."""

    IDLE = "idle"
    BACKING_UP = "backing-up"
    EXECUTING = "executing-phases"
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass(frozen=True)
class Transformation:
    """A single text-rewrite rule applied to each target file.

    Attributes:
        id: Unique identifier within the phase
        type: Transformation kind
        source: Text to find (replace/remove/rename)
        target: Replacement or appended text
        pattern: Regular expression used instead of ``source`` (replace/remove)
        replacement: Regex replacement (``re.sub`` syntax)
        validator: Called with the transformed content; False records an error
    """

    id: str
    type: TransformationType
    source: str = ""
    target: str = ""
    pattern: str | None = None
    replacement: str | None = None
    validator: Validator | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Transformation":
        """Build a transformation from configuration data.

        A ``must_contain`` key becomes a validator requiring that text in the
        transformed content.
        """
        validator: Validator | None = None
        must_contain = data.get("must_contain")
        if must_contain:
            required = str(must_contain)

            def validator(content: str) -> bool:
                return required in content

        return cls(
            id=str(data["id"]),
            type=TransformationType(data.get("type", "replace")),
            source=str(data.get("source", "")),
            target=str(data.get("target", "")),
            pattern=data.get("pattern"),
            replacement=data.get("replacement"),
            validator=validator,
        )


@dataclass(frozen=True)
class MigrationPhase:
    """Named unit of migration work.

    Attributes:
        id: Unique phase identifier
        name: Display name
        priority: Lower runs first among phases whose dependencies are met
        dependencies: Phase ids that must complete first
        risk_level: low, medium or high
        components: Component names to transform ('*' = all known)
        transformations: Rules applied in order to each component file
        description: Free-text description for reports
        estimated_minutes: Planning estimate for reports
    """

    id: str
    name: str
    priority: int = 0
    dependencies: list[str] = field(default_factory=list)
    risk_level: RiskLevel = RiskLevel.LOW
    components: list[str] = field(default_factory=list)
    transformations: list[Transformation] = field(default_factory=list)
    description: str = ""
    estimated_minutes: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MigrationPhase":
        """Build a phase from configuration data."""
        if not data.get("id"):
            raise ValueError("Migration phase id is required")
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", data["id"])),
            priority=int(data.get("priority", 0)),
            dependencies=[str(d) for d in data.get("dependencies", [])],
            risk_level=RiskLevel(data.get("risk_level", data.get("riskLevel", "low"))),
            components=[str(c) for c in data.get("components", [])],
            transformations=[Transformation.from_dict(t) for t in data.get("transformations", [])],
            description=str(data.get("description", "")),
            estimated_minutes=data.get("estimated_minutes"),
        )


@dataclass(frozen=True)
class MigrationContext:
    """Configuration for a Migration Engine.

    Attributes:
        project_path: Project root; all target paths resolve beneath it
        source_framework: Framework migrated from
        target_framework: Framework migrated to
        phases: Phase list, treated as a DAG keyed by dependencies
        dry_run: Apply in memory only; nothing is written
        backup_enabled: Snapshot target files before executing phases
        backup_dir: Backup root relative to the project
        component_dirs: Directories searched when resolving component names
        extensions: File extensions tried when resolving component names
    """

    project_path: Path
    source_framework: str = "react"
    target_framework: str = "react"
    phases: list[MigrationPhase] = field(default_factory=list)
    dry_run: bool = False
    backup_enabled: bool = True
    backup_dir: str = ".migration-backup"
    component_dirs: list[str] = field(default_factory=lambda: ["src/components"])
    extensions: list[str] = field(default_factory=lambda: [".tsx", ".jsx", ".ts", ".js"])


@dataclass(frozen=True)
class PhaseResult:
    """Outcome of one phase.

    Attributes:
        phase_id: Phase identifier
        success: True when the phase recorded no errors
        modified_files: Files whose content changed
        skipped_files: Targets that could not be resolved
        errors: Errors recorded for this phase
        started_at: Phase start time
        finished_at: Phase end time
    """

    phase_id: str
    success: bool
    modified_files: list[Path] = field(default_factory=list)
    skipped_files: list[Path] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    started_at: datetime | None = None
    finished_at: datetime | None = None

    @property
    def duration_seconds(self) -> float:
        """Wall-clock duration of the phase."""
        if self.started_at is None or self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()


@dataclass(frozen=True)
class MigrationResult:
    """Outcome of execute_migration(); never mutated after return.

    Attributes:
        success: True when no phase failed and the run was not aborted
        completed_phases: Phase ids in execution order
        failed_phases: Phase ids that failed
        modified_files: Files whose content changed (would change in dry run)
        skipped_files: Targets that could not be resolved
        backup_location: Snapshot directory (None in dry run or without backup)
        warnings: Non-fatal notes
        errors: All recorded errors
        state: Final run state (completed or aborted)
        phase_results: Per-phase details
        rollback_instructions: Shell hints when a rollback is advisable
    """

    success: bool
    completed_phases: list[str]
    failed_phases: list[str]
    modified_files: list[Path]
    skipped_files: list[Path]
    backup_location: Path | None
    warnings: list[str]
    errors: list[str]
    state: MigrationState = MigrationState.COMPLETED
    phase_results: list[PhaseResult] = field(default_factory=list)
    rollback_instructions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "success": self.success,
            "state": self.state.value,
            "completedPhases": list(self.completed_phases),
            "failedPhases": list(self.failed_phases),
            "modifiedFiles": [str(p) for p in self.modified_files],
            "skippedFiles": [str(p) for p in self.skipped_files],
            "backupLocation": str(self.backup_location) if self.backup_location else None,
            "warnings": list(self.warnings),
            "errors": list(self.errors),
            "rollbackInstructions": list(self.rollback_instructions),
        }


@dataclass(frozen=True)
class RollbackResult:
    """Outcome of rollback()."""

    success: bool
    restored_files: list[Path] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ComponentMapping:
    """One idiom translation between frameworks.

    Attributes:
        source: Idiom in the source framework (e.g. "useState")
        target: Equivalent idiom in the target framework (e.g. "ref")
        import_path: Module the target idiom is imported from
        props: Prop renames applied alongside (source prop -> target prop)
    """

    source: str
    target: str
    import_path: str
    props: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "source": self.source,
            "target": self.target,
            "importPath": self.import_path,
            "props": dict(self.props),
        }
