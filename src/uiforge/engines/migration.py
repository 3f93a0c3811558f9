"""Migration Engine: phased text transformations with backup and rollback.

A run walks ``idle -> backing-up -> executing-phases -> completed|aborted``:

1. Phases are ordered by their dependencies (ties: priority, then
   declaration order).
2. Every file any phase will touch is snapshotted under
   ``<project>/<backup_dir>/backup-<UTC timestamp>/``.
3. Each phase applies its transformations, in order, to each resolved
   target file. Later phases see the output of earlier ones.

Missing targets are skipped, not errors. A phase fails when it records any
error; a failed high-risk phase aborts the run.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from uiforge.analyzers.filesystem import FileSystem, LocalFileSystem
from uiforge.engines.mappings import component_mappings, mappings_to_transformations, render_codemod
from uiforge.models.migration import (
    ComponentMapping,
    MigrationContext,
    MigrationPhase,
    MigrationResult,
    MigrationState,
    PhaseResult,
    RiskLevel,
    RollbackResult,
    Transformation,
    TransformationType,
)
from uiforge.templates.library import TemplateLibrary
from uiforge.templates.processor import TemplateProcessor

logger = logging.getLogger(__name__)

DRY_RUN_WARNING = "Dry run mode - no files were modified"
BACKUP_NOT_FOUND = "Backup location not found"


def apply_transformation(content: str, transformation: Transformation) -> str:
    """Apply one transformation to file content.

    Args:
        content: Current file content
        transformation: Rule to apply

    Returns:
        Transformed content (unchanged for ``modify``)

    Raises:
        re.error: If the transformation's pattern is not a valid regex
    """
    kind = transformation.type
    if kind == TransformationType.REPLACE:
        if transformation.pattern:
            replacement = transformation.replacement
            if replacement is None:
                replacement = transformation.target
            return re.sub(transformation.pattern, replacement, content)
        if not transformation.source:
            return content
        return content.replace(transformation.source, transformation.target)
    if kind == TransformationType.ADD:
        return content + transformation.target
    if kind == TransformationType.REMOVE:
        if transformation.pattern:
            return re.sub(transformation.pattern, "", content)
        if not transformation.source:
            return content
        return content.replace(transformation.source, "")
    if kind == TransformationType.RENAME:
        if not transformation.source:
            return content
        return content.replace(transformation.source, transformation.target)
    # MODIFY carries no text rule of its own; only its validator runs.
    return content


def order_phases(phases: list[MigrationPhase]) -> list[MigrationPhase]:
    """Topologically order phases by their dependencies.

    Among phases whose dependencies are all placed, the lowest priority
    runs first, then declaration order. Phases in a cycle or depending on
    unknown ids are appended at the end in declaration order; they fail
    the dependency check when executed.
    """
    known = {phase.id for phase in phases}
    placed: set[str] = set()
    ordered: list[MigrationPhase] = []
    pending = list(enumerate(phases))

    while pending:
        ready = [
            (index, phase)
            for index, phase in pending
            if all(dep in placed for dep in phase.dependencies) and set(phase.dependencies) <= known
        ]
        if not ready:
            break
        index, phase = min(ready, key=lambda item: (item[1].priority, item[0]))
        ordered.append(phase)
        placed.add(phase.id)
        pending.remove((index, phase))

    if pending:
        logger.warning(
            "Phases with unsatisfiable dependencies: %s",
            ", ".join(phase.id for _, phase in pending),
        )
    ordered.extend(phase for _, phase in pending)
    return ordered


@dataclass
class _Run:
    """Mutable bookkeeping for one execute_migration() call."""

    state: MigrationState = MigrationState.IDLE
    completed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    modified: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    phase_results: list[PhaseResult] = field(default_factory=list)
    contents: dict[Path, str] = field(default_factory=dict)
    backup_location: Path | None = None

    def transition(self, state: MigrationState) -> None:
        logger.info("Migration state: %s -> %s", self.state.value, state.value)
        self.state = state


class MigrationEngine:
    """Executes migration phases against a project.

    Usage:
        context = MigrationContext(project_path=Path("."), phases=phases)
        engine = MigrationEngine(context)
        result = engine.execute_migration()
        if not result.success and result.backup_location:
            engine.rollback(result.backup_location)
    """

    def __init__(
        self,
        context: MigrationContext,
        filesystem: FileSystem | None = None,
        library: TemplateLibrary | None = None,
        processor: TemplateProcessor | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            context: Project path, phases and run options
            filesystem: I/O collaborator (defaults to the local disk)
            library: Template table used for codemods
            processor: Template processor used for codemods
        """
        self.context = context
        self.root = Path(context.project_path)
        self.filesystem = filesystem or LocalFileSystem()
        self.library = library or TemplateLibrary()
        self.processor = processor or TemplateProcessor()

    # =========================================================================
    # Execution
    # =========================================================================

    def execute_migration(self) -> MigrationResult:
        """Run every configured phase.

        Returns:
            MigrationResult describing completed, failed and skipped work
        """
        run = _Run()
        phases = order_phases(self.context.phases)
        resolved = [self.resolve_targets(phase.components) for phase in phases]
        logger.info(
            "Starting migration %s -> %s (%d phases%s)",
            self.context.source_framework,
            self.context.target_framework,
            len(phases),
            ", dry run" if self.context.dry_run else "",
        )

        if self.context.dry_run:
            run.warnings.append(DRY_RUN_WARNING)
        elif self.context.backup_enabled:
            run.transition(MigrationState.BACKING_UP)
            if not self._create_backup(resolved, run):
                run.transition(MigrationState.ABORTED)
                return self._finish(run)

        run.transition(MigrationState.EXECUTING)
        for phase, targets in zip(phases, resolved):
            phase_result = self._execute_phase(phase, targets, run)
            run.phase_results.append(phase_result)

            if phase_result.success:
                run.completed.append(phase.id)
                continue

            run.failed.append(phase.id)
            logger.warning("Phase %s failed with %d errors", phase.id, len(phase_result.errors))
            if phase.risk_level == RiskLevel.HIGH:
                run.warnings.append(f"Migration aborted after high-risk phase {phase.id} failed")
                run.transition(MigrationState.ABORTED)
                return self._finish(run)

        run.transition(MigrationState.COMPLETED)
        return self._finish(run)

    def _finish(self, run: _Run) -> MigrationResult:
        success = not run.failed and not run.errors and run.state == MigrationState.COMPLETED
        instructions: list[str] = []
        if run.failed and run.backup_location is not None:
            instructions = self.rollback_instructions(run.backup_location)

        logger.info(
            "Migration %s: %d completed, %d failed, %d files modified",
            run.state.value,
            len(run.completed),
            len(run.failed),
            len(run.modified),
        )
        return MigrationResult(
            success=success,
            completed_phases=list(run.completed),
            failed_phases=list(run.failed),
            modified_files=list(run.modified),
            skipped_files=list(run.skipped),
            backup_location=run.backup_location,
            warnings=list(run.warnings),
            errors=list(run.errors),
            state=run.state,
            phase_results=list(run.phase_results),
            rollback_instructions=instructions,
        )

    def _execute_phase(
        self,
        phase: MigrationPhase,
        resolved: tuple[list[Path], list[Path]],
        run: _Run,
    ) -> PhaseResult:
        started = datetime.now(UTC)
        errors: list[str] = []
        modified: list[Path] = []

        unmet = [dep for dep in phase.dependencies if dep not in run.completed]
        if unmet:
            errors.append(f"Phase dependencies not satisfied: {', '.join(unmet)}")
            run.errors.extend(errors)
            return PhaseResult(phase.id, False, errors=errors, started_at=started, finished_at=datetime.now(UTC))

        logger.info("Executing phase %s (%s risk)", phase.id, phase.risk_level.value)
        targets, skipped = resolved
        for path in skipped:
            logger.debug("Skipping missing target %s", path)
            if path not in run.skipped:
                run.skipped.append(path)

        for path in targets:
            relative = self._relative(path)
            try:
                original = run.contents[path] if path in run.contents else self.filesystem.read_text(path)
            except (OSError, UnicodeDecodeError) as e:
                errors.append(f"Failed to read {relative}: {e}")
                continue

            content = original
            for transformation in phase.transformations:
                try:
                    content = apply_transformation(content, transformation)
                except re.error as e:
                    errors.append(f"Transformation {transformation.id} failed for {relative}: {e}")
                    continue
                if transformation.validator is not None and not self._validate(transformation, content):
                    errors.append(f"Validation failed for {relative} ({transformation.id})")

            if content == original:
                continue

            if not self.context.dry_run:
                try:
                    self.filesystem.write_text(path, content)
                except OSError as e:
                    errors.append(f"Failed to write {relative}: {e}")
                    continue
            run.contents[path] = content
            modified.append(path)
            if path not in run.modified:
                run.modified.append(path)

        run.errors.extend(errors)
        return PhaseResult(
            phase_id=phase.id,
            success=not errors,
            modified_files=modified,
            skipped_files=skipped,
            errors=errors,
            started_at=started,
            finished_at=datetime.now(UTC),
        )

    @staticmethod
    def _validate(transformation: Transformation, content: str) -> bool:
        try:
            return bool(transformation.validator(content))
        except Exception as e:
            logger.warning("Validator for %s raised: %s", transformation.id, e)
            return False

    # =========================================================================
    # Target resolution
    # =========================================================================

    def _relative(self, path: Path) -> Path:
        try:
            return path.relative_to(self.root)
        except ValueError:
            return path

    def _all_components(self) -> list[Path]:
        # Backups may sit inside a component directory; never treat them as targets.
        backup_root = self.root / self.context.backup_dir
        found: list[Path] = []
        for directory in self.context.component_dirs:
            base = self.root / directory
            if not self.filesystem.is_dir(base):
                continue
            for path in self.filesystem.list_files(base):
                if backup_root in path.parents:
                    continue
                if path.suffix in self.context.extensions and path not in found:
                    found.append(path)
        return found

    def _resolve_name(self, name: str) -> Path | None:
        if "/" in name or Path(name).suffix in self.context.extensions:
            candidate = self.root / name
            return candidate if self.filesystem.exists(candidate) else None

        for directory in self.context.component_dirs:
            base = self.root / directory
            for ext in self.context.extensions:
                for candidate in (base / f"{name}{ext}", base / name / f"{name}{ext}", base / name / f"index{ext}"):
                    if self.filesystem.exists(candidate):
                        return candidate
        return None

    def _default_path(self, name: str) -> Path:
        if "/" in name or Path(name).suffix in self.context.extensions:
            return self.root / name
        directory = self.context.component_dirs[0] if self.context.component_dirs else "src/components"
        extension = self.context.extensions[0] if self.context.extensions else ".tsx"
        return self.root / directory / f"{name}{extension}"

    def resolve_targets(self, components: list[str]) -> tuple[list[Path], list[Path]]:
        """Resolve component names to files.

        Args:
            components: Names, project-relative paths or '*'

        Returns:
            Tuple of (existing files, skipped default paths)
        """
        found: list[Path] = []
        skipped: list[Path] = []
        for name in components:
            if name == "*":
                found.extend(p for p in self._all_components() if p not in found)
                continue
            path = self._resolve_name(name)
            if path is None:
                skipped.append(self._default_path(name))
            elif path not in found:
                found.append(path)
        return found, skipped

    # =========================================================================
    # Backup & rollback
    # =========================================================================

    def _create_backup(self, resolved: list[tuple[list[Path], list[Path]]], run: _Run) -> bool:
        targets: list[Path] = []
        for found, _ in resolved:
            targets.extend(p for p in found if p not in targets)

        timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S%fZ")
        location = self.root / self.context.backup_dir / f"backup-{timestamp}"
        try:
            self.filesystem.mkdir(location)
            for path in targets:
                self.filesystem.copy(path, location / self._relative(path))
        except OSError as e:
            run.errors.append(f"Backup failed: {e}")
            logger.error("Backup to %s failed: %s", location, e)
            return False

        run.backup_location = location
        logger.info("Backed up %d files to %s", len(targets), location)
        return True

    def rollback(self, backup_location: Path | str) -> RollbackResult:
        """Restore every backed-up file over its live counterpart.

        Args:
            backup_location: Directory returned as ``backup_location``

        Returns:
            RollbackResult; per-file failures do not stop other restores
        """
        location = Path(backup_location)
        if not location.is_absolute() and not self.filesystem.exists(location):
            location = self.root / location
        if not self.filesystem.exists(location) or not self.filesystem.is_dir(location):
            logger.error("Rollback failed: %s does not exist", backup_location)
            return RollbackResult(success=False, errors=[BACKUP_NOT_FOUND])

        restored: list[Path] = []
        errors: list[str] = []
        for backup_file in self.filesystem.list_files(location):
            relative = backup_file.relative_to(location)
            try:
                self.filesystem.copy(backup_file, self.root / relative)
            except OSError as e:
                errors.append(f"Failed to restore {relative}: {e}")
                logger.warning("Failed to restore %s: %s", relative, e)
                continue
            restored.append(self.root / relative)

        logger.info("Restored %d files from %s", len(restored), location)
        return RollbackResult(success=not errors, restored_files=restored, errors=errors)

    def rollback_instructions(self, backup_location: Path) -> list[str]:
        """Human instructions for restoring a backup."""
        return [
            f"Run: uiforge rollback {backup_location} --repo {self.root}",
            f"Or copy the contents of {backup_location} back into {self.root}",
        ]

    # =========================================================================
    # Mappings & codemods
    # =========================================================================

    def generate_component_mapping(self, source_framework: str, target_framework: str) -> list[ComponentMapping]:
        """Return idiom translations for a framework pair ([] when unknown)."""
        return component_mappings(source_framework, target_framework)

    def create_codemods(self, mappings: list[ComponentMapping]) -> list[str]:
        """Render one jscodeshift-style codemod per mapping."""
        return [render_codemod(mapping, self.library, self.processor) for mapping in mappings]

    def mappings_to_transformations(self, mappings: list[ComponentMapping]) -> list[Transformation]:
        """Rename transformations equivalent to the given mappings."""
        return mappings_to_transformations(mappings)
