"""uiforge CLI interface.

Commands:
- analyze: Analyze a React project
- generate: Generate components, pages or projects
- migrate: Run migration phases against a project
- rollback: Restore a migration backup
- report: Render a health, architecture or executive report
- init: Initialize uiforge configuration

Global options:
- --config: Path to configuration file
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: JSON log lines for CI
- --version: Show version and exit

Exit codes: 0 success, 1 error, 2 completed with warnings or failures.
"""

import json
from pathlib import Path
from typing import Annotated

import typer
import yaml

from uiforge import __version__
from uiforge.config import UIForgeConfig, create_default_config, load_config
from uiforge.utils.logging import configure_from_cli, get_logger

# Create Typer app
app = typer.Typer(
    name="uiforge",
    help="Analyze, generate, migrate and report on React codebases",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: UIForgeConfig | None = None
_logger = get_logger()

REPORT_KINDS = ("health", "architecture", "executive")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"uiforge {__version__}")
        raise typer.Exit()


def _get_config() -> UIForgeConfig:
    return _config if _config is not None else UIForgeConfig()


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output with timestamps",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress info messages (warnings and errors only)",
        ),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option(
            "--ci",
            help="Enable CI mode with JSON output",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """uiforge - React codebase analysis, generation, migration and reporting."""
    global _config

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    try:
        _config = load_config(config_path=config)
        if _config.config_path:
            _logger.debug(f"Loaded config from: {_config.config_path}")
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)


# =============================================================================
# analyze command
# =============================================================================


@app.command()
def analyze(
    repo: Annotated[
        Path,
        typer.Option(
            "--repo",
            "-r",
            help="Project root containing package.json",
            exists=True,
            file_okay=False,
        ),
    ] = Path("."),
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output the full analysis as JSON",
        ),
    ] = False,
) -> None:
    """Analyze a React project.

    Exit codes:
        0: Analysis completed
        1: Manifest missing or invalid
        2: Completed, but some files could not be analyzed
    """
    from uiforge.engines.analysis import AnalysisEngine
    from uiforge.exceptions import UIForgeError

    repo_path = repo.resolve()
    _logger.info(f"Analyzing project: {repo_path}")

    try:
        result = AnalysisEngine(repo_path, config=_get_config().analysis).analyze_project()
    except UIForgeError as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    if json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        framework = f"{result.framework.name} {result.framework.version}".strip()
        typer.echo(f"\nProject: {result.project_name or repo_path.name}")
        typer.echo(f"Framework: {framework} ({result.framework.type})")
        typer.echo(f"Components: {len(result.components)}")
        typer.echo(f"Dependencies: {len(result.dependencies)}")
        typer.echo("\nQuality Scores")
        for name, score in result.quality.to_dict().items():
            typer.echo(f"  {name}: {score}/100")

    if result.errors:
        _logger.warning(f"Encountered {len(result.errors)} error(s)")
        for error in result.errors:
            _logger.warning(f"  [{error.component}] {error.file_path}: {error.message}")
        raise typer.Exit(2)
    raise typer.Exit(0)


# =============================================================================
# generate command
# =============================================================================


def _load_spec(path: Path) -> dict:
    """Read a YAML (or JSON) generation spec file."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Spec file must contain a mapping: {path}")
    return data


@app.command()
def generate(
    description: Annotated[
        str | None,
        typer.Argument(help='Component request, e.g. "Create a primary button with loading state"'),
    ] = None,
    spec: Annotated[
        Path | None,
        typer.Option(
            "--spec",
            "-s",
            help="YAML spec file with a top-level component, page or project key",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory generated files are written under",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="List files without writing them",
        ),
    ] = False,
) -> None:
    """Generate React source files.

    Exit codes:
        0: Files generated
        1: Generation failed
        2: Generated with warnings
    """
    from uiforge.engines.generation import GenerationEngine

    config = _get_config()
    engine = GenerationEngine(config.generation.to_context())

    if spec is not None:
        try:
            data = _load_spec(spec)
        except (OSError, ValueError, yaml.YAMLError) as e:
            _logger.error(f"Invalid spec file: {e}")
            raise typer.Exit(1)
        if "project" in data:
            result = engine.generate_project(data["project"])
        elif "page" in data:
            result = engine.generate_page(data["page"])
        else:
            result = engine.generate_component(data.get("component", data))
    elif description:
        result = engine.generate_from_description(description)
    else:
        _logger.error("Provide a DESCRIPTION or --spec")
        raise typer.Exit(1)

    if not result.success:
        for error in result.errors:
            _logger.error(error)
        raise typer.Exit(1)

    target = (output_dir or Path(config.generation.output_dir)).resolve()
    for generated in result.files:
        destination = target / generated.path
        if dry_run:
            typer.echo(f"  [{generated.type.value}] {destination}")
            continue
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(generated.content, encoding="utf-8")
        typer.echo(f"  wrote {destination}")

    for suggestion in result.suggestions:
        _logger.info(f"Suggestion: {suggestion}")

    if dry_run:
        _logger.info("Dry run complete - no files written")

    if result.warnings:
        for warning in result.warnings:
            _logger.warning(warning)
        raise typer.Exit(2)
    raise typer.Exit(0)


# =============================================================================
# migrate / rollback commands
# =============================================================================


@app.command()
def migrate(
    repo: Annotated[
        Path,
        typer.Option(
            "--repo",
            "-r",
            help="Project root",
            exists=True,
            file_okay=False,
        ),
    ] = Path("."),
    target_framework: Annotated[
        str | None,
        typer.Option(
            "--to",
            help="Target framework (overrides config)",
        ),
    ] = None,
    source_framework: Annotated[
        str | None,
        typer.Option(
            "--from",
            help="Source framework (overrides config)",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Apply in memory only",
        ),
    ] = False,
) -> None:
    """Run configured migration phases.

    Without configured phases, a rename phase is built from the idiom table
    for the framework pair.

    Exit codes:
        0: All phases completed
        1: Nothing to run or invalid configuration
        2: One or more phases failed
    """
    from dataclasses import replace

    from uiforge.engines.mappings import default_phase
    from uiforge.engines.migration import MigrationEngine

    migration_config = _get_config().migration
    source = source_framework or migration_config.source_framework
    target = target_framework or migration_config.target_framework
    repo_path = repo.resolve()

    try:
        phases = migration_config.build_phases()
    except (KeyError, ValueError) as e:
        _logger.error(f"Invalid migration phase: {e}")
        raise typer.Exit(1)

    if not phases:
        phase = default_phase(source, target)
        if phase is None:
            _logger.error(f"No migration phases configured and no idiom table for {source} -> {target}")
            raise typer.Exit(1)
        phases = [phase]

    context = replace(
        migration_config.to_context(repo_path, phases=phases, dry_run=dry_run or migration_config.dry_run),
        source_framework=source,
        target_framework=target,
    )
    result = MigrationEngine(context).execute_migration()

    typer.echo(f"\nMigration {result.state.value}: {source} -> {target}")
    typer.echo(f"  Completed phases: {', '.join(result.completed_phases) or '-'}")
    typer.echo(f"  Failed phases: {', '.join(result.failed_phases) or '-'}")
    typer.echo(f"  Modified files: {len(result.modified_files)}")
    typer.echo(f"  Skipped files: {len(result.skipped_files)}")
    if result.backup_location:
        typer.echo(f"  Backup: {result.backup_location}")

    for warning in result.warnings:
        _logger.warning(warning)
    for error in result.errors:
        _logger.error(error)
    for line in result.rollback_instructions:
        typer.echo(f"  {line}")

    raise typer.Exit(0 if result.success else 2)


@app.command()
def rollback(
    backup_dir: Annotated[
        Path,
        typer.Argument(help="Backup directory printed by migrate"),
    ],
    repo: Annotated[
        Path,
        typer.Option(
            "--repo",
            "-r",
            help="Project root",
            exists=True,
            file_okay=False,
        ),
    ] = Path("."),
) -> None:
    """Restore files from a migration backup."""
    from uiforge.engines.migration import MigrationEngine
    from uiforge.models.migration import MigrationContext

    engine = MigrationEngine(MigrationContext(project_path=repo.resolve()))
    result = engine.rollback(backup_dir)

    for error in result.errors:
        _logger.error(error)
    if not result.restored_files and not result.success:
        raise typer.Exit(1)

    typer.echo(f"Restored {len(result.restored_files)} file(s)")
    raise typer.Exit(0 if result.success else 2)


# =============================================================================
# report command
# =============================================================================


@app.command()
def report(
    kind: Annotated[
        str,
        typer.Argument(help="Report kind: health, architecture, executive"),
    ],
    repo: Annotated[
        Path,
        typer.Option(
            "--repo",
            "-r",
            help="Project root containing package.json",
            exists=True,
            file_okay=False,
        ),
    ] = Path("."),
    format: Annotated[
        str | None,
        typer.Option(
            "--format",
            "-f",
            help="Output format: plain, markdown, html, json",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="File to write (relative to the project root)",
        ),
    ] = None,
) -> None:
    """Render a report for a project."""
    from uiforge.engines.analysis import AnalysisEngine
    from uiforge.engines.reporting import ReportingEngine
    from uiforge.exceptions import UIForgeError

    if kind not in REPORT_KINDS:
        _logger.error(f"Unknown report kind: {kind}. Use one of: {', '.join(REPORT_KINDS)}")
        raise typer.Exit(1)

    config = _get_config()
    repo_path = repo.resolve()

    try:
        context = config.reporting.to_context(repo_path, output_format=format)
    except ValueError as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    try:
        analysis = AnalysisEngine(repo_path, config=config.analysis).analyze_project()
    except UIForgeError as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    engine = ReportingEngine(context)
    builders = {
        "health": engine.build_health_report,
        "architecture": engine.build_architecture_report,
        "executive": engine.build_executive_summary,
    }
    result = builders[kind](analysis)

    if output is not None:
        try:
            written = engine.export_report(result.content, output)
        except OSError as e:
            _logger.error(f"Failed to write report: {e}")
            raise typer.Exit(1)
        typer.echo(f"Report written to: {written}")
    else:
        typer.echo(result.content, nl=False)

    if not result.success:
        raise typer.Exit(1)
    raise typer.Exit(0)


# =============================================================================
# init command
# =============================================================================


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite existing config",
        ),
    ] = False,
) -> None:
    """Initialize uiforge configuration in ./.uiforge/config.yaml."""
    config_dir = Path(".uiforge")
    config_file = config_dir / "config.yaml"

    if config_file.exists() and not force:
        _logger.error(f"Config already exists: {config_file}")
        _logger.info("Use --force to overwrite")
        raise typer.Exit(1)

    config_dir.mkdir(exist_ok=True)
    config_file.write_text(create_default_config())
    _logger.info(f"Created config: {config_file}")

    typer.echo(f"uiforge configuration initialized: {config_file}")
    raise typer.Exit(0)


if __name__ == "__main__":
    app()
