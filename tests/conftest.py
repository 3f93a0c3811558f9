"""Shared pytest fixtures for uiforge tests.

This module provides common fixtures used across unit and integration
tests. Fixtures are organized by category:
- Path fixtures: The bundled sample React project and writable copies
- Configuration fixtures: Config dicts for various scenarios
- Source fixtures: Component sources for heuristic tests
- Analysis fixtures: Pre-built analysis results for report tests
- Migration fixtures: Small projects for migration runs
"""

import shutil
from pathlib import Path
from typing import Any

import pytest

from tests.fixtures import get_sample_repo
from tests.fixtures.builders import InMemoryFileSystem, make_analysis, make_component
from uiforge.models.analysis import AnalysisResult, ComponentType, PropInfo, QualityScores

# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def react_app() -> Path:
    """Return the read-only sample React project."""
    return get_sample_repo("react_app")


@pytest.fixture
def react_app_copy(react_app: Path, tmp_path: Path) -> Path:
    """Copy the sample React project somewhere writable."""
    destination = tmp_path / "react_app"
    shutil.copytree(react_app, destination)
    return destination


@pytest.fixture
def memory_fs() -> InMemoryFileSystem:
    """Return an empty in-memory file system."""
    return InMemoryFileSystem()


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def minimal_config() -> dict[str, Any]:
    """Return a minimal valid uiforge configuration."""
    return {
        "reporting": {
            "format": "markdown",
        }
    }


@pytest.fixture
def full_config() -> dict[str, Any]:
    """Return a complete uiforge configuration with all sections."""
    return {
        "analysis": {
            "include_patterns": ["src/**/*.tsx"],
            "exclude_dirs": ["node_modules", "legacy"],
        },
        "generation": {
            "platform": "nextjs",
            "file_structure": "nested",
            "styling": "tailwind",
            "typescript": True,
            "include_tests": True,
            "output_dir": "generated",
        },
        "migration": {
            "source_framework": "material-ui",
            "target_framework": "uiforge",
            "dry_run": True,
            "backup_dir": ".backups",
            "component_dirs": ["src/components", "src/widgets"],
            "phases": [
                {
                    "id": "rename-props",
                    "name": "Rename props",
                    "risk_level": "low",
                    "components": ["*"],
                    "transformations": [
                        {"id": "kind", "type": "rename", "source": "kind=", "target": "variant="},
                    ],
                },
            ],
        },
        "reporting": {
            "format": "html",
            "output_dir": "out",
            "include_charts": True,
            "include_recommendations": False,
            "detail_level": "comprehensive",
            "summary_threshold": 10,
            "branding": {
                "company_name": "Acme",
                "report_title": "Acme Frontend Review",
                "primary_color": "#112233",
            },
        },
    }


# =============================================================================
# Sample Source Code Fixtures
# =============================================================================


@pytest.fixture
def button_source() -> str:
    """Return a typed, documented, accessible button component."""
    return '''import React from 'react';

/**
 * Accessible button.
 */
export interface ButtonProps {
  label: string;
  size?: 'sm' | 'md' | 'lg';
  onClick?: () => void;
}

export const Button = ({ label, size = 'md', onClick }: ButtonProps) => (
  <button type="button" aria-label={label} onClick={onClick}>
    {label}
  </button>
);
'''


@pytest.fixture
def branchy_source() -> str:
    """Return a component with several decision points."""
    return '''export function Status({ status, items }) {
  // if this comment counted, complexity would be wrong
  if (status === 'loading') {
    return null;
  } else if (status === 'error') {
    return <p>Error</p>;
  } else {
    for (const item of items) {
      console.log(item);
    }
  }
  return items.length > 0 && status ? <ul /> : <p>Empty</p>;
}
'''


# =============================================================================
# Analysis Fixtures
# =============================================================================


@pytest.fixture
def healthy_analysis() -> AnalysisResult:
    """Return an analysis of a small, healthy project."""
    return make_analysis(
        [
            make_component("Button", props=[PropInfo(name="label")]),
            make_component("Card", dependencies=["react", "./Button"]),
            make_component("useToggle", ComponentType.HOOK),
            make_component("HomePage", ComponentType.PAGE, dependencies=["react", "../components/Card"]),
        ]
    )


@pytest.fixture
def troubled_analysis() -> AnalysisResult:
    """Return an analysis with low scores, smells and findings."""
    return make_analysis(
        [
            make_component(
                "Dashboard",
                cyclomatic=14,
                dependencies=["react", "./Chart", "./Table", "./Filters", "lodash", "axios", "dayjs"],
                accessibility=40,
                accessibility_issues=["Clickable <div> without role, tabIndex or aria attributes"],
                security_issues=["Uses dangerouslySetInnerHTML"],
            ),
            make_component("Chart", dependencies=["react", "./Dashboard"]),
            make_component("Table"),
            make_component("Filters"),
        ],
        quality=QualityScores(
            overall=55,
            code_quality=60,
            security=70,
            performance=65,
            accessibility=55,
            maintainability=50,
            test_coverage=20,
            documentation=30,
        ),
    )


# =============================================================================
# Migration Fixtures
# =============================================================================


@pytest.fixture
def migration_project(tmp_path: Path) -> Path:
    """Create a project with two components using a legacy ``kind`` prop."""
    components = tmp_path / "src" / "components"
    components.mkdir(parents=True)
    (components / "Button.tsx").write_text(
        "export const Button = ({ kind }) => <button data-kind={kind} />;\n"
    )
    (components / "Alert.tsx").write_text(
        "export const Alert = ({ kind }) => <div role=\"alert\" data-kind={kind} />;\n"
    )
    (components / "styles.css").write_text(".kind { color: red; }\n")
    return tmp_path
