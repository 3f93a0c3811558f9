"""uiforge analyzers - deterministic, text-based analysis building blocks.

- heuristics: Pure functions extracting facts from React source text
- manifest: package.json parsing and framework detection
- filesystem: I/O collaborator interface and local implementation
"""

from uiforge.analyzers.filesystem import FileSystem, LocalFileSystem
from uiforge.analyzers.heuristics import (
    analyze_accessibility,
    calculate_cyclomatic_complexity,
    calculate_maintainability_index,
    determine_component_type,
    extract_dependencies,
    extract_described_props,
    extract_props,
    extract_state,
)
from uiforge.analyzers.manifest import Manifest, clean_version, detect_framework, load_manifest

__all__ = [
    "FileSystem",
    "LocalFileSystem",
    "Manifest",
    "analyze_accessibility",
    "calculate_cyclomatic_complexity",
    "calculate_maintainability_index",
    "clean_version",
    "detect_framework",
    "determine_component_type",
    "extract_dependencies",
    "extract_described_props",
    "extract_props",
    "extract_state",
    "load_manifest",
]
