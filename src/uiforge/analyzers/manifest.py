"""package.json parsing and framework detection.

Reads the project manifest through the FileSystem collaborator and maps
declared dependencies onto known framework signatures. A missing manifest
and a malformed manifest are distinct fatal errors.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from uiforge.analyzers.filesystem import FileSystem
from uiforge.exceptions import ManifestNotFoundError, ManifestParseError
from uiforge.models.analysis import DependencyInfo, FrameworkInfo

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"

# Ordered: meta-frameworks first, so a Next.js app is not reported as React.
FRAMEWORK_SIGNATURES: list[tuple[str, str, str]] = [
    ("next", "Next.js", "ssr"),
    ("nuxt", "Nuxt", "ssr"),
    ("@remix-run/react", "Remix", "ssr"),
    ("gatsby", "Gatsby", "ssg"),
    ("vue", "Vue.js", "spa"),
    ("@angular/core", "Angular", "spa"),
    ("svelte", "Svelte", "spa"),
    ("react", "React", "spa"),
]

STYLING_SIGNATURES: list[tuple[str, str]] = [
    ("tailwindcss", "tailwind"),
    ("styled-components", "styled-components"),
    ("@emotion/react", "emotion"),
    ("@emotion/styled", "emotion"),
]

STATE_SIGNATURES: dict[str, str] = {
    "redux": "Redux",
    "@reduxjs/toolkit": "Redux Toolkit",
    "zustand": "Zustand",
    "mobx": "MobX",
    "jotai": "Jotai",
    "recoil": "Recoil",
    "@tanstack/react-query": "React Query",
    "swr": "SWR",
}


@dataclass(frozen=True)
class Manifest:
    """Parsed project manifest.

    Attributes:
        path: Manifest file path
        name: Package name
        version: Package version
        dependencies: Production dependencies in declaration order
        dev_dependencies: Development dependencies in declaration order
        raw: Full parsed JSON object
    """

    path: Path
    name: str = ""
    version: str = ""
    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)
    raw: dict[str, Any] = field(default_factory=dict)

    def declares(self, package: str) -> bool:
        """Return True if the package appears in either dependency table."""
        return package in self.dependencies or package in self.dev_dependencies

    def declared_version(self, package: str) -> str | None:
        """Declared range for a package (production wins over dev)."""
        return self.dependencies.get(package, self.dev_dependencies.get(package))

    def dependency_infos(self) -> list[DependencyInfo]:
        """Production then development dependencies, tagged with is_dev."""
        infos = [
            DependencyInfo(name=name, version=clean_version(version), is_dev=False)
            for name, version in self.dependencies.items()
        ]
        infos.extend(
            DependencyInfo(name=name, version=clean_version(version), is_dev=True)
            for name, version in self.dev_dependencies.items()
        )
        return infos


def clean_version(version: str | None) -> str | None:
    """Normalize a declared range to a bare version string.

    ``^14.0.0`` -> ``14.0.0``; ``>=1.2 <2`` -> ``1.2``; tags like ``latest``
    are returned unchanged.
    """
    if version is None:
        return None

    version = version.strip()
    if " " in version:
        version = version.split()[0]
    if "||" in version:
        version = version.split("||")[0].strip()
    for prefix in (">=", "<=", "^", "~", ">", "<", "=", "v"):
        if version.startswith(prefix):
            version = version[len(prefix) :]
            break

    return version or None


def _dependency_table(data: dict[str, Any], key: str, path: Path) -> dict[str, str]:
    table = data.get(key, {}) or {}
    if not isinstance(table, dict):
        raise ManifestParseError(path, f'"{key}" must be an object')
    return {str(name): str(version) for name, version in table.items()}


def load_manifest(root: Path, filesystem: FileSystem) -> Manifest:
    """Locate and parse the manifest at the project root.

    Args:
        root: Project root
        filesystem: I/O collaborator

    Returns:
        Parsed Manifest

    Raises:
        ManifestNotFoundError: If package.json does not exist
        ManifestParseError: If package.json is unreadable or not a valid JSON object
    """
    path = root / MANIFEST_NAME
    if not filesystem.exists(path):
        raise ManifestNotFoundError(path)

    try:
        data = json.loads(filesystem.read_text(path))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ManifestParseError(path, str(e)) from e
    except OSError as e:
        raise ManifestParseError(path, f"cannot be read: {e}") from e

    if not isinstance(data, dict):
        raise ManifestParseError(path, "top-level value must be an object")

    manifest = Manifest(
        path=path,
        name=str(data.get("name", "")),
        version=str(data.get("version", "")),
        dependencies=_dependency_table(data, "dependencies", path),
        dev_dependencies=_dependency_table(data, "devDependencies", path),
        raw=data,
    )
    logger.debug(
        "Loaded manifest %s (%d dependencies, %d dev dependencies)",
        path,
        len(manifest.dependencies),
        len(manifest.dev_dependencies),
    )
    return manifest


def detect_framework(manifest: Manifest) -> FrameworkInfo:
    """Match declared dependencies against the framework signature table.

    Args:
        manifest: Parsed manifest

    Returns:
        FrameworkInfo; name "Unknown" when no signature matches
    """
    for package, name, rendering in FRAMEWORK_SIGNATURES:
        if manifest.declares(package):
            version = clean_version(manifest.declared_version(package)) or ""
            logger.debug("Detected framework %s %s via %s", name, version, package)
            return FrameworkInfo(name=name, version=version, type=rendering)
    return FrameworkInfo()


def detect_styling(manifest: Manifest) -> str | None:
    """Return the styling approach implied by dependencies, if any."""
    for package, styling in STYLING_SIGNATURES:
        if manifest.declares(package):
            return styling
    return None


def detect_state_management(manifest: Manifest) -> list[str]:
    """Return display names of state-management libraries in use."""
    found: list[str] = []
    for package, name in STATE_SIGNATURES.items():
        if manifest.declares(package) and name not in found:
            found.append(name)
    return found
