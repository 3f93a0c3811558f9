"""Unit tests for package.json parsing and framework detection."""

import json
from pathlib import Path

import pytest

from tests.fixtures.builders import InMemoryFileSystem
from uiforge.analyzers.filesystem import LocalFileSystem
from uiforge.analyzers.manifest import (
    Manifest,
    clean_version,
    detect_framework,
    detect_state_management,
    detect_styling,
    load_manifest,
)
from uiforge.exceptions import ManifestNotFoundError, ManifestParseError

ROOT = Path("/app")


def manifest_with(dependencies: dict[str, str], dev: dict[str, str] | None = None) -> Manifest:
    """Build a Manifest without touching a file system."""
    return Manifest(path=ROOT / "package.json", dependencies=dependencies, dev_dependencies=dev or {})


class TestCleanVersion:
    """Tests for version range normalization."""

    @pytest.mark.parametrize(
        ("declared", "expected"),
        [
            ("^14.0.0", "14.0.0"),
            ("~1.2.3", "1.2.3"),
            (">=1.2 <2", "1.2"),
            ("1.x || 2.x", "1.x"),
            ("v3.0.0", "3.0.0"),
            ("18.2.0", "18.2.0"),
            ("latest", "latest"),
        ],
    )
    def test_ranges(self, declared: str, expected: str) -> None:
        assert clean_version(declared) == expected

    def test_none_and_empty(self) -> None:
        assert clean_version(None) is None
        assert clean_version("^") is None


class TestLoadManifest:
    """Tests for reading package.json."""

    def test_reads_fields_in_declaration_order(self) -> None:
        """Test that dependency tables keep the manifest's order."""
        content = json.dumps(
            {
                "name": "shop",
                "version": "0.3.0",
                "dependencies": {"react-dom": "^18.0.0", "react": "^18.0.0"},
                "devDependencies": {"vite": "^5.0.0"},
            }
        )
        fs = InMemoryFileSystem({"/app/package.json": content})

        manifest = load_manifest(ROOT, fs)

        assert manifest.name == "shop"
        assert manifest.version == "0.3.0"
        assert list(manifest.dependencies) == ["react-dom", "react"]
        assert [(d.name, d.version, d.is_dev) for d in manifest.dependency_infos()] == [
            ("react-dom", "18.0.0", False),
            ("react", "18.0.0", False),
            ("vite", "5.0.0", True),
        ]

    def test_missing_manifest(self) -> None:
        with pytest.raises(ManifestNotFoundError, match="package.json not found"):
            load_manifest(ROOT, InMemoryFileSystem())

    def test_invalid_json(self) -> None:
        fs = InMemoryFileSystem({"/app/package.json": "{not json"})

        with pytest.raises(ManifestParseError, match="Failed to parse"):
            load_manifest(ROOT, fs)

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        """Test that undecodable bytes are a parse error, not a UnicodeDecodeError."""
        (tmp_path / "package.json").write_bytes(b'{"name": "\xff\xfe"}')

        with pytest.raises(ManifestParseError, match="Failed to parse"):
            load_manifest(tmp_path, LocalFileSystem())

    def test_unreadable_manifest(self) -> None:
        fs = InMemoryFileSystem({"/app/package.json": "{}"}, unreadable={"/app/package.json"})

        with pytest.raises(ManifestParseError, match="cannot be read"):
            load_manifest(ROOT, fs)

    def test_top_level_must_be_object(self) -> None:
        fs = InMemoryFileSystem({"/app/package.json": "[1, 2]"})

        with pytest.raises(ManifestParseError, match="must be an object"):
            load_manifest(ROOT, fs)

    def test_dependency_table_must_be_object(self) -> None:
        fs = InMemoryFileSystem({"/app/package.json": '{"dependencies": ["react"]}'})

        with pytest.raises(ManifestParseError, match='"dependencies" must be an object'):
            load_manifest(ROOT, fs)

    def test_missing_tables_are_empty(self) -> None:
        fs = InMemoryFileSystem({"/app/package.json": '{"name": "bare"}'})

        manifest = load_manifest(ROOT, fs)

        assert manifest.dependencies == {}
        assert manifest.dev_dependencies == {}


class TestDetectFramework:
    """Tests for framework signatures."""

    def test_next_wins_over_react(self) -> None:
        """Test that meta-frameworks are checked before React."""
        framework = detect_framework(manifest_with({"react": "^18.2.0", "next": "^14.1.0"}))

        assert (framework.name, framework.version, framework.type) == ("Next.js", "14.1.0", "ssr")

    def test_plain_react(self) -> None:
        framework = detect_framework(manifest_with({"react": "^18.2.0"}))

        assert (framework.name, framework.version, framework.type) == ("React", "18.2.0", "spa")

    def test_gatsby_is_static(self) -> None:
        assert detect_framework(manifest_with({"gatsby": "5.0.0", "react": "18.0.0"})).type == "ssg"

    def test_dev_dependency_counts(self) -> None:
        framework = detect_framework(manifest_with({}, dev={"vue": "^3.4.0"}))

        assert framework.name == "Vue.js"

    def test_unknown(self) -> None:
        framework = detect_framework(manifest_with({"lodash": "4.0.0"}))

        assert framework.name == "Unknown"
        assert not framework.is_known


class TestDetectLibraries:
    """Tests for styling and state-management detection."""

    def test_styling(self) -> None:
        assert detect_styling(manifest_with({"tailwindcss": "^3.0.0"})) == "tailwind"
        assert detect_styling(manifest_with({"@emotion/styled": "^11.0.0"})) == "emotion"
        assert detect_styling(manifest_with({"react": "18.0.0"})) is None

    def test_state_management(self) -> None:
        manifest = manifest_with({"zustand": "^4.0.0", "@tanstack/react-query": "^5.0.0"})

        assert detect_state_management(manifest) == ["Zustand", "React Query"]

    def test_no_state_management(self) -> None:
        assert detect_state_management(manifest_with({})) == []
