"""File-system collaborator used by the engines.

Engines never call ``open`` or ``shutil`` directly. They go through a
FileSystem, so tests and embedding applications can substitute their own
implementation. LocalFileSystem is the default.
"""

import shutil
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path


class FileSystem(ABC):
    """Abstract I/O interface consumed by the engines.

    All paths are absolute or relative to the caller's working directory;
    the engines always pass absolute paths rooted at the project.
    """

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Return True if the path exists."""
        pass

    @abstractmethod
    def is_dir(self, path: Path) -> bool:
        """Return True if the path is a directory."""
        pass

    @abstractmethod
    def read_text(self, path: Path) -> str:
        """Read a UTF-8 text file."""
        pass

    @abstractmethod
    def write_text(self, path: Path, content: str) -> None:
        """Write a UTF-8 text file, replacing existing content."""
        pass

    @abstractmethod
    def mkdir(self, path: Path) -> None:
        """Create a directory and its parents; no error if it exists."""
        pass

    @abstractmethod
    def copy(self, source: Path, destination: Path) -> None:
        """Copy a file, creating destination parents as needed."""
        pass

    @abstractmethod
    def glob(self, root: Path, patterns: Iterable[str]) -> list[Path]:
        """Return files under root matching any pattern.

        Returns:
            Absolute paths, sorted and without duplicates
        """
        pass

    @abstractmethod
    def list_files(self, directory: Path) -> list[Path]:
        """Return all files below a directory, recursively and sorted."""
        pass


class LocalFileSystem(FileSystem):
    """FileSystem backed by pathlib and shutil."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def write_text(self, path: Path, content: str) -> None:
        path.write_text(content, encoding="utf-8")

    def mkdir(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def copy(self, source: Path, destination: Path) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, destination)

    def glob(self, root: Path, patterns: Iterable[str]) -> list[Path]:
        root = root.resolve()
        found: set[Path] = set()
        for pattern in patterns:
            found.update(p for p in root.glob(pattern) if p.is_file())
        return sorted(found)

    def list_files(self, directory: Path) -> list[Path]:
        return sorted(p for p in directory.rglob("*") if p.is_file())
