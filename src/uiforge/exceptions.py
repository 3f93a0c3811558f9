"""Custom exceptions for uiforge.

Fatal errors are raised as exceptions. Recoverable problems (unreadable
source files, missing migration targets, failed validators) are recorded
on result objects instead.
"""

from pathlib import Path


class UIForgeError(Exception):
    """Base exception for all uiforge errors."""

    pass


class ManifestNotFoundError(UIForgeError):
    """Raised when the project manifest (package.json) does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"package.json not found at {path}")


class ManifestParseError(UIForgeError):
    """Raised when the project manifest is not valid JSON object data."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Failed to parse {path}: {detail}")


class TemplateSyntaxError(UIForgeError):
    """Raised when a template has unbalanced or mismatched blocks."""

    pass


class SpecValidationError(UIForgeError):
    """Raised when a generation spec fails validation.

    Attributes:
        errors: Individual validation messages
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors))


class ReportDataError(UIForgeError):
    """Raised when a report is requested for malformed input data."""

    pass
