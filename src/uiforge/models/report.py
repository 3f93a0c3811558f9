"""Reporting entities.

- Branding: Optional company branding applied to HTML/markdown headers
- ReportingContext: Output configuration for a Reporting Engine
- ReportResult: Structured outcome of a report build
- ChartData: Aggregated chart series
- Recommendation: Rule-based advice surfaced in reports
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

OUTPUT_FORMATS = {"plain", "markdown", "html", "json"}
DETAIL_LEVELS = {"summary", "detailed", "comprehensive"}


class ReportKind(Enum):
    """Report kinds sharing one rendering pipeline."""

    HEALTH = "health"
    MIGRATION = "migration"
    ARCHITECTURE = "architecture"
    EXECUTIVE = "executive"


class HealthStatus(Enum):
    """Status label derived from a 0-100 score."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    CRITICAL = "critical"

    @classmethod
    def from_score(cls, score: float) -> "HealthStatus":
        """Map a score to its status (>=90, >=80, >=70, >=60, else critical)."""
        if score >= 90:
            return cls.EXCELLENT
        if score >= 80:
            return cls.GOOD
        if score >= 70:
            return cls.FAIR
        if score >= 60:
            return cls.POOR
        return cls.CRITICAL

    @property
    def label(self) -> str:
        """Capitalized display label."""
        return self.value.capitalize()


@dataclass(frozen=True)
class Branding:
    """Company branding for report headers.

    Attributes:
        company_name: Shown under the title
        report_title: Overrides the default report title
        logo: Logo URL (HTML only)
        primary_color: Accent color (HTML only)
        secondary_color: Secondary color (HTML only)
    """

    company_name: str | None = None
    report_title: str | None = None
    logo: str | None = None
    primary_color: str = "#007bff"
    secondary_color: str = "#6c757d"


@dataclass(frozen=True)
class ReportingContext:
    """Configuration for a Reporting Engine.

    Attributes:
        project_path: Root for export_report() relative paths
        output_format: plain, markdown, html or json
        include_charts: Emit chart blocks/series
        include_recommendations: Emit recommendation sections
        detail_level: summary, detailed or comprehensive
        branding: Optional branding
        summary_threshold: Above this many components, lists are summarized
    """

    project_path: Path = field(default_factory=Path.cwd)
    output_format: str = "markdown"
    include_charts: bool = False
    include_recommendations: bool = True
    detail_level: str = "detailed"
    branding: Branding | None = None
    summary_threshold: int = 50

    def __post_init__(self) -> None:
        """Validate format and detail level."""
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Invalid output format: {self.output_format}. Valid: {sorted(OUTPUT_FORMATS)}")
        if self.detail_level not in DETAIL_LEVELS:
            raise ValueError(f"Invalid detail level: {self.detail_level}. Valid: {sorted(DETAIL_LEVELS)}")
        if self.summary_threshold < 0:
            raise ValueError("summary_threshold must be >= 0")


@dataclass(frozen=True)
class ReportResult:
    """Structured outcome of a report build.

    ``content`` is always renderable: on failure it holds an error report.

    Attributes:
        kind: Report kind
        content: Rendered report text
        success: False when the content is an error report
        errors: Failure messages
    """

    kind: ReportKind
    content: str
    success: bool = True
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ChartData:
    """A single chart series.

    Attributes:
        chart_id: Stable identifier (e.g. "complexity-distribution")
        title: Display title
        labels: Category labels
        data: Values per label
        colors: Hex colors per label
    """

    chart_id: str
    title: str
    labels: list[str]
    data: list[int]
    colors: list[str]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.chart_id,
            "title": self.title,
            "labels": list(self.labels),
            "data": list(self.data),
            "colors": list(self.colors),
        }


@dataclass(frozen=True)
class Recommendation:
    """Rule-based recommendation.

    Attributes:
        id: Stable identifier (e.g. "REC-SEC")
        priority: high, medium or low
        category: Area the recommendation addresses
        title: Short imperative title
        description: One-sentence explanation
    """

    id: str
    priority: str
    category: str
    title: str
    description: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "priority": self.priority,
            "category": self.category,
            "title": self.title,
            "description": self.description,
        }
