"""uiforge data models.

This module exports the entities exchanged between engines:
- AnalysisResult, ComponentInfo, PropInfo, QualityScores: analysis output
- ComponentSpec, PageSpec, ProjectSpec, GeneratedFile: generation I/O
- MigrationPhase, Transformation, MigrationResult: migration I/O
- ReportingContext, ReportResult: reporting I/O
"""

from uiforge.models.analysis import (
    AccessibilityInfo,
    AnalysisError,
    AnalysisResult,
    ArchitectureInfo,
    ComplexityInfo,
    ComponentInfo,
    ComponentType,
    DependencyInfo,
    FrameworkInfo,
    PropInfo,
    QualityScores,
)
from uiforge.models.generation import (
    ComponentSpec,
    FileType,
    GeneratedFile,
    GenerationContext,
    GenerationResult,
    PageSpec,
    ProjectSpec,
)
from uiforge.models.migration import (
    ComponentMapping,
    MigrationContext,
    MigrationPhase,
    MigrationResult,
    MigrationState,
    RiskLevel,
    RollbackResult,
    Transformation,
    TransformationType,
)
from uiforge.models.report import (
    Branding,
    ChartData,
    HealthStatus,
    Recommendation,
    ReportingContext,
    ReportKind,
    ReportResult,
)

__all__ = [
    "AccessibilityInfo",
    "AnalysisError",
    "AnalysisResult",
    "ArchitectureInfo",
    "Branding",
    "ChartData",
    "ComplexityInfo",
    "ComponentInfo",
    "ComponentMapping",
    "ComponentSpec",
    "ComponentType",
    "DependencyInfo",
    "FileType",
    "FrameworkInfo",
    "GeneratedFile",
    "GenerationContext",
    "GenerationResult",
    "HealthStatus",
    "MigrationContext",
    "MigrationPhase",
    "MigrationResult",
    "MigrationState",
    "PageSpec",
    "ProjectSpec",
    "PropInfo",
    "QualityScores",
    "Recommendation",
    "ReportingContext",
    "ReportKind",
    "ReportResult",
    "RiskLevel",
    "RollbackResult",
    "Transformation",
    "TransformationType",
]
