"""uiforge engines.

- analysis: Project analysis (components, dependencies, quality scores)
- generation: React source generation from descriptions and specs
- migration: Phased transformations with backup and rollback
- reporting: Health, migration, architecture and executive reports
"""

from uiforge.engines.analysis import AnalysisEngine
from uiforge.engines.generation import GenerationEngine
from uiforge.engines.migration import MigrationEngine, apply_transformation, order_phases
from uiforge.engines.reporting import ReportingEngine

__all__ = [
    "AnalysisEngine",
    "GenerationEngine",
    "MigrationEngine",
    "ReportingEngine",
    "apply_transformation",
    "order_phases",
]
