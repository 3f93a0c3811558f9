"""uiforge - analysis, generation, migration and reporting for React codebases.

uiforge works on React and Next.js projects:
- Analysis: textual heuristics over project sources (props, complexity, accessibility)
- Generation: component, page and project scaffolds from specs or plain English
- Migration: dependency-ordered transformation phases with backup and rollback
- Reporting: health, architecture, migration and executive reports

All engines are deterministic: the same input always produces the same output.
"""

__version__ = "0.1.0"
__author__ = "uiforge Contributors"
