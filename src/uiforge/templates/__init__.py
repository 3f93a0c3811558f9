"""uiforge templates.

- processor: The ``{{path}}`` / ``#each`` / ``#if`` template grammar
- library: Immutable ``(kind, variant)`` template table
- renderer: Jinja2 HTML shell for reports
"""

from uiforge.templates.library import TemplateLibrary
from uiforge.templates.processor import TemplateProcessor, render
from uiforge.templates.renderer import HtmlReportRenderer

__all__ = ["HtmlReportRenderer", "TemplateLibrary", "TemplateProcessor", "render"]
