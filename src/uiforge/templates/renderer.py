"""Jinja2 HTML shell for reports.

Report bodies are produced by the template processor. This module wraps a
rendered body in the branded page shell (``report.html.j2``). Output is
deterministic for a given body, branding and timestamp.
"""

import logging
from datetime import UTC, datetime
from typing import Any

from jinja2 import Environment, PackageLoader, select_autoescape

from uiforge.models.report import Branding

logger = logging.getLogger(__name__)

DEFAULT_SHELL = "report.html.j2"


def format_datetime(dt: datetime | str | None) -> str:
    """Format a datetime for display in reports.

    Args:
        dt: Datetime object or ISO string

    Returns:
        Formatted date string
    """
    if dt is None:
        return "N/A"

    if isinstance(dt, str):
        try:
            dt = datetime.fromisoformat(dt)
        except ValueError:
            return dt

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    else:
        dt = dt.astimezone(UTC)

    return dt.strftime("%Y-%m-%d %H:%M:%S UTC")


class HtmlReportRenderer:
    """Wraps HTML report fragments in the branded page shell.

    Usage:
        renderer = HtmlReportRenderer()
        page = renderer.render("<h1>Health Report</h1>", title="Health Report")
    """

    def __init__(self, shell: str = DEFAULT_SHELL) -> None:
        """Initialize the renderer.

        Args:
            shell: Shell template name inside the package templates directory
        """
        self.shell = shell
        self._env = Environment(
            loader=PackageLoader("uiforge", "templates"),
            autoescape=select_autoescape(["html", "xml", "j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self._env.filters["format_datetime"] = format_datetime

    def render(
        self,
        body: str,
        title: str,
        branding: Branding | None = None,
        generated_at: datetime | None = None,
    ) -> str:
        """Render a complete HTML document around a body fragment.

        Args:
            body: Pre-escaped HTML fragment
            title: Document title
            branding: Optional company branding
            generated_at: Timestamp shown in the footer (defaults to now)

        Returns:
            HTML document

        Raises:
            jinja2.TemplateError: If the shell cannot be loaded or rendered
        """
        template = self._env.get_template(self.shell)
        context = self._build_context(body, title, branding, generated_at)
        rendered = template.render(**context)
        logger.debug("Rendered HTML shell %s (%d characters)", self.shell, len(rendered))
        return rendered

    @staticmethod
    def _build_context(
        body: str,
        title: str,
        branding: Branding | None,
        generated_at: datetime | None,
    ) -> dict[str, Any]:
        defaults = Branding()
        return {
            "body": body,
            "title": title,
            "branding": branding,
            "primary_color": (branding or defaults).primary_color,
            "secondary_color": (branding or defaults).secondary_color,
            "generated_at": generated_at or datetime.now(UTC),
        }
