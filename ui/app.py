from rich.console import Console
from rich.text import Text
from typing import Optional, List, Any

from exercises.mapper import ConversionSummary
from models import ExerciseDocument
from ui.components import (
    ConversionReport,
    DetectionTable,
    DocumentPanel,
    ProjectionPanel,
)
from ui.styles import DEFAULT_THEME, ERROR_RED, MUTED_GRAY


class InspectorUI:
    """Terminal output for the exercise schema inspection commands."""

    def __init__(
        self,
        console: Optional[Console] = None,
        error_console: Optional[Console] = None,
    ):
        self.console = console or Console(theme=DEFAULT_THEME)
        self.error_console = error_console or Console(stderr=True, theme=DEFAULT_THEME)

    def show_detections(self, rows: List[tuple[str, str, str]]) -> None:
        """Display detected archetypes as (name, archetype, rule) rows."""
        self.console.print(DetectionTable(rows))

    def show_document(self, document: ExerciseDocument, title: str = "") -> None:
        self.console.print(DocumentPanel(document, title=title))

    def show_projection(self, projection: Any, title: str = "Renderer Projection") -> None:
        self.console.print(ProjectionPanel(projection, title=title))

    def show_report(self, summaries: List[ConversionSummary]) -> int:
        """Display a conversion report. Returns the number of failures."""
        report = ConversionReport(summaries)
        self.console.print(report)
        return report.failed

    def show_info(self, message: str) -> None:
        self.console.print(Text(message, style=f"italic {MUTED_GRAY}"))

    def show_error(self, message: str) -> None:
        """Errors go to stderr so JSON output on stdout stays parseable."""
        self.error_console.print(Text(f"✗ {message}", style=f"bold {ERROR_RED}"))
