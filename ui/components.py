import json
from typing import Any, List

from rich.text import Text
from rich.panel import Panel
from rich.table import Table
from rich.style import Style
from rich.align import Align
from rich import box

from exercises.mapper import ConversionSummary
from models import ExerciseDocument
from ui.styles import (
    ACCENT_PURPLE,
    ACCENT_GOLD,
    SUCCESS_GREEN,
    ERROR_RED,
    MUTED_GRAY,
    TEXT_WHITE,
    create_status_label,
    get_archetype_style,
)


def _format_value(value: Any, limit: int = 60) -> str:
    """Compact one-line rendering of a field value."""
    if isinstance(value, str):
        text = value
    else:
        text = json.dumps(value, ensure_ascii=False, default=str)
    if len(text) > limit:
        return text[: limit - 1] + "…"
    return text


class DetectionTable:
    """Detected archetype and deciding rule for each record."""

    def __init__(self, rows: List[tuple[str, str, str]]):
        self.rows = rows  # (name, archetype, rule)

    def render(self) -> Table:
        table = Table(
            title="Archetype Detection",
            box=box.ROUNDED,
            border_style=ACCENT_PURPLE,
            header_style=Style(color=ACCENT_GOLD, bold=True),
        )
        table.add_column("Record", style=Style(color=TEXT_WHITE), no_wrap=True)
        table.add_column("Archetype", no_wrap=True)
        table.add_column("Rule", style=Style(color=MUTED_GRAY), no_wrap=True)

        for name, archetype, rule in self.rows:
            table.add_row(name, Text(archetype, get_archetype_style(archetype)), rule)
        return table

    def __rich__(self) -> Table:
        return self.render()


class DocumentPanel:
    """A styled panel summarizing a canonical document."""

    def __init__(self, document: ExerciseDocument, title: str = ""):
        self.document = document
        self.title = title

    def render(self) -> Panel:
        doc = self.document
        archetype = doc.metadata.type.value

        content = Text()
        content.append(archetype, get_archetype_style(archetype))
        content.append(f"  {doc.metadata.id}\n", Style(color=MUTED_GRAY))
        content.append(doc.content.question, Style(color=TEXT_WHITE, bold=True))
        content.append("\n")
        if doc.content.instruction:
            content.append(doc.content.instruction, Style(color=MUTED_GRAY, italic=True))
            content.append("\n")
        content.append("\n")

        details = Table(box=None, show_header=False, padding=(0, 1))
        details.add_column("Field", style=Style(color=ACCENT_GOLD, bold=True))
        details.add_column("Value", style=Style(color=TEXT_WHITE))
        details.add_row("difficulty", doc.metadata.difficulty.value)
        details.add_row("estimated time", f"{doc.metadata.estimated_time}s")
        details.add_row("knowledge areas", ", ".join(doc.metadata.knowledge_areas))
        details.add_row("layout", doc.presentation.layout)
        for field, value in doc.content.elements.model_dump(exclude_none=True).items():
            details.add_row(f"elements.{field}", Text(_format_value(value)))
        if doc.content.solution is not None:
            details.add_row("solution", doc.content.solution.type.value)
            details.add_row("answer", Text(_format_value(doc.content.solution.value)))
        details.add_row("example", "yes" if doc.example.enabled else "no")

        grid = Table.grid()
        grid.add_row(Align.left(content))
        grid.add_row(details)

        return Panel(
            grid,
            title=self.title or "Canonical Document",
            subtitle=f"schema v{doc.metadata.version}",
            border_style=ACCENT_PURPLE,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class ProjectionPanel:
    """Field-by-field view of a renderer projection."""

    def __init__(self, projection: Any, title: str = "Renderer Projection"):
        self.projection = projection
        self.title = title

    def render(self) -> Panel:
        if not isinstance(self.projection, dict):
            return Panel(
                Text(_format_value(self.projection), Style(color=MUTED_GRAY)),
                title=self.title,
                border_style=MUTED_GRAY,
                box=box.HEAVY,
            )

        table = Table(box=None, show_header=False, padding=(0, 1))
        table.add_column("Field", style=Style(color=ACCENT_GOLD, bold=True), no_wrap=True)
        table.add_column("Value", style=Style(color=TEXT_WHITE))
        for field, value in self.projection.items():
            table.add_row(field, Text(_format_value(value)))

        return Panel(
            table,
            title=self.title,
            border_style=SUCCESS_GREEN,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class ConversionReport:
    """Batch conversion results with a summary footer."""

    def __init__(self, summaries: List[ConversionSummary]):
        self.summaries = summaries

    @property
    def failed(self) -> int:
        return sum(1 for s in self.summaries if not s.succeeded)

    def render(self) -> Panel:
        table = Table(
            box=box.SIMPLE_HEAD,
            header_style=Style(color=ACCENT_GOLD, bold=True),
        )
        table.add_column("Record", no_wrap=True)
        table.add_column("Status", no_wrap=True)
        table.add_column("Normalized Type", no_wrap=True)
        table.add_column("Example", justify="center")
        table.add_column("Component Fields / Error")

        for summary in self.summaries:
            if summary.succeeded:
                detail = Text(", ".join(summary.component_fields), Style(color=MUTED_GRAY))
            else:
                detail = Text(summary.error or "", Style(color=ERROR_RED))
            table.add_row(
                summary.name,
                create_status_label(summary.succeeded),
                Text(
                    summary.normalized_type or "-",
                    get_archetype_style(summary.normalized_type),
                ),
                "✓" if summary.has_example else "",
                detail,
            )

        total = len(self.summaries)
        footer = Text()
        footer.append(f"{total - self.failed}/{total} converted", Style(color=SUCCESS_GREEN, bold=True))
        if self.failed:
            footer.append(f"  {self.failed} failed", Style(color=ERROR_RED, bold=True))

        grid = Table.grid()
        grid.add_row(table)
        grid.add_row(footer)
        return Panel(
            grid,
            title="Conversion Report",
            border_style=ERROR_RED if self.failed else SUCCESS_GREEN,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()
