"""Tests for the rich terminal views."""

from rich.console import Console

from exercises.mapper import ConversionSummary
from exercises.normalizers import normalize
from ui import ConversionReport, DetectionTable, DocumentPanel, InspectorUI, ProjectionPanel


def render(renderable) -> str:
    console = Console(width=200, record=True)
    console.print(renderable)
    return console.export_text()


class TestComponents:
    def test_detection_table(self):
        out = render(DetectionTable([("cat", "fill-in-blanks", "fill-in-blanks-sentence")]))

        assert "cat" in out
        assert "fill-in-blanks-sentence" in out

    def test_document_panel(self, cat_sentence):
        out = render(DocumentPanel(normalize(cat_sentence), title="cat"))

        assert "fill-in-blanks" in out
        assert "The cat is {answer} on the mat." in out
        assert "elements.blanks" in out
        assert "text_input" in out

    def test_projection_panel(self):
        out = render(ProjectionPanel({"correctAnswer": 1, "options": ["a", "b"]}))

        assert "correctAnswer" in out
        assert '["a", "b"]' in out

    def test_projection_panel_non_mapping(self):
        assert "raw text" in render(ProjectionPanel("raw text"))

    def test_long_values_are_shortened(self):
        out = render(ProjectionPanel({"text": "x" * 200}))
        assert "x" * 200 not in out

    def test_conversion_report(self):
        summaries = [
            ConversionSummary(name="ok", status="SUCCESS", normalized_type="table"),
            ConversionSummary(name="bad", status="ERROR", error="Exercise must have a question"),
        ]
        report = ConversionReport(summaries)
        out = render(report)

        assert report.failed == 1
        assert "1/2 converted" in out
        assert "1 failed" in out


class TestInspectorUI:
    def test_show_report_returns_failures(self):
        ui = InspectorUI(console=Console(width=200, record=True))
        summaries = [ConversionSummary(name="ok", status="SUCCESS")]

        assert ui.show_report(summaries) == 0
        assert "1/1 converted" in ui.console.export_text()

    def test_errors_use_error_console(self):
        ui = InspectorUI(
            console=Console(width=200, record=True),
            error_console=Console(width=200, record=True),
        )
        ui.show_error("broken record")

        assert "broken record" in ui.error_console.export_text()
        assert ui.console.export_text() == ""
