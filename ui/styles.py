from rich.theme import Theme
from rich.style import Style
from rich.text import Text

ACCENT_PURPLE = "#8E44AD"
ACCENT_GOLD = "#F1C40F"
SUCCESS_GREEN = "#27AE60"
ERROR_RED = "#C0392B"
INFO_BLUE = "#3498DB"
MUTED_GRAY = "#7F8C8D"
TEXT_WHITE = "#FFFFFF"

DEFAULT_THEME = Theme(
    {
        "primary": Style(color=ACCENT_PURPLE, bold=True),
        "secondary": Style(color=ACCENT_GOLD, bold=True),
        "success": Style(color=SUCCESS_GREEN),
        "error": Style(color=ERROR_RED, bold=True),
        "info": Style(color=INFO_BLUE),
        "muted": Style(color=MUTED_GRAY),
        "archetype": Style(color=ACCENT_PURPLE, bold=True),
        "field_name": Style(color=ACCENT_GOLD, bold=True),
        "title": Style(color=ACCENT_PURPLE, bold=True),
    }
)

# Archetype -> accent color, so the same archetype reads the same everywhere.
ARCHETYPE_COLORS = {
    "multiple-choice": INFO_BLUE,
    "multiple-answers": INFO_BLUE,
    "single-answer": INFO_BLUE,
    "fill-in-blanks": ACCENT_GOLD,
    "gap-fill": ACCENT_GOLD,
    "drag-and-drop": SUCCESS_GREEN,
    "sequencing": SUCCESS_GREEN,
    "click-to-change": ACCENT_PURPLE,
    "highlight": ACCENT_PURPLE,
    "table": MUTED_GRAY,
}


def get_archetype_style(archetype: str | None) -> Style:
    """Get color style for an archetype tag."""
    return Style(color=ARCHETYPE_COLORS.get(archetype or "", TEXT_WHITE), bold=True)


def get_status_style(succeeded: bool) -> Style:
    if succeeded:
        return Style(color=SUCCESS_GREEN, bold=True)
    return Style(color=ERROR_RED, bold=True)


def create_status_label(succeeded: bool) -> Text:
    """Create a ✓/✗ status label."""
    label = Text()
    if succeeded:
        label.append("✓ ", get_status_style(True))
        label.append("SUCCESS", get_status_style(True))
    else:
        label.append("✗ ", get_status_style(False))
        label.append("ERROR", get_status_style(False))
    return label
