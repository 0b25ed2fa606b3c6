"""Exercise Schema UI Module - terminal views of canonical documents."""

from ui.app import InspectorUI
from ui.components import (
    ConversionReport,
    DetectionTable,
    DocumentPanel,
    ProjectionPanel,
)
from ui.styles import (
    ACCENT_PURPLE,
    ACCENT_GOLD,
    SUCCESS_GREEN,
    ERROR_RED,
    INFO_BLUE,
    MUTED_GRAY,
    DEFAULT_THEME,
)

__all__ = [
    "InspectorUI",
    "ConversionReport",
    "DetectionTable",
    "DocumentPanel",
    "ProjectionPanel",
    "ACCENT_PURPLE",
    "ACCENT_GOLD",
    "SUCCESS_GREEN",
    "ERROR_RED",
    "INFO_BLUE",
    "MUTED_GRAY",
    "DEFAULT_THEME",
]
