"""Integration helpers for the rendering layer.

The engine itself lets normalization errors propagate. These helpers are
the boundary where a renderer catches them: each returns a result model
describing success or failure instead of raising.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from log import engine_logger
from models import Metadata

from exercises.config import NormalizerConfig
from exercises.errors import ExerciseSchemaError
from exercises.universal import UniversalExercise

log = engine_logger()

# Failures a renderer can recover from by showing a placeholder.
RECOVERABLE_ERRORS = (ExerciseSchemaError, ValueError)


class ValidationResult(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)
    normalized_data: Any = None


class NormalizationResult(BaseModel):
    success: bool
    universal_data: dict[str, Any] | None = None
    component_data: Any = None
    metadata: Metadata | None = None
    error: str | None = None
    original_data: Any = None


class ConversionSummary(BaseModel):
    """One row of a batch conversion report."""

    name: str
    status: str  # "SUCCESS" or "ERROR"
    original_fields: list[str] = Field(default_factory=list)
    normalized_type: str | None = None
    component_fields: list[str] = Field(default_factory=list)
    has_example: bool = False
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == "SUCCESS"


def validate_exercise_data(
    raw: Any, config: NormalizerConfig | None = None
) -> ValidationResult:
    """Check that a record normalizes, returning its renderer projection."""
    if not raw:
        return ValidationResult(valid=False, errors=["Exercise data is required"])

    try:
        exercise = UniversalExercise(raw, config)
    except RECOVERABLE_ERRORS as e:
        return ValidationResult(valid=False, errors=[str(e)])
    return ValidationResult(valid=True, normalized_data=exercise.get_for_renderer())


def normalize_exercise_data(
    raw: Any, config: NormalizerConfig | None = None
) -> NormalizationResult:
    """Normalize a record, reporting failure instead of raising."""
    try:
        exercise = UniversalExercise(raw, config)
    except RECOVERABLE_ERRORS as e:
        log.warning("normalization_failed", error=str(e))
        return NormalizationResult(success=False, error=str(e), original_data=raw)

    return NormalizationResult(
        success=True,
        universal_data=exercise.data,
        component_data=exercise.get_for_renderer(),
        metadata=exercise.get_metadata(),
    )


def get_example_data(raw: Any, config: NormalizerConfig | None = None) -> Any:
    """Projected example of a record, or None if it has none or fails."""
    try:
        return UniversalExercise(raw, config).get_example_for_renderer()
    except RECOVERABLE_ERRORS as e:
        log.warning("example_extraction_failed", error=str(e))
        return None


def summarize(
    name: str, raw: Any, config: NormalizerConfig | None = None
) -> ConversionSummary:
    """Convert one record and describe the outcome."""
    original_fields = list(raw.keys()) if isinstance(raw, Mapping) else []

    try:
        exercise = UniversalExercise(raw, config)
        component = exercise.get_for_renderer()
    except RECOVERABLE_ERRORS as e:
        return ConversionSummary(
            name=name,
            status="ERROR",
            original_fields=original_fields,
            error=str(e),
        )

    return ConversionSummary(
        name=name,
        status="SUCCESS",
        original_fields=original_fields,
        normalized_type=exercise.get_metadata().type.value,
        component_fields=list(component.keys()) if isinstance(component, Mapping) else [],
        has_example=exercise.document.example.enabled,
    )
