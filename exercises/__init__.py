"""Exercise schema normalization and projection.

Legacy exercise records come in many shapes, one per widget. This
package turns any of them into one canonical document and back into the
flat shape each renderer expects.

Architecture:
- Detector infers the archetype of a raw record (ordered, total rules)
- Normalizers map a raw record to the canonical document, one per archetype
- Validator enforces the minimal cross-archetype contract, fail-fast
- Examples resolve the embedded teaching example as a nested document
- Projectors map a canonical document back to a renderer record
- UniversalExercise wraps the pipeline for a single record

Integration helpers (mapper):
- validate_exercise_data, normalize_exercise_data, get_example_data:
  catch normalization errors and report them as result models
- summarize: one row of a batch conversion report

Configuration:
- NormalizerConfig: defaults filled in for missing fields
"""

from exercises.config import DEFAULT_CONFIG, ArchetypeDefaults, NormalizerConfig
from exercises.detector import STRUCTURAL_RULES, detect, explain
from exercises.errors import (
    ExerciseSchemaError,
    MissingRequiredFieldError,
    UnknownArchetypeError,
)
from exercises.examples import build_example_document, resolve_example
from exercises.mapper import (
    ConversionSummary,
    NormalizationResult,
    ValidationResult,
    get_example_data,
    normalize_exercise_data,
    summarize,
    validate_exercise_data,
)
from exercises.normalizers import (
    NORMALIZERS,
    extract_blanks,
    extract_correct_words,
    is_canonical,
    normalize,
)
from exercises.projectors import PROJECTORS, project
from exercises.universal import UniversalExercise
from exercises.validator import validate

__all__ = [
    # Pipeline
    "detect",
    "explain",
    "normalize",
    "validate",
    "project",
    "resolve_example",
    "build_example_document",
    "is_canonical",
    # Tables
    "STRUCTURAL_RULES",
    "NORMALIZERS",
    "PROJECTORS",
    # Helpers
    "extract_blanks",
    "extract_correct_words",
    # Facade
    "UniversalExercise",
    # Integration helpers
    "validate_exercise_data",
    "normalize_exercise_data",
    "get_example_data",
    "summarize",
    "ValidationResult",
    "NormalizationResult",
    "ConversionSummary",
    # Errors
    "ExerciseSchemaError",
    "MissingRequiredFieldError",
    "UnknownArchetypeError",
    # Configuration
    "NormalizerConfig",
    "ArchetypeDefaults",
    "DEFAULT_CONFIG",
]
