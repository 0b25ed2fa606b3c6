"""Embedded teaching examples.

An exercise may carry a worked example shown before it, either as an
explicit ``example`` record or as the ``exampleQuestion`` /
``exampleElements`` / ``exampleSolution`` triple. The example is a full
exercise in its own right: it is rendered by normalizing the parent
record overlaid with the example fields, through the same pipeline as
any top-level exercise.
"""

from collections.abc import Mapping
from typing import Any

from log import engine_logger
from models import ExampleSection, ExerciseDocument

from exercises.config import DEFAULT_CONFIG, NormalizerConfig

log = engine_logger()

EXAMPLE_KEYS = ("example", "exampleQuestion", "exampleElements", "exampleSolution")

DISABLED = ExampleSection(enabled=False, content=None)


def has_example(raw: Mapping[str, Any]) -> bool:
    return raw.get("example") is not None or raw.get("exampleQuestion") is not None


def resolve_example(
    raw: Mapping[str, Any],
    config: NormalizerConfig | None = None,
    depth: int = 0,
) -> ExampleSection:
    """Find the example embedded in a raw record.

    An explicit ``example`` mapping is used verbatim. Otherwise an
    ``exampleQuestion`` synthesizes ``{question, elements, solution}``
    from the triple. Records nested ``max_example_depth`` levels deep
    get no example.
    """
    config = config or DEFAULT_CONFIG

    if not has_example(raw):
        return DISABLED

    if depth >= config.max_example_depth:
        log.warning("nested_example_dropped", depth=depth)
        return DISABLED

    example = raw.get("example")
    if example is not None:
        if isinstance(example, Mapping):
            return ExampleSection(enabled=True, content=dict(example))
        log.warning("example_not_a_record", example_type=type(example).__name__)
        if raw.get("exampleQuestion") is None:
            return DISABLED

    return ExampleSection(
        enabled=True,
        content={
            "question": raw["exampleQuestion"],
            "elements": raw.get("exampleElements"),
            "solution": raw.get("exampleSolution"),
        },
    )


def merge_example_record(
    raw: Mapping[str, Any], example: ExampleSection, *, canonical: bool = False
) -> dict[str, Any] | None:
    """Build the raw record the example is normalized from.

    The parent's own example keys are left out, so the example cannot
    resolve the parent's example again. A canonical parent contributes
    nothing, otherwise its structure would be mistaken for the example's.
    """
    if not example.enabled or example.content is None:
        return None

    base: dict[str, Any] = {}
    if not canonical:
        base = {key: value for key, value in raw.items() if key not in EXAMPLE_KEYS}
    return {**base, **example.content, "isExample": True}


def build_example_document(
    raw: Mapping[str, Any],
    document: ExerciseDocument,
    config: NormalizerConfig | None = None,
    depth: int = 0,
) -> ExerciseDocument | None:
    """Normalize the example of ``document`` into its own canonical document.

    Returns None when the document has no example. Errors from the nested
    normalization propagate like any other normalization error.
    """
    from exercises.normalizers import is_canonical, normalize

    record = merge_example_record(raw, document.example, canonical=is_canonical(raw))
    if record is None:
        return None
    return normalize(record, config=config, depth=depth + 1)
