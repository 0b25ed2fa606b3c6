"""Projectors: canonical documents -> flat, renderer-ready records.

Each projector is the inverse of its archetype's normalizer and produces
the field names that archetype's renderer reads (``correctMatches``,
``sentence``, ``draggableItems``...). Projection never raises: an
archetype without a projector falls back to the raw input, so a renderer
always gets something to display.
"""

from collections.abc import Callable
from typing import Any

from log import engine_logger
from models import ArchetypeTag, ExerciseDocument, Solution, SolutionKind

log = engine_logger()

Projector = Callable[[ExerciseDocument], dict[str, Any]]


def _solution(document: ExerciseDocument) -> Solution:
    # The validator guarantees a solution; this only guards hand-built documents.
    return document.content.solution or Solution(type=SolutionKind.TEXT_INPUT)


def _common(document: ExerciseDocument) -> dict[str, Any]:
    return {
        "question": document.content.question,
        "instruction": document.content.instruction,
        "explanation": _solution(document).explanation,
        "exerciseType": document.metadata.type.value,
        "media": document.content.elements.media,
    }


def project_choice(document: ExerciseDocument) -> dict[str, Any]:
    """Multiple-choice and multiple-answers; ``correctAnswers`` is always a list."""
    value = _solution(document).value
    return {
        **_common(document),
        "options": document.content.elements.options,
        "correctAnswers": list(value) if isinstance(value, (list, tuple)) else [value],
        "requiredSelections": document.presentation.required_selections or 1,
    }


def project_single_answer(document: ExerciseDocument) -> dict[str, Any]:
    value = _solution(document).value
    return {
        **_common(document),
        "options": document.content.elements.options,
        "correctAnswer": value,
        "correctAnswers": [value],
    }


def project_fill_in_blanks(document: ExerciseDocument) -> dict[str, Any]:
    projection = _common(document)
    del projection["instruction"]
    projection.update(
        sentence=document.content.elements.text,
        correctAnswer=_solution(document).value,
        hint=document.presentation.hint,
    )
    return projection


def project_drag_and_drop(document: ExerciseDocument) -> dict[str, Any]:
    return {
        **_common(document),
        "draggableItems": document.content.elements.items,
        "dropZones": document.content.elements.zones,
        "correctMatches": _solution(document).value,
    }


def project_click_to_change(document: ExerciseDocument) -> dict[str, Any]:
    return {
        **_common(document),
        "words": document.content.elements.words,
        "type": document.presentation.change_type,
        "correctWords": _solution(document).value,
    }


def project_highlight(document: ExerciseDocument) -> dict[str, Any]:
    return {
        **_common(document),
        "words": document.content.elements.words,
        "text": document.content.elements.text,
        "correctWords": _solution(document).value,
    }


def project_gap_fill(document: ExerciseDocument) -> dict[str, Any]:
    blanks = document.content.elements.blanks
    return {
        **_common(document),
        "text": document.content.elements.text,
        "blanks": [blank.model_dump() for blank in blanks] if blanks is not None else None,
        "correctAnswers": _solution(document).value,
    }


def project_sequencing(document: ExerciseDocument) -> dict[str, Any]:
    return {
        **_common(document),
        "items": document.content.elements.items,
        "correctOrder": _solution(document).value,
    }


def project_table(document: ExerciseDocument) -> dict[str, Any]:
    table = document.content.elements.table
    return {
        **_common(document),
        "headers": table.headers if table else [],
        "rows": table.rows if table else [],
        "columns": table.columns if table else [],
        "correctValues": _solution(document).value,
    }


PROJECTORS: dict[ArchetypeTag, Projector] = {
    ArchetypeTag.MULTIPLE_CHOICE: project_choice,
    ArchetypeTag.MULTIPLE_ANSWERS: project_choice,
    ArchetypeTag.SINGLE_ANSWER: project_single_answer,
    ArchetypeTag.FILL_IN_BLANKS: project_fill_in_blanks,
    ArchetypeTag.DRAG_AND_DROP: project_drag_and_drop,
    ArchetypeTag.CLICK_TO_CHANGE: project_click_to_change,
    ArchetypeTag.HIGHLIGHT: project_highlight,
    ArchetypeTag.GAP_FILL: project_gap_fill,
    ArchetypeTag.SEQUENCING: project_sequencing,
    ArchetypeTag.TABLE: project_table,
}


def project(document: ExerciseDocument, raw: Any = None) -> Any:
    """Project a canonical document into its renderer shape.

    Falls back to ``raw`` (or the document's own dict when no raw input
    is known) for an archetype without a projector.
    """
    projector = PROJECTORS.get(document.metadata.type)
    if projector is None:
        log.warning("projection_fallback", archetype=str(document.metadata.type))
        return raw if raw is not None else document.to_dict()
    return projector(document)
