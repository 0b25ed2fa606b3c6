"""Normalizers: raw legacy records -> canonical exercise documents.

There is one normalizer per archetype. Each is a pure function of the raw
record that fills a default for every optional field, so any mapping
produces a document (the validator then decides whether it is usable).

``normalize`` is the pipeline entry point: canonical check, detection,
normalization, validation.
"""

import math
import re
import time
import uuid
from collections.abc import Callable, Mapping
from typing import Any

from log import engine_logger
from models import (
    ArchetypeTag,
    Blank,
    Content,
    Difficulty,
    Elements,
    ExerciseDocument,
    Metadata,
    Presentation,
    Solution,
    SolutionKind,
    TableElements,
)

from exercises.config import DEFAULT_CONFIG, NormalizerConfig
from exercises.detector import detect
from exercises.errors import UnknownArchetypeError
from exercises.examples import resolve_example
from exercises.validator import validate

log = engine_logger()

BLANK_PATTERN = re.compile(r"\{([^}]+)\}")

Normalizer = Callable[[Mapping[str, Any], NormalizerConfig, int], ExerciseDocument]


# =============================================================================
# Field helpers
# =============================================================================


def _first(raw: Mapping[str, Any], *keys: str) -> Any:
    """Return the first value among ``keys`` that is present and not None."""
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _as_text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return value if isinstance(value, str) else str(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def generate_id(prefix: str = "ex") -> str:
    """Time-based identifier with a random suffix so same-millisecond ids differ."""
    return f"{prefix}_{time.time_ns() // 1_000_000}_{uuid.uuid4().hex[:6]}"


def _difficulty(value: Any, config: NormalizerConfig) -> Difficulty:
    if value is None:
        return config.default_difficulty
    if isinstance(value, str):
        try:
            return Difficulty(value.strip().lower())
        except ValueError:
            pass
    log.warning("difficulty_defaulted", difficulty=value)
    return config.default_difficulty


def _knowledge_areas(value: Any, config: NormalizerConfig) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)) and value:
        return [_as_text(area) for area in value]
    return list(config.default_knowledge_areas)


def extract_blanks(text: Any) -> list[Blank]:
    """Find ``{placeholder}`` tokens, left to right."""
    if not isinstance(text, str) or not text:
        return []
    return [
        Blank(placeholder=match.group(1), position=match.start(), length=len(match.group(0)))
        for match in BLANK_PATTERN.finditer(text)
    ]


def _word_flag(word: Any, *flags: str) -> bool:
    if not isinstance(word, Mapping):
        return False
    return any(word.get(flag) for flag in flags)


# Older highlight renderers selected words by isCorrect or shouldChange only
# and ignored shouldHighlight.
WORD_PREDICATES: dict[str, tuple[str, ...]] = {
    "capitalize": ("shouldCapitalize",),
    "pronoun": ("isPronoun",),
    "verb": ("isVerb",),
    "highlight": ("shouldHighlight", "isCorrect", "shouldChange"),
}
DEFAULT_WORD_FLAGS = ("isCorrect", "shouldChange")


def extract_correct_words(words: Any, change_type: Any = None) -> list[int]:
    """Indices of the words to select, chosen by a flag keyed on ``change_type``."""
    if not isinstance(words, (list, tuple)):
        return []
    flags = WORD_PREDICATES.get(change_type, DEFAULT_WORD_FLAGS)
    return [index for index, word in enumerate(words) if _word_flag(word, *flags)]


# =============================================================================
# Document assembly
# =============================================================================


def _build_document(
    raw: Mapping[str, Any],
    archetype: ArchetypeTag,
    config: NormalizerConfig,
    depth: int,
    *,
    question: str,
    elements: Elements,
    solution: Solution,
    presentation: dict[str, Any],
) -> ExerciseDocument:
    defaults = config.defaults_for(archetype)

    raw_id = raw.get("id")
    estimated_time = raw.get("estimatedTime")
    hint = raw.get("hint")

    metadata = Metadata(
        id=_as_text(raw_id) if raw_id is not None else generate_id(config.id_prefix),
        type=archetype,
        difficulty=_difficulty(raw.get("difficulty"), config),
        estimated_time=estimated_time if _is_number(estimated_time) else defaults.estimated_time,
        knowledge_areas=_knowledge_areas(raw.get("knowledgeAreas"), config),
        version=config.schema_version,
    )
    content = Content(
        question=question,
        instruction=_as_text(raw.get("instruction"), defaults.instruction),
        elements=elements,
        solution=solution,
    )
    presentation.setdefault("layout", defaults.layout)
    return ExerciseDocument(
        metadata=metadata,
        content=content,
        example=resolve_example(raw, config, depth),
        presentation=Presentation(
            show_hints=bool(hint),
            show_progress=True,
            animations=True,
            **presentation,
        ),
    )


def _explanation(raw: Mapping[str, Any]) -> str:
    return _as_text(_first(raw, "explanation", "feedback"))


def _question(raw: Mapping[str, Any]) -> str:
    return _as_text(_first(raw, "question", "instruction"))


def _required_selections(raw: Mapping[str, Any]) -> int:
    value = raw.get("requiredSelections")
    return int(value) if _is_number(value) and math.isfinite(value) else 1


# =============================================================================
# Per-archetype normalizers
# =============================================================================


def _normalize_choice(
    raw: Mapping[str, Any],
    config: NormalizerConfig,
    depth: int,
    archetype: ArchetypeTag,
) -> ExerciseDocument:
    correct_answers = raw.get("correctAnswers")
    if correct_answers is not None:
        value = correct_answers
    elif raw.get("correctAnswer") is not None:
        value = [raw["correctAnswer"]]
    else:
        value = []

    required = _required_selections(raw)
    is_multiple = required > 1 or (
        isinstance(correct_answers, (list, tuple)) and len(correct_answers) > 1
    )

    return _build_document(
        raw,
        archetype,
        config,
        depth,
        question=_question(raw),
        elements=Elements(options=_as_list(raw.get("options")), media=raw.get("media")),
        solution=Solution(
            type=SolutionKind.MULTIPLE_CHOICE if is_multiple else SolutionKind.SINGLE_CHOICE,
            value=value,
            explanation=_explanation(raw),
        ),
        presentation={
            "layout": _as_text(raw.get("layout"), config.defaults_for(archetype).layout),
            "required_selections": required,
        },
    )


def normalize_multiple_choice(
    raw: Mapping[str, Any], config: NormalizerConfig, depth: int = 0
) -> ExerciseDocument:
    return _normalize_choice(raw, config, depth, ArchetypeTag.MULTIPLE_CHOICE)


def normalize_multiple_answers(
    raw: Mapping[str, Any], config: NormalizerConfig, depth: int = 0
) -> ExerciseDocument:
    return _normalize_choice(raw, config, depth, ArchetypeTag.MULTIPLE_ANSWERS)


def normalize_single_answer(
    raw: Mapping[str, Any], config: NormalizerConfig, depth: int = 0
) -> ExerciseDocument:
    """The solution value is always a scalar option index or answer."""
    correct_answers = raw.get("correctAnswers")
    if isinstance(correct_answers, (list, tuple)):
        value = correct_answers[0] if correct_answers else raw.get("correctAnswer")
    elif correct_answers is not None:
        value = correct_answers
    else:
        value = raw.get("correctAnswer")

    return _build_document(
        raw,
        ArchetypeTag.SINGLE_ANSWER,
        config,
        depth,
        question=_question(raw),
        elements=Elements(options=_as_list(raw.get("options")), media=raw.get("media")),
        solution=Solution(
            type=SolutionKind.SINGLE_CHOICE,
            value=value,
            explanation=_explanation(raw),
        ),
        presentation={
            "layout": _as_text(
                raw.get("layout"),
                config.defaults_for(ArchetypeTag.SINGLE_ANSWER).layout,
            ),
        },
    )


def normalize_fill_in_blanks(
    raw: Mapping[str, Any], config: NormalizerConfig, depth: int = 0
) -> ExerciseDocument:
    sentence = _first(raw, "sentence", "question")
    text = _as_text(sentence) if sentence is not None else None

    return _build_document(
        raw,
        ArchetypeTag.FILL_IN_BLANKS,
        config,
        depth,
        question=_as_text(_first(raw, "question", "sentence")),
        elements=Elements(
            blanks=extract_blanks(text),
            text=text,
            media=raw.get("media"),
        ),
        solution=Solution(
            type=SolutionKind.TEXT_INPUT,
            value=_first(raw, "correctAnswer", "answer"),
            explanation=_explanation(raw),
        ),
        presentation={"hint": raw.get("hint")},
    )


def normalize_drag_and_drop(
    raw: Mapping[str, Any], config: NormalizerConfig, depth: int = 0
) -> ExerciseDocument:
    matches = _first(raw, "correctMatches", "correctPositions")
    # Falls back to the default instruction when the record has neither.
    question = _question(raw) or config.defaults_for(ArchetypeTag.DRAG_AND_DROP).instruction

    return _build_document(
        raw,
        ArchetypeTag.DRAG_AND_DROP,
        config,
        depth,
        question=question,
        elements=Elements(
            items=_as_list(_first(raw, "draggableItems", "items")),
            zones=_as_list(_first(raw, "dropZones", "zones")),
            media=raw.get("media"),
        ),
        solution=Solution(
            type=SolutionKind.DRAG_POSITIONS,
            value=matches if matches is not None else {},
            explanation=_explanation(raw),
        ),
        presentation={},
    )


def normalize_click_to_change(
    raw: Mapping[str, Any], config: NormalizerConfig, depth: int = 0
) -> ExerciseDocument:
    words = _as_list(raw.get("words"))
    change_type = raw.get("type")

    return _build_document(
        raw,
        ArchetypeTag.CLICK_TO_CHANGE,
        config,
        depth,
        question=_question(raw),
        elements=Elements(words=words, media=raw.get("media")),
        solution=Solution(
            type=SolutionKind.WORD_SELECTION,
            value=extract_correct_words(words, change_type),
            explanation=_explanation(raw),
        ),
        presentation={
            "change_type": _as_text(change_type) if change_type is not None else None,
        },
    )


def normalize_highlight(
    raw: Mapping[str, Any], config: NormalizerConfig, depth: int = 0
) -> ExerciseDocument:
    words = _as_list(raw.get("words"))
    correct_words = raw.get("correctWords")

    return _build_document(
        raw,
        ArchetypeTag.HIGHLIGHT,
        config,
        depth,
        question=_question(raw),
        elements=Elements(
            text=_as_text(raw.get("text")),
            words=words,
            media=raw.get("media"),
        ),
        solution=Solution(
            type=SolutionKind.WORD_SELECTION,
            value=(
                correct_words
                if correct_words is not None
                else extract_correct_words(words, "highlight")
            ),
            explanation=_explanation(raw),
        ),
        presentation={"highlight_type": _as_text(raw.get("type"), "highlight")},
    )


def normalize_gap_fill(
    raw: Mapping[str, Any], config: NormalizerConfig, depth: int = 0
) -> ExerciseDocument:
    text = _as_text(raw.get("text"))
    answers = _first(raw, "correctAnswers", "answers")

    return _build_document(
        raw,
        ArchetypeTag.GAP_FILL,
        config,
        depth,
        question=_question(raw),
        elements=Elements(blanks=extract_blanks(text), text=text, media=raw.get("media")),
        solution=Solution(
            type=SolutionKind.TEXT_INPUT,
            value=answers if answers is not None else [],
            explanation=_explanation(raw),
        ),
        presentation={"input_type": _as_text(raw.get("inputType"), "text")},
    )


def normalize_sequencing(
    raw: Mapping[str, Any], config: NormalizerConfig, depth: int = 0
) -> ExerciseDocument:
    order = _first(raw, "correctOrder", "correctSequence")

    return _build_document(
        raw,
        ArchetypeTag.SEQUENCING,
        config,
        depth,
        question=_question(raw),
        elements=Elements(
            items=_as_list(_first(raw, "items", "sequence")),
            media=raw.get("media"),
        ),
        solution=Solution(
            type=SolutionKind.SEQUENCE,
            value=order if order is not None else [],
            explanation=_explanation(raw),
        ),
        presentation={"sequence_type": _as_text(raw.get("type"), "order")},
    )


def normalize_table(
    raw: Mapping[str, Any], config: NormalizerConfig, depth: int = 0
) -> ExerciseDocument:
    values = _first(raw, "correctValues", "answers")

    return _build_document(
        raw,
        ArchetypeTag.TABLE,
        config,
        depth,
        question=_question(raw),
        elements=Elements(
            table=TableElements(
                headers=_as_list(raw.get("headers")),
                rows=_as_list(raw.get("rows")),
                columns=_as_list(raw.get("columns")),
            ),
            media=raw.get("media"),
        ),
        solution=Solution(
            type=SolutionKind.TABLE_COMPLETION,
            value=values if values is not None else [],
            explanation=_explanation(raw),
        ),
        presentation={"table_type": _as_text(raw.get("type"), "completion")},
    )


NORMALIZERS: dict[ArchetypeTag, Normalizer] = {
    ArchetypeTag.MULTIPLE_CHOICE: normalize_multiple_choice,
    ArchetypeTag.MULTIPLE_ANSWERS: normalize_multiple_answers,
    ArchetypeTag.SINGLE_ANSWER: normalize_single_answer,
    ArchetypeTag.FILL_IN_BLANKS: normalize_fill_in_blanks,
    ArchetypeTag.DRAG_AND_DROP: normalize_drag_and_drop,
    ArchetypeTag.CLICK_TO_CHANGE: normalize_click_to_change,
    ArchetypeTag.HIGHLIGHT: normalize_highlight,
    ArchetypeTag.GAP_FILL: normalize_gap_fill,
    ArchetypeTag.SEQUENCING: normalize_sequencing,
    ArchetypeTag.TABLE: normalize_table,
}


# =============================================================================
# Pipeline
# =============================================================================


def is_canonical(raw: Any) -> bool:
    """Structural check for a record that is already a canonical document."""
    if not isinstance(raw, Mapping):
        return False
    metadata = raw.get("metadata")
    content = raw.get("content")
    if not isinstance(metadata, Mapping) or not isinstance(content, Mapping):
        return False
    return (
        bool(metadata.get("type"))
        and "question" in content
        and "elements" in content
        and "solution" in content
    )


def _from_canonical(raw: Mapping[str, Any], config: NormalizerConfig) -> ExerciseDocument:
    """Validate a canonical record, leaving the required-field checks to validate()."""
    metadata = dict(raw["metadata"])
    tag = ArchetypeTag.lookup(metadata["type"])
    if tag is None:
        raise UnknownArchetypeError(metadata["type"])
    metadata["type"] = tag
    if metadata.get("id") is None:
        metadata["id"] = generate_id(config.id_prefix)

    content = {key: value for key, value in raw["content"].items() if value is not None}
    content.setdefault("question", "")

    data = {**raw, "metadata": metadata, "content": content}
    return ExerciseDocument.model_validate(data)


def normalize(
    raw: Any,
    archetype: ArchetypeTag | None = None,
    *,
    config: NormalizerConfig | None = None,
    depth: int = 0,
) -> ExerciseDocument:
    """Convert a raw record into a validated canonical document.

    Args:
        raw: A legacy record, a canonical document dict, or an
            ExerciseDocument (returned unchanged after validation).
        archetype: Skip detection and use this archetype's normalizer.
        config: Defaults to fill in. Uses DEFAULT_CONFIG when omitted.
        depth: Example nesting level of this record.

    Raises:
        MissingRequiredFieldError: The result lacks type, question or solution.
        UnknownArchetypeError: A canonical document names an unknown type.
    """
    config = config or DEFAULT_CONFIG

    if isinstance(raw, ExerciseDocument):
        document = raw
    elif is_canonical(raw):
        document = _from_canonical(raw, config)
    else:
        record = raw if isinstance(raw, Mapping) else {}
        tag = archetype or detect(record)
        document = NORMALIZERS[tag](record, config, depth)

    validate(document)
    return document
