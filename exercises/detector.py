"""Archetype detection for raw exercise records.

Legacy records do not say reliably what they are, so the archetype is
inferred in a fixed order, first match wins:

1. An explicit ``exerciseType`` field.
2. Structural rules, in the order of ``STRUCTURAL_RULES``.
3. A generic ``type`` field. Legacy payloads often carry a stale ``type``
   copied from another shape, so it ranks below the structural rules.
4. ``multiple-choice``.

The order is part of the contract: several legacy shapes overlap (a
fill-in-blanks record may also have ``options``), and reordering the
rules changes results. Detection is total. Any input, including
non-mapping values, yields a tag.
"""

import math
from collections.abc import Callable, Mapping
from typing import Any

from log import engine_logger
from models import ArchetypeTag

log = engine_logger()

DEFAULT_ARCHETYPE = ArchetypeTag.MULTIPLE_CHOICE

DetectionRule = Callable[[Mapping[str, Any]], ArchetypeTag | None]


def _present(raw: Mapping[str, Any], key: str) -> bool:
    return raw.get(key) is not None


def _fill_in_blanks_rule(raw: Mapping[str, Any]) -> ArchetypeTag | None:
    sentence = raw.get("sentence")
    if isinstance(sentence, str) and "{answer}" in sentence:
        return ArchetypeTag.FILL_IN_BLANKS
    if sentence is not None and _present(raw, "correctAnswer"):
        return ArchetypeTag.FILL_IN_BLANKS
    return None


def _drag_and_drop_rule(raw: Mapping[str, Any]) -> ArchetypeTag | None:
    if _present(raw, "draggableItems") or _present(raw, "dropZones"):
        return ArchetypeTag.DRAG_AND_DROP
    if _present(raw, "items") and _present(raw, "correctMatches"):
        return ArchetypeTag.DRAG_AND_DROP
    return None


def _word_list_rule(raw: Mapping[str, Any]) -> ArchetypeTag | None:
    words = raw.get("words")
    if not isinstance(words, list):
        return None

    # Only the first word is inspected
    first = words[0] if words and isinstance(words[0], Mapping) else {}
    if "shouldCapitalize" in first or "shouldChange" in first:
        return ArchetypeTag.CLICK_TO_CHANGE
    if "shouldHighlight" in first or _present(raw, "correctWords"):
        return ArchetypeTag.HIGHLIGHT
    return ArchetypeTag.HIGHLIGHT


def _options_rule(raw: Mapping[str, Any]) -> ArchetypeTag | None:
    options = raw.get("options")
    if not isinstance(options, list):
        return None

    required = raw.get("requiredSelections")
    if isinstance(required, (int, float)) and not isinstance(required, bool):
        if math.isfinite(required) and required > 1:
            return ArchetypeTag.MULTIPLE_ANSWERS
    if len(options) > 4:
        return ArchetypeTag.MULTIPLE_CHOICE
    return ArchetypeTag.SINGLE_ANSWER


def _gap_text_rule(raw: Mapping[str, Any]) -> ArchetypeTag | None:
    text = raw.get("text")
    if isinstance(text, str) and "___" in text:
        return ArchetypeTag.GAP_FILL
    return None


def _sequence_rule(raw: Mapping[str, Any]) -> ArchetypeTag | None:
    if any(_present(raw, key) for key in ("sequence", "correctOrder", "correctSequence")):
        return ArchetypeTag.SEQUENCING
    return None


def _table_rule(raw: Mapping[str, Any]) -> ArchetypeTag | None:
    if _present(raw, "rows") and _present(raw, "columns"):
        return ArchetypeTag.TABLE
    return None


STRUCTURAL_RULES: tuple[tuple[str, DetectionRule], ...] = (
    ("fill-in-blanks-sentence", _fill_in_blanks_rule),
    ("drag-and-drop-items", _drag_and_drop_rule),
    ("word-list", _word_list_rule),
    ("options-list", _options_rule),
    ("gap-text", _gap_text_rule),
    ("sequence-fields", _sequence_rule),
    ("table-grid", _table_rule),
)


def explain(raw: Any) -> tuple[ArchetypeTag, str]:
    """Detect the archetype of a raw record and name the rule that decided it.

    Returns:
        Tuple of (archetype, rule_name). rule_name is ``exerciseType``,
        one of the ``STRUCTURAL_RULES`` names, ``type`` or ``default``.
    """
    if not isinstance(raw, Mapping):
        return DEFAULT_ARCHETYPE, "default"

    explicit = raw.get("exerciseType")
    if explicit:
        tag = ArchetypeTag.lookup(explicit)
        if tag is not None:
            return tag, "exerciseType"
        log.debug("unrecognized_exercise_type", exercise_type=explicit)

    for name, rule in STRUCTURAL_RULES:
        tag = rule(raw)
        if tag is not None:
            return tag, name

    generic = raw.get("type")
    if generic:
        tag = ArchetypeTag.lookup(generic)
        if tag is not None:
            return tag, "type"
        log.debug("unrecognized_type_field", type=generic)

    return DEFAULT_ARCHETYPE, "default"


def detect(raw: Any) -> ArchetypeTag:
    """Infer the archetype tag of a raw record. Never raises."""
    tag, rule = explain(raw)
    log.debug("archetype_detected", archetype=tag.value, rule=rule)
    return tag
