import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class ArchetypeTag(str, Enum):
    """The closed set of exercise archetypes the engine understands."""

    MULTIPLE_CHOICE = "multiple-choice"
    MULTIPLE_ANSWERS = "multiple-answers"
    SINGLE_ANSWER = "single-answer"
    FILL_IN_BLANKS = "fill-in-blanks"
    DRAG_AND_DROP = "drag-and-drop"
    CLICK_TO_CHANGE = "click-to-change"
    HIGHLIGHT = "highlight"
    GAP_FILL = "gap-fill"
    SEQUENCING = "sequencing"
    TABLE = "table"

    @classmethod
    def lookup(cls, value: Any) -> "ArchetypeTag | None":
        """Resolve a tag string, a legacy alias, or a case variant to a tag.

        Returns None when the value names no known archetype.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value.strip():
            return None

        folded = _fold_tag(value)
        try:
            return cls(folded)
        except ValueError:
            pass
        return ARCHETYPE_ALIASES.get(folded)


# Legacy tags seen in older payloads, keyed by their folded (kebab-case) form.
ARCHETYPE_ALIASES: dict[str, ArchetypeTag] = {
    "number-comparison": ArchetypeTag.SINGLE_ANSWER,
    "single-choice": ArchetypeTag.SINGLE_ANSWER,
    "simple-text": ArchetypeTag.FILL_IN_BLANKS,
    "fill-in-the-blanks": ArchetypeTag.FILL_IN_BLANKS,
    "fill-blanks": ArchetypeTag.FILL_IN_BLANKS,
    "drag-drop": ArchetypeTag.DRAG_AND_DROP,
    "capitalize": ArchetypeTag.CLICK_TO_CHANGE,
    "table-exercise": ArchetypeTag.TABLE,
}


def _fold_tag(value: str) -> str:
    """Fold camelCase, snake_case and spaced tags to kebab-case."""
    value = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "-", value.strip())
    return re.sub(r"[\s_]+", "-", value).lower()


class SolutionKind(str, Enum):
    SINGLE_CHOICE = "single_choice"
    MULTIPLE_CHOICE = "multiple_choice"
    TEXT_INPUT = "text_input"
    DRAG_POSITIONS = "drag_positions"
    WORD_SELECTION = "word_selection"
    SEQUENCE = "sequence"
    TABLE_COMPLETION = "table_completion"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# ============================================================================
# Canonical Exercise Document
# ============================================================================


class CanonicalModel(BaseModel):
    """Base for canonical document parts.

    Fields are snake_case in Python and camelCase on the wire
    (``estimated_time`` <-> ``estimatedTime``). Instances are frozen.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        frozen=True,
    )


class Metadata(CanonicalModel):
    id: str
    type: ArchetypeTag
    difficulty: Difficulty = Difficulty.MEDIUM
    estimated_time: int | float = 30  # seconds
    knowledge_areas: list[str] = Field(default_factory=lambda: ["general"])
    version: str = "1.0"


class Blank(CanonicalModel):
    """A ``{placeholder}`` token found in a sentence or gap text."""

    placeholder: str
    position: int  # character offset of the opening brace
    length: int  # length of the whole token, braces included


class TableElements(CanonicalModel):
    headers: list[Any] = Field(default_factory=list)
    rows: list[Any] = Field(default_factory=list)
    columns: list[Any] = Field(default_factory=list)


class Elements(CanonicalModel):
    """Interactive elements. Only the fields relevant to the archetype are set."""

    options: list[Any] | None = None
    blanks: list[Blank] | None = None
    items: list[Any] | None = None
    zones: list[Any] | None = None
    text: str | None = None
    words: list[Any] | None = None
    table: TableElements | None = None
    media: Any = None


class Solution(CanonicalModel):
    type: SolutionKind
    value: Any = None
    explanation: str = ""


class Content(CanonicalModel):
    question: str = ""
    instruction: str = ""
    elements: Elements = Field(default_factory=Elements)
    solution: Solution | None = None


class ExampleSection(CanonicalModel):
    """Embedded teaching example.

    ``content`` holds the raw example record, not a normalized document.
    """

    enabled: bool = False
    content: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _enabled_matches_content(self) -> "ExampleSection":
        if self.enabled != (self.content is not None):
            raise ValueError("example.enabled must be true exactly when content is set")
        return self


class Presentation(CanonicalModel):
    layout: str = "grid"
    show_hints: bool = False
    show_progress: bool = True
    animations: bool = True

    # Archetype-specific flags
    required_selections: int | None = None
    hint: Any = None
    change_type: str | None = None
    highlight_type: str | None = None
    input_type: str | None = None
    sequence_type: str | None = None
    table_type: str | None = None


class ExerciseDocument(CanonicalModel):
    """The canonical, archetype-agnostic exercise document."""

    metadata: Metadata
    content: Content
    example: ExampleSection = Field(default_factory=ExampleSection)
    presentation: Presentation = Field(default_factory=Presentation)

    @property
    def archetype(self) -> ArchetypeTag:
        return self.metadata.type

    def to_dict(self) -> dict[str, Any]:
        """Dump to the camelCase wire shape."""
        return self.model_dump(mode="json", by_alias=True)
