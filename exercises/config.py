"""Configuration for exercise normalization.

These configuration models hold the defaults the normalizers fill in
when a legacy record leaves a field out: estimated times, instructions,
layouts, the schema version, and how deep embedded examples may nest.
"""

from pydantic import BaseModel, Field

from models import ArchetypeTag, Difficulty


class ArchetypeDefaults(BaseModel):
    """Per-archetype defaults."""

    estimated_time: int = Field(default=30, ge=0)  # seconds
    instruction: str = ""
    layout: str = "grid"


def _default_archetypes() -> dict[ArchetypeTag, ArchetypeDefaults]:
    return {
        ArchetypeTag.MULTIPLE_CHOICE: ArchetypeDefaults(
            estimated_time=30,
            instruction="Select the correct answer(s)",
            layout="grid",
        ),
        ArchetypeTag.MULTIPLE_ANSWERS: ArchetypeDefaults(
            estimated_time=30,
            instruction="Select the correct answer(s)",
            layout="grid",
        ),
        ArchetypeTag.SINGLE_ANSWER: ArchetypeDefaults(
            estimated_time=30,
            instruction="Select the correct answer",
            layout="grid",
        ),
        ArchetypeTag.FILL_IN_BLANKS: ArchetypeDefaults(
            estimated_time=45,
            instruction="Fill in the blank",
            layout="text_input",
        ),
        ArchetypeTag.DRAG_AND_DROP: ArchetypeDefaults(
            estimated_time=60,
            instruction="Drag items to the correct positions",
            layout="drag_drop",
        ),
        ArchetypeTag.CLICK_TO_CHANGE: ArchetypeDefaults(
            estimated_time=45,
            instruction="Click on the words that need to be changed",
            layout="word_selection",
        ),
        ArchetypeTag.HIGHLIGHT: ArchetypeDefaults(
            estimated_time=30,
            instruction="Select the highlighted words",
            layout="word_highlight",
        ),
        ArchetypeTag.GAP_FILL: ArchetypeDefaults(
            estimated_time=30,
            instruction="Fill in the gaps",
            layout="gap_fill",
        ),
        ArchetypeTag.SEQUENCING: ArchetypeDefaults(
            estimated_time=45,
            instruction="Put the items in the correct order",
            layout="sequence",
        ),
        ArchetypeTag.TABLE: ArchetypeDefaults(
            estimated_time=60,
            instruction="Complete the table",
            layout="table",
        ),
    }


class NormalizerConfig(BaseModel):
    """Master configuration for the normalization engine."""

    schema_version: str = "1.0"
    default_difficulty: Difficulty = Difficulty.MEDIUM
    default_knowledge_areas: list[str] = Field(default_factory=lambda: ["general"])
    id_prefix: str = "ex"
    # How many levels of embedded examples are resolved. 0 disables examples.
    max_example_depth: int = Field(default=1, ge=0)
    archetypes: dict[ArchetypeTag, ArchetypeDefaults] = Field(
        default_factory=_default_archetypes
    )

    def defaults_for(self, archetype: ArchetypeTag) -> ArchetypeDefaults:
        """Return defaults for an archetype, falling back to the base defaults."""
        return self.archetypes.get(archetype) or ArchetypeDefaults()


DEFAULT_CONFIG = NormalizerConfig()
