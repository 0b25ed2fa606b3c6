"""The facade a rendering layer works with.

``UniversalExercise`` normalizes a raw record once on construction and
then hands out the canonical document and its renderer projections.
"""

from collections.abc import Mapping
from typing import Any

from models import ExerciseDocument, Metadata, Presentation

from exercises.config import DEFAULT_CONFIG, NormalizerConfig
from exercises.examples import build_example_document
from exercises.normalizers import normalize
from exercises.projectors import project


class UniversalExercise:
    """A raw exercise record together with its canonical document.

    Construction raises whatever normalization raises; nothing is caught
    here. Callers that need a fallback renderer catch the errors
    themselves (see ``exercises.mapper``).
    """

    def __init__(self, raw_data: Any, config: NormalizerConfig | None = None):
        self.config = config or DEFAULT_CONFIG
        self.raw_data = raw_data
        self.document = normalize(raw_data, config=self.config)

    @property
    def data(self) -> dict[str, Any]:
        """The full canonical document in its camelCase wire shape."""
        return self.document.to_dict()

    def get_metadata(self) -> Metadata:
        return self.document.metadata

    def get_presentation(self) -> Presentation:
        return self.document.presentation

    def get_for_renderer(self) -> Any:
        return project(self.document, self.raw_data)

    def get_example_document(self) -> ExerciseDocument | None:
        """Normalize the embedded example, or return None if there is none."""
        if not self.document.example.enabled:
            return None
        raw = self.raw_data
        if isinstance(raw, ExerciseDocument):
            raw = raw.to_dict()
        elif not isinstance(raw, Mapping):
            raw = {}
        return build_example_document(raw, self.document, self.config)

    def get_example_for_renderer(self) -> Any:
        example = self.get_example_document()
        if example is None:
            return None
        return project(example)
