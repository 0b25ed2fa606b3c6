"""Minimal cross-archetype checks on canonical documents.

Only the contract every renderer relies on is enforced here. The shape
of archetype-specific elements is not inspected.
"""

from models import ExerciseDocument

from exercises.errors import MissingRequiredFieldError


def validate(document: ExerciseDocument) -> None:
    """Raise MissingRequiredFieldError on the first missing required field."""
    if not document.metadata.type:
        raise MissingRequiredFieldError("type")
    if not document.content.question:
        raise MissingRequiredFieldError("question")
    if document.content.solution is None:
        raise MissingRequiredFieldError("solution")
