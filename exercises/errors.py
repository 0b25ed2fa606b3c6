"""Errors raised while turning raw records into canonical documents."""


class ExerciseSchemaError(Exception):
    """Base class for normalization and validation failures."""


class MissingRequiredFieldError(ExerciseSchemaError):
    """A canonical document lacks one of type, question or solution."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Exercise must have a {field}")


class UnknownArchetypeError(ExerciseSchemaError):
    """A canonical document names an archetype the engine does not know."""

    def __init__(self, tag: object):
        self.tag = tag
        super().__init__(f"Unknown exercise type: {tag!r}")
