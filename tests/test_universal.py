"""Tests for the UniversalExercise facade."""

import pytest

from exercises.errors import MissingRequiredFieldError
from exercises.universal import UniversalExercise
from models import ArchetypeTag, ExerciseDocument, Metadata, Presentation


class TestScenarios:
    """End-to-end behavior of a single exercise."""

    def test_four_option_choice(self, arithmetic_choice):
        exercise = UniversalExercise(arithmetic_choice)

        assert exercise.get_metadata().type == ArchetypeTag.SINGLE_ANSWER
        assert exercise.get_for_renderer()["correctAnswer"] == 1

    def test_fill_in_blanks_sentence(self, cat_sentence):
        exercise = UniversalExercise(cat_sentence)
        blanks = exercise.data["content"]["elements"]["blanks"]

        assert exercise.data["metadata"]["type"] == "fill-in-blanks"
        assert len(blanks) == 1
        assert blanks[0]["placeholder"] == "answer"

    def test_drag_and_drop_matches(self, animal_matching):
        exercise = UniversalExercise(animal_matching)

        assert exercise.get_metadata().type == ArchetypeTag.DRAG_AND_DROP
        assert exercise.get_for_renderer()["correctMatches"] == animal_matching["correctMatches"]

    def test_renormalizing_is_stable(self, arithmetic_choice):
        first = UniversalExercise(arithmetic_choice)
        second = UniversalExercise(first.data)

        assert second.data == first.data
        assert second.get_for_renderer() == first.get_for_renderer()

    def test_empty_record_raises(self):
        with pytest.raises(MissingRequiredFieldError, match="question"):
            UniversalExercise({})


class TestAccessors:
    def test_document_and_data(self, cat_sentence):
        exercise = UniversalExercise(cat_sentence)

        assert isinstance(exercise.document, ExerciseDocument)
        assert exercise.data == exercise.document.to_dict()
        assert exercise.raw_data is cat_sentence

    def test_metadata_and_presentation(self, cat_sentence):
        exercise = UniversalExercise(cat_sentence)

        assert isinstance(exercise.get_metadata(), Metadata)
        assert isinstance(exercise.get_presentation(), Presentation)
        assert exercise.get_presentation().layout == "text_input"

    def test_config_is_used(self, cat_sentence, custom_config):
        exercise = UniversalExercise(cat_sentence, custom_config)

        assert exercise.config is custom_config
        assert exercise.get_metadata().version == "2.0"
        assert exercise.get_metadata().id.startswith("quiz_")

    def test_accepts_document_instance(self, cat_sentence):
        document = UniversalExercise(cat_sentence).document
        assert UniversalExercise(document).document is document


class TestExamples:
    """Example access through the facade."""

    def test_example_question_enables_example(self, capitalize_record):
        exercise = UniversalExercise(capitalize_record)

        assert exercise.data["example"]["enabled"] is True
        assert exercise.get_example_for_renderer() is not None

    def test_example_projection(self, legacy_samples):
        exercise = UniversalExercise(legacy_samples["singleAnswer"])
        example = exercise.get_example_for_renderer()

        assert example["question"] == "Which animal is smaller?"
        assert example["correctAnswer"] == 1
        assert example["exerciseType"] == "single-answer"

    def test_no_example(self, cat_sentence):
        exercise = UniversalExercise(cat_sentence)

        assert exercise.get_example_document() is None
        assert exercise.get_example_for_renderer() is None

    def test_canonical_input_example(self, legacy_samples):
        """A canonical record's example is normalized from its content alone."""
        first = UniversalExercise(legacy_samples["dragAndDrop"])
        second = UniversalExercise(first.data)

        assert second.get_example_for_renderer() == first.get_example_for_renderer()

    def test_document_input_example(self, legacy_samples):
        first = UniversalExercise(legacy_samples["sequencing"])
        second = UniversalExercise(first.document)

        assert second.get_example_for_renderer() == first.get_example_for_renderer()

    def test_example_disabled_by_config(self, capitalize_record, custom_config):
        exercise = UniversalExercise(capitalize_record, custom_config)

        assert exercise.document.example.enabled is False
        assert exercise.get_example_for_renderer() is None
