"""Tests for the renderer integration helpers."""

from exercises.mapper import (
    ConversionSummary,
    get_example_data,
    normalize_exercise_data,
    summarize,
    validate_exercise_data,
)
from models import ArchetypeTag


class TestValidateExerciseData:
    def test_valid_record(self, arithmetic_choice):
        result = validate_exercise_data(arithmetic_choice)

        assert result.valid is True
        assert result.errors == []
        assert result.normalized_data["correctAnswer"] == 1

    def test_missing_data(self):
        for raw in (None, {}):
            result = validate_exercise_data(raw)
            assert result.valid is False
            assert result.errors == ["Exercise data is required"]

    def test_invalid_record(self):
        result = validate_exercise_data({"options": ["a", "b"]})

        assert result.valid is False
        assert result.errors == ["Exercise must have a question"]
        assert result.normalized_data is None


class TestNormalizeExerciseData:
    def test_success(self, cat_sentence):
        result = normalize_exercise_data(cat_sentence)

        assert result.success is True
        assert result.universal_data["metadata"]["type"] == "fill-in-blanks"
        assert result.component_data["sentence"] == cat_sentence["sentence"]
        assert result.metadata.type == ArchetypeTag.FILL_IN_BLANKS
        assert result.error is None

    def test_failure_keeps_original(self):
        raw = {"words": []}
        result = normalize_exercise_data(raw)

        assert result.success is False
        assert "question" in result.error
        assert result.original_data == raw
        assert result.universal_data is None

    def test_malformed_canonical_is_reported(self, cat_sentence):
        data = normalize_exercise_data(cat_sentence).universal_data
        data["metadata"]["difficulty"] = "impossible"

        result = normalize_exercise_data(data)
        assert result.success is False
        assert result.error


class TestGetExampleData:
    def test_example(self, legacy_samples):
        example = get_example_data(legacy_samples["dragAndDrop"])
        assert example["correctMatches"] == {"red": "apple", "blue": "sky"}

    def test_no_example(self, cat_sentence):
        assert get_example_data(cat_sentence) is None

    def test_failure_is_none(self):
        assert get_example_data({}) is None

    def test_failing_example_is_none(self):
        """An example with no question of its own or inherited fails quietly."""
        raw = {"instruction": "Pick", "options": ["a", "b"], "correctAnswer": 0, "example": {"instruction": ""}}
        assert get_example_data(raw) is None


class TestSummarize:
    def test_success_row(self, legacy_samples):
        summary = summarize("gapFill", legacy_samples["gapFill"])

        assert isinstance(summary, ConversionSummary)
        assert summary.succeeded
        assert summary.status == "SUCCESS"
        assert summary.normalized_type == "gap-fill"
        assert summary.has_example is True
        assert "text" in summary.original_fields
        assert "correctAnswers" in summary.component_fields

    def test_error_row(self):
        summary = summarize("broken", {"options": []})

        assert not summary.succeeded
        assert summary.status == "ERROR"
        assert summary.original_fields == ["options"]
        assert summary.normalized_type is None
        assert summary.error == "Exercise must have a question"

    def test_non_mapping_record(self):
        summary = summarize("list", ["not", "a", "record"])

        assert summary.status == "ERROR"
        assert summary.original_fields == []

    def test_every_sample_converts(self, legacy_samples):
        summaries = [summarize(name, raw) for name, raw in legacy_samples.items()]
        assert all(summary.succeeded for summary in summaries)
