"""Shared pytest fixtures for the exercise schema tests."""

import json
import sys
from pathlib import Path
from typing import Any

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from exercises.config import NormalizerConfig

DATA_PATH = Path(__file__).parent.parent / "data" / "legacy_exercises.json"


@pytest.fixture
def legacy_samples() -> dict[str, dict[str, Any]]:
    """The bundled legacy records, keyed by sample name."""
    with open(DATA_PATH, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def arithmetic_choice() -> dict[str, Any]:
    """Four options and one required selection: a single-answer record."""
    return {
        "question": "What is 2+2?",
        "options": ["3", "4", "5", "6"],
        "correctAnswers": [1],
        "requiredSelections": 1,
    }


@pytest.fixture
def cat_sentence() -> dict[str, Any]:
    return {
        "sentence": "The cat is {answer} on the mat.",
        "correctAnswer": "sleeping",
    }


@pytest.fixture
def animal_matching() -> dict[str, Any]:
    """Drag-and-drop record with no question or instruction."""
    return {
        "draggableItems": [{"id": "cat"}, {"id": "dog"}],
        "dropZones": [{"id": "meow"}, {"id": "woof"}],
        "correctMatches": {"cat": "meow", "dog": "woof"},
    }


@pytest.fixture
def highlight_words() -> list[dict[str, Any]]:
    return [
        {"text": "The", "shouldHighlight": False},
        {"text": "cat", "shouldHighlight": False},
        {"text": "runs", "shouldHighlight": True},
    ]


@pytest.fixture
def capitalize_record() -> dict[str, Any]:
    return {
        "question": "Click on words that should be capitalized",
        "words": [
            {"text": "the", "shouldCapitalize": False},
            {"text": "fluffy", "shouldCapitalize": True},
            {"text": "paris", "shouldCapitalize": True},
        ],
        "type": "capitalize",
        "exampleQuestion": "Click on the nouns",
        "exampleElements": [{"text": "dog", "shouldCapitalize": True}],
    }


@pytest.fixture
def custom_config() -> NormalizerConfig:
    """Configuration with every top-level default changed."""
    return NormalizerConfig(
        schema_version="2.0",
        default_knowledge_areas=["math"],
        id_prefix="quiz",
        max_example_depth=0,
    )
