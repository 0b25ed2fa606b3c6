"""Tests for normalization configuration."""

import pytest
from pydantic import ValidationError

from exercises.config import DEFAULT_CONFIG, ArchetypeDefaults, NormalizerConfig
from exercises.normalizers import normalize
from models import ArchetypeTag, Difficulty


class TestNormalizerConfig:
    def test_every_archetype_has_defaults(self):
        assert set(DEFAULT_CONFIG.archetypes) == set(ArchetypeTag)

    @pytest.mark.parametrize(
        "tag,seconds",
        [
            (ArchetypeTag.MULTIPLE_CHOICE, 30),
            (ArchetypeTag.FILL_IN_BLANKS, 45),
            (ArchetypeTag.DRAG_AND_DROP, 60),
            (ArchetypeTag.CLICK_TO_CHANGE, 45),
            (ArchetypeTag.SEQUENCING, 45),
            (ArchetypeTag.TABLE, 60),
        ],
    )
    def test_estimated_times(self, tag, seconds):
        assert DEFAULT_CONFIG.defaults_for(tag).estimated_time == seconds

    def test_missing_archetype_falls_back(self):
        config = NormalizerConfig(archetypes={})
        assert config.defaults_for(ArchetypeTag.TABLE) == ArchetypeDefaults()

    def test_negative_depth_rejected(self):
        with pytest.raises(ValidationError):
            NormalizerConfig(max_example_depth=-1)


class TestConfigOverrides:
    """Config values flow into normalized documents."""

    def test_top_level_defaults(self, arithmetic_choice, custom_config):
        metadata = normalize(arithmetic_choice, config=custom_config).metadata

        assert metadata.version == "2.0"
        assert metadata.knowledge_areas == ["math"]
        assert metadata.id.startswith("quiz_")

    def test_default_difficulty(self, arithmetic_choice):
        config = NormalizerConfig(default_difficulty=Difficulty.EASY)
        assert normalize(arithmetic_choice, config=config).metadata.difficulty == Difficulty.EASY

    def test_archetype_defaults(self, cat_sentence):
        config = NormalizerConfig(
            archetypes={
                ArchetypeTag.FILL_IN_BLANKS: ArchetypeDefaults(
                    estimated_time=20, instruction="Type the word", layout="inline"
                )
            }
        )
        doc = normalize(cat_sentence, config=config)

        assert doc.metadata.estimated_time == 20
        assert doc.content.instruction == "Type the word"
        assert doc.presentation.layout == "inline"

    def test_default_config_unchanged(self, arithmetic_choice, custom_config):
        normalize(arithmetic_choice, config=custom_config)
        assert DEFAULT_CONFIG.schema_version == "1.0"
        assert DEFAULT_CONFIG.max_example_depth == 1
