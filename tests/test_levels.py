"""
Tests for level models and the level loader.

Tests cover:
- ChordGenerationSettings parsing (roots, inversions, octave ranges)
- ProgressionLevelConfig validation
- LevelLoader discovery, overrides and copying
- Every bundled level generating valid problems
"""

import pytest
from pydantic import ValidationError

from chuk_chord_trainer.constants import Inversion, LevelKind
from chuk_chord_trainer.core import PitchClass
from chuk_chord_trainer.errors import ConfigurationError
from chuk_chord_trainer.generation import ChordGenerator, ProgressionGenerator
from chuk_chord_trainer.levels import LevelLoader
from chuk_chord_trainer.models import (
    AvailableKeys,
    ChordGenerationSettings,
    ChordLevelConfig,
    ProgressionLevelConfig,
    VoicingSettings,
)
from chuk_chord_trainer.validation import validate_chord_answer, validate_transcription
from conftest import ScriptedRandom

CHORD_LEVEL_YAML = """\
kind: chord_recognition
id: custom-triads
category: custom
level: 1
title: Custom Triads
chordGeneration:
  roots: [C, F#, Bb]
  chordTypes: [major, minor]
  inversions: [root, first]
  octaveRange: [3, 4]
validation:
  supportsInversions: true
"""


class TestChordGenerationSettings:
    """Tests for ChordGenerationSettings."""

    def test_camel_case_keys(self):
        """Accepts camelCase keys."""
        settings = ChordGenerationSettings.model_validate(
            {"roots": ["C"], "chordTypes": ["major"], "octaveRange": [2, 4]}
        )
        assert settings.chord_types == ["major"]
        assert settings.octaves == [2, 3, 4]

    def test_root_spellings(self):
        """Roots accept names, aliases and numbers."""
        settings = ChordGenerationSettings(roots=["C", "F#", "Bb", "Cs", 11], chord_types=["major"])
        assert settings.roots == [
            PitchClass.C,
            PitchClass.Fs,
            PitchClass.As,
            PitchClass.Cs,
            PitchClass.B,
        ]

    def test_inversion_names(self):
        """Inversions accept names and numbers."""
        settings = ChordGenerationSettings(
            roots=["C"], chord_types=["major"], inversions=["root", "First", 2, "3"]
        )
        assert settings.inversions == [
            Inversion.ROOT,
            Inversion.FIRST,
            Inversion.SECOND,
            Inversion.THIRD,
        ]

    def test_defaults(self):
        """Defaults are sensible."""
        settings = ChordGenerationSettings(roots=["C"], chord_types=["major"])
        assert settings.inversions == [Inversion.ROOT]
        assert settings.octaves == [3, 4]
        assert settings.is_open_voicing is False
        assert settings.voicing_settings.double_root is True

    def test_explicit_octave_list(self):
        """Longer octave lists are used as given."""
        settings = ChordGenerationSettings(
            roots=["C"], chord_types=["major"], octave_range=[2, 4, 6]
        )
        assert settings.octaves == [2, 4, 6]

    @pytest.mark.parametrize(
        "overrides",
        [
            {"roots": []},
            {"roots": ["H"]},
            {"chord_types": []},
            {"chord_types": ["hyperlydian"]},
            {"inversions": ["fifth"]},
            {"inversions": [7]},
            {"octave_range": [9]},
            {"emphasized_chord_types": ["nope"]},
        ],
    )
    def test_invalid(self, overrides):
        """Invalid settings are rejected."""
        data = {"roots": ["C"], "chord_types": ["major"], **overrides}
        with pytest.raises(ValidationError):
            ChordGenerationSettings(**data)

    def test_frozen(self):
        """Settings are immutable."""
        settings = ChordGenerationSettings(roots=["C"], chord_types=["major"])
        with pytest.raises(ValidationError):
            settings.is_open_voicing = True

    def test_spread_fields_are_informational(self):
        """Spread and spacing preferences don't change the voicing."""
        narrow = ChordGenerationSettings.model_validate(
            {
                "roots": ["C"],
                "chordTypes": ["major"],
                "isOpenVoicing": True,
                "voicingSettings": {
                    "minSpread": 0,
                    "maxSpread": 12,
                    "allowWideSpacing": False,
                },
            }
        )
        wide = narrow.model_copy(update={"voicing_settings": VoicingSettings()})
        first = ChordGenerator(ScriptedRandom([0.0])).generate(narrow)
        second = ChordGenerator(ScriptedRandom([0.0])).generate(wide)
        assert first.pitches == second.pitches


class TestProgressionLevelConfig:
    """Tests for progression level validation."""

    def test_available_keys_by_mode(self):
        """Modes without keys are dropped."""
        keys = AvailableKeys(major=["C"], minor=[])
        assert list(keys.by_mode()) == ["major"]

    def test_available_keys_required(self):
        """At least one key is required."""
        with pytest.raises(ValidationError):
            AvailableKeys()

    def test_unknown_key(self):
        """Unknown keys are rejected."""
        with pytest.raises(ValidationError):
            AvailableKeys(major=["H"])

    def test_unknown_numeral(self):
        """Unknown numerals are rejected."""
        with pytest.raises(ValidationError):
            ProgressionLevelConfig(
                id="bad",
                title="Bad",
                progressions=[["I", "IX"]],
                available_keys=AvailableKeys(major=["C"]),
            )

    def test_empty_pattern(self):
        """Empty patterns are rejected."""
        with pytest.raises(ValidationError):
            ProgressionLevelConfig(
                id="bad",
                title="Bad",
                progressions=[[]],
                available_keys=AvailableKeys(major=["C"]),
            )

    def test_defaults(self):
        """Progression levels get default octave, attempts and scoring."""
        level = ProgressionLevelConfig(
            id="ok",
            title="OK",
            progressions=[["I", "V/3"]],
            available_keys=AvailableKeys(major=["C"]),
        )
        assert level.base_octave == 60
        assert level.max_attempts == 3
        assert level.transcription.tolerate_octave_errors is True
        assert level.transcription.wrong_note_penalty == 10


class TestLevelLoader:
    """Tests for LevelLoader."""

    @pytest.fixture
    def loader(self):
        return LevelLoader()

    def test_list_levels(self, loader):
        """Lists every bundled level sorted by id."""
        levels = loader.list_levels()
        ids = [level.id for level in levels]
        assert ids == sorted(ids)
        assert "basic-triads-1" in ids
        assert "progression-transcription-1" in ids
        assert len(ids) == 20

    def test_list_levels_by_kind(self, loader):
        """Filters levels by kind."""
        chord_levels = loader.list_levels(LevelKind.CHORD_RECOGNITION)
        progression_levels = loader.list_levels("progression_transcription")
        assert all(isinstance(level, ChordLevelConfig) for level in chord_levels)
        assert all(isinstance(level, ProgressionLevelConfig) for level in progression_levels)
        assert len(chord_levels) == 15
        assert len(progression_levels) == 5

    def test_get_level(self, loader):
        """Loads a bundled level."""
        level = loader.get_chord_level("basic-triads-2")
        assert level.title == "Triads with First Inversions"
        assert Inversion.FIRST in level.chord_generation.inversions
        assert level.validation.supports_inversions is True

    def test_get_level_cached(self, loader):
        """Levels are cached until the cache is cleared."""
        assert loader.get_level("basic-triads-1") is loader.get_level("basic-triads-1")
        first = loader.get_level("basic-triads-1")
        loader.clear_cache()
        assert loader.get_level("basic-triads-1") is not first

    def test_unknown_level(self, loader):
        """Unknown levels raise."""
        with pytest.raises(ConfigurationError, match="not found"):
            loader.get_level("no-such-level")

    def test_wrong_kind(self, loader):
        """Asking for the wrong kind of level raises."""
        with pytest.raises(ConfigurationError):
            loader.get_chord_level("progression-transcription-1")
        with pytest.raises(ConfigurationError):
            loader.get_progression_level("basic-triads-1")

    def test_project_level(self, temp_dir):
        """Loads levels from the project directory."""
        (temp_dir / "custom-triads.yaml").write_text(CHORD_LEVEL_YAML, encoding="utf-8")
        loader = LevelLoader(project_path=temp_dir)
        level = loader.get_chord_level("custom-triads")
        assert level.chord_generation.roots == [PitchClass.C, PitchClass.Fs, PitchClass.As]
        assert "custom-triads" in [level.id for level in loader.list_levels()]

    def test_project_overrides_library(self, temp_dir):
        """Project levels override bundled ones."""
        override = CHORD_LEVEL_YAML.replace("id: custom-triads", "id: basic-triads-1")
        (temp_dir / "basic-triads-1.yaml").write_text(override, encoding="utf-8")
        loader = LevelLoader(project_path=temp_dir)
        assert loader.get_level("basic-triads-1").title == "Custom Triads"
        listed = {level.id: level for level in loader.list_levels()}
        assert listed["basic-triads-1"].title == "Custom Triads"

    def test_id_defaults_to_file_name(self, temp_dir):
        """A level without an id takes the file name."""
        text = CHORD_LEVEL_YAML.replace("id: custom-triads\n", "")
        (temp_dir / "from-name.yaml").write_text(text, encoding="utf-8")
        assert LevelLoader(project_path=temp_dir).get_level("from-name").id == "from-name"

    def test_kind_defaults_to_chord_recognition(self, temp_dir):
        """A level without a kind is a chord level."""
        text = CHORD_LEVEL_YAML.replace("kind: chord_recognition\n", "")
        (temp_dir / "custom-triads.yaml").write_text(text, encoding="utf-8")
        level = LevelLoader(project_path=temp_dir).get_level("custom-triads")
        assert isinstance(level, ChordLevelConfig)

    @pytest.mark.parametrize(
        "text",
        [
            "- just\n- a list\n",
            "kind: karaoke\ntitle: Nope\n",
            "kind: chord_recognition\ntitle: Missing fields\n",
            "key: [unclosed\n",
        ],
    )
    def test_invalid_file(self, temp_dir, text):
        """Malformed level files raise."""
        (temp_dir / "broken.yaml").write_text(text, encoding="utf-8")
        loader = LevelLoader(project_path=temp_dir)
        with pytest.raises(ConfigurationError, match="Invalid level file"):
            loader.get_level("broken")

    def test_invalid_files_skipped_when_listing(self, temp_dir):
        """Listing skips malformed files."""
        (temp_dir / "broken.yaml").write_text("- nope\n", encoding="utf-8")
        loader = LevelLoader(project_path=temp_dir)
        ids = [level.id for level in loader.list_levels()]
        assert "broken" not in ids
        assert len(ids) == 20

    def test_copy_to_project(self, temp_dir):
        """Copies a bundled level into the project."""
        project = temp_dir / "levels"
        loader = LevelLoader(project_path=project)
        path = loader.copy_to_project("basic-triads-1")
        assert path == project / "basic-triads-1.yaml"
        assert path.exists()
        assert loader.get_level("basic-triads-1").title == "Basic Triads"

    def test_copy_twice(self, temp_dir):
        """Won't overwrite an existing project level."""
        loader = LevelLoader(project_path=temp_dir)
        loader.copy_to_project("basic-triads-1")
        with pytest.raises(ConfigurationError, match="already exists"):
            loader.copy_to_project("basic-triads-1")

    def test_copy_errors(self, temp_dir):
        """Copying needs a project path and a known level."""
        with pytest.raises(ConfigurationError):
            LevelLoader().copy_to_project("basic-triads-1")
        with pytest.raises(ConfigurationError):
            LevelLoader(project_path=temp_dir).copy_to_project("no-such-level")


class TestBundledLevels:
    """Every bundled level produces valid problems."""

    @pytest.mark.parametrize(
        "level_id", [level.id for level in LevelLoader().list_levels("chord_recognition")]
    )
    def test_chord_levels(self, level_id, rng):
        """Chord levels generate answerable chords in the window."""
        level = LevelLoader().get_chord_level(level_id)
        settings = level.chord_generation
        generator = ChordGenerator(rng)
        previous = None
        for _ in range(30):
            chord = generator.generate(settings, previous, level.validation)
            assert all(24 <= pitch <= 84 for pitch in chord.pitches)
            assert chord.chord_type.key in settings.chord_types
            assert validate_chord_answer(chord.expected_answer, chord.expected_answer)
            previous = chord

    @pytest.mark.parametrize(
        "level_id", [level.id for level in LevelLoader().list_levels("progression_transcription")]
    )
    def test_progression_levels(self, level_id, rng):
        """Progression levels generate transcribable progressions."""
        level = LevelLoader().get_progression_level(level_id)
        generator = ProgressionGenerator(rng)
        for _ in range(10):
            progression = generator.generate_for_level(level)
            assert all(48 <= pitch <= 84 for pitch in progression.all_pitches)
            result = validate_transcription(
                list(progression.all_pitches), progression, level.transcription
            )
            assert result.is_correct is True
