"""
Tests for chord and progression answer validation.

Tests cover:
- canonicalize and enharmonic swaps
- Chord answer parsing
- Chord answer acceptance (synonyms, enharmonics, inversion forms)
- Roman numeral progression answers
"""

import pytest

from chuk_chord_trainer.core import CHORD_TYPES, PitchClass
from chuk_chord_trainer.generation import format_answer
from chuk_chord_trainer.models import ValidationSettings
from chuk_chord_trainer.validation import (
    acceptable_answers,
    canonicalize,
    enharmonic_swaps,
    find_chord_type,
    normalize_numeral,
    parse_chord_answer,
    validate_chord_answer,
    validate_progression_answer,
)

LABELED = ValidationSettings(supports_inversions=True, require_inversion_labeling=True)


class TestCanonicalize:
    """Tests for canonicalize."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("C maj", "cmaj"),
            ("  Dm  ", "dm"),
            ("CM7", "cmaj7"),
            ("Cm7", "cm7"),
            ("C Major", "cmajor"),
            ("B° 7", "bdim7"),
            ("Bº", "bdim"),
            ("B diminished", "bdim"),
            ("E♭ – 7", "eb-7"),
            ("F♯m", "f#m"),
            ("CMAJ", "cmaj"),
            ("CMIN", "cmin"),
            ("CMAJ7", "cmaj7"),
            ("BbMAJOR", "bbmajor"),
        ],
    )
    def test_canonicalize(self, text, expected):
        """Case, spacing, dashes and symbols all reduce to one form."""
        assert canonicalize(text) == expected

    def test_uppercase_m_only_after_root(self):
        """'M' in the middle of a word isn't a major marker."""
        assert canonicalize("Cmaj7") == "cmaj7"
        assert canonicalize("CmM7") == "cmm7"

    def test_enharmonic_swaps(self):
        """Each sharp or flat spelling swaps one occurrence at a time."""
        assert enharmonic_swaps("c#m") == ["dbm"]
        assert enharmonic_swaps("cm") == []
        assert set(enharmonic_swaps("c#/g#")) == {"db/g#", "c#/ab"}


class TestParseChordAnswer:
    """Tests for parse_chord_answer and find_chord_type."""

    def test_find_chord_type(self):
        """Suffixes map to catalog chord types."""
        assert find_chord_type("").key == "major"
        assert find_chord_type("M7").key == "major7"
        assert find_chord_type("-").key == "minor"
        assert find_chord_type("ø7").key == "halfDiminished7"
        assert find_chord_type("wat") is None

    def test_parse_plain(self):
        """Parses root, quality and root position."""
        parsed = parse_chord_answer("F#maj7")
        assert parsed.root == PitchClass.Fs
        assert parsed.root_name == "F#"
        assert parsed.chord_type.key == "major7"
        assert parsed.inversion == 0

    def test_parse_numbered_inversion(self):
        """'/1' style suffix sets the inversion."""
        parsed = parse_chord_answer("Dm/1")
        assert parsed.chord_type.key == "minor"
        assert parsed.inversion == 1

    def test_parse_named_inversion(self):
        """Named inversions are understood."""
        assert parse_chord_answer("G7/third").inversion == 3

    def test_parse_slash_bass(self):
        """A chord-tone bass note implies the inversion."""
        assert parse_chord_answer("Dm/F").inversion == 1
        assert parse_chord_answer("C/G").inversion == 2

    def test_parse_lowercase_flat_root(self):
        """Lowercase roots with a flat sign parse."""
        parsed = parse_chord_answer("e♭m")
        assert parsed.root == PitchClass.Ds
        assert parsed.root_name == "Eb"

    @pytest.mark.parametrize("text", ["", "Hm", "Cwat", "C/F#", "C/5"])
    def test_unparseable(self, text):
        """Unknown roots, qualities or bass notes give None."""
        assert parse_chord_answer(text) is None


class TestValidateChordAnswer:
    """Tests for validate_chord_answer."""

    def test_case_space_and_synonyms(self):
        """Case, spacing and quality synonyms are ignored."""
        settings = ValidationSettings(require_inversion_labeling=False)
        assert validate_chord_answer("c maj", "C", settings) is True
        assert validate_chord_answer("C major", "C") is True
        assert validate_chord_answer("Cmin", "Cm") is True
        assert validate_chord_answer("C-", "Cm") is True

    @pytest.mark.parametrize(
        "answer,expected",
        [
            ("CMAJ", "C"),
            ("C MAJOR", "C"),
            ("CMIN", "Cm"),
            ("CMAJ7", "Cmaj7"),
            ("BBMAJOR", "Bb"),
            ("F#MIN7", "F#m7"),
        ],
    )
    def test_all_caps(self, answer, expected):
        """Answers typed in capitals are accepted."""
        assert validate_chord_answer(answer, expected) is True

    def test_wrong_quality(self):
        """A different quality is rejected."""
        assert validate_chord_answer("Cm", "C") is False
        assert validate_chord_answer("CM7", "C7") is False

    def test_wrong_root(self):
        """A different root is rejected."""
        assert validate_chord_answer("D", "C") is False

    def test_empty_answer(self):
        """Blank answers are rejected."""
        assert validate_chord_answer("", "C") is False
        assert validate_chord_answer("   ", "C") is False

    def test_enharmonic_roots(self):
        """Sharp and flat spellings of a root are interchangeable."""
        assert validate_chord_answer("Dbm", "C#m") is True
        assert validate_chord_answer("C#m", "Dbm") is True
        assert validate_chord_answer("A#7", "Bb7") is True
        assert validate_chord_answer("G♭maj7", "F#maj7") is True

    def test_enharmonic_is_not_any_neighbor(self):
        """Only true enharmonics are accepted."""
        assert validate_chord_answer("Dm", "C#m") is False

    def test_diminished_symbols(self):
        """Degree signs and the full word mean diminished."""
        assert validate_chord_answer("B°", "Bdim") is True
        assert validate_chord_answer("Bo7", "Bdim7") is True
        assert validate_chord_answer("Bø7", "Bm7b5") is True

    def test_every_catalog_spelling_accepted(self):
        """Each symbol and abbreviation of every chord type works on every root."""
        for chord_type in CHORD_TYPES.values():
            for root in PitchClass:
                expected = format_answer(root, chord_type)
                for spelling in chord_type.spellings:
                    answer = root.spell() + spelling
                    assert validate_chord_answer(answer, expected), (answer, expected)

    def test_every_inversion_accepted_as_slash_bass(self):
        """Slash-bass answers match numbered inversions across the catalog."""
        for chord_type in CHORD_TYPES.values():
            for inversion in range(1, chord_type.size):
                expected = format_answer(PitchClass.C, chord_type, inversion, True)
                bass = chord_type.bass_pitch_class(PitchClass.C, inversion)
                for prefer_flats in (False, True):
                    answer = f"C{chord_type.symbol}/{bass.spell(prefer_flats)}"
                    assert validate_chord_answer(answer, expected, LABELED), (answer, expected)

    @pytest.mark.parametrize(
        "answer",
        [
            "C/1",
            "C/E",
            "C/first",
            "C first inversion",
            "C 1st inversion",
            "Cmaj/1",
            "c/e",
        ],
    )
    def test_inversion_forms(self, answer):
        """Every inversion notation is accepted."""
        assert validate_chord_answer(answer, "C/1", LABELED) is True

    @pytest.mark.parametrize("answer", ["C/2", "C/G", "C second inversion", "Cm/1"])
    def test_wrong_inversion(self, answer):
        """Naming another inversion is rejected."""
        assert validate_chord_answer(answer, "C/1", LABELED) is False

    def test_bare_chord_accepted_for_inverted_chord(self):
        """The chord name alone is still accepted."""
        assert validate_chord_answer("C", "C/1", LABELED) is True

    def test_root_position_forms(self):
        """Root position can be stated explicitly."""
        assert validate_chord_answer("C root", "C", LABELED) is True
        assert validate_chord_answer("C root position", "C", LABELED) is True

    def test_inversion_forms_need_labeling(self):
        """Without labeling, inversion answers aren't in the accepted set."""
        assert validate_chord_answer("C/E", "C") is False
        unlabeled = ValidationSettings(supports_inversions=True)
        assert "c/e" not in acceptable_answers("C/1", unlabeled)

    def test_minor_slash_bass_enharmonic(self):
        """Slash bass notes may use either spelling."""
        assert validate_chord_answer("C#m/E", "C#m/1", LABELED) is True
        assert validate_chord_answer("Dbm/E", "C#m/1", LABELED) is True
        assert validate_chord_answer("Ebm/Gb", "D#m/1", LABELED) is True

    def test_unparseable_expected_only_matches_itself(self):
        """An expected answer that doesn't parse only matches itself."""
        assert acceptable_answers("Mystery Chord") == frozenset({"mysterychord"})
        assert validate_chord_answer("mystery chord", "Mystery Chord") is True
        assert validate_chord_answer("C", "Mystery Chord") is False

    def test_enharmonic_symmetry(self):
        """If an answer is accepted, so is its one-swap enharmonic spelling."""
        for expected in ("C#", "Ebm7", "F#dim", "Abmaj7", "Bb9"):
            for answer in acceptable_answers(expected):
                for swapped in enharmonic_swaps(answer):
                    assert validate_chord_answer(swapped, expected), (swapped, expected)


class TestProgressionAnswers:
    """Tests for Roman numeral progression answers."""

    @pytest.mark.parametrize(
        "token,expected",
        [
            ("vii°", "viio"),
            ("VIIdim", "viio"),
            ("iid", "iio"),
            ("♭VII", "bvii"),
            ("V7", "v7"),
        ],
    )
    def test_normalize_numeral(self, token, expected):
        """Numeral tokens reduce to one form."""
        assert normalize_numeral(token) == expected

    @pytest.mark.parametrize(
        "answer",
        [
            "I - V - vi - IV",
            "i-v-vi-iv",
            "I V vi IV",
            "I, V, vi, IV",
            "I – V – vi – IV",
            "IVviIV",
        ],
    )
    def test_accepted(self, answer):
        """Separators and case don't matter."""
        assert validate_progression_answer(answer, "I - V - vi - IV") is True

    @pytest.mark.parametrize("answer", ["I - IV - vi - V", "I - V - vi", "", "I V vi IV I"])
    def test_rejected(self, answer):
        """Wrong, missing or extra numerals are rejected."""
        assert validate_progression_answer(answer, "I - V - vi - IV") is False

    def test_diminished_variants(self):
        """Diminished numerals accept any spelling."""
        assert validate_progression_answer("i ii° V i", "i - iidim - V - i") is True
        assert validate_progression_answer("i iid V i", "i - ii° - V - i") is True

    def test_position_matters(self):
        """Tokens are compared in place, so reordering fails."""
        assert validate_progression_answer("V I", "I V") is False
