"""
Tests for naming chords from held MIDI notes.
"""

import pytest

from chuk_mcp_piano.core import ChordDetectionResult, PitchClass, detect_chord
from chuk_mcp_piano.core.chord_detection import CHORD_PATTERNS, ChordPattern, fit_score


def assert_chord(midi_notes: set[int], name: str, confidence: float) -> ChordDetectionResult:
    result = detect_chord(midi_notes)
    assert result is not None, f"{name} not detected"
    assert result.chord_name == name
    assert result.confidence == pytest.approx(confidence)
    return result


def pattern(name: str) -> ChordPattern:
    return next(p for p in CHORD_PATTERNS if p.name == name)


class TestNothingDetected:
    """Tests for note sets that form no chord."""

    def test_empty_and_single(self) -> None:
        assert detect_chord([]) is None
        assert detect_chord([60]) is None

    def test_two_notes_that_are_not_a_fifth(self) -> None:
        assert detect_chord({60, 64}) is None

    def test_octave(self) -> None:
        assert detect_chord({60, 72}) is None

    def test_cluster(self) -> None:
        assert detect_chord({60, 61, 62}) is None


class TestTriads:
    """Tests for the four triads and power chords."""

    def test_major(self) -> None:
        result = assert_chord({60, 64, 67}, "C Major", 0.85)
        assert result.root == PitchClass.C
        assert result.quality == "Major"
        assert result.notes == ("C", "E", "G")
        assert not result.is_inverted

    def test_minor(self) -> None:
        assert_chord({57, 60, 64}, "A Minor", 0.85)

    def test_augmented(self) -> None:
        assert_chord({67, 71, 75}, "G Aug", 0.8)

    def test_diminished(self) -> None:
        assert_chord({71, 74, 77}, "B Dim", 0.8)

    def test_power_chord(self) -> None:
        result = assert_chord({60, 67}, "C5", 0.8)
        assert result.quality == "5"

    def test_inverted_power_chord(self) -> None:
        result = assert_chord({55, 60}, "C5/G", 0.75)
        assert result.bass == PitchClass.G

    def test_input_order_does_not_matter(self) -> None:
        assert detect_chord([67, 60, 64]) == detect_chord([60, 64, 67])

    def test_to_string(self) -> None:
        assert str(detect_chord([60, 64, 67])) == "C Major"


class TestSuspended:
    """Tests for sus chords."""

    def test_sus2(self) -> None:
        assert_chord({60, 62, 67}, "C sus2", 0.7)

    def test_sus4(self) -> None:
        assert_chord({53, 58, 60}, "F sus4", 0.7)

    def test_sus2_and_sus4(self) -> None:
        assert_chord({67, 69, 72, 74}, "G sus24", 0.75)

    def test_seventh_sus4(self) -> None:
        assert_chord({62, 67, 69, 72}, "D 7sus4", 0.9)

    def test_seventh_sus2(self) -> None:
        assert_chord({67, 69, 74, 77}, "G 7sus2", 0.88)


class TestAddAndSixth:
    """Tests for add and 6 chords, which have no seventh."""

    def test_six_nine(self) -> None:
        assert_chord({60, 64, 67, 69, 74}, "C 6/9", 0.95)

    def test_minor_six_nine(self) -> None:
        assert_chord({57, 60, 64, 66, 71}, "A m6/9", 0.94)

    def test_sixth(self) -> None:
        assert_chord({60, 64, 67, 69}, "C 6", 0.93)

    def test_minor_sixth(self) -> None:
        assert_chord({57, 60, 64, 66}, "A m6", 0.92)

    def test_add9(self) -> None:
        assert_chord({60, 64, 67, 74}, "C add9", 0.88)

    def test_minor_add9(self) -> None:
        assert_chord({53, 56, 60, 67}, "F madd9", 0.88)

    def test_add11(self) -> None:
        assert_chord({67, 71, 74, 72}, "G add11", 0.86)


class TestSevenths:
    """Tests for seventh chords and altered dominants."""

    def test_dominant(self) -> None:
        assert_chord({67, 71, 74, 77}, "G 7", 0.95)

    def test_major_seventh(self) -> None:
        assert_chord({60, 64, 67, 71}, "C maj7", 0.95)

    def test_minor_seventh(self) -> None:
        assert_chord({62, 65, 69, 72}, "D m7", 0.95)

    def test_minor_major_seventh(self) -> None:
        assert_chord({57, 60, 64, 68}, "A mMaj7", 0.95)

    def test_diminished_seventh(self) -> None:
        assert_chord({60, 63, 66, 69}, "C dim7", 0.92)

    def test_half_diminished(self) -> None:
        assert_chord({71, 74, 77, 81}, "B m7♭5", 0.9)

    def test_flat_five(self) -> None:
        assert_chord({60, 64, 66, 70}, "C 7♭5", 0.9)

    def test_sharp_five_wins_tie_with_flat_thirteen(self) -> None:
        assert_chord({53, 57, 61, 63}, "F 7♯5", 0.9)

    def test_flat_nine(self) -> None:
        assert_chord({67, 71, 74, 77, 68}, "G 7♭9", 0.9)

    def test_sharp_nine(self) -> None:
        assert_chord({62, 66, 69, 72, 77}, "D 7♯9", 0.9)

    def test_sharp_eleven(self) -> None:
        assert_chord({57, 61, 64, 67, 63}, "A 7♯11", 0.9)

    def test_double_alterations(self) -> None:
        assert_chord({60, 64, 70, 61, 68}, "C 7(♭9,♭13)", 0.88)
        assert_chord({53, 57, 63, 54, 59}, "F 7(♭9,♯11)", 0.88)
        assert_chord({67, 71, 77, 70, 75}, "G 7(♯9,♭13)", 0.88)

    def test_seventh_beats_triad(self) -> None:
        triad = detect_chord({60, 64, 67})
        seventh = detect_chord({60, 64, 67, 70})
        assert triad is not None and seventh is not None
        assert triad.confidence == 0.85
        assert seventh.confidence == 0.95


class TestExtensions:
    """Tests for 9th, 11th and 13th chords."""

    def test_major_thirteen_sharp_eleven(self) -> None:
        assert_chord({60, 64, 67, 71, 66, 69}, "C maj13♯11", 0.97)

    def test_thirteenths(self) -> None:
        assert_chord({53, 57, 60, 64, 62}, "F maj13", 0.96)
        assert_chord({57, 60, 64, 67, 66}, "A m13", 0.96)
        assert_chord({55, 59, 62, 65, 64}, "G 13", 0.96)

    def test_major_seventh_sharp_eleven(self) -> None:
        assert_chord({62, 66, 69, 73, 68}, "D maj7♯11", 0.93)

    def test_elevenths(self) -> None:
        assert_chord({64, 67, 71, 74, 69}, "E m11", 0.94)
        assert_chord({60, 65, 67, 70, 74}, "C 11", 0.94)
        assert_chord({60, 64, 67, 71, 74, 77}, "C maj11", 0.95)

    def test_ninths(self) -> None:
        assert_chord({53, 57, 60, 64, 67}, "F maj9", 0.96)
        assert_chord({71, 74, 78, 81, 73}, "B m9", 0.96)
        assert_chord({57, 61, 64, 67, 71}, "A 9", 0.96)


class TestInversions:
    """Tests for bass-note preference and slash chords."""

    def test_second_inversion_is_slash_chord(self) -> None:
        result = assert_chord({67, 72, 76}, "C Major/G", 0.85)
        assert result.root == PitchClass.C
        assert result.bass == PitchClass.G
        assert result.is_inverted
        assert result.notes == ("G", "C", "E")

    def test_octave_spread(self) -> None:
        result = detect_chord({60, 76, 55})
        assert result is not None
        assert "Major" in result.chord_name
        assert result.confidence > 0.5


class TestFitScore:
    """Tests for the pattern family rules."""

    def test_perfect_fit(self) -> None:
        assert fit_score(frozenset({4, 7}), pattern("Major")) == 1.0

    def test_missing_fifth_tolerated(self) -> None:
        assert fit_score(frozenset({4, 10}), pattern("7")) == pytest.approx(0.95)

    def test_missing_fifth_not_tolerated_for_sus(self) -> None:
        assert fit_score(frozenset({5}), pattern("sus4")) == 0.0

    def test_unexpected_interval_penalty(self) -> None:
        assert fit_score(frozenset({4, 7, 1}), pattern("Major")) == pytest.approx(0.85)

    def test_add_chord_rejects_seventh(self) -> None:
        assert fit_score(frozenset({4, 7, 2, 10}), pattern("add9")) == 0.0

    def test_extension_needs_seventh(self) -> None:
        assert fit_score(frozenset({4, 7, 2}), pattern("9")) == 0.0

    def test_sus_rejects_third(self) -> None:
        assert fit_score(frozenset({4, 5, 7}), pattern("sus4")) == 0.0
