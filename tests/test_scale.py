"""
Tests for scales.
"""

import pytest

from chuk_mcp_piano.constants import HandSelection
from chuk_mcp_piano.core import InvalidRangeError, Key, PitchClass, Scale, ScaleType
from chuk_mcp_piano.core import get_scale, scale_midi_notes


class TestScaleType:
    """Tests for ScaleType patterns."""

    def test_major_intervals(self) -> None:
        assert ScaleType.MAJOR.intervals == (2, 2, 1, 2, 2, 2, 1)

    def test_minor_intervals(self) -> None:
        assert ScaleType.MINOR.intervals == (2, 1, 2, 2, 1, 2, 2)

    def test_aeolian_matches_minor(self) -> None:
        assert ScaleType.AEOLIAN.intervals == ScaleType.MINOR.intervals

    def test_all_patterns_span_an_octave(self) -> None:
        """Every mode has seven steps summing to 12."""
        for scale_type in ScaleType:
            assert len(scale_type.intervals) == 7
            assert sum(scale_type.intervals) == 12

    def test_display_names(self) -> None:
        assert ScaleType.MAJOR.display_name == "Major (Ionian)"
        assert ScaleType.MINOR.display_name == "Natural Minor"
        assert ScaleType.LOCRIAN.display_name == "Locrian"


class TestScale:
    """Tests for Scale."""

    def test_c_major_notes(self) -> None:
        scale = get_scale(Key.C, ScaleType.MAJOR)
        assert scale.get_notes() == [
            PitchClass.C,
            PitchClass.D,
            PitchClass.E,
            PitchClass.F,
            PitchClass.G,
            PitchClass.A,
            PitchClass.B,
            PitchClass.C,
        ]

    def test_a_minor_has_no_black_keys(self) -> None:
        scale = get_scale(Key.A, ScaleType.MINOR)
        assert not any(note.is_black_key for note in scale.get_notes())

    def test_name(self) -> None:
        assert get_scale(Key.C, ScaleType.MAJOR).name == "C Major (Ionian)"
        assert str(get_scale(Key.Ds, ScaleType.MINOR)) == "E♭ Natural Minor"

    def test_invalid_intervals(self) -> None:
        """Intervals that do not sum to an octave are rejected."""
        with pytest.raises(ValueError, match="12 semitones"):
            Scale(key=Key.C, scale_type=ScaleType.MAJOR, intervals=(2, 2, 2), name="bad")

    def test_midi_notes(self) -> None:
        scale = get_scale(Key.C, ScaleType.MAJOR)
        assert scale.get_midi_notes(4) == [60, 62, 64, 65, 67, 69, 71, 72]

    def test_midi_notes_ascending_octave(self) -> None:
        """Eight strictly ascending notes spanning one octave, for every key."""
        for key in Key:
            for scale_type in ScaleType:
                notes = get_scale(key, scale_type).get_midi_notes(4)
                assert len(notes) == 8
                assert all(b > a for a, b in zip(notes, notes[1:]))
                assert notes[-1] - notes[0] == 12

    def test_full_sequence(self) -> None:
        scale = get_scale(Key.C, ScaleType.MAJOR)
        assert scale.get_full_scale_sequence(4) == [
            60, 62, 64, 65, 67, 69, 71, 72, 71, 69, 67, 65, 64, 62, 60,
        ]  # fmt: skip

    def test_full_sequence_is_palindrome(self) -> None:
        sequence = get_scale(Key.Fs, ScaleType.DORIAN).get_full_scale_sequence(3)
        assert len(sequence) == 15
        assert sequence == sequence[::-1]

    def test_out_of_range_octave(self) -> None:
        """The closing octave leaving the MIDI range raises."""
        with pytest.raises(InvalidRangeError):
            get_scale(Key.C, ScaleType.MAJOR).get_midi_notes(9)


class TestScaleHands:
    """Tests for hand sequences."""

    def test_right_hand(self) -> None:
        scale = get_scale(Key.C, ScaleType.MAJOR)
        assert scale.get_hand_sequence(4, HandSelection.RIGHT) == scale.get_full_scale_sequence(4)

    def test_left_hand_octave_lower(self) -> None:
        scale = get_scale(Key.C, ScaleType.MAJOR)
        left = scale.get_hand_sequence(4, HandSelection.LEFT)
        assert left[0] == 48
        assert left == [note - 12 for note in scale.get_full_scale_sequence(4)]

    def test_both_hands_interleaved(self) -> None:
        scale = get_scale(Key.C, ScaleType.MAJOR)
        both = scale.get_hand_sequence(4, HandSelection.BOTH)
        assert len(both) == 30
        assert both[:4] == [48, 60, 50, 62]
        assert both[-2:] == [48, 60]


class TestScaleMidiNotes:
    """Tests for keyboard highlighting."""

    def test_two_octaves(self) -> None:
        notes = scale_midi_notes(Key.C, ScaleType.MAJOR)
        assert len(notes) == 14
        assert 60 in notes
        assert 83 in notes
        assert 61 not in notes

    def test_top_of_range_is_dropped(self) -> None:
        """Notes above 127 are left out instead of raising."""
        notes = scale_midi_notes(Key.C, ScaleType.MAJOR, base_octave=9)
        assert notes == {120, 122, 124, 125, 127}
