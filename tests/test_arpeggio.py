"""
Tests for arpeggios.
"""

import pytest

from chuk_mcp_piano.constants import HandSelection
from chuk_mcp_piano.core import (
    ArpeggioOctaves,
    ArpeggioType,
    ChordType,
    InvalidRangeError,
    PitchClass,
    common_arpeggios,
    extended_arpeggios,
    get_arpeggio,
)


class TestArpeggioType:
    """Tests for ArpeggioType."""

    def test_intervals_end_on_octave(self) -> None:
        assert ArpeggioType.MAJOR.intervals == (0, 4, 7, 12)
        assert ArpeggioType.DOMINANT_7.intervals == (0, 4, 7, 10, 12)
        for arpeggio_type in ArpeggioType:
            assert arpeggio_type.intervals[-1] == 12

    def test_chord_type(self) -> None:
        assert ArpeggioType.DOMINANT_7.chord_type == ChordType.DOMINANT_7
        assert len(ArpeggioType) == len(ChordType)

    def test_octave_labels(self) -> None:
        assert ArpeggioOctaves.ONE.label == "1 Octave"
        assert ArpeggioOctaves.TWO.label == "2 Octaves"


class TestArpeggio:
    """Tests for arpeggio sequences."""

    def test_c_major_one_octave(self) -> None:
        arpeggio = get_arpeggio(PitchClass.C, ArpeggioType.MAJOR)
        assert arpeggio.get_midi_notes(4) == [60, 64, 67, 72]
        assert arpeggio.get_full_arpeggio_sequence(4) == [60, 64, 67, 72, 67, 64, 60]

    def test_c_major_two_octaves(self) -> None:
        arpeggio = get_arpeggio(PitchClass.C, ArpeggioType.MAJOR, ArpeggioOctaves.TWO)
        assert arpeggio.get_ascending_sequence(4) == [60, 64, 67, 72, 76, 79, 84]
        full = arpeggio.get_full_arpeggio_sequence(4)
        assert len(full) == 13
        assert full[6] == 84
        assert full[-1] == 60

    def test_seventh_arpeggio(self) -> None:
        arpeggio = get_arpeggio(PitchClass.C, ArpeggioType.DOMINANT_7)
        assert arpeggio.get_midi_notes(4) == [60, 64, 67, 70, 72]

    def test_full_sequence_is_palindrome(self) -> None:
        for arpeggio_type in ArpeggioType:
            for octaves in ArpeggioOctaves:
                sequence = get_arpeggio(PitchClass.A, arpeggio_type, octaves)
                full = sequence.get_full_arpeggio_sequence(3)
                assert full == full[::-1]

    def test_notes(self) -> None:
        arpeggio = get_arpeggio(PitchClass.A, ArpeggioType.MINOR)
        assert arpeggio.get_notes() == [PitchClass.A, PitchClass.C, PitchClass.E, PitchClass.A]

    def test_names(self) -> None:
        assert get_arpeggio(PitchClass.C, ArpeggioType.MAJOR).name == "C Major (1 Octave)"
        arpeggio = get_arpeggio(PitchClass.Fs, ArpeggioType.MINOR_7, ArpeggioOctaves.TWO)
        assert str(arpeggio) == "F# Minor 7th (2 Octaves)"

    def test_out_of_range(self) -> None:
        arpeggio = get_arpeggio(PitchClass.G, ArpeggioType.MAJOR)
        with pytest.raises(InvalidRangeError):
            arpeggio.get_midi_notes(9)


class TestArpeggioHands:
    """Tests for hand sequences."""

    def test_left(self) -> None:
        arpeggio = get_arpeggio(PitchClass.C, ArpeggioType.MAJOR)
        assert arpeggio.get_hand_sequence(4, HandSelection.LEFT) == [48, 52, 55, 60, 55, 52, 48]

    def test_both_interleaved(self) -> None:
        arpeggio = get_arpeggio(PitchClass.C, ArpeggioType.MAJOR)
        both = arpeggio.get_hand_sequence(4, HandSelection.BOTH)
        assert len(both) == 14
        assert both[:6] == [48, 60, 52, 64, 55, 67]


class TestArpeggioSets:
    """Tests for the common and extended sets."""

    def test_common(self) -> None:
        arpeggios = common_arpeggios(PitchClass.D)
        assert len(arpeggios) == 4
        assert all(a.root == PitchClass.D for a in arpeggios)

    def test_extended(self) -> None:
        arpeggios = extended_arpeggios(PitchClass.D, ArpeggioOctaves.TWO)
        assert len(arpeggios) == 7
        assert arpeggios[4].arpeggio_type == ArpeggioType.DOMINANT_7
        assert all(a.octaves == ArpeggioOctaves.TWO for a in arpeggios)
