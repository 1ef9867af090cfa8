"""
Arpeggio primitives - ArpeggioType, ArpeggioOctaves and Arpeggio.

An arpeggio is a chord played one note at a time. The interval lists already
end on the closing octave, so MIDI numbers are just base + interval; there is
no inversion and no rotation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from chuk_mcp_piano.constants import (
    DEFAULT_OCTAVE,
    SEMITONES_PER_OCTAVE,
    HandSelection,
)

from .chord import CHORD_INTERVALS, CHORD_TYPE_NAMES, ChordType
from .note import ensure_midi_range, note_to_midi
from .pitch import PitchClass


class ArpeggioType(str, Enum):
    """Arpeggio qualities, one per chord quality."""

    MAJOR = "major"
    MINOR = "minor"
    DIMINISHED = "diminished"
    AUGMENTED = "augmented"
    DOMINANT_7 = "dominant7"
    MINOR_7 = "minor7"
    MAJOR_7 = "major7"
    HALF_DIMINISHED_7 = "half_diminished7"
    DIMINISHED_7 = "diminished7"
    MINOR_MAJOR_7 = "minor_major7"
    AUGMENTED_7 = "augmented7"

    @property
    def chord_type(self) -> ChordType:
        """The chord whose tones this arpeggio breaks up."""
        return ChordType(self.value)

    @property
    def intervals(self) -> tuple[int, ...]:
        return ARPEGGIO_INTERVALS[self]

    @property
    def display_name(self) -> str:
        return CHORD_TYPE_NAMES[self.chord_type]


class ArpeggioOctaves(int, Enum):
    """How many octaves the pattern climbs before turning around."""

    ONE = 1
    TWO = 2

    @property
    def label(self) -> str:
        return "1 Octave" if self is ArpeggioOctaves.ONE else f"{self.value} Octaves"


# Chord tones plus the closing octave: major is 1-3-5-8 -> (0, 4, 7, 12)
ARPEGGIO_INTERVALS = MappingProxyType(
    {t: CHORD_INTERVALS[t.chord_type] + (SEMITONES_PER_OCTAVE,) for t in ArpeggioType}
)

COMMON_ARPEGGIO_TYPES: tuple[ArpeggioType, ...] = (
    ArpeggioType.MAJOR,
    ArpeggioType.MINOR,
    ArpeggioType.DIMINISHED,
    ArpeggioType.AUGMENTED,
)

EXTENDED_ARPEGGIO_TYPES: tuple[ArpeggioType, ...] = (
    *COMMON_ARPEGGIO_TYPES,
    ArpeggioType.DOMINANT_7,
    ArpeggioType.MINOR_7,
    ArpeggioType.MAJOR_7,
)


@dataclass(frozen=True)
class Arpeggio:
    """
    An arpeggio pattern on a root.

    Immutable. Build one with get_arpeggio() so the name and intervals match
    the type.
    """

    root: PitchClass
    arpeggio_type: ArpeggioType
    octaves: ArpeggioOctaves
    intervals: tuple[int, ...]
    name: str

    def get_notes(self) -> list[PitchClass]:
        """Pitch classes of one octave of the pattern, closing root included."""
        return [self.root.transpose(interval) for interval in self.intervals]

    def get_midi_notes(self, octave: int = DEFAULT_OCTAVE) -> list[int]:
        """
        One octave of the pattern as MIDI numbers.

        Raises:
            InvalidRangeError: if any tone falls outside 0..127
        """
        base = note_to_midi(self.root, octave)
        return [ensure_midi_range(base + interval) for interval in self.intervals]

    def get_ascending_sequence(self, octave: int = DEFAULT_OCTAVE) -> list[int]:
        """
        The climb from the root to the top.

        Each extra octave repeats every tone after the root 12 semitones
        higher, so the top note is the root N octaves up.
        """
        first = self.get_midi_notes(octave)
        ascending = list(first)
        for lift in range(1, self.octaves.value):
            shift = lift * SEMITONES_PER_OCTAVE
            ascending.extend(ensure_midi_range(note + shift) for note in first[1:])
        return ascending

    def get_full_arpeggio_sequence(self, octave: int = DEFAULT_OCTAVE) -> list[int]:
        """
        Up and back down, ending on the root.

        C major, one octave, octave 4: [60, 64, 67, 72, 67, 64, 60]
        """
        ascending = self.get_ascending_sequence(octave)
        return ascending + ascending[-2::-1]

    def get_hand_sequence(self, octave: int, hand: HandSelection) -> list[int]:
        """
        Full sequence for one or both hands.

        Left is an octave lower. Both hands are interleaved as
        [left_0, right_0, left_1, right_1, ...]; each pair is played together.
        """
        right = self.get_full_arpeggio_sequence(octave)
        if hand == HandSelection.RIGHT:
            return right
        left = self.get_full_arpeggio_sequence(octave - 1)
        if hand == HandSelection.LEFT:
            return left
        return [note for pair in zip(left, right) for note in pair]

    def __str__(self) -> str:
        return self.name


def get_arpeggio(
    root: PitchClass,
    arpeggio_type: ArpeggioType,
    octaves: ArpeggioOctaves = ArpeggioOctaves.ONE,
) -> Arpeggio:
    """Create an arpeggio, e.g. "C Major (1 Octave)"."""
    return Arpeggio(
        root=root,
        arpeggio_type=arpeggio_type,
        octaves=octaves,
        intervals=ARPEGGIO_INTERVALS[arpeggio_type],
        name=f"{root.spell()} {arpeggio_type.display_name} ({octaves.label})",
    )


def common_arpeggios(
    root: PitchClass,
    octaves: ArpeggioOctaves = ArpeggioOctaves.ONE,
) -> list[Arpeggio]:
    """The four triad arpeggios on a root."""
    return [get_arpeggio(root, t, octaves) for t in COMMON_ARPEGGIO_TYPES]


def extended_arpeggios(
    root: PitchClass,
    octaves: ArpeggioOctaves = ArpeggioOctaves.ONE,
) -> list[Arpeggio]:
    """Triad arpeggios plus dominant, minor and major sevenths."""
    return [get_arpeggio(root, t, octaves) for t in EXTENDED_ARPEGGIO_TYPES]
