"""
Chord primitives - ChordType, ChordInversion, ChordInfo.

Chords are stacks of intervals measured from the root. Inversions rotate the
stack: the tones moved past the top are lifted an octave, so every voicing is
strictly ascending without per-note octave bookkeeping.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from types import MappingProxyType

from chuk_mcp_piano.constants import (
    DEFAULT_OCTAVE,
    MIDI_NOTE_MAX,
    MIDI_NOTE_MIN,
    SEMITONES_PER_OCTAVE,
    ErrorMessages,
    HandSelection,
)

from .errors import InvalidInversionError
from .note import ensure_midi_range, note_to_midi
from .pitch import PitchClass

# Widest voicing produced by any inversion (third inversion of a seventh)
MAX_CHORD_SPAN = 24


class ChordType(str, Enum):
    """Chord qualities: four triads and seven seventh chords."""

    # Triads
    MAJOR = "major"
    MINOR = "minor"
    DIMINISHED = "diminished"
    AUGMENTED = "augmented"

    # Sevenths
    MAJOR_7 = "major7"
    DOMINANT_7 = "dominant7"
    MINOR_7 = "minor7"
    HALF_DIMINISHED_7 = "half_diminished7"
    DIMINISHED_7 = "diminished7"
    MINOR_MAJOR_7 = "minor_major7"
    AUGMENTED_7 = "augmented7"

    @property
    def intervals(self) -> tuple[int, ...]:
        return CHORD_INTERVALS[self]

    @property
    def is_seventh(self) -> bool:
        return len(CHORD_INTERVALS[self]) == 4

    @property
    def symbol(self) -> str:
        return CHORD_SYMBOLS[self]

    @property
    def short_name(self) -> str:
        return CHORD_TYPE_NAMES[self]

    @property
    def long_name(self) -> str:
        return f"{CHORD_TYPE_NAMES[self]} Chords"


class ChordInversion(IntEnum):
    """
    Which chord tone sits in the bass.

    The value is the rotation applied to the interval stack. THIRD only
    exists for seventh chords.
    """

    ROOT = 0
    FIRST = 1
    SECOND = 2
    THIRD = 3

    @property
    def display_name(self) -> str:
        return INVERSION_DISPLAY_NAMES[self]


CHORD_INTERVALS = MappingProxyType(
    {
        ChordType.MAJOR: (0, 4, 7),
        ChordType.MINOR: (0, 3, 7),
        ChordType.DIMINISHED: (0, 3, 6),
        ChordType.AUGMENTED: (0, 4, 8),
        ChordType.MAJOR_7: (0, 4, 7, 11),
        ChordType.DOMINANT_7: (0, 4, 7, 10),
        ChordType.MINOR_7: (0, 3, 7, 10),
        ChordType.HALF_DIMINISHED_7: (0, 3, 6, 10),
        ChordType.DIMINISHED_7: (0, 3, 6, 9),
        ChordType.MINOR_MAJOR_7: (0, 3, 7, 11),
        ChordType.AUGMENTED_7: (0, 4, 8, 10),
    }
)

# Suffix appended to the root in chord names (standard jazz notation)
CHORD_SYMBOLS = MappingProxyType(
    {
        ChordType.MAJOR: "",
        ChordType.MINOR: "m",
        ChordType.DIMINISHED: "°",
        ChordType.AUGMENTED: "+",
        ChordType.MAJOR_7: "maj7",
        ChordType.DOMINANT_7: "7",
        ChordType.MINOR_7: "m7",
        ChordType.HALF_DIMINISHED_7: "ø7",
        ChordType.DIMINISHED_7: "°7",
        ChordType.MINOR_MAJOR_7: "m(maj7)",
        ChordType.AUGMENTED_7: "aug7",
    }
)

CHORD_TYPE_NAMES = MappingProxyType(
    {
        ChordType.MAJOR: "Major",
        ChordType.MINOR: "Minor",
        ChordType.DIMINISHED: "Diminished",
        ChordType.AUGMENTED: "Augmented",
        ChordType.MAJOR_7: "Major 7th",
        ChordType.DOMINANT_7: "Dominant 7th",
        ChordType.MINOR_7: "Minor 7th",
        ChordType.HALF_DIMINISHED_7: "Half-Diminished 7th",
        ChordType.DIMINISHED_7: "Diminished 7th",
        ChordType.MINOR_MAJOR_7: "Minor-Major 7th",
        ChordType.AUGMENTED_7: "Augmented 7th",
    }
)

_INVERSION_SUFFIXES = MappingProxyType(
    {
        ChordInversion.ROOT: "",
        ChordInversion.FIRST: "1st inv",
        ChordInversion.SECOND: "2nd inv",
        ChordInversion.THIRD: "3rd inv",
    }
)

INVERSION_DISPLAY_NAMES = MappingProxyType(
    {
        ChordInversion.ROOT: "Root Position",
        ChordInversion.FIRST: "1st Inversion",
        ChordInversion.SECOND: "2nd Inversion",
        ChordInversion.THIRD: "3rd Inversion",
    }
)

TRIAD_TYPES: tuple[ChordType, ...] = tuple(t for t in ChordType if not t.is_seventh)


def valid_inversions(chord_type: ChordType) -> tuple[ChordInversion, ...]:
    """Inversions available to a chord type: 3 for triads, 4 for sevenths."""
    return tuple(ChordInversion(i) for i in range(len(CHORD_INTERVALS[chord_type])))


def rotate_intervals(intervals: tuple[int, ...], inversion: int) -> tuple[int, ...]:
    """
    Rotate an ascending interval stack left, lifting wrapped tones an octave.

    (0, 4, 7) rotated by 2 -> (7, 12, 16)
    """
    lifted = tuple(x + SEMITONES_PER_OCTAVE for x in intervals[:inversion])
    return intervals[inversion:] + lifted


def voicing_for_hand(voicing: list[int], hand: HandSelection) -> list[int]:
    """
    Place a right-hand voicing for the requested hand(s).

    Left is the voicing an octave down. Both is the left-hand voicing
    followed by the right-hand one, sounded together as one block.

    Raises:
        InvalidRangeError: if the left-hand notes fall below 0
    """
    if hand == HandSelection.RIGHT:
        return list(voicing)
    left = [ensure_midi_range(note - SEMITONES_PER_OCTAVE) for note in voicing]
    if hand == HandSelection.LEFT:
        return left
    return left + list(voicing)


def _check_inversion(chord_type: ChordType, inversion: ChordInversion) -> None:
    if inversion not in valid_inversions(chord_type):
        raise InvalidInversionError(
            ErrorMessages.INVALID_INVERSION.format(
                inversion=inversion.name.lower(), chord_type=chord_type.value
            )
        )


@dataclass(frozen=True)
class ChordInfo:
    """
    A concrete chord: root, quality and inversion.

    notes holds the pitch classes in voicing order (bass first). This is
    the form handed to exercises, playback and display.
    """

    root: PitchClass
    chord_type: ChordType
    inversion: ChordInversion
    notes: tuple[PitchClass, ...]
    name: str

    @property
    def offsets(self) -> tuple[int, ...]:
        """Semitone offsets from the root in voicing order."""
        return rotate_intervals(CHORD_INTERVALS[self.chord_type], int(self.inversion))

    def get_midi_notes(self, octave: int = DEFAULT_OCTAVE) -> list[int]:
        """
        MIDI numbers of the voicing with the root's octave as the anchor.

        Strictly ascending and never wider than two octaves. F major in second
        inversion at octave 4 is [72, 77, 81]; the fifth is lifted above the
        root rather than dropped below it.

        Raises:
            InvalidRangeError: if any tone falls outside 0..127
        """
        base = note_to_midi(self.root, octave)
        return [ensure_midi_range(base + offset) for offset in self.offsets]

    def get_midi_notes_for_hand(self, octave: int, hand: HandSelection) -> list[int]:
        """
        Voicing for one hand or both.

        Left is the whole chord an octave down. Both is the left-hand chord
        followed by the right-hand chord, all sounded together.
        """
        return voicing_for_hand(self.get_midi_notes(octave), hand)

    @property
    def bass(self) -> PitchClass:
        return self.notes[0]

    def __str__(self) -> str:
        return self.name


def chord_name(root: PitchClass, chord_type: ChordType, inversion: ChordInversion) -> str:
    """Display name such as C, Cm (1st inv) or G7 (3rd inv)."""
    base = f"{root.spell()}{CHORD_SYMBOLS[chord_type]}"
    suffix = _INVERSION_SUFFIXES[inversion]
    return f"{base} ({suffix})" if suffix else base


def build_chord(
    root: PitchClass,
    chord_type: ChordType,
    inversion: ChordInversion = ChordInversion.ROOT,
) -> ChordInfo:
    """
    Build a chord on a root.

    Raises:
        InvalidInversionError: for THIRD on a triad
    """
    _check_inversion(chord_type, inversion)
    offsets = rotate_intervals(CHORD_INTERVALS[chord_type], int(inversion))
    return ChordInfo(
        root=root,
        chord_type=chord_type,
        inversion=inversion,
        notes=tuple(root.transpose(offset) for offset in offsets),
        name=chord_name(root, chord_type, inversion),
    )


def chord_midi_notes(
    root: PitchClass,
    chord_type: ChordType,
    inversion: ChordInversion,
    octave: int = DEFAULT_OCTAVE,
) -> list[int]:
    """Shortcut for build_chord(...).get_midi_notes(octave)."""
    return build_chord(root, chord_type, inversion).get_midi_notes(octave)


def inversion_progression(
    root: PitchClass,
    chord_type: ChordType,
    octave: int = DEFAULT_OCTAVE,
) -> list[list[int]]:
    """Voicings of every valid inversion, root position first."""
    return [
        chord_midi_notes(root, chord_type, inversion, octave)
        for inversion in valid_inversions(chord_type)
    ]


def validate_chord_voicing(midi_notes: list[int]) -> bool:
    """
    Check that a voicing is well formed.

    At least two notes, strictly ascending, within two octaves, in 0..127.
    """
    if len(midi_notes) < 2:
        return False
    if any(b <= a for a, b in zip(midi_notes, midi_notes[1:])):
        return False
    if midi_notes[-1] - midi_notes[0] > MAX_CHORD_SPAN:
        return False
    return all(MIDI_NOTE_MIN <= note <= MIDI_NOTE_MAX for note in midi_notes)
