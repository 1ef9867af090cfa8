"""
Scale primitives - ScaleType and Scale.

Scales are interval patterns from a root. The intervals are from one degree
to the next (not cumulative); a major scale is W W H W W W H
(2 2 1 2 2 2 1 semitones). Every pattern sums to one octave.
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

from .note import is_valid_midi, note_to_midi
from .pitch import Key, PitchClass


class ScaleType(str, Enum):
    """The eight practice modes."""

    MAJOR = "major"
    MINOR = "minor"  # natural minor
    DORIAN = "dorian"
    PHRYGIAN = "phrygian"
    LYDIAN = "lydian"
    MIXOLYDIAN = "mixolydian"
    AEOLIAN = "aeolian"
    LOCRIAN = "locrian"

    @property
    def intervals(self) -> tuple[int, ...]:
        return SCALE_INTERVALS[self]

    @property
    def display_name(self) -> str:
        return SCALE_NAMES[self]


_W = 2  # whole step
_H = 1  # half step

SCALE_INTERVALS = MappingProxyType(
    {
        ScaleType.MAJOR: (_W, _W, _H, _W, _W, _W, _H),
        ScaleType.MINOR: (_W, _H, _W, _W, _H, _W, _W),
        ScaleType.DORIAN: (_W, _H, _W, _W, _W, _H, _W),
        ScaleType.PHRYGIAN: (_H, _W, _W, _W, _H, _W, _W),
        ScaleType.LYDIAN: (_W, _W, _W, _H, _W, _W, _H),
        ScaleType.MIXOLYDIAN: (_W, _W, _H, _W, _W, _H, _W),
        ScaleType.AEOLIAN: (_W, _H, _W, _W, _H, _W, _W),
        ScaleType.LOCRIAN: (_H, _W, _W, _H, _W, _W, _W),
    }
)

SCALE_NAMES = MappingProxyType(
    {
        ScaleType.MAJOR: "Major (Ionian)",
        ScaleType.MINOR: "Natural Minor",
        ScaleType.DORIAN: "Dorian",
        ScaleType.PHRYGIAN: "Phrygian",
        ScaleType.LYDIAN: "Lydian",
        ScaleType.MIXOLYDIAN: "Mixolydian",
        ScaleType.AEOLIAN: "Aeolian",
        ScaleType.LOCRIAN: "Locrian",
    }
)


@dataclass(frozen=True)
class Scale:
    """
    A scale in a specific key.

    Immutable. Build one with get_scale() rather than directly so the name
    and intervals stay consistent with the scale type.
    """

    key: Key
    scale_type: ScaleType
    intervals: tuple[int, ...]
    name: str

    def __post_init__(self) -> None:
        # Validate that intervals sum to an octave (12 semitones)
        total = sum(self.intervals)
        if total != SEMITONES_PER_OCTAVE:
            raise ValueError(f"Scale intervals must sum to 12 semitones, got {total}")

    def get_notes(self) -> list[PitchClass]:
        """
        Pitch classes of the scale, including the closing octave.

        Returns 8 entries; the last repeats the root.
        """
        current = self.key.pitch_class
        notes = [current]
        for step in self.intervals:
            current = current.transpose(step)
            notes.append(current)
        return notes

    def get_midi_notes(self, octave: int = DEFAULT_OCTAVE) -> list[int]:
        """
        Ascending MIDI numbers for one octave of the scale, root to root.

        Raises:
            InvalidRangeError: if the root or any scale tone leaves 0..127
        """
        base = note_to_midi(self.key.pitch_class, octave)
        midi_notes = [base]
        for step in self.intervals:
            midi_notes.append(midi_notes[-1] + step)
        # the closing tone is the only one that can leave the range
        note_to_midi(self.key.pitch_class, octave + 1)
        return midi_notes

    def get_full_scale_sequence(self, octave: int = DEFAULT_OCTAVE) -> list[int]:
        """Up and back down: 8 ascending notes then 7 descending, ending on the root."""
        ascending = self.get_midi_notes(octave)
        return ascending + ascending[-2::-1]

    def get_hand_sequence(self, octave: int, hand: HandSelection) -> list[int]:
        """
        Full scale sequence for one or both hands.

        Left plays an octave lower. Both hands are interleaved as pairs
        [left_0, right_0, left_1, right_1, ...] to be played together.
        """
        right = self.get_full_scale_sequence(octave)
        if hand == HandSelection.RIGHT:
            return right
        left = self.get_full_scale_sequence(octave - 1)
        if hand == HandSelection.LEFT:
            return left
        return [note for pair in zip(left, right) for note in pair]

    def __str__(self) -> str:
        return self.name


def get_scale(key: Key, scale_type: ScaleType) -> Scale:
    """Create the scale of the given type rooted on key."""
    return Scale(
        key=key,
        scale_type=scale_type,
        intervals=SCALE_INTERVALS[scale_type],
        name=f"{key.display_name} {SCALE_NAMES[scale_type]}",
    )


def scale_midi_notes(
    key: Key,
    scale_type: ScaleType,
    base_octave: int = DEFAULT_OCTAVE,
    octave_span: int = 2,
) -> set[int]:
    """
    Every MIDI number of the scale across a span of octaves.

    Used to highlight the scale on a keyboard. Notes falling outside 0..127
    are left out rather than raising, since the span is only a display range.
    """
    notes = get_scale(key, scale_type).get_notes()
    midi_notes: set[int] = set()
    for octave in range(base_octave, base_octave + octave_span):
        for note in notes:
            midi_number = note.to_midi(octave)
            if is_valid_midi(midi_number):
                midi_notes.add(midi_number)
    return midi_notes
