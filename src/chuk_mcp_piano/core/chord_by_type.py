"""
Chord-by-type drills - one chord quality planed through all twelve roots.
"""

from __future__ import annotations

from dataclasses import dataclass

from chuk_mcp_piano.constants import DEFAULT_OCTAVE

from .chord import TRIAD_TYPES, ChordInfo, ChordType, build_chord, valid_inversions
from .pitch import PitchClass

CHROMATIC_ROOTS: tuple[PitchClass, ...] = tuple(PitchClass)


@dataclass(frozen=True)
class ChordTypeExercise:
    """
    A single chord type played on a list of roots.

    With inversions every root walks root, first, second (and third for
    seventh chords) before moving up a semitone.
    """

    chord_type: ChordType
    roots: tuple[PitchClass, ...]
    include_inversions: bool
    name: str

    def generate_chord_sequence(self) -> list[ChordInfo]:
        inversions = valid_inversions(self.chord_type)
        if not self.include_inversions:
            inversions = inversions[:1]
        return [
            build_chord(root, self.chord_type, inversion)
            for root in self.roots
            for inversion in inversions
        ]

    def get_midi_sequence(self, octave: int = DEFAULT_OCTAVE) -> list[int]:
        """Every voicing at one octave, flattened."""
        return [
            note
            for chord in self.generate_chord_sequence()
            for note in chord.get_midi_notes(octave)
        ]


def chord_type_exercise(
    chord_type: ChordType, include_inversions: bool = True
) -> ChordTypeExercise:
    """Drill for one chord type across all 12 chromatic roots."""
    suffix = " (with inversions)" if include_inversions else ""
    return ChordTypeExercise(
        chord_type=chord_type,
        roots=CHROMATIC_ROOTS,
        include_inversions=include_inversions,
        name=f"{chord_type.long_name}{suffix} - All 12 Keys",
    )


def all_basic_chord_type_exercises(include_inversions: bool = True) -> list[ChordTypeExercise]:
    """Drills for the four triad types."""
    return [chord_type_exercise(t, include_inversions) for t in TRIAD_TYPES]
