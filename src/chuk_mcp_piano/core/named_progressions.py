"""
Named chord progressions - the common pop and jazz patterns.

Unlike key progressions these are not built from the diatonic tables. Each
chord is a fixed interval stack measured from the tonic, which lets the
library hold borrowed chords like ♭VII that no major-key table contains.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from chuk_mcp_piano.constants import DEFAULT_OCTAVE, SEMITONES_PER_OCTAVE, ErrorMessages

from .chord import CHORD_INTERVALS, CHORD_SYMBOLS, ChordType
from .note import ensure_midi_range, key_to_midi
from .pitch import Key, PitchClass


class ProgressionDifficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class ProgressionChord:
    """
    One chord of a named progression, resolved in a key.

    midi_notes are the octave-4 voicing; get_midi_notes() moves them.
    """

    roman_numeral: str
    chord_type: ChordType
    midi_notes: tuple[int, ...]
    name: str

    def get_midi_notes(self, octave: int = DEFAULT_OCTAVE) -> list[int]:
        """
        Voicing moved to another octave.

        Raises:
            InvalidRangeError: if any tone falls outside 0..127
        """
        shift = (octave - DEFAULT_OCTAVE) * SEMITONES_PER_OCTAVE
        return [ensure_midi_range(note + shift) for note in self.midi_notes]


def _chord_type_for(intervals: tuple[int, ...]) -> ChordType:
    relative = tuple(i - intervals[0] for i in intervals)
    for chord_type, chord_intervals in CHORD_INTERVALS.items():
        if chord_intervals == relative:
            return chord_type
    raise ValueError(f"No chord type has intervals {relative}")


@dataclass(frozen=True)
class NamedProgression:
    """A named progression: roman numerals plus interval stacks from the tonic."""

    name: str
    roman_numerals: tuple[str, ...]
    chord_intervals: tuple[tuple[int, ...], ...]
    difficulty: ProgressionDifficulty
    description: str

    def __post_init__(self) -> None:
        if len(self.roman_numerals) != len(self.chord_intervals):
            raise ValueError(
                f"{self.name}: {len(self.roman_numerals)} numerals for "
                f"{len(self.chord_intervals)} chords"
            )

    def generate_chords(self, key: Key) -> list[ProgressionChord]:
        """Resolve every chord against the key's tonic at octave 4."""
        tonic = key_to_midi(key, DEFAULT_OCTAVE)
        chords = []
        for numeral, intervals in zip(self.roman_numerals, self.chord_intervals):
            chord_type = _chord_type_for(intervals)
            root = PitchClass.from_midi(tonic + intervals[0])
            chords.append(
                ProgressionChord(
                    roman_numeral=numeral,
                    chord_type=chord_type,
                    midi_notes=tuple(tonic + interval for interval in intervals),
                    name=f"{root.spell()}{CHORD_SYMBOLS[chord_type]}",
                )
            )
        return chords

    def generate_voicings(self, key: Key, octave: int = DEFAULT_OCTAVE) -> list[list[int]]:
        """MIDI voicings of the progression in a key and octave."""
        return [chord.get_midi_notes(octave) for chord in self.generate_chords(key)]


_I = (0, 4, 7)
_ii = (2, 5, 9)
_IV = (5, 9, 12)
_V = (7, 11, 14)
_vi = (9, 12, 16)
_bVII = (10, 14, 17)

PROGRESSIONS: tuple[NamedProgression, ...] = (
    NamedProgression(
        name="I - V",
        roman_numerals=("I", "V"),
        chord_intervals=(_I, _V),
        difficulty=ProgressionDifficulty.BEGINNER,
        description="Tonic to dominant, the most basic harmonic movement.",
    ),
    NamedProgression(
        name="I - vi",
        roman_numerals=("I", "vi"),
        chord_intervals=(_I, _vi),
        difficulty=ProgressionDifficulty.BEGINNER,
        description="Tonic to its relative minor, two shared notes.",
    ),
    NamedProgression(
        name="vi - IV",
        roman_numerals=("vi", "IV"),
        chord_intervals=(_vi, _IV),
        difficulty=ProgressionDifficulty.BEGINNER,
        description="Relative minor to subdominant, common in ballads.",
    ),
    NamedProgression(
        name="I - V - vi - IV",
        roman_numerals=("I", "V", "vi", "IV"),
        chord_intervals=(_I, _V, _vi, _IV),
        difficulty=ProgressionDifficulty.INTERMEDIATE,
        description="The pop progression behind countless hit songs.",
    ),
    NamedProgression(
        name="vi - IV - I - V",
        roman_numerals=("vi", "IV", "I", "V"),
        chord_intervals=(_vi, _IV, _I, _V),
        difficulty=ProgressionDifficulty.INTERMEDIATE,
        description="The pop progression started from the relative minor.",
    ),
    NamedProgression(
        name="I - vi - IV - V",
        roman_numerals=("I", "vi", "IV", "V"),
        chord_intervals=(_I, _vi, _IV, _V),
        difficulty=ProgressionDifficulty.INTERMEDIATE,
        description="The 50s doo-wop progression.",
    ),
    NamedProgression(
        name="ii - V - I",
        roman_numerals=("ii", "V", "I"),
        chord_intervals=(_ii, _V, _I),
        difficulty=ProgressionDifficulty.ADVANCED,
        description="The cadence at the heart of jazz harmony.",
    ),
    NamedProgression(
        name="I - ♭VII - IV",
        roman_numerals=("I", "♭VII", "IV"),
        chord_intervals=(_I, _bVII, _IV),
        difficulty=ProgressionDifficulty.ADVANCED,
        description="Mixolydian rock progression with a borrowed flat seven.",
    ),
)

DEFAULT_PROGRESSION_NAME = "I - V"


def get_progression_by_name(name: str) -> NamedProgression:
    """
    Look up a progression by its exact name.

    Raises:
        ValueError: if no progression has that name
    """
    for progression in PROGRESSIONS:
        if progression.name == name:
            return progression
    raise ValueError(ErrorMessages.UNKNOWN_PROGRESSION.format(name=name))


def progressions_for_difficulty(difficulty: ProgressionDifficulty) -> list[NamedProgression]:
    """Progressions of one difficulty, in library order."""
    return [p for p in PROGRESSIONS if p.difficulty == difficulty]


def progression_names() -> list[str]:
    return [p.name for p in PROGRESSIONS]
