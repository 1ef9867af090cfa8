"""
Key progressions - walking every diatonic chord of a key through its inversions.

A progression visits the seven scale degrees in order and plays each chord
through a fixed inversion walk:

- simple triads:   root, first, second                      (21 chords)
- smooth triads:   root, first, second, first               (28 chords)
- simple sevenths: root, first, second, third               (28 chords)
- smooth sevenths: root, first, second, third, second, first (42 chords)

Returning toward root position before moving on keeps the hand close to the
next degree's root-position chord.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from chuk_mcp_piano.constants import (
    DEFAULT_OCTAVE,
    MIDI_NOTE_MAX,
    SEMITONES_PER_OCTAVE,
)

from .chord import ChordInfo, ChordInversion, build_chord
from .harmony import diatonic_seventh_types, diatonic_triad_types, roman_numeral
from .pitch import Key
from .scale import ScaleType, get_scale

logger = logging.getLogger(__name__)

_R = ChordInversion.ROOT
_I1 = ChordInversion.FIRST
_I2 = ChordInversion.SECOND
_I3 = ChordInversion.THIRD

SIMPLE_TRIAD_WALK: tuple[ChordInversion, ...] = (_R, _I1, _I2)
SMOOTH_TRIAD_WALK: tuple[ChordInversion, ...] = (_R, _I1, _I2, _I1)
SIMPLE_SEVENTH_WALK: tuple[ChordInversion, ...] = (_R, _I1, _I2, _I3)
SMOOTH_SEVENTH_WALK: tuple[ChordInversion, ...] = (_R, _I1, _I2, _I3, _I2, _I1)

# Largest downward bass move allowed between degrees before lifting an octave
MAX_BASS_DROP = SEMITONES_PER_OCTAVE


class ProgressionStyle(str, Enum):
    SIMPLE = "simple"
    SMOOTH = "smooth"


@dataclass(frozen=True)
class Progression:
    """
    An ordered walk of chords through a key.

    chords is flat; every scale degree contributes len(walk) consecutive
    chords. numerals holds one roman numeral per degree.
    """

    key: Key
    scale_type: ScaleType
    style: ProgressionStyle
    walk: tuple[ChordInversion, ...]
    chords: tuple[ChordInfo, ...]
    numerals: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.chords)

    def __iter__(self) -> Iterator[ChordInfo]:
        return iter(self.chords)

    def __getitem__(self, index: int) -> ChordInfo:
        return self.chords[index]

    @property
    def is_seventh(self) -> bool:
        return bool(self.chords) and self.chords[0].chord_type.is_seventh

    def degrees(self) -> list[tuple[ChordInfo, ...]]:
        """Chords grouped by scale degree."""
        size = len(self.walk)
        return [self.chords[i : i + size] for i in range(0, len(self.chords), size)]

    def numeral_at(self, index: int) -> str:
        """Roman numeral of the degree the chord at index belongs to."""
        return self.numerals[index // len(self.walk)]


def _build_progression(
    key: Key,
    scale_type: ScaleType,
    style: ProgressionStyle,
    walk: tuple[ChordInversion, ...],
    sevenths: bool,
) -> Progression:
    if sevenths:
        chord_types = diatonic_seventh_types(scale_type)
    else:
        chord_types = diatonic_triad_types(scale_type)
    roots = get_scale(key, scale_type).get_notes()[:-1]

    chords: list[ChordInfo] = []
    for root, chord_type in zip(roots, chord_types):
        chords.extend(build_chord(root, chord_type, inversion) for inversion in walk)

    numerals = tuple(
        roman_numeral(degree, chord_type) for degree, chord_type in enumerate(chord_types, 1)
    )
    logger.debug(
        "Built %s %s progression in %s %s: %d chords",
        style.value,
        "seventh" if sevenths else "triad",
        key.display_name,
        scale_type.value,
        len(chords),
    )
    return Progression(
        key=key,
        scale_type=scale_type,
        style=style,
        walk=walk,
        chords=tuple(chords),
        numerals=numerals,
    )


def key_triad_progression(key: Key, scale_type: ScaleType) -> Progression:
    """Every diatonic triad in root, first and second inversion."""
    return _build_progression(
        key, scale_type, ProgressionStyle.SIMPLE, SIMPLE_TRIAD_WALK, sevenths=False
    )


def smooth_key_triad_progression(key: Key, scale_type: ScaleType) -> Progression:
    """Every diatonic triad walked root, first, second, first."""
    return _build_progression(
        key, scale_type, ProgressionStyle.SMOOTH, SMOOTH_TRIAD_WALK, sevenths=False
    )


def key_seventh_progression(key: Key, scale_type: ScaleType) -> Progression:
    """Every diatonic seventh chord in root, first, second and third inversion."""
    return _build_progression(
        key, scale_type, ProgressionStyle.SIMPLE, SIMPLE_SEVENTH_WALK, sevenths=True
    )


def smooth_key_seventh_progression(key: Key, scale_type: ScaleType) -> Progression:
    """Every diatonic seventh chord walked up through its inversions and back."""
    return _build_progression(
        key, scale_type, ProgressionStyle.SMOOTH, SMOOTH_SEVENTH_WALK, sevenths=True
    )


def progression_midi_sequence(
    progression: Progression, octave: int = DEFAULT_OCTAVE
) -> list[int]:
    """All voicings at a fixed octave, flattened into one list."""
    return [note for chord in progression for note in chord.get_midi_notes(octave)]


def smooth_progression_voicings(
    progression: Progression, octave: int = DEFAULT_OCTAVE
) -> list[list[int]]:
    """
    Voicings with octave lifts at degree boundaries.

    Roots are placed in a single octave, so a key whose degrees wrap past
    C (B major: B4 then C#4) would make the bass fall more than an octave.
    When the first chord of a degree sits more than MAX_BASS_DROP below the
    previous chord's bass, that whole degree and everything after it moves
    up by whole octaves, as long as no note goes above 127.

    Raises:
        InvalidRangeError: if a voicing at the starting octave is out of range
    """
    voicings: list[list[int]] = []
    shift = 0
    previous_bass: int | None = None

    for degree in progression.degrees():
        base = [chord.get_midi_notes(octave) for chord in degree]
        top = max(voicing[-1] for voicing in base)

        if previous_bass is not None:
            while (
                previous_bass - (base[0][0] + shift) > MAX_BASS_DROP
                and top + shift + SEMITONES_PER_OCTAVE <= MIDI_NOTE_MAX
            ):
                shift += SEMITONES_PER_OCTAVE
                logger.debug("Lifting %s by %d semitones", degree[0].name, shift)

        # Only lift as far as the degree still fits under the MIDI ceiling
        while shift > 0 and top + shift > MIDI_NOTE_MAX:
            shift -= SEMITONES_PER_OCTAVE

        shifted = [[note + shift for note in voicing] for voicing in base]
        voicings.extend(shifted)
        previous_bass = shifted[-1][0]

    return voicings


def smooth_progression_midi_sequence(
    progression: Progression, octave: int = DEFAULT_OCTAVE
) -> list[int]:
    """smooth_progression_voicings() flattened into one list."""
    voicings = smooth_progression_voicings(progression, octave)
    return [note for voicing in voicings for note in voicing]
