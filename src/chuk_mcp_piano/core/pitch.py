"""
Pitch primitives - PitchClass and Key.

PitchClass represents the 12 chromatic pitches (octave-independent) and is
spelled with sharps. Key is the tonal center an exercise is built on; it
shares PitchClass's values but is displayed the way key signatures are
written, with flats for the black keys.
"""

from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType

# Display name mappings (module level to avoid IntEnum member issues)
_SHARP_NAMES: tuple[str, ...] = (
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
)
_FLAT_NAMES: tuple[str, ...] = (
    "C",
    "Db",
    "D",
    "Eb",
    "E",
    "F",
    "Gb",
    "G",
    "Ab",
    "A",
    "Bb",
    "B",
)
# Key signature names: flats preferred for the five black keys
_KEY_DISPLAY_NAMES: tuple[str, ...] = (
    "C",
    "D♭",
    "D",
    "E♭",
    "E",
    "F",
    "G♭",
    "G",
    "A♭",
    "A",
    "B♭",
    "B",
)

_UNICODE_ACCIDENTALS = MappingProxyType({"♯": "#", "♭": "b"})


def _normalize_name(name: str) -> str:
    name = name.strip()
    for symbol, ascii_symbol in _UNICODE_ACCIDENTALS.items():
        name = name.replace(symbol, ascii_symbol)
    return name


class PitchClass(IntEnum):
    """
    The 12 chromatic pitch classes (0-11).

    Octave-independent - C4 and C5 are both PitchClass.C.
    Enharmonic equivalents share the same value (C# == Db == 1), so a flat
    spelling always comes back as its sharp name.
    """

    C = 0
    Cs = 1  # C# / Db
    D = 2
    Ds = 3  # D# / Eb
    E = 4
    F = 5
    Fs = 6  # F# / Gb
    G = 7
    Gs = 8  # G# / Ab
    A = 9
    As = 10  # A# / Bb
    B = 11

    def transpose(self, semitones: int) -> PitchClass:
        """Transpose by a number of semitones (positive or negative)."""
        return PitchClass((self.value + semitones) % 12)

    def interval_to(self, other: PitchClass) -> int:
        """Ascending distance in semitones (0-11) from this pitch class to another."""
        return (other.value - self.value) % 12

    def to_midi(self, octave: int = 4) -> int:
        """Convert to MIDI note number without range checks. C4 = 60."""
        return self.value + (octave + 1) * 12

    def spell(self, prefer_flats: bool = False) -> str:
        """Get human-readable name."""
        names = _FLAT_NAMES if prefer_flats else _SHARP_NAMES
        return names[self.value]

    @property
    def is_black_key(self) -> bool:
        return _SHARP_NAMES[self.value].endswith("#")

    @classmethod
    def from_midi(cls, midi_note: int) -> PitchClass:
        """Extract pitch class from MIDI note number."""
        return cls(midi_note % 12)

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """Parse a pitch class from a string like 'C', 'C#', 'Db', 'D♭'."""
        name = _normalize_name(name)

        # Try sharp names first
        if name in _SHARP_NAMES:
            return cls(_SHARP_NAMES.index(name))

        # Try flat names
        if name in _FLAT_NAMES:
            return cls(_FLAT_NAMES.index(name))

        # Try enum names (C, Cs, D, Ds, etc.)
        name_upper = name.upper()
        for member in cls:
            if member.name.upper() == name_upper:
                return member

        raise ValueError(f"Unknown pitch class: {name}")


class Key(IntEnum):
    """
    The twelve keys exercises can be written in.

    Values line up with PitchClass. Members use sharp names internally but
    display_name follows key-signature convention (D♭, E♭, G♭, A♭, B♭).
    """

    C = 0
    Cs = 1
    D = 2
    Ds = 3
    E = 4
    F = 5
    Fs = 6
    G = 7
    Gs = 8
    A = 9
    As = 10
    B = 11

    @property
    def pitch_class(self) -> PitchClass:
        return PitchClass(self.value)

    @property
    def display_name(self) -> str:
        """Key-signature name: "C", "D♭", ..."""
        return _KEY_DISPLAY_NAMES[self.value]

    @property
    def full_display_name(self) -> str:
        """
        Display name with the sharp enharmonic for black keys.

        "D♭ (C#)" for black keys, just the letter for white keys.
        """
        if self.pitch_class.is_black_key:
            return f"{self.display_name} ({_SHARP_NAMES[self.value]})"
        return self.display_name

    @classmethod
    def parse(cls, name: str) -> Key:
        """Parse a key from 'C', 'F#', 'Bb', 'B♭' or an enum name like 'Fs'."""
        return cls(PitchClass.parse(name).value)

    def __str__(self) -> str:
        return self.display_name
