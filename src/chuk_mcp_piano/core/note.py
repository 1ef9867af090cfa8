"""
Note primitives - MIDI numbers, notes and keyboard positions.

A note is a pitch class in a specific octave. Its MIDI number is
(octave + 1) * 12 + pitch class, so C4 = 60 and the valid domain 0..127
covers octaves -1 through 9. Conversions outside that domain raise
InvalidRangeError; nothing is clamped.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from chuk_mcp_piano.constants import (
    DEFAULT_OCTAVE,
    MIDI_NOTE_MAX,
    MIDI_NOTE_MIN,
    SEMITONES_PER_OCTAVE,
    ErrorMessages,
)

from .errors import InvalidRangeError
from .pitch import Key, PitchClass


class Accidental(str, Enum):
    """Accidental attached to a natural letter on the keyboard."""

    NATURAL = "natural"
    SHARP = "sharp"
    FLAT = "flat"


class NaturalNote(str, Enum):
    """The seven white-key letters."""

    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"
    A = "A"
    B = "B"


_NATURAL_OFFSETS = MappingProxyType(
    {
        NaturalNote.C: 0,
        NaturalNote.D: 2,
        NaturalNote.E: 4,
        NaturalNote.F: 5,
        NaturalNote.G: 7,
        NaturalNote.A: 9,
        NaturalNote.B: 11,
    }
)

_ACCIDENTAL_OFFSETS = MappingProxyType(
    {
        Accidental.NATURAL: 0,
        Accidental.SHARP: 1,
        Accidental.FLAT: -1,
    }
)


def is_valid_midi(midi_number: int) -> bool:
    """True if the number lies in the MIDI note domain 0..127."""
    return MIDI_NOTE_MIN <= midi_number <= MIDI_NOTE_MAX


def ensure_midi_range(midi_number: int) -> int:
    """Return the number unchanged, or raise InvalidRangeError."""
    if not is_valid_midi(midi_number):
        raise InvalidRangeError(ErrorMessages.MIDI_OUT_OF_RANGE.format(midi=midi_number))
    return midi_number


@dataclass(frozen=True)
class NoteInfo:
    """
    Every representation of a single note.

    Returned by midi_to_note: the pitch class, its octave, the MIDI number
    and a display string like "C4" or "F#3".
    """

    note: PitchClass
    octave: int
    midi_number: int
    display_name: str


@dataclass(frozen=True)
class NotePosition:
    """
    A key on the keyboard widget: natural letter, accidental and octave.

    Flat positions are accepted on input; converting back from MIDI always
    yields the sharp spelling.
    """

    note: NaturalNote
    octave: int
    accidental: Accidental = Accidental.NATURAL

    def __str__(self) -> str:
        suffix = {Accidental.NATURAL: "", Accidental.SHARP: "#", Accidental.FLAT: "b"}
        return f"{self.note.value}{suffix[self.accidental]}{self.octave}"


def note_to_midi(note: PitchClass, octave: int) -> int:
    """
    Convert a pitch class and octave to a MIDI note number.

    Example: note_to_midi(PitchClass.C, 4) == 60

    Raises:
        InvalidRangeError: if the result falls outside 0..127
    """
    midi_number = (octave + 1) * SEMITONES_PER_OCTAVE + int(note)
    if not is_valid_midi(midi_number):
        raise InvalidRangeError(
            ErrorMessages.NOTE_OUT_OF_RANGE.format(
                note=PitchClass(int(note)).spell(), octave=octave, midi=midi_number
            )
        )
    return midi_number


def midi_to_note(midi_number: int) -> NoteInfo:
    """
    Convert a MIDI note number to its pitch class, octave and display name.

    Raises:
        InvalidRangeError: if the number falls outside 0..127
    """
    ensure_midi_range(midi_number)
    octave = midi_number // SEMITONES_PER_OCTAVE - 1
    note = PitchClass(midi_number % SEMITONES_PER_OCTAVE)
    return NoteInfo(
        note=note,
        octave=octave,
        midi_number=midi_number,
        display_name=note_display_name(note, octave),
    )


def note_display_name(note: PitchClass, octave: int) -> str:
    """Sharp name plus octave: "C4", "F#3", "C-1"."""
    return f"{note.spell()}{octave}"


def compact_note_name(midi_number: int) -> str:
    """
    Note name without octave, for tight spaces like key labels.

    Example: compact_note_name(61) == "C#"
    """
    return midi_to_note(midi_number).note.spell()


def key_to_midi(key: Key, octave: int = DEFAULT_OCTAVE) -> int:
    """MIDI number of a key's tonic in the given octave (C4 = 60, B4 = 71)."""
    return note_to_midi(key.pitch_class, octave)


def note_to_note_position(note: PitchClass, octave: int) -> NotePosition:
    """Map a pitch class to its keyboard position, using sharps for black keys."""
    name = note.spell()
    accidental = Accidental.SHARP if name.endswith("#") else Accidental.NATURAL
    return NotePosition(note=NaturalNote(name[0]), octave=octave, accidental=accidental)


def note_position_to_midi(position: NotePosition) -> int:
    """
    Convert a keyboard position to a MIDI number.

    Raises:
        InvalidRangeError: if the position lies outside 0..127 (e.g. Cb-1)
    """
    offset = _NATURAL_OFFSETS[position.note] + _ACCIDENTAL_OFFSETS[position.accidental]
    midi_number = (position.octave + 1) * SEMITONES_PER_OCTAVE + offset
    if not is_valid_midi(midi_number):
        raise InvalidRangeError(
            f"Calculated MIDI number {midi_number} is outside valid range (0-127) "
            f"for position {position}"
        )
    return midi_number


def midi_to_note_position(midi_number: int) -> NotePosition | None:
    """Keyboard position for a MIDI number, or None outside 0..127."""
    if not is_valid_midi(midi_number):
        return None
    info = midi_to_note(midi_number)
    return note_to_note_position(info.note, info.octave)
