"""
Diatonic harmony - which chord quality sits on each scale degree.

Only major and natural minor have tables. Aeolian is the same step pattern
as natural minor and shares its tables; other modes are rejected instead of
guessing a rule.
"""

from __future__ import annotations

from types import MappingProxyType

from chuk_mcp_piano.constants import ErrorMessages

from .chord import ChordInfo, ChordType, build_chord
from .errors import UnsupportedScaleError
from .pitch import Key
from .scale import ScaleType, get_scale

_MAJOR_TRIADS = (
    ChordType.MAJOR,
    ChordType.MINOR,
    ChordType.MINOR,
    ChordType.MAJOR,
    ChordType.MAJOR,
    ChordType.MINOR,
    ChordType.DIMINISHED,
)
_MINOR_TRIADS = (
    ChordType.MINOR,
    ChordType.DIMINISHED,
    ChordType.MAJOR,
    ChordType.MINOR,
    ChordType.MINOR,
    ChordType.MAJOR,
    ChordType.MAJOR,
)
_MAJOR_SEVENTHS = (
    ChordType.MAJOR_7,
    ChordType.MINOR_7,
    ChordType.MINOR_7,
    ChordType.MAJOR_7,
    ChordType.DOMINANT_7,
    ChordType.MINOR_7,
    ChordType.HALF_DIMINISHED_7,
)
_MINOR_SEVENTHS = (
    ChordType.MINOR_7,
    ChordType.HALF_DIMINISHED_7,
    ChordType.MAJOR_7,
    ChordType.MINOR_7,
    ChordType.MINOR_7,
    ChordType.MAJOR_7,
    ChordType.DOMINANT_7,
)

DIATONIC_TRIADS = MappingProxyType(
    {
        ScaleType.MAJOR: _MAJOR_TRIADS,
        ScaleType.MINOR: _MINOR_TRIADS,
        ScaleType.AEOLIAN: _MINOR_TRIADS,
    }
)

DIATONIC_SEVENTHS = MappingProxyType(
    {
        ScaleType.MAJOR: _MAJOR_SEVENTHS,
        ScaleType.MINOR: _MINOR_SEVENTHS,
        ScaleType.AEOLIAN: _MINOR_SEVENTHS,
    }
)

SUPPORTED_HARMONY_SCALES: tuple[ScaleType, ...] = tuple(DIATONIC_TRIADS)

_NUMERALS = ("I", "II", "III", "IV", "V", "VI", "VII")

# Qualities written in lower case
_LOWER_CASE = frozenset(
    {
        ChordType.MINOR,
        ChordType.DIMINISHED,
        ChordType.MINOR_7,
        ChordType.HALF_DIMINISHED_7,
        ChordType.DIMINISHED_7,
        ChordType.MINOR_MAJOR_7,
    }
)

_NUMERAL_SUFFIXES = MappingProxyType(
    {
        ChordType.MAJOR: "",
        ChordType.MINOR: "",
        ChordType.DIMINISHED: "°",
        ChordType.AUGMENTED: "+",
        ChordType.MAJOR_7: "maj7",
        ChordType.DOMINANT_7: "7",
        ChordType.MINOR_7: "7",
        ChordType.HALF_DIMINISHED_7: "ø7",
        ChordType.DIMINISHED_7: "°7",
        ChordType.MINOR_MAJOR_7: "(maj7)",
        ChordType.AUGMENTED_7: "+7",
    }
)


def _lookup(table: MappingProxyType, scale_type: ScaleType) -> tuple[ChordType, ...]:
    try:
        return table[scale_type]
    except KeyError:
        raise UnsupportedScaleError(
            ErrorMessages.UNSUPPORTED_SCALE.format(scale=scale_type.value)
        ) from None


def diatonic_triad_types(scale_type: ScaleType) -> tuple[ChordType, ...]:
    """
    Triad quality for each of the seven degrees.

    Raises:
        UnsupportedScaleError: for modes other than major, minor and aeolian
    """
    return _lookup(DIATONIC_TRIADS, scale_type)


def diatonic_seventh_types(scale_type: ScaleType) -> tuple[ChordType, ...]:
    """
    Seventh chord quality for each of the seven degrees.

    Raises:
        UnsupportedScaleError: for modes other than major, minor and aeolian
    """
    return _lookup(DIATONIC_SEVENTHS, scale_type)


def roman_numeral(degree: int, chord_type: ChordType) -> str:
    """
    Roman numeral for a chord on a 1-based scale degree.

    Case indicates quality: roman_numeral(2, MINOR) == "ii",
    roman_numeral(7, HALF_DIMINISHED_7) == "viiø7".
    """
    if not 1 <= degree <= len(_NUMERALS):
        raise ValueError(f"Scale degree must be 1-7, got {degree}")
    base = _NUMERALS[degree - 1]
    if chord_type in _LOWER_CASE:
        base = base.lower()
    return base + _NUMERAL_SUFFIXES[chord_type]


def diatonic_chords(
    key: Key,
    scale_type: ScaleType,
    sevenths: bool = False,
) -> list[tuple[str, ChordInfo]]:
    """
    Root-position chords built on each degree of a key.

    Returns (roman numeral, chord) pairs in degree order.
    """
    if sevenths:
        chord_types = diatonic_seventh_types(scale_type)
    else:
        chord_types = diatonic_triad_types(scale_type)
    roots = get_scale(key, scale_type).get_notes()[:-1]
    return [
        (roman_numeral(degree, chord_type), build_chord(root, chord_type))
        for degree, (root, chord_type) in enumerate(zip(roots, chord_types), start=1)
    ]
