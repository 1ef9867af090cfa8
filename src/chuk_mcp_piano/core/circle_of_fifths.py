"""
Circle of fifths navigation.

Keys ordered by ascending perfect fifths (7 semitones). Practicing a pattern
"around the circle" walks all twelve keys before returning home.
"""

from __future__ import annotations

from .pitch import Key

# C → G → D → A → E → B → F#/G♭ → C#/D♭ → G#/A♭ → D#/E♭ → A#/B♭ → F → C
CIRCLE_OF_FIFTHS: tuple[Key, ...] = (
    Key.C,
    Key.G,
    Key.D,
    Key.A,
    Key.E,
    Key.B,
    Key.Fs,
    Key.Cs,
    Key.Gs,
    Key.Ds,
    Key.As,
    Key.F,
)


def next_key(current: Key) -> Key:
    """Key a perfect fifth above. F wraps to C."""
    index = CIRCLE_OF_FIFTHS.index(current)
    return CIRCLE_OF_FIFTHS[(index + 1) % len(CIRCLE_OF_FIFTHS)]


def previous_key(current: Key) -> Key:
    """Key a perfect fifth below. C wraps to F."""
    index = CIRCLE_OF_FIFTHS.index(current)
    return CIRCLE_OF_FIFTHS[(index - 1) % len(CIRCLE_OF_FIFTHS)]


def keys_from(start: Key) -> list[Key]:
    """All twelve keys in circle order beginning at start."""
    index = CIRCLE_OF_FIFTHS.index(start)
    return [*CIRCLE_OF_FIFTHS[index:], *CIRCLE_OF_FIFTHS[:index]]
