"""
Constants and enums for the practice engine.

No magic strings - use enums for constrained values.
"""

from enum import Enum

# MIDI note domain (C-1 .. G9)
MIDI_NOTE_MIN = 0
MIDI_NOTE_MAX = 127

SEMITONES_PER_OCTAVE = 12

# Octave containing middle C (C4 = 60)
DEFAULT_OCTAVE = 4

# Practical octave range accepted by exercise configurations
MIN_PRACTICE_OCTAVE = 0
MAX_PRACTICE_OCTAVE = 8

DEFAULT_TEMPO_BPM = 90

DEFAULT_HTTP_PORT = 8000


class Transport(str, Enum):
    """How the MCP server talks to its client."""

    STDIO = "stdio"
    HTTP = "http"


class HandSelection(str, Enum):
    """
    Which hand(s) an exercise is written for.

    Left hand plays one octave below the requested octave, right hand at it.
    How "both" combines the two depends on the engine: chords stack them into
    one simultaneous block, scales and arpeggios interleave them as pairs.
    """

    LEFT = "left"
    RIGHT = "right"
    BOTH = "both"


class ErrorMessages:
    """Standardized error messages."""

    MIDI_OUT_OF_RANGE = "MIDI number must be between 0 and 127, got: {midi}"
    NOTE_OUT_OF_RANGE = "{note}{octave} is outside the MIDI range (0-127), got: {midi}"
    INVALID_INVERSION = "{inversion} inversion is not valid for {chord_type} chords"
    UNSUPPORTED_SCALE = (
        "Diatonic chord qualities are only defined for major and natural minor, got: {scale}"
    )
    UNKNOWN_PROGRESSION = "Unknown chord progression: '{name}'."
