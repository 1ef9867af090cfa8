"""
Error signals raised by the theory engine.

All of them are ValueErrors so callers that only care about bad input can
catch one type.
"""

from __future__ import annotations


class InvalidRangeError(ValueError):
    """A MIDI number (or a note that maps to one) falls outside 0..127."""


class InvalidInversionError(ValueError):
    """An inversion was requested that the chord's arity does not have."""


class UnsupportedScaleError(ValueError):
    """Diatonic harmony was requested for a mode with no quality table."""
