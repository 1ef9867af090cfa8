"""
Rendering pipeline - practice exercises to MIDI.

The pipeline:
    PracticeConfig → PracticeExercise (steps of MIDI notes)
    → MidiEvent list (notes placed in time)
    → MIDI File (in memory)
"""

from chuk_mcp_piano.compiler.midi import (
    DEFAULT_VELOCITY,
    TICKS_PER_BEAT,
    MidiEvent,
    beats_to_ticks,
    events_to_midi,
    exercise_to_events,
    exercise_to_midi,
)

__all__ = [
    "DEFAULT_VELOCITY",
    "TICKS_PER_BEAT",
    "MidiEvent",
    "beats_to_ticks",
    "events_to_midi",
    "exercise_to_events",
    "exercise_to_midi",
]
