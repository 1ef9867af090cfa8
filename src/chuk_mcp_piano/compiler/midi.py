"""
MIDI rendering - exercises to MIDI files.

This module turns a PracticeExercise into note events and the events into
an in-memory mido MidiFile. Nothing is written to disk; callers save the
file if they want one. Same exercise in, same MIDI out.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mido import Message, MetaMessage, MidiFile, MidiTrack

from chuk_mcp_piano.constants import DEFAULT_TEMPO_BPM, MIDI_NOTE_MAX, MIDI_NOTE_MIN

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chuk_mcp_piano.models.practice import PracticeExercise


# Standard ticks per beat (quarter note)
TICKS_PER_BEAT = 480

DEFAULT_VELOCITY = 80

# Notes are released slightly early so repeated pitches re-articulate
ARTICULATION = 0.9


@dataclass(frozen=True)
class MidiEvent:
    """
    A single MIDI note event.

    All times are in ticks (absolute from start of track).
    """

    pitch: int  # MIDI note number (0-127)
    start_ticks: int  # Absolute start time in ticks
    duration_ticks: int  # Duration in ticks
    velocity: int = DEFAULT_VELOCITY  # 0-127
    channel: int = 0  # 0-15

    def __post_init__(self) -> None:
        """Validate MIDI ranges."""
        if not MIDI_NOTE_MIN <= self.pitch <= MIDI_NOTE_MAX:
            raise ValueError(f"Pitch must be 0-127, got {self.pitch}")
        if not 0 <= self.velocity <= 127:
            raise ValueError(f"Velocity must be 0-127, got {self.velocity}")
        if not 0 <= self.channel <= 15:
            raise ValueError(f"Channel must be 0-15, got {self.channel}")
        if self.start_ticks < 0:
            raise ValueError(f"Start ticks must be >= 0, got {self.start_ticks}")
        if self.duration_ticks < 0:
            raise ValueError(f"Duration ticks must be >= 0, got {self.duration_ticks}")


def beats_to_ticks(beats: float, ticks_per_beat: int = TICKS_PER_BEAT) -> int:
    """Convert a beat position to ticks."""
    return int(beats * ticks_per_beat)


def events_to_midi(
    events: Sequence[MidiEvent],
    tempo_bpm: int = DEFAULT_TEMPO_BPM,
    ticks_per_beat: int = TICKS_PER_BEAT,
    track_name: str | None = None,
) -> MidiFile:
    """
    Convert a sequence of MidiEvents to a single-track MidiFile.

    Args:
        events: Sequence of MidiEvent objects
        tempo_bpm: Tempo in beats per minute
        ticks_per_beat: Resolution (default 480)
        track_name: Optional track name meta message

    Returns:
        A mido MidiFile ready to be saved
    """
    if tempo_bpm <= 0:
        raise ValueError(f"Tempo must be positive, got {tempo_bpm}")

    mid = MidiFile(ticks_per_beat=ticks_per_beat)
    track = MidiTrack()
    mid.tracks.append(track)

    if track_name:
        track.append(MetaMessage("track_name", name=track_name, time=0))

    # Set tempo (microseconds per beat)
    tempo_us = int(60_000_000 / tempo_bpm)
    track.append(MetaMessage("set_tempo", tempo=tempo_us, time=0))

    messages: list[tuple[int, Message]] = []
    for event in events:
        messages.append(
            (
                event.start_ticks,
                Message(
                    "note_on",
                    channel=event.channel,
                    note=event.pitch,
                    velocity=event.velocity,
                    time=0,
                ),
            )
        )
        messages.append(
            (
                event.start_ticks + event.duration_ticks,
                Message("note_off", channel=event.channel, note=event.pitch, velocity=0, time=0),
            )
        )

    # note_off before note_on at the same tick
    messages.sort(key=lambda x: (x[0], x[1].type != "note_off"))

    # Convert to delta times
    current_time = 0
    for abs_time, msg in messages:
        msg.time = abs_time - current_time
        track.append(msg)
        current_time = abs_time

    track.append(MetaMessage("end_of_track", time=0))
    return mid


def exercise_to_events(
    exercise: PracticeExercise,
    beats_per_step: float = 1.0,
    velocity: int = DEFAULT_VELOCITY,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> list[MidiEvent]:
    """
    Lay the steps of an exercise out in time.

    Every step gets beats_per_step beats. Its notes all start on the step's
    first tick: a single note for sequential steps, the whole block for
    simultaneous and paired steps.
    """
    if beats_per_step <= 0:
        raise ValueError(f"Beats per step must be positive, got {beats_per_step}")

    step_ticks = beats_to_ticks(beats_per_step, ticks_per_beat)
    duration = max(1, int(step_ticks * ARTICULATION))
    return [
        MidiEvent(
            pitch=note,
            start_ticks=i * step_ticks,
            duration_ticks=duration,
            velocity=velocity,
        )
        for i, step in enumerate(exercise.steps)
        for note in step.notes
    ]


def exercise_to_midi(
    exercise: PracticeExercise,
    tempo_bpm: int = DEFAULT_TEMPO_BPM,
    beats_per_step: float = 1.0,
    velocity: int = DEFAULT_VELOCITY,
) -> MidiFile:
    """
    Render an exercise as a playable reference MidiFile.

    Example:
        midi = exercise_to_midi(exercise, tempo_bpm=72)
        midi.save("c_major_scale.mid")
    """
    events = exercise_to_events(exercise, beats_per_step=beats_per_step, velocity=velocity)
    return events_to_midi(events, tempo_bpm=tempo_bpm, track_name=exercise.name)
