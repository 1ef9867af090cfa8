"""
MIDI export tests.

Exercises rendered to MIDI must reload cleanly and come out byte-identical
every time.
"""

from pathlib import Path

import pytest
from mido import MidiFile

from chuk_mcp_piano.compiler.midi import (
    DEFAULT_VELOCITY,
    TICKS_PER_BEAT,
    MidiEvent,
    beats_to_ticks,
    events_to_midi,
    exercise_to_events,
    exercise_to_midi,
)
from chuk_mcp_piano.models import PracticeExercise


class TestMidiEvent:
    """Test MidiEvent dataclass."""

    def test_create_valid_event(self) -> None:
        """Can create a valid MIDI event."""
        event = MidiEvent(pitch=60, start_ticks=0, duration_ticks=480)
        assert event.pitch == 60
        assert event.velocity == DEFAULT_VELOCITY
        assert event.channel == 0

    def test_event_validation_pitch_range(self) -> None:
        """Pitch must be 0-127."""
        with pytest.raises(ValueError, match="Pitch must be 0-127"):
            MidiEvent(pitch=128, start_ticks=0, duration_ticks=480)

        with pytest.raises(ValueError, match="Pitch must be 0-127"):
            MidiEvent(pitch=-1, start_ticks=0, duration_ticks=480)

    def test_event_validation_velocity_range(self) -> None:
        """Velocity must be 0-127."""
        with pytest.raises(ValueError, match="Velocity must be 0-127"):
            MidiEvent(pitch=60, start_ticks=0, duration_ticks=480, velocity=128)

    def test_event_validation_channel_range(self) -> None:
        """Channel must be 0-15."""
        with pytest.raises(ValueError, match="Channel must be 0-15"):
            MidiEvent(pitch=60, start_ticks=0, duration_ticks=480, channel=16)

    def test_event_validation_times(self) -> None:
        """Times cannot be negative."""
        with pytest.raises(ValueError, match="Start ticks"):
            MidiEvent(pitch=60, start_ticks=-1, duration_ticks=480)
        with pytest.raises(ValueError, match="Duration ticks"):
            MidiEvent(pitch=60, start_ticks=0, duration_ticks=-1)


class TestEventsToMidi:
    """Test the events_to_midi function."""

    def test_empty_events(self) -> None:
        """Can create MIDI file with no events."""
        mid = events_to_midi([])
        assert len(mid.tracks) == 1
        assert mid.ticks_per_beat == TICKS_PER_BEAT

    def test_single_note(self) -> None:
        """Can create MIDI file with a single note."""
        mid = events_to_midi([MidiEvent(pitch=60, start_ticks=0, duration_ticks=480)])

        note_messages = [msg for msg in mid.tracks[0] if msg.type in ("note_on", "note_off")]
        assert [msg.type for msg in note_messages] == ["note_on", "note_off"]
        assert note_messages[1].time == 480

    def test_release_before_next_attack(self) -> None:
        """A note ending on the tick another starts is released first."""
        events = [
            MidiEvent(pitch=60, start_ticks=0, duration_ticks=480),
            MidiEvent(pitch=60, start_ticks=480, duration_ticks=480),
        ]
        mid = events_to_midi(events)

        note_messages = [msg for msg in mid.tracks[0] if msg.type in ("note_on", "note_off")]
        assert [msg.type for msg in note_messages] == [
            "note_on",
            "note_off",
            "note_on",
            "note_off",
        ]

    def test_tempo_setting(self) -> None:
        """Tempo is correctly set in the MIDI file."""
        mid = events_to_midi([], tempo_bpm=140)

        tempo_msgs = [msg for msg in mid.tracks[0] if msg.type == "set_tempo"]
        assert len(tempo_msgs) == 1
        assert tempo_msgs[0].tempo == int(60_000_000 / 140)

    def test_invalid_tempo(self) -> None:
        with pytest.raises(ValueError, match="Tempo must be positive"):
            events_to_midi([], tempo_bpm=0)

    def test_track_name(self) -> None:
        mid = events_to_midi([], track_name="C Major (Ionian)")
        names = [msg.name for msg in mid.tracks[0] if msg.type == "track_name"]
        assert names == ["C Major (Ionian)"]


class TestExerciseToMidi:
    """Test exercise rendering."""

    def test_scale_one_note_per_beat(self, c_major_scale: PracticeExercise) -> None:
        events = exercise_to_events(c_major_scale)
        assert len(events) == 15
        assert [e.start_ticks for e in events[:3]] == [0, 480, 960]
        assert [e.pitch for e in events[:3]] == [60, 62, 64]
        assert events[0].duration_ticks == 432

    def test_chord_notes_share_a_start(self, c_major_chords: PracticeExercise) -> None:
        events = exercise_to_events(c_major_chords, beats_per_step=2.0)
        assert len(events) == 28 * 3
        assert {e.start_ticks for e in events[:3]} == {0}
        assert events[3].start_ticks == beats_to_ticks(2.0)

    def test_invalid_beats_per_step(self, c_major_scale: PracticeExercise) -> None:
        with pytest.raises(ValueError, match="Beats per step"):
            exercise_to_events(c_major_scale, beats_per_step=0)

    def test_can_save_and_reload(
        self, c_major_scale: PracticeExercise, temp_midi_path: Path
    ) -> None:
        """MIDI file can be saved and reloaded."""
        mid = exercise_to_midi(c_major_scale, tempo_bpm=72)
        mid.save(str(temp_midi_path))

        loaded = MidiFile(str(temp_midi_path))
        note_ons = [msg for msg in loaded.tracks[0] if msg.type == "note_on" and msg.velocity]
        assert [msg.note for msg in note_ons] == [step.notes[0] for step in c_major_scale.steps]

    def test_velocity(self, c_major_scale: PracticeExercise) -> None:
        mid = exercise_to_midi(c_major_scale, velocity=100)
        note_ons = [msg for msg in mid.tracks[0] if msg.type == "note_on"]
        assert {msg.velocity for msg in note_ons} == {100}


class TestHelperFunctions:
    """Test helper functions."""

    def test_beats_to_ticks(self) -> None:
        """Beat to tick conversion."""
        assert beats_to_ticks(0) == 0
        assert beats_to_ticks(1) == TICKS_PER_BEAT
        assert beats_to_ticks(0.5) == TICKS_PER_BEAT // 2
        assert beats_to_ticks(1, ticks_per_beat=96) == 96


class TestDeterminism:
    """Verify deterministic output."""

    def test_same_exercise_same_output(
        self, c_major_chords: PracticeExercise, temp_midi_path: Path
    ) -> None:
        """Same exercise should produce identical MIDI files."""
        path1 = temp_midi_path.parent / "test1.mid"
        path2 = temp_midi_path.parent / "test2.mid"

        exercise_to_midi(c_major_chords).save(str(path1))
        exercise_to_midi(c_major_chords).save(str(path2))

        assert path1.read_bytes() == path2.read_bytes()
