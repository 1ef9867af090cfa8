#!/usr/bin/env python3
"""
Example: Render practice exercises to MIDI files.

This demonstrates the generation pipeline end to end: a configuration goes
through its strategy into a PracticeExercise, and the exercise is rendered
as a reference MIDI file you can play along with.

Usage:
    python examples/generate_exercise_midi.py
    # Creates: examples/output/*.mid
"""

from pathlib import Path

from chuk_mcp_piano.compiler.midi import exercise_to_midi
from chuk_mcp_piano.constants import HandSelection
from chuk_mcp_piano.core import ArpeggioOctaves, ArpeggioType, Key, PitchClass
from chuk_mcp_piano.models import (
    ArpeggioConfig,
    ChordProgressionConfig,
    ChordsByKeyConfig,
    ScaleConfig,
)
from chuk_mcp_piano.practice import StrategyFactory


def main() -> None:
    """Generate example MIDI files."""
    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)

    configs = {
        # Example 1: Scale, both hands in parallel octaves
        "d_major_scale.mid": ScaleConfig(key=Key.D, hand=HandSelection.BOTH),
        # Example 2: Two-octave arpeggio
        "a_minor_arpeggio.mid": ArpeggioConfig(
            root=PitchClass.A,
            arpeggio_type=ArpeggioType.MINOR,
            octaves=ArpeggioOctaves.TWO,
        ),
        # Example 3: Smooth inversion walk, B major wraps past C and lifts
        "b_major_chords.mid": ChordsByKeyConfig(key=Key.B),
        # Example 4: The pop progression in G, both hands
        "pop_progression_g.mid": ChordProgressionConfig(
            key=Key.G,
            progression_name="I - V - vi - IV",
            hand=HandSelection.BOTH,
        ),
    }

    for filename, config in configs.items():
        exercise = StrategyFactory.create_exercise(config)
        print(f"Generating {filename} ({exercise.name}, {len(exercise)} steps)...")

        # Chords get two beats each so the hand has time to move
        beats = 1.0 if config.mode.value in ("scales", "arpeggios") else 2.0
        midi = exercise_to_midi(exercise, tempo_bpm=80, beats_per_step=beats)
        midi.save(str(output_dir / filename))
        print(f"  Created: {output_dir / filename}")

    print("\nDone! Open the MIDI files in your DAW to hear them.")


if __name__ == "__main__":
    main()
