"""
Practice strategies - turn a configuration into a PracticeExercise.

One strategy per practice mode. Melodic material (scales, arpeggios) becomes
one SEQUENTIAL step per note, or one PAIRED step per note pair when both
hands play. Harmonic material (every chord mode) becomes one SIMULTANEOUS
step per chord.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from chuk_mcp_piano.constants import HandSelection
from chuk_mcp_piano.core.arpeggio import get_arpeggio
from chuk_mcp_piano.core.chord import ChordInfo, voicing_for_hand
from chuk_mcp_piano.core.chord_by_type import chord_type_exercise
from chuk_mcp_piano.core.named_progressions import get_progression_by_name
from chuk_mcp_piano.core.progression import (
    smooth_key_seventh_progression,
    smooth_key_triad_progression,
    smooth_progression_voicings,
)
from chuk_mcp_piano.core.scale import get_scale
from chuk_mcp_piano.models.practice import (
    ArpeggioConfig,
    ChordProgressionConfig,
    ChordsByKeyConfig,
    ChordsByTypeConfig,
    PracticeConfig,
    PracticeExercise,
    PracticeMode,
    PracticeStep,
    ScaleConfig,
    StepType,
)

logger = logging.getLogger(__name__)

_HAND_LABELS = {
    HandSelection.LEFT: "Left Hand",
    HandSelection.RIGHT: "Right Hand",
    HandSelection.BOTH: "Both Hands",
}


def _melodic_steps(
    sequence: list[int], hand: HandSelection, step_metadata: list[dict[str, Any]]
) -> list[PracticeStep]:
    """
    Split a hand sequence into steps.

    Both-hands sequences arrive interleaved [l0, r0, l1, r1, ...]; each pair
    becomes one PAIRED step.
    """
    if hand == HandSelection.BOTH:
        pairs = [sequence[i : i + 2] for i in range(0, len(sequence), 2)]
        return [
            PracticeStep(notes=pair, step_type=StepType.PAIRED, metadata=meta)
            for pair, meta in zip(pairs, step_metadata)
        ]
    return [
        PracticeStep(notes=[note], step_type=StepType.SEQUENTIAL, metadata=meta)
        for note, meta in zip(sequence, step_metadata)
    ]


def _chord_metadata(chord: ChordInfo, position: int, hand: HandSelection) -> dict[str, Any]:
    return {
        "chord_name": chord.name,
        "root_note": chord.root.spell(),
        "chord_type": chord.chord_type.value,
        "inversion": chord.inversion.display_name,
        "position": position,
        "display_name": chord.name,
        "hand": hand.value,
    }


class PracticeStrategy(ABC):
    """Generates the exercise for one practice mode."""

    mode: ClassVar[PracticeMode]

    @abstractmethod
    def create_exercise(self, config: Any) -> PracticeExercise:
        """Build the exercise described by config."""


class ScalesStrategy(PracticeStrategy):
    mode = PracticeMode.SCALES

    def create_exercise(self, config: ScaleConfig) -> PracticeExercise:
        scale = get_scale(config.key, config.scale_type)
        sequence = scale.get_hand_sequence(config.octave, config.hand)

        # 1..8 up, 7..1 down
        ascending = list(range(1, len(scale.intervals) + 2))
        degrees = ascending + ascending[-2::-1]
        metadata = [{"hand": config.hand.value, "degree": degree} for degree in degrees]

        return PracticeExercise(
            mode=self.mode,
            name=scale.name,
            steps=_melodic_steps(sequence, config.hand, metadata),
            metadata={
                "exercise_type": "scale",
                "key": config.key.display_name,
                "scale_type": config.scale_type.value,
                "hand": config.hand.value,
                "octave": config.octave,
            },
        )


class ArpeggiosStrategy(PracticeStrategy):
    mode = PracticeMode.ARPEGGIOS

    def create_exercise(self, config: ArpeggioConfig) -> PracticeExercise:
        arpeggio = get_arpeggio(config.root, config.arpeggio_type, config.octaves)
        sequence = arpeggio.get_hand_sequence(config.octave, config.hand)
        length = len(arpeggio.get_full_arpeggio_sequence(config.octave))
        label = _HAND_LABELS[config.hand]
        metadata = [
            {
                "hand": config.hand.value,
                "position": i + 1,
                "display_name": f"Note {i + 1} ({label})",
            }
            for i in range(length)
        ]

        return PracticeExercise(
            mode=self.mode,
            name=arpeggio.name,
            steps=_melodic_steps(sequence, config.hand, metadata),
            metadata={
                "exercise_type": "arpeggio",
                "root_note": config.root.spell(),
                "arpeggio_type": config.arpeggio_type.value,
                "octaves": config.octaves.value,
                "hand": config.hand.value,
                "octave": config.octave,
            },
        )


class ChordsByKeyStrategy(PracticeStrategy):
    """Smooth inversion walk through every diatonic chord of a key."""

    mode = PracticeMode.CHORDS_BY_KEY

    def create_exercise(self, config: ChordsByKeyConfig) -> PracticeExercise:
        if config.sevenths:
            progression = smooth_key_seventh_progression(config.key, config.scale_type)
        else:
            progression = smooth_key_triad_progression(config.key, config.scale_type)
        voicings = smooth_progression_voicings(progression, config.octave)

        steps = []
        for i, (chord, voicing) in enumerate(zip(progression, voicings)):
            metadata = _chord_metadata(chord, i + 1, config.hand)
            metadata["roman_numeral"] = progression.numeral_at(i)
            steps.append(
                PracticeStep(
                    notes=voicing_for_hand(voicing, config.hand),
                    step_type=StepType.SIMULTANEOUS,
                    metadata=metadata,
                )
            )

        kind = "Seventh Chords" if config.sevenths else "Triads"
        return PracticeExercise(
            mode=self.mode,
            name=f"{config.key.display_name} {config.scale_type.display_name} {kind}",
            steps=steps,
            metadata={
                "exercise_type": "chords_by_key",
                "key": config.key.display_name,
                "scale_type": config.scale_type.value,
                "sevenths": config.sevenths,
                "hand": config.hand.value,
                "octave": config.octave,
            },
        )


class ChordsByTypeStrategy(PracticeStrategy):
    """One chord type planed through all twelve roots."""

    mode = PracticeMode.CHORDS_BY_TYPE

    def create_exercise(self, config: ChordsByTypeConfig) -> PracticeExercise:
        drill = chord_type_exercise(config.chord_type, config.include_inversions)
        steps = [
            PracticeStep(
                notes=chord.get_midi_notes_for_hand(config.octave, config.hand),
                step_type=StepType.SIMULTANEOUS,
                metadata=_chord_metadata(chord, i + 1, config.hand),
            )
            for i, chord in enumerate(drill.generate_chord_sequence())
        ]
        return PracticeExercise(
            mode=self.mode,
            name=drill.name,
            steps=steps,
            metadata={
                "exercise_type": "chords_by_type",
                "chord_type": config.chord_type.value,
                "include_inversions": config.include_inversions,
                "hand": config.hand.value,
                "octave": config.octave,
            },
        )


class ChordProgressionStrategy(PracticeStrategy):
    """A named progression, one block chord per step."""

    mode = PracticeMode.CHORD_PROGRESSIONS

    def create_exercise(self, config: ChordProgressionConfig) -> PracticeExercise:
        named = get_progression_by_name(config.progression_name)
        steps = []
        for i, chord in enumerate(named.generate_chords(config.key)):
            steps.append(
                PracticeStep(
                    notes=voicing_for_hand(chord.get_midi_notes(config.octave), config.hand),
                    step_type=StepType.SIMULTANEOUS,
                    metadata={
                        "chord_name": chord.name,
                        "roman_numeral": chord.roman_numeral,
                        "chord_type": chord.chord_type.value,
                        "position": i + 1,
                        "display_name": f"{chord.roman_numeral} ({chord.name})",
                        "hand": config.hand.value,
                    },
                )
            )
        return PracticeExercise(
            mode=self.mode,
            name=f"{named.name} in {config.key.display_name}",
            steps=steps,
            metadata={
                "exercise_type": "chord_progressions",
                "key": config.key.display_name,
                "progression": named.name,
                "difficulty": named.difficulty.value,
                "hand": config.hand.value,
                "octave": config.octave,
            },
        )


class StrategyFactory:
    """
    Maps practice modes to strategies.

    New modes can be registered at runtime; registering an existing mode
    replaces its strategy.
    """

    _strategies: ClassVar[dict[PracticeMode, type[PracticeStrategy]]] = {
        PracticeMode.SCALES: ScalesStrategy,
        PracticeMode.ARPEGGIOS: ArpeggiosStrategy,
        PracticeMode.CHORDS_BY_KEY: ChordsByKeyStrategy,
        PracticeMode.CHORDS_BY_TYPE: ChordsByTypeStrategy,
        PracticeMode.CHORD_PROGRESSIONS: ChordProgressionStrategy,
    }

    @classmethod
    def register(cls, mode: PracticeMode, strategy: type[PracticeStrategy]) -> None:
        cls._strategies[mode] = strategy

    @classmethod
    def create(cls, mode: PracticeMode) -> PracticeStrategy:
        """
        Instantiate the strategy for a mode.

        Raises:
            ValueError: if no strategy is registered for the mode
        """
        try:
            return cls._strategies[mode]()
        except KeyError:
            raise ValueError(f"No strategy registered for mode: {mode}") from None

    @classmethod
    def available_modes(cls) -> list[PracticeMode]:
        return list(cls._strategies)

    @classmethod
    def create_exercise(cls, config: PracticeConfig) -> PracticeExercise:
        """Generate the exercise for any configuration."""
        exercise = cls.create(config.mode).create_exercise(config)
        logger.debug(
            "Generated %s exercise '%s': %d steps",
            config.mode.value,
            exercise.name,
            len(exercise),
        )
        return exercise
