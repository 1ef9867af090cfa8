"""
Practice models - exercises, steps and per-mode configuration.

A PracticeExercise is an ordered list of PracticeSteps. Each step holds the
MIDI notes the student must play and how to play them:
- SEQUENTIAL: one note, played alone
- SIMULTANEOUS: a chord block, all notes together
- PAIRED: one note per hand, played together

Configurations describe what to generate. They validate their own fields, so
a bad octave or an unknown progression fails here rather than deep inside
the generators.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, Field, TypeAdapter, field_validator

from chuk_mcp_piano.constants import (
    DEFAULT_OCTAVE,
    MAX_PRACTICE_OCTAVE,
    MIDI_NOTE_MAX,
    MIDI_NOTE_MIN,
    MIN_PRACTICE_OCTAVE,
    ErrorMessages,
    HandSelection,
)
from chuk_mcp_piano.core.arpeggio import ArpeggioOctaves, ArpeggioType
from chuk_mcp_piano.core.chord import ChordType
from chuk_mcp_piano.core.harmony import SUPPORTED_HARMONY_SCALES
from chuk_mcp_piano.core.named_progressions import (
    DEFAULT_PROGRESSION_NAME,
    get_progression_by_name,
)
from chuk_mcp_piano.core.pitch import Key, PitchClass
from chuk_mcp_piano.core.scale import ScaleType


class PracticeMode(str, Enum):
    """The five kinds of exercise."""

    SCALES = "scales"
    ARPEGGIOS = "arpeggios"
    CHORDS_BY_KEY = "chords_by_key"
    CHORDS_BY_TYPE = "chords_by_type"
    CHORD_PROGRESSIONS = "chord_progressions"


class StepType(str, Enum):
    """How the notes of a step are played."""

    SIMULTANEOUS = "simultaneous"
    SEQUENTIAL = "sequential"
    PAIRED = "paired"


class PracticeStep(BaseModel):
    """One thing the student plays before moving on."""

    notes: list[int] = Field(..., min_length=1, description="MIDI notes to play")
    step_type: StepType = Field(..., description="How the notes are played")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Display data")

    model_config = {"frozen": True}

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v: list[int]) -> list[int]:
        """Every note must be a valid MIDI number."""
        for note in v:
            if not MIDI_NOTE_MIN <= note <= MIDI_NOTE_MAX:
                raise ValueError(ErrorMessages.MIDI_OUT_OF_RANGE.format(midi=note))
        return v


class PracticeExercise(BaseModel):
    """A complete generated exercise."""

    mode: PracticeMode = Field(..., description="Exercise kind")
    name: str = Field(..., description="Human readable title")
    steps: list[PracticeStep] = Field(..., min_length=1, description="Ordered steps")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Exercise data")

    model_config = {"frozen": True}

    def __len__(self) -> int:
        return len(self.steps)

    def all_notes(self) -> list[int]:
        """Every note of every step, in order."""
        return [note for step in self.steps for note in step.notes]

    def note_range(self) -> tuple[int, int]:
        """Lowest and highest note of the exercise."""
        notes = self.all_notes()
        return min(notes), max(notes)


def _parse_key(v: Any) -> Any:
    if isinstance(v, str):
        return Key.parse(v)
    return v


def _parse_pitch_class(v: Any) -> Any:
    if isinstance(v, str):
        return PitchClass.parse(v)
    return v


# Accept "C", "F#", "Bb" or "B♭" as well as enum members and ints
KeyName = Annotated[Key, BeforeValidator(_parse_key)]
PitchClassName = Annotated[PitchClass, BeforeValidator(_parse_pitch_class)]


class _BaseConfig(BaseModel):
    hand: HandSelection = Field(HandSelection.RIGHT, description="Which hand(s) play")
    octave: int = Field(
        DEFAULT_OCTAVE,
        ge=MIN_PRACTICE_OCTAVE,
        le=MAX_PRACTICE_OCTAVE,
        description="Starting octave of the right hand (4 = middle C)",
    )

    model_config = {"frozen": True}


class ScaleConfig(_BaseConfig):
    """Scale up and down in one key."""

    mode: Literal[PracticeMode.SCALES] = PracticeMode.SCALES
    key: KeyName = Field(Key.C, description="Tonic")
    scale_type: ScaleType = Field(ScaleType.MAJOR, description="Mode of the scale")


class ArpeggioConfig(_BaseConfig):
    """Arpeggio on one root."""

    mode: Literal[PracticeMode.ARPEGGIOS] = PracticeMode.ARPEGGIOS
    root: PitchClassName = Field(PitchClass.C, description="Root note")
    arpeggio_type: ArpeggioType = Field(ArpeggioType.MAJOR, description="Chord quality")
    octaves: ArpeggioOctaves = Field(ArpeggioOctaves.ONE, description="Octaves climbed")


class ChordsByKeyConfig(_BaseConfig):
    """Every diatonic chord of a key through its inversions."""

    mode: Literal[PracticeMode.CHORDS_BY_KEY] = PracticeMode.CHORDS_BY_KEY
    key: KeyName = Field(Key.C, description="Tonic")
    scale_type: ScaleType = Field(ScaleType.MAJOR, description="Major or natural minor")
    sevenths: bool = Field(False, description="Use seventh chords instead of triads")

    @field_validator("scale_type")
    @classmethod
    def validate_scale_type(cls, v: ScaleType) -> ScaleType:
        """Diatonic chords are only defined for major and natural minor."""
        if v not in SUPPORTED_HARMONY_SCALES:
            raise ValueError(ErrorMessages.UNSUPPORTED_SCALE.format(scale=v.value))
        return v


class ChordsByTypeConfig(_BaseConfig):
    """One chord type through all twelve roots."""

    mode: Literal[PracticeMode.CHORDS_BY_TYPE] = PracticeMode.CHORDS_BY_TYPE
    chord_type: ChordType = Field(ChordType.MAJOR, description="Chord quality")
    include_inversions: bool = Field(True, description="Walk every inversion per root")


class ChordProgressionConfig(_BaseConfig):
    """A named progression in one key."""

    mode: Literal[PracticeMode.CHORD_PROGRESSIONS] = PracticeMode.CHORD_PROGRESSIONS
    key: KeyName = Field(Key.C, description="Tonic")
    progression_name: str = Field(DEFAULT_PROGRESSION_NAME, description="Library name")

    @field_validator("progression_name")
    @classmethod
    def validate_progression_name(cls, v: str) -> str:
        """Progression must exist in the library."""
        get_progression_by_name(v)
        return v


PracticeConfig = Annotated[
    ScaleConfig
    | ArpeggioConfig
    | ChordsByKeyConfig
    | ChordsByTypeConfig
    | ChordProgressionConfig,
    Field(discriminator="mode"),
]

_config_adapter: TypeAdapter[PracticeConfig] = TypeAdapter(PracticeConfig)


def parse_config(data: dict[str, Any]) -> PracticeConfig:
    """
    Build the configuration for data["mode"] from a plain dict.

    Raises:
        pydantic.ValidationError: if the mode is unknown or a field is invalid
    """
    return _config_adapter.validate_python(data)
