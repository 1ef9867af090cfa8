"""
Pydantic models for practice exercises.

This module provides:
- PracticeExercise / PracticeStep: generated exercises
- PracticeMode / StepType: what is practiced and how notes are played
- One configuration model per practice mode, plus parse_config()
"""

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
    parse_config,
)

__all__ = [
    "ArpeggioConfig",
    "ChordProgressionConfig",
    "ChordsByKeyConfig",
    "ChordsByTypeConfig",
    "PracticeConfig",
    "PracticeExercise",
    "PracticeMode",
    "PracticeStep",
    "ScaleConfig",
    "StepType",
    "parse_config",
]
