"""
Practice tools - MCP tools for generating and exporting exercises.

Exercises are generated on demand from their configuration and never
stored. Export returns the exercise as JSON, YAML or a base64-encoded
MIDI file for the client to keep.
"""

from __future__ import annotations

import base64
import io
import json
import logging
from typing import TYPE_CHECKING, Any

import yaml

from chuk_mcp_piano.compiler.midi import exercise_to_midi
from chuk_mcp_piano.constants import DEFAULT_OCTAVE, DEFAULT_TEMPO_BPM
from chuk_mcp_piano.models.practice import PracticeExercise, PracticeMode, parse_config
from chuk_mcp_piano.practice.strategies import StrategyFactory

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)

# Fields each mode's configuration understands
_MODE_FIELDS: dict[PracticeMode, tuple[str, ...]] = {
    PracticeMode.SCALES: ("key", "scale_type"),
    PracticeMode.ARPEGGIOS: ("root", "arpeggio_type", "octaves"),
    PracticeMode.CHORDS_BY_KEY: ("key", "scale_type", "sevenths"),
    PracticeMode.CHORDS_BY_TYPE: ("chord_type", "include_inversions"),
    PracticeMode.CHORD_PROGRESSIONS: ("key", "progression_name"),
}


def build_exercise(mode: str, hand: str, octave: int, **options: Any) -> PracticeExercise:
    """
    Generate an exercise from flat tool arguments.

    Only the options that apply to the mode are passed to its configuration;
    the rest are ignored.

    Raises:
        ValueError: for an unknown mode
        pydantic.ValidationError: for invalid option values
    """
    practice_mode = PracticeMode(mode)
    data: dict[str, Any] = {"mode": practice_mode.value, "hand": hand, "octave": octave}
    for field in _MODE_FIELDS[practice_mode]:
        if options.get(field) is not None:
            data[field] = options[field]
    config = parse_config(data)
    return StrategyFactory.create_exercise(config)


def _exercise_summary(exercise: PracticeExercise) -> dict[str, Any]:
    low, high = exercise.note_range()
    return {
        "name": exercise.name,
        "mode": exercise.mode.value,
        "step_count": len(exercise),
        "lowest_note": low,
        "highest_note": high,
        "metadata": exercise.metadata,
    }


def register_practice_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register exercise generation tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def piano_create_exercise(
        mode: str,
        key: str | None = None,
        scale_type: str | None = None,
        root: str | None = None,
        arpeggio_type: str | None = None,
        octaves: int | None = None,
        chord_type: str | None = None,
        include_inversions: bool | None = None,
        sevenths: bool | None = None,
        progression_name: str | None = None,
        hand: str = "right",
        octave: int = DEFAULT_OCTAVE,
    ) -> str:
        """
        Generate a practice exercise.

        Each mode reads its own options and ignores the rest:
        - scales: key, scale_type
        - arpeggios: root, arpeggio_type, octaves
        - chords_by_key: key, scale_type (major/minor/aeolian), sevenths
        - chords_by_type: chord_type, include_inversions
        - chord_progressions: key, progression_name

        Args:
            mode: scales, arpeggios, chords_by_key, chords_by_type or
                chord_progressions
            key: Tonic (e.g., "C", "Bb")
            scale_type: Scale mode
            root: Arpeggio root
            arpeggio_type: Arpeggio quality
            octaves: Arpeggio span (1 or 2)
            chord_type: Chord quality for chords_by_type
            include_inversions: Walk every inversion for chords_by_type
            sevenths: Seventh chords for chords_by_key
            progression_name: Named progression (e.g., "I - V - vi - IV")
            hand: left, right or both
            octave: Starting octave of the right hand (0-8)

        Returns:
            JSON string with the exercise summary and its steps

        Example:
            piano_create_exercise(mode="chords_by_key", key="G", hand="both")
        """
        try:
            exercise = build_exercise(
                mode,
                hand,
                octave,
                key=key,
                scale_type=scale_type,
                root=root,
                arpeggio_type=arpeggio_type,
                octaves=octaves,
                chord_type=chord_type,
                include_inversions=include_inversions,
                sevenths=sevenths,
                progression_name=progression_name,
            )
            return json.dumps(
                {
                    "status": "success",
                    "exercise": _exercise_summary(exercise),
                    "steps": [
                        {
                            "notes": step.notes,
                            "step_type": step.step_type.value,
                            "metadata": step.metadata,
                        }
                        for step in exercise.steps
                    ],
                }
            )
        except Exception as e:
            logger.exception("Failed to create exercise")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_create_exercise"] = piano_create_exercise

    @mcp.tool  # type: ignore[arg-type]
    async def piano_export_exercise(
        mode: str,
        format: str = "json",
        key: str | None = None,
        scale_type: str | None = None,
        root: str | None = None,
        arpeggio_type: str | None = None,
        octaves: int | None = None,
        chord_type: str | None = None,
        include_inversions: bool | None = None,
        sevenths: bool | None = None,
        progression_name: str | None = None,
        hand: str = "right",
        octave: int = DEFAULT_OCTAVE,
        tempo_bpm: int = DEFAULT_TEMPO_BPM,
        beats_per_step: float = 1.0,
    ) -> str:
        """
        Export an exercise as JSON, YAML or MIDI.

        Takes the same options as piano_create_exercise. MIDI is rendered at
        the given tempo and returned base64-encoded.

        Args:
            mode: Practice mode
            format: json, yaml or midi
            tempo_bpm: Tempo for MIDI export
            beats_per_step: Beats each step lasts in MIDI export

        Returns:
            JSON string with the exported content

        Example:
            piano_export_exercise(mode="scales", key="Eb", format="yaml")
        """
        try:
            exercise = build_exercise(
                mode,
                hand,
                octave,
                key=key,
                scale_type=scale_type,
                root=root,
                arpeggio_type=arpeggio_type,
                octaves=octaves,
                chord_type=chord_type,
                include_inversions=include_inversions,
                sevenths=sevenths,
                progression_name=progression_name,
            )
            data = exercise.model_dump(mode="json")

            if format == "json":
                content = json.dumps(data, indent=2, ensure_ascii=False)
            elif format == "yaml":
                content = yaml.safe_dump(
                    data, default_flow_style=False, sort_keys=False, allow_unicode=True
                )
            elif format == "midi":
                midi = exercise_to_midi(
                    exercise, tempo_bpm=tempo_bpm, beats_per_step=beats_per_step
                )
                buffer = io.BytesIO()
                midi.save(file=buffer)
                content = base64.b64encode(buffer.getvalue()).decode("ascii")
            else:
                return json.dumps({"status": "error", "message": f"Unknown format: {format}"})

            return json.dumps(
                {
                    "status": "success",
                    "format": format,
                    "name": exercise.name,
                    "content": content,
                }
            )
        except Exception as e:
            logger.exception("Failed to export exercise")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_export_exercise"] = piano_export_exercise

    return tools
