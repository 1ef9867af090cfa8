"""
Theory tools - MCP tools for looking up scales, chords and progressions.

Every tool is read-only and returns a JSON string with a "status" field.
Names like keys and roots are accepted as "C", "F#", "Bb" or "B♭".
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_piano.constants import DEFAULT_OCTAVE, HandSelection
from chuk_mcp_piano.core.arpeggio import ArpeggioOctaves, ArpeggioType, get_arpeggio
from chuk_mcp_piano.core.chord import ChordInfo, ChordInversion, ChordType, build_chord
from chuk_mcp_piano.core.chord_detection import detect_chord
from chuk_mcp_piano.core.circle_of_fifths import keys_from
from chuk_mcp_piano.core.harmony import diatonic_chords
from chuk_mcp_piano.core.named_progressions import (
    PROGRESSIONS,
    ProgressionDifficulty,
    progressions_for_difficulty,
)
from chuk_mcp_piano.core.note import ensure_midi_range, midi_to_note, note_to_midi
from chuk_mcp_piano.core.pitch import Key, PitchClass
from chuk_mcp_piano.core.progression import (
    ProgressionStyle,
    key_seventh_progression,
    key_triad_progression,
    smooth_key_seventh_progression,
    smooth_key_triad_progression,
    smooth_progression_voicings,
)
from chuk_mcp_piano.core.scale import ScaleType, get_scale

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _chord_dict(chord: ChordInfo, octave: int) -> dict[str, Any]:
    return {
        "name": chord.name,
        "root": chord.root.spell(),
        "chord_type": chord.chord_type.value,
        "inversion": chord.inversion.display_name,
        "notes": [note.spell() for note in chord.notes],
        "midi_notes": chord.get_midi_notes(octave),
    }


def register_theory_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register music theory lookup tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def piano_note_info(
        midi: int | None = None,
        note: str | None = None,
        octave: int = DEFAULT_OCTAVE,
    ) -> str:
        """
        Convert between MIDI numbers and note names.

        Pass either a MIDI number, or a note name and octave.

        Args:
            midi: MIDI note number (0-127)
            note: Note name (e.g., "C", "F#", "Bb")
            octave: Octave for the note name (4 = middle C octave)

        Returns:
            JSON string with note name, octave, MIDI number and display name

        Example:
            piano_note_info(midi=61)
            piano_note_info(note="Db", octave=4)
        """
        try:
            if midi is None:
                if note is None:
                    return json.dumps({"status": "error", "message": "Provide midi or note"})
                midi = note_to_midi(PitchClass.parse(note), octave)
            info = midi_to_note(midi)
            return json.dumps(
                {
                    "status": "success",
                    "note": info.note.spell(),
                    "octave": info.octave,
                    "midi": info.midi_number,
                    "display_name": info.display_name,
                    "is_black_key": info.note.is_black_key,
                }
            )
        except Exception as e:
            logger.exception("Failed to convert note")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_note_info"] = piano_note_info

    @mcp.tool  # type: ignore[arg-type]
    async def piano_get_scale(
        key: str,
        scale_type: str = "major",
        octave: int = DEFAULT_OCTAVE,
        hand: str = "right",
    ) -> str:
        """
        Get a scale's notes and its up-and-down practice sequence.

        Args:
            key: Tonic (e.g., "C", "Eb")
            scale_type: major, minor, dorian, phrygian, lydian, mixolydian,
                aeolian or locrian
            octave: Starting octave
            hand: left, right or both

        Returns:
            JSON string with notes, ascending MIDI notes and hand sequence

        Example:
            piano_get_scale(key="D", scale_type="dorian")
        """
        try:
            scale = get_scale(Key.parse(key), ScaleType(scale_type))
            return json.dumps(
                {
                    "status": "success",
                    "name": scale.name,
                    "notes": [n.spell() for n in scale.get_notes()],
                    "midi_notes": scale.get_midi_notes(octave),
                    "sequence": scale.get_hand_sequence(octave, HandSelection(hand)),
                }
            )
        except Exception as e:
            logger.exception("Failed to get scale")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_get_scale"] = piano_get_scale

    @mcp.tool  # type: ignore[arg-type]
    async def piano_get_chord(
        root: str,
        chord_type: str = "major",
        inversion: str = "root",
        octave: int = DEFAULT_OCTAVE,
        hand: str = "right",
    ) -> str:
        """
        Get a chord voicing.

        Args:
            root: Root note (e.g., "F", "C#")
            chord_type: major, minor, diminished, augmented, major7,
                dominant7, minor7, half_diminished7, diminished7,
                minor_major7 or augmented7
            inversion: root, first, second or third (sevenths only)
            octave: Octave of the root
            hand: left, right or both (both = left block + right block)

        Returns:
            JSON string with chord name, notes and MIDI voicing

        Example:
            piano_get_chord(root="F", inversion="second")
        """
        try:
            chord = build_chord(
                PitchClass.parse(root),
                ChordType(chord_type),
                ChordInversion[inversion.upper()],
            )
            data = _chord_dict(chord, octave)
            data["hand_notes"] = chord.get_midi_notes_for_hand(octave, HandSelection(hand))
            return json.dumps({"status": "success", "chord": data})
        except KeyError:
            return json.dumps({"status": "error", "message": f"Unknown inversion: {inversion}"})
        except Exception as e:
            logger.exception("Failed to get chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_get_chord"] = piano_get_chord

    @mcp.tool  # type: ignore[arg-type]
    async def piano_get_arpeggio(
        root: str,
        arpeggio_type: str = "major",
        octaves: int = 1,
        octave: int = DEFAULT_OCTAVE,
        hand: str = "right",
    ) -> str:
        """
        Get an arpeggio practice sequence.

        Args:
            root: Root note
            arpeggio_type: Any chord quality (major, minor, dominant7, ...)
            octaves: 1 or 2
            octave: Starting octave
            hand: left, right or both (both = interleaved pairs)

        Returns:
            JSON string with name and the full up-and-down sequence

        Example:
            piano_get_arpeggio(root="A", arpeggio_type="minor", octaves=2)
        """
        try:
            arpeggio = get_arpeggio(
                PitchClass.parse(root), ArpeggioType(arpeggio_type), ArpeggioOctaves(octaves)
            )
            return json.dumps(
                {
                    "status": "success",
                    "name": arpeggio.name,
                    "notes": [n.spell() for n in arpeggio.get_notes()],
                    "sequence": arpeggio.get_hand_sequence(octave, HandSelection(hand)),
                }
            )
        except Exception as e:
            logger.exception("Failed to get arpeggio")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_get_arpeggio"] = piano_get_arpeggio

    @mcp.tool  # type: ignore[arg-type]
    async def piano_get_diatonic_chords(
        key: str,
        scale_type: str = "major",
        sevenths: bool = False,
        octave: int = DEFAULT_OCTAVE,
    ) -> str:
        """
        Get the chord built on each degree of a key.

        Only major, minor (natural) and aeolian are supported.

        Args:
            key: Tonic
            scale_type: major, minor or aeolian
            sevenths: Seventh chords instead of triads
            octave: Octave for the MIDI voicings

        Returns:
            JSON string with roman numerals and root-position chords

        Example:
            piano_get_diatonic_chords(key="A", scale_type="minor", sevenths=True)
        """
        try:
            chords = diatonic_chords(Key.parse(key), ScaleType(scale_type), sevenths)
            return json.dumps(
                {
                    "status": "success",
                    "chords": [
                        {"roman_numeral": numeral, **_chord_dict(chord, octave)}
                        for numeral, chord in chords
                    ],
                }
            )
        except Exception as e:
            logger.exception("Failed to get diatonic chords")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_get_diatonic_chords"] = piano_get_diatonic_chords

    @mcp.tool  # type: ignore[arg-type]
    async def piano_get_key_progression(
        key: str,
        scale_type: str = "major",
        style: str = "smooth",
        sevenths: bool = False,
        octave: int = DEFAULT_OCTAVE,
    ) -> str:
        """
        Walk every diatonic chord of a key through its inversions.

        Smooth walks return toward root position before the next degree and
        lift whole degrees an octave when the bass would drop too far.

        Args:
            key: Tonic
            scale_type: major, minor or aeolian
            style: simple or smooth
            sevenths: Seventh chords instead of triads
            octave: Starting octave

        Returns:
            JSON string with chord names and voicings in order

        Example:
            piano_get_key_progression(key="B", style="smooth")
        """
        try:
            parsed_key = Key.parse(key)
            parsed_scale = ScaleType(scale_type)
            smooth = ProgressionStyle(style) == ProgressionStyle.SMOOTH
            if sevenths:
                builder = smooth_key_seventh_progression if smooth else key_seventh_progression
            else:
                builder = smooth_key_triad_progression if smooth else key_triad_progression
            progression = builder(parsed_key, parsed_scale)

            if smooth:
                voicings = smooth_progression_voicings(progression, octave)
            else:
                voicings = [chord.get_midi_notes(octave) for chord in progression]

            return json.dumps(
                {
                    "status": "success",
                    "style": progression.style.value,
                    "count": len(progression),
                    "chords": [
                        {
                            "name": chord.name,
                            "roman_numeral": progression.numeral_at(i),
                            "inversion": chord.inversion.display_name,
                            "midi_notes": voicing,
                        }
                        for i, (chord, voicing) in enumerate(zip(progression, voicings))
                    ],
                }
            )
        except Exception as e:
            logger.exception("Failed to build key progression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_get_key_progression"] = piano_get_key_progression

    @mcp.tool  # type: ignore[arg-type]
    async def piano_circle_of_fifths(start: str = "C") -> str:
        """
        List all twelve keys around the circle of fifths.

        Args:
            start: Key to start from

        Returns:
            JSON string with keys in circle order

        Example:
            piano_circle_of_fifths(start="F")
        """
        try:
            keys = keys_from(Key.parse(start))
            return json.dumps(
                {
                    "status": "success",
                    "keys": [k.display_name for k in keys],
                    "full_names": [k.full_display_name for k in keys],
                }
            )
        except Exception as e:
            logger.exception("Failed to walk circle of fifths")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_circle_of_fifths"] = piano_circle_of_fifths

    @mcp.tool  # type: ignore[arg-type]
    async def piano_list_progressions(difficulty: str | None = None) -> str:
        """
        List the named chord progressions.

        Args:
            difficulty: Optional filter (beginner, intermediate, advanced)

        Returns:
            JSON string with progression summaries

        Example:
            piano_list_progressions(difficulty="beginner")
        """
        try:
            if difficulty is None:
                progressions = list(PROGRESSIONS)
            else:
                progressions = progressions_for_difficulty(ProgressionDifficulty(difficulty))
            return json.dumps(
                {
                    "status": "success",
                    "progressions": [
                        {
                            "name": p.name,
                            "roman_numerals": list(p.roman_numerals),
                            "difficulty": p.difficulty.value,
                            "description": p.description,
                        }
                        for p in progressions
                    ],
                    "count": len(progressions),
                }
            )
        except Exception as e:
            logger.exception("Failed to list progressions")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_list_progressions"] = piano_list_progressions

    @mcp.tool  # type: ignore[arg-type]
    async def piano_detect_chord(midi_notes: list[int]) -> str:
        """
        Name the chord formed by a set of held notes.

        Inversions are reported as slash chords. Two notes are only
        recognised as a power chord.

        Args:
            midi_notes: MIDI note numbers, in any order

        Returns:
            JSON string with the chord name, root, bass and confidence, or
            status "not_found" when the notes form no recognisable chord

        Example:
            piano_detect_chord(midi_notes=[55, 60, 64])
        """
        try:
            for note in midi_notes:
                ensure_midi_range(note)
            result = detect_chord(midi_notes)
            if result is None:
                return json.dumps({"status": "not_found", "midi_notes": sorted(midi_notes)})
            return json.dumps(
                {
                    "status": "success",
                    "chord_name": result.chord_name,
                    "root": result.root.spell(),
                    "bass": result.bass.spell(),
                    "quality": result.quality,
                    "notes": list(result.notes),
                    "inverted": result.is_inverted,
                    "confidence": round(result.confidence, 4),
                }
            )
        except Exception as e:
            logger.exception("Failed to detect chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_detect_chord"] = piano_detect_chord

    return tools
