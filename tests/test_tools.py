"""
Tests for MCP tools.

Tests the MCP tool implementations for theory lookups, exercise generation
and export.
"""

import base64
import io
import json

import pytest
import yaml
from mido import MidiFile

from chuk_mcp_piano.tools.practice import build_exercise, register_practice_tools
from chuk_mcp_piano.tools.theory import register_theory_tools


# Mock MCP server for testing tools
class MockMCPServer:
    """Mock MCP server that just stores registered tools."""

    def __init__(self, name: str):
        self.name = name
        self.tools: dict = {}

    def tool(self, func):
        """Decorator to register a tool."""
        self.tools[func.__name__] = func
        return func


@pytest.fixture
def theory_tools() -> dict:
    return register_theory_tools(MockMCPServer("test"))


@pytest.fixture
def practice_tools() -> dict:
    return register_practice_tools(MockMCPServer("test"))


class TestRegistration:
    """Tests for tool registration."""

    def test_theory_tools_registered(self) -> None:
        mcp = MockMCPServer("test")
        tools = register_theory_tools(mcp)
        assert set(tools) == set(mcp.tools)
        assert "piano_get_chord" in tools
        assert len(tools) == 9

    def test_practice_tools_registered(self) -> None:
        mcp = MockMCPServer("test")
        tools = register_practice_tools(mcp)
        assert set(tools) == {"piano_create_exercise", "piano_export_exercise"}


class TestNoteTools:
    """Tests for piano_note_info."""

    @pytest.mark.asyncio
    async def test_from_midi(self, theory_tools: dict) -> None:
        data = json.loads(await theory_tools["piano_note_info"](midi=61))
        assert data["status"] == "success"
        assert data["display_name"] == "C#4"
        assert data["is_black_key"] is True

    @pytest.mark.asyncio
    async def test_from_flat_name(self, theory_tools: dict) -> None:
        data = json.loads(await theory_tools["piano_note_info"](note="Db", octave=4))
        assert data["midi"] == 61
        assert data["note"] == "C#"

    @pytest.mark.asyncio
    async def test_out_of_range(self, theory_tools: dict) -> None:
        data = json.loads(await theory_tools["piano_note_info"](midi=200))
        assert data["status"] == "error"
        assert "between 0 and 127" in data["message"]

    @pytest.mark.asyncio
    async def test_nothing_given(self, theory_tools: dict) -> None:
        data = json.loads(await theory_tools["piano_note_info"]())
        assert data["status"] == "error"


class TestTheoryTools:
    """Tests for scale, chord and arpeggio lookups."""

    @pytest.mark.asyncio
    async def test_get_scale(self, theory_tools: dict) -> None:
        data = json.loads(await theory_tools["piano_get_scale"](key="C"))
        assert data["status"] == "success"
        assert data["midi_notes"] == [60, 62, 64, 65, 67, 69, 71, 72]
        assert len(data["sequence"]) == 15

    @pytest.mark.asyncio
    async def test_get_scale_unknown_type(self, theory_tools: dict) -> None:
        data = json.loads(await theory_tools["piano_get_scale"](key="C", scale_type="blues"))
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_get_chord(self, theory_tools: dict) -> None:
        data = json.loads(await theory_tools["piano_get_chord"](root="F", inversion="second"))
        assert data["status"] == "success"
        assert data["chord"]["midi_notes"] == [72, 77, 81]
        assert data["chord"]["name"] == "F (2nd inv)"

    @pytest.mark.asyncio
    async def test_get_chord_both_hands(self, theory_tools: dict) -> None:
        data = json.loads(await theory_tools["piano_get_chord"](root="C", hand="both"))
        assert data["chord"]["hand_notes"] == [48, 52, 55, 60, 64, 67]

    @pytest.mark.asyncio
    async def test_get_chord_invalid_inversion(self, theory_tools: dict) -> None:
        data = json.loads(await theory_tools["piano_get_chord"](root="C", inversion="third"))
        assert data["status"] == "error"
        assert "third inversion" in data["message"]

    @pytest.mark.asyncio
    async def test_get_chord_unknown_inversion(self, theory_tools: dict) -> None:
        data = json.loads(await theory_tools["piano_get_chord"](root="C", inversion="fifth"))
        assert data["status"] == "error"
        assert "Unknown inversion" in data["message"]

    @pytest.mark.asyncio
    async def test_get_arpeggio(self, theory_tools: dict) -> None:
        data = json.loads(await theory_tools["piano_get_arpeggio"](root="C"))
        assert data["name"] == "C Major (1 Octave)"
        assert data["sequence"] == [60, 64, 67, 72, 67, 64, 60]

    @pytest.mark.asyncio
    async def test_get_arpeggio_three_octaves(self, theory_tools: dict) -> None:
        data = json.loads(await theory_tools["piano_get_arpeggio"](root="C", octaves=3))
        assert data["status"] == "error"


class TestHarmonyTools:
    """Tests for harmony and progression tools."""

    @pytest.mark.asyncio
    async def test_diatonic_chords(self, theory_tools: dict) -> None:
        data = json.loads(await theory_tools["piano_get_diatonic_chords"](key="C"))
        numerals = [c["roman_numeral"] for c in data["chords"]]
        assert numerals == ["I", "ii", "iii", "IV", "V", "vi", "vii°"]

    @pytest.mark.asyncio
    async def test_diatonic_chords_unsupported(self, theory_tools: dict) -> None:
        data = json.loads(
            await theory_tools["piano_get_diatonic_chords"](key="C", scale_type="lydian")
        )
        assert data["status"] == "error"
        assert "lydian" in data["message"]

    @pytest.mark.asyncio
    async def test_key_progression_smooth(self, theory_tools: dict) -> None:
        data = json.loads(await theory_tools["piano_get_key_progression"](key="B"))
        assert data["count"] == 28
        assert data["chords"][4]["midi_notes"] == [73, 76, 80]
        assert data["chords"][4]["roman_numeral"] == "ii"

    @pytest.mark.asyncio
    async def test_key_progression_simple_sevenths(self, theory_tools: dict) -> None:
        data = json.loads(
            await theory_tools["piano_get_key_progression"](
                key="C", style="simple", sevenths=True
            )
        )
        assert data["style"] == "simple"
        assert data["count"] == 28
        assert data["chords"][3]["inversion"] == "3rd Inversion"

    @pytest.mark.asyncio
    async def test_circle_of_fifths(self, theory_tools: dict) -> None:
        data = json.loads(await theory_tools["piano_circle_of_fifths"](start="F"))
        assert data["keys"][:3] == ["F", "C", "G"]
        assert len(data["keys"]) == 12

    @pytest.mark.asyncio
    async def test_list_progressions(self, theory_tools: dict) -> None:
        data = json.loads(await theory_tools["piano_list_progressions"]())
        assert data["count"] == 8

        data = json.loads(await theory_tools["piano_list_progressions"](difficulty="advanced"))
        assert [p["name"] for p in data["progressions"]] == ["ii - V - I", "I - ♭VII - IV"]


class TestDetectChordTool:
    """Tests for piano_detect_chord."""

    @pytest.mark.asyncio
    async def test_slash_chord(self, theory_tools: dict) -> None:
        data = json.loads(await theory_tools["piano_detect_chord"](midi_notes=[76, 67, 72]))
        assert data["status"] == "success"
        assert data["chord_name"] == "C Major/G"
        assert data["root"] == "C"
        assert data["bass"] == "G"
        assert data["quality"] == "Major"
        assert data["notes"] == ["G", "C", "E"]
        assert data["inverted"] is True
        assert data["confidence"] == 0.85

    @pytest.mark.asyncio
    async def test_not_found(self, theory_tools: dict) -> None:
        data = json.loads(await theory_tools["piano_detect_chord"](midi_notes=[62, 60, 61]))
        assert data["status"] == "not_found"
        assert data["midi_notes"] == [60, 61, 62]

    @pytest.mark.asyncio
    async def test_out_of_range(self, theory_tools: dict) -> None:
        data = json.loads(await theory_tools["piano_detect_chord"](midi_notes=[60, 64, 128]))
        assert data["status"] == "error"


class TestPracticeTools:
    """Tests for exercise generation and export."""

    def test_build_exercise_ignores_other_options(self) -> None:
        exercise = build_exercise("scales", "right", 4, key="G", chord_type="minor7")
        assert exercise.name == "G Major (Ionian)"

    def test_build_exercise_unknown_mode(self) -> None:
        with pytest.raises(ValueError):
            build_exercise("sight_reading", "right", 4)

    @pytest.mark.asyncio
    async def test_create_exercise(self, practice_tools: dict) -> None:
        data = json.loads(
            await practice_tools["piano_create_exercise"](mode="chords_by_key", key="G")
        )
        assert data["status"] == "success"
        assert data["exercise"]["step_count"] == 28
        assert data["steps"][0]["notes"] == [67, 71, 74]
        assert data["steps"][0]["step_type"] == "simultaneous"

    @pytest.mark.asyncio
    async def test_create_exercise_invalid(self, practice_tools: dict) -> None:
        data = json.loads(
            await practice_tools["piano_create_exercise"](mode="scales", key="C", octave=12)
        )
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_export_json(self, practice_tools: dict) -> None:
        data = json.loads(
            await practice_tools["piano_export_exercise"](mode="arpeggios", root="A")
        )
        assert data["format"] == "json"
        content = json.loads(data["content"])
        assert content["name"] == "A Major (1 Octave)"
        assert len(content["steps"]) == 7

    @pytest.mark.asyncio
    async def test_export_yaml(self, practice_tools: dict) -> None:
        data = json.loads(
            await practice_tools["piano_export_exercise"](
                mode="chord_progressions", key="D", format="yaml"
            )
        )
        content = yaml.safe_load(data["content"])
        assert content["mode"] == "chord_progressions"
        assert content["steps"][1]["notes"] == [69, 73, 76]

    @pytest.mark.asyncio
    async def test_export_midi(self, practice_tools: dict) -> None:
        data = json.loads(
            await practice_tools["piano_export_exercise"](mode="scales", key="C", format="midi")
        )
        assert data["status"] == "success"
        mid = MidiFile(file=io.BytesIO(base64.b64decode(data["content"])))
        note_ons = [msg for msg in mid.tracks[0] if msg.type == "note_on"]
        assert len(note_ons) == 15

    @pytest.mark.asyncio
    async def test_export_unknown_format(self, practice_tools: dict) -> None:
        data = json.loads(
            await practice_tools["piano_export_exercise"](mode="scales", format="pdf")
        )
        assert data["status"] == "error"
