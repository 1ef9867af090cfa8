"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_mcp_piano.core import Key
from chuk_mcp_piano.models import ChordsByKeyConfig, PracticeExercise, ScaleConfig
from chuk_mcp_piano.practice import StrategyFactory


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_midi_path(temp_dir: Path) -> Path:
    """Path for a temporary MIDI file."""
    return temp_dir / "test.mid"


@pytest.fixture
def c_major_scale() -> PracticeExercise:
    """C major scale, right hand, octave 4."""
    return StrategyFactory.create_exercise(ScaleConfig(key=Key.C))


@pytest.fixture
def c_major_chords() -> PracticeExercise:
    """Smooth triad walk through C major, right hand, octave 4."""
    return StrategyFactory.create_exercise(ChordsByKeyConfig(key=Key.C))
