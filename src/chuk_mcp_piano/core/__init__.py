"""
Core music theory - the deterministic generation engine.

Everything here is a pure function of its inputs:
- PitchClass / Key: the 12 chromatic pitch classes and key display names
- note: MIDI <-> note conversion and keyboard positions
- Scale: interval patterns for the eight modes
- ChordInfo: rotate-and-lift chord voicings for 11 chord types
- chord detection: naming the chord a set of held notes forms
- Arpeggio: broken chords climbing one or two octaves
- harmony: diatonic chord qualities for major and natural minor
- Progression: per-key inversion walks, simple and smooth
- NamedProgression: the library of common named progressions
- circle of fifths navigation
"""

from chuk_mcp_piano.core.arpeggio import (
    Arpeggio,
    ArpeggioOctaves,
    ArpeggioType,
    common_arpeggios,
    extended_arpeggios,
    get_arpeggio,
)
from chuk_mcp_piano.core.chord import (
    ChordInfo,
    ChordInversion,
    ChordType,
    build_chord,
    chord_midi_notes,
    inversion_progression,
    valid_inversions,
    validate_chord_voicing,
)
from chuk_mcp_piano.core.chord_by_type import (
    ChordTypeExercise,
    all_basic_chord_type_exercises,
    chord_type_exercise,
)
from chuk_mcp_piano.core.chord_detection import ChordDetectionResult, detect_chord
from chuk_mcp_piano.core.circle_of_fifths import (
    CIRCLE_OF_FIFTHS,
    keys_from,
    next_key,
    previous_key,
)
from chuk_mcp_piano.core.errors import (
    InvalidInversionError,
    InvalidRangeError,
    UnsupportedScaleError,
)
from chuk_mcp_piano.core.harmony import (
    diatonic_chords,
    diatonic_seventh_types,
    diatonic_triad_types,
    roman_numeral,
)
from chuk_mcp_piano.core.named_progressions import (
    PROGRESSIONS,
    NamedProgression,
    ProgressionChord,
    ProgressionDifficulty,
    get_progression_by_name,
    progressions_for_difficulty,
)
from chuk_mcp_piano.core.note import (
    NoteInfo,
    NotePosition,
    compact_note_name,
    key_to_midi,
    midi_to_note,
    midi_to_note_position,
    note_display_name,
    note_position_to_midi,
    note_to_midi,
)
from chuk_mcp_piano.core.pitch import Key, PitchClass
from chuk_mcp_piano.core.progression import (
    Progression,
    ProgressionStyle,
    key_seventh_progression,
    key_triad_progression,
    progression_midi_sequence,
    smooth_key_seventh_progression,
    smooth_key_triad_progression,
    smooth_progression_midi_sequence,
    smooth_progression_voicings,
)
from chuk_mcp_piano.core.scale import Scale, ScaleType, get_scale, scale_midi_notes

__all__ = [
    # Pitch
    "PitchClass",
    "Key",
    # Note
    "NoteInfo",
    "NotePosition",
    "note_to_midi",
    "midi_to_note",
    "note_display_name",
    "compact_note_name",
    "key_to_midi",
    "note_position_to_midi",
    "midi_to_note_position",
    # Errors
    "InvalidRangeError",
    "InvalidInversionError",
    "UnsupportedScaleError",
    # Scale
    "ScaleType",
    "Scale",
    "get_scale",
    "scale_midi_notes",
    # Chord
    "ChordType",
    "ChordInversion",
    "ChordInfo",
    "build_chord",
    "chord_midi_notes",
    "inversion_progression",
    "valid_inversions",
    "validate_chord_voicing",
    "ChordTypeExercise",
    "chord_type_exercise",
    "all_basic_chord_type_exercises",
    # Chord detection
    "ChordDetectionResult",
    "detect_chord",
    # Arpeggio
    "ArpeggioType",
    "ArpeggioOctaves",
    "Arpeggio",
    "get_arpeggio",
    "common_arpeggios",
    "extended_arpeggios",
    # Harmony
    "diatonic_triad_types",
    "diatonic_seventh_types",
    "roman_numeral",
    "diatonic_chords",
    # Progression
    "ProgressionStyle",
    "Progression",
    "key_triad_progression",
    "smooth_key_triad_progression",
    "key_seventh_progression",
    "smooth_key_seventh_progression",
    "progression_midi_sequence",
    "smooth_progression_voicings",
    "smooth_progression_midi_sequence",
    "ProgressionDifficulty",
    "ProgressionChord",
    "NamedProgression",
    "PROGRESSIONS",
    "get_progression_by_name",
    "progressions_for_difficulty",
    # Circle of fifths
    "CIRCLE_OF_FIFTHS",
    "next_key",
    "previous_key",
    "keys_from",
]
