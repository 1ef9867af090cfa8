"""
Chord detection - name the chord a set of held MIDI notes forms.

Detection works on pitch classes. Each candidate root turns the notes into
a set of intervals, and every pattern below is scored against them. A
pattern matches when its required intervals are all present (a missing
fifth is tolerated except for power and sus chords), loses points for each
interval it does not expect, and is ruled out by a few family rules:

- add and 6 chords may not contain a seventh
- 9, 11 and 13 extensions need a seventh
- sus chords may not contain a third

The bass note is tried as the root first. Another root only wins when the
bass reading is weak and the inverted reading is much stronger; the result
is then named as a slash chord ("C Major/G").
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from chuk_mcp_piano.constants import SEMITONES_PER_OCTAVE
from chuk_mcp_piano.core.pitch import PitchClass

logger = logging.getLogger(__name__)

# A reading below this is not reported
MIN_CONFIDENCE = 0.5

# Bias towards the bass note being the root
ROOT_POSITION_BIAS = 1.1

# Other roots are only tried below this biased score ...
INVERSION_THRESHOLD = 0.6

# ... and must beat it by this factor
INVERSION_MARGIN = 1.5

UNEXPECTED_INTERVAL_PENALTY = 0.15
MISSING_FIFTH_PENALTY = 0.95

PERFECT_FIFTH = 7
MINOR_THIRD = 3
MAJOR_THIRD = 4
MINOR_SEVENTH = 10
MAJOR_SEVENTH = 11


@dataclass(frozen=True)
class ChordPattern:
    """A chord quality as required and optional intervals above the root."""

    name: str
    required: frozenset[int]
    optional: frozenset[int]
    confidence: float

    @property
    def is_power(self) -> bool:
        return self.name == "5"

    @property
    def is_sus(self) -> bool:
        return "sus" in self.name

    @property
    def is_add_or_sixth(self) -> bool:
        """add9, m6, 6/9 ... chords that must not contain a seventh."""
        return ("add" in self.name or "6" in self.name) and "7" not in self.name

    @property
    def is_extension(self) -> bool:
        """9, 11 and 13 chords that need a seventh."""
        has_extension = any(ext in self.name for ext in ("9", "11", "13"))
        return has_extension and "add" not in self.name and "6" not in self.name


def _pattern(name: str, required: set[int], optional: set[int], confidence: float) -> ChordPattern:
    return ChordPattern(name, frozenset(required), frozenset(optional), confidence)


# Ordered by precedence: on an equal score the earlier pattern wins
CHORD_PATTERNS: tuple[ChordPattern, ...] = (
    # Suspended sevenths
    _pattern("7sus4", {5, 7, 10}, {2}, 0.9),
    _pattern("7sus2", {2, 7, 10}, set(), 0.88),
    # Add and sixth chords (no seventh), most specific first
    _pattern("6/9", {4, 7, 9, 2}, {5}, 0.95),
    _pattern("m6/9", {3, 7, 9, 2}, {5}, 0.94),
    _pattern("6", {4, 7, 9}, set(), 0.93),
    _pattern("m6", {3, 7, 9}, set(), 0.92),
    _pattern("add9", {4, 7, 2}, set(), 0.88),
    _pattern("madd9", {3, 7, 2}, set(), 0.88),
    _pattern("add11", {4, 7, 5}, set(), 0.86),
    # Altered dominants, ahead of the plain sevenths
    _pattern("7♭5", {4, 6, 10}, {2, 5, 9}, 0.9),
    _pattern("7♯5", {4, 8, 10}, {2, 5}, 0.9),
    _pattern("7♭9", {4, 7, 10, 1}, {5, 9}, 0.9),
    _pattern("7♯9", {4, 7, 10, 3}, {5, 9}, 0.9),
    _pattern("7♯11", {4, 7, 10, 6}, {2, 9}, 0.9),
    _pattern("7♭13", {4, 10, 8}, {7, 2}, 0.9),
    _pattern("7(♭9,♭13)", {4, 10, 1, 8}, {7}, 0.88),
    _pattern("7(♭9,♯11)", {4, 10, 1, 6}, {7}, 0.88),
    _pattern("7(♯9,♭13)", {4, 10, 3, 8}, {7}, 0.88),
    # Diminished sevenths
    _pattern("dim7", {3, 6, 9}, set(), 0.92),
    _pattern("m7♭5", {3, 6, 10}, {2, 5, 9}, 0.9),
    # Extensions
    _pattern("maj13♯11", {4, 11, 6, 9}, {2, 5, 7}, 0.97),
    _pattern("maj13", {4, 7, 11, 9}, {2, 5}, 0.96),
    _pattern("m13", {3, 7, 10, 9}, {2, 5}, 0.96),
    _pattern("13", {4, 7, 10, 9}, {2, 5}, 0.96),
    _pattern("maj7♯11", {4, 7, 11, 6}, {2}, 0.93),
    _pattern("maj11", {4, 7, 11, 2, 5}, {9}, 0.95),
    _pattern("m11", {3, 7, 10, 5}, {2, 9}, 0.94),
    _pattern("11", {5, 7, 10, 2}, set(), 0.94),
    _pattern("maj9", {4, 7, 11, 2}, {5}, 0.96),
    _pattern("m9", {3, 7, 10, 2}, {5}, 0.96),
    _pattern("9", {4, 7, 10, 2}, {5}, 0.96),
    # Sevenths
    _pattern("mMaj7", {3, 7, 11}, {2, 5, 9}, 0.95),
    _pattern("maj7", {4, 7, 11}, {2, 5, 9}, 0.95),
    _pattern("m7", {3, 7, 10}, {2, 5, 9}, 0.95),
    _pattern("7", {4, 7, 10}, {2, 5, 9}, 0.95),
    # Suspended triads, after the add chords they overlap with
    _pattern("sus24", {2, 5, 7}, set(), 0.75),
    _pattern("sus4", {5, 7}, set(), 0.7),
    _pattern("sus2", {2, 7}, set(), 0.7),
    # Triads
    _pattern("Aug", {4, 8}, set(), 0.8),
    _pattern("Dim", {3, 6}, set(), 0.8),
    _pattern("Minor", {3, 7}, set(), 0.85),
    _pattern("Major", {4, 7}, set(), 0.85),
    # Power chord
    _pattern("5", {7}, set(), 0.8),
)

POWER_CHORD_CONFIDENCE = 0.8
INVERTED_POWER_CHORD_CONFIDENCE = 0.75


@dataclass(frozen=True)
class ChordDetectionResult:
    """A detected chord."""

    chord_name: str  # e.g. "C Major", "A m7", "C Major/G", "C5"
    root: PitchClass
    quality: str  # Pattern name, e.g. "Major", "m7", "5"
    bass: PitchClass
    notes: tuple[str, ...]  # Pitch class names, lowest first
    confidence: float  # 0.0 - 1.0

    @property
    def is_inverted(self) -> bool:
        return self.root != self.bass

    def __str__(self) -> str:
        return self.chord_name


def fit_score(intervals: frozenset[int], pattern: ChordPattern) -> float:
    """
    How well intervals above a root fit a pattern, from 0.0 to 1.0.

    0.0 means the pattern does not apply.
    """
    missing = pattern.required - intervals
    if missing:
        if missing == {PERFECT_FIFTH} and not (pattern.is_power or pattern.is_sus):
            return _score(intervals, pattern) * MISSING_FIFTH_PENALTY
        return 0.0
    return _score(intervals, pattern)


def _score(intervals: frozenset[int], pattern: ChordPattern) -> float:
    unexpected = intervals - pattern.required - pattern.optional
    has_seventh = MINOR_SEVENTH in intervals or MAJOR_SEVENTH in intervals
    has_third = MINOR_THIRD in intervals or MAJOR_THIRD in intervals

    if pattern.is_add_or_sixth and has_seventh:
        return 0.0
    if pattern.is_extension and not has_seventh:
        return 0.0
    if pattern.is_sus and has_third:
        return 0.0

    if not unexpected:
        return 1.0
    return max(0.0, 1.0 - len(unexpected) * UNEXPECTED_INTERVAL_PENALTY)


def _intervals_above(pitch_classes: Iterable[int], root: int) -> frozenset[int]:
    return frozenset((pc - root) % SEMITONES_PER_OCTAVE for pc in pitch_classes if pc != root)


def _best_pattern(intervals: frozenset[int]) -> tuple[ChordPattern, float] | None:
    """
    Highest ranked pattern for the intervals, with its fit score.

    Ranking favours patterns that account for more of the notes; the
    reported fit is the unadjusted score.
    """
    best: tuple[ChordPattern, float] | None = None
    best_rank = 0.0
    for pattern in CHORD_PATTERNS:
        fit = fit_score(intervals, pattern)
        if fit <= 0.0:
            continue
        completeness = len(pattern.required) / max(1, len(intervals))
        rank = fit * (1.0 + completeness * 0.1)
        if rank > best_rank:
            best = (pattern, fit)
            best_rank = rank
    return best


def _result(
    root: int, bass: int, quality: str, pitch_classes: list[int], confidence: float
) -> ChordDetectionResult:
    root_pc = PitchClass(root)
    bass_pc = PitchClass(bass)
    separator = "" if quality == "5" else " "
    chord_name = f"{root_pc.spell()}{separator}{quality}"
    if root != bass:
        chord_name = f"{chord_name}/{bass_pc.spell()}"
    return ChordDetectionResult(
        chord_name=chord_name,
        root=root_pc,
        quality=quality,
        bass=bass_pc,
        notes=tuple(PitchClass(pc).spell() for pc in pitch_classes),
        confidence=min(1.0, confidence),
    )


def analyze_with_root(
    pitch_classes: list[int], root: int, bass: int
) -> ChordDetectionResult | None:
    """Read the pitch classes as a chord on the given root."""
    match = _best_pattern(_intervals_above(pitch_classes, root))
    if match is None:
        return None
    pattern, fit = match
    if fit < MIN_CONFIDENCE:
        return None
    return _result(root, bass, pattern.name, pitch_classes, pattern.confidence * fit)


def _detect_power_chord(pitch_classes: list[int], bass: int) -> ChordDetectionResult | None:
    if len(pitch_classes) != 2:
        return None
    for root in sorted(pitch_classes, key=lambda pc: pc != bass):
        other = next(pc for pc in pitch_classes if pc != root)
        if (other - root) % SEMITONES_PER_OCTAVE == PERFECT_FIFTH:
            confidence = (
                POWER_CHORD_CONFIDENCE if root == bass else INVERTED_POWER_CHORD_CONFIDENCE
            )
            return _result(root, bass, "5", pitch_classes, confidence)
    return None


def detect_chord(midi_notes: Iterable[int]) -> ChordDetectionResult | None:
    """
    Identify the chord formed by a set of MIDI notes.

    Two distinct notes are only recognised as a power chord (root and
    fifth). Three or more are matched against every chord pattern.

    Args:
        midi_notes: Held MIDI note numbers, in any order

    Returns:
        The best reading, or None if the notes form no recognisable chord

    Example:
        detect_chord([60, 64, 67])      # C Major
        detect_chord([55, 60, 64])      # C Major/G
    """
    notes = sorted(set(midi_notes))
    if len(notes) < 2:
        return None

    # Pitch classes from the bass upwards, first occurrence only
    pitch_classes = list(dict.fromkeys(note % SEMITONES_PER_OCTAVE for note in notes))
    bass = pitch_classes[0]

    if len(notes) == 2:
        return _detect_power_chord(pitch_classes, bass)

    best = analyze_with_root(pitch_classes, bass, bass)
    best_score = 0.0
    if best is not None and best.confidence > MIN_CONFIDENCE:
        best_score = best.confidence * ROOT_POSITION_BIAS
    else:
        best = None

    if best_score < INVERSION_THRESHOLD:
        for root in pitch_classes[1:]:
            candidate = analyze_with_root(pitch_classes, root, bass)
            if candidate is not None and candidate.confidence > best_score * INVERSION_MARGIN:
                best = candidate
                best_score = candidate.confidence

    logger.debug("Detected %s from %s", best, notes)
    return best
