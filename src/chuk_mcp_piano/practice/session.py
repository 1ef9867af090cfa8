"""
Practice session - tracks a student's progress through one exercise.

The session is a pure state machine: it is fed note-on/note-off events and
reports which notes to highlight next. It does no I/O; listeners are plain
callables.

With auto key progression enabled, finishing an exercise moves the
configuration one step around the circle of fifths and generates the next
exercise, so practice walks all twelve keys.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from chuk_mcp_piano.core.circle_of_fifths import next_key
from chuk_mcp_piano.core.pitch import Key, PitchClass
from chuk_mcp_piano.models.practice import (
    ArpeggioConfig,
    PracticeConfig,
    PracticeExercise,
    PracticeStep,
    StepType,
)

from .strategies import StrategyFactory

logger = logging.getLogger(__name__)


def advance_key(config: PracticeConfig) -> PracticeConfig:
    """
    Same configuration one fifth higher.

    Arpeggios move their root; keyed modes move their key. Chords-by-type
    has no key and is returned unchanged.
    """
    if isinstance(config, ArpeggioConfig):
        root = next_key(Key(int(config.root))).pitch_class
        return config.model_copy(update={"root": root})
    key = getattr(config, "key", None)
    if key is None:
        return config
    return config.model_copy(update={"key": next_key(key)})


class PracticeSession:
    """
    Progress through the current exercise.

    A SEQUENTIAL step completes when its note is played. SIMULTANEOUS and
    PAIRED steps complete when exactly the notes of the step are held; a
    wrong note still held blocks the step until it is released.
    """

    def __init__(
        self,
        config: PracticeConfig,
        on_exercise_completed: Callable[[PracticeExercise], None] | None = None,
        on_highlighted_notes_changed: Callable[[list[int]], None] | None = None,
        auto_progress_keys: bool = False,
    ) -> None:
        self._on_exercise_completed = on_exercise_completed
        self._on_highlighted_notes_changed = on_highlighted_notes_changed
        self.auto_progress_keys = auto_progress_keys
        self._config = config
        self._exercise = StrategyFactory.create_exercise(config)
        self._step_index = 0
        self._held: set[int] = set()
        self._matched: set[int] = set()
        self.practice_active = False
        self.mistakes = 0
        self.completed_exercises = 0

    @property
    def config(self) -> PracticeConfig:
        return self._config

    @property
    def exercise(self) -> PracticeExercise:
        return self._exercise

    @property
    def step_index(self) -> int:
        return self._step_index

    @property
    def current_step(self) -> PracticeStep | None:
        if self._step_index >= len(self._exercise.steps):
            return None
        return self._exercise.steps[self._step_index]

    @property
    def is_complete(self) -> bool:
        return self.current_step is None

    @property
    def progress(self) -> float:
        """Fraction of steps completed (0.0 - 1.0)."""
        return self._step_index / len(self._exercise.steps)

    @property
    def selected_key(self) -> Key | None:
        if isinstance(self._config, ArpeggioConfig):
            return Key(int(self._config.root))
        return getattr(self._config, "key", None)

    @property
    def selected_root(self) -> PitchClass | None:
        key = self.selected_key
        return key.pitch_class if key is not None else None

    def highlighted_notes(self) -> list[int]:
        """Notes of the current step that still have to be played."""
        step = self.current_step
        if step is None:
            return []
        return [note for note in step.notes if note not in self._matched]

    def set_config(self, config: PracticeConfig) -> None:
        """Switch to a new configuration and regenerate the exercise."""
        self._config = config
        self._load(StrategyFactory.create_exercise(config))

    def set_auto_key_progression(self, enabled: bool) -> None:
        self.auto_progress_keys = enabled

    def start(self) -> None:
        """Start (or restart) the current exercise from its first step."""
        self._load(self._exercise)
        self.practice_active = True

    def stop(self) -> None:
        self.practice_active = False
        self._held.clear()
        self._matched.clear()

    def reset(self) -> None:
        self._load(self._exercise)

    def note_on(self, midi_note: int) -> bool:
        """
        Register a key press.

        Returns True if the note belongs to the current step. Wrong notes
        count as mistakes and do not advance.
        """
        step = self.current_step
        if not self.practice_active or step is None:
            return False

        self._held.add(midi_note)
        if midi_note not in step.notes:
            self.mistakes += 1
            logger.debug("Wrong note %d at step %d", midi_note, self._step_index)
            return False

        self._matched.add(midi_note)
        if step.step_type == StepType.SEQUENTIAL or self._holds_exactly(step):
            self._advance()
        else:
            self._notify_highlight()
        return True

    def note_off(self, midi_note: int) -> None:
        """
        Register a key release.

        A released chord tone must be played again. Releasing a wrong note
        can leave exactly the step's notes held, which completes the step.
        """
        self._held.discard(midi_note)
        step = self.current_step
        if not self.practice_active or step is None or step.step_type == StepType.SEQUENTIAL:
            return
        if midi_note in self._matched:
            self._matched.discard(midi_note)
            self._notify_highlight()
        elif self._holds_exactly(step):
            self._advance()

    def complete_exercise(self) -> None:
        """
        Finish the exercise now.

        Notifies the completion listener and, with auto progression on, moves
        to the next key of the circle of fifths.
        """
        finished = self._exercise
        self.practice_active = False
        self.completed_exercises += 1
        logger.debug("Completed exercise '%s'", finished.name)

        if self._on_exercise_completed is not None:
            self._on_exercise_completed(finished)

        if self.auto_progress_keys:
            self._config = advance_key(self._config)
            self._load(StrategyFactory.create_exercise(self._config))
            logger.debug("Auto progression moved to '%s'", self._exercise.name)
        else:
            self._notify_highlight()

    def _holds_exactly(self, step: PracticeStep) -> bool:
        return self._held == set(step.notes)

    def _advance(self) -> None:
        self._step_index += 1
        self._held.clear()
        self._matched.clear()
        if self.is_complete:
            self.complete_exercise()
        else:
            self._notify_highlight()

    def _load(self, exercise: PracticeExercise) -> None:
        self._exercise = exercise
        self._step_index = 0
        self._held.clear()
        self._matched.clear()
        self._notify_highlight()

    def _notify_highlight(self) -> None:
        if self._on_highlighted_notes_changed is not None:
            self._on_highlighted_notes_changed(self.highlighted_notes())
