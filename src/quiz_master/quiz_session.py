"""Quiz Session Engine: plays one part of a subject from start to finish."""

import logging
import math
import random
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

from .audio_cues import CORRECT, WRONG, CuePlayer, NullCuePlayer
from .errors import EmptyPartError
from .models import Question
from .partitioner import part_questions

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    current_index: int = 0
    score: int = 0
    is_finished: bool = False
    selected_answer: Optional[int] = None
    reveal_answer: bool = False


@dataclass
class SessionResult:
    score: int
    total: int

    @property
    def percentage(self) -> int:
        if self.total == 0:
            return 0
        # half rounds up, matching how scores have always been shown
        return int(math.floor(self.score / self.total * 100 + 0.5))


def shuffle_question(q: Question, rng: random.Random) -> Question:
    """Shuffle the options of ``q``, keeping the correct answer attached."""
    tagged = [(opt, i == q.correct_index) for i, opt in enumerate(q.options)]
    rng.shuffle(tagged)
    correct = next(i for i, (_, is_correct) in enumerate(tagged) if is_correct)
    return q.with_options([opt for opt, _ in tagged], correct)


class QuizSession:
    """One attempt at one part.

    Options and question order are shuffled once when the session is built,
    so a session always presents the same order; a new session reshuffles.
    """

    def __init__(self, subject: str, part_index: int,
                 active_subject_questions: Sequence[Question],
                 cue_player: Optional[CuePlayer] = None,
                 rng: Optional[random.Random] = None):
        self.subject = subject
        self.part_index = part_index
        self.cues = cue_player or NullCuePlayer()
        self._rng = rng or random.Random()
        self._questions = self._prepare(part_questions(active_subject_questions, part_index))
        self._state = SessionState()
        logger.info(f"Session started: '{subject}' part {part_index + 1}, {len(self._questions)} questions")

    def _prepare(self, subset: List[Question]) -> List[Question]:
        prepared = [shuffle_question(q, self._rng) for q in subset]
        self._rng.shuffle(prepared)
        return prepared

    @property
    def is_empty(self) -> bool:
        return not self._questions

    def _require_questions(self):
        if self.is_empty:
            raise EmptyPartError(self.subject, self.part_index)

    @property
    def questions(self) -> List[Question]:
        return list(self._questions)

    @property
    def total(self) -> int:
        return len(self._questions)

    @property
    def state(self) -> SessionState:
        return replace(self._state)

    @property
    def is_finished(self) -> bool:
        return self._state.is_finished

    @property
    def current_question(self) -> Question:
        self._require_questions()
        return self._questions[self._state.current_index]

    @property
    def is_last_question(self) -> bool:
        return self._state.current_index + 1 >= self.total

    @property
    def progress(self) -> float:
        if self.is_empty:
            return 0.0
        return (self._state.current_index + 1) / self.total * 100

    def select_answer(self, idx: int) -> Optional[bool]:
        """Answer the current question.

        Returns whether the answer was correct, or None when the question was
        already answered or the session is finished.
        """
        self._require_questions()
        if self._state.is_finished or self._state.selected_answer is not None:
            return None
        question = self.current_question
        if not 0 <= idx < len(question.options):
            raise ValueError(f"No option at index {idx}")

        is_correct = idx == question.correct_index
        self._state.selected_answer = idx
        self._state.reveal_answer = True
        if is_correct:
            self._state.score += 1
        try:
            self.cues.play(CORRECT if is_correct else WRONG)
        except Exception as e:
            logger.debug(f"Cue player failed: {e}")
        logger.debug(f"Q{self._state.current_index + 1}: picked {idx}, correct={is_correct}")
        return is_correct

    def advance(self) -> bool:
        """Move past a revealed answer. Returns False when nothing happened."""
        self._require_questions()
        if self._state.is_finished or not self._state.reveal_answer:
            return False
        if self._state.current_index + 1 < self.total:
            self._state.current_index += 1
            self._state.selected_answer = None
            self._state.reveal_answer = False
        else:
            self._state.is_finished = True
            logger.info(f"Session finished: {self._state.score}/{self.total}")
        return True

    def result(self) -> Optional[SessionResult]:
        if not self._state.is_finished:
            return None
        return SessionResult(score=self._state.score, total=self.total)
