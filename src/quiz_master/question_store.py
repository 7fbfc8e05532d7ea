"""Question Store: the ordered question collection and its mutations."""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from .models import Question

logger = logging.getLogger(__name__)

QuestionLike = Union[Question, dict]


class QuestionStore:
    """Owns the question collection.

    Every mutation rebuilds the list without reordering untouched questions and
    then notifies ``on_change`` with a snapshot. Subject facts are always
    derived from the questions themselves.
    """

    def __init__(self, questions: Optional[Iterable[Question]] = None,
                 on_change: Optional[Callable[[List[Question]], None]] = None):
        self._questions: List[Question] = list(questions or [])
        self._on_change = on_change

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self):
        return iter(list(self._questions))

    def __getitem__(self, index: int) -> Question:
        return self._questions[index]

    @property
    def questions(self) -> List[Question]:
        return list(self._questions)

    def _commit(self, questions: List[Question]):
        self._questions = questions
        if self._on_change is None:
            return
        try:
            self._on_change(list(questions))
        except Exception as e:
            logger.error(f"Change listener failed: {e}")

    @staticmethod
    def _coerce(q: QuestionLike) -> Question:
        if isinstance(q, Question):
            return q
        return Question.from_dict(q)

    def _check_index(self, index: int):
        if not 0 <= index < len(self._questions):
            raise IndexError(f"No question at index {index}")

    # --- mutations ---

    def add(self, q: QuestionLike):
        self._commit(self._questions + [self._coerce(q)])

    def update(self, index: int, q: QuestionLike):
        """Overwrite the question at ``index``, keeping its visibility."""
        self._check_index(index)
        new_q = self._coerce(q)
        self._commit([
            Question(new_q.subject, new_q.text, new_q.options, new_q.correct_index, old.is_active)
            if i == index else old
            for i, old in enumerate(self._questions)
        ])

    def remove(self, index: int):
        self._check_index(index)
        self._commit([q for i, q in enumerate(self._questions) if i != index])

    def toggle_subject(self, name: str, active: bool):
        self._commit([
            Question(q.subject, q.text, q.options, q.correct_index, active)
            if q.subject == name else q
            for q in self._questions
        ])
        logger.info(f"Subject '{name}' {'shown' if active else 'hidden'}")

    def remove_subject(self, name: str) -> int:
        """Delete every question of a subject. The caller confirms first."""
        kept = [q for q in self._questions if q.subject != name]
        removed = len(self._questions) - len(kept)
        self._commit(kept)
        logger.info(f"Removed subject '{name}' ({removed} questions)")
        return removed

    def batch_add(self, qs: Iterable[QuestionLike]) -> int:
        added = [self._coerce(q) for q in qs]
        self._commit(self._questions + added)
        logger.info(f"Batch added {len(added)} questions")
        return len(added)

    def replace_all(self, qs: Iterable[QuestionLike]):
        self._commit([self._coerce(q) for q in qs])

    # --- derivations ---

    def subjects(self) -> List[str]:
        seen: Dict[str, None] = {}
        for q in self._questions:
            seen.setdefault(q.subject, None)
        return list(seen)

    def subject_visibility(self) -> Dict[str, bool]:
        """Map each subject to the visibility of its first question."""
        visibility: Dict[str, bool] = {}
        for q in self._questions:
            visibility.setdefault(q.subject, q.is_active)
        return visibility

    def active_questions(self, subject: Optional[str] = None) -> List[Question]:
        return [
            q for q in self._questions
            if q.is_active and (subject is None or q.subject == subject)
        ]

    def search(self, query: str = "", subject: Optional[str] = None) -> List[Tuple[int, Question]]:
        """Return ``(index, question)`` pairs matching text or subject."""
        needle = query.lower()
        return [
            (i, q) for i, q in enumerate(self._questions)
            if (needle in q.text.lower() or needle in q.subject.lower())
            and (subject is None or q.subject == subject)
        ]
