"""Session Partitioner: splits a subject's active questions into parts."""

import math
from typing import Dict, List, Sequence, Tuple

from .models import Question

PART_SIZE = 10


class QuizPart:
    """Metadata of one part. Ordinals are 1-based and inclusive."""

    def __init__(self, index: int, start_ordinal: int, end_ordinal: int):
        self.index = index
        self.start_ordinal = start_ordinal
        self.end_ordinal = end_ordinal

    @property
    def size(self) -> int:
        return self.end_ordinal - self.start_ordinal + 1

    def __eq__(self, other):
        if not isinstance(other, QuizPart):
            return NotImplemented
        return (self.index, self.start_ordinal, self.end_ordinal) == \
            (other.index, other.start_ordinal, other.end_ordinal)

    def __repr__(self):
        return f"QuizPart(index={self.index}, {self.start_ordinal}-{self.end_ordinal})"

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "start_ordinal": self.start_ordinal,
            "end_ordinal": self.end_ordinal,
            "size": self.size,
        }


def active_for_subject(questions: Sequence[Question], subject: str) -> List[Question]:
    return [q for q in questions if q.is_active and q.subject == subject]


def parts_for(questions: Sequence[Question], subject: str) -> List[QuizPart]:
    """Compute the parts of ``subject`` over its active questions."""
    total = len(active_for_subject(questions, subject))
    return [
        QuizPart(i, i * PART_SIZE + 1, min((i + 1) * PART_SIZE, total))
        for i in range(math.ceil(total / PART_SIZE))
    ]


def part_questions(active_subject_questions: Sequence[Question], part_index: int) -> List[Question]:
    start = part_index * PART_SIZE
    if start < 0:
        return []
    return list(active_subject_questions[start:start + PART_SIZE])


def playable_subjects(questions: Sequence[Question]) -> List[Tuple[str, int]]:
    """Subjects with at least one active question, with their active counts."""
    counts: Dict[str, int] = {}
    for q in questions:
        if q.is_active:
            counts[q.subject] = counts.get(q.subject, 0) + 1
    return list(counts.items())
