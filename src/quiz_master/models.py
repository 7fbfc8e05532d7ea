"""Question model and single-question form validation."""

from dataclasses import dataclass, field, replace
from typing import List, Sequence

from .errors import ValidationError

OPTION_COUNT = 4


@dataclass
class Question:
    """A four-option multiple-choice question.

    ``to_dict``/``from_dict`` use the record shape shared by snapshots, share
    payloads and JSON imports: ``subject``, ``question``, ``options``,
    ``correct`` and ``isActive``.
    """

    subject: str
    text: str
    options: List[str] = field(default_factory=list)
    correct_index: int = 0
    is_active: bool = True

    def __post_init__(self):
        self.options = list(self.options)
        if len(self.options) != OPTION_COUNT:
            raise ValueError(f"Question needs {OPTION_COUNT} options, got {len(self.options)}")
        if not 0 <= self.correct_index < OPTION_COUNT:
            raise ValueError(f"correct_index out of range: {self.correct_index}")

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_index]

    def with_options(self, options: Sequence[str], correct_index: int) -> "Question":
        return replace(self, options=list(options), correct_index=correct_index)

    def to_dict(self) -> dict:
        return {
            "subject": self.subject,
            "question": self.text,
            "options": list(self.options),
            "correct": self.correct_index,
            "isActive": self.is_active,
        }

    @staticmethod
    def from_dict(d: dict) -> "Question":
        if not isinstance(d, dict):
            raise TypeError(f"Question record must be an object, got {type(d).__name__}")
        options = d["options"]
        if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
            raise TypeError("'options' must be a list of strings")
        is_active = d.get("isActive")
        if is_active is not None and not isinstance(is_active, bool):
            raise TypeError(f"'isActive' must be true or false, got {is_active!r}")
        return Question(
            subject=str(d["subject"]),
            text=str(d["question"]),
            options=options,
            correct_index=int(d["correct"]),
            is_active=True if is_active is None else is_active,
        )


def validate_form(subject: str, text: str, options: Sequence[str], correct_index: int) -> Question:
    """Build a question from the authoring form, rejecting empty fields."""
    subject = (subject or "").strip()
    text = (text or "").strip()
    options = [(o or "").strip() for o in options]
    if not subject:
        raise ValidationError("Subject is required.")
    if not text:
        raise ValidationError("Question text is required.")
    if len(options) != OPTION_COUNT or any(not o for o in options):
        raise ValidationError(f"All {OPTION_COUNT} options are required.")
    if not 0 <= correct_index < OPTION_COUNT:
        raise ValidationError("Pick which option is correct.")
    return Question(subject=subject, text=text, options=options,
                    correct_index=correct_index, is_active=True)
