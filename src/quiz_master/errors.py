"""Error types raised by the quiz core."""


class QuizError(Exception):
    """Base class for quiz errors."""


class DecodeError(QuizError):
    """Startup payload or persisted snapshot could not be decoded."""


class ParseError(QuizError):
    """Bulk import input could not be parsed. Nothing was imported."""


class ValidationError(QuizError):
    """A single-question form is incomplete."""


class EmptyPartError(QuizError):
    """The requested quiz part has no questions."""

    def __init__(self, subject: str, part_index: int):
        super().__init__(f"Part {part_index + 1} of '{subject}' has no questions.")
        self.subject = subject
        self.part_index = part_index
