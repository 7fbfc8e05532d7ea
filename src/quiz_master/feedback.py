"""Feedback text shown while playing a quiz part."""

import random
from typing import Optional

OPTION_LABELS = ["A", "B", "C", "D"]

CORRECT_TEMPLATES = [
    "Correct! {reinforcement}",
    "Well done, that's right. {reinforcement}",
    "Exactly right! {reinforcement}",
]

WRONG_TEMPLATES = [
    "Not quite. The answer is {label}. {answer}",
    "That's not right. The correct answer is {label}. {answer}",
]

REINFORCEMENTS = [
    "Keep it up!",
    "Nice work!",
    "You're doing well!",
]


class FeedbackGenerator:
    """Builds the lines the console prints around each question."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def generate_intro(self, session) -> str:
        state = session.state
        question = session.current_question
        lines = [
            f"{session.subject} - Part {session.part_index + 1} | "
            f"Question {state.current_index + 1} of {session.total} | Score {state.score}",
            "",
            question.text,
        ]
        for i, opt in enumerate(question.options):
            lines.append(f"  {OPTION_LABELS[i]}. {opt}")
        return "\n".join(lines)

    def generate_reveal(self, session, is_correct: bool) -> str:
        question = session.current_question
        if is_correct:
            template = self._rng.choice(CORRECT_TEMPLATES)
            return template.format(reinforcement=self._rng.choice(REINFORCEMENTS))
        template = self._rng.choice(WRONG_TEMPLATES)
        return template.format(label=OPTION_LABELS[question.correct_index],
                               answer=question.correct_option)

    def generate_next_prompt(self, session) -> str:
        if session.is_last_question:
            return "Press n to see your result."
        return "Press n for the next question."

    def generate_summary(self, result) -> str:
        summary = (
            f"Quiz complete! {result.percentage}% - "
            f"you answered {result.score} of {result.total} questions correctly. "
        )
        if result.percentage >= 80:
            summary += "Outstanding performance!"
        elif result.percentage >= 60:
            summary += "Good work! Keep practicing."
        else:
            summary += "Keep studying, you'll improve with practice!"
        return summary

    def generate_empty_part(self, subject: str, part_index: int) -> str:
        return f"There are no questions in part {part_index + 1} of {subject}."
