"""Quiz Master: subject-grouped multiple-choice quizzes played in parts of ten."""

__version__ = "0.1.0"
