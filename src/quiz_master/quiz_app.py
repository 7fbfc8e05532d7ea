"""Console application: play mode for learners, create mode for authors."""

import logging
import random
from pathlib import Path
from typing import List, Optional

from .audio_cues import CuePlayer, NullCuePlayer
from .auth import PassphraseGate
from .bulk_parser import parse_bulk, parse_json_records
from .errors import EmptyPartError, ParseError, ValidationError
from .feedback import OPTION_LABELS, FeedbackGenerator
from .models import validate_form
from .partitioner import active_for_subject, parts_for, playable_subjects
from .persistence import encode_share_payload
from .question_store import QuestionStore
from .quiz_session import QuizSession, SessionResult

logger = logging.getLogger(__name__)

CREATE_HELP = """Commands:
  l [text]       list questions, optionally filtered by text
  a              add a question
  e <n>          edit question n
  d <n>          delete question n
  s              list subjects and their visibility
  t <subject>    show/hide a subject
  x <subject>    delete a subject and all its questions
  b              bulk import from a text or JSON file
  j <file>       import a JSON file
  share          print a share payload for --data
  q              log out"""


def parse_answer(text: str) -> Optional[int]:
    """Map ``a``-``d`` or ``1``-``4`` to an option index."""
    text = text.strip().upper()
    if text in OPTION_LABELS:
        return OPTION_LABELS.index(text)
    if text.isdigit() and 1 <= int(text) <= len(OPTION_LABELS):
        return int(text) - 1
    return None


class QuizApp:
    """Drives the store, the partitioner and quiz sessions from text commands."""

    def __init__(self, store: QuestionStore, gate: PassphraseGate,
                 cue_player: Optional[CuePlayer] = None,
                 feedback: Optional[FeedbackGenerator] = None,
                 rng: Optional[random.Random] = None):
        self.store = store
        self.gate = gate
        self.cues = cue_player or NullCuePlayer()
        self.feedback = feedback or FeedbackGenerator(rng)
        self.rng = rng
        self.session: Optional[QuizSession] = None

    def say(self, text: str):
        print(f"\n{text}")

    def ask(self, prompt: str) -> str:
        try:
            return input(f"{prompt} ").strip()
        except (EOFError, KeyboardInterrupt):
            return "q"

    def confirm(self, prompt: str) -> bool:
        return self.ask(f"{prompt} [y/N]").lower() in ("y", "yes")

    def run(self):
        self.say("Welcome to Quiz Master!")
        while True:
            choice = self.ask("[p]lay, [c]reate or [q]uit?").lower()
            if choice in ("p", "play"):
                self.play_menu()
            elif choice in ("c", "create"):
                self.create_menu()
            elif choice in ("q", "quit", "exit"):
                self.say("Goodbye!")
                return

    # ------------------------------------------------------------
    # Play mode
    # ------------------------------------------------------------

    def _pick(self, prompt: str, count: int) -> Optional[int]:
        """Ask for a 1-based menu number; None means go back."""
        while True:
            choice = self.ask(prompt).lower()
            if choice in ("", "q", "b", "back"):
                return None
            if choice.isdigit() and 1 <= int(choice) <= count:
                return int(choice) - 1
            self.say(f"Enter a number from 1 to {count}, or q to go back.")

    def play_menu(self):
        subjects = playable_subjects(self.store.questions)
        if not subjects:
            self.say("No subjects are open for practice yet.")
            return
        lines = [f"  {i + 1}. {name} ({count} questions)" for i, (name, count) in enumerate(subjects)]
        self.say("Subjects:\n" + "\n".join(lines))
        picked = self._pick("Choose a subject:", len(subjects))
        if picked is None:
            return
        subject = subjects[picked][0]

        while True:
            parts = parts_for(self.store.questions, subject)
            lines = [f"  {p.index + 1}. Questions {p.start_ordinal} to {p.end_ordinal}" for p in parts]
            self.say(f"Parts of {subject}:\n" + "\n".join(lines))
            part_index = self._pick("Choose a part:", len(parts))
            if part_index is None:
                return
            self.run_session(subject, part_index)

    def handle_play_command(self, text: str) -> Optional[str]:
        lower = text.lower().strip()
        if lower in ("q", "quit", "exit"):
            return "quit"
        if lower in ("n", "next"):
            return "next"
        if lower in ("m", "mute"):
            return "mute"
        return None

    def run_session(self, subject: str, part_index: int) -> Optional[SessionResult]:
        """Play one part. Returns the result, or None if the learner left early."""
        self.session = session = QuizSession(
            subject, part_index,
            active_for_subject(self.store.questions, subject),
            cue_player=self.cues, rng=self.rng,
        )
        try:
            return self._play(session)
        except EmptyPartError as e:
            logger.info(str(e))
            self.say(self.feedback.generate_empty_part(subject, part_index))
            self.ask("Press Enter to go back.")
            return None
        finally:
            self.session = None

    def _play(self, session: QuizSession) -> Optional[SessionResult]:
        show_question = True
        while not session.is_finished:
            if show_question:
                self.say(self.feedback.generate_intro(session))
                show_question = False
            text = self.ask(">")
            command = self.handle_play_command(text)
            if command == "quit":
                self.say("Leaving the quiz.")
                return None
            if command == "mute":
                muted = self.cues.toggle_mute()
                self.say("Sound off." if muted else "Sound on.")
                continue
            if command == "next":
                if session.advance():
                    show_question = True
                else:
                    self.say("Choose an answer first.")
                continue

            idx = parse_answer(text)
            if idx is None:
                self.say("Answer with A-D (or 1-4), n for next, m to mute, q to leave.")
                continue
            is_correct = session.select_answer(idx)
            if is_correct is None:
                self.say("You already answered. " + self.feedback.generate_next_prompt(session))
                continue
            self.say(self.feedback.generate_reveal(session, is_correct))
            self.say(self.feedback.generate_next_prompt(session))

        result = session.result()
        self.say(self.feedback.generate_summary(result))
        return result

    # ------------------------------------------------------------
    # Create mode
    # ------------------------------------------------------------

    def create_menu(self):
        if not self.gate.is_unlocked:
            if not self.gate.verify(self.ask("Passphrase:")):
                self.say("Wrong passphrase.")
                return
        self.say(f"Authoring unlocked. {len(self.store)} questions.\n{CREATE_HELP}")
        try:
            while True:
                line = self.ask("create>")
                if line.lower() in ("q", "quit", "logout"):
                    return
                self.handle_create_command(line)
        finally:
            self.gate.lock()

    def handle_create_command(self, line: str):
        command, _, arg = line.partition(" ")
        command, arg = command.lower(), arg.strip()
        handlers = {
            "l": lambda: self.list_questions(arg),
            "a": self.add_question,
            "e": lambda: self.edit_question(arg),
            "d": lambda: self.delete_question(arg),
            "s": self.list_subjects,
            "t": lambda: self.toggle_subject(arg),
            "x": lambda: self.delete_subject(arg),
            "b": self.bulk_import,
            "j": lambda: self.import_json_file(arg),
            "share": self.share,
        }
        handler = handlers.get(command)
        if handler is None:
            self.say(CREATE_HELP)
            return
        handler()

    def list_questions(self, query: str = ""):
        matches = self.store.search(query)
        if not matches:
            self.say("No matching questions.")
            return
        lines = [f"  {i + 1}. [{q.subject}] {q.text}{'' if q.is_active else ' (hidden)'}"
                 for i, q in matches]
        self.say(f"Questions ({len(self.store)}):\n" + "\n".join(lines))

    def _question_number(self, arg: str) -> Optional[int]:
        if arg.isdigit() and 1 <= int(arg) <= len(self.store):
            return int(arg) - 1
        self.say(f"Give a question number from 1 to {len(self.store)}.")
        return None

    def _ask_form(self, current=None):
        """Prompt for every field; an empty answer keeps the current value."""
        def field(prompt, value):
            answer = self.ask(f"{prompt}{f' [{value}]' if value else ''}:")
            return answer or value

        subject = field("Subject", current.subject if current else "")
        text = field("Question", current.text if current else "")
        options = [
            field(f"Option {label}", current.options[i] if current else "")
            for i, label in enumerate(OPTION_LABELS)
        ]
        default_label = OPTION_LABELS[current.correct_index] if current else "A"
        correct = parse_answer(field("Correct option", default_label))
        return validate_form(subject, text, options, -1 if correct is None else correct)

    def add_question(self):
        try:
            question = self._ask_form()
        except ValidationError as e:
            self.say(f"Not saved: {e}")
            return
        self.store.add(question)
        self.say("Question added.")

    def edit_question(self, arg: str):
        index = self._question_number(arg)
        if index is None:
            return
        try:
            question = self._ask_form(self.store[index])
        except ValidationError as e:
            self.say(f"Not saved: {e}")
            return
        self.store.update(index, question)
        self.say("Question updated.")

    def delete_question(self, arg: str):
        index = self._question_number(arg)
        if index is None:
            return
        if self.confirm(f"Delete \"{self.store[index].text}\"?"):
            self.store.remove(index)
            self.say("Question deleted.")

    def list_subjects(self):
        visibility = self.store.subject_visibility()
        if not visibility:
            self.say("No subjects yet.")
            return
        lines = [f"  {name}: {'shown' if shown else 'hidden'}" for name, shown in visibility.items()]
        self.say("Subjects:\n" + "\n".join(lines))

    def _known_subject(self, name: str) -> bool:
        if name in self.store.subjects():
            return True
        self.say(f"Unknown subject '{name}'.")
        return False

    def toggle_subject(self, name: str):
        if not self._known_subject(name):
            return
        active = not self.store.subject_visibility()[name]
        self.store.toggle_subject(name, active)
        self.say(f"{name} is now {'shown' if active else 'hidden'}.")

    def delete_subject(self, name: str):
        if not self._known_subject(name):
            return
        if self.confirm(f"Delete subject \"{name}\" and all of its questions?"):
            removed = self.store.remove_subject(name)
            self.say(f"Deleted {removed} questions.")

    def _read_file(self, path: str) -> Optional[str]:
        try:
            return Path(path).read_text(encoding="utf-8")
        except OSError as e:
            self.say(f"Cannot read {path}: {e}")
            return None

    def _import(self, questions: List) -> int:
        if not questions:
            self.say("No questions found.")
            return 0
        added = self.store.batch_add(questions)
        self.say(f"Imported {added} questions.")
        return added

    def bulk_import(self):
        text = self._read_file(self.ask("File to import:"))
        if text is None:
            return
        subject = self.ask("Subject for these questions:")
        try:
            questions = parse_bulk(text, subject)
        except ParseError as e:
            self.say(f"Import failed: {e}")
            return
        self._import(questions)

    def import_json_file(self, path: str):
        text = self._read_file(path)
        if text is None:
            return
        try:
            questions = parse_json_records(text)
        except ParseError as e:
            self.say(f"Import failed: {e}")
            return
        self._import(questions)

    def share(self):
        self.say("Start the app with:\n  --data " + encode_share_payload(self.store.questions))
