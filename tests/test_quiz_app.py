"""Tests for the QuizApp console orchestrator."""
import random
import pytest
from unittest.mock import MagicMock
from quiz_master.auth import PassphraseGate
from quiz_master.models import Question
from quiz_master.persistence import decode_share_payload
from quiz_master.question_store import QuestionStore
from quiz_master.quiz_app import QuizApp, parse_answer


def make_questions(count, subject="Math"):
    return [
        Question(subject, f"{subject} Q{i + 1}", ["a", "b", "c", "d"], i % 4)
        for i in range(count)
    ]


@pytest.fixture
def store():
    return QuestionStore(make_questions(3) + make_questions(2, "History"))


@pytest.fixture
def app(store):
    app_obj = QuizApp(store=store, gate=PassphraseGate("1234"),
                      cue_player=MagicMock(), rng=random.Random(5))
    app_obj.say = MagicMock()
    return app_obj


def said(app):
    return "\n".join(c.args[0] for c in app.say.call_args_list)


def answer_correctly(app):
    """Fake learner input that always picks the right option, then moves on."""
    def ask(prompt):
        session = app.session
        if session.state.reveal_answer:
            return "n"
        return str(session.current_question.correct_index + 1)
    return ask


# --- parse_answer ---

@pytest.mark.parametrize("text,expected", [
    ("a", 0), ("D", 3), ("1", 0), ("4", 3), (" b ", 1), ("5", None), ("e", None), ("", None),
])
def test_parse_answer(text, expected):
    assert parse_answer(text) == expected


# --- play mode ---

def test_handle_play_commands(app):
    assert app.handle_play_command("Q") == "quit"
    assert app.handle_play_command("next") == "next"
    assert app.handle_play_command("m") == "mute"
    assert app.handle_play_command("b") is None


def test_run_session_all_correct(app):
    app.ask = MagicMock(side_effect=answer_correctly(app))
    result = app.run_session("Math", 0)
    assert result.score == 3
    assert result.total == 3
    assert result.percentage == 100
    assert app.session is None
    assert "100%" in said(app)


def test_run_session_quit_returns_none(app):
    app.ask = MagicMock(return_value="q")
    assert app.run_session("Math", 0) is None
    assert "Leaving the quiz." in said(app)


def test_next_before_answer_is_refused(app):
    app.ask = MagicMock(side_effect=["n", "q"])
    app.run_session("Math", 0)
    assert "Choose an answer first." in said(app)


def test_second_answer_is_ignored(app):
    app.ask = MagicMock(side_effect=["1", "2", "q"])
    app.run_session("Math", 0)
    assert "You already answered." in said(app)
    assert app.cues.play.call_count == 1


def test_mute_toggles_cues(app):
    app.cues.toggle_mute.return_value = True
    app.ask = MagicMock(side_effect=["m", "q"])
    app.run_session("Math", 0)
    app.cues.toggle_mute.assert_called_once()
    assert "Sound off." in said(app)


def test_empty_part_shows_exit_only(app):
    app.ask = MagicMock(return_value="")
    assert app.run_session("Math", 4) is None
    assert "no questions in part 5" in said(app)
    app.ask.assert_called_once_with("Press Enter to go back.")


def test_hidden_subject_not_offered(app, store):
    store.toggle_subject("Math", False)
    app.ask = MagicMock(return_value="q")
    app.play_menu()
    assert "History (2 questions)" in said(app)
    assert "Math" not in said(app)


def test_play_menu_runs_picked_part(app):
    app.run_session = MagicMock()
    app.ask = MagicMock(side_effect=["1", "1", "q"])
    app.play_menu()
    app.run_session.assert_called_once_with("Math", 0)
    assert "Questions 1 to 3" in said(app)


# --- create mode ---

def test_create_requires_passphrase(app):
    app.ask = MagicMock(return_value="wrong")
    app.create_menu()
    assert "Wrong passphrase." in said(app)
    assert app.gate.is_unlocked is False


def test_create_logout_locks_gate(app):
    app.ask = MagicMock(side_effect=["1234", "q"])
    app.create_menu()
    assert app.gate.is_unlocked is False


def test_add_question(app, store):
    app.ask = MagicMock(side_effect=["Art", "Who painted it?", "Me", "You", "Them", "Us", "C"])
    app.add_question()
    assert store[-1].subject == "Art"
    assert store[-1].correct_index == 2


def test_add_question_validation_error(app, store):
    app.ask = MagicMock(side_effect=["Art", "", "Me", "You", "Them", "Us", "A"])
    app.add_question()
    assert len(store) == 5
    assert "Not saved" in said(app)


def test_edit_keeps_blank_fields(app, store):
    store.toggle_subject("Math", False)
    app.ask = MagicMock(side_effect=["", "Edited?", "", "", "", "", "D"])
    app.edit_question("1")
    assert store[0].text == "Edited?"
    assert store[0].subject == "Math"
    assert store[0].correct_index == 3
    assert store[0].is_active is False


def test_delete_question_needs_confirmation(app, store):
    app.ask = MagicMock(return_value="n")
    app.delete_question("1")
    assert len(store) == 5
    app.ask = MagicMock(return_value="y")
    app.delete_question("1")
    assert len(store) == 4


def test_delete_subject(app, store):
    app.ask = MagicMock(return_value="yes")
    app.delete_subject("History")
    assert store.subjects() == ["Math"]


def test_toggle_subject_flips_visibility(app, store):
    app.toggle_subject("History")
    assert store.subject_visibility()["History"] is False
    app.toggle_subject("Nope")
    assert "Unknown subject 'Nope'." in said(app)


def test_bulk_import_from_text_file(app, store, tmp_path):
    path = tmp_path / "bulk.txt"
    path.write_text("1. New?\nA. x\nB. y (correct)\n\n2. Other?\nA. z", encoding="utf-8")
    app.ask = MagicMock(side_effect=[str(path), "Science"])
    app.bulk_import()
    assert len(store) == 7
    assert store[-2].subject == "Science"
    assert store[-2].correct_index == 1


def test_bulk_import_bad_json_imports_nothing(app, store, tmp_path):
    path = tmp_path / "bulk.json"
    path.write_text('[{"subject": "Art"}]', encoding="utf-8")
    app.ask = MagicMock(side_effect=[str(path), ""])
    app.bulk_import()
    assert len(store) == 5
    assert "Import failed" in said(app)


def test_import_json_file(app, store, tmp_path):
    path = tmp_path / "import.json"
    path.write_text('[{"subject": "Art", "question": "Q?", "options": ["a", "b", "c", "d"], "correct": 1}]',
                    encoding="utf-8")
    app.import_json_file(str(path))
    assert store[-1].subject == "Art"
    assert store[-1].is_active is True


def test_import_missing_file(app, store):
    app.import_json_file("/nonexistent/file.json")
    assert len(store) == 5
    assert "Cannot read" in said(app)


def test_share_prints_payload(app, store):
    app.share()
    payload = said(app).split("--data ")[1].strip()
    assert decode_share_payload(payload) == store.questions


def test_unknown_create_command_shows_help(app):
    app.handle_create_command("zzz")
    assert "Commands:" in said(app)
