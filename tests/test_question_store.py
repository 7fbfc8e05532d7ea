"""Tests for the QuestionStore module."""
import pytest
from unittest.mock import MagicMock
from quiz_master.models import Question
from quiz_master.question_store import QuestionStore


def make_question(subject="Math", text="What is 2+2?", correct=1, is_active=True):
    return Question(subject, text, ["3", "4", "5", "6"], correct, is_active)


@pytest.fixture
def listener():
    return MagicMock()


@pytest.fixture
def store(listener):
    return QuestionStore([
        make_question("Math", "Q1"),
        make_question("History", "Q2"),
        make_question("Math", "Q3"),
    ], on_change=listener)


def texts(store):
    return [q.text for q in store.questions]


def test_add_appends_and_notifies(store, listener):
    store.add(make_question("Science", "Q4"))
    assert texts(store) == ["Q1", "Q2", "Q3", "Q4"]
    listener.assert_called_once()
    assert len(listener.call_args[0][0]) == 4


def test_update_preserves_is_active(store):
    store.toggle_subject("History", False)
    store.update(1, make_question("History", "Q2 edited", correct=3, is_active=True))
    assert store[1].text == "Q2 edited"
    assert store[1].correct_index == 3
    assert store[1].is_active is False
    assert texts(store) == ["Q1", "Q2 edited", "Q3"]


def test_remove_keeps_order(store):
    store.remove(1)
    assert texts(store) == ["Q1", "Q3"]


def test_remove_bad_index(store):
    with pytest.raises(IndexError):
        store.remove(7)


def test_toggle_subject_hides_and_restores(store):
    store.toggle_subject("Math", False)
    assert [q for q in store.active_questions() if q.subject == "Math"] == []
    assert len(store) == 3
    store.toggle_subject("Math", True)
    assert [q.text for q in store.active_questions("Math")] == ["Q1", "Q3"]


def test_remove_subject(store):
    removed = store.remove_subject("Math")
    assert removed == 2
    assert texts(store) == ["Q2"]


def test_batch_add_defaults_is_active(store):
    records = [
        {"subject": "Art", "question": "Q5", "options": ["a", "b", "c", "d"], "correct": 0},
        {"subject": "Art", "question": "Q6", "options": ["a", "b", "c", "d"], "correct": 2},
    ]
    before = len(store)
    added = store.batch_add(records)
    assert added == 2
    assert len(store) == before + 2
    assert all(q.is_active for q in store.questions[-2:])


def test_listener_failure_is_swallowed():
    failing = MagicMock(side_effect=OSError("disk full"))
    store = QuestionStore(on_change=failing)
    store.add(make_question())
    assert len(store) == 1


def test_subjects_in_first_seen_order(store):
    assert store.subjects() == ["Math", "History"]


def test_subject_visibility_follows_first_question(store):
    store.update(0, make_question("Math", "Q1"))
    store.toggle_subject("History", False)
    assert store.subject_visibility() == {"Math": True, "History": False}


def test_search_matches_text_and_subject(store):
    assert [i for i, _ in store.search("hist")] == [1]
    assert [i for i, _ in store.search("q3")] == [2]
    assert [i for i, _ in store.search("", subject="Math")] == [0, 2]


def test_replace_all(store, listener):
    store.replace_all([make_question("Art", "Only")])
    assert texts(store) == ["Only"]
    listener.assert_called_once()
