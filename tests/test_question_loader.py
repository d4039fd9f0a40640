"""
Tests for question_loader.py: local JSON bank, remote bank, fail-soft loading.
"""
import json

import requests

from trivia import question_loader
from trivia.question_loader import QuestionBank, load_questions, parse_question
from trivia.state import Question


def write_bank(tmp_path, data):
    path = tmp_path / "questions.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_parse_question_with_mapping():
    q = parse_question({"question": "Q?", "options": {"a": "x", "b": "y"}, "correct": "b"})
    assert q == Question(question="Q?", options={"A": "x", "B": "y"}, correct="B")


def test_parse_question_with_list_options():
    q = parse_question({"question": "Q?", "options": ["x", "y", "z"], "correct": "C"})
    assert q.options == {"A": "x", "B": "y", "C": "z"}


def test_public_dict_has_no_correct_key():
    q = parse_question({"question": "Q?", "options": ["x"], "correct": "A"})
    assert q.public_dict() == {"question": "Q?", "options": {"A": "x"}}
    assert q.to_dict()["correct"] == "A"


def test_load_local_file(tmp_path):
    path = write_bank(
        tmp_path,
        [
            {"question": "Q1?", "options": ["x", "y"], "correct": "A"},
            {"question": "sans réponse", "options": ["x"]},
            "pas un objet",
            {"question": "Q2?", "options": ["x", "y"], "correct": "B"},
        ],
    )
    questions = QuestionBank(path).load()
    assert [q.question for q in questions] == ["Q1?", "Q2?"]


def test_missing_file_gives_empty_list(tmp_path):
    assert load_questions(str(tmp_path / "absent.json")) == []


def test_invalid_json_gives_empty_list(tmp_path):
    path = tmp_path / "questions.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_questions(str(path)) == []


def test_non_list_bank_gives_empty_list(tmp_path):
    path = write_bank(tmp_path, {"question": "Q?"})
    assert load_questions(str(path)) == []


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"status {self.status}")

    def json(self):
        return self.payload


def test_load_remote_bank(monkeypatch):
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return FakeResponse([{"question": "Q?", "options": ["x", "y"], "correct": "B"}])

    monkeypatch.setattr(question_loader.requests, "get", fake_get)
    questions = load_questions("https://example.org/questions.json")
    assert [q.correct for q in questions] == ["B"]
    assert calls == [("https://example.org/questions.json", 10)]


def test_remote_failure_gives_empty_list(monkeypatch):
    def fake_get(url, timeout):
        raise requests.ConnectionError("down")

    monkeypatch.setattr(question_loader.requests, "get", fake_get)
    assert load_questions("http://example.org/questions.json") == []


def test_remote_http_error_gives_empty_list(monkeypatch):
    monkeypatch.setattr(question_loader.requests, "get", lambda url, timeout: FakeResponse(None, 500))
    assert load_questions("http://example.org/questions.json") == []


def test_bundled_bank_loads():
    from trivia.paths import QUESTIONS_PATH

    questions = load_questions(str(QUESTIONS_PATH))
    assert len(questions) == 4
    assert all(q.correct in q.options for q in questions)
