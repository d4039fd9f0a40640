"""
Unit tests for scoring.py: awards on reveal, buzz bonus, answer normalization.
"""
from trivia.scoring import apply_awards, compute_awards, normalize_answer
from trivia.state import Player, Question

QUESTION = Question(question="2+2?", options={"A": "3", "B": "4"}, correct="B")


def players(**answers):
    return [Player(id=pid, name=pid, answer=answer) for pid, answer in answers.items()]


class TestNormalizeAnswer:
    def test_trims_and_uppercases(self):
        assert normalize_answer(" b ") == "B"

    def test_empty_is_none(self):
        assert normalize_answer("   ") is None
        assert normalize_answer(None) is None


class TestComputeAwards:
    def test_correct_answer_gets_points(self):
        assert compute_awards(QUESTION, None, players(amy="B")) == {"amy": 10}

    def test_answer_matching_is_case_insensitive_and_trimmed(self):
        assert compute_awards(QUESTION, None, players(amy=" b ")) == {"amy": 10}

    def test_wrong_or_missing_answer_gets_nothing(self):
        assert compute_awards(QUESTION, None, players(amy="A", bo=None)) == {}

    def test_buzz_bonus_only_for_correct_buzzer(self):
        awards = compute_awards(QUESTION, "amy", players(amy="B", bo="B"))
        assert awards == {"amy": 15, "bo": 10}

    def test_incorrect_buzzer_gets_zero(self):
        awards = compute_awards(QUESTION, "bo", players(amy="B", bo="A"))
        assert awards == {"amy": 10}

    def test_custom_points(self):
        awards = compute_awards(QUESTION, "amy", players(amy="B"), points_correct=3, points_buzz_bonus=2)
        assert awards == {"amy": 5}

    def test_no_question_no_awards(self):
        assert compute_awards(None, "amy", players(amy="B")) == {}

    def test_does_not_mutate_players(self):
        roster = players(amy="B")
        compute_awards(QUESTION, "amy", roster)
        assert roster[0].score == 0


def test_apply_awards_adds_to_cumulative_score():
    amy = Player(id="amy", score=20)
    apply_awards({"amy": amy}, {"amy": 15, "ghost": 10})
    assert amy.score == 35
