"""Tests for mini_apps.flag_quiz -- round generation, scoring and reset."""

import random

import pytest

from mini_apps.flag_quiz import AnswerOutcome, QuizRoundEngine

from conftest import COUNTRIES


# ===================================================================
# new_round
# ===================================================================

class TestNewRound:
    """new_round shuffles the set and picks a target among the first three."""

    @pytest.mark.parametrize("seed", range(25))
    def test_permutation_and_index_range(self, seed):
        engine = QuizRoundEngine(COUNTRIES, rng=random.Random(seed))
        for _ in range(5):
            engine.new_round(COUNTRIES)
            assert sorted(engine.countries) == sorted(COUNTRIES)
            assert 0 <= engine.correct_answer_index <= 2

    def test_same_seed_same_round(self):
        a = QuizRoundEngine(COUNTRIES, rng=random.Random(7))
        b = QuizRoundEngine(COUNTRIES, rng=random.Random(7))
        assert a.countries == b.countries
        assert a.correct_answer_index == b.correct_answer_index

    def test_without_argument_reuses_current_set(self, engine):
        engine.new_round()
        assert sorted(engine.countries) == sorted(COUNTRIES)

    def test_does_not_mutate_caller_list(self, rng):
        given = list(COUNTRIES)
        QuizRoundEngine(given, rng=rng)
        assert given == COUNTRIES

    def test_target_is_one_of_the_choices(self, engine):
        assert len(engine.choices) == 3
        assert engine.target_country == engine.choices[engine.correct_answer_index]

    def test_default_country_set(self, rng):
        engine = QuizRoundEngine(rng=rng)
        assert sorted(engine.countries) == sorted(COUNTRIES)

    def test_exactly_three_countries(self, rng):
        engine = QuizRoundEngine(["A", "B", "C"], rng=rng)
        assert sorted(engine.countries) == ["A", "B", "C"]

    def test_too_few_countries_raises(self, rng):
        with pytest.raises(ValueError):
            QuizRoundEngine(["France", "Spain"], rng=rng)

    def test_new_round_keeps_score(self, engine):
        engine.submit_answer(engine.correct_answer_index)
        engine.new_round()
        assert engine.score == 5


# ===================================================================
# submit_answer
# ===================================================================

class TestSubmitAnswer:
    """+5 for the correct flag, -3 for anything else."""

    def test_correct_adds_five(self, engine):
        outcome = engine.submit_answer(engine.correct_answer_index)
        assert outcome is AnswerOutcome.CORRECT
        assert engine.score == 5

    @pytest.mark.parametrize("seed", range(10))
    def test_every_wrong_index_subtracts_three(self, seed):
        engine = QuizRoundEngine(COUNTRIES, rng=random.Random(seed))
        wrong = [i for i in range(3) if i != engine.correct_answer_index]
        for i in wrong:
            assert engine.submit_answer(i) is AnswerOutcome.INCORRECT
        assert engine.score == -3 * len(wrong)

    def test_score_can_go_negative(self, engine):
        wrong = (engine.correct_answer_index + 1) % 3
        engine.submit_answer(wrong)
        assert engine.score == -3

    def test_answer_does_not_advance_round(self, engine):
        before = (list(engine.countries), engine.correct_answer_index)
        engine.submit_answer(0)
        assert (engine.countries, engine.correct_answer_index) == before

    def test_out_of_range_index_is_incorrect(self, engine):
        assert engine.submit_answer(42) is AnswerOutcome.INCORRECT
        assert engine.score == -3
        assert engine.history[-1].chosen == ""

    def test_custom_deltas(self, rng):
        engine = QuizRoundEngine(COUNTRIES, rng=rng, correct_delta=10, incorrect_delta=-1)
        engine.submit_answer(engine.correct_answer_index)
        engine.submit_answer((engine.correct_answer_index + 1) % 3)
        assert engine.score == 9

    def test_history_records_target_and_choice(self, engine):
        target = engine.target_country
        engine.submit_answer(engine.correct_answer_index)
        record = engine.history[-1]
        assert record.country == target
        assert record.chosen == target
        assert record.outcome is AnswerOutcome.CORRECT


# ===================================================================
# Result strings
# ===================================================================

class TestResultText:

    def test_titles(self):
        assert AnswerOutcome.CORRECT.title == "Correct"
        assert AnswerOutcome.INCORRECT.title == "Wrong, try again!"

    def test_score_message_tracks_score(self, engine):
        engine.submit_answer(engine.correct_answer_index)
        assert engine.score_message() == "Your score is 5"


# ===================================================================
# reset
# ===================================================================

class TestReset:

    def test_reset_zeroes_score(self, engine):
        engine.submit_answer(engine.correct_answer_index)
        engine.submit_answer((engine.correct_answer_index + 2) % 3)
        engine.reset()
        assert engine.score == 0
        assert engine.history == []

    def test_reset_starts_valid_round(self, engine):
        engine.reset()
        assert sorted(engine.countries) == sorted(COUNTRIES)
        assert 0 <= engine.correct_answer_index <= 2

    def test_reset_twice_same_as_once(self, engine):
        engine.submit_answer(1)
        engine.reset()
        engine.reset()
        assert engine.score == 0
        assert engine.history == []
