"""Tests for the declarative rubric and keyword matcher."""
from __future__ import annotations

import pytest

from coachsim.services.rubric import (
    MAX_POINTS,
    RUBRIC,
    RubricCategory,
    match_count,
    score_categories,
)


def test_rubric_maxima_sum_to_one_hundred() -> None:
    assert MAX_POINTS == {
        "empathy": 20.0,
        "openQuestions": 20.0,
        "concreteNextStep": 25.0,
        "accountability": 20.0,
        "tone": 15.0,
    }
    assert sum(MAX_POINTS.values()) == 100
    assert [category.name for category in RUBRIC] == list(MAX_POINTS)


def test_match_count_counts_distinct_patterns_not_occurrences() -> None:
    assert match_count("what what what", ["what", "how"]) == 1
    assert match_count("what and how", ["what", "how"]) == 2


def test_match_count_requires_whole_words() -> None:
    assert match_count("i took a shower", ["how"]) == 0
    assert match_count("somehow", ["how"]) == 0
    assert match_count("how", ["how"]) == 1


def test_match_count_allows_flexible_whitespace_inside_phrases() -> None:
    assert match_count("please call \n   back", ["call back"]) == 1


def test_match_count_escapes_metacharacters() -> None:
    assert match_count("axb", ["a.b"]) == 0
    assert match_count("a.b", ["a.b"]) == 1


def test_match_count_is_case_insensitive_and_handles_empty_text() -> None:
    assert match_count("I UNDERSTAND", ["i understand"]) == 1
    assert match_count("", ["i understand"]) == 0


def test_score_categories_caps_hits_at_two() -> None:
    scores = score_categories("I'm sorry, I understand, that sounds tough.")

    assert scores["empathy"] == 20.0
    assert scores["openQuestions"] == 0
    assert scores["concreteNextStep"] == 0


def test_open_questions_count_question_marks_from_raw_text() -> None:
    assert score_categories("Really?")["openQuestions"] == 10.0
    assert score_categories("Really?? Honestly?")["openQuestions"] == 20.0


def test_tone_subtracts_negative_phrases() -> None:
    assert score_categories("Thanks, great work.")["tone"] == 15.0
    assert score_categories("Thanks, but you didn't call.")["tone"] == 0
    assert score_categories("You never follow up, shame.")["tone"] == 0


def test_concrete_next_step_awards_partial_credit() -> None:
    assert score_categories("We should schedule it.")["concreteNextStep"] == 12.5
    assert score_categories("Schedule it for tomorrow.")["concreteNextStep"] == 25.0


@pytest.mark.parametrize("message", [None, "", "   "])
def test_score_categories_is_total_for_empty_input(message: str | None) -> None:
    assert all(points == 0 for points in score_categories(message).values())


def test_custom_rubric_is_consumed_by_generic_loop() -> None:
    rubric = (RubricCategory(name="greeting", patterns=("hello", "hi"), points_per_hit=5.0, max_hits=1),)

    assert score_categories("Hello and hi", rubric=rubric) == {"greeting": 5.0}
