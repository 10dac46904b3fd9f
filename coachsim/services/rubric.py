"""Declarative coaching rubric and the keyword matcher that scores against it."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import re
from typing import Mapping, Sequence

from coachsim.models.feedback import (
    ACCOUNTABILITY,
    CONCRETE_NEXT_STEP,
    EMPATHY,
    OPEN_QUESTIONS,
    TONE,
)
from coachsim.utils.text import count_question_marks, normalize_message


HIT_CAP = 2

EMPATHY_KEYWORDS: tuple[str, ...] = (
    "i understand",
    "i'm sorry",
    "sorry",
    "understand",
    "tough",
    "hard",
    "i get it",
    "that sounds",
    "i can imagine",
    "i know",
)

OPEN_QUESTION_KEYWORDS: tuple[str, ...] = (
    "how",
    "what",
    "why",
    "can you tell",
    "help me understand",
    "could you",
    "would you",
)

CONCRETE_NEXT_STEP_KEYWORDS: tuple[str, ...] = (
    "by",
    "when",
    "call back",
    "schedule",
    "commit",
    "set a time",
    "follow up",
    "today",
    "tomorrow",
    "next",
)

ACCOUNTABILITY_KEYWORDS: tuple[str, ...] = (
    "i will",
    "we'll",
    "we will",
    "you will",
    "let's",
    "lets agree",
    "i'll check",
    "i will check",
    "assign",
    "manager to review",
)

POSITIVE_TONE_KEYWORDS: tuple[str, ...] = (
    "thanks",
    "thank you",
    "appreciate",
    "good",
    "great",
    "let's work",
)

NEGATIVE_TONE_KEYWORDS: tuple[str, ...] = (
    "why didn't",
    "you didn't",
    "fail",
    "never",
    "shame",
    "blame",
    "should have",
    "should've",
)


@dataclass(slots=True, frozen=True)
class RubricCategory:
    """Scoring rule for one rubric dimension.

    ``negative_patterns`` subtract hits before the cap is applied and
    ``counts_question_marks`` adds one hit per ``?`` in the raw message.
    """

    name: str
    patterns: tuple[str, ...]
    points_per_hit: float
    max_hits: int = HIT_CAP
    negative_patterns: tuple[str, ...] = ()
    counts_question_marks: bool = False

    @property
    def max_points(self) -> float:
        return self.max_hits * self.points_per_hit

    def hits(self, raw_text: str, normalized: str) -> int:
        """Return the capped, non-negative hit count for this category."""

        count = match_count(normalized, self.patterns)
        if self.counts_question_marks:
            count += count_question_marks(raw_text)
        if self.negative_patterns:
            count -= match_count(normalized, self.negative_patterns)
        return min(self.max_hits, max(0, count))

    def score(self, raw_text: str, normalized: str) -> float:
        return self.hits(raw_text, normalized) * self.points_per_hit


RUBRIC: tuple[RubricCategory, ...] = (
    RubricCategory(name=EMPATHY, patterns=EMPATHY_KEYWORDS, points_per_hit=10.0),
    RubricCategory(
        name=OPEN_QUESTIONS,
        patterns=OPEN_QUESTION_KEYWORDS,
        points_per_hit=10.0,
        counts_question_marks=True,
    ),
    RubricCategory(name=CONCRETE_NEXT_STEP, patterns=CONCRETE_NEXT_STEP_KEYWORDS, points_per_hit=12.5),
    RubricCategory(name=ACCOUNTABILITY, patterns=ACCOUNTABILITY_KEYWORDS, points_per_hit=10.0),
    RubricCategory(
        name=TONE,
        patterns=POSITIVE_TONE_KEYWORDS,
        points_per_hit=7.5,
        negative_patterns=NEGATIVE_TONE_KEYWORDS,
    ),
)

MAX_POINTS: Mapping[str, float] = {category.name: category.max_points for category in RUBRIC}


@lru_cache(maxsize=256)
def _compile_pattern(pattern: str) -> re.Pattern[str]:
    tokens = [re.escape(token) for token in pattern.split()]
    return re.compile(r"\b" + r"\s+".join(tokens) + r"\b", re.IGNORECASE)


def match_count(text: str, patterns: Sequence[str]) -> int:
    """Return how many distinct ``patterns`` occur in ``text`` as whole words or phrases."""

    if not text:
        return 0
    return sum(
        1
        for pattern in patterns
        if pattern.strip() and _compile_pattern(pattern).search(text)
    )


def score_categories(
    message: str | None,
    rubric: Sequence[RubricCategory] = RUBRIC,
) -> dict[str, float]:
    """Return the points awarded to each rubric category for ``message``."""

    raw_text = message.strip() if isinstance(message, str) else ""
    normalized = normalize_message(raw_text)
    return {category.name: category.score(raw_text, normalized) for category in rubric}


__all__ = [
    "HIT_CAP",
    "MAX_POINTS",
    "RUBRIC",
    "RubricCategory",
    "match_count",
    "score_categories",
]
