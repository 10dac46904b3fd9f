"""Turn rubric category scores into a total, a badge, and readable reasons."""
from __future__ import annotations

import math
from types import MappingProxyType
from typing import Mapping

from coachsim.models.feedback import (
    ACCOUNTABILITY,
    BADGE_GOOD,
    BADGE_MIXED,
    BADGE_NEEDS_WORK,
    CONCRETE_NEXT_STEP,
    EMPATHY,
    OPEN_QUESTIONS,
    TONE,
    FeedbackResult,
)
from coachsim.services.rubric import score_categories


GOOD_COACHING_THRESHOLD = 65
MIXED_THRESHOLD = 40
IMPROVEMENT_HINT_THRESHOLD = 50

REASON_EMPATHY = "Showed empathy"
REASON_OPEN_QUESTIONS = "Used open questions"
REASON_NEXT_STEP = "Offered a concrete next step"
REASON_ACCOUNTABILITY = "Set accountability or follow-up"
REASON_IMPROVEMENT_HINT = "Consider more collaborative open questions and a clear next step"

_REASONS_BY_CATEGORY: tuple[tuple[str, str], ...] = (
    (EMPATHY, REASON_EMPATHY),
    (OPEN_QUESTIONS, REASON_OPEN_QUESTIONS),
    (CONCRETE_NEXT_STEP, REASON_NEXT_STEP),
    (ACCOUNTABILITY, REASON_ACCOUNTABILITY),
)

_NON_EMPATHY_CATEGORIES = (OPEN_QUESTIONS, CONCRETE_NEXT_STEP, ACCOUNTABILITY, TONE)


def _points(raw_scores: Mapping[str, float], category: str) -> float:
    return float(raw_scores.get(category, 0) or 0)


def total_score(raw_scores: Mapping[str, float]) -> int:
    """Sum category points and round half up to an integer."""

    return int(math.floor(sum(_points(raw_scores, name) for name in raw_scores) + 0.5))


def badge_for_score(score: int) -> str:
    if score >= GOOD_COACHING_THRESHOLD:
        return BADGE_GOOD
    if score >= MIXED_THRESHOLD:
        return BADGE_MIXED
    return BADGE_NEEDS_WORK


def non_empathy_points(raw_scores: Mapping[str, float]) -> float:
    return sum(_points(raw_scores, name) for name in _NON_EMPATHY_CATEGORIES)


def is_empathy_only(raw_scores: Mapping[str, float]) -> bool:
    """Return ``True`` when empathy is the only category that scored."""

    return _points(raw_scores, EMPATHY) > 0 and non_empathy_points(raw_scores) == 0


def derive_reasons(raw_scores: Mapping[str, float], score: int) -> list[str]:
    """Explain which coaching behaviours the message showed.

    An empathy-only message is reported with the single empathy reason so the
    generic improvement hint does not compete with it.
    """

    if is_empathy_only(raw_scores):
        return [REASON_EMPATHY]

    reasons = [reason for category, reason in _REASONS_BY_CATEGORY if _points(raw_scores, category) > 0]
    if score < IMPROVEMENT_HINT_THRESHOLD and non_empathy_points(raw_scores) > 0:
        reasons.append(REASON_IMPROVEMENT_HINT)
    return reasons


def evaluate_manager_message(message: str | None) -> FeedbackResult:
    """Score ``message`` against the coaching rubric."""

    raw_scores = score_categories(message)
    score = total_score(raw_scores)
    return FeedbackResult(
        raw_scores=MappingProxyType(raw_scores),
        score=score,
        badge=badge_for_score(score),
        reasons=tuple(derive_reasons(raw_scores, score)),
    )


__all__ = [
    "badge_for_score",
    "derive_reasons",
    "evaluate_manager_message",
    "is_empathy_only",
    "total_score",
]
