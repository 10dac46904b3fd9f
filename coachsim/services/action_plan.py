"""Remediation action plan derived from weak rubric categories."""
from __future__ import annotations

from typing import Mapping

from coachsim.models.feedback import (
    ACCOUNTABILITY,
    CONCRETE_NEXT_STEP,
    EMPATHY,
    OPEN_QUESTIONS,
    ActionPlan,
    ActionPlanItem,
    FeedbackResult,
)
from coachsim.services.evaluator import is_empathy_only
from coachsim.services.rubric import MAX_POINTS


WEAKNESS_THRESHOLD = 0.9

# Plan items are emitted in this order.
_PLAN_TEMPLATES: tuple[tuple[str, ActionPlanItem], ...] = (
    (
        EMPATHY,
        ActionPlanItem(
            title="Improve empathy",
            detail="Use empathetic phrases and acknowledge customer's situation before asking about payments.",
        ),
    ),
    (
        OPEN_QUESTIONS,
        ActionPlanItem(
            title="Ask open questions",
            detail="Use questions starting with 'how', 'what', or 'can you tell me' to encourage CSR explanation.",
        ),
    ),
    (
        CONCRETE_NEXT_STEP,
        ActionPlanItem(
            title="Set concrete next steps",
            detail="Ensure each call ends with a specific commitment and callback time.",
        ),
    ),
    (
        ACCOUNTABILITY,
        ActionPlanItem(
            title="Ensure accountability",
            detail="Confirm CSR will log callbacks and review top 5 at-risk customers daily.",
        ),
    ),
)

MAINTENANCE_ITEM = ActionPlanItem(
    title="Next steps",
    detail=(
        "Continue your current coaching approach. Track top 5 at-risk customers "
        "and maintain follow-up discipline."
    ),
)

_EMPATHY_ONLY_WEAKNESSES = frozenset({OPEN_QUESTIONS, CONCRETE_NEXT_STEP, ACCOUNTABILITY})


def find_weaknesses(raw_scores: Mapping[str, float]) -> list[str]:
    """Return the planned categories scoring below 90% of their maximum, in plan order."""

    if is_empathy_only(raw_scores):
        return [category for category, _ in _PLAN_TEMPLATES if category in _EMPATHY_ONLY_WEAKNESSES]

    weaknesses: list[str] = []
    for category, _ in _PLAN_TEMPLATES:
        points = float(raw_scores.get(category, 0) or 0)
        if points < MAX_POINTS[category] * WEAKNESS_THRESHOLD:
            weaknesses.append(category)
    return weaknesses


def generate_action_plan(manager_message: str | None, feedback: FeedbackResult) -> ActionPlan:
    """Build the ordered remediation plan for ``feedback``."""

    if not isinstance(manager_message, str) or not manager_message.strip():
        return ActionPlan()

    weaknesses = set(find_weaknesses(feedback.raw_scores))
    if not weaknesses:
        return ActionPlan(items=(MAINTENANCE_ITEM,))

    return ActionPlan(
        items=tuple(item for category, item in _PLAN_TEMPLATES if category in weaknesses)
    )


__all__ = ["MAINTENANCE_ITEM", "find_weaknesses", "generate_action_plan"]
