"""Domain models produced by the rule-based coaching evaluation."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


EMPATHY = "empathy"
OPEN_QUESTIONS = "openQuestions"
CONCRETE_NEXT_STEP = "concreteNextStep"
ACCOUNTABILITY = "accountability"
TONE = "tone"

CATEGORY_NAMES: tuple[str, ...] = (
    EMPATHY,
    OPEN_QUESTIONS,
    CONCRETE_NEXT_STEP,
    ACCOUNTABILITY,
    TONE,
)

BADGE_GOOD = "Good coaching"
BADGE_MIXED = "Mixed"
BADGE_NEEDS_WORK = "Needs work"


@dataclass(slots=True, frozen=True)
class FeedbackResult:
    """Scored feedback for a single manager message."""

    raw_scores: Mapping[str, float]
    score: int
    badge: str
    reasons: tuple[str, ...] = ()

    def points(self, category: str) -> float:
        """Return the points awarded to ``category`` (0 when absent)."""

        return float(self.raw_scores.get(category, 0) or 0)

    def as_dict(self) -> dict[str, object]:
        """Serialise the feedback using the public camelCase field names."""

        return {
            "rawScores": {name: self.points(name) for name in CATEGORY_NAMES},
            "score": self.score,
            "badge": self.badge,
            "reasons": list(self.reasons),
        }


@dataclass(slots=True, frozen=True)
class ActionPlanItem:
    """One remediation step suggested to the manager."""

    title: str
    detail: str
    when: str = "Today"
    owner: str = "Manager"

    def as_dict(self) -> dict[str, str]:
        return {
            "title": self.title,
            "detail": self.detail,
            "when": self.when,
            "owner": self.owner,
        }


@dataclass(slots=True, frozen=True)
class ActionPlan:
    """Ordered remediation items derived from category shortfalls."""

    items: tuple[ActionPlanItem, ...] = field(default_factory=tuple)

    @property
    def titles(self) -> list[str]:
        return [item.title for item in self.items]

    def as_dict(self) -> dict[str, object]:
        return {"items": [item.as_dict() for item in self.items]}
