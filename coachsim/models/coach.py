"""Domain models used by the coaching simulator conversation."""
from __future__ import annotations

from dataclasses import dataclass, field

from coachsim.models.feedback import ActionPlan, FeedbackResult


@dataclass(slots=True, frozen=True)
class ConversationTurn:
    """A single message exchanged between the manager and the CSR."""

    speaker: str
    text: str


@dataclass(slots=True, frozen=True)
class CoachRequest:
    """The manager's message submitted for evaluation."""

    manager_message: str = ""
    scenario_id: str = "default"
    conversation: tuple[ConversationTurn, ...] = field(default_factory=tuple)


@dataclass(slots=True, frozen=True)
class CoachingResult:
    """Everything returned to the trainer UI for one manager message."""

    csr_reply: str
    feedback: FeedbackResult
    action_plan: ActionPlan

    def as_dict(self) -> dict[str, object]:
        return {
            "csrReply": self.csr_reply,
            "feedback": self.feedback.as_dict(),
            "actionPlan": self.action_plan.as_dict(),
        }
