"""Pydantic payloads exchanged with the trainer UI and the scoring CLI."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from coachsim.models.coach import CoachingResult, CoachRequest, ConversationTurn


class ConversationTurnPayload(BaseModel):
    """One message of the conversation shown in the trainer."""

    model_config = ConfigDict(populate_by_name=True)

    speaker: Literal["manager", "csr"] = Field(..., alias="from")
    text: str = ""


class CoachRequestPayload(BaseModel):
    """Request body submitted by the trainer for each manager message."""

    model_config = ConfigDict(populate_by_name=True)

    scenario_id: str = Field("default", alias="scenarioId", description="Scenario shown in the trainer UI.")
    conversation: list[ConversationTurnPayload] = Field(default_factory=list)
    manager_message: str | None = Field("", alias="managerMessage", description="The manager's coaching message.")

    @field_validator("manager_message")
    @classmethod
    def _default_missing_message(cls, value: str | None) -> str:
        return value or ""

    def to_request(self) -> CoachRequest:
        return CoachRequest(
            manager_message=self.manager_message or "",
            scenario_id=self.scenario_id or "default",
            conversation=tuple(
                ConversationTurn(speaker=turn.speaker, text=turn.text) for turn in self.conversation
            ),
        )


class FeedbackPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    raw_scores: dict[str, float] = Field(..., alias="rawScores")
    score: int
    badge: str
    reasons: list[str]


class ActionPlanItemPayload(BaseModel):
    title: str
    detail: str
    when: str
    owner: str


class ActionPlanPayload(BaseModel):
    items: list[ActionPlanItemPayload]


class CoachResponsePayload(BaseModel):
    """Structured response returned by the coach endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    csr_reply: str = Field(..., alias="csrReply")
    feedback: FeedbackPayload
    action_plan: ActionPlanPayload = Field(..., alias="actionPlan")

    @classmethod
    def from_result(cls, result: CoachingResult) -> "CoachResponsePayload":
        return cls.model_validate(result.as_dict())


__all__ = [
    "ActionPlanItemPayload",
    "ActionPlanPayload",
    "CoachRequestPayload",
    "CoachResponsePayload",
    "ConversationTurnPayload",
    "FeedbackPayload",
]
