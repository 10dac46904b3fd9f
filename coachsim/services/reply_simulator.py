"""Rule-based CSR reply simulation keyed off the manager's coaching score."""
from __future__ import annotations

from dataclasses import dataclass
import random
from typing import Protocol

from coachsim.models.feedback import FeedbackResult


class RandomSource(Protocol):
    """Source of uniformly distributed integers used to pick reply templates."""

    def randrange(self, stop: int) -> int:
        """Return an integer in ``[0, stop)``."""


@dataclass(slots=True, frozen=True)
class ReplyTier:
    """Reply templates for a band of coaching scores."""

    name: str
    templates: tuple[str, ...]
    closing: str


LOW_TIER = ReplyTier(
    name="low",
    templates=(
        "I tried calling but the customer didn't answer. I wasn't sure what to say and didn't push for a commitment.",
        "I left a generic voicemail. They didn't promise a time to call back.",
    ),
    closing="I was worried about pushing too hard.",
)

MID_TIER = ReplyTier(
    name="mid",
    templates=(
        "I explained our options and asked for a good time to call back. They said maybe next week but didn't commit.",
        "The customer said they're checking funds; I asked for a time and they said they'd call back but no firm time.",
    ),
    closing="I can try again if you give me a script.",
)

HIGH_TIER = ReplyTier(
    name="high",
    templates=(
        "I empathized with the customer, asked what would help, and they committed to call back tomorrow at 10am.",
        "I proposed a short payment plan and scheduled a callback next Tuesday, they confirmed the time.",
    ),
    closing="I can confirm and log the callback in the tracker.",
)

LOW_TIER_CEILING = 40
MID_TIER_CEILING = 65

_DEFAULT_RANDOM = random.Random()


def reply_tier(score: int) -> ReplyTier:
    if score < LOW_TIER_CEILING:
        return LOW_TIER
    if score < MID_TIER_CEILING:
        return MID_TIER
    return HIGH_TIER


def simulate_csr_reply(feedback: FeedbackResult, *, rng: RandomSource | None = None) -> str:
    """Return a plausible CSR reply for the quality of coaching received.

    The template is drawn from ``rng`` so callers can pin the choice; the
    tier's closing sentence is always appended.
    """

    tier = reply_tier(feedback.score or 0)
    source = rng if rng is not None else _DEFAULT_RANDOM
    template = tier.templates[source.randrange(len(tier.templates))]
    return f"{template} {tier.closing}"


__all__ = [
    "HIGH_TIER",
    "LOW_TIER",
    "MID_TIER",
    "RandomSource",
    "ReplyTier",
    "reply_tier",
    "simulate_csr_reply",
]
