"""Coaching engine that evaluates a manager message and assembles the trainer response."""
from __future__ import annotations

from dataclasses import dataclass, field
import logging

from coachsim.models.coach import CoachingResult, CoachRequest
from coachsim.models.feedback import FeedbackResult
from coachsim.models.scenario import Scenario
from coachsim.services.action_plan import generate_action_plan
from coachsim.services.enrichment import EnrichmentContext, NoopReplyEnricher, ReplyEnricher
from coachsim.services.evaluator import evaluate_manager_message
from coachsim.services.reply_simulator import RandomSource, simulate_csr_reply
from coachsim.services.scenarios import get_scenario, load_scenarios

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CoachingEngine:
    """High level orchestration for one coaching exchange."""

    enricher: ReplyEnricher = field(default_factory=NoopReplyEnricher)
    rng: RandomSource | None = None
    scenarios: tuple[Scenario, ...] = field(default_factory=load_scenarios)

    def respond(self, request: CoachRequest) -> CoachingResult:
        """Score the manager message, simulate the CSR reply, and build the action plan."""

        feedback = evaluate_manager_message(request.manager_message)
        csr_reply = simulate_csr_reply(feedback, rng=self.rng)
        csr_reply = self._enrich(request, csr_reply, feedback)
        action_plan = generate_action_plan(request.manager_message, feedback)
        return CoachingResult(csr_reply=csr_reply, feedback=feedback, action_plan=action_plan)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _enrich(self, request: CoachRequest, csr_reply: str, feedback: FeedbackResult) -> str:
        try:
            context = EnrichmentContext(
                scenario=get_scenario(request.scenario_id, self.scenarios),
                manager_message=request.manager_message,
                csr_reply=csr_reply,
                feedback=feedback,
                conversation=request.conversation,
            )
            enriched = self.enricher.improve_reply(context)
        except Exception as exc:
            logger.warning(
                "CSR reply enrichment failed; keeping rule-based reply",
                extra={"event": "coach.enrich_failed", "error": type(exc).__name__},
                exc_info=True,
            )
            return csr_reply

        if isinstance(enriched, str) and enriched.strip():
            return enriched.strip()
        return csr_reply


__all__ = ["CoachingEngine"]
