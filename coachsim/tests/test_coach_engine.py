from __future__ import annotations

import logging

import pytest

from coachsim.models.coach import CoachRequest, ConversationTurn
from coachsim.models.scenario import Scenario
from coachsim.services.coach import CoachingEngine
from coachsim.services.enrichment import EnrichmentContext
from coachsim.services.reply_simulator import HIGH_TIER


class _RecordingEnricher:
    def __init__(self, reply: str | None) -> None:
        self.reply = reply
        self.contexts: list[EnrichmentContext] = []

    def improve_reply(self, context: EnrichmentContext) -> str | None:
        self.contexts.append(context)
        return self.reply


class _FailingEnricher:
    def improve_reply(self, context: EnrichmentContext) -> str | None:
        raise TimeoutError("model did not answer")


def test_respond_assembles_full_result(example_message: str, fixed_random) -> None:
    engine = CoachingEngine(rng=fixed_random)

    result = engine.respond(CoachRequest(manager_message=example_message))

    assert result.feedback.badge == "Good coaching"
    assert result.csr_reply == f"{HIGH_TIER.templates[1]} {HIGH_TIER.closing}"
    assert result.action_plan.titles == ["Ensure accountability"]
    payload = result.as_dict()
    assert set(payload) == {"csrReply", "feedback", "actionPlan"}
    assert payload["feedback"]["rawScores"]["concreteNextStep"] == 25.0


def test_respond_handles_empty_message(fixed_random) -> None:
    result = CoachingEngine(rng=fixed_random).respond(CoachRequest())

    assert result.feedback.score == 0
    assert result.feedback.badge == "Needs work"
    assert result.feedback.reasons == ()
    assert result.action_plan.items == ()
    assert result.csr_reply.endswith("I was worried about pushing too hard.")


def test_enriched_reply_replaces_rule_based_reply(fixed_random) -> None:
    enricher = _RecordingEnricher("Sure, I'll call them back at 10am.")
    scenarios = (Scenario(id="default", label="Missed callback"), Scenario(id="noAnswer", label="No answer"))
    engine = CoachingEngine(enricher=enricher, rng=fixed_random, scenarios=scenarios)
    request = CoachRequest(
        manager_message="I understand.",
        scenario_id="noAnswer",
        conversation=(ConversationTurn(speaker="manager", text="I understand."),),
    )

    result = engine.respond(request)

    assert result.csr_reply == "Sure, I'll call them back at 10am."
    context = enricher.contexts[0]
    assert context.scenario.id == "noAnswer"
    assert context.conversation == request.conversation
    assert context.feedback == result.feedback
    assert context.csr_reply.endswith("I was worried about pushing too hard.")


@pytest.mark.parametrize("reply", [None, "", "   "])
def test_no_change_from_enricher_keeps_rule_based_reply(reply: str | None, fixed_random) -> None:
    engine = CoachingEngine(enricher=_RecordingEnricher(reply), rng=fixed_random)

    result = engine.respond(CoachRequest(manager_message="What happened?"))

    assert result.csr_reply.endswith("I was worried about pushing too hard.")


def test_enricher_failure_is_logged_and_ignored(
    fixed_random, caplog: pytest.LogCaptureFixture
) -> None:
    engine = CoachingEngine(enricher=_FailingEnricher(), rng=fixed_random)

    with caplog.at_level(logging.WARNING, logger="coachsim.services.coach"):
        result = engine.respond(CoachRequest(manager_message="I understand."))

    assert result.csr_reply.endswith("I was worried about pushing too hard.")
    assert result.feedback.reasons == ("Showed empathy",)
    record = next(item for item in caplog.records if getattr(item, "event", None) == "coach.enrich_failed")
    assert record.error == "TimeoutError"


def test_unknown_scenario_falls_back_to_first_catalog_entry(fixed_random) -> None:
    enricher = _RecordingEnricher(None)
    engine = CoachingEngine(enricher=enricher, rng=fixed_random)

    engine.respond(CoachRequest(manager_message="Thanks", scenario_id="does-not-exist"))

    assert enricher.contexts[0].scenario.id == "default"


def test_empty_scenario_catalog_keeps_rule_based_result(
    example_message: str, fixed_random, caplog: pytest.LogCaptureFixture
) -> None:
    enricher = _RecordingEnricher("Never used")
    engine = CoachingEngine(enricher=enricher, rng=fixed_random, scenarios=())

    with caplog.at_level(logging.WARNING, logger="coachsim.services.coach"):
        result = engine.respond(CoachRequest(manager_message=example_message))

    assert result.feedback.score == 75
    assert result.csr_reply == f"{HIGH_TIER.templates[1]} {HIGH_TIER.closing}"
    assert result.action_plan.titles == ["Ensure accountability"]
    assert enricher.contexts == []
    assert any(getattr(record, "event", None) == "coach.enrich_failed" for record in caplog.records)
