"""Catalog of practice scenarios presented to managers."""
from __future__ import annotations

import json
import logging
import os

from coachsim.models.scenario import Scenario

logger = logging.getLogger(__name__)

DEFAULT_SCENARIO_ID = "default"

_DEFAULT_SCENARIOS: tuple[Scenario, ...] = (
    Scenario(
        id=DEFAULT_SCENARIO_ID,
        label="Missed callback",
        context="Missed callback; customer uncertain about funds. CSR nervous about pressing.",
    ),
    Scenario(
        id="noAnswer",
        label="No answer",
        context="No answer; wrong number flagged. Need to verify contact details and reattempt.",
    ),
    Scenario(
        id="promisedMissed",
        label="Promise missed",
        context="Customer promised a callback but missed it; CSR missed the follow-up.",
    ),
)


def load_scenarios() -> tuple[Scenario, ...]:
    """Return the scenario catalog, optionally overridden by ``COACHSIM_SCENARIOS``."""

    raw_value = os.getenv("COACHSIM_SCENARIOS")
    if not raw_value:
        return _DEFAULT_SCENARIOS

    try:
        payload = json.loads(raw_value)
    except (TypeError, ValueError):
        logger.warning("Invalid COACHSIM_SCENARIOS payload; using defaults", extra={"event": "scenarios.invalid"})
        return _DEFAULT_SCENARIOS

    scenarios: list[Scenario] = []
    for item in payload if isinstance(payload, list) else [payload]:
        if not isinstance(item, dict):
            continue
        identifier = str(item.get("id", "")).strip()
        if not identifier:
            continue
        label = str(item.get("label") or item.get("title") or identifier).strip() or identifier
        context = str(item.get("context") or item.get("description") or "").strip()
        scenarios.append(Scenario(id=identifier, label=label, context=context))

    if not scenarios:
        logger.warning("COACHSIM_SCENARIOS contained no usable entries; using defaults", extra={"event": "scenarios.invalid"})
        return _DEFAULT_SCENARIOS
    return tuple(scenarios)


def get_scenario(scenario_id: str | None, scenarios: tuple[Scenario, ...] | None = None) -> Scenario:
    """Return the scenario matching ``scenario_id``, falling back to the first entry."""

    catalog = scenarios if scenarios is not None else load_scenarios()
    return next((scenario for scenario in catalog if scenario.id == scenario_id), catalog[0])


__all__ = ["DEFAULT_SCENARIO_ID", "get_scenario", "load_scenarios"]
