"""Score a manager coaching message from the command line.

The runner evaluates the message with the rule-based engine and prints the
same JSON document the ``/api/coach`` endpoint returns. Pass ``--seed`` to pin
the simulated CSR reply, ``--enrich`` to route the reply through the
configured language model (see ``COACHSIM_LLM_PROVIDER``), or ``--payload``
to replay a saved request body.
"""
from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
import random
import sys
from typing import Sequence

from pydantic import ValidationError

from coachsim.models.api import CoachRequestPayload
from coachsim.models.coach import CoachRequest
from coachsim.services.coach import CoachingEngine
from coachsim.services.enrichment import NoopReplyEnricher, create_reply_enricher

LOGGER = logging.getLogger("coachsim.score_message")


def _configure_logging() -> None:
    """Configure root logging based on ``COACHSIM_LOG_LEVEL``."""
    level_name = os.getenv("COACHSIM_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Score a manager coaching message.")
    parser.add_argument(
        "message",
        nargs="?",
        default=None,
        help="Manager message to score. Use '-' to read it from stdin.",
    )
    parser.add_argument("--scenario", default="default", help="Scenario identifier (informational only).")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the simulated CSR reply choice.")
    parser.add_argument(
        "--enrich",
        action="store_true",
        help="Rewrite the CSR reply with the configured language model.",
    )
    parser.add_argument("--payload", type=Path, default=None, help="JSON request body to score instead of MESSAGE.")
    return parser.parse_args(argv)


def _build_request(args: argparse.Namespace) -> CoachRequest:
    if args.payload is not None:
        payload = json.loads(args.payload.read_text(encoding="utf-8"))
        return CoachRequestPayload.model_validate(payload).to_request()

    message = args.message
    if message == "-":
        message = sys.stdin.read()
    return CoachRequest(manager_message=message or "", scenario_id=args.scenario)


def main(argv: Sequence[str] | None = None) -> int:
    _configure_logging()
    args = _parse_args(argv)

    try:
        request = _build_request(args)
    except (OSError, ValueError, ValidationError):
        LOGGER.exception("Failed to read coaching request")
        return 1

    enricher = create_reply_enricher() if args.enrich else NoopReplyEnricher()

    rng = random.Random(args.seed) if args.seed is not None else None
    engine = CoachingEngine(enricher=enricher, rng=rng)
    result = engine.respond(request)

    LOGGER.info(
        "COACH_SCORE score=%s badge=%s plan_items=%s",
        result.feedback.score,
        result.feedback.badge,
        len(result.action_plan.items),
    )
    print(json.dumps(result.as_dict(), ensure_ascii=False))
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
