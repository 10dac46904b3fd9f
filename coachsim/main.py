"""FastAPI web application for the call-center coaching simulator"""

from __future__ import annotations

from functools import lru_cache
import logging

from fastapi import Depends, FastAPI, HTTPException

from coachsim.models.api import CoachRequestPayload, CoachResponsePayload
from coachsim.services.coach import CoachingEngine
from coachsim.services.enrichment import create_reply_enricher
from coachsim.services.scenarios import load_scenarios

app = FastAPI(title="Coaching Simulator")

logger = logging.getLogger(__name__)


def _build_debug_detail(exc: Exception) -> dict[str, str]:
    """Return a serialisable mapping describing ``exc`` for debugging."""

    message = str(exc).strip()
    return {
        "type": type(exc).__name__,
        "message": message or "No exception message provided.",
    }


@lru_cache(maxsize=1)
def _cached_coaching_engine() -> CoachingEngine:
    """Create a singleton CoachingEngine with the configured reply enricher."""

    return CoachingEngine(enricher=create_reply_enricher())


def get_coaching_engine() -> CoachingEngine:
    """FastAPI dependency returning the shared CoachingEngine instance."""

    return _cached_coaching_engine()


@app.get("/api/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/scenarios")
def list_scenarios() -> dict[str, list[dict[str, str]]]:
    """Return the practice scenarios available in the trainer."""

    return {"scenarios": [scenario.as_dict() for scenario in load_scenarios()]}


@app.post("/api/coach", response_model=CoachResponsePayload, response_model_by_alias=True)
def coach_endpoint(
    payload: CoachRequestPayload,
    engine: CoachingEngine = Depends(get_coaching_engine),
) -> CoachResponsePayload:
    """Evaluate the manager message and return the CSR reply, feedback, and action plan."""

    request = payload.to_request()
    logger.info(
        "Coach request received",
        extra={
            "event": "coach.request",
            "scenario_id": request.scenario_id,
            "message_length": len(request.manager_message),
        },
    )

    try:
        result = engine.respond(request)
    except Exception as exc:
        logger.exception("Coaching engine failed", extra={"event": "coach.error"})
        raise HTTPException(
            status_code=500,
            detail={
                "message": "Coaching evaluation failed",
                "debug": _build_debug_detail(exc),
            },
        ) from exc

    return CoachResponsePayload.from_result(result)
