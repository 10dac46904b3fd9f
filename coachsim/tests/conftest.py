"""Shared fixtures and helpers for the test suite."""

from __future__ import annotations

from typing import Iterator

import pytest


EXAMPLE_MESSAGE = (
    "I understand this is hard. What happened, and can we agree you'll call back by tomorrow? I'll check in."
)


class FixedRandom:
    """Random source that always returns the same index and records the bounds it saw."""

    def __init__(self, index: int = 0) -> None:
        self.index = index
        self.calls: list[int] = []

    def randrange(self, stop: int) -> int:
        self.calls.append(stop)
        return self.index % stop


@pytest.fixture()
def example_message() -> str:
    return EXAMPLE_MESSAGE


@pytest.fixture()
def fixed_random() -> FixedRandom:
    return FixedRandom(index=1)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep developer environment variables from changing provider or scenario selection."""

    for variable in (
        "COACHSIM_LLM_PROVIDER",
        "OPENAI_API_KEY",
        "COACHSIM_SCENARIOS",
        "COACHSIM_OPENAI_MODEL",
        "COACHSIM_OPENAI_URL",
        "COACHSIM_OLLAMA_MODEL",
        "COACHSIM_OLLAMA_URL",
        "COACHSIM_LLM_TIMEOUT",
    ):
        monkeypatch.delenv(variable, raising=False)
    yield
